"""
controls.py — UI Control Panels
=================================
Every UI panel is a pure function that takes state and returns HTML.

Panels:
  • playback_controls       – play/pause/next/prev/reset/speed/step mode
  • algorithm_selector      – algorithm dropdown + variant picker
  • array_controls          – size slider, random button, custom input
  • display_controls        – visualization mode, color theme, sound
  • stats_panel             – comparisons, swaps, time, progress bar
  • algorithm_info_panel    – complexity card for the selected algorithm
  • message_panel           – narration of the current step
  • comparison_panel        – side-by-side metrics of two runs

Design:
  - All panels are stateless render functions.
  - State is passed in as kwargs.
  - Output is raw HTML strings (no templating engine).
  - The main app stitches them together.
"""

from html import escape
from typing import List, Optional

from algorithms import AlgoInfo, get_default_variant
from algorithms.step import Stats
from elements.source import CUSTOM_MAX_ITEMS, CUSTOM_MAX_VALUE, CUSTOM_MIN_VALUE, MAX_ARRAY_SIZE
from engine import ComparisonResult, Phase, SPEED_PRESETS, VISUALIZATION_MODES
from ui.canvas import COLOR_THEMES


def _selected(flag: bool) -> str:
    return "selected" if flag else ""


def _checked(flag: bool) -> str:
    return "checked" if flag else ""


# ---------------------------------------------------------------------------
# Playback Controls
# ---------------------------------------------------------------------------
def playback_controls(
    phase: Phase = Phase.IDLE,
    cursor: int = 0,
    total_steps: int = 0,
    speed: int = 50,
    step_by_step: bool = False,
) -> str:
    is_playing = phase is Phase.PLAYING
    play_icon  = "⏸" if is_playing else "▶"
    play_label = "Pause" if is_playing else "Play"

    # stepping only makes sense while stopped
    step_disabled = "disabled" if is_playing else ""
    prev_disabled = "disabled" if is_playing or cursor == 0 else ""

    presets = "".join(
        f'<button class="speed-preset" data-speed="{value}">{name.capitalize()}</button>'
        for name, value in SPEED_PRESETS.items()
    )

    return f"""
    <div class="panel playback-controls">
      <h3>⏯ Playback</h3>
      <div class="button-row">
        <button id="btn-prev" title="Previous step" {prev_disabled}>◀</button>
        <button id="btn-play" title="{play_label}">{play_icon}</button>
        <button id="btn-next" title="Next step" {step_disabled}>▶</button>
        <button id="btn-reset" title="Reset with a new array">⟲</button>
      </div>
      <div class="step-info">
        Step <span id="current-step">{cursor}</span> / <span id="total-steps">{total_steps}</span>
        {' <span class="finished-badge">FINISHED</span>' if phase is Phase.COMPLETED else ''}
      </div>
      <div class="speed-control">
        <label>Speed: <span id="speed-val">{speed}</span></label>
        <input type="range" id="speed-slider" min="1" max="100" value="{speed}">
        <div class="presets">{presets}</div>
      </div>
      <label>
        <input type="checkbox" id="step-mode-toggle" {_checked(step_by_step)}>
        Step-by-step mode
      </label>
    </div>
    """


# ---------------------------------------------------------------------------
# Algorithm Selector
# ---------------------------------------------------------------------------
def algorithm_selector(
    algorithms: List[AlgoInfo],
    selected_key: str = "bubble",
    selected_variant: Optional[str] = None,
) -> str:
    options = []
    selected_info = None
    for algo in algorithms:
        if algo.key == selected_key:
            selected_info = algo
        options.append(
            f'<option value="{algo.key}" {_selected(algo.key == selected_key)}>'
            f'{algo.label} — {algo.complexity_time}</option>'
        )

    variant_block = ""
    if selected_info is not None and selected_info.variants:
        current = selected_variant or get_default_variant(selected_info.key)
        variant_options = "".join(
            f'<option value="{key}" {_selected(key == current)}>{escape(label)}</option>'
            for key, label in selected_info.variants.items()
        )
        variant_block = f"""
        <div class="variant-picker">
          <label>Variant:</label>
          <select id="variant-selector">
            {variant_options}
          </select>
        </div>
        """

    return f"""
    <div class="panel algorithm-selector">
      <h3>🧠 Algorithm</h3>
      <select id="algo-selector">
        {''.join(options)}
      </select>
      {variant_block}
    </div>
    """


# ---------------------------------------------------------------------------
# Array Controls
# ---------------------------------------------------------------------------
def array_controls(array_size: int = 30, disabled: bool = False) -> str:
    dis = "disabled" if disabled else ""
    return f"""
    <div class="panel array-controls">
      <h3>🎲 Array</h3>
      <label>Size: <span id="size-val">{array_size}</span>
        <input type="range" id="size-slider" min="5" max="{MAX_ARRAY_SIZE}" value="{array_size}" {dis}>
      </label>
      <button id="btn-generate" class="btn-secondary" {dis}>Generate Random</button>
      <label>Custom values ({CUSTOM_MIN_VALUE}–{CUSTOM_MAX_VALUE}, up to {CUSTOM_MAX_ITEMS}):</label>
      <input type="text" id="custom-input" placeholder="64, 34, 25, 12, 22, 11, 90" {dis}>
      <button id="btn-custom" class="btn-secondary" {dis}>Use Custom Array</button>
    </div>
    """


# ---------------------------------------------------------------------------
# Display Controls
# ---------------------------------------------------------------------------
def display_controls(
    mode: str = "bars",
    theme: str = "default",
    sound_enabled: bool = True,
) -> str:
    mode_options = "".join(
        f'<option value="{key}" {_selected(key == mode)}>{label}</option>'
        for key, label in VISUALIZATION_MODES.items()
    )
    theme_options = "".join(
        f'<option value="{key}" {_selected(key == theme)}>{key.capitalize()}</option>'
        for key in COLOR_THEMES
    )
    return f"""
    <div class="panel display-controls">
      <h3>🎨 Display</h3>
      <label>Mode: <select id="mode-selector">{mode_options}</select></label>
      <label>Theme: <select id="theme-selector">{theme_options}</select></label>
      <label>
        <input type="checkbox" id="sound-toggle" {_checked(sound_enabled)}>
        Sound
      </label>
    </div>
    """


# ---------------------------------------------------------------------------
# Stats Panel
# ---------------------------------------------------------------------------
def stats_panel(stats: Optional[Stats] = None, phase: Phase = Phase.IDLE) -> str:
    stats = stats or Stats()
    progress = max(0.0, min(100.0, stats.progress))
    return f"""
    <div class="panel stats-panel">
      <h3>📊 Statistics</h3>
      <table>
        <tr><td>Comparisons:</td><td><strong id="stat-comparisons">{stats.comparisons}</strong></td></tr>
        <tr><td>Swaps:</td><td><strong id="stat-swaps">{stats.swaps}</strong></td></tr>
        <tr><td>Time:</td><td><strong id="stat-time">{stats.time_elapsed / 1000:.1f}s</strong></td></tr>
        <tr><td>Status:</td><td><strong id="stat-phase">{phase.value.capitalize()}</strong></td></tr>
      </table>
      <div class="progress">
        <div class="progress-bar" id="stat-progress" style="width: {progress:.1f}%;"></div>
      </div>
      <div class="progress-label">{stats.current_step} / {stats.total_steps}</div>
    </div>
    """


# ---------------------------------------------------------------------------
# Algorithm Info Card
# ---------------------------------------------------------------------------
def algorithm_info_panel(info: Optional[AlgoInfo] = None) -> str:
    if info is None:
        return """
        <div class="panel algorithm-info">
          <h3>📘 Algorithm</h3>
          <p class="placeholder">Select an algorithm to see its properties.</p>
        </div>
        """

    pseudocode = "".join(
        f'<div class="code-line">{escape(line)}</div>' for line in info.pseudocode
    )
    return f"""
    <div class="panel algorithm-info">
      <h3>📘 {info.label}</h3>
      <p>{escape(info.description)}</p>
      <table>
        <tr><td>Time:</td><td><strong>{info.complexity_time}</strong></td></tr>
        <tr><td>Space:</td><td><strong>{info.complexity_space}</strong></td></tr>
        <tr><td>Best case:</td><td><strong>{escape(info.best_case)}</strong></td></tr>
        <tr><td>Stable:</td><td><strong>{'Yes' if info.stable else 'No'}</strong></td></tr>
      </table>
      <div class="code-block">{pseudocode}</div>
    </div>
    """


# ---------------------------------------------------------------------------
# Message Panel
# ---------------------------------------------------------------------------
def message_panel(message: str = "") -> str:
    if not message:
        message = "Ready to sort"
    return f"""<div class="message-text" id="message">{escape(message)}</div>"""


# ---------------------------------------------------------------------------
# Comparison Panel (side-by-side)
# ---------------------------------------------------------------------------
def comparison_panel(comp: Optional[ComparisonResult] = None) -> str:
    if not comp:
        return """
        <div class="panel comparison-panel">
          <h3>⚖️ Comparison Mode</h3>
          <p class="placeholder">Run two algorithms on the same array to compare.</p>
        </div>
        """

    left = comp.left
    right = comp.right

    def winner_badge(winner_label):
        if winner_label == "tie":
            return "🟰 Tie"
        return f"👑 {escape(winner_label)}"

    return f"""
    <div class="panel comparison-panel">
      <h3>⚖️ Comparison: {escape(left.label)} vs {escape(right.label)}</h3>
      <table class="comparison-table">
        <thead>
          <tr>
            <th>Metric</th>
            <th>{escape(left.label)}</th>
            <th>{escape(right.label)}</th>
            <th>Winner</th>
          </tr>
        </thead>
        <tbody>
          <tr>
            <td>Comparisons</td>
            <td>{left.comparisons}</td>
            <td>{right.comparisons}</td>
            <td>{winner_badge(comp.winner_comparisons)}</td>
          </tr>
          <tr>
            <td>Swaps</td>
            <td>{left.swaps}</td>
            <td>{right.swaps}</td>
            <td>{winner_badge(comp.winner_swaps)}</td>
          </tr>
          <tr>
            <td>Steps</td>
            <td>{left.total_steps}</td>
            <td>{right.total_steps}</td>
            <td>{winner_badge(comp.winner_steps)}</td>
          </tr>
          <tr>
            <td>Wall Time</td>
            <td>{left.wall_time_ms:.2f} ms</td>
            <td>{right.wall_time_ms:.2f} ms</td>
            <td>—</td>
          </tr>
        </tbody>
      </table>
      <p>Same output: <strong>{'Yes' if comp.same_output else 'No'}</strong></p>
    </div>
    """
