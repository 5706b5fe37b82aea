"""
main.py — Sorting Algorithm Visualizer Flask App
==================================================
The web server that powers the visualizer.

Routes:
  GET  /                       – main UI
  GET  /api/state              – current view (array, message, stats, phase)
  POST /api/tick               – drive auto-advance (the page polls this)
  POST /api/play               – toggle play/pause
  POST /api/step/next          – advance one step
  POST /api/step/prev          – rewind one step
  POST /api/reset              – stop and draw a fresh random array
  POST /api/swap/complete      – the swap animation finished
  POST /api/array/generate     – new random array (optional size)
  POST /api/array/custom       – load a user-typed list
  POST /api/config             – partial config update (algorithm, variant, speed, …)
  POST /api/compare            – run two algorithms on the current array, side by side

State management:
  Flask's session only carries a random token.  The token keys an
  in-memory map of BrowserSession objects, each holding one
  PlaybackController plus the notifications and sound cues it produced
  since the page last asked.  Restarting the server forgets everything.
"""

import logging
import os
import secrets
from collections import OrderedDict
from dataclasses import asdict
from typing import Any, Dict, List, Tuple

from flask import Flask, jsonify, render_template_string, request, session

from elements import ConfigurationError, ValidationError
from algorithms import get_algorithm, list_algorithms, require_algorithm
from engine import PlaybackController, Recorder, SortingConfig, SoundCue, compare
from ui import (
    render_array,
    playback_controls,
    algorithm_selector,
    array_controls,
    display_controls,
    stats_panel,
    algorithm_info_panel,
    message_panel,
    comparison_panel,
)

logger = logging.getLogger(__name__)


app = Flask(__name__)
app.secret_key = os.environ.get("SORTVIZ_SECRET_KEY") or secrets.token_hex(32)


# ---------------------------------------------------------------------------
# Per-browser state
# ---------------------------------------------------------------------------
class BrowserSession:
    """One controller plus the side effects waiting to be shipped to the page."""

    def __init__(self):
        self.notifications: List[Dict[str, str]] = []
        self.sounds:        List[Dict[str, Any]] = []
        self.controller = PlaybackController(on_notify=self._notify, on_sound=self._sound)

    def _notify(self, level: str, message: str) -> None:
        self.notifications.append({"level": level, "message": message})

    def _sound(self, cue: SoundCue) -> None:
        self.sounds.append(cue.to_dict())

    def drain(self) -> Dict[str, list]:
        out = {"notifications": self.notifications, "sounds": self.sounds}
        self.notifications, self.sounds = [], []
        return out


# least recently used first; the oldest is evicted past MAX_SESSIONS
SESSIONS: "OrderedDict[str, BrowserSession]" = OrderedDict()
MAX_SESSIONS = int(os.environ.get("SORTVIZ_MAX_SESSIONS", "256"))


def get_browser_session() -> BrowserSession:
    token = session.get("token")
    if token is not None and token in SESSIONS:
        SESSIONS.move_to_end(token)
        return SESSIONS[token]

    token = token or secrets.token_hex(16)
    session["token"] = token
    SESSIONS[token] = BrowserSession()
    while len(SESSIONS) > MAX_SESSIONS:
        evicted, _ = SESSIONS.popitem(last=False)
        logger.info("Evicted idle visualizer session %s", evicted[:8])
    logger.info("New visualizer session (%d active)", len(SESSIONS))
    return SESSIONS[token]


def state_payload(browser: BrowserSession) -> Dict[str, Any]:
    """Everything the page needs to redraw itself."""
    ctrl = browser.controller
    view = ctrl.view()
    cfg  = view.config

    data = view.to_dict()
    data.update(browser.drain())
    data["svg"] = render_array(view.array, cfg.visualization_mode, cfg.color_theme, view.pending_swap)
    data["stats_html"]    = stats_panel(view.stats, view.phase)
    data["message_html"]  = message_panel(view.message)
    data["playback_html"] = playback_controls(
        phase=view.phase,
        cursor=view.cursor,
        total_steps=view.total_steps,
        speed=cfg.speed,
        step_by_step=cfg.step_by_step,
    )
    return data


def request_data() -> Dict[str, Any]:
    return request.get_json(silent=True) or {}


def _as_int(value: Any, field: str) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field} must be a whole number, got {value!r}") from None


# ---------------------------------------------------------------------------
# Error handlers
# ---------------------------------------------------------------------------
@app.errorhandler(ConfigurationError)
def handle_configuration_error(exc: ConfigurationError):
    logger.warning("Configuration rejected: %s", exc)
    return jsonify({"error": str(exc)}), 400


@app.errorhandler(ValidationError)
def handle_validation_error(exc: ValidationError):
    return jsonify({"error": str(exc)}), 400


# ---------------------------------------------------------------------------
# Main UI Route
# ---------------------------------------------------------------------------
@app.route("/")
def index():
    browser = get_browser_session()
    ctrl = browser.controller
    view = ctrl.view()
    cfg  = view.config

    html = render_template_string(INDEX_TEMPLATE,
        svg=render_array(view.array, cfg.visualization_mode, cfg.color_theme, view.pending_swap),
        playback=playback_controls(
            phase=view.phase,
            cursor=view.cursor,
            total_steps=view.total_steps,
            speed=cfg.speed,
            step_by_step=cfg.step_by_step,
        ),
        algo_selector=algorithm_selector(list_algorithms(), cfg.algorithm, cfg.variant),
        array_ctrl=array_controls(cfg.array_size),
        display=display_controls(cfg.visualization_mode, cfg.color_theme, cfg.sound_enabled),
        stats=stats_panel(view.stats, view.phase),
        info=algorithm_info_panel(get_algorithm(cfg.algorithm)),
        message=message_panel(view.message),
        comparison=comparison_panel(),
        animation_speed=cfg.animation_speed,
    )
    return html


# ---------------------------------------------------------------------------
# API: State & Playback
# ---------------------------------------------------------------------------
@app.route("/api/state", methods=["GET"])
def api_state():
    return jsonify(state_payload(get_browser_session()))


@app.route("/api/tick", methods=["POST"])
def api_tick():
    browser = get_browser_session()
    advanced = browser.controller.tick()
    data = state_payload(browser)
    data["advanced"] = advanced
    return jsonify(data)


@app.route("/api/play", methods=["POST"])
def api_play():
    browser = get_browser_session()
    toggled = browser.controller.toggle()
    data = state_payload(browser)
    data["toggled"] = toggled
    return jsonify(data)


@app.route("/api/step/next", methods=["POST"])
def api_step_next():
    browser = get_browser_session()
    moved = browser.controller.step_forward()
    data = state_payload(browser)
    data["moved"] = moved
    return jsonify(data)


@app.route("/api/step/prev", methods=["POST"])
def api_step_prev():
    browser = get_browser_session()
    moved = browser.controller.step_backward()
    data = state_payload(browser)
    data["moved"] = moved
    return jsonify(data)


@app.route("/api/reset", methods=["POST"])
def api_reset():
    browser = get_browser_session()
    browser.controller.reset()
    return jsonify(state_payload(browser))


@app.route("/api/swap/complete", methods=["POST"])
def api_swap_complete():
    browser = get_browser_session()
    cursor = request_data().get("cursor")
    acknowledged = browser.controller.acknowledge_swap(
        _as_int(cursor, "cursor") if cursor is not None else None
    )
    data = state_payload(browser)
    data["acknowledged"] = acknowledged
    return jsonify(data)


# ---------------------------------------------------------------------------
# API: Arrays
# ---------------------------------------------------------------------------
@app.route("/api/array/generate", methods=["POST"])
def api_array_generate():
    browser = get_browser_session()
    size = request_data().get("size")
    browser.controller.generate_array(_as_int(size, "size") if size is not None else None)
    return jsonify(state_payload(browser))


@app.route("/api/array/custom", methods=["POST"])
def api_array_custom():
    browser = get_browser_session()
    text = request_data().get("text", "")
    if not browser.controller.load_custom(text):
        data = state_payload(browser)
        errors = [n["message"] for n in data["notifications"] if n["level"] == "error"]
        data["error"] = errors[-1] if errors else "Invalid custom array."
        return jsonify(data), 400
    return jsonify(state_payload(browser))


# ---------------------------------------------------------------------------
# API: Config Changes
# ---------------------------------------------------------------------------
@app.route("/api/config", methods=["POST"])
def api_config():
    browser = get_browser_session()
    cfg = browser.controller.update_config(**request_data())

    data = state_payload(browser)
    data["algo_selector"] = algorithm_selector(list_algorithms(), cfg.algorithm, cfg.variant)
    data["info_html"]     = algorithm_info_panel(get_algorithm(cfg.algorithm))
    return jsonify(data)


# ---------------------------------------------------------------------------
# API: Comparison Mode
# ---------------------------------------------------------------------------
def default_comparison(cfg: SortingConfig) -> Tuple[Dict[str, Any], Dict[str, Any]]:
    """
    Current selection on the left.  On the right, another variant of the
    same algorithm when it has one, otherwise Merge Sort's default.
    """
    left = {"algorithm": cfg.algorithm, "variant": cfg.variant}
    others = [v for v in require_algorithm(cfg.algorithm).variants if v != cfg.variant]
    if others:
        right = {"algorithm": cfg.algorithm, "variant": others[0]}
    else:
        right = {"algorithm": "merge", "variant": None}
    return left, right


def _side(raw: Any, fallback: Dict[str, Any], name: str) -> Dict[str, Any]:
    if raw is None:
        return fallback
    if not isinstance(raw, dict):
        raise ValidationError(f"{name} must be an object with an algorithm and an optional variant")
    side = dict(raw)
    side.setdefault("algorithm", fallback["algorithm"])
    side.setdefault("variant", None)
    return side


@app.route("/api/compare", methods=["POST"])
def api_compare():
    """Run two (algorithm, variant) pairs on the current array and compare them."""
    browser = get_browser_session()
    ctrl = browser.controller
    body = request_data()

    left_default, right_default = default_comparison(ctrl.config)
    left_side  = _side(body.get("left"), left_default, "left")
    right_side = _side(body.get("right"), right_default, "right")

    left, right = Recorder(), Recorder()
    left.run(ctrl.input_array, left_side["algorithm"], left_side["variant"])
    right.run(ctrl.input_array, right_side["algorithm"], right_side["variant"])
    result = compare(left, right)

    data = state_payload(browser)
    data["comparison"]      = asdict(result)
    data["comparison_html"] = comparison_panel(result)
    return jsonify(data)


# ---------------------------------------------------------------------------
# HTML Template
# ---------------------------------------------------------------------------
INDEX_TEMPLATE = """
<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>Sorting Algorithm Visualizer</title>
  <link rel="preconnect" href="https://fonts.googleapis.com">
  <link rel="preconnect" href="https://fonts.gstatic.com" crossorigin>
  <link href="https://fonts.googleapis.com/css2?family=JetBrains+Mono:wght@400;500;700&family=DM+Sans:wght@400;500;700&display=swap" rel="stylesheet">
  <style>
    * { margin: 0; padding: 0; box-sizing: border-box; }

    :root {
      --bg-dark: #0d1117;
      --bg-darker: #010409;
      --bg-panel: #161b22;
      --border: #30363d;
      --text-primary: #e6edf3;
      --text-secondary: #7d8590;
      --accent-cyan: #0ea5e9;
      --accent-emerald: #10b981;
      --accent-rose: #f43f5e;
    }

    body {
      font-family: 'DM Sans', -apple-system, BlinkMacSystemFont, sans-serif;
      background: var(--bg-darker);
      color: var(--text-primary);
      display: flex;
      height: 100vh;
      overflow: hidden;
    }

    #sidebar {
      width: 340px;
      background: linear-gradient(180deg, var(--bg-dark) 0%, var(--bg-darker) 100%);
      border-right: 1px solid var(--border);
      overflow-y: auto;
      padding: 24px 16px;
    }

    #main { flex: 1; display: flex; flex-direction: column; padding: 24px; gap: 16px; }

    .panel {
      background: var(--bg-panel);
      border: 1px solid var(--border);
      border-radius: 10px;
      padding: 16px;
      margin-bottom: 16px;
    }
    .panel h3 { font-size: 13px; text-transform: uppercase; color: var(--text-secondary); margin-bottom: 12px; }
    .panel label { display: block; font-size: 13px; margin: 8px 0; color: var(--text-secondary); }

    button, select, input[type=text] {
      background: var(--bg-dark);
      color: var(--text-primary);
      border: 1px solid var(--border);
      border-radius: 6px;
      padding: 6px 10px;
      font-family: inherit;
    }
    button:hover:not(:disabled) { border-color: var(--accent-cyan); }
    button:disabled { opacity: 0.4; }
    .btn-secondary { width: 100%; margin-top: 8px; }
    .button-row { display: flex; gap: 8px; justify-content: center; }
    .step-info { text-align: center; margin: 10px 0; font-family: 'JetBrains Mono', monospace; }
    .finished-badge { color: var(--accent-emerald); font-weight: 700; }

    table { width: 100%; font-size: 13px; }
    table td:last-child { text-align: right; color: var(--accent-cyan); font-family: 'JetBrains Mono', monospace; }

    .progress { height: 6px; background: var(--bg-dark); border-radius: 3px; margin-top: 10px; }
    .progress-bar { height: 100%; background: var(--accent-cyan); border-radius: 3px; }
    .progress-label { font-size: 11px; color: var(--text-secondary); text-align: right; margin-top: 4px; }

    .message-text {
      background: var(--bg-panel);
      border: 1px solid var(--border);
      border-radius: 10px;
      padding: 14px 18px;
      font-size: 15px;
    }
    .code-block { margin-top: 12px; font-family: 'JetBrains Mono', monospace; font-size: 12px; }
    .code-line { white-space: pre; color: var(--text-secondary); }

    #toasts { position: fixed; right: 20px; bottom: 20px; display: flex; flex-direction: column; gap: 8px; }
    .toast { padding: 10px 14px; border-radius: 8px; background: var(--bg-panel); border-left: 4px solid var(--accent-cyan); }
    .toast.error { border-left-color: var(--accent-rose); }
    .toast.success { border-left-color: var(--accent-emerald); }

    [data-swap="1"] { transition: transform {{ animation_speed }}ms ease-in-out; }
  </style>
</head>
<body>
  <div id="sidebar">
    <div id="algo-selector-container">{{ algo_selector|safe }}</div>
    <div id="compare-container">
      <button id="btn-compare" class="btn-secondary">⚖️ Compare Variants</button>
      <div id="comparison">{{ comparison|safe }}</div>
    </div>
    <div id="playback">{{ playback|safe }}</div>
    <div id="array-ctrl">{{ array_ctrl|safe }}</div>
    <div id="display">{{ display|safe }}</div>
    <div id="stats">{{ stats|safe }}</div>
  </div>

  <div id="main">
    <div id="message-container">{{ message|safe }}</div>
    <div id="canvas-svg">{{ svg|safe }}</div>
    <div id="info">{{ info|safe }}</div>
  </div>

  <div id="toasts"></div>

  <script>
    let ticking = null;
    let swapInFlight = null;
    let animationSpeed = {{ animation_speed }};
    let audio = null;

    async function post(url, data) {
      const res = await fetch(url, {
        method: 'POST',
        headers: {'Content-Type': 'application/json'},
        body: JSON.stringify(data || {}),
      });
      return await res.json();
    }

    function toast(level, message) {
      const el = document.createElement('div');
      el.className = 'toast ' + level;
      el.textContent = message;
      document.getElementById('toasts').appendChild(el);
      setTimeout(() => el.remove(), 3000);
    }

    function play(cue) {
      audio = audio || new (window.AudioContext || window.webkitAudioContext)();
      const osc = audio.createOscillator();
      const gain = audio.createGain();
      osc.type = cue.waveform;
      osc.frequency.value = cue.frequency;
      gain.gain.value = 0.05;
      osc.connect(gain).connect(audio.destination);
      osc.start();
      osc.stop(audio.currentTime + cue.duration_ms / 1000);
    }

    function animateSwap(pair, cursor) {
      // one animation and one acknowledgement per announced swap
      if (swapInFlight === cursor) return;
      swapInFlight = cursor;
      const a = document.querySelector('[data-index="' + pair.from + '"]');
      const b = document.querySelector('[data-index="' + pair.to + '"]');
      if (a && b) {
        const dx = b.getBBox().x - a.getBBox().x;
        a.style.transform = 'translateX(' + dx + 'px)';
        b.style.transform = 'translateX(' + (-dx) + 'px)';
      }
      setTimeout(async () => apply(await post('/api/swap/complete', {cursor: cursor})), animationSpeed);
    }

    function apply(data) {
      if (data.error) toast('error', data.error);
      const animating = data.pending_swap && swapInFlight === data.cursor;
      if (data.svg && !animating) document.getElementById('canvas-svg').innerHTML = data.svg;
      if (data.message_html) document.getElementById('message-container').innerHTML = data.message_html;
      if (data.stats_html) document.getElementById('stats').innerHTML = data.stats_html;
      if (data.playback_html) {
        document.getElementById('playback').innerHTML = data.playback_html;
        bindPlayback();
      }
      if (data.algo_selector) {
        document.getElementById('algo-selector-container').innerHTML = data.algo_selector;
        bindAlgorithm();
      }
      if (data.info_html) document.getElementById('info').innerHTML = data.info_html;
      if (data.comparison_html) document.getElementById('comparison').innerHTML = data.comparison_html;
      (data.notifications || []).forEach(n => toast(n.level, n.message));
      (data.sounds || []).forEach(play);
      if (data.config) animationSpeed = data.config.animation_speed;

      if (data.pending_swap && data.phase === 'playing') animateSwap(data.pending_swap, data.cursor);
      else if (!data.pending_swap) swapInFlight = null;

      if (data.phase === 'playing' && !ticking) {
        ticking = setInterval(async () => apply(await post('/api/tick')), 25);
      } else if (data.phase !== 'playing' && ticking) {
        clearInterval(ticking);
        ticking = null;
      }
    }

    function bindPlayback() {
      document.getElementById('btn-play')?.addEventListener('click', async () => apply(await post('/api/play')));
      document.getElementById('btn-next')?.addEventListener('click', async () => apply(await post('/api/step/next')));
      document.getElementById('btn-prev')?.addEventListener('click', async () => apply(await post('/api/step/prev')));
      document.getElementById('btn-reset')?.addEventListener('click', async () => apply(await post('/api/reset')));
      document.getElementById('speed-slider')?.addEventListener('change', async (e) => {
        apply(await post('/api/config', {speed: +e.target.value}));
      });
      document.querySelectorAll('.speed-preset').forEach(btn => {
        btn.addEventListener('click', async () => apply(await post('/api/config', {speed: +btn.dataset.speed})));
      });
      document.getElementById('step-mode-toggle')?.addEventListener('change', async (e) => {
        apply(await post('/api/config', {step_by_step: e.target.checked}));
      });
    }

    function bindAlgorithm() {
      document.getElementById('algo-selector')?.addEventListener('change', async (e) => {
        apply(await post('/api/config', {algorithm: e.target.value}));
      });
      document.getElementById('variant-selector')?.addEventListener('change', async (e) => {
        apply(await post('/api/config', {variant: e.target.value}));
      });
    }

    document.getElementById('size-slider')?.addEventListener('input', (e) => {
      document.getElementById('size-val').textContent = e.target.value;
    });
    document.getElementById('size-slider')?.addEventListener('change', async (e) => {
      apply(await post('/api/config', {array_size: +e.target.value}));
    });
    document.getElementById('btn-generate')?.addEventListener('click', async () => {
      apply(await post('/api/array/generate', {size: +document.getElementById('size-slider').value}));
    });
    document.getElementById('btn-custom')?.addEventListener('click', async () => {
      apply(await post('/api/array/custom', {text: document.getElementById('custom-input').value}));
    });
    document.getElementById('btn-compare')?.addEventListener('click', async () => apply(await post('/api/compare')));
    document.getElementById('mode-selector')?.addEventListener('change', async (e) => {
      apply(await post('/api/config', {visualization_mode: e.target.value}));
    });
    document.getElementById('theme-selector')?.addEventListener('change', async (e) => {
      apply(await post('/api/config', {color_theme: e.target.value}));
    });
    document.getElementById('sound-toggle')?.addEventListener('change', async (e) => {
      apply(await post('/api/config', {sound_enabled: e.target.checked}));
    });

    bindPlayback();
    bindAlgorithm();
  </script>
</body>
</html>
"""


# ---------------------------------------------------------------------------
# Run
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    logging.basicConfig(
        level=os.environ.get("SORTVIZ_LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)-7s %(name)s: %(message)s",
    )
    logger.info("Sorting Algorithm Visualizer on http://localhost:5000")
    app.run(debug=os.environ.get("FLASK_DEBUG") == "1", port=5000)
