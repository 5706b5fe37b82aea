"""
canvas.py — SVG Array Renderer
================================
Pure rendering function: array of Elements → SVG string.

The renderer consumes:
  • array      – the Elements currently on screen (value + state)
  • mode       – "bars" | "circles" | "lines" | "matrix"
  • theme      – key into COLOR_THEMES
  • swap_pair  – swap awaiting acknowledgement, highlighted with a bridge arc
  • config     – visual config (canvas size, fonts, …)

And produces an SVG string ready to inject into the DOM.

Design decisions:
  - NO mutation.  The caller passes in everything it needs and gets back
    a string.
  - State-based coloring is a dict lookup: ElementState → hex color, with
    a neutral grey for DEFAULT shared by every theme.
  - Sizes scale against the largest value on screen so any value range
    fills the canvas.
  - Swap animation itself is the browser's job; the SVG only marks the
    two elements and tags them with data-swap for the client script.
"""

from html import escape
from typing import Dict, List, Optional, Sequence

from elements import Element, ElementState
from algorithms.step import SwapPair


# ---------------------------------------------------------------------------
# Color themes (state → fill)
# ---------------------------------------------------------------------------
DEFAULT_FILL = "#6b7280"   # grey — untouched element

COLOR_THEMES: Dict[str, Dict[str, str]] = {
    "default": {"comparing": "#3b82f6", "swapping": "#ef4444", "sorted": "#10b981",
                "pivot": "#f59e0b", "current": "#8b5cf6"},
    "ocean":   {"comparing": "#0ea5e9", "swapping": "#06b6d4", "sorted": "#059669",
                "pivot": "#d97706", "current": "#7c3aed"},
    "sunset":  {"comparing": "#f97316", "swapping": "#dc2626", "sorted": "#16a34a",
                "pivot": "#ca8a04", "current": "#9333ea"},
    "neon":    {"comparing": "#00ffff", "swapping": "#ff0080", "sorted": "#00ff00",
                "pivot": "#ffff00", "current": "#ff8000"},
}


# ---------------------------------------------------------------------------
# Visual Config — dimensions, fonts
# ---------------------------------------------------------------------------
class CanvasConfig:
    # canvas
    width:   int = 900
    height:  int = 420
    padding: int = 16
    bg:      str = "#0d1117"

    # bars
    bar_gap:        int = 2
    bar_min_width:  int = 3
    bar_max_width:  int = 50
    bar_label_min:  int = 15      # label only when a bar is at least this wide

    # circles
    circle_min_r:   int = 10
    circle_max_r:   int = 40

    # lines
    line_width:     int = 3
    point_r:        int = 5
    point_r_active: int = 8
    grid_color:     str = "#374151"

    # matrix
    cell_gap:       int = 4

    # text
    label_color:    str = "#ffffff"
    label_size:     int = 11
    font_family:    str = "'DM Sans', sans-serif"

    # swap bridge
    swap_stroke:    str = "#e6edf3"


CONFIG = CanvasConfig()


def element_color(element: Element, theme: str = "default") -> str:
    colors = COLOR_THEMES.get(theme, COLOR_THEMES["default"])
    state = element.state
    if state is ElementState.DEFAULT:
        return DEFAULT_FILL
    # selected shares the "current" color
    if state is ElementState.SELECTED:
        return colors["current"]
    return colors.get(state.value, DEFAULT_FILL)


# ---------------------------------------------------------------------------
# Main Render Function
# ---------------------------------------------------------------------------
def render_array(
    array: Sequence[Element],
    mode: str = "bars",
    theme: str = "default",
    swap_pair: Optional[SwapPair] = None,
    config: CanvasConfig = CONFIG,
) -> str:
    """
    Returns an SVG string.

    Args:
        array     : Elements to draw, in on-screen order.
        mode      : Visualization mode; unknown modes fall back to bars.
        theme     : Color theme key; unknown themes fall back to default.
        swap_pair : Pending swap, or None.
        config    : Visual config.
    """
    renderers = {
        "bars":    _render_bars,
        "circles": _render_circles,
        "lines":   _render_lines,
        "matrix":  _render_matrix,
    }
    render = renderers.get(mode, _render_bars)

    svg_parts = [
        f'<svg width="{config.width}" height="{config.height}" '
        f'viewBox="0 0 {config.width} {config.height}" '
        f'xmlns="http://www.w3.org/2000/svg" class="array-canvas mode-{escape(mode)}">',
        f'<rect width="{config.width}" height="{config.height}" fill="{config.bg}"/>',
    ]

    if array:
        max_value = max(e.value for e in array) or 1
        svg_parts.append(render(list(array), max_value, theme, swap_pair, config))

    svg_parts.append("</svg>")
    return "\n".join(svg_parts)


def _swap_indices(swap_pair: Optional[SwapPair]) -> List[int]:
    return [swap_pair.from_index, swap_pair.to_index] if swap_pair else []


def _title(element: Element, index: int) -> str:
    return f"<title>Value: {element.value}, Index: {index}</title>"


def _fmt(value: float) -> str:
    return f"{value:g}"


# ---------------------------------------------------------------------------
# Bars
# ---------------------------------------------------------------------------
def _render_bars(array: List[Element], max_value: float, theme: str,
                 swap_pair: Optional[SwapPair], config: CanvasConfig) -> str:
    n = len(array)
    usable_w = config.width - 2 * config.padding
    usable_h = config.height - 2 * config.padding
    width = max(config.bar_min_width, min(config.bar_max_width, usable_w / n - config.bar_gap))
    total = n * (width + config.bar_gap) - config.bar_gap
    x0 = config.padding + max(0.0, (usable_w - total) / 2)
    swapping = _swap_indices(swap_pair)

    parts = ['<g class="bars">']
    for i, element in enumerate(array):
        h = (element.value / max_value) * usable_h
        x = x0 + i * (width + config.bar_gap)
        y = config.padding + usable_h - h
        fill = element_color(element, theme)
        swap_attr = ' data-swap="1"' if i in swapping else ""
        parts.append(
            f'  <rect class="bar state-{element.state.value}" data-id="{element.id}" data-index="{i}"{swap_attr} '
            f'x="{x:.2f}" y="{y:.2f}" width="{width:.2f}" height="{h:.2f}" rx="2" fill="{fill}">'
            f'{_title(element, i)}</rect>'
        )
        if width >= config.bar_label_min:
            parts.append(
                f'  <text x="{x + width / 2:.2f}" y="{config.padding + usable_h - 4}" text-anchor="middle" '
                f'font-size="{config.label_size}" font-family="{config.font_family}" '
                f'fill="{config.label_color}" font-weight="700">{_fmt(element.value)}</text>'
            )

    if swap_pair is not None:
        centers = [x0 + idx * (width + config.bar_gap) + width / 2 for idx in swapping]
        parts.append(_render_swap_bridge(centers[0], centers[1], config.padding + 4, config))

    parts.append('</g>')
    return "\n".join(parts)


# ---------------------------------------------------------------------------
# Circles
# ---------------------------------------------------------------------------
def _render_circles(array: List[Element], max_value: float, theme: str,
                    swap_pair: Optional[SwapPair], config: CanvasConfig) -> str:
    n = len(array)
    slot = max(2 * config.circle_min_r, 2 * config.circle_max_r + 8)
    per_row = max(1, int((config.width - 2 * config.padding) // slot))
    swapping = _swap_indices(swap_pair)

    parts = ['<g class="circles">']
    for i, element in enumerate(array):
        row, col = divmod(i, per_row)
        cx = config.padding + col * slot + slot / 2
        cy = config.padding + row * slot + slot / 2
        r = config.circle_min_r + (element.value / max_value) * (config.circle_max_r - config.circle_min_r)
        if element.state is ElementState.SWAPPING:
            r *= 1.2
        elif element.state is ElementState.COMPARING:
            r *= 1.1
        swap_attr = ' data-swap="1"' if i in swapping else ""
        parts.append(
            f'  <circle class="circle state-{element.state.value}" data-id="{element.id}" data-index="{i}"{swap_attr} '
            f'cx="{cx:.2f}" cy="{cy:.2f}" r="{r:.2f}" fill="{element_color(element, theme)}">'
            f'{_title(element, i)}</circle>'
        )
        parts.append(
            f'  <text x="{cx:.2f}" y="{cy + 4:.2f}" text-anchor="middle" font-size="{config.label_size}" '
            f'font-family="{config.font_family}" fill="{config.label_color}" font-weight="700">'
            f'{_fmt(element.value)}</text>'
        )
    parts.append('</g>')
    return "\n".join(parts)


# ---------------------------------------------------------------------------
# Lines
# ---------------------------------------------------------------------------
def _render_lines(array: List[Element], max_value: float, theme: str,
                  swap_pair: Optional[SwapPair], config: CanvasConfig) -> str:
    n = len(array)
    usable_w = config.width - 2 * config.padding
    usable_h = config.height - 2 * config.padding
    swapping = _swap_indices(swap_pair)

    def point(i: int, element: Element):
        x = config.padding + (usable_w * i / (n - 1) if n > 1 else usable_w / 2)
        y = config.padding + usable_h - (element.value / max_value) * usable_h
        return x, y

    parts = ['<g class="lines">']
    for percent in (0, 25, 50, 75, 100):
        y = config.padding + usable_h - usable_h * percent / 100
        parts.append(
            f'  <line x1="{config.padding}" y1="{y:.2f}" x2="{config.width - config.padding}" y2="{y:.2f}" '
            f'stroke="{config.grid_color}" stroke-dasharray="2,2"/>'
        )

    points = [point(i, e) for i, e in enumerate(array)]
    parts.append(
        f'  <polyline fill="none" stroke="{element_color(array[0], theme)}" stroke-width="{config.line_width}" '
        f'points="{" ".join(f"{x:.2f},{y:.2f}" for x, y in points)}"/>'
    )
    for i, (element, (x, y)) in enumerate(zip(array, points)):
        active = element.state is not ElementState.DEFAULT
        swap_attr = ' data-swap="1"' if i in swapping else ""
        parts.append(
            f'  <circle class="point state-{element.state.value}" data-id="{element.id}" data-index="{i}"{swap_attr} '
            f'cx="{x:.2f}" cy="{y:.2f}" r="{config.point_r_active if active else config.point_r}" '
            f'fill="{element_color(element, theme)}">{_title(element, i)}</circle>'
        )
    parts.append('</g>')
    return "\n".join(parts)


# ---------------------------------------------------------------------------
# Matrix (grid view)
# ---------------------------------------------------------------------------
def _render_matrix(array: List[Element], max_value: float, theme: str,
                   swap_pair: Optional[SwapPair], config: CanvasConfig) -> str:
    n = len(array)
    columns = max(1, int(n ** 0.5 + 0.999999))
    rows = (n + columns - 1) // columns
    usable_w = config.width - 2 * config.padding
    usable_h = config.height - 2 * config.padding
    cell = min(usable_w / columns, usable_h / rows) - config.cell_gap
    swapping = _swap_indices(swap_pair)

    parts = ['<g class="matrix">']
    for i, element in enumerate(array):
        row, col = divmod(i, columns)
        x = config.padding + col * (cell + config.cell_gap)
        y = config.padding + row * (cell + config.cell_gap)
        # brightness encodes the value
        opacity = 0.35 + 0.65 * (element.value / max_value)
        swap_attr = ' data-swap="1"' if i in swapping else ""
        parts.append(
            f'  <rect class="cell state-{element.state.value}" data-id="{element.id}" data-index="{i}"{swap_attr} '
            f'x="{x:.2f}" y="{y:.2f}" width="{cell:.2f}" height="{cell:.2f}" rx="4" '
            f'fill="{element_color(element, theme)}" fill-opacity="{opacity:.2f}">{_title(element, i)}</rect>'
        )
        parts.append(
            f'  <text x="{x + cell / 2:.2f}" y="{y + cell / 2 + 4:.2f}" text-anchor="middle" '
            f'font-size="{config.label_size}" font-family="{config.font_family}" '
            f'fill="{config.label_color}">{_fmt(element.value)}</text>'
        )
    parts.append('</g>')
    return "\n".join(parts)


# ---------------------------------------------------------------------------
# Swap bridge
# ---------------------------------------------------------------------------
def _render_swap_bridge(x1: float, x2: float, y: float, config: CanvasConfig) -> str:
    """Arc joining the two elements of a pending swap."""
    mid = (x1 + x2) / 2
    lift = min(40.0, abs(x2 - x1) / 3 + 8)
    return (
        f'  <path class="swap-bridge" d="M {x1:.2f} {y + lift:.2f} Q {mid:.2f} {y - lift / 2:.2f} '
        f'{x2:.2f} {y + lift:.2f}" fill="none" stroke="{config.swap_stroke}" '
        f'stroke-width="2" stroke-dasharray="4,3"/>'
    )
