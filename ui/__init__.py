"""
ui/
---
Presentation layer.

    from ui import render_array
    from ui import playback_controls, algorithm_selector, …
"""

from ui.canvas import render_array, element_color, CanvasConfig, COLOR_THEMES

from ui.controls import (
    playback_controls,
    algorithm_selector,
    array_controls,
    display_controls,
    stats_panel,
    algorithm_info_panel,
    message_panel,
    comparison_panel,
)

__all__ = [
    "render_array",
    "element_color",
    "CanvasConfig",
    "COLOR_THEMES",
    "playback_controls",
    "algorithm_selector",
    "array_controls",
    "display_controls",
    "stats_panel",
    "algorithm_info_panel",
    "message_panel",
    "comparison_panel",
]
