"""
ui/
---
Presentation layer.

    from ui import render_grid
    from ui import playback_controls, algorithm_selector, …
"""

from ui.canvas import render_grid, render_legend, CanvasConfig

from ui.controls import (
    playback_controls,
    algorithm_selector,
    speed_control,
    grid_tools,
    algorithm_info,
    pseudocode_viewer,
    analytics_panel,
    comparison_panel,
    mode_toggle,
)

__all__ = [
    "render_grid",
    "render_legend",
    "CanvasConfig",
    "playback_controls",
    "algorithm_selector",
    "speed_control",
    "grid_tools",
    "algorithm_info",
    "pseudocode_viewer",
    "analytics_panel",
    "comparison_panel",
    "mode_toggle",
]
