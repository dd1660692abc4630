"""
canvas.py — SVG Grid Renderer
===============================
Pure rendering function: Grid → SVG string.

The renderer consumes:
  • grid     – the Grid (cell kinds are read as they are right now)
  • dark     – dark-mode palette (only the wall colour changes)
  • config   – visual config (cell size, colours, …)

And produces an SVG string ready to inject into the DOM.

Design decisions:
  - NO mutation.  The caller passes in everything it needs and gets
    back a string.
  - Kind-based colouring is a simple dict lookup: CellKind → hex colour.
  - Every rect carries data-row / data-col so the page can map mouse
    events back to cells with one delegated listener.
"""

from typing import Dict

from grid import Grid, CellKind


# ---------------------------------------------------------------------------
# Visual Config — colour palette, dimensions
# ---------------------------------------------------------------------------
class CanvasConfig:
    cell_size: int = 26
    gap:       int = 1
    bg:        str = "#e5e7eb"
    bg_dark:   str = "#111827"

    # cell colours (kind → fill)
    cell_colors: Dict[str, str] = {
        "empty":    "#ffffff",
        "wall":     "#1f2937",
        "start":    "#22c55e",
        "end":      "#ef4444",
        "visited":  "#60a5fa",
        "path":     "#facc15",
        "frontier": "#c084fc",
    }

    # dark-mode overrides
    cell_colors_dark: Dict[str, str] = {
        "empty": "#1f2937",
        "wall":  "#d1d5db",
    }

    legend_labels: Dict[str, str] = {
        "start":    "Start",
        "end":      "End",
        "wall":     "Wall",
        "visited":  "Visited",
        "frontier": "Frontier",
        "path":     "Path",
    }

    def color(self, kind: CellKind, dark: bool = False) -> str:
        if dark and kind.value in self.cell_colors_dark:
            return self.cell_colors_dark[kind.value]
        return self.cell_colors[kind.value]


CONFIG = CanvasConfig()


# ---------------------------------------------------------------------------
# Main Render Function
# ---------------------------------------------------------------------------
def render_grid(grid: Grid, dark: bool = False, config: CanvasConfig = CONFIG) -> str:
    """
    Returns an SVG string, one <rect> per cell.

    Args:
        grid   : The grid to render.
        dark   : Use the dark-mode palette.
        config : Visual config.
    """
    step   = config.cell_size + config.gap
    width  = grid.cols * step + config.gap
    height = grid.rows * step + config.gap
    bg     = config.bg_dark if dark else config.bg

    svg_parts = [
        f'<svg width="{width}" height="{height}" viewBox="0 0 {width} {height}" '
        f'xmlns="http://www.w3.org/2000/svg" class="grid-svg">',
        f'<rect width="{width}" height="{height}" fill="{bg}"/>',
    ]

    for cell in grid:
        x = config.gap + cell.col * step
        y = config.gap + cell.row * step
        svg_parts.append(
            f'<rect class="cell {cell.kind.value}" data-row="{cell.row}" data-col="{cell.col}" '
            f'x="{x}" y="{y}" width="{config.cell_size}" height="{config.cell_size}" '
            f'fill="{config.color(cell.kind, dark)}"/>'
        )

    svg_parts.append("</svg>")
    return "\n".join(svg_parts)


# ---------------------------------------------------------------------------
# Legend
# ---------------------------------------------------------------------------
def render_legend(dark: bool = False, config: CanvasConfig = CONFIG) -> str:
    items = []
    for key, label in config.legend_labels.items():
        fill = config.color(CellKind(key), dark)
        items.append(
            f'<span class="legend-item"><span class="swatch" style="background:{fill}"></span>{label}</span>'
        )
    return f'<div class="legend">{"".join(items)}</div>'
