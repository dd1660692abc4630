"""
grid/
-----
Core data layer.  Public API:

    from grid import Grid, Cell, CellKind, CellUpdate, Pos
"""

from grid.cell import Cell, CellKind, CellUpdate, Pos, OVERLAY_KINDS
from grid.grid import Grid, DIRECTIONS, default_endpoints

__all__ = [
    "Cell",     "CellKind",
    "CellUpdate",
    "Pos",
    "OVERLAY_KINDS",
    "Grid",
    "DIRECTIONS",
    "default_endpoints",
]
