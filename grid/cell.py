from enum import Enum
from typing import NamedTuple, Tuple


Pos = Tuple[int, int]


# ---------------------------------------------------------------------------
# Cell Kind Enum — maps 1-to-1 with the visual encoding palette
# ---------------------------------------------------------------------------
class CellKind(Enum):
    EMPTY    = "empty"      # walkable, nothing drawn
    WALL     = "wall"       # user-painted obstacle, blocks traversal
    START    = "start"      # where every search begins
    END      = "end"        # the goal
    VISITED  = "visited"    # revealed by the visited phase of playback
    PATH     = "path"       # revealed by the path phase of playback
    FRONTIER = "frontier"   # rolling preview of the next few visited cells


# kinds that only exist for display; a fresh search treats them as empty
OVERLAY_KINDS = frozenset({CellKind.VISITED, CellKind.PATH, CellKind.FRONTIER})

ASCII_CHARS = {
    CellKind.EMPTY:    ".",
    CellKind.WALL:     "#",
    CellKind.START:    "S",
    CellKind.END:      "E",
    CellKind.VISITED:  "v",
    CellKind.PATH:     "*",
    CellKind.FRONTIER: "f",
}


class CellUpdate(NamedTuple):
    """One 'mark cell (row, col) as kind' request emitted by playback."""
    row:  int
    col:  int
    kind: CellKind


# ---------------------------------------------------------------------------
# Cell
# ---------------------------------------------------------------------------
class Cell:
    """
    Fixed position, mutable kind.

    Attributes:
        row, col : Position in the grid (0-indexed).
        kind     : Current CellKind.  Only WALL affects traversal; the
                   overlay kinds are display states over an empty cell.

    Search bookkeeping (visited / distance / heuristic / predecessor)
    lives in algorithms.result.ScratchPad, not here.
    """

    __slots__ = ("row", "col", "kind")

    def __init__(self, row: int, col: int, kind: CellKind = CellKind.EMPTY):
        self.row: int       = row
        self.col: int       = col
        self.kind: CellKind = kind

    @property
    def pos(self) -> Pos:
        return (self.row, self.col)

    @property
    def is_wall(self) -> bool:
        return self.kind is CellKind.WALL

    @property
    def is_endpoint(self) -> bool:
        return self.kind in (CellKind.START, CellKind.END)

    def clear_overlay(self) -> None:
        """Drop visited / path / frontier back to empty; keep walls & endpoints."""
        if self.kind in OVERLAY_KINDS:
            self.kind = CellKind.EMPTY

    # ------------------------------------------------------------------
    # Serialisation
    # ------------------------------------------------------------------
    def to_char(self) -> str:
        return ASCII_CHARS[self.kind]

    def to_dict(self) -> dict:
        return {"row": self.row, "col": self.col, "kind": self.kind.value}

    @classmethod
    def from_dict(cls, data: dict) -> "Cell":
        return cls(int(data["row"]), int(data["col"]), CellKind(data.get("kind", "empty")))

    # ------------------------------------------------------------------
    # Dunder
    # ------------------------------------------------------------------
    def __repr__(self) -> str:
        return f"Cell(row={self.row}, col={self.col}, kind={self.kind.value})"

    def __eq__(self, other) -> bool:
        return isinstance(other, Cell) and self.pos == other.pos and self.kind is other.kind

    def __hash__(self) -> int:
        return hash(self.pos)
