"""
grid.py — Grid Container & Generator
=====================================
Single source of truth for the board.  Algorithms, the playback player
and the renderer all talk to this object.

Responsibilities:
  1. Cell access & bounds                   (cell, kind, in_bounds, …)
  2. The neighbour rule                     (up, right, down, left)
  3. Editing                                (walls, moving start / end)
  4. Applying playback frames               (apply_frame)
  5. Text & dict round-trips                (from_ascii / to_dict / …)
  6. Maze factory                           (generate_maze)

Design decisions:
  - Cells are stored row-major in a list of lists; a position is a plain
    (row, col) tuple so algorithms never hold Cell references.
  - The grid only knows display kinds.  Per-run search bookkeeping is
    owned by the search call, never stored here.
  - Exactly one START and one END exist at all times; both are tracked
    as positions so lookups are O(1).
"""

import random
from typing import Iterator, List, Optional

from grid.cell import Cell, CellKind, CellUpdate, Pos


# the fixed expansion order every algorithm relies on
DIRECTIONS = ((-1, 0), (0, 1), (1, 0), (0, -1))   # up, right, down, left

_CHAR_KINDS = {
    ".": CellKind.EMPTY,
    "#": CellKind.WALL,
    "S": CellKind.START,
    "E": CellKind.END,
    # overlay characters parse back to empty
    "v": CellKind.EMPTY,
    "*": CellKind.EMPTY,
    "f": CellKind.EMPTY,
}


def default_endpoints(rows: int, cols: int):
    """Start a quarter of the way in, end three quarters in, both mid-height."""
    return (rows // 2, cols // 4), (rows // 2, (cols * 3) // 4)


class Grid:
    """
    Attributes:
        rows, cols : Dimensions (both >= 2).
        cells      : rows × cols matrix of Cell.
        start      : Position of the START cell.
        end        : Position of the END cell.
    """

    def __init__(
        self,
        rows: int,
        cols: int,
        start: Optional[Pos] = None,
        end: Optional[Pos] = None,
    ):
        if rows < 2 or cols < 2:
            raise ValueError(f"Grid must be at least 2x2, got {rows}x{cols}")

        d_start, d_end = default_endpoints(rows, cols)
        start = tuple(start) if start is not None else d_start
        end   = tuple(end)   if end   is not None else d_end

        self.rows: int = rows
        self.cols: int = cols
        self.cells: List[List[Cell]] = [
            [Cell(r, c) for c in range(cols)] for r in range(rows)
        ]

        for label, pos in (("start", start), ("end", end)):
            if not self.in_bounds(pos):
                raise ValueError(f"{label} {pos} is outside a {rows}x{cols} grid")
        if start == end:
            raise ValueError(f"start and end must differ, both are {start}")

        self.start: Pos = start
        self.end:   Pos = end
        self.cell(start).kind = CellKind.START
        self.cell(end).kind   = CellKind.END

    # ==================================================================
    # ACCESS
    # ==================================================================
    def in_bounds(self, pos: Pos) -> bool:
        r, c = pos
        return 0 <= r < self.rows and 0 <= c < self.cols

    def cell(self, pos: Pos) -> Cell:
        r, c = pos
        return self.cells[r][c]

    def kind(self, pos: Pos) -> CellKind:
        return self.cell(pos).kind

    def is_wall(self, pos: Pos) -> bool:
        return self.cell(pos).is_wall

    def __iter__(self) -> Iterator[Cell]:
        for row in self.cells:
            yield from row

    def positions(self, kind: CellKind) -> List[Pos]:
        """Every position currently showing `kind`, row-major."""
        return [c.pos for c in self if c.kind is kind]

    def count(self, kind: CellKind) -> int:
        return sum(1 for c in self if c.kind is kind)

    @property
    def area(self) -> int:
        return self.rows * self.cols

    # ==================================================================
    # NEIGHBOUR RULE
    # ==================================================================
    def neighbours(self, pos: Pos) -> List[Pos]:
        """
        In-bounds orthogonal neighbours in the fixed order up, right,
        down, left.  Walls are included; callers decide what to skip.
        """
        r, c = pos
        result = []
        for dr, dc in DIRECTIONS:
            nr, nc = r + dr, c + dc
            if 0 <= nr < self.rows and 0 <= nc < self.cols:
                result.append((nr, nc))
        return result

    # ==================================================================
    # EDITING
    # ==================================================================
    def set_wall(self, pos: Pos, is_wall: bool = True) -> bool:
        """Paint or erase a wall.  Start / end are never painted over."""
        cell = self.cell(pos)
        if cell.is_endpoint:
            return False
        cell.kind = CellKind.WALL if is_wall else CellKind.EMPTY
        return True

    def toggle_wall(self, pos: Pos) -> bool:
        return self.set_wall(pos, not self.is_wall(pos))

    def move_start(self, pos: Pos) -> None:
        self._move_endpoint(pos, CellKind.START)

    def move_end(self, pos: Pos) -> None:
        self._move_endpoint(pos, CellKind.END)

    def _move_endpoint(self, pos: Pos, kind: CellKind) -> None:
        pos = tuple(pos)
        if not self.in_bounds(pos):
            raise ValueError(f"{pos} is outside a {self.rows}x{self.cols} grid")
        other = self.end if kind is CellKind.START else self.start
        if pos == other:
            raise ValueError(f"cannot move {kind.value} onto the other endpoint at {pos}")

        old = self.start if kind is CellKind.START else self.end
        self.cell(old).kind = CellKind.EMPTY
        # dragging over a wall replaces it
        self.cell(pos).kind = kind
        if kind is CellKind.START:
            self.start = pos
        else:
            self.end = pos

    def clear_walls(self) -> None:
        for cell in self:
            if cell.is_wall:
                cell.kind = CellKind.EMPTY

    def clear_path(self) -> None:
        """Wipe visited / path / frontier but keep walls and endpoints."""
        for cell in self:
            cell.clear_overlay()

    def clear_frontier(self) -> None:
        for cell in self:
            if cell.kind is CellKind.FRONTIER:
                cell.kind = CellKind.EMPTY

    def reset(self) -> None:
        """Back to an empty board with default endpoints."""
        start, end = default_endpoints(self.rows, self.cols)
        for cell in self:
            cell.kind = CellKind.EMPTY
        self.start, self.end = start, end
        self.cell(start).kind = CellKind.START
        self.cell(end).kind   = CellKind.END

    # ==================================================================
    # PLAYBACK
    # ==================================================================
    def apply_update(self, update: CellUpdate) -> bool:
        """
        Apply one 'mark as kind' request against the CURRENT board.

        Endpoints are never repainted and a frontier preview never
        overwrites a cell that has already been revealed.
        """
        cell = self.cells[update.row][update.col]
        if cell.is_endpoint:
            return False
        if update.kind is CellKind.FRONTIER and cell.kind is not CellKind.EMPTY:
            return False
        cell.kind = update.kind
        return True

    def apply_frame(self, frame) -> None:
        """Apply a playback Frame (anything with .clear_frontier and .updates)."""
        if frame.clear_frontier:
            self.clear_frontier()
        for update in frame.updates:
            self.apply_update(update)

    # ==================================================================
    # SERIALISATION
    # ==================================================================
    def to_ascii(self) -> str:
        return "\n".join("".join(c.to_char() for c in row) for row in self.cells)

    @classmethod
    def from_ascii(cls, text: str) -> "Grid":
        """
        Parse a text board, one row per line:
            .  empty      #  wall      S  start      E  end
        Blank lines and surrounding whitespace are ignored.
        """
        lines = [line.strip() for line in text.strip().splitlines() if line.strip()]
        if not lines:
            raise ValueError("empty grid text")
        width = len(lines[0])
        if any(len(line) != width for line in lines):
            raise ValueError("grid text is not rectangular")

        start = end = None
        kinds: List[List[CellKind]] = []
        for r, line in enumerate(lines):
            row = []
            for c, ch in enumerate(line):
                if ch not in _CHAR_KINDS:
                    raise ValueError(f"unknown grid character {ch!r} at ({r}, {c})")
                kind = _CHAR_KINDS[ch]
                if kind is CellKind.START:
                    if start is not None:
                        raise ValueError("more than one start cell")
                    start = (r, c)
                elif kind is CellKind.END:
                    if end is not None:
                        raise ValueError("more than one end cell")
                    end = (r, c)
                row.append(kind)
            kinds.append(row)

        if start is None or end is None:
            raise ValueError("grid text needs exactly one 'S' and one 'E'")

        g = cls(len(lines), width, start=start, end=end)
        for r, row in enumerate(kinds):
            for c, kind in enumerate(row):
                if kind is CellKind.WALL:
                    g.cells[r][c].kind = kind
        return g

    def kinds(self) -> List[List[str]]:
        return [[c.kind.value for c in row] for row in self.cells]

    def to_dict(self) -> dict:
        return {
            "rows":  self.rows,
            "cols":  self.cols,
            "start": list(self.start),
            "end":   list(self.end),
            "cells": self.kinds(),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Grid":
        rows, cols = int(data["rows"]), int(data["cols"])
        g = cls(rows, cols, start=tuple(data["start"]), end=tuple(data["end"]))
        cells = data.get("cells")
        if cells is not None:
            if len(cells) != rows or any(len(row) != cols for row in cells):
                raise ValueError("cell matrix does not match rows x cols")
            for r, row in enumerate(cells):
                for c, value in enumerate(row):
                    kind = CellKind(value)
                    if g.cells[r][c].is_endpoint or kind in (CellKind.START, CellKind.END):
                        continue
                    g.cells[r][c].kind = kind
        return g

    def copy(self) -> "Grid":
        return Grid.from_dict(self.to_dict())

    # ==================================================================
    # GENERATOR
    # ==================================================================
    @classmethod
    def generate_maze(
        cls,
        rows: int = 20,
        cols: int = 20,
        wall_prob: float = 0.3,
        seed: Optional[int] = None,
        start: Optional[Pos] = None,
        end: Optional[Pos] = None,
    ) -> "Grid":
        """
        Random obstacle field.  Each non-endpoint cell becomes a wall
        with probability `wall_prob`.  No connectivity guarantee: an
        unreachable goal is a perfectly good teaching case.
        """
        rng = random.Random(seed)
        g = cls(rows, cols, start=start, end=end)
        for cell in g:
            if not cell.is_endpoint and rng.random() < wall_prob:
                cell.kind = CellKind.WALL
        return g

    def __repr__(self) -> str:
        return (f"Grid({self.rows}x{self.cols}, start={self.start}, end={self.end}, "
                f"walls={self.count(CellKind.WALL)})")
