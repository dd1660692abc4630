"""
result.py — Search Result & Per-Run Scratch Pad
================================================
Every algorithm is a plain function that returns a SearchResult.
A SearchResult is the frozen artifact the playback player replays:

    • visited_in_order – the exact order cells were marked visited
                         (this order IS the animation)
    • path             – start → end inclusive, or [] on failure
    • success          – False simply means "no path"; it is not an error

Design decisions:
  - SearchResult is a frozen dataclass of positions, never Cells, so it
    stays valid after the grid is edited.
  - All per-run bookkeeping (visited / distance / heuristic /
    predecessor) lives in a ScratchPad created by the search call.
    Nothing is written onto the grid, so two runs can never leak into
    each other and independent runs may share one Grid.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Set

from grid import Pos


INF = float("inf")


@dataclass(frozen=True)
class SearchResult:
    """
    Attributes:
        visited_in_order : Positions in the order the algorithm visited them.
                           Iterative deepening repeats cells across passes.
        path             : Start → end inclusive; empty when success is False.
        success          : Whether end was reached.
        algorithm        : Registry key of the algorithm that produced this.
    """

    visited_in_order: List[Pos] = field(default_factory=list)
    path:             List[Pos] = field(default_factory=list)
    success:          bool      = False
    algorithm:        str       = ""

    @property
    def visited_count(self) -> int:
        return len(self.visited_in_order)

    @property
    def path_length(self) -> int:
        """Number of steps on the path (cells - 1)."""
        return len(self.path) - 1 if len(self.path) > 1 else 0

    def to_dict(self) -> dict:
        return {
            "algorithm":        self.algorithm,
            "success":          self.success,
            "visited_in_order": [list(p) for p in self.visited_in_order],
            "path":             [list(p) for p in self.path],
        }


# ---------------------------------------------------------------------------
# Mutable bookkeeping owned by one search call
# ---------------------------------------------------------------------------
class ScratchPad:
    """
    Per-run scratch state, keyed by position.

    Usage inside an algorithm:
        pad = ScratchPad(algorithm="bfs")
        pad.mark(start)
        pad.distance[start] = 0
        ...
        pad.record(cell)
        if cell == end:
            return pad.finish(end)
        ...
        return pad.fail()
    """

    def __init__(self, algorithm: str = ""):
        self.algorithm:   str                      = algorithm
        self.visited:     Set[Pos]                 = set()
        self.distance:    Dict[Pos, float]         = {}
        self.heuristic:   Dict[Pos, float]         = {}
        self.predecessor: Dict[Pos, Optional[Pos]] = {}
        self.order:       List[Pos]                = []

    # -- per-cell accessors (unset reads as the sentinel) --
    def dist(self, pos: Pos) -> float:
        return self.distance.get(pos, INF)

    def h(self, pos: Pos) -> float:
        return self.heuristic.get(pos, INF)

    def is_visited(self, pos: Pos) -> bool:
        return pos in self.visited

    # -- mutation helpers --
    def mark(self, pos: Pos) -> None:
        self.visited.add(pos)

    def link(self, pos: Pos, parent: Pos) -> None:
        self.predecessor[pos] = parent

    def record(self, pos: Pos) -> None:
        """Append to the visited order (the animation sequence)."""
        self.order.append(pos)

    def reset_marks(self) -> None:
        """Forget visited flags and predecessors but keep the running order."""
        self.visited.clear()
        self.predecessor.clear()

    # -- path reconstruction --
    def reconstruct(self, end: Pos) -> List[Pos]:
        """Follow predecessor links back from `end`, then reverse."""
        path: List[Pos] = []
        cur: Optional[Pos] = end
        while cur is not None:
            path.append(cur)
            cur = self.predecessor.get(cur)
        path.reverse()
        return path

    # -- result builders --
    def finish(self, end: Pos) -> SearchResult:
        return SearchResult(
            visited_in_order=list(self.order),
            path=self.reconstruct(end),
            success=True,
            algorithm=self.algorithm,
        )

    def fail(self) -> SearchResult:
        return SearchResult(
            visited_in_order=list(self.order),
            path=[],
            success=False,
            algorithm=self.algorithm,
        )
