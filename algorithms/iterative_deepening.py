"""
iterative_deepening.py — Iterative-Deepening Depth-First Search
================================================================
Runs a depth-limited DFS with limit 0, 1, 2, … until a pass reaches the
goal, a pass finds nothing left beyond its bound, or the limit hits the
grid's area.

Every pass appends to ONE running visit order, so cells near the start
appear again once per pass.  That repetition is the whole
point of showing this algorithm: it trades time for DFS-sized memory.
Inside a single pass each cell is recorded at most once.

Within a pass a cell may be re-entered when it is reached at a strictly
SHALLOWER depth than before.  Without that rule a cell first reached
along a long detour would be cut off by the depth bound and the first
successful pass could return a longer-than-shortest path.  Re-entries
re-link the predecessor but are not recorded again.

The depth-limited pass uses an explicit stack of neighbour iterators so
the visit order is identical to the recursive formulation without
touching Python's recursion limit.
"""

from typing import Dict, List

from grid import Grid, Pos
from algorithms.result import INF, ScratchPad, SearchResult


PSEUDOCODE: List[str] = [
    "def IDDFS(grid, start, end):",
    "    for limit in 0, 1, 2, … < rows·cols:",
    "        reset visited, parent",
    "        if DLS(start, 0, limit): return path",
    "        if nothing was cut off: break",
    "    return NOT FOUND",
    "",
    "def DLS(cell, depth, limit):",
    "    if cell not seen this pass: record(cell)",
    "    depth_seen[cell] ← depth",
    "    if cell == end: return True",
    "    if depth ≥ limit: return False",
    "    for nbr in up, right, down, left:",
    "        if nbr not wall and depth_seen[nbr] > depth + 1:",
    "            parent[nbr] ← cell",
    "            if DLS(nbr, depth + 1, limit): return True",
    "    return False",
]


def iterative_deepening(grid: Grid, start: Pos, end: Pos) -> SearchResult:
    pad = ScratchPad("iterative-deepening")

    for limit in range(grid.area):
        pad.reset_marks()
        found, depth_seen = _depth_limited(grid, pad, start, end, limit)
        if found:
            return pad.finish(end)
        if not _cut_off(grid, depth_seen):
            break

    return pad.fail()


def _depth_limited(grid: Grid, pad: ScratchPad, start: Pos, end: Pos, limit: int):
    """
    One bounded pass.  Returns (found, depth_seen) where depth_seen maps
    every cell entered in this pass to the shallowest depth it was entered at.
    """
    depth_seen: Dict[Pos, int] = {}
    if grid.is_wall(start):
        return False, depth_seen

    depth_seen[start] = 0
    pad.mark(start)
    pad.record(start)
    if start == end:
        return True, depth_seen
    if limit == 0:
        return False, depth_seen

    # (cell, depth, remaining neighbours)
    stack = [(start, 0, iter(grid.neighbours(start)))]
    while stack:
        cell, depth, nbrs = stack[-1]
        for nbr in nbrs:
            if grid.is_wall(nbr):
                continue
            if depth_seen.get(nbr, INF) <= depth + 1:
                continue

            pad.link(nbr, cell)
            if not pad.is_visited(nbr):
                pad.mark(nbr)
                pad.record(nbr)
            depth_seen[nbr] = depth + 1

            if nbr == end:
                return True, depth_seen
            if depth + 1 < limit:
                stack.append((nbr, depth + 1, iter(grid.neighbours(nbr))))
                break
        else:
            stack.pop()

    return False, depth_seen


def _cut_off(grid: Grid, depth_seen: Dict[Pos, int]) -> bool:
    """True when some open cell next to this pass's reach was left unentered."""
    for cell in depth_seen:
        for nbr in grid.neighbours(cell):
            if nbr not in depth_seen and not grid.is_wall(nbr):
                return True
    return False
