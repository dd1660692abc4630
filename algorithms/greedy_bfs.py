"""
greedy_bfs.py — Greedy Best-First Search
==========================================
Expands the cell with the smallest h(n).  Pure heuristic, no regard
for the distance already travelled.

A cell's heuristic and predecessor are fixed the FIRST time it is seen
and never revised, even if a shorter route to it turns up later.  That
is standard greedy behaviour and the reason its paths can be longer
than A*'s; it still always finds a path when one exists.

Shares the Manhattan heuristic with A*.
"""

import heapq
from itertools import count
from typing import List

from grid import Grid, Pos
from algorithms.result import ScratchPad, SearchResult
from algorithms.astar import manhattan


PSEUDOCODE: List[str] = [
    "def GreedyBestFirst(grid, start, end):",
    "    h[start] ← manhattan(start, end)",
    "    open ← [start]",
    "    while open:",
    "        cell ← open.pop_min(h)",
    "        if cell is wall or visited: continue",
    "        visited.add(cell);  record(cell)",
    "        if cell == end: return path",
    "        for nbr in up, right, down, left:",
    "            if nbr visited or wall: continue",
    "            if h[nbr] not yet set:",
    "                h[nbr] ← manhattan(nbr, end)",
    "                parent[nbr] ← cell;  open.push(nbr)",
    "    return NOT FOUND",
]


def greedy_bfs(grid: Grid, start: Pos, end: Pos) -> SearchResult:
    pad = ScratchPad("greedy-bfs")
    stamp = count()

    pad.heuristic[start] = manhattan(start, end)
    open_set = [(pad.heuristic[start], next(stamp), start)]

    while open_set:
        _, _, cell = heapq.heappop(open_set)

        if grid.is_wall(cell) or pad.is_visited(cell):
            continue

        pad.mark(cell)
        pad.record(cell)

        if cell == end:
            return pad.finish(end)

        for nbr in grid.neighbours(cell):
            if pad.is_visited(nbr) or grid.is_wall(nbr):
                continue

            # first sighting only
            if nbr not in pad.heuristic:
                pad.heuristic[nbr] = manhattan(nbr, end)
                pad.link(nbr, cell)
                heapq.heappush(open_set, (pad.heuristic[nbr], next(stamp), nbr))

    return pad.fail()
