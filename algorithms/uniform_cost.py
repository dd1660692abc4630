"""
uniform_cost.py — Uniform-Cost Search
======================================
Dijkstra-style expansion by distance from start.  With every step
costing 1 it explores in the same rings as BFS, but it finalises cells
on POP rather than on push, which is what makes it correct once costs
stop being uniform.

Same frontier discipline as A* (see astar.py): (g, counter, cell) heap
entries, improvements re-pushed, stale entries skipped on pop.
"""

import heapq
from itertools import count
from typing import List

from grid import Grid, Pos
from algorithms.result import ScratchPad, SearchResult


PSEUDOCODE: List[str] = [
    "def UniformCost(grid, start, end):",
    "    dist ← {cell: ∞};  dist[start] ← 0",
    "    open ← [start]",
    "    while open:",
    "        cell ← open.pop_min(dist)",
    "        if cell is wall or visited: continue",
    "        visited.add(cell);  record(cell)",
    "        if cell == end: return path",
    "        for nbr in up, right, down, left:",
    "            if nbr visited or wall: continue",
    "            if dist[cell] + 1 < dist[nbr]:",
    "                dist[nbr] ← dist[cell] + 1",
    "                parent[nbr] ← cell;  open.push(nbr)",
    "    return NOT FOUND",
]


def uniform_cost(grid: Grid, start: Pos, end: Pos) -> SearchResult:
    pad = ScratchPad("uniform-cost")
    stamp = count()

    pad.distance[start] = 0
    open_set = [(0, next(stamp), start)]

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

            tentative = pad.dist(cell) + 1
            if tentative < pad.dist(nbr):
                pad.distance[nbr] = tentative
                pad.link(nbr, cell)
                heapq.heappush(open_set, (tentative, next(stamp), nbr))

    return pad.fail()
