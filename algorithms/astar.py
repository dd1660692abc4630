"""
astar.py — A* Search
=====================
Expands the frontier cell with the smallest f = g + h, where
  g = steps taken from start (every step costs 1)
  h = Manhattan distance |Δrow| + |Δcol| to the goal

Manhattan distance never overestimates on a 4-connected grid, so the
first time the goal is popped its path is shortest.

Frontier discipline (shared with uniform_cost / greedy_bfs):
  - heapq entries are (priority, counter, cell); the counter is a fresh
    stamp per push, so ties go to whichever entry was pushed earliest.
    Tie order can differ from re-sorting the live frontier by current
    keys once a queued cell improves; costs and path lengths do not.
  - an improved cell is simply pushed again; the older, worse entry is
    skipped when it surfaces because the cell is visited by then.
"""

import heapq
from itertools import count
from typing import List

from grid import Grid, Pos
from algorithms.result import ScratchPad, SearchResult


def manhattan(a: Pos, b: Pos) -> int:
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


PSEUDOCODE: List[str] = [
    "def AStar(grid, start, end):",
    "    g[start] ← 0;  h[start] ← manhattan(start, end)",
    "    open ← [start]",
    "    while open:",
    "        cell ← open.pop_min(g + h)",
    "        if cell is wall or visited: continue",
    "        visited.add(cell);  record(cell)",
    "        if cell == end: return path",
    "        for nbr in up, right, down, left:",
    "            if nbr visited or wall: continue",
    "            if g[cell] + 1 < g[nbr]:",
    "                g[nbr] ← g[cell] + 1",
    "                h[nbr] ← manhattan(nbr, end)",
    "                parent[nbr] ← cell;  open.push(nbr)",
    "    return NOT FOUND",
]


def astar(grid: Grid, start: Pos, end: Pos) -> SearchResult:
    pad = ScratchPad("astar")
    stamp = count()

    pad.distance[start]  = 0
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

            tentative = pad.dist(cell) + 1
            if tentative < pad.dist(nbr):
                pad.distance[nbr]  = tentative
                pad.heuristic[nbr] = manhattan(nbr, end)
                pad.link(nbr, cell)
                heapq.heappush(open_set, (tentative + pad.heuristic[nbr], next(stamp), nbr))

    return pad.fail()
