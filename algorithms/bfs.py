"""
bfs.py — Breadth-First Search
==============================
FIFO queue, cells marked visited when ENQUEUED so each cell enters the
queue at most once.  On a uniform-cost grid the first time the goal is
dequeued its predecessor chain is a shortest path.

Walls never enter the queue; the pop-side wall check is kept so a
walled-in start behaves like any other dead end.
"""

from collections import deque
from typing import List

from grid import Grid, Pos
from algorithms.result import ScratchPad, SearchResult


# ---------------------------------------------------------------------------
# Pseudocode — shown in the algorithm info panel
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def BFS(grid, start, end):",
    "    queue ← [start];  visited ← {start}",
    "    while queue is not empty:",
    "        cell ← queue.dequeue()",
    "        if cell is wall: continue",
    "        record(cell)",
    "        if cell == end: return path",
    "        for nbr in up, right, down, left:",
    "            if nbr not visited and not wall:",
    "                visited.add(nbr);  parent[nbr] ← cell",
    "                queue.enqueue(nbr)",
    "    return NOT FOUND",
]


def bfs(grid: Grid, start: Pos, end: Pos) -> SearchResult:
    pad = ScratchPad("bfs")
    queue = deque([start])
    pad.mark(start)
    pad.distance[start] = 0

    while queue:
        cell = queue.popleft()

        if grid.is_wall(cell):
            continue

        pad.record(cell)

        if cell == end:
            return pad.finish(end)

        for nbr in grid.neighbours(cell):
            if pad.is_visited(nbr) or grid.is_wall(nbr):
                continue
            pad.mark(nbr)
            pad.link(nbr, cell)
            pad.distance[nbr] = pad.distance[cell] + 1
            queue.append(nbr)

    return pad.fail()
