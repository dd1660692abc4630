"""
dfs.py — Depth-First Search
=============================
Explicit LIFO stack (no Python recursion limit issues).

Neighbours are pushed in REVERSE of the fixed up/right/down/left order
so that they come back off the stack in that order: the search always
tries "up" first, then "right", and so on.

Cells are marked visited when pushed, so a cell is never on the stack
twice and its predecessor is fixed by whoever discovered it first.
Does NOT guarantee a shortest path.
"""

from typing import List

from grid import Grid, Pos
from algorithms.result import ScratchPad, SearchResult


PSEUDOCODE: List[str] = [
    "def DFS(grid, start, end):",
    "    stack ← [start];  visited ← {start}",
    "    while stack is not empty:",
    "        cell ← stack.pop()",
    "        if cell is wall: continue",
    "        record(cell)",
    "        if cell == end: return path",
    "        for nbr in left, down, right, up:",
    "            if nbr not visited and not wall:",
    "                visited.add(nbr);  parent[nbr] ← cell",
    "                stack.push(nbr)",
    "    return NOT FOUND",
]


def dfs(grid: Grid, start: Pos, end: Pos) -> SearchResult:
    pad = ScratchPad("dfs")
    stack = [start]
    pad.mark(start)

    while stack:
        cell = stack.pop()

        if grid.is_wall(cell):
            continue

        pad.record(cell)

        if cell == end:
            return pad.finish(end)

        for nbr in reversed(grid.neighbours(cell)):
            if pad.is_visited(nbr) or grid.is_wall(nbr):
                continue
            pad.mark(nbr)
            pad.link(nbr, cell)
            stack.append(nbr)

    return pad.fail()
