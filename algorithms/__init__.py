"""
algorithms/__init__.py — Algorithm Registry
=============================================
Single source of truth for every algorithm the visualizer knows about.

    from algorithms import REGISTRY, get_algorithm, search

REGISTRY is a dict:
    {
        "bfs": AlgoInfo(key, label, fn, pseudocode, tags, optimal, …),
        …
    }

Every `fn` has the same signature:  fn(grid, start, end) -> SearchResult.
Adding an algorithm is literally: write the function, add one entry here.
"""

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional

from grid import Grid, Pos

# ---------------------------------------------------------------------------
# Import all algorithm modules
# ---------------------------------------------------------------------------
from algorithms.result             import SearchResult, ScratchPad, INF
from algorithms.bfs                import bfs                 as _bfs,    PSEUDOCODE as _bfs_pc
from algorithms.dfs                import dfs                 as _dfs,    PSEUDOCODE as _dfs_pc
from algorithms.uniform_cost       import uniform_cost        as _ucs,    PSEUDOCODE as _ucs_pc
from algorithms.iterative_deepening import iterative_deepening as _iddfs, PSEUDOCODE as _iddfs_pc
from algorithms.greedy_bfs         import greedy_bfs          as _gbfs,   PSEUDOCODE as _gbfs_pc
from algorithms.astar              import astar               as _astar,  PSEUDOCODE as _ast_pc
from algorithms.astar              import manhattan


logger = logging.getLogger(__name__)

DEFAULT_ALGORITHM = "bfs"


# ---------------------------------------------------------------------------
# AlgoInfo — metadata card for each algorithm
# ---------------------------------------------------------------------------
@dataclass
class AlgoInfo:
    key:              str                              # registry key, e.g. "bfs"
    label:            str                              # human label, e.g. "Breadth-First Search"
    fn:               Callable[[Grid, Pos, Pos], SearchResult]
    pseudocode:       List[str]                        # lines for the info panel
    tags:             List[str] = field(default_factory=list)
    optimal:          bool      = False                # guarantees a shortest path?
    uses_heuristic:   bool      = False                # A* / Greedy
    complexity_time:  str       = ""
    complexity_space: str       = ""
    description:      str       = ""                   # one-liner for the UI card
    pros:             List[str] = field(default_factory=list)
    cons:             List[str] = field(default_factory=list)


# ---------------------------------------------------------------------------
# THE REGISTRY  (insertion order = dropdown order)
# ---------------------------------------------------------------------------
REGISTRY: Dict[str, AlgoInfo] = {

    "bfs": AlgoInfo(
        key="bfs", label="Breadth-First Search", fn=_bfs, pseudocode=_bfs_pc,
        tags=["uninformed", "shortest-path"], optimal=True,
        complexity_time="O(V + E)", complexity_space="O(V)",
        description="Explores level by level from the start.",
        pros=["Guarantees shortest path (unweighted)", "Explores nodes level by level"],
        cons=["Uses more memory (queue)"],
    ),

    "dfs": AlgoInfo(
        key="dfs", label="Depth-First Search", fn=_dfs, pseudocode=_dfs_pc,
        tags=["uninformed"],
        complexity_time="O(V + E)", complexity_space="O(V)",
        description="Dives as deep as possible before backtracking.",
        pros=["Uses less memory (stack)", "Good for maze generation"],
        cons=["Does NOT guarantee shortest path"],
    ),

    "uniform-cost": AlgoInfo(
        key="uniform-cost", label="Uniform Cost Search", fn=_ucs, pseudocode=_ucs_pc,
        tags=["uninformed", "shortest-path"], optimal=True,
        complexity_time="O((V + E) log V)", complexity_space="O(V)",
        description="Always expands the cheapest frontier cell (Dijkstra).",
        pros=["Guarantees shortest path (weighted)", "Considers edge costs"],
        cons=["Slower than A* with a good heuristic"],
    ),

    "iterative-deepening": AlgoInfo(
        key="iterative-deepening", label="Iterative Deepening DFS", fn=_iddfs, pseudocode=_iddfs_pc,
        tags=["uninformed", "shortest-path"], optimal=True,
        complexity_time="O(b^d)", complexity_space="O(d)",
        description="Depth-limited DFS repeated with a growing limit.",
        pros=["Memory efficient like DFS", "Complete like BFS"],
        cons=["Revisits nodes multiple times"],
    ),

    "greedy-bfs": AlgoInfo(
        key="greedy-bfs", label="Greedy Best-First Search", fn=_gbfs, pseudocode=_gbfs_pc,
        tags=["informed", "heuristic"], uses_heuristic=True,
        complexity_time="O((V + E) log V)", complexity_space="O(V)",
        description="Chases the goal by Manhattan distance alone.",
        pros=["Fast (uses heuristic)", "Often finds a path quickly"],
        cons=["Does NOT guarantee shortest path"],
    ),

    "astar": AlgoInfo(
        key="astar", label="A* Search", fn=_astar, pseudocode=_ast_pc,
        tags=["informed", "heuristic", "shortest-path"], optimal=True, uses_heuristic=True,
        complexity_time="O((V + E) log V)", complexity_space="O(V)",
        description="Uniform cost guided by the Manhattan heuristic.",
        pros=["Guarantees shortest path", "Very efficient (combines UCS + heuristic)",
              "Industry standard for pathfinding"],
    ),
}


# ---------------------------------------------------------------------------
# Lookup helpers
# ---------------------------------------------------------------------------
def get_algorithm(key: str) -> Optional[AlgoInfo]:
    """Return AlgoInfo by key, or None."""
    return REGISTRY.get(key)


def resolve_algorithm(key: Optional[str]) -> AlgoInfo:
    """Return AlgoInfo by key, falling back to BFS for unknown keys."""
    info = REGISTRY.get(key) if key else None
    if info is None:
        logger.warning("unknown algorithm %r, falling back to %s", key, DEFAULT_ALGORITHM)
        info = REGISTRY[DEFAULT_ALGORITHM]
    return info


def list_algorithms() -> List[AlgoInfo]:
    """Return all registered algorithms in insertion order."""
    return list(REGISTRY.values())


def algorithms_by_tag(tag: str) -> List[AlgoInfo]:
    """Filter registry by tag."""
    return [a for a in REGISTRY.values() if tag in a.tags]


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------
def search(
    grid: Grid,
    start: Optional[Pos] = None,
    end: Optional[Pos] = None,
    algorithm: str = DEFAULT_ALGORITHM,
) -> SearchResult:
    """
    Run one search to completion and return its SearchResult.

    Args:
        grid      : Board to search.  Only read; walls block traversal.
        start     : Start position (defaults to grid.start).
        end       : Goal position (defaults to grid.end).
        algorithm : Registry key.  Unknown keys run BFS.

    Each call owns fresh scratch state, so repeated runs on an
    unmodified grid give identical results.
    """
    start = tuple(start) if start is not None else grid.start
    end   = tuple(end)   if end   is not None else grid.end
    info  = resolve_algorithm(algorithm)

    result = info.fn(grid, start, end)
    logger.debug(
        "%s %s -> %s: visited=%d success=%s path=%d",
        info.key, start, end, result.visited_count, result.success, len(result.path),
    )
    return result


__all__ = [
    "AlgoInfo",
    "REGISTRY",
    "DEFAULT_ALGORITHM",
    "SearchResult",
    "ScratchPad",
    "INF",
    "manhattan",
    "get_algorithm",
    "resolve_algorithm",
    "list_algorithms",
    "algorithms_by_tag",
    "search",
]
