"""
recorder.py — Run Recorder & Analytics
========================================
Runs a search to completion on a grid and computes the numbers the
Analytics panel and Comparison Mode show.

Usage:
    result, metrics = record_run(grid, algorithm="astar")

Comparison Mode:
    Both algorithms are run on the SAME grid, then
    compare(left_metrics, right_metrics) → ComparisonResult.
"""

import logging
import time
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Optional, Tuple

from grid import Grid, Pos
from algorithms import get_algorithm, search
from algorithms.result import SearchResult


logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Metrics dataclass — what the Analytics panel renders
# ---------------------------------------------------------------------------
@dataclass
class RunMetrics:
    algo_key:        str   = ""
    algo_label:      str   = ""
    visited_count:   int   = 0          # entries in the visit order (repeats included)
    unique_visited:  int   = 0          # distinct cells visited
    path_length:     int   = 0          # number of steps on the final path
    success:         bool  = False
    wall_time_ms:    float = 0.0        # wall-clock time of the search itself

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


# ---------------------------------------------------------------------------
# ComparisonResult — side-by-side analytics
# ---------------------------------------------------------------------------
@dataclass
class ComparisonResult:
    left:  RunMetrics = field(default_factory=RunMetrics)
    right: RunMetrics = field(default_factory=RunMetrics)
    # derived
    winner_visited: str = ""   # which algo visited fewer cells
    winner_path:    str = ""   # which algo found the shorter path

    def to_dict(self) -> Dict[str, Any]:
        return {
            "left":           self.left.to_dict(),
            "right":          self.right.to_dict(),
            "winner_visited": self.winner_visited,
            "winner_path":    self.winner_path,
        }


# ---------------------------------------------------------------------------
# Recording
# ---------------------------------------------------------------------------
def metrics_for(result: SearchResult, wall_ms: float = 0.0) -> RunMetrics:
    """Build RunMetrics from an already computed SearchResult."""
    info = get_algorithm(result.algorithm)
    return RunMetrics(
        algo_key=info.key if info else result.algorithm,
        algo_label=info.label if info else (result.algorithm or "Unknown"),
        visited_count=result.visited_count,
        unique_visited=len(set(result.visited_in_order)),
        path_length=result.path_length,
        success=result.success,
        wall_time_ms=round(wall_ms, 2),
    )


def record_run(
    grid: Grid,
    start: Optional[Pos] = None,
    end: Optional[Pos] = None,
    algorithm: str = "bfs",
) -> Tuple[SearchResult, RunMetrics]:
    """Run one search, timing it, and return (result, metrics)."""
    t0 = time.monotonic()
    result = search(grid, start, end, algorithm)
    wall_ms = (time.monotonic() - t0) * 1000
    return result, metrics_for(result, wall_ms)


# ---------------------------------------------------------------------------
# Comparison helper
# ---------------------------------------------------------------------------
def compare(left: RunMetrics, right: RunMetrics) -> ComparisonResult:
    """Given two runs' metrics, produce a ComparisonResult."""

    def winner(l_val, r_val, l_key, r_key):
        if l_val == r_val:
            return "tie"
        return l_key if l_val < r_val else r_key

    # a run that found nothing never wins on path length
    if left.success and right.success:
        winner_path = winner(left.path_length, right.path_length, left.algo_label, right.algo_label)
    elif left.success:
        winner_path = left.algo_label
    elif right.success:
        winner_path = right.algo_label
    else:
        winner_path = "tie"

    result = ComparisonResult(
        left=left,
        right=right,
        winner_visited=winner(left.visited_count, right.visited_count, left.algo_label, right.algo_label),
        winner_path=winner_path,
    )
    logger.debug(
        "compare %s vs %s: visited=%s path=%s",
        left.algo_key, right.algo_key, result.winner_visited, result.winner_path,
    )
    return result
