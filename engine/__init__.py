"""
engine/
-------
Playback & recording layer.

    from engine import Player, record_run, compare
"""

from engine.player   import (
    Player, PlayerState, Frame, Phase, Schedule,
    build_schedule, step_delay, clamp_speed,
    BASE_DELAY_MS, PATH_GAP_MS, PATH_SLOWDOWN, SETTLE_MS, FRONTIER_PREVIEW,
    MIN_SPEED, MAX_SPEED,
)
from engine.recorder import RunMetrics, ComparisonResult, record_run, metrics_for, compare

__all__ = [
    "Player",
    "PlayerState",
    "Frame",
    "Phase",
    "Schedule",
    "build_schedule",
    "step_delay",
    "clamp_speed",
    "BASE_DELAY_MS",
    "PATH_GAP_MS",
    "PATH_SLOWDOWN",
    "SETTLE_MS",
    "FRONTIER_PREVIEW",
    "MIN_SPEED",
    "MAX_SPEED",
    "RunMetrics",
    "ComparisonResult",
    "record_run",
    "metrics_for",
    "compare",
]
