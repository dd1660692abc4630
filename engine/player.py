"""
player.py — Timed Playback of a Search Result
==============================================
The Player turns a SearchResult into a paced animation and is the ONLY
object the UI talks to while one is on screen.

A run is compiled up front into one ordered list of Frames, each with
the instant (ms after the run began) it is due:

    phase 1  visited reveal   frame i at  i · delay
                              (+ a preview of the next few cells)
    ----     frontier clear   at          n · delay
    phase 2  path reveal      frame j at  n · delay + PATH_GAP_MS + j · delay · 3
    phase 3  completion       at          path_start + len(path) · delay · 3 + SETTLE_MS

where delay = BASE_DELAY_MS / speed.

State machine:
    IDLE / COMPLETED / STOPPED  →  start()   →  RUNNING
    RUNNING  →  pause()   →  PAUSED
    PAUSED   →  resume()  →  RUNNING
    RUNNING  →  (last frame + settle) → COMPLETED
    RUNNING / PAUSED  →  stop()  →  STOPPED

Driving:
  Nothing here sleeps or spawns threads.  The host calls tick() from its
  event loop (the Flask app ticks on every poll) and every frame whose
  time has come is handed to on_frame in order.  Cancelling is just
  dropping the frame list, so no stale callback can fire after pause()
  or stop() returns.

Calls made in the wrong state (resume() while idle, pause() twice, …)
are no-ops that return False.
"""

import logging
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, List, Optional, Tuple

from grid import CellKind, CellUpdate
from algorithms.result import SearchResult


logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Timing constants (milliseconds)
# ---------------------------------------------------------------------------
BASE_DELAY_MS    = 500     # per-step delay at speed 1
PATH_GAP_MS      = 50      # frontier clear → first path frame
PATH_SLOWDOWN    = 3       # path frames are this many times slower
SETTLE_MS        = 100     # last path frame → COMPLETED
FRONTIER_PREVIEW = 8       # upcoming visited cells shown as frontier
MIN_SPEED        = 1
MAX_SPEED        = 10


# ---------------------------------------------------------------------------
# States & phases
# ---------------------------------------------------------------------------
class PlayerState(Enum):
    IDLE      = "idle"
    RUNNING   = "running"
    PAUSED    = "paused"
    COMPLETED = "completed"
    STOPPED   = "stopped"


class Phase(Enum):
    VISITED        = "visited"
    FRONTIER_CLEAR = "frontier-clear"
    PATH           = "path"


@dataclass(frozen=True)
class Frame:
    """
    One scheduled grid mutation.

    Attributes:
        at             : Due time in ms after the run started.
        phase          : Which phase produced it.
        index          : Position within its phase.
        updates        : Cell updates to apply, in order.
        clear_frontier : Wipe every FRONTIER cell before applying updates.
    """

    at:             float
    phase:          Phase
    index:          int
    updates:        Tuple[CellUpdate, ...] = ()
    clear_frontier: bool                   = False


@dataclass(frozen=True)
class Schedule:
    frames:        List[Frame] = field(default_factory=list)
    delay:         float       = 0.0     # per-step delay of the visited phase
    path_start:    float       = 0.0     # due time of the first path frame
    completes_at:  float       = 0.0     # due time of COMPLETED


def clamp_speed(speed) -> int:
    return max(MIN_SPEED, min(MAX_SPEED, int(speed)))


def step_delay(speed) -> float:
    """Per-step delay in ms for a speed in [1, 10]."""
    return BASE_DELAY_MS / clamp_speed(speed)


def build_schedule(result: SearchResult, speed, preview: int = FRONTIER_PREVIEW) -> Schedule:
    """Compile a SearchResult into the full ordered frame list."""
    delay   = step_delay(speed)
    visited = result.visited_in_order
    n       = len(visited)
    frames: List[Frame] = []

    # -- phase 1: visited reveal with rolling frontier preview --
    for i, (r, c) in enumerate(visited):
        updates = [CellUpdate(r, c, CellKind.VISITED)]
        for nr, nc in visited[i + 1: i + 1 + preview]:
            updates.append(CellUpdate(nr, nc, CellKind.FRONTIER))
        frames.append(Frame(i * delay, Phase.VISITED, i, tuple(updates), clear_frontier=True))

    frames.append(Frame(n * delay, Phase.FRONTIER_CLEAR, 0, (), clear_frontier=True))

    # -- phase 2: path reveal, three times slower --
    path_start = n * delay + PATH_GAP_MS
    slow = delay * PATH_SLOWDOWN
    for j, (r, c) in enumerate(result.path):
        frames.append(Frame(path_start + j * slow, Phase.PATH, j, (CellUpdate(r, c, CellKind.PATH),)))

    completes_at = path_start + len(result.path) * slow + SETTLE_MS
    return Schedule(frames=frames, delay=delay, path_start=path_start, completes_at=completes_at)


# ---------------------------------------------------------------------------
# Player
# ---------------------------------------------------------------------------
class Player:
    """
    Attributes:
        state    : Current PlayerState.
        speed    : Speed of the current / last run (1-10).
        schedule : Compiled Schedule of the current run (None when idle).
        cursor   : Index of the next frame to fire.

    Callbacks (all optional):
        on_frame(frame)                        – apply a Frame to the grid
        on_start()                             – a run began
        on_end()                               – a run reached COMPLETED
        on_pause_change(is_paused, can_pause)  – pause controls changed
    """

    def __init__(
        self,
        on_frame:        Optional[Callable[[Frame], None]] = None,
        on_start:        Optional[Callable[[], None]] = None,
        on_end:          Optional[Callable[[], None]] = None,
        on_pause_change: Optional[Callable[[bool, bool], None]] = None,
        clock:           Callable[[], float] = time.monotonic,
    ):
        self.on_frame        = on_frame
        self.on_start        = on_start
        self.on_end          = on_end
        self.on_pause_change = on_pause_change
        self._clock          = clock

        self.state:    PlayerState        = PlayerState.IDLE
        self.speed:    int                = 5
        self.schedule: Optional[Schedule] = None
        self.cursor:   int                = 0

        self._origin:    float = 0.0     # clock() reading when the run (re)started
        self._base_ms:   float = 0.0     # schedule time at _origin
        self._paused_ms: float = 0.0     # schedule time at which we paused

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def start(self, result: SearchResult, speed=5) -> bool:
        """Begin a new run from frame 0.  Ignored while a run is live."""
        if self.state in (PlayerState.RUNNING, PlayerState.PAUSED):
            return False

        self.speed    = clamp_speed(speed)
        self.schedule = build_schedule(result, self.speed)
        self.cursor   = 0
        self._origin  = self._clock()
        self._base_ms = 0.0
        self.state    = PlayerState.RUNNING

        logger.debug(
            "start %s: %d frames over %.0f ms at speed %d",
            result.algorithm, len(self.schedule.frames), self.schedule.completes_at, self.speed,
        )
        if self.on_start:
            self.on_start()
        self._notify_pause()
        return True

    def pause(self) -> bool:
        if self.state != PlayerState.RUNNING:
            return False
        self._paused_ms = self.elapsed_ms
        self.state = PlayerState.PAUSED
        self._notify_pause()
        return True

    def resume(self) -> bool:
        """
        Continue from the frame after the last one shown.  The next
        frame fires immediately and the rest keep their spacing, so the
        paused time is cut out of the schedule.
        """
        if self.state != PlayerState.PAUSED:
            return False
        frames = self.schedule.frames
        anchor = frames[self.cursor].at if self.cursor < len(frames) else self._paused_ms
        self._origin  = self._clock()
        self._base_ms = anchor
        self.state = PlayerState.RUNNING
        self._notify_pause()
        return True

    def toggle_pause(self) -> bool:
        if self.state == PlayerState.PAUSED:
            return self.resume()
        return self.pause()

    def stop(self) -> bool:
        """Drop every pending frame.  The grid keeps whatever is on it."""
        if self.state not in (PlayerState.RUNNING, PlayerState.PAUSED):
            return False
        self.schedule = None
        self.cursor   = 0
        self.state    = PlayerState.STOPPED
        self._notify_pause()
        return True

    # ------------------------------------------------------------------
    # Tick  (call this from your event loop / poll handler)
    # ------------------------------------------------------------------
    def tick(self) -> int:
        """Fire every frame that is due.  Returns how many fired."""
        if self.state != PlayerState.RUNNING:
            return 0

        now    = self.elapsed_ms
        frames = self.schedule.frames
        fired  = 0
        while self.cursor < len(frames) and frames[self.cursor].at <= now:
            frame = frames[self.cursor]
            self.cursor += 1
            fired += 1
            if self.on_frame:
                self.on_frame(frame)
            # a callback may have paused or stopped us
            if self.state != PlayerState.RUNNING:
                return fired

        if self.cursor >= len(frames) and now >= self.schedule.completes_at:
            self._complete()
        return fired

    def finish(self) -> int:
        """Fire everything that is left and complete immediately."""
        if self.state not in (PlayerState.RUNNING, PlayerState.PAUSED):
            return 0
        self.state = PlayerState.RUNNING
        frames = self.schedule.frames
        fired = len(frames) - self.cursor
        while self.cursor < len(frames):
            frame = frames[self.cursor]
            self.cursor += 1
            if self.on_frame:
                self.on_frame(frame)
        self._complete()
        return fired

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------
    @property
    def elapsed_ms(self) -> float:
        """Schedule time now (frozen while paused)."""
        if self.state == PlayerState.PAUSED:
            return self._paused_ms
        return self._base_ms + (self._clock() - self._origin) * 1000.0

    @property
    def is_running(self) -> bool:
        return self.state == PlayerState.RUNNING

    @property
    def is_paused(self) -> bool:
        return self.state == PlayerState.PAUSED

    @property
    def is_active(self) -> bool:
        return self.state in (PlayerState.RUNNING, PlayerState.PAUSED)

    @property
    def can_pause(self) -> bool:
        return self.is_active

    @property
    def frames_fired(self) -> int:
        return self.cursor

    @property
    def total_frames(self) -> int:
        return len(self.schedule.frames) if self.schedule else 0

    @property
    def progress(self) -> float:
        """0.0 → 1.0 through the current schedule."""
        if self.state == PlayerState.COMPLETED:
            return 1.0
        total = self.total_frames
        return self.cursor / total if total else 0.0

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _complete(self) -> None:
        self.state = PlayerState.COMPLETED
        logger.debug("playback completed after %d frames", self.cursor)
        self._notify_pause()
        if self.on_end:
            self.on_end()

    def _notify_pause(self) -> None:
        if self.on_pause_change:
            self.on_pause_change(self.is_paused, self.can_pause)
