import pytest

from grid import CellKind, Grid
from algorithms import search
from algorithms.result import SearchResult
from engine import (
    BASE_DELAY_MS,
    PATH_GAP_MS,
    SETTLE_MS,
    Phase,
    Player,
    PlayerState,
    build_schedule,
    step_delay,
)


def tiny_result():
    return SearchResult(
        visited_in_order=[(0, 0), (0, 1), (0, 2)],
        path=[(0, 0), (0, 1), (0, 2)],
        success=True,
        algorithm="bfs",
    )


def make_player(grid, clock, **callbacks):
    return Player(on_frame=grid.apply_frame, clock=clock, **callbacks)


class TestSchedule:
    def test_delay_scales_with_speed(self):
        assert step_delay(1) == BASE_DELAY_MS
        assert step_delay(10) == BASE_DELAY_MS / 10
        assert step_delay(0) == step_delay(1)        # clamped
        assert step_delay(42) == step_delay(10)

    def test_frame_times(self):
        sched = build_schedule(tiny_result(), speed=1)
        times = [f.at for f in sched.frames]
        path_start = 3 * 500 + PATH_GAP_MS
        assert times == [0, 500, 1000, 1500, path_start, path_start + 1500, path_start + 3000]
        assert sched.completes_at == path_start + 3 * 1500 + SETTLE_MS

    def test_phases_in_order(self):
        phases = [f.phase for f in build_schedule(tiny_result(), speed=5).frames]
        assert phases == [Phase.VISITED] * 3 + [Phase.FRONTIER_CLEAR] + [Phase.PATH] * 3

    def test_frontier_preview(self):
        result = SearchResult(visited_in_order=[(0, c) for c in range(12)], algorithm="bfs")
        first = build_schedule(result, speed=1).frames[0]
        kinds = [u.kind for u in first.updates]
        assert kinds[0] is CellKind.VISITED
        assert kinds[1:] == [CellKind.FRONTIER] * 8
        assert [(u.row, u.col) for u in first.updates[1:]] == [(0, c) for c in range(1, 9)]
        assert first.clear_frontier

    def test_failed_result_has_no_path_frames(self):
        result = SearchResult(visited_in_order=[(0, 0), (0, 1)], path=[], success=False)
        sched = build_schedule(result, speed=1)
        assert [f.phase for f in sched.frames] == [Phase.VISITED, Phase.VISITED, Phase.FRONTIER_CLEAR]
        assert sched.completes_at == 2 * 500 + PATH_GAP_MS + SETTLE_MS


class TestLifecycle:
    def test_start_runs_first_frame_on_tick(self, clock):
        g = Grid(3, 5, start=(0, 0), end=(0, 2))
        p = make_player(g, clock)
        assert p.state is PlayerState.IDLE
        assert p.start(tiny_result(), speed=1)
        assert p.is_running and p.can_pause and not p.is_paused
        assert p.frames_fired == 0
        assert p.tick() == 1
        # (0, 0) is the start cell so only the preview shows
        assert g.kind((0, 1)) is CellKind.FRONTIER

    def test_runs_to_completion(self, clock):
        g = Grid(3, 5, start=(0, 0), end=(0, 2))
        ended = []
        p = make_player(g, clock, on_end=lambda: ended.append(True))
        p.start(tiny_result(), speed=1)
        clock.advance(60)
        p.tick()
        assert p.state is PlayerState.COMPLETED
        assert p.progress == 1.0
        assert ended == [True]
        assert g.kind((0, 1)) is CellKind.PATH
        assert g.count(CellKind.FRONTIER) == 0
        assert g.kind((0, 0)) is CellKind.START
        assert g.kind((0, 2)) is CellKind.END

    def test_waits_for_settle_before_completing(self, clock):
        g = Grid(3, 5, start=(0, 0), end=(0, 2))
        p = make_player(g, clock)
        p.start(tiny_result(), speed=1)
        sched = p.schedule
        clock.advance((sched.frames[-1].at + 1) / 1000)
        p.tick()
        assert p.frames_fired == p.total_frames
        assert p.is_running
        clock.advance((sched.completes_at - sched.frames[-1].at) / 1000)
        p.tick()
        assert p.state is PlayerState.COMPLETED

    def test_start_while_running_is_ignored(self, clock):
        g = Grid(3, 5, start=(0, 0), end=(0, 2))
        p = make_player(g, clock)
        p.start(tiny_result(), speed=1)
        assert p.start(tiny_result(), speed=10) is False
        assert p.speed == 1

    def test_restart_after_completion(self, clock):
        g = Grid(3, 5, start=(0, 0), end=(0, 2))
        p = make_player(g, clock)
        p.start(tiny_result(), speed=10)
        clock.advance(60)
        p.tick()
        assert p.start(tiny_result(), speed=10)
        assert p.is_running

    def test_finish_flushes_everything(self, clock):
        g = Grid(3, 5, start=(0, 0), end=(0, 2))
        p = make_player(g, clock)
        p.start(tiny_result(), speed=1)
        p.finish()
        assert p.state is PlayerState.COMPLETED
        assert g.kind((0, 1)) is CellKind.PATH


class TestInvalidStates:
    def test_noops_while_idle(self, clock):
        p = Player(clock=clock)
        assert p.pause() is False
        assert p.resume() is False
        assert p.stop() is False
        assert p.tick() == 0
        assert p.state is PlayerState.IDLE

    def test_double_pause(self, clock):
        p = Player(clock=clock)
        p.start(tiny_result())
        assert p.pause()
        assert p.pause() is False
        assert p.is_paused

    def test_toggle_pause(self, clock):
        p = Player(clock=clock)
        assert p.toggle_pause() is False
        p.start(tiny_result())
        assert p.toggle_pause()
        assert p.is_paused
        assert p.toggle_pause()
        assert p.is_running

    def test_resume_while_running(self, clock):
        p = Player(clock=clock)
        p.start(tiny_result())
        assert p.resume() is False
        assert p.is_running

    def test_no_frames_after_stop(self, clock):
        fired = []
        p = Player(on_frame=fired.append, clock=clock)
        p.start(tiny_result(), speed=1)
        p.tick()
        p.stop()
        clock.advance(100)
        assert p.tick() == 0
        assert len(fired) == 1
        assert p.state is PlayerState.STOPPED


class TestSignals:
    def test_pause_change_sequence(self, clock):
        events = []
        p = Player(clock=clock, on_pause_change=lambda a, b: events.append((a, b)))
        p.start(tiny_result())
        p.pause()
        p.resume()
        p.stop()
        assert events == [(False, True), (True, True), (False, True), (False, False)]

    def test_completion_disables_pause(self, clock):
        events = []
        p = Player(clock=clock, on_pause_change=lambda a, b: events.append((a, b)))
        p.start(tiny_result())
        clock.advance(60)
        p.tick()
        assert events[-1] == (False, False)

    def test_start_and_stop_signals(self, clock):
        log = []
        p = Player(clock=clock, on_start=lambda: log.append("start"), on_end=lambda: log.append("end"))
        p.start(tiny_result())
        p.stop()
        # stop is not completion
        assert log == ["start"]


class TestStopAndPause:
    def _result(self):
        g = Grid(8, 8, start=(0, 0), end=(7, 7))
        return g, search(g, algorithm="bfs")

    @pytest.mark.parametrize("k", [1, 3, 10, 25])
    def test_stop_after_k_frames(self, clock, k):
        g, result = self._result()
        p = make_player(g, clock)
        p.start(result, speed=1)

        # halfway between frame k-1 and frame k
        clock.advance(((k - 1) * 500 + 250) / 1000)
        p.tick()
        assert p.frames_fired == k
        p.stop()

        clock.advance(1000)
        assert p.tick() == 0
        expected = {pos for pos in result.visited_in_order[:k] if pos not in (g.start, g.end)}
        assert set(g.positions(CellKind.VISITED)) == expected
        assert g.count(CellKind.PATH) == 0

    def test_resume_fires_next_frame_immediately(self, clock):
        g, result = self._result()
        p = make_player(g, clock)
        p.start(result, speed=1)

        clock.advance(1.25)          # frames 0, 1, 2 are due
        p.tick()
        assert p.frames_fired == 3
        p.pause()

        clock.advance(10)
        assert p.tick() == 0
        assert p.frames_fired == 3

        p.resume()
        assert p.tick() == 1         # frame 3, no waiting
        clock.advance(0.25)
        assert p.tick() == 0
        clock.advance(0.25)
        assert p.tick() == 1         # spacing unchanged

    def test_pause_during_path_phase(self, clock):
        # speed 1: path frames at 1550, 3050, 4550 ms; completes at 6150 ms
        g = Grid(3, 5, start=(0, 0), end=(0, 2))
        fired = []
        p = Player(on_frame=lambda f: (fired.append(f.phase), g.apply_frame(f)), clock=clock)
        p.start(tiny_result(), speed=1)

        clock.advance(1.75)
        p.tick()
        assert fired == [Phase.VISITED] * 3 + [Phase.FRONTIER_CLEAR, Phase.PATH]
        p.pause()
        clock.advance(10)
        assert p.tick() == 0

        p.resume()
        assert p.tick() == 1                 # path frame 1 at once
        assert p.elapsed_ms == pytest.approx(3050)
        clock.advance(1.25)
        assert p.tick() == 0
        clock.advance(0.5)
        assert p.tick() == 1                 # path frame 2, 1500 ms later
        assert p.frames_fired == p.total_frames

        clock.advance(1.25)
        p.tick()
        assert p.is_running                  # 6050 ms, still settling
        clock.advance(0.25)
        p.tick()
        assert p.state is PlayerState.COMPLETED
        assert g.kind((0, 1)) is CellKind.PATH

    def test_pause_during_settle_keeps_remaining_settle(self, clock):
        g = Grid(3, 5, start=(0, 0), end=(0, 2))
        ended = []
        p = make_player(g, clock, on_end=lambda: ended.append(True))
        p.start(tiny_result(), speed=1)

        clock.advance(5)                     # after the last path frame, before 6150 ms
        p.tick()
        assert p.frames_fired == p.total_frames
        p.pause()
        clock.advance(30)
        p.tick()
        assert p.is_paused and ended == []

        p.resume()
        assert p.elapsed_ms == pytest.approx(5000)
        clock.advance(1)
        p.tick()
        assert p.is_running
        clock.advance(0.25)
        p.tick()
        assert p.state is PlayerState.COMPLETED
        assert ended == [True]

    def test_pause_resume_matches_uninterrupted_run(self, clock):
        g1, result = self._result()
        fired1 = []
        p1 = Player(on_frame=lambda f: (fired1.append(f), g1.apply_frame(f)), clock=clock)
        p1.start(result, speed=2)
        clock.advance(1000)
        p1.tick()
        assert p1.state is PlayerState.COMPLETED

        g2 = Grid(8, 8, start=(0, 0), end=(7, 7))
        fired2 = []
        p2 = Player(on_frame=lambda f: (fired2.append(f), g2.apply_frame(f)), clock=clock)
        p2.start(result, speed=2)
        for _ in range(5):
            clock.advance(0.75)
            p2.tick()
            p2.pause()
            clock.advance(3)
            p2.tick()
            p2.resume()
        clock.advance(1000)
        p2.tick()

        assert p2.state is PlayerState.COMPLETED
        assert fired2 == fired1
        assert g2.to_ascii() == g1.to_ascii()
