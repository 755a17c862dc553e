"""
Tests for the stopwatch session state machine.
"""
import time

from lapwatch.core.scheduler import ThreadScheduler
from lapwatch.services.stopwatch import StopwatchSession, StopwatchState


def test_new_session_is_idle(session):
    assert session.state is StopwatchState.IDLE
    assert session.get_elapsed() == 0
    assert session.get_laps() == ()
    assert session.get_best_worst().best is None


def test_toggle_starts_and_elapsed_follows_clock(session, scheduler):
    assert session.toggle_start_pause() is StopwatchState.RUNNING
    assert len(scheduler.active_handles) == 1
    assert scheduler.active_handles[0].interval_ms == 10

    scheduler.advance(250)
    assert session.elapsed_ms == 250


def test_toggle_pauses_and_cancels_timer(session, scheduler):
    session.toggle_start_pause()
    scheduler.advance(100)
    assert session.toggle_start_pause() is StopwatchState.PAUSED
    assert scheduler.active_handles == []

    scheduler.advance(500)
    assert session.elapsed_ms == 100


def test_pause_then_resume_counts_only_running_time(session, scheduler, clock):
    session.toggle_start_pause()
    scheduler.advance(1000)
    assert session.elapsed_ms == 1000

    session.toggle_start_pause()
    clock.advance(500)

    session.toggle_start_pause()
    scheduler.advance(500)
    assert session.elapsed_ms == 1500


def test_start_while_running_does_not_add_a_timer(session, scheduler):
    session.start()
    session.start()
    assert len(scheduler.active_handles) == 1


def test_rapid_toggling_leaves_at_most_one_timer(session, scheduler):
    for _ in range(7):
        session.toggle_start_pause()
        assert len(scheduler.active_handles) <= 1
    assert session.state is StopwatchState.RUNNING
    assert len(scheduler.active_handles) == 1


def test_elapsed_is_recomputed_from_clock_not_tick_count(session, scheduler, clock):
    session.start()
    clock.advance(1000)
    scheduler.fire()
    assert session.elapsed_ms == 1000


def test_elapsed_never_decreases_when_clock_steps_back(session, scheduler, clock):
    session.start()
    scheduler.advance(300)
    clock.advance(-200)
    scheduler.fire()
    assert session.elapsed_ms == 300


def test_tick_after_pause_is_ignored(session, scheduler, clock):
    session.start()
    scheduler.advance(50)
    stale = scheduler.active_handles[0]
    session.pause()

    clock.advance(1000)
    stale.callback()
    assert session.elapsed_ms == 50


def test_tick_after_reset_is_ignored(session, scheduler, clock):
    session.start()
    scheduler.advance(50)
    stale = scheduler.active_handles[0]
    session.reset()

    clock.advance(1000)
    stale.callback()
    assert session.elapsed_ms == 0


def test_pause_when_not_running_is_noop(session):
    session.pause()
    assert session.state is StopwatchState.IDLE


def test_lap_ignored_when_idle(session):
    assert session.record_lap() is None
    assert session.get_laps() == ()


def test_lap_ignored_when_running_at_zero(session):
    session.start()
    assert session.record_lap() is None
    assert session.get_laps() == ()


def test_lap_ignored_when_paused(session, scheduler):
    session.start()
    scheduler.advance(100)
    session.pause()
    assert session.record_lap() is None
    assert session.get_laps() == ()


def test_laps_are_sequential_and_newest_first(session, scheduler, clock):
    session.start()
    scheduler.advance(500)
    first = session.record_lap()
    scheduler.advance(700)
    session.record_lap()
    scheduler.advance(300)
    session.record_lap()

    laps = session.get_laps()
    assert [lap.id for lap in laps] == [3, 2, 1]
    assert [lap.duration_ms for lap in laps] == [1500, 1200, 500]
    assert laps[-1] is first


def test_lap_recorded_at_uses_wall_clock(session, scheduler, clock):
    session.start()
    scheduler.advance(20)
    lap = session.record_lap()
    assert lap.recorded_at == clock.wall_now()


def test_reset_clears_everything_and_restarts_lap_ids(session, scheduler):
    session.start()
    scheduler.advance(200)
    session.record_lap()
    session.record_lap()

    session.reset()
    assert session.state is StopwatchState.IDLE
    assert session.get_elapsed() == 0
    assert session.get_laps() == ()
    assert scheduler.active_handles == []

    session.toggle_start_pause()
    scheduler.advance(30)
    assert session.record_lap().id == 1


def test_best_worst_through_session(session, scheduler):
    session.start()
    for ms in (400, 100, 900):
        scheduler.advance(ms)
        session.record_lap()

    stats = session.get_best_worst()
    assert stats.best.duration_ms == 400
    assert stats.worst.duration_ms == 1400


def test_snapshot_is_consistent(session, scheduler):
    session.start()
    scheduler.advance(120)
    session.record_lap()

    snap = session.snapshot()
    assert snap.state is StopwatchState.RUNNING
    assert snap.elapsed_ms == 120
    assert snap.laps == session.get_laps()
    assert snap.best_worst.best is snap.laps[0]


def test_shutdown_cancels_timer_but_keeps_state(session, scheduler):
    session.start()
    session.shutdown()
    assert scheduler.active_handles == []
    assert session.state is StopwatchState.RUNNING


def test_session_with_thread_scheduler_advances_in_real_time():
    session = StopwatchSession(scheduler=ThreadScheduler(), sample_interval_ms=5)
    session.start()
    try:
        deadline = time.monotonic() + 2.0
        while session.get_elapsed() < 30 and time.monotonic() < deadline:
            time.sleep(0.01)
        assert session.get_elapsed() >= 30
        assert session.record_lap().id == 1
    finally:
        session.pause()
    frozen = session.get_elapsed()
    time.sleep(0.05)
    assert session.get_elapsed() == frozen


def test_best_worst_queried_between_laps(session, scheduler):
    session.start()
    scheduler.advance(500)
    session.record_lap()
    stats = session.get_best_worst()
    assert (stats.best.duration_ms, stats.worst.duration_ms) == (500, 500)

    scheduler.advance(700)
    session.record_lap()
    stats = session.get_best_worst()
    assert (stats.best.duration_ms, stats.worst.duration_ms) == (500, 1200)

    scheduler.advance(300)
    session.record_lap()
    stats = session.get_best_worst()
    assert (stats.best.duration_ms, stats.worst.duration_ms) == (500, 1500)
    assert session.get_best_worst() == stats
