"""
FlagQuest - Scheduler and Clock Tests
"""

from src.engine.base import ScheduledTransition, TransitionKind
from src.engine.scheduler import SessionClock, TransitionScheduler


def transition(kind=TransitionKind.ADVANCE, delay=1.0, session_id="s1", index=0):
    return ScheduledTransition(kind, delay, session_id, index)


class TestTransitionScheduler:
    """Tests for TransitionScheduler."""

    def test_not_due_before_delay(self):
        scheduler = TransitionScheduler()
        scheduler.schedule(transition(delay=1.0))
        assert scheduler.update(0.5) == []
        assert len(scheduler) == 1

    def test_due_after_delay(self):
        scheduler = TransitionScheduler()
        t = transition(delay=1.0)
        scheduler.schedule(t)
        scheduler.update(0.5)
        assert scheduler.update(0.5) == [t]
        assert len(scheduler) == 0

    def test_due_order(self):
        scheduler = TransitionScheduler()
        late = transition(TransitionKind.END_SESSION, delay=1.0)
        early = transition(TransitionKind.SHOW_FACT, delay=0.5)
        scheduler.schedule(late)
        scheduler.schedule(early)
        assert scheduler.update(2.0) == [early, late]

    def test_equal_due_keeps_insertion_order(self):
        scheduler = TransitionScheduler()
        a = transition(session_id="a")
        b = transition(session_id="b")
        scheduler.schedule(a)
        scheduler.schedule(b)
        assert scheduler.update(1.0) == [a, b]

    def test_cancel_session(self):
        scheduler = TransitionScheduler()
        keep = transition(session_id="keep")
        scheduler.schedule(transition(session_id="drop"))
        scheduler.schedule(transition(session_id="drop", delay=0.5))
        scheduler.schedule(keep)
        assert scheduler.cancel_session("drop") == 2
        assert scheduler.update(5.0) == [keep]

    def test_cancel_unknown_session(self):
        scheduler = TransitionScheduler()
        assert scheduler.cancel_session("nothing") == 0

    def test_delay_measured_from_schedule_time(self):
        scheduler = TransitionScheduler()
        scheduler.update(10.0)
        t = transition(delay=1.0)
        scheduler.schedule(t)
        assert scheduler.update(0.5) == []
        assert scheduler.update(0.5) == [t]

    def test_clear(self):
        scheduler = TransitionScheduler()
        scheduler.schedule(transition())
        scheduler.clear()
        assert scheduler.update(5.0) == []


class TestSessionClock:
    """Tests for SessionClock."""

    def test_stopped_by_default(self):
        clock = SessionClock()
        assert not clock.running
        assert clock.update(5.0) == 0

    def test_whole_seconds(self):
        clock = SessionClock()
        clock.start()
        assert clock.update(2.5) == 2
        assert clock.update(0.5) == 1
        assert clock.update(0.25) == 0

    def test_restart_clears_carry(self):
        clock = SessionClock()
        clock.start()
        clock.update(0.75)
        clock.start()
        assert clock.update(0.5) == 0

    def test_stop(self):
        clock = SessionClock()
        clock.start()
        clock.stop()
        assert clock.update(3.0) == 0
