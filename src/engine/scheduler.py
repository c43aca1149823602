"""
FlagQuest - Transition Scheduler and Session Clock

Replaces fire-and-forget timeouts with an explicit, cancellable queue keyed
by session identity. Both classes are driven by the host loop calling
update(dt); nothing runs on a background thread.

Usage:
    scheduler = TransitionScheduler()
    scheduler.schedule(transition)

    # each frame:
    for due in scheduler.update(dt):
        state = RoundEngine.fire(state, due)
"""

import heapq
import itertools
import logging

from src.engine.base import ScheduledTransition

logger = logging.getLogger(__name__)


class TransitionScheduler:
    """Delayed transitions ordered by due time, cancellable per session.

    Attributes:
        _now:     Seconds elapsed since the scheduler was created.
        _queue:   Heap of (due, sequence, transition).
        _counter: Tie-breaker keeping insertion order for equal due times.
    """

    def __init__(self) -> None:
        self._now: float = 0.0
        self._queue: list[tuple[float, int, ScheduledTransition]] = []
        self._counter = itertools.count()

    @property
    def now(self) -> float:
        return self._now

    def __len__(self) -> int:
        return len(self._queue)

    def schedule(self, transition: ScheduledTransition) -> None:
        """Register a transition to fire `transition.delay` seconds from now."""
        due = self._now + max(0.0, transition.delay)
        heapq.heappush(self._queue, (due, next(self._counter), transition))
        logger.debug(
            "Scheduled %s for session %s at %.2fs",
            transition.kind.name, transition.session_id, due,
        )

    def cancel_session(self, session_id: str) -> int:
        """Drop every pending transition of a session.

        Returns:
            Number of transitions cancelled.
        """
        kept = [entry for entry in self._queue if entry[2].session_id != session_id]
        cancelled = len(self._queue) - len(kept)
        if cancelled:
            heapq.heapify(kept)
            self._queue = kept
            logger.debug("Cancelled %d transitions for session %s", cancelled, session_id)
        return cancelled

    def clear(self) -> None:
        self._queue.clear()

    def update(self, dt: float) -> list[ScheduledTransition]:
        """Advance the clock by dt seconds and pop everything now due.

        Returns:
            Due transitions, earliest first.
        """
        if dt > 0:
            self._now += dt
        due: list[ScheduledTransition] = []
        while self._queue and self._queue[0][0] <= self._now:
            due.append(heapq.heappop(self._queue)[2])
        return due


class SessionClock:
    """Converts frame deltas into whole-second ticks for the timed mode.

    Attributes:
        _carry:   Fractional seconds not yet converted into a tick.
        _running: True while ticks are being produced.
    """

    def __init__(self) -> None:
        self._carry: float = 0.0
        self._running: bool = False

    @property
    def running(self) -> bool:
        return self._running

    def start(self) -> None:
        """Start (or restart) counting from zero."""
        self._carry = 0.0
        self._running = True

    def stop(self) -> None:
        self._running = False
        self._carry = 0.0

    def update(self, dt: float) -> int:
        """Add dt seconds and return how many whole seconds elapsed.

        No-op (returns 0) while stopped.
        """
        if not self._running or dt <= 0:
            return 0
        self._carry += dt
        ticks = int(self._carry)
        self._carry -= ticks
        return ticks
