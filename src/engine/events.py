"""
FlagQuest - Engine Event Definitions

Event types and payloads emitted to the presentation layer, plus helpers
that classify a session transition into the event it represents.
"""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any

from src.engine.base import Feedback
from src.engine.round_engine import SessionState


class GameEvent(Enum):
    """Events that can occur during play."""

    SESSION_STARTED = auto()
    ANSWER_CORRECT = auto()
    ANSWER_WRONG = auto()
    POWERUP_USED = auto()
    FACT_SHOWN = auto()
    QUESTION_ADVANCED = auto()
    SESSION_ENDED = auto()
    LEDGER_UPDATED = auto()


@dataclass
class EventPayload:
    """Wrapper for engine event data."""

    event: GameEvent
    session_id: str | None = None
    data: dict[str, Any] = field(default_factory=dict)


def classify_transition(old: SessionState, new: SessionState) -> list[GameEvent]:
    """Events implied by moving from `old` to `new`, in emission order."""
    if new is old or new.session_id != old.session_id:
        return []

    events: list[GameEvent] = []
    if old.feedback == Feedback.NONE and new.feedback == Feedback.CORRECT:
        events.append(GameEvent.ANSWER_CORRECT)
    elif old.feedback == Feedback.NONE and new.feedback == Feedback.WRONG:
        events.append(GameEvent.ANSWER_WRONG)

    if new.powerups != old.powerups:
        events.append(GameEvent.POWERUP_USED)
    if new.fact is not None and old.fact is None:
        events.append(GameEvent.FACT_SHOWN)
    if new.current_index != old.current_index:
        events.append(GameEvent.QUESTION_ADVANCED)
    if new.ended and not old.ended:
        events.append(GameEvent.SESSION_ENDED)
    return events
