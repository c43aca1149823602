"""
FlagQuest - Game Engine Base Classes

This module defines the foundational data structures and enums used throughout
the game engine. All classes are immutable (frozen dataclasses) so that every
state transition produces a new value instead of mutating a shared one.
"""

from dataclasses import dataclass
from enum import Enum, auto


class Continent(Enum):
    """Continents used to group the country catalog."""
    EUROPE = "Europe"
    ASIA = "Asia"
    AFRICA = "Africa"
    AMERICAS = "Americas"
    OCEANIA = "Oceania"


class GameMode(Enum):
    """Available game modes."""
    ADVENTURE = "adventure"
    TIMED = "timed"
    SURVIVAL = "survival"
    DAILY = "daily"
    MULTIPLAYER = "multiplayer"


class Feedback(Enum):
    """Answer feedback shown for the current round."""
    NONE = "none"
    CORRECT = "correct"
    WRONG = "wrong"


class PowerupKind(Enum):
    """Session-scoped assists."""
    FIFTY_FIFTY = "fiftyFifty"
    SKIP = "skip"
    HINT = "hint"


class Player(Enum):
    """Seat in a pass-and-play duel."""
    P1 = "p1"
    P2 = "p2"

    @property
    def other(self) -> "Player":
        return Player.P2 if self is Player.P1 else Player.P1


class TransitionKind(Enum):
    """Delayed transitions requested by the round engine."""
    SHOW_FACT = auto()
    ADVANCE = auto()
    END_SESSION = auto()


@dataclass(frozen=True)
class Country:
    """
    A single catalog entry.

    Attributes:
        id: Short country code (not guaranteed unique across the catalog)
        name: Display name
        continent: Continent the country belongs to
        fact: Trivia shown after a correct answer
        difficulty: Ordinal difficulty, 1 (easy) to 3 (hard)
    """
    id: str
    name: str
    continent: Continent
    fact: str
    difficulty: int = 1

    def __post_init__(self) -> None:
        """Validate difficulty is within range."""
        if not (1 <= self.difficulty <= 3):
            raise ValueError(
                f"Invalid difficulty {self.difficulty} for {self.id}. "
                f"Must be between 1 and 3."
            )


@dataclass(frozen=True)
class Powerups:
    """
    Remaining powerup counters for a session.

    Counters only go down during a session; a new session starts from the
    configured defaults.
    """
    fifty_fifty: int = 2
    skip: int = 1
    hint: int = 2

    def count(self, kind: PowerupKind) -> int:
        """Remaining units of a powerup."""
        return {
            PowerupKind.FIFTY_FIFTY: self.fifty_fifty,
            PowerupKind.SKIP: self.skip,
            PowerupKind.HINT: self.hint,
        }[kind]

    def consume(self, kind: PowerupKind) -> "Powerups":
        """Return a copy with one unit of `kind` removed (floored at 0)."""
        if kind == PowerupKind.FIFTY_FIFTY:
            return Powerups(max(0, self.fifty_fifty - 1), self.skip, self.hint)
        if kind == PowerupKind.SKIP:
            return Powerups(self.fifty_fifty, max(0, self.skip - 1), self.hint)
        return Powerups(self.fifty_fifty, self.skip, max(0, self.hint - 1))

    def to_dict(self) -> dict[str, int]:
        """Convert to the presentation dictionary format."""
        return {
            PowerupKind.FIFTY_FIFTY.value: self.fifty_fifty,
            PowerupKind.SKIP.value: self.skip,
            PowerupKind.HINT.value: self.hint,
        }


@dataclass(frozen=True)
class ScheduledTransition:
    """
    A delayed state change requested by the round engine.

    Attributes:
        kind: What to do when the delay elapses
        delay: Seconds to wait before firing
        session_id: Session the transition belongs to
        question_index: Round the transition belongs to
    """
    kind: TransitionKind
    delay: float
    session_id: str
    question_index: int


@dataclass(frozen=True)
class SessionRules:
    """
    Tunable rules for a game session.

    Attributes:
        question_count: Questions drawn for adventure/timed/multiplayer
        daily_question_count: Questions in the daily challenge
        survival_question_count: Questions drawn for survival (None = whole pool)
        starting_lives: Lives outside survival mode
        survival_lives: Lives in survival mode
        timed_seconds: Clock length for timed mode
        correct_points: Base points for a correct answer
        feedback_delay: Seconds between a wrong answer and the next step
        fact_delay: Seconds between a correct answer and the fact display
        powerups: Starting powerup counters
    """
    question_count: int = 10
    daily_question_count: int = 5
    survival_question_count: int | None = None
    starting_lives: int = 3
    survival_lives: int = 1
    timed_seconds: int = 60
    correct_points: int = 100
    feedback_delay: float = 1.0
    fact_delay: float = 0.5
    powerups: Powerups = Powerups()

    def __post_init__(self) -> None:
        """Validate rules."""
        if self.question_count < 1 or self.daily_question_count < 1:
            raise ValueError("Question counts must be at least 1.")
        if self.survival_question_count is not None and self.survival_question_count < 1:
            raise ValueError("Survival question count must be at least 1.")
        if self.starting_lives < 1 or self.survival_lives < 1:
            raise ValueError("Lives must be at least 1.")
        if self.timed_seconds < 1:
            raise ValueError("Timed mode needs at least 1 second.")
        if self.feedback_delay < 0 or self.fact_delay < 0:
            raise ValueError("Delays cannot be negative.")

    def lives_for(self, mode: GameMode) -> int:
        """Starting lives for a mode."""
        if mode == GameMode.SURVIVAL:
            return self.survival_lives
        return self.starting_lives
