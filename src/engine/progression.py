"""
FlagQuest - Progression Ledger

Cross-session player progression: XP, level, coins, login streak and the
achievement counters. The reducer is applied exactly once per finished
session; level is always derived from XP.

All methods are stateless class methods operating on immutable data.
"""

from dataclasses import dataclass, field, replace
from datetime import date
from typing import ClassVar

from src.engine.base import GameMode


@dataclass(frozen=True)
class Ledger:
    """
    Persistent player progression.

    Attributes:
        xp: Experience points (may be fractional after an odd score)
        coins: Spendable stars
        total_coins: Lifetime stars earned; never decreases
        streak: Consecutive daily logins
        last_login: Date of the last recorded login
        best_survival_streak: Best survival run, in correct answers
        daily_challenges_completed: Finished daily challenges
        unlocked_avatars: Purchased role ids
    """
    xp: float = 0
    coins: int = 100
    total_coins: int = 100
    streak: int = 0
    last_login: date | None = None
    best_survival_streak: int = 0
    daily_challenges_completed: int = 0
    unlocked_avatars: frozenset[str] = field(default_factory=lambda: frozenset({"role-1"}))

    @property
    def level(self) -> int:
        """Level derived from XP."""
        return ProgressionLedger.level_for_xp(self.xp)


class ProgressionLedger:
    """Stateless reducers over the Ledger."""

    XP_PER_LEVEL: ClassVar[int] = 500
    POINTS_PER_COIN: ClassVar[int] = 10
    POINTS_PER_SURVIVAL_STEP: ClassVar[int] = 100

    @classmethod
    def level_for_xp(cls, xp: float) -> int:
        """floor(xp / 500) + 1."""
        return int(xp // cls.XP_PER_LEVEL) + 1

    @classmethod
    def xp_for_level(cls, level: int) -> int:
        """XP at which `level` is completed; feeds the level progress bar."""
        return level * cls.XP_PER_LEVEL

    @classmethod
    def xp_gained(cls, score: int) -> float:
        """Half the score, kept integral when it divides evenly."""
        return score // 2 if score % 2 == 0 else score / 2

    @classmethod
    def coins_gained(cls, score: int) -> int:
        return score // cls.POINTS_PER_COIN

    @classmethod
    def apply_session_result(cls, ledger: Ledger, mode: GameMode, final_score: int) -> Ledger:
        """Fold a finished session into the ledger.

        A zero score leaves the ledger untouched.

        Args:
            ledger: Ledger before the session
            mode: Mode the session was played in
            final_score: Session score

        Returns:
            Updated ledger
        """
        if final_score <= 0:
            return ledger

        coins = cls.coins_gained(final_score)
        best_survival = ledger.best_survival_streak
        if mode == GameMode.SURVIVAL:
            best_survival = max(best_survival, final_score // cls.POINTS_PER_SURVIVAL_STEP)

        dailies = ledger.daily_challenges_completed
        if mode == GameMode.DAILY:
            dailies += 1

        return replace(
            ledger,
            xp=ledger.xp + cls.xp_gained(final_score),
            coins=ledger.coins + coins,
            total_coins=ledger.total_coins + coins,
            best_survival_streak=best_survival,
            daily_challenges_completed=dailies,
        )

    @classmethod
    def register_login(cls, ledger: Ledger, today: date | None = None) -> Ledger:
        """Update the login streak once per process start.

        A one-day gap extends the streak; a longer gap restarts it at 1.
        Same-day logins change nothing. The first launch only records the
        date, leaving the streak at 0.
        """
        today = today or date.today()
        if ledger.last_login == today:
            return ledger

        if ledger.last_login is None:
            return replace(ledger, last_login=today)

        gap = abs((today - ledger.last_login).days)
        streak = ledger.streak + 1 if gap == 1 else 1

        return replace(ledger, streak=streak, last_login=today)
