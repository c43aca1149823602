"""
FlagQuest - Achievement Evaluator

Achievement tiers are derived from the ledger on demand and never stored.
There are four families, each a fixed ordered ladder of targets.
"""

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar

from src.engine.progression import Ledger


class AchievementFamily(Enum):
    """Achievement ladders."""
    LOGIN_STREAK = "daily"
    CURRENCY = "stars"
    SURVIVAL = "survival"
    DAILY_CHALLENGE = "challenges"


@dataclass(frozen=True)
class AchievementTier:
    """
    One milestone within an achievement family.

    Attributes:
        id: Stable identifier, e.g. "survival-45"
        family: Ladder the tier belongs to
        target: Value needed to complete the tier
        current: Player's current value for the family
    """
    id: str
    family: AchievementFamily
    target: int
    current: int

    @property
    def completed(self) -> bool:
        return self.current >= self.target


class AchievementEvaluator:
    """Stateless evaluator for achievement tiers."""

    LOGIN_TARGETS: ClassVar[int] = 30
    CURRENCY_STEP: ClassVar[int] = 50
    CURRENCY_CAP: ClassVar[int] = 100_000
    SURVIVAL_STEP: ClassVar[int] = 15
    SURVIVAL_TIERS: ClassVar[int] = 10
    DAILY_TARGETS: ClassVar[int] = 20

    @classmethod
    def login_streak(cls, ledger: Ledger) -> tuple[AchievementTier, ...]:
        """Targets 1..30 consecutive login days."""
        return tuple(
            AchievementTier(f"daily-{n}", AchievementFamily.LOGIN_STREAK, n, ledger.streak)
            for n in range(1, cls.LOGIN_TARGETS + 1)
        )

    @classmethod
    def currency_next(cls, ledger: Ledger, count: int = 20) -> tuple[AchievementTier, ...]:
        """Upcoming star milestones above the last reached multiple of 50."""
        base = ledger.total_coins // cls.CURRENCY_STEP
        tiers = []
        for i in range(1, count + 1):
            target = (base + i) * cls.CURRENCY_STEP
            if target > cls.CURRENCY_CAP:
                break
            tiers.append(
                AchievementTier(f"stars-{target}", AchievementFamily.CURRENCY, target, ledger.total_coins)
            )
        return tuple(tiers)

    @classmethod
    def currency_completed(cls, ledger: Ledger, count: int = 5) -> tuple[AchievementTier, ...]:
        """Most recently reached star milestones, newest first."""
        base = min(ledger.total_coins, cls.CURRENCY_CAP) // cls.CURRENCY_STEP
        tiers = []
        for i in range(count):
            target = (base - i) * cls.CURRENCY_STEP
            if target <= 0:
                break
            tiers.append(
                AchievementTier(f"stars-{target}", AchievementFamily.CURRENCY, target, ledger.total_coins)
            )
        return tuple(tiers)

    @classmethod
    def survival(cls, ledger: Ledger) -> tuple[AchievementTier, ...]:
        """Targets 15, 30, ... 150 correct answers in one survival run."""
        return tuple(
            AchievementTier(
                f"survival-{target}",
                AchievementFamily.SURVIVAL,
                target,
                ledger.best_survival_streak,
            )
            for target in range(cls.SURVIVAL_STEP, cls.SURVIVAL_STEP * cls.SURVIVAL_TIERS + 1, cls.SURVIVAL_STEP)
        )

    @classmethod
    def daily_challenges(cls, ledger: Ledger) -> tuple[AchievementTier, ...]:
        """Targets 1..20 completed daily challenges."""
        return tuple(
            AchievementTier(
                f"challenge-{n}",
                AchievementFamily.DAILY_CHALLENGE,
                n,
                ledger.daily_challenges_completed,
            )
            for n in range(1, cls.DAILY_TARGETS + 1)
        )

    @classmethod
    def summary(cls, ledger: Ledger) -> dict[AchievementFamily, tuple[int, int]]:
        """(completed, total) per family over the full ladders."""
        currency_total = cls.CURRENCY_CAP // cls.CURRENCY_STEP
        currency_done = min(ledger.total_coins, cls.CURRENCY_CAP) // cls.CURRENCY_STEP

        def done(tiers: tuple[AchievementTier, ...]) -> tuple[int, int]:
            return sum(t.completed for t in tiers), len(tiers)

        return {
            AchievementFamily.LOGIN_STREAK: done(cls.login_streak(ledger)),
            AchievementFamily.CURRENCY: (currency_done, currency_total),
            AchievementFamily.SURVIVAL: done(cls.survival(ledger)),
            AchievementFamily.DAILY_CHALLENGE: done(cls.daily_challenges(ledger)),
        }
