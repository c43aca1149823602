"""
FlagQuest - Database Models

Pydantic model for the persisted player record. Loading is forgiving: any
field that fails validation falls back to its default on its own, so one
bad value never discards the rest of the record.
"""

import logging
from datetime import date
from typing import Any

from pydantic import (
    BaseModel,
    Field,
    ValidationError,
    ValidationInfo,
    ValidatorFunctionWrapHandler,
    computed_field,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel

from src.engine.progression import Ledger, ProgressionLedger

logger = logging.getLogger(__name__)


class _Forgiving(BaseModel):
    """Base model whose fields default individually on invalid input."""

    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
        "extra": "ignore",
    }

    @field_validator("*", mode="wrap")
    @classmethod
    def _default_on_error(
        cls,
        value: Any,
        handler: ValidatorFunctionWrapHandler,
        info: ValidationInfo,
    ) -> Any:
        try:
            return handler(value)
        except ValidationError:
            logger.debug("Invalid %s.%s=%r, using default", cls.__name__, info.field_name, value)
            return cls.model_fields[info.field_name].get_default(call_default_factory=True)


class Avatar(_Forgiving):
    """Cosmetic selection: a free character plus a purchased role."""

    base: str = "char-1"
    accessory: str = "role-1"


class PlayerRecord(_Forgiving):
    """Mirrors the serialized player object stored under the storage key."""

    xp: float = Field(default=0, ge=0)
    coins: int = Field(default=100, ge=0)
    total_coins: int = Field(default=100, ge=0)
    streak: int = Field(default=0, ge=0)
    last_login: date | None = None
    unlocked_continents: list[str] = Field(default_factory=lambda: ["Europe"])
    achievements: list[str] = Field(default_factory=list)
    unlocked_avatars: list[str] = Field(default_factory=lambda: ["role-1"])
    username: str = "Explorer"
    is_dark_mode: bool = False
    best_survival_streak: int = Field(default=0, ge=0)
    daily_challenges_completed: int = Field(default=0, ge=0)
    avatar: Avatar = Field(default_factory=Avatar)

    @field_validator("last_login", mode="before")
    @classmethod
    def _date_part(cls, value: Any) -> Any:
        # Older records store a full ISO timestamp.
        if isinstance(value, str) and "T" in value:
            return value.split("T", 1)[0]
        return value

    @model_validator(mode="after")
    def _lifetime_covers_balance(self) -> "PlayerRecord":
        if self.total_coins < self.coins:
            self.total_coins = self.coins
        return self

    @computed_field
    @property
    def level(self) -> int:
        return ProgressionLedger.level_for_xp(self.xp)

    def to_ledger(self) -> Ledger:
        """Engine view of the progression fields."""
        return Ledger(
            xp=self.xp,
            coins=self.coins,
            total_coins=self.total_coins,
            streak=self.streak,
            last_login=self.last_login,
            best_survival_streak=self.best_survival_streak,
            daily_challenges_completed=self.daily_challenges_completed,
            unlocked_avatars=frozenset(self.unlocked_avatars),
        )

    def with_ledger(self, ledger: Ledger) -> "PlayerRecord":
        """Copy of this record with the progression fields replaced."""
        return self.model_copy(update={
            "xp": ledger.xp,
            "coins": ledger.coins,
            "total_coins": ledger.total_coins,
            "streak": ledger.streak,
            "last_login": ledger.last_login,
            "best_survival_streak": ledger.best_survival_streak,
            "daily_challenges_completed": ledger.daily_challenges_completed,
            "unlocked_avatars": sorted(ledger.unlocked_avatars),
        })
