"""
FlagQuest Game Engine.

Pure Python game logic with zero UI/database dependencies.
Handles question sampling, the daily challenge, the round state machine,
progression and achievements.
"""

from src.engine.achievements import AchievementEvaluator, AchievementFamily, AchievementTier
from src.engine.base import (
    Continent,
    Country,
    Feedback,
    GameMode,
    Player,
    PowerupKind,
    Powerups,
    ScheduledTransition,
    SessionRules,
    TransitionKind,
)
from src.engine.catalog import COUNTRIES
from src.engine.daily import DailyChallengeGenerator
from src.engine.progression import Ledger, ProgressionLedger
from src.engine.round_engine import RoundEngine, SessionState
from src.engine.sampler import QuestionSampler

__all__ = [
    # Data Classes
    "AchievementTier",
    "Country",
    "Ledger",
    "Powerups",
    "ScheduledTransition",
    "SessionRules",
    "SessionState",
    # Enums
    "AchievementFamily",
    "Continent",
    "Feedback",
    "GameMode",
    "Player",
    "PowerupKind",
    "TransitionKind",
    # Data
    "COUNTRIES",
    # Engines
    "AchievementEvaluator",
    "DailyChallengeGenerator",
    "ProgressionLedger",
    "QuestionSampler",
    "RoundEngine",
]
