"""
FlagQuest - Test Configuration and Fixtures

Common fixtures and test data for all test modules.
"""

import random
from datetime import date

import pytest

from src.config.settings import Settings
from src.database.player import PlayerRecordRepository
from src.database.store import InMemoryStore
from src.engine.base import Continent, Country, GameMode, SessionRules
from src.engine.progression import Ledger
from src.engine.round_engine import RoundEngine, SessionState


# =============================================================================
# CATALOG TEST DATA
# =============================================================================

@pytest.fixture
def small_catalog() -> tuple[Country, ...]:
    """
    Eight-row catalog: two rows per continent for Europe/Asia/Africa/Americas.
    """
    return (
        Country("es", "Spain", Continent.EUROPE, "Spain fact.", 1),
        Country("fr", "France", Continent.EUROPE, "France fact.", 1),
        Country("jp", "Japan", Continent.ASIA, "Japan fact.", 1),
        Country("in", "India", Continent.ASIA, "India fact.", 1),
        Country("eg", "Egypt", Continent.AFRICA, "Egypt fact.", 1),
        Country("ke", "Kenya", Continent.AFRICA, "Kenya fact.", 2),
        Country("br", "Brazil", Continent.AMERICAS, "Brazil fact.", 1),
        Country("pe", "Peru", Continent.AMERICAS, "Peru fact.", 1),
    )


@pytest.fixture
def rng() -> random.Random:
    """Seeded random source for reproducible draws."""
    return random.Random(1234)


@pytest.fixture
def rules() -> SessionRules:
    """Default session rules with a short question sequence."""
    return SessionRules(question_count=5)


# =============================================================================
# SESSION FACTORIES
# =============================================================================

@pytest.fixture
def start(small_catalog, rules, rng):
    """Factory starting a session on the small catalog."""

    def _start(mode: GameMode = GameMode.ADVENTURE, **kwargs) -> SessionState:
        kwargs.setdefault("rules", rules)
        kwargs.setdefault("catalog", small_catalog)
        kwargs.setdefault("rng", rng)
        kwargs.setdefault("session_id", "session-1")
        kwargs.setdefault("today", date(2026, 10, 19))
        return RoundEngine.start_session(mode, **kwargs)

    return _start


@pytest.fixture
def wrong_option():
    """Helper returning any incorrect, selectable option id of a session."""

    def _wrong(state: SessionState) -> str:
        correct = state.current_question.id
        return next(
            c.id for c in state.options
            if c.id != correct and c.id not in state.disabled
        )

    return _wrong


# =============================================================================
# LEDGER / PERSISTENCE FIXTURES
# =============================================================================

@pytest.fixture
def fresh_ledger() -> Ledger:
    """Initial player ledger."""
    return Ledger()


@pytest.fixture
def settings() -> Settings:
    """Settings with the in-memory backend and a short question sequence."""
    return Settings(storage_backend="memory", question_count=5, _env_file=None)


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def repository(store) -> PlayerRecordRepository:
    return PlayerRecordRepository(store, "flagquest_user")
