"""
FlagQuest - Game Controller

Coordinates the pure round engine with the scheduler, the session clock and
the player record repository. This is the only object the presentation
layer talks to: it issues commands, renders snapshot(), and listens for
EventPayloads.

Usage:
    controller = GameController.from_settings()
    controller.subscribe(on_event)
    controller.start_session(GameMode.TIMED)

    # each frame:
    controller.update(dt)
"""

from __future__ import annotations

import logging
import random
from datetime import date
from typing import Any, Callable

from src.config.settings import Settings, get_settings
from src.database.models import PlayerRecord
from src.database.player import PlayerRecordRepository
from src.database.store import build_store
from src.engine.achievements import AchievementEvaluator, AchievementTier
from src.engine.base import Continent, GameMode, PowerupKind
from src.engine.cosmetics import (
    CHARACTERS,
    PurchaseStatus,
    is_continent_unlocked,
    purchase_role,
)
from src.engine.events import EventPayload, GameEvent, classify_transition
from src.engine.progression import Ledger, ProgressionLedger
from src.engine.round_engine import RoundEngine, SessionState
from src.engine.scheduler import SessionClock, TransitionScheduler

logger = logging.getLogger(__name__)


class GameController:
    """Owns one live session plus the persisted player record.

    Every command runs to completion before the next one is processed.
    Commands against a missing or finished session are no-ops.
    """

    def __init__(
        self,
        repository: PlayerRecordRepository,
        settings: Settings | None = None,
        *,
        rng: random.Random | None = None,
        today: date | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.rules = self.settings.session_rules()
        self.repository = repository
        self._rng = rng
        self._scheduler = TransitionScheduler()
        self._clock = SessionClock()
        self._listeners: list[Callable[[EventPayload], None]] = []
        self._session: SessionState | None = None
        self._settled: set[str] = set()

        record = repository.load()
        ledger = ProgressionLedger.register_login(record.to_ledger(), today)
        self._record = record.with_ledger(ledger)
        self.repository.save(self._record)
        logger.info("Player loaded: level %d, streak %d", ledger.level, ledger.streak)

    @classmethod
    def from_settings(cls, settings: Settings | None = None, **kwargs: Any) -> GameController:
        """Build a controller with the store configured in settings."""
        settings = settings or get_settings()
        repository = PlayerRecordRepository(build_store(settings), settings.storage_key)
        return cls(repository, settings, **kwargs)

    # -- Queries ---------------------------------------------------------

    @property
    def session(self) -> SessionState | None:
        return self._session

    @property
    def record(self) -> PlayerRecord:
        return self._record

    @property
    def ledger(self) -> Ledger:
        return self._record.to_ledger()

    def snapshot(self) -> dict[str, Any] | None:
        """Presentation view of the live session, or None."""
        if self._session is None:
            return None
        return RoundEngine.snapshot(self._session)

    def ledger_snapshot(self) -> dict[str, Any]:
        """Presentation view of the player's progression."""
        ledger = self.ledger
        return {
            "xp": ledger.xp,
            "level": ledger.level,
            "next_level_xp": ProgressionLedger.xp_for_level(ledger.level),
            "coins": ledger.coins,
            "total_coins": ledger.total_coins,
            "streak": ledger.streak,
            "best_survival_streak": ledger.best_survival_streak,
            "daily_challenges_completed": ledger.daily_challenges_completed,
            "unlocked_avatars": sorted(ledger.unlocked_avatars),
        }

    def achievements(self) -> dict[str, tuple[AchievementTier, ...]]:
        """Achievement tiers for every view, recomputed from the ledger."""
        ledger = self.ledger
        return {
            "daily": AchievementEvaluator.login_streak(ledger),
            "stars_next": AchievementEvaluator.currency_next(ledger),
            "stars_completed": AchievementEvaluator.currency_completed(ledger),
            "survival": AchievementEvaluator.survival(ledger),
            "challenges": AchievementEvaluator.daily_challenges(ledger),
        }

    # -- Listeners -------------------------------------------------------

    def subscribe(self, callback: Callable[[EventPayload], None]) -> None:
        """Register a callback receiving every EventPayload."""
        if callback not in self._listeners:
            self._listeners.append(callback)

    def unsubscribe(self, callback: Callable[[EventPayload], None]) -> None:
        if callback in self._listeners:
            self._listeners.remove(callback)

    def _emit(self, event: GameEvent, data: dict[str, Any] | None = None) -> None:
        session_id = self._session.session_id if self._session else None
        payload = EventPayload(event=event, session_id=session_id, data=data or {})
        for callback in list(self._listeners):
            try:
                callback(payload)
            except Exception:
                logger.exception("Listener failed handling %s", event.name)

    # -- Session commands ------------------------------------------------

    def start_session(
        self,
        mode: GameMode,
        continent: Continent | None = None,
        *,
        today: date | None = None,
    ) -> SessionState | None:
        """Start a new session, abandoning any unfinished one.

        Returns:
            The new session, or None if the continent is still locked.
        """
        if continent is not None and not is_continent_unlocked(self.ledger.level, continent):
            logger.info("Continent %s locked at level %d", continent.value, self.ledger.level)
            return None

        if self._session is not None and not self._session.ended:
            logger.info("Abandoning session %s", self._session.session_id)
            self._scheduler.cancel_session(self._session.session_id)

        state = RoundEngine.start_session(
            mode, continent, rules=self.rules, today=today, rng=self._rng
        )
        self._session = state
        if mode == GameMode.TIMED:
            self._clock.start()
        else:
            self._clock.stop()

        logger.info(
            "Session %s started: mode=%s questions=%d",
            state.session_id, mode.value, len(state.questions),
        )
        self._emit(GameEvent.SESSION_STARTED, {"mode": mode.value, "total": len(state.questions)})
        if state.ended:
            self._settle(state)
        return state

    def submit_answer(self, option_id: str) -> SessionState | None:
        return self._dispatch(lambda s: RoundEngine.submit_answer(s, option_id, rng=self._rng))

    def use_powerup(self, kind: PowerupKind) -> SessionState | None:
        return self._dispatch(lambda s: RoundEngine.use_powerup(s, kind, rng=self._rng))

    def advance(self) -> SessionState | None:
        """Acknowledge the current round (e.g. dismiss the fact) and move on."""
        return self._dispatch(lambda s: RoundEngine.advance(s, rng=self._rng))

    def update(self, dt: float) -> SessionState | None:
        """Advance the clock by dt seconds: timer ticks, then due transitions."""
        for _ in range(self._clock.update(dt)):
            self._dispatch(RoundEngine.tick)

        for transition in self._scheduler.update(dt):
            logger.debug("Firing %s for session %s", transition.kind.name, transition.session_id)
            self._dispatch(lambda s, t=transition: RoundEngine.fire(s, t, rng=self._rng))
        return self._session

    def _dispatch(self, reducer: Callable[[SessionState], SessionState]) -> SessionState | None:
        old = self._session
        if old is None:
            return None
        new = reducer(old)
        if new is old:
            return old

        self._session = new
        for transition in new.pending:
            if transition not in old.pending:
                self._scheduler.schedule(transition)

        for event in classify_transition(old, new):
            if event != GameEvent.SESSION_ENDED:
                self._emit(event, RoundEngine.snapshot(new))
        if new.ended:
            self._settle(new)
        return new

    def _settle(self, state: SessionState) -> None:
        """Fold a finished session into the ledger, exactly once."""
        if state.session_id in self._settled:
            return
        self._settled.add(state.session_id)
        self._clock.stop()
        self._scheduler.cancel_session(state.session_id)

        before = self.ledger
        after = ProgressionLedger.apply_session_result(before, state.mode, state.score)
        changed = after != before
        if changed:
            self._record = self._record.with_ledger(after)
            self.repository.save(self._record)

        logger.info(
            "Session %s ended: mode=%s score=%d",
            state.session_id, state.mode.value, state.score,
        )
        winner = RoundEngine.winner(state)
        self._emit(GameEvent.SESSION_ENDED, {
            "mode": state.mode.value,
            "score": state.score,
            "xp_gained": ProgressionLedger.xp_gained(state.score) if state.score > 0 else 0,
            "coins_gained": ProgressionLedger.coins_gained(max(0, state.score)),
            "winner": winner.value if winner else None,
            "ledger": self.ledger_snapshot(),
        })
        if changed:
            self._emit(GameEvent.LEDGER_UPDATED, self.ledger_snapshot())

    # -- Profile commands ------------------------------------------------

    def purchase_role(self, role_id: str) -> PurchaseStatus:
        """Buy a role with coins and wear it."""
        result = purchase_role(self.ledger, role_id)
        if result.status == PurchaseStatus.UNLOCKED:
            self._record = self._record.with_ledger(result.ledger)
            self._record = self._record.model_copy(update={
                "avatar": self._record.avatar.model_copy(update={"accessory": role_id}),
            })
            self.repository.save(self._record)
            logger.info("Unlocked role %s", role_id)
            self._emit(GameEvent.LEDGER_UPDATED, self.ledger_snapshot())
        return result.status

    def select_role(self, role_id: str) -> bool:
        """Wear an already unlocked role."""
        if role_id not in self._record.unlocked_avatars:
            return False
        self._update_record(avatar=self._record.avatar.model_copy(update={"accessory": role_id}))
        return True

    def select_character(self, character_id: str) -> bool:
        """Pick one of the free characters."""
        if character_id not in CHARACTERS:
            return False
        self._update_record(avatar=self._record.avatar.model_copy(update={"base": character_id}))
        return True

    def set_username(self, username: str) -> None:
        self._update_record(username=username.strip() or PlayerRecord().username)

    def toggle_dark_mode(self) -> bool:
        self._update_record(is_dark_mode=not self._record.is_dark_mode)
        return self._record.is_dark_mode

    def _update_record(self, **changes: Any) -> None:
        self._record = self._record.model_copy(update=changes)
        self.repository.save(self._record)
