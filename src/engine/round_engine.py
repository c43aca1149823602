"""
FlagQuest - Round Engine

Pure state machine for one game session. Every command takes a SessionState
and returns a new one; nothing is stored on the engine.

Round lifecycle:
- awaiting answer -> feedback correct | feedback wrong
- correct: a SHOW_FACT transition is scheduled; the player acknowledges
  the fact with advance()
- wrong: ADVANCE or END_SESSION is scheduled (survival ends at once)
- advancing past the last question ends the session

Invalid commands (answering twice, spending an empty powerup, acting on an
ended session, firing a stale transition) return the state unchanged.
"""

import random
import uuid
from collections import Counter
from dataclasses import dataclass, field, replace
from datetime import date
from itertools import combinations
from typing import Any

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
from src.engine.sampler import QuestionSampler


@dataclass(frozen=True)
class SessionState:
    """
    Complete state of a game session.

    Attributes:
        session_id: Identity used to key delayed transitions
        mode: Game mode
        questions: Question sequence, fixed at session start
        rules: Rules the session was started with
        continent: Continent scope (adventure), or None
        current_index: Index of the question being asked
        score: Points accumulated this session
        lives: Remaining lives (unused in timed mode)
        time_remaining: Seconds left on the clock (timed mode only)
        powerups: Remaining powerup counters
        options: Answer options for the current round
        disabled: Option ids removed by fifty-fifty
        feedback: Answer feedback for the current round
        fact: Country whose fact is on display
        hint: Revealed continent of the current answer
        ended: Whether the session is over
        p1_score: Correct answers by player one (multiplayer)
        p2_score: Correct answers by player two (multiplayer)
        turn: Player whose turn it is (multiplayer)
        pending: Delayed transitions awaiting the scheduler
        catalog: Rows options are drawn from
    """
    session_id: str
    mode: GameMode
    questions: tuple[Country, ...]
    rules: SessionRules = field(default_factory=SessionRules)
    continent: Continent | None = None
    current_index: int = 0
    score: int = 0
    lives: int = 3
    time_remaining: int = 0
    powerups: Powerups = field(default_factory=Powerups)
    options: tuple[Country, ...] = ()
    disabled: frozenset[str] = field(default_factory=frozenset)
    feedback: Feedback = Feedback.NONE
    fact: Country | None = None
    hint: Continent | None = None
    ended: bool = False
    p1_score: int = 0
    p2_score: int = 0
    turn: Player = Player.P1
    pending: tuple[ScheduledTransition, ...] = ()
    catalog: tuple[Country, ...] = field(default=COUNTRIES, repr=False)

    @property
    def current_question(self) -> Country | None:
        """Country being asked, or None for an empty session."""
        if not self.questions:
            return None
        return self.questions[self.current_index]

    @property
    def is_awaiting_answer(self) -> bool:
        """True while the current round accepts an answer."""
        return not self.ended and self.feedback == Feedback.NONE and bool(self.questions)

    @property
    def is_last_question(self) -> bool:
        return self.current_index >= len(self.questions) - 1

    @property
    def option_ids(self) -> tuple[str, ...]:
        return tuple(c.id for c in self.options)


class RoundEngine:
    """
    Stateless engine for the session state machine.

    All methods are class methods operating on immutable data.
    State is passed in and returned, never stored.
    """

    @classmethod
    def start_session(
        cls,
        mode: GameMode,
        continent: Continent | None = None,
        *,
        session_id: str | None = None,
        rules: SessionRules | None = None,
        catalog: tuple[Country, ...] = COUNTRIES,
        today: date | None = None,
        rng: random.Random | None = None,
    ) -> SessionState:
        """Create a new session with its question sequence and first round.

        Args:
            mode: Game mode to play
            continent: Optional continent scope for questions and options
            session_id: Explicit session identity (random if omitted)
            rules: Session rules (defaults if omitted)
            catalog: Source rows
            today: Date used for the daily challenge
            rng: Random source for sampling and shuffles

        Returns:
            A session awaiting its first answer, or an already-ended
            session if no questions could be drawn
        """
        rules = rules or SessionRules()
        if mode == GameMode.DAILY:
            questions = DailyChallengeGenerator.generate(
                today, catalog=catalog, count=rules.daily_question_count
            )
        else:
            count = rules.question_count
            if mode == GameMode.SURVIVAL:
                count = rules.survival_question_count or len(catalog)
            questions = QuestionSampler.sample(
                count, continent=continent, catalog=catalog, rng=rng
            )

        state = SessionState(
            session_id=session_id or uuid.uuid4().hex,
            mode=mode,
            questions=questions,
            rules=rules,
            continent=continent,
            lives=rules.lives_for(mode),
            time_remaining=rules.timed_seconds if mode == GameMode.TIMED else 0,
            powerups=rules.powerups,
            catalog=tuple(catalog),
        )
        if not questions:
            return cls._end(state)
        return cls._with_options(state, rng)

    @classmethod
    def submit_answer(
        cls,
        state: SessionState,
        option_id: str,
        *,
        rng: random.Random | None = None,
    ) -> SessionState:
        """Resolve the current round with the chosen option.

        No-op unless the round is awaiting an answer and `option_id` is a
        selectable option.
        """
        if not state.is_awaiting_answer:
            return state
        if option_id not in state.option_ids or option_id in state.disabled:
            return state

        question = state.current_question
        if option_id == question.id:
            return cls._answer_correct(state)
        return cls._answer_wrong(state)

    @classmethod
    def advance(
        cls,
        state: SessionState,
        *,
        rng: random.Random | None = None,
    ) -> SessionState:
        """Acknowledge a resolved round and move on.

        No-op while the round still awaits an answer. A pending session end
        wins over moving to the next question.
        """
        if state.ended or state.feedback == Feedback.NONE:
            return state
        if any(t.kind == TransitionKind.END_SESSION for t in state.pending):
            return cls._end(state)
        return cls._next_question(state, rng)

    @classmethod
    def use_powerup(
        cls,
        state: SessionState,
        kind: PowerupKind,
        *,
        rng: random.Random | None = None,
    ) -> SessionState:
        """Spend one unit of a powerup on the current round.

        No-op if the round is not awaiting an answer or the counter is 0.
        """
        if not state.is_awaiting_answer or state.powerups.count(kind) <= 0:
            return state

        state = replace(state, powerups=state.powerups.consume(kind))

        if kind == PowerupKind.FIFTY_FIFTY:
            return replace(state, disabled=cls._fifty_fifty(state, rng))
        if kind == PowerupKind.SKIP:
            return cls._next_question(state, rng)
        return replace(state, hint=state.current_question.continent)

    @classmethod
    def tick(cls, state: SessionState, seconds: int = 1) -> SessionState:
        """Count the timed-mode clock down; ends the session at zero."""
        if state.ended or state.mode != GameMode.TIMED or seconds <= 0:
            return state
        remaining = max(0, state.time_remaining - seconds)
        state = replace(state, time_remaining=remaining)
        if remaining == 0:
            return cls._end(state)
        return state

    @classmethod
    def expire(cls, state: SessionState) -> SessionState:
        """Force a timed session to end."""
        if state.ended or state.mode != GameMode.TIMED:
            return state
        return cls._end(replace(state, time_remaining=0))

    @classmethod
    def fire(
        cls,
        state: SessionState,
        transition: ScheduledTransition,
        *,
        rng: random.Random | None = None,
    ) -> SessionState:
        """Apply a delayed transition if it still belongs to this round."""
        if (
            state.ended
            or transition.session_id != state.session_id
            or transition.question_index != state.current_index
            or transition not in state.pending
        ):
            return state

        remaining = tuple(t for t in state.pending if t != transition)
        state = replace(state, pending=remaining)

        if transition.kind == TransitionKind.SHOW_FACT:
            return replace(state, fact=state.current_question)
        if transition.kind == TransitionKind.ADVANCE:
            return cls._next_question(state, rng)
        return cls._end(state)

    @classmethod
    def winner(cls, state: SessionState) -> Player | None:
        """Leading player of a duel, or None on a tie or outside multiplayer."""
        if state.mode != GameMode.MULTIPLAYER or state.p1_score == state.p2_score:
            return None
        return Player.P1 if state.p1_score > state.p2_score else Player.P2

    @classmethod
    def snapshot(cls, state: SessionState) -> dict[str, Any]:
        """Plain dictionary view of the session for the presentation layer."""
        winner = cls.winner(state)
        return {
            "session_id": state.session_id,
            "mode": state.mode.value,
            "continent": state.continent.value if state.continent else None,
            "index": state.current_index,
            "total": len(state.questions),
            "score": state.score,
            "lives": state.lives,
            "time_remaining": state.time_remaining,
            "options": [{"id": c.id, "name": c.name} for c in state.options],
            "disabled": sorted(state.disabled),
            "feedback": state.feedback.value,
            "fact": (
                {"id": state.fact.id, "name": state.fact.name, "fact": state.fact.fact}
                if state.fact else None
            ),
            "hint": state.hint.value if state.hint else None,
            "powerups": state.powerups.to_dict(),
            "ended": state.ended,
            "p1_score": state.p1_score,
            "p2_score": state.p2_score,
            "turn": state.turn.value,
            "winner": winner.value if winner else None,
        }

    # -- Internal transitions --------------------------------------------

    @classmethod
    def _answer_correct(cls, state: SessionState) -> SessionState:
        bonus = state.time_remaining if state.mode == GameMode.TIMED else 0
        p1_score, p2_score = state.p1_score, state.p2_score
        if state.mode == GameMode.MULTIPLAYER:
            if state.turn == Player.P1:
                p1_score += 1
            else:
                p2_score += 1

        return replace(
            state,
            feedback=Feedback.CORRECT,
            score=state.score + state.rules.correct_points + bonus,
            p1_score=p1_score,
            p2_score=p2_score,
            pending=(cls._schedule(state, TransitionKind.SHOW_FACT, state.rules.fact_delay),),
        )

    @classmethod
    def _answer_wrong(cls, state: SessionState) -> SessionState:
        state = replace(state, feedback=Feedback.WRONG)

        if state.mode == GameMode.SURVIVAL:
            return cls._end(state)

        delay = state.rules.feedback_delay
        if state.mode == GameMode.TIMED:
            return replace(
                state, pending=(cls._schedule(state, TransitionKind.ADVANCE, delay),)
            )

        lives = max(0, state.lives - 1)
        kind = TransitionKind.END_SESSION if lives == 0 else TransitionKind.ADVANCE
        return replace(state, lives=lives, pending=(cls._schedule(state, kind, delay),))

    @classmethod
    def _next_question(
        cls,
        state: SessionState,
        rng: random.Random | None,
    ) -> SessionState:
        if state.is_last_question:
            return cls._end(state)

        turn = state.turn.other if state.mode == GameMode.MULTIPLAYER else state.turn
        state = replace(
            state,
            current_index=state.current_index + 1,
            feedback=Feedback.NONE,
            fact=None,
            hint=None,
            pending=(),
            turn=turn,
        )
        return cls._with_options(state, rng)

    @classmethod
    def _fifty_fifty(
        cls,
        state: SessionState,
        rng: random.Random | None,
    ) -> frozenset[str]:
        """Wrong option ids covering exactly two option slots.

        A catalog may repeat an id, so one disabled id can cover two slots.
        """
        correct_id = state.current_question.id
        slots = Counter(c.id for c in state.options if c.id != correct_id)
        target = min(2, sum(slots.values()))
        if target == 0:
            return frozenset()

        candidates = [
            combo
            for size in (1, 2)
            for combo in combinations(sorted(slots), size)
            if sum(slots[i] for i in combo) == target
        ]
        return frozenset((rng or random).choice(candidates))

    @classmethod
    def _with_options(
        cls,
        state: SessionState,
        rng: random.Random | None,
    ) -> SessionState:
        options = QuestionSampler.build_options(
            state.current_question,
            state.continent,
            catalog=state.catalog,
            rng=rng,
        )
        return replace(state, options=options, disabled=frozenset())

    @classmethod
    def _end(cls, state: SessionState) -> SessionState:
        return replace(state, ended=True, pending=(), fact=None)

    @staticmethod
    def _schedule(
        state: SessionState,
        kind: TransitionKind,
        delay: float,
    ) -> ScheduledTransition:
        return ScheduledTransition(
            kind=kind,
            delay=delay,
            session_id=state.session_id,
            question_index=state.current_index,
        )
