from __future__ import annotations

import logging
import random
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Optional

from pandamath.core.achievements import AchievementRecord, AchievementStore
from pandamath.core.messages import MessageCatalog
from pandamath.core.milestones import MilestoneState, evaluate
from pandamath.core.problems import Mode, Problem, ProblemGenerator
from pandamath.core.queue import QueueManager
from pandamath.core.settings import Settings
from pandamath.core.themes import Theme

logger = logging.getLogger(__name__)

_INTEGER_PREFIX = re.compile(r"[+-]?[0-9]+")


class InvalidInput(ValueError):
    """The submitted answer is empty or not a number."""


class Outcome(str, Enum):
    CORRECT = "correct"
    INCORRECT = "incorrect"
    INVALID_INPUT = "invalid_input"


class EffectKind(str, Enum):
    PLAY_CHIME = "play_chime"
    SHOW_FEEDBACK = "show_feedback"
    FLASH = "flash"
    CLEAR_FLASH = "clear_flash"
    SHOW_MOTIVATION = "show_motivation"
    HIDE_MOTIVATION = "hide_motivation"
    CELEBRATE = "celebrate"
    ACHIEVEMENT_UNLOCKED = "achievement_unlocked"
    ADVANCE = "advance"


@dataclass(frozen=True)
class Effect:
    """Something the host should do, ``delay_ms`` after the triggering event."""

    kind: EffectKind
    delay_ms: int = 0
    payload: Any = None


@dataclass(frozen=True)
class Feedback:
    text: str
    tone: str


@dataclass
class SessionState:
    mode: Mode
    theme: Theme
    current_problem: Problem
    queued_problem: Optional[Problem] = None
    correct_count: int = 0
    total_count: int = 0
    fast_mode: bool = False
    feedback: Optional[Feedback] = None


@dataclass(frozen=True)
class SubmitResult:
    outcome: Outcome
    effects: List[Effect] = field(default_factory=list)
    expected_answer: Optional[int] = None
    motivational: Optional[int] = None
    persisted: Optional[int] = None

    def effects_of(self, kind: EffectKind) -> List[Effect]:
        return [e for e in self.effects if e.kind is kind]


def parse_answer(raw: str) -> int:
    """Read a whole number from the start of the input, ignoring trailing junk."""
    match = _INTEGER_PREFIX.match((raw or "").strip())
    if match is None:
        raise InvalidInput(f"not a number: {raw!r}")
    return int(match.group(0))


class DrillSession:
    """Owns the live drill state and turns each user action into effects.

    Counters, the current problem and the fast-mode look-ahead live in
    ``state``. Nothing here touches timers: submitting returns an ``ADVANCE``
    effect and the host passes its payload to :meth:`advance` when it fires.
    A mode switch in between makes that payload stale.
    """

    def __init__(
        self,
        store: AchievementStore,
        settings: Optional[Settings] = None,
        rng: Optional[random.Random] = None,
        messages: Optional[MessageCatalog] = None,
    ) -> None:
        self._store = store
        self._settings = settings or Settings()
        self._generator = ProblemGenerator(rng)
        self._queue = QueueManager(self._generator)
        self._messages = messages
        if self._messages is None and self._settings.motivational_messages:
            self._messages = MessageCatalog(rng=rng)
        self._milestones = MilestoneState(last_persisted=store.max_milestone())
        self._mode_switches = 0

        mode = self._settings.default_mode
        self.state = SessionState(
            mode=mode,
            theme=self._settings.default_theme,
            current_problem=self._generator.generate(mode),
        )
        if self._settings.fast_mode:
            self.set_fast_mode(True)

    @property
    def milestones(self) -> MilestoneState:
        return self._milestones

    @property
    def settings(self) -> Settings:
        return self._settings

    def next_problem(self) -> Problem:
        """Advance to the next problem, promoting the queued one in fast mode."""
        state = self.state
        if state.fast_mode and self._queue.held is not None:
            state.current_problem = self._queue.consume()
            state.queued_problem = self._queue.ensure_queued(state.mode, True)
        else:
            state.current_problem = self._generator.generate(state.mode)
        state.feedback = None
        return state.current_problem

    def advance(self, token: int) -> Optional[Problem]:
        """Run a delayed ``ADVANCE``; returns None if the mode changed since it was issued."""
        if token != self._mode_switches:
            logger.debug("Dropping advance issued before the last mode switch")
            return None
        return self.next_problem()

    def switch_mode(self, mode: Mode) -> Problem:
        state = self.state
        logger.debug("Switching to %s mode", mode.value)
        self._mode_switches += 1
        state.mode = mode
        self._queue.discard()
        state.queued_problem = None
        problem = self.next_problem()
        if state.fast_mode:
            state.queued_problem = self._queue.ensure_queued(mode, True)
        return problem

    def switch_theme(self, theme: Theme) -> None:
        self.state.theme = theme

    def set_fast_mode(self, enabled: bool) -> Optional[Problem]:
        state = self.state
        state.fast_mode = enabled
        state.queued_problem = self._queue.ensure_queued(state.mode, enabled)
        return state.queued_problem

    def submit_answer(self, raw_input: str) -> SubmitResult:
        state = self.state
        try:
            value = parse_answer(raw_input)
        except InvalidInput:
            state.feedback = Feedback("Please enter a number!", "incorrect")
            return SubmitResult(
                outcome=Outcome.INVALID_INPUT,
                effects=[Effect(EffectKind.SHOW_FEEDBACK, payload=state.feedback)],
            )

        state.total_count += 1
        expected = state.current_problem.answer
        if value == expected:
            state.correct_count += 1
            result = self._correct()
        else:
            result = self._incorrect(expected)
        result.effects.append(
            Effect(
                EffectKind.ADVANCE,
                delay_ms=self._settings.advance_delay(state.fast_mode),
                payload=self._mode_switches,
            )
        )
        return result

    def _correct(self) -> SubmitResult:
        state = self.state
        effects = [Effect(EffectKind.PLAY_CHIME)]
        if state.fast_mode:
            effects += self._flash("correct")

        milestone = evaluate(state.correct_count, self._milestones)
        self._milestones = milestone.state

        show_motivation = self._settings.motivational_messages and self._messages is not None
        if milestone.motivational is not None and show_motivation:
            effects.append(
                Effect(EffectKind.SHOW_MOTIVATION, payload=self._messages.pick(milestone.motivational))
            )
            effects.append(Effect(EffectKind.CELEBRATE))
            effects.append(
                Effect(EffectKind.HIDE_MOTIVATION, delay_ms=self._settings.motivation_hide_ms)
            )

        if milestone.persisted is not None:
            record = AchievementRecord.create(state.mode, state.theme, milestone.persisted)
            self._store.append(record)
            effects.append(Effect(EffectKind.ACHIEVEMENT_UNLOCKED, payload=record))
            text = f"🎉 Correct! 🏆 Achievement Unlocked: {milestone.persisted} Correct Answers!"
        else:
            text = "🎉 Correct! Great job!"

        if not state.fast_mode:
            state.feedback = Feedback(text, "correct")
            effects.append(Effect(EffectKind.SHOW_FEEDBACK, payload=state.feedback))

        return SubmitResult(
            outcome=Outcome.CORRECT,
            effects=effects,
            motivational=milestone.motivational,
            persisted=milestone.persisted,
        )

    def _incorrect(self, expected: int) -> SubmitResult:
        state = self.state
        effects: List[Effect] = []
        if state.fast_mode:
            effects += self._flash("incorrect")
        else:
            state.feedback = Feedback(f"❌ Incorrect. The answer is {expected}", "incorrect")
            effects.append(Effect(EffectKind.SHOW_FEEDBACK, payload=state.feedback))
        return SubmitResult(outcome=Outcome.INCORRECT, effects=effects, expected_answer=expected)

    def _flash(self, tone: str) -> List[Effect]:
        return [
            Effect(EffectKind.FLASH, payload=tone),
            Effect(EffectKind.CLEAR_FLASH, delay_ms=self._settings.flash_ms, payload=tone),
        ]
