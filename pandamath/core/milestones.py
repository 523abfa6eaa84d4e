from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional

MOTIVATIONAL_STEP = 5
ACHIEVEMENT_STEP = 50


@dataclass(frozen=True)
class MilestoneState:
    """Highest thresholds already reached. Both only ever grow."""

    last_motivational: int = 0
    last_persisted: int = 0


@dataclass(frozen=True)
class MilestoneResult:
    motivational: Optional[int]
    persisted: Optional[int]
    state: MilestoneState

    @property
    def fired(self) -> bool:
        return self.motivational is not None or self.persisted is not None


def floor_to_step(count: int, step: int) -> int:
    return (count // step) * step


def evaluate(
    correct_count: int,
    state: MilestoneState,
    motivational_step: int = MOTIVATIONAL_STEP,
    achievement_step: int = ACHIEVEMENT_STEP,
) -> MilestoneResult:
    """Check both thresholds against the correct-answer counter.

    The motivational value is the raw count (used in the message), the
    persisted value is the multiple of ``achievement_step`` that was crossed.
    """
    motivational: Optional[int] = None
    persisted: Optional[int] = None
    new_state = state

    m5 = floor_to_step(correct_count, motivational_step)
    if m5 > state.last_motivational and m5 >= motivational_step:
        motivational = correct_count
        new_state = replace(new_state, last_motivational=m5)

    m50 = floor_to_step(correct_count, achievement_step)
    if m50 > state.last_persisted and m50 >= achievement_step:
        persisted = m50
        new_state = replace(new_state, last_persisted=m50)

    return MilestoneResult(motivational=motivational, persisted=persisted, state=new_state)
