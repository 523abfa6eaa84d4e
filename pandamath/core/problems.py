from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

logger = logging.getLogger(__name__)

# Times tables 2..12 by 1..12
FIRST_FACTOR_RANGE = (2, 12)
SECOND_FACTOR_RANGE = (1, 12)


class Mode(str, Enum):
    MULTIPLICATION = "multiplication"
    DIVISION = "division"

    @property
    def label(self) -> str:
        return "Multiplication" if self is Mode.MULTIPLICATION else "Division"


class Operator(str, Enum):
    MULTIPLY = "×"
    DIVIDE = "÷"


@dataclass(frozen=True)
class Problem:
    """A single drill problem.

    For division ``operand_a`` is the dividend and ``operand_b`` the divisor,
    and ``factors`` holds the multiplication fact the problem was built from.
    """

    operator: Operator
    operand_a: int
    operand_b: int
    display_text: str
    answer: int
    factors: Tuple[int, int] = (0, 0)


class ProblemGenerator:
    """Builds multiplication and division problems from an injectable random source."""

    def __init__(self, rng: Optional[random.Random] = None) -> None:
        self._rng = rng or random.Random()

    def generate(self, mode: Mode) -> Problem:
        if mode is Mode.MULTIPLICATION:
            problem = self.multiplication()
        else:
            problem = self.division()
        logger.debug("Generated %s problem: %s", mode.value, problem.display_text)
        return problem

    def multiplication(self) -> Problem:
        a, b = self._fact()
        return Problem(
            operator=Operator.MULTIPLY,
            operand_a=a,
            operand_b=b,
            display_text=f"{a} × {b} = ?",
            answer=a * b,
            factors=(a, b),
        )

    def division(self) -> Problem:
        # Reverse a multiplication fact so the quotient is always whole.
        a, b = self._fact()
        product = a * b
        divisor = a if self._rng.random() < 0.5 else b
        return Problem(
            operator=Operator.DIVIDE,
            operand_a=product,
            operand_b=divisor,
            display_text=f"{product} ÷ {divisor} = ?",
            answer=product // divisor,
            factors=(a, b),
        )

    def _fact(self) -> Tuple[int, int]:
        a = self._rng.randint(*FIRST_FACTOR_RANGE)
        b = self._rng.randint(*SECOND_FACTOR_RANGE)
        return a, b
