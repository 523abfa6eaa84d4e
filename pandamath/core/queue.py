from __future__ import annotations

from typing import Optional

from pandamath.core.problems import Mode, Problem, ProblemGenerator


class QueueEmpty(LookupError):
    """Raised when consuming from an empty look-ahead buffer."""


class QueueManager:
    """Holds at most one pre-generated problem for fast mode."""

    def __init__(self, generator: ProblemGenerator) -> None:
        self._generator = generator
        self._held: Optional[Problem] = None

    @property
    def held(self) -> Optional[Problem]:
        return self._held

    def ensure_queued(self, mode: Mode, fast_mode: bool) -> Optional[Problem]:
        """Return the held problem, generating one first if the buffer is empty.

        With fast mode off the buffer is cleared and None is returned.
        """
        if not fast_mode:
            self._held = None
            return None
        if self._held is None:
            self._held = self._generator.generate(mode)
        return self._held

    def consume(self) -> Problem:
        """Hand over the held problem and empty the buffer."""
        if self._held is None:
            raise QueueEmpty("no problem is queued")
        problem, self._held = self._held, None
        return problem

    def discard(self) -> None:
        self._held = None
