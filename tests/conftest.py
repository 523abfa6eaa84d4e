from __future__ import annotations

import random
from pathlib import Path
from typing import Iterable, List

import pytest

from pandamath.core.achievements import AchievementStore


class ScriptedRandom(random.Random):
    """Random source that replays fixed answers for randint() and random()."""

    def __init__(self, ints: Iterable[int] = (), floats: Iterable[float] = ()) -> None:
        super().__init__(0)
        self._ints: List[int] = list(ints)
        self._floats: List[float] = list(floats)

    def randint(self, a: int, b: int) -> int:
        value = self._ints.pop(0)
        assert a <= value <= b, f"scripted {value} outside [{a}, {b}]"
        return value

    def random(self) -> float:
        return self._floats.pop(0)


@pytest.fixture()
def store(tmp_path: Path) -> AchievementStore:
    """AchievementStore backed by a temp file so tests don't touch ~/.pandamath."""
    return AchievementStore(tmp_path / "achievements.json")
