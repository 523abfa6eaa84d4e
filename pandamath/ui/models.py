"""Data models used by the UI."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List

from pandamath.core.achievements import AchievementRecord

NO_ACHIEVEMENTS_TEXT = "No achievements yet. Get 50 correct answers to earn one!"


@dataclass
class AchievementRow:
    """One line of the achievement list, ready to render."""

    icon: str
    mode_text: str
    milestone: int
    date: str

    @property
    def headline(self) -> str:
        return f"{self.icon} {self.mode_text} - {self.milestone} Correct Answers!"

    @property
    def date_text(self) -> str:
        return f"Date: {self.date}"


def build_achievement_rows(records: Iterable[AchievementRecord]) -> List[AchievementRow]:
    """Rows for the achievement list, newest first."""
    ordered = sorted(records, key=lambda r: r.timestamp, reverse=True)
    return [
        AchievementRow(
            icon=r.theme.icon,
            mode_text=r.mode.label,
            milestone=r.milestone,
            date=r.date,
        )
        for r in ordered
    ]


@dataclass
class ScoreBoard:
    correct: int = 0
    total: int = 0

    @property
    def accuracy(self) -> int:
        """Whole-number percentage, 0 before the first answer."""
        if not self.total:
            return 0
        return round(self.correct * 100 / self.total)
