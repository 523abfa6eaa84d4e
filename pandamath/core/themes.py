from __future__ import annotations

from enum import Enum


class Theme(str, Enum):
    PANDA = "panda"
    SQUIRTLE = "squirtle"

    @property
    def icon(self) -> str:
        return "🐼" if self is Theme.PANDA else "🐢"

    @property
    def title(self) -> str:
        name = "Panda" if self is Theme.PANDA else "Squirtle"
        return f"{self.icon} {name} Math Practice"
