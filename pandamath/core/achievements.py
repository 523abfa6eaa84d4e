from __future__ import annotations

import json
import logging
import time
from dataclasses import dataclass, asdict
from datetime import date
from pathlib import Path
from typing import Any, Callable, List, Optional

from pandamath.core.milestones import ACHIEVEMENT_STEP
from pandamath.core.problems import Mode
from pandamath.core.themes import Theme

logger = logging.getLogger(__name__)

DEFAULT_FILE = Path.home() / ".pandamath" / "achievements.json"


class CorruptPersistedData(ValueError):
    """The stored achievement list could not be decoded."""


@dataclass(frozen=True)
class AchievementRecord:
    date: str
    mode: Mode
    theme: Theme
    milestone: int
    timestamp: int

    @classmethod
    def create(
        cls,
        mode: Mode,
        theme: Theme,
        milestone: int,
        today: Callable[[], date] = date.today,
        clock: Callable[[], float] = time.time,
    ) -> "AchievementRecord":
        return cls(
            date=today().isoformat(),
            mode=mode,
            theme=theme,
            milestone=milestone,
            timestamp=int(clock() * 1000),
        )

    def to_dict(self) -> dict:
        payload = asdict(self)
        payload["mode"] = self.mode.value
        payload["theme"] = self.theme.value
        return payload

    @classmethod
    def from_dict(cls, value: Any) -> "AchievementRecord":
        """Decode one stored entry.

        Unknown or missing mode/theme fall back to division/squirtle, the way
        the achievement list has always labelled them.
        """
        if not isinstance(value, dict):
            raise CorruptPersistedData(f"expected an object, got {type(value).__name__}")
        try:
            return cls(
                date=str(value.get("date", "")),
                mode=_enum_or(Mode, value.get("mode"), Mode.DIVISION),
                theme=_enum_or(Theme, value.get("theme"), Theme.SQUIRTLE),
                # Early records were written without a milestone; they were all 50s.
                milestone=int(value.get("milestone") or ACHIEVEMENT_STEP),
                timestamp=int(value.get("timestamp") or 0),
            )
        except (TypeError, ValueError) as e:
            raise CorruptPersistedData(f"invalid achievement record {value!r}: {e}") from e


def _enum_or(enum_cls, value: Any, fallback):
    try:
        return enum_cls(value)
    except (TypeError, ValueError):
        return fallback


class AchievementStore:
    """Append-only achievement log persisted as a JSON array.

    File: ~/.pandamath/achievements.json unless another path is given.
    A file that is not a JSON array reads as an empty log; it is moved aside
    to ``<name>.bak`` before the next append writes a fresh one. Entries that
    cannot be decoded are skipped when reading but kept in the file.
    """

    def __init__(self, file_path: Optional[Path] = None) -> None:
        self._file_path = file_path or DEFAULT_FILE
        self._file_path.parent.mkdir(parents=True, exist_ok=True)
        self._records: List[AchievementRecord] = self.load()

    @property
    def file_path(self) -> Path:
        return self._file_path

    @property
    def backup_path(self) -> Path:
        return self._file_path.with_name(self._file_path.name + ".bak")

    @property
    def records(self) -> List[AchievementRecord]:
        return list(self._records)

    def load(self) -> List[AchievementRecord]:
        """Read the log from disk in insertion order."""
        try:
            self._records = self._decode(self._read_raw())
        except CorruptPersistedData as e:
            logger.warning("Ignoring achievements in %s: %s", self._file_path, e)
            self._records = []
        return list(self._records)

    def append(self, record: AchievementRecord) -> None:
        try:
            raw = self._read_raw()
        except CorruptPersistedData as e:
            logger.warning(
                "Moving unreadable achievements %s to %s: %s", self._file_path, self.backup_path, e
            )
            try:
                self._file_path.replace(self.backup_path)
            except OSError as move_error:
                logger.warning("Not saving achievement, could not move %s: %s", self._file_path, move_error)
                return
            raw = []
        raw.append(record.to_dict())
        self._records = self._decode(raw)
        self._save(raw)
        logger.info(
            "Achievement unlocked: %d correct (%s, %s)",
            record.milestone,
            record.mode.value,
            record.theme.value,
        )

    def max_milestone(self) -> int:
        return max((r.milestone for r in self._records), default=0)

    def sorted_for_display(self) -> List[AchievementRecord]:
        """Newest first."""
        return sorted(self._records, key=lambda r: r.timestamp, reverse=True)

    def _read_raw(self) -> List[Any]:
        if not self._file_path.exists():
            return []
        try:
            payload = json.loads(self._file_path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError, UnicodeDecodeError) as e:
            raise CorruptPersistedData(str(e)) from e
        if payload is None:
            return []
        if not isinstance(payload, list):
            raise CorruptPersistedData(f"expected a list, got {type(payload).__name__}")
        return payload

    def _decode(self, raw: List[Any]) -> List[AchievementRecord]:
        records: List[AchievementRecord] = []
        for item in raw:
            try:
                records.append(AchievementRecord.from_dict(item))
            except CorruptPersistedData as e:
                logger.warning("Skipping achievement entry in %s: %s", self._file_path, e)
        return records

    def _save(self, raw: List[Any]) -> None:
        self._file_path.parent.mkdir(parents=True, exist_ok=True)
        try:
            self._file_path.write_text(json.dumps(raw, indent=2), encoding="utf-8")
        except OSError as e:
            logger.warning("Could not save achievements to %s: %s", self._file_path, e)
