"""Tests for pandamath.core.achievements – achievement persistence."""

from __future__ import annotations

import json
from datetime import date
from pathlib import Path

import pytest

from pandamath.core.achievements import AchievementRecord, AchievementStore, CorruptPersistedData
from pandamath.core.problems import Mode
from pandamath.core.themes import Theme


def _record(milestone: int, timestamp: int, mode: Mode = Mode.MULTIPLICATION) -> AchievementRecord:
    return AchievementRecord(
        date="2026-10-17",
        mode=mode,
        theme=Theme.PANDA,
        milestone=milestone,
        timestamp=timestamp,
    )


def _write(path: Path, payload) -> None:
    path.write_text(json.dumps(payload), encoding="utf-8")


# ---------------------------------------------------------------------------
# AchievementRecord
# ---------------------------------------------------------------------------

class TestAchievementRecord:
    def test_create_uses_clock(self):
        r = AchievementRecord.create(
            Mode.DIVISION,
            Theme.SQUIRTLE,
            100,
            today=lambda: date(2026, 10, 17),
            clock=lambda: 1_700_000_000.5,
        )
        assert r.date == "2026-10-17"
        assert r.timestamp == 1_700_000_000_500
        assert r.mode is Mode.DIVISION
        assert r.theme is Theme.SQUIRTLE
        assert r.milestone == 100

    def test_to_dict_uses_plain_values(self):
        d = _record(50, 1).to_dict()
        assert d == {
            "date": "2026-10-17",
            "mode": "multiplication",
            "theme": "panda",
            "milestone": 50,
            "timestamp": 1,
        }

    def test_from_dict_roundtrip(self):
        r = _record(150, 42, Mode.DIVISION)
        assert AchievementRecord.from_dict(r.to_dict()) == r

    def test_missing_milestone_counts_as_fifty(self):
        r = AchievementRecord.from_dict(
            {"date": "1/2/2025", "mode": "division", "theme": "squirtle", "timestamp": 5}
        )
        assert r.milestone == 50

    @pytest.mark.parametrize(
        "value",
        [
            "not a dict",
            ["a", "list"],
            {"mode": "division", "theme": "panda", "timestamp": "soon"},
            {"mode": "division", "theme": "panda", "milestone": "lots"},
        ],
    )
    def test_invalid_values_raise(self, value):
        with pytest.raises(CorruptPersistedData):
            AchievementRecord.from_dict(value)

    @pytest.mark.parametrize(
        "value",
        [
            {"milestone": 100, "timestamp": 3},
            {"mode": "addition", "theme": "charmander", "milestone": 100, "timestamp": 3},
            {"mode": ["x"], "theme": None, "milestone": 100, "timestamp": 3},
        ],
    )
    def test_unknown_mode_and_theme_fall_back(self, value):
        r = AchievementRecord.from_dict(value)
        assert r.mode is Mode.DIVISION
        assert r.theme is Theme.SQUIRTLE
        assert r.milestone == 100


# ---------------------------------------------------------------------------
# AchievementStore – fresh state
# ---------------------------------------------------------------------------

class TestStoreFresh:
    def test_no_file_is_empty(self, store: AchievementStore):
        assert store.load() == []
        assert store.records == []

    def test_max_milestone_zero_when_empty(self, store: AchievementStore):
        assert store.max_milestone() == 0

    def test_creates_parent_directory(self, tmp_path: Path):
        s = AchievementStore(tmp_path / "nested" / "dir" / "achievements.json")
        assert s.file_path.parent.is_dir()


# ---------------------------------------------------------------------------
# AchievementStore – append / load
# ---------------------------------------------------------------------------

class TestAppend:
    def test_append_then_load_includes_record(self, store: AchievementStore):
        r = _record(50, 1)
        store.append(r)
        assert r in store.load()

    def test_insertion_order_on_disk(self, store: AchievementStore):
        store.append(_record(50, 300))
        store.append(_record(100, 100))
        data = json.loads(store.file_path.read_text(encoding="utf-8"))
        assert [d["milestone"] for d in data] == [50, 100]

    def test_new_store_reads_existing_file(self, store: AchievementStore):
        store.append(_record(50, 1))
        store.append(_record(100, 2))
        reopened = AchievementStore(store.file_path)
        assert [r.milestone for r in reopened.records] == [50, 100]

    def test_append_keeps_records_written_elsewhere(self, store: AchievementStore):
        other = AchievementStore(store.file_path)
        other.append(_record(50, 1))
        store.append(_record(100, 2))
        assert [r.milestone for r in store.load()] == [50, 100]

    def test_max_milestone(self, store: AchievementStore):
        store.append(_record(50, 1))
        store.append(_record(100, 2))
        assert store.max_milestone() == 100

    def test_max_milestone_after_loading(self, tmp_path: Path):
        f = tmp_path / "achievements.json"
        _write(f, [_record(100, 1).to_dict(), _record(50, 2).to_dict()])
        assert AchievementStore(f).max_milestone() == 100

    def test_sorted_for_display_newest_first(self, store: AchievementStore):
        store.append(_record(50, 10))
        store.append(_record(100, 30))
        store.append(_record(150, 20))
        assert [r.timestamp for r in store.sorted_for_display()] == [30, 20, 10]
        # storage order unchanged
        assert [r.timestamp for r in store.records] == [10, 30, 20]


# ---------------------------------------------------------------------------
# AchievementStore – loading edge cases
# ---------------------------------------------------------------------------

class TestLoadEdgeCases:
    def test_corrupt_json(self, tmp_path: Path):
        f = tmp_path / "achievements.json"
        f.write_text("NOT VALID JSON", encoding="utf-8")
        s = AchievementStore(f)
        assert s.records == []
        assert s.max_milestone() == 0

    def test_not_a_list(self, tmp_path: Path):
        f = tmp_path / "achievements.json"
        _write(f, {"milestone": 50})
        assert AchievementStore(f).load() == []

    def test_null_payload(self, tmp_path: Path):
        f = tmp_path / "achievements.json"
        f.write_text("null", encoding="utf-8")
        assert AchievementStore(f).load() == []

    def test_valid_records_survive_a_foreign_entry(self, tmp_path: Path):
        f = tmp_path / "achievements.json"
        foreign = {"date": "1/2/2025", "mode": "multiplication", "milestone": 150, "timestamp": 3}
        _write(f, [_record(50, 1).to_dict(), _record(100, 2).to_dict(), foreign])
        s = AchievementStore(f)
        assert [r.milestone for r in s.records] == [50, 100, 150]
        assert s.max_milestone() == 150

        s.append(_record(200, 4))
        data = json.loads(f.read_text(encoding="utf-8"))
        assert len(data) == 4
        assert data[2] == foreign
        assert [r.milestone for r in AchievementStore(f).records] == [50, 100, 150, 200]

    def test_undecodable_entry_is_skipped_but_kept(self, tmp_path: Path):
        f = tmp_path / "achievements.json"
        _write(f, [_record(50, 1).to_dict(), "junk", {"milestone": "lots"}])
        s = AchievementStore(f)
        assert [r.milestone for r in s.records] == [50]

        s.append(_record(100, 2))
        data = json.loads(f.read_text(encoding="utf-8"))
        assert data[1:3] == ["junk", {"milestone": "lots"}]
        assert len(data) == 4

    def test_skipped_entry_logs_warning(self, tmp_path: Path, caplog: pytest.LogCaptureFixture):
        f = tmp_path / "achievements.json"
        _write(f, [_record(50, 1).to_dict(), "junk"])
        with caplog.at_level("WARNING", logger="pandamath.core.achievements"):
            s = AchievementStore(f)
        assert "Skipping achievement entry" in caplog.text
        assert s.max_milestone() == 50

    def test_corrupt_file_logs_warning(self, tmp_path: Path, caplog: pytest.LogCaptureFixture):
        f = tmp_path / "achievements.json"
        f.write_text("{", encoding="utf-8")
        with caplog.at_level("WARNING", logger="pandamath.core.achievements"):
            AchievementStore(f)
        assert "Ignoring achievements" in caplog.text

    def test_append_after_corrupt_keeps_backup(self, tmp_path: Path):
        f = tmp_path / "achievements.json"
        f.write_text("garbage", encoding="utf-8")
        s = AchievementStore(f)
        s.append(_record(50, 1))
        data = json.loads(f.read_text(encoding="utf-8"))
        assert len(data) == 1
        assert s.backup_path.read_text(encoding="utf-8") == "garbage"
