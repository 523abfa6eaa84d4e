"""Configuration model for Panda Math Practice."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field, ValidationError

from pandamath.core.problems import Mode
from pandamath.core.themes import Theme

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "PANDAMATH_CONFIG"


class SettingsError(ValueError):
    """The config file exists but cannot be used."""


class Settings(BaseModel):
    default_mode: Mode = Mode.MULTIPLICATION
    default_theme: Theme = Theme.PANDA
    fast_mode: bool = False
    fast_advance_ms: int = Field(default=300, ge=0)
    normal_advance_ms: int = Field(default=2000, ge=0)
    flash_ms: int = Field(default=400, ge=0)
    motivation_hide_ms: int = Field(default=2500, ge=0)
    motivational_messages: bool = True
    data_dir: Path = Path.home() / ".pandamath"

    @property
    def achievements_file(self) -> Path:
        return self.data_dir / "achievements.json"

    def advance_delay(self, fast_mode: bool) -> int:
        return self.fast_advance_ms if fast_mode else self.normal_advance_ms

    @staticmethod
    def default_path() -> Path:
        override = os.environ.get(CONFIG_ENV_VAR)
        if override:
            return Path(override).expanduser()
        return Path.home() / ".pandamath" / "config.yaml"

    @classmethod
    def load(cls, path: Optional[Path] = None) -> "Settings":
        config_path = path or cls.default_path()
        if not config_path.exists():
            return cls()
        try:
            with open(config_path, encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise SettingsError(f"{config_path}: invalid YAML: {e}") from e
        if not isinstance(data, dict):
            raise SettingsError(f"{config_path}: expected a mapping of settings")
        try:
            settings = cls(**data)
        except ValidationError as e:
            raise SettingsError(f"{config_path}: {e}") from e
        logger.info("Loaded settings from %s", config_path)
        return settings

    def save(self, path: Optional[Path] = None) -> Path:
        config_path = path or self.default_path()
        config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(config_path, "w", encoding="utf-8") as f:
            yaml.dump(self.model_dump(mode="json"), f, default_flow_style=False)
        return config_path
