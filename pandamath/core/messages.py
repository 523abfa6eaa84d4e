from __future__ import annotations

import random
from pathlib import Path
from typing import List, Optional

import yaml

DEFAULT_MESSAGES_FILE = Path(__file__).resolve().parent.parent / "data" / "messages.yaml"


class MessageCatalog:
    """Motivational messages shown every few correct answers.

    Each entry may use ``{count}`` for the number of correct answers so far.
    """

    def __init__(self, path: Optional[Path] = None, rng: Optional[random.Random] = None) -> None:
        self._path = path or DEFAULT_MESSAGES_FILE
        self._rng = rng or random.Random()
        self._messages = self._load_messages()

    @property
    def messages(self) -> List[str]:
        return list(self._messages)

    def pick(self, count: int) -> str:
        return self._rng.choice(self._messages).format(count=count)

    def _load_messages(self) -> List[str]:
        if not self._path.exists():
            raise FileNotFoundError(f"Messages file not found: {self._path}")
        raw = yaml.safe_load(self._path.read_text(encoding="utf-8"))
        if not raw or not isinstance(raw, dict):
            raise ValueError(f"{self._path.name}: expected YAML with 'content'")
        content = raw.get("content")
        if content is None:
            raise ValueError(f"{self._path.name}: missing 'content'")
        if isinstance(content, list):
            messages = [str(item).strip() for item in content if str(item).strip()]
        else:
            # allow content as multiline string
            text = str(content).strip()
            messages = [line.strip() for line in text.splitlines() if line.strip()]
        if not messages:
            raise ValueError(f"{self._path.name}: 'content' has no messages")
        return messages
