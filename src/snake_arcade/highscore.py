"""High score persistence.

The engine only ever talks to a tiny key-value store holding one named
integer. Storage problems never reach the game loop: a failed read counts as
a best score of 0 and a failed write is logged and dropped.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Dict, Optional, Protocol, Union

from .config import HIGHSCORE_KEY

logger = logging.getLogger(__name__)


class KeyValueStore(Protocol):
    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str) -> None: ...


class MemoryStore:
    """Dict-backed store; nothing survives the process."""

    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        self.data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.data[key] = value


class JsonFileStore:
    """Stores values as a flat JSON object in a single file."""

    def __init__(self, path: Union[str, Path]) -> None:
        self.path = Path(path)

    def _read(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8") or "{}")
        except RecursionError as exc:
            raise ValueError(f"{self.path} is nested too deeply to parse") from exc
        if not isinstance(data, dict):
            raise ValueError(f"{self.path} does not hold a JSON object")
        return data

    def get(self, key: str) -> Optional[str]:
        value = self._read().get(key)
        return None if value is None else str(value)

    def set(self, key: str, value: str) -> None:
        try:
            data = self._read()
        except ValueError:
            # Corrupt file: start over rather than keep failing every save
            data = {}
        data[key] = value
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data, indent=2), encoding="utf-8")


class HighScore:
    """Best score across games. Loaded once, only ever goes up."""

    def __init__(self, store: KeyValueStore, key: str = HIGHSCORE_KEY) -> None:
        self.store = store
        self.key = key
        self.value = 0

    def load(self) -> int:
        try:
            raw = self.store.get(self.key)
            self.value = max(0, int(raw or "0"))
        except (OSError, ValueError) as exc:
            logger.warning("Could not read high score (%s); starting from 0", exc)
            self.value = 0
        return self.value

    def save(self) -> None:
        try:
            self.store.set(self.key, str(self.value))
        except OSError as exc:
            logger.warning("Could not save high score %d: %s", self.value, exc)

    def offer(self, score: int) -> bool:
        """Record ``score`` if it beats the current best. Returns True when it did."""
        if score <= self.value:
            return False
        self.value = score
        self.save()
        return True
