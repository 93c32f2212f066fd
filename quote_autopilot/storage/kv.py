"""String key-value stores the repositories persist into."""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Dict, List, Optional, Protocol

logger = logging.getLogger(__name__)


class KeyValueStore(Protocol):
    def get(self, key: str) -> Optional[str]:
        ...

    def put(self, key: str, value: str) -> None:
        ...

    def delete(self, key: str) -> None:
        ...

    def list(self, prefix: str = "") -> List[str]:
        ...


class InMemoryKeyValueStore:
    """Dictionary-backed store for tests and one-off runs."""

    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def put(self, key: str, value: str) -> None:
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def list(self, prefix: str = "") -> List[str]:
        return sorted(key for key in self._data if key.startswith(prefix))


class JsonFileKeyValueStore(InMemoryKeyValueStore):
    """Store every key in one JSON document, rewritten after each change.

    Good enough for a single CLI process; concurrent writers overwrite each
    other.
    """

    def __init__(self, path: Path) -> None:
        self.path = Path(path)
        super().__init__(self._load())

    def _load(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        with self.path.open(encoding="utf-8") as handle:
            data = json.load(handle)
        if not isinstance(data, dict):
            raise ValueError(f"{self.path} does not contain a JSON object")
        logger.debug("Loaded %d key(s) from %s", len(data), self.path)
        return {str(key): str(value) for key, value in data.items()}

    def _flush(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        with tmp_path.open("w", encoding="utf-8") as handle:
            json.dump(self._data, handle, ensure_ascii=False, indent=2, sort_keys=True)
        tmp_path.replace(self.path)

    def put(self, key: str, value: str) -> None:
        super().put(key, value)
        self._flush()

    def delete(self, key: str) -> None:
        super().delete(key)
        self._flush()
