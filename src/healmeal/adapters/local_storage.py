"""JSON file backed key-value storage."""

import json
import logging
from dataclasses import dataclass
from pathlib import Path

from healmeal.services.cart import KeyValueStore

_logger = logging.getLogger(__name__)


@dataclass
class JsonFileStorage(KeyValueStore):
    """Stores string values under keys in a single JSON file."""

    path: Path

    def get(self, key: str) -> str | None:
        """Return the stored value for a key, if any."""
        value = self._read().get(key)
        return value if isinstance(value, str) else None

    def set(self, key: str, value: str) -> None:
        """Store a value under a key, rewriting the file."""
        data = self._read()
        data[key] = value
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data), encoding="utf-8")

    def _read(self) -> dict[str, object]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError):
            _logger.warning("Ignoring unreadable storage file %s", self.path)
            return {}
        return data if isinstance(data, dict) else {}
