"""
Key-value persistence for the dashboard.

Each key holds one JSON document. The engine never talks to a store
directly; repositories in storage.repositories do.
"""

import json
import logging
import os
import tempfile
from typing import Any, Dict, Optional, Protocol

logger = logging.getLogger(__name__)


class KeyValueStore(Protocol):
    def load(self, key: str, default: Any) -> Any: ...

    def save(self, key: str, value: Any) -> None: ...


class InMemoryStore:
    """Dict-backed store. Values are round-tripped through JSON like the file store."""

    def __init__(self, initial: Optional[Dict[str, Any]] = None):
        self._data: Dict[str, str] = {}
        for key, value in (initial or {}).items():
            self.save(key, value)

    def load(self, key: str, default: Any) -> Any:
        if key not in self._data:
            return default
        return json.loads(self._data[key])

    def save(self, key: str, value: Any) -> None:
        self._data[key] = json.dumps(value)


class JsonFileStore:
    """One '<key>.json' file per key inside a directory."""

    def __init__(self, directory: str):
        self.directory = directory

    def _path(self, key: str) -> str:
        return os.path.join(self.directory, f"{key}.json")

    def load(self, key: str, default: Any) -> Any:
        path = self._path(key)
        try:
            with open(path, "r", encoding="utf-8") as f:
                return json.load(f)
        except FileNotFoundError:
            return default
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            # A corrupted file shouldn't brick the dashboard; start from the default.
            logger.warning(f"Could not read {path}: {e}. Using default value.")
            return default

    def save(self, key: str, value: Any) -> None:
        os.makedirs(self.directory, exist_ok=True)

        # Atomic write
        with tempfile.NamedTemporaryFile(
            "w", delete=False, encoding="utf-8", dir=self.directory, suffix=".tmp"
        ) as tf:
            tmp_name = tf.name
            try:
                json.dump(value, tf, ensure_ascii=False, indent=2)
            except Exception:
                tf.close()
                os.unlink(tmp_name)
                raise

        os.replace(tmp_name, self._path(key))
        logger.debug(f"Saved {key} to {self._path(key)}")
