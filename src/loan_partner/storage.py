"""Durable local key-value storage.

One JSON document per key inside a data directory. Reads never fail: absent
or corrupt entries return the caller's fallback. Writes are best-effort; a
failed write is logged and the in-memory state stays as it is.

Several sessions sharing a directory overwrite each other (last write wins).
"""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


class LocalStore:
    def __init__(self, directory: Path) -> None:
        self.directory = Path(directory)

    def path_for(self, key: str) -> Path:
        return self.directory / f"{key}.json"

    def load(self, key: str, fallback: Any) -> Any:
        path = self.path_for(key)
        try:
            raw = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return fallback
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning("Could not read %s: %s", path, exc)
            return fallback
        try:
            return json.loads(raw)
        except ValueError as exc:
            logger.warning("Ignoring corrupt entry %s: %s", key, exc)
            return fallback

    def save(self, key: str, value: Any) -> bool:
        path = self.path_for(key)
        try:
            payload = json.dumps(value, ensure_ascii=False)
        except (TypeError, ValueError) as exc:
            logger.warning("Could not serialize %s: %s", key, exc)
            return False
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            path.write_text(payload, encoding="utf-8")
        except OSError as exc:
            logger.warning("Could not persist %s: %s", key, exc)
            return False
        return True
