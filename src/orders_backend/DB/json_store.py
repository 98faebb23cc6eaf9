# orders_backend/DB/json_store.py
from __future__ import annotations
import json
import logging
import os
from typing import Any, Dict, Iterator

log = logging.getLogger(__name__)


def _read(path: str) -> Dict[str, Any]:
    """Load the whole file; a missing or unreadable file is an empty store."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError:
        return {}
    except (OSError, ValueError) as exc:
        log.error("Ignoring unreadable store %s: %s", path, exc)
        return {}
    if not isinstance(data, dict):
        log.error("Ignoring store %s: top-level value is not an object", path)
        return {}
    return data


def _write(path: str, data: Dict[str, Any]) -> None:
    tmp = f"{path}.tmp"
    os.makedirs(os.path.dirname(os.path.abspath(path)), exist_ok=True)
    with open(tmp, "w", encoding="utf-8") as f:
        json.dump(data, f, ensure_ascii=False, indent=2)
    os.replace(tmp, path)


class JsonFileStore:
    """
    Key-value store persisted as one JSON object per file.

    Every set()/delete() rewrites the file atomically (tmp + replace); the
    in-memory rows only change once the write has succeeded.
    """
    def __init__(self, path: str) -> None:
        self.path = path
        self._rows: Dict[str, Any] = _read(path)
        log.info("Opened JSON store %s (%d keys)", path, len(self._rows))

    def get(self, key: str, default: Any = None) -> Any:
        if key not in self._rows:
            return default
        # hand out a copy; callers must go through set()
        return json.loads(json.dumps(self._rows[key]))

    def keys(self) -> Iterator[str]:
        return iter(list(self._rows))

    def set(self, key: str, value: Any) -> None:
        rows = {**self._rows, key: json.loads(json.dumps(value, ensure_ascii=False))}
        _write(self.path, rows)
        self._rows = rows

    def delete(self, key: str) -> None:
        if key in self._rows:
            rows = {k: v for k, v in self._rows.items() if k != key}
            _write(self.path, rows)
            self._rows = rows

    def close(self) -> None:
        self._rows = {}
