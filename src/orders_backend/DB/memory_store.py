# orders_backend/DB/memory_store.py
from __future__ import annotations
import copy
from typing import Any, Dict, Iterator, Optional


class MemoryStore:
    """Simple in-memory key-value store (useful for tests or ephemeral runs)."""
    def __init__(self, initial: Optional[Dict[str, Any]] = None) -> None:
        self._rows: Dict[str, Any] = copy.deepcopy(initial) if initial else {}

    # R
    def get(self, key: str, default: Any = None) -> Any:
        if key not in self._rows:
            return default
        return copy.deepcopy(self._rows[key])

    def keys(self) -> Iterator[str]:
        return iter(list(self._rows))

    # W
    def set(self, key: str, value: Any) -> None:
        self._rows[key] = copy.deepcopy(value)

    # D
    def delete(self, key: str) -> None:
        self._rows.pop(key, None)

    def close(self) -> None:
        self._rows.clear()
