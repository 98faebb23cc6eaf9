# orders_backend/DB/api.py
from __future__ import annotations
from typing import Any, Iterator, Protocol

from .json_store import JsonFileStore
from .memory_store import MemoryStore


class DataStore(Protocol):
    # Read
    def get(self, key: str, default: Any = None) -> Any: ...
    def keys(self) -> Iterator[str]: ...
    # Write
    def set(self, key: str, value: Any) -> None: ...
    def delete(self, key: str) -> None: ...
    # lifecycle
    def close(self) -> None: ...


def make_store(dsn: str) -> DataStore:
    """
    Factory:
      - json:///path/to/data.json -> JsonFileStore (file created on first write)
      - memory://                 -> MemoryStore
    """
    if dsn.startswith("json:///"):
        path = dsn.removeprefix("json:///")
        if not path:
            raise ValueError(f"Store DSN is missing a path: {dsn}")
        return JsonFileStore(path)

    if dsn.startswith("memory://"):
        return MemoryStore()

    raise ValueError(f"Unsupported store DSN: {dsn}")
