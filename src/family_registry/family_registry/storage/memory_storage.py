from __future__ import annotations

from typing import Mapping, Optional

from .repository import KeyValueStorage


class InMemoryKeyValueStorage(KeyValueStorage):
    """Process-local storage for development and tests. Nothing survives a restart."""

    def __init__(self, initial: Optional[dict[str, str]] = None):
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def set_many(self, items: Mapping[str, str]) -> None:
        self._data.update(items)

    def remove(self, key: str) -> None:
        self._data.pop(key, None)
