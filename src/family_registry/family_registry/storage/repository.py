from __future__ import annotations

from typing import Mapping, Optional, Protocol


class KeyValueStorage(Protocol):
    """Key-value storage holding the persisted registry snapshot.

    Note (DIP): services and repositories depend on this interface, never on a concrete backend.
    """

    def get(self, key: str) -> Optional[str]:
        raise NotImplementedError

    def set(self, key: str, value: str) -> None:
        raise NotImplementedError

    def set_many(self, items: Mapping[str, str]) -> None:
        """Write several keys at once: either all of them are stored or none is."""
        raise NotImplementedError

    def remove(self, key: str) -> None:
        raise NotImplementedError
