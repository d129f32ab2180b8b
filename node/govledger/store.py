# key-value storage used by the ledger
from typing import Dict, Generic, Hashable, Optional, Protocol, TypeVar

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


class KeyValueStore(Protocol[K, V]):
    """
    Minimal storage contract the ledger relies on: get / insert / contains.
    No ordering or iteration is required from a backend.
    """

    def get(self, key: K) -> Optional[V]: ...

    def insert(self, key: K, value: V) -> None: ...

    def contains(self, key: K) -> bool: ...


class MemoryStore(Generic[K, V]):
    def __init__(self) -> None:
        self._data: Dict[K, V] = {}

    def get(self, key: K) -> Optional[V]:
        return self._data.get(key)

    def insert(self, key: K, value: V) -> None:
        # insert overwrites an existing entry
        self._data[key] = value

    def contains(self, key: K) -> bool:
        return key in self._data

    def __len__(self) -> int:
        return len(self._data)
