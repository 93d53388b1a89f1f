# ledger/client/cache.py
from typing import Any, Callable, Dict, Hashable, Tuple

Key = Tuple[Hashable, ...]


class QueryCache:
    """Query results keyed by tuples whose first item is the collection path.

    Construct one per process and hand the same instance to everything that
    reads or mutates data; ``invalidate`` drops every key under a prefix.
    """

    def __init__(self) -> None:
        self._entries: Dict[Key, Any] = {}

    def __contains__(self, key: Key) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, key: Key, default: Any = None) -> Any:
        return self._entries.get(key, default)

    def set(self, key: Key, value: Any) -> None:
        self._entries[key] = value

    def fetch(self, key: Key, loader: Callable[[], Any]) -> Any:
        if key not in self._entries:
            self._entries[key] = loader()
        return self._entries[key]

    def invalidate(self, *prefix: Hashable) -> int:
        stale = [k for k in self._entries if k[: len(prefix)] == prefix]
        for k in stale:
            del self._entries[k]
        return len(stale)

    def clear(self) -> None:
        self._entries.clear()
