"""Cache-and-refetch layer for server data."""

from __future__ import annotations

from typing import Any, Callable, Hashable

QueryKey = tuple[Hashable, ...]


class QueryCache:
    """Keep query results until they are invalidated.

    Keys are tuples such as ``("reports", "zone", "Ward 15")``. Invalidating
    a prefix marks every key that starts with it as stale; stale entries are
    reloaded on the next ``fetch``.
    """

    def __init__(self):
        self._entries: dict[QueryKey, Any] = {}
        self._stale: set[QueryKey] = set()

    def fetch(self, key: QueryKey, loader: Callable[[], Any]) -> Any:
        if key in self._entries and key not in self._stale:
            return self._entries[key]
        value = loader()
        self.set(key, value)
        return value

    def get(self, key: QueryKey, default: Any = None) -> Any:
        return self._entries.get(key, default)

    def set(self, key: QueryKey, value: Any) -> None:
        self._entries[key] = value
        self._stale.discard(key)

    def is_stale(self, key: QueryKey) -> bool:
        return key not in self._entries or key in self._stale

    def invalidate(self, prefix: QueryKey = ()) -> int:
        """Mark matching entries stale and return how many were affected."""

        matched = [key for key in self._entries if key[: len(prefix)] == prefix]
        self._stale.update(matched)
        return len(matched)

    def clear(self) -> None:
        self._entries.clear()
        self._stale.clear()

    def __contains__(self, key: QueryKey) -> bool:
        return key in self._entries
