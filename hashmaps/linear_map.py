from __future__ import annotations
from typing import Generic, Iterator, List, Optional, Tuple, TypeVar

from .base import MISSING

K = TypeVar("K")
V = TypeVar("V")


class _Entry(Generic[K, V]):
    """A single key/value pair held by a LinearMap."""

    __slots__ = ("key", "value")

    def __init__(self, key: K, value: V) -> None:
        self.key = key
        self.value = value


class LinearMap(Generic[K, V]):
    """Unordered association list over (key, value) entries.

    Lookup is a linear scan, so this is only meant as a small sub-map
    (one bucket of a BucketedMap). ``size()`` is O(1) because it reads the
    length of the underlying list.
    """

    __slots__ = ("_entries",)

    def __init__(self) -> None:
        self._entries: List[_Entry[K, V]] = []

    # -----------------------------
    # Internal helpers
    # -----------------------------
    def _index_of(self, key: K) -> int:
        """Return the position of *key*, or -1 when absent."""
        for i, entry in enumerate(self._entries):
            if entry.key == key:
                return i
        return -1

    def lookup(self, key: K) -> object:
        """Return the stored value or ``MISSING``."""
        i = self._index_of(key)
        return MISSING if i < 0 else self._entries[i].value

    # -----------------------------
    # Core operations
    # -----------------------------
    def get(self, key: K, default: Optional[V] = None) -> Optional[V]:
        """Retrieve value for key or return default."""
        found = self.lookup(key)
        return default if found is MISSING else found  # type: ignore[return-value]

    def contains(self, key: K) -> bool:
        return self._index_of(key) >= 0

    def put(self, key: K, value: V) -> Optional[V]:
        """Insert *key* or overwrite its value in place.

        Returns the previous value, or None if the key was new.
        """
        i = self._index_of(key)
        if i < 0:
            self._entries.append(_Entry(key, value))
            return None
        entry = self._entries[i]
        previous = entry.value
        entry.value = value
        return previous

    def remove(self, key: K) -> Optional[V]:
        """Remove *key* and return its value (None if absent).

        Order is not preserved: the last entry is moved into the hole.
        """
        i = self._index_of(key)
        if i < 0:
            return None
        entries = self._entries
        removed = entries[i]
        entries[i] = entries[-1]
        entries.pop()
        return removed.value

    def size(self) -> int:
        """Number of entries. O(1)."""
        return len(self._entries)

    def clear(self) -> None:
        self._entries.clear()

    # -----------------------------
    # Iteration helpers
    # -----------------------------
    def items(self) -> Iterator[Tuple[K, V]]:
        for entry in self._entries:
            yield (entry.key, entry.value)

    def keys(self) -> Iterator[K]:
        for entry in self._entries:
            yield entry.key

    def values(self) -> Iterator[V]:
        for entry in self._entries:
            yield entry.value

    def __len__(self) -> int:  # pragma: no cover - trivial
        return self.size()

    def __iter__(self) -> Iterator[K]:  # pragma: no cover - simple
        return self.keys()

    def __repr__(self) -> str:  # pragma: no cover - trivial
        pairs = ", ".join(f"{k!r}: {v!r}" for k, v in self.items())
        return f"LinearMap({{{pairs}}})"
