from __future__ import annotations
from typing import Callable, Generic, Hashable, Iterable, Iterator, Mapping, Optional, Tuple, TypeVar, Union

from .bucketed_map import DEFAULT_BUCKETS
from .growable_map import GrowableHashMap
from .linear_map import LinearMap

K = TypeVar("K")
V = TypeVar("V")
R = TypeVar("R")


class TrackedHashMap(Generic[K, V]):
    """A GrowableHashMap with an O(1) element counter.

    Every size-affecting call is wrapped in ``_measured``: the target
    bucket's size is read before and after the bucket-level operation and
    the difference is added to ``_size``. That yields +1 for a new key, 0
    for an overwrite, -1 for a removed key, without a separate "is it
    present?" lookup and without scanning other buckets. The growth check
    then reads the counter instead of summing the table.

    Counter policy across a rehash is selectable:

    * ``recount_on_rehash=False`` (default) keeps the count as is, since a
      rehash only moves entries.
    * ``recount_on_rehash=True`` resets the count to zero and takes the
      number of entries the rehash migrated.

    Invariant: between public calls, ``size() == recount()``.
    """

    __slots__ = ("_inner", "_size", "_recount_on_rehash")

    def __init__(
        self,
        num_buckets: int = DEFAULT_BUCKETS,
        factor: Optional[float] = None,
        hash_function: Optional[Callable[[Hashable], int]] = None,
        recount_on_rehash: bool = False,
    ) -> None:
        self._inner: GrowableHashMap[K, V] = GrowableHashMap(num_buckets, factor, hash_function)
        self._size: int = 0
        self._recount_on_rehash: bool = recount_on_rehash

    # -----------------------------
    # Internal helpers
    # -----------------------------
    def _measured(self, key: K, op: Callable[[LinearMap[K, V]], R]) -> R:
        """Run *op* on the bucket for *key* and fold its size change into ``_size``."""
        bucket = self._inner.table.bucket_for(key)
        before = bucket.size()
        result = op(bucket)
        self._size += bucket.size() - before
        return result

    def _rehash(self) -> None:
        if self._recount_on_rehash:
            self._size = 0
            self._size += self._inner.rehash()
        else:
            self._inner.rehash()

    # -----------------------------
    # Core operations
    # -----------------------------
    def put(self, key: K, value: V) -> Optional[V]:
        """Insert or update *key*; returns the previous value or None."""
        previous = self._measured(key, lambda bucket: bucket.put(key, value))
        while self._inner.needs_rehash(self._size):
            self._rehash()
        return previous

    def remove(self, key: K) -> Optional[V]:
        """Remove *key*; returns its value or None if it was absent."""
        return self._measured(key, lambda bucket: bucket.remove(key))

    def get(self, key: K, default: Optional[V] = None) -> Optional[V]:
        return self._inner.get(key, default)

    def lookup(self, key: K) -> object:
        """Return the stored value or ``MISSING``."""
        return self._inner.lookup(key)

    def contains(self, key: K) -> bool:
        return self._inner.contains(key)

    def size(self) -> int:
        """Total entries. O(1)."""
        return self._size

    def recount(self) -> int:
        """Total entries by summing every bucket. Validation only."""
        return self._inner.table.size()

    def clear(self) -> None:
        self._inner.clear()
        self._size = 0

    def update(self, pairs: Union[Mapping[K, V], Iterable[Tuple[K, V]]]) -> None:
        """Put every pair from a mapping or an iterable of (key, value)."""
        if hasattr(pairs, "items"):
            pairs = pairs.items()  # type: ignore[union-attr]
        for k, v in pairs:
            self.put(k, v)

    @property
    def bucket_count(self) -> int:
        return self._inner.bucket_count

    @property
    def factor(self) -> float:
        return self._inner.factor

    def load_factor(self) -> float:
        return self._size / self._inner.bucket_count

    # -----------------------------
    # Iteration helpers
    # -----------------------------
    def items(self) -> Iterator[Tuple[K, V]]:
        return self._inner.items()

    def keys(self) -> Iterator[K]:
        return self._inner.keys()

    def values(self) -> Iterator[V]:
        return self._inner.values()

    def __len__(self) -> int:
        return self._size

    def __contains__(self, key: K) -> bool:  # pragma: no cover - trivial
        return self.contains(key)

    def __iter__(self) -> Iterator[K]:  # pragma: no cover - simple
        return self.keys()

    def __repr__(self) -> str:  # pragma: no cover - trivial
        pairs = ", ".join(f"{k!r}: {v!r}" for k, v in self.items())
        return f"TrackedHashMap({{{pairs}}})"
