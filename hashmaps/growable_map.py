from __future__ import annotations
import logging
from typing import Callable, Generic, Hashable, Iterator, Optional, Tuple, TypeVar

from .bucketed_map import DEFAULT_BUCKETS, BucketedMap

K = TypeVar("K")
V = TypeVar("V")

logger = logging.getLogger(__name__)

# Target maximum average entries per bucket.
DEFAULT_FACTOR = 1.0


class GrowableHashMap(Generic[K, V]):
    """A BucketedMap that doubles its bucket count when it gets too full.

    The table is held by composition and replaced wholesale on ``rehash``.
    The growth check in ``put`` calls the table's summing ``size()``, which
    makes every insert O(bucket_count). TrackedHashMap removes that cost.
    """

    FACTOR = DEFAULT_FACTOR

    __slots__ = ("_table", "_factor")

    def __init__(
        self,
        num_buckets: int = DEFAULT_BUCKETS,
        factor: Optional[float] = None,
        hash_function: Optional[Callable[[Hashable], int]] = None,
    ) -> None:
        if factor is None:
            factor = self.FACTOR
        if factor <= 0:
            raise ValueError("factor must be > 0")
        self._factor: float = factor
        self._table: BucketedMap[K, V] = BucketedMap(num_buckets, hash_function)

    @property
    def table(self) -> BucketedMap[K, V]:
        return self._table

    @property
    def factor(self) -> float:
        return self._factor

    @property
    def bucket_count(self) -> int:
        return self._table.bucket_count

    # -----------------------------
    # Growth policy
    # -----------------------------
    def needs_rehash(self, count: int) -> bool:
        """True when *count* entries would exceed the load-factor threshold."""
        return count > self._table.bucket_count * self._factor

    def rehash(self) -> int:
        """Double the bucket count and redistribute every entry.

        Entries go through the new table's bucket-level ``put``, so no
        growth check or counter runs during migration. Returns the number
        of entries moved.
        """
        old = self._table
        new: BucketedMap[K, V] = BucketedMap(old.bucket_count * 2, old.hash_function)
        moved = 0
        for k, v in old.items():
            new.put(k, v)
            moved += 1
        self._table = new
        logger.debug(
            "Rehashed %d entries from %d to %d buckets", moved, old.bucket_count, new.bucket_count
        )
        return moved

    # -----------------------------
    # Core operations
    # -----------------------------
    def put(self, key: K, value: V) -> Optional[V]:
        """Insert or update, then grow if the load factor is exceeded."""
        previous = self._table.put(key, value)
        while self.needs_rehash(self._table.size()):
            self.rehash()
        return previous

    def get(self, key: K, default: Optional[V] = None) -> Optional[V]:
        return self._table.get(key, default)

    def lookup(self, key: K) -> object:
        return self._table.lookup(key)

    def contains(self, key: K) -> bool:
        return self._table.contains(key)

    def remove(self, key: K) -> Optional[V]:
        return self._table.remove(key)

    def size(self) -> int:
        return self._table.size()

    def clear(self) -> None:
        self._table.clear()

    def load_factor(self) -> float:
        return self.size() / self._table.bucket_count

    # -----------------------------
    # Iteration helpers
    # -----------------------------
    def items(self) -> Iterator[Tuple[K, V]]:
        return self._table.items()

    def keys(self) -> Iterator[K]:
        return self._table.keys()

    def values(self) -> Iterator[V]:
        return self._table.values()

    def __len__(self) -> int:  # pragma: no cover - trivial
        return self.size()

    def __iter__(self) -> Iterator[K]:  # pragma: no cover - simple
        return self.keys()

    def __repr__(self) -> str:  # pragma: no cover - trivial
        pairs = ", ".join(f"{k!r}: {v!r}" for k, v in self.items())
        return f"GrowableHashMap({{{pairs}}})"
