from __future__ import annotations
from typing import Callable, Generic, Hashable, Iterator, List, Optional, Tuple, TypeVar

from .linear_map import LinearMap

K = TypeVar("K")
V = TypeVar("V")

# Bucket count a fresh map starts with.
DEFAULT_BUCKETS = 2


class BucketedMap(Generic[K, V]):
    """A fixed-length array of LinearMap buckets.

    Each key is routed to exactly one bucket by ``choose_map`` and every
    operation is delegated to that bucket. The bucket count never changes
    for the lifetime of an instance; growth is handled a layer up by
    swapping in a larger BucketedMap.

    ``size()`` here is the naive sum over all buckets. It is O(bucket_count)
    and must stay off any per-insert path.
    """

    __slots__ = ("_buckets", "_hash")

    def __init__(
        self,
        num_buckets: int = DEFAULT_BUCKETS,
        hash_function: Optional[Callable[[Hashable], int]] = None,
    ) -> None:
        if num_buckets < 1:
            raise ValueError("num_buckets must be >= 1")
        self._hash: Callable[[Hashable], int] = hash_function or hash
        self._buckets: List[LinearMap[K, V]] = [LinearMap() for _ in range(num_buckets)]

    # -----------------------------
    # Routing
    # -----------------------------
    @property
    def bucket_count(self) -> int:
        return len(self._buckets)

    @property
    def hash_function(self) -> Callable[[Hashable], int]:
        return self._hash

    def choose_map(self, key: K) -> int:
        """Bucket index for *key*: its hash reduced modulo the bucket count."""
        return self._hash(key) % len(self._buckets)

    def bucket_for(self, key: K) -> LinearMap[K, V]:
        return self._buckets[self.choose_map(key)]

    def buckets(self) -> Iterator[LinearMap[K, V]]:
        return iter(self._buckets)

    # -----------------------------
    # Core operations
    # -----------------------------
    def get(self, key: K, default: Optional[V] = None) -> Optional[V]:
        return self.bucket_for(key).get(key, default)

    def lookup(self, key: K) -> object:
        return self.bucket_for(key).lookup(key)

    def contains(self, key: K) -> bool:
        return self.bucket_for(key).contains(key)

    def put(self, key: K, value: V) -> Optional[V]:
        return self.bucket_for(key).put(key, value)

    def remove(self, key: K) -> Optional[V]:
        return self.bucket_for(key).remove(key)

    def size(self) -> int:
        """Total entries, summed bucket by bucket. O(bucket_count)."""
        total = 0
        for bucket in self._buckets:
            total += bucket.size()
        return total

    def clear(self) -> None:
        """Empty every bucket. The bucket count is kept."""
        for bucket in self._buckets:
            bucket.clear()

    # -----------------------------
    # Iteration helpers
    # -----------------------------
    def items(self) -> Iterator[Tuple[K, V]]:
        for bucket in self._buckets:
            yield from bucket.items()

    def keys(self) -> Iterator[K]:
        for k, _ in self.items():
            yield k

    def values(self) -> Iterator[V]:
        for _, v in self.items():
            yield v

    def __len__(self) -> int:  # pragma: no cover - trivial
        return self.size()

    def __iter__(self) -> Iterator[K]:  # pragma: no cover - simple
        return self.keys()

    def __repr__(self) -> str:  # pragma: no cover - trivial
        pairs = ", ".join(f"{k!r}: {v!r}" for k, v in self.items())
        return f"BucketedMap({{{pairs}}})"
