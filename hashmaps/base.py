from __future__ import annotations
from typing import Iterator, Optional, Protocol, Tuple, TypeVar, runtime_checkable

K = TypeVar("K")
V = TypeVar("V")


class _Missing:
    """Marker for "no entry", distinct from a stored ``None``."""

    __slots__ = ()

    def __repr__(self) -> str:  # pragma: no cover - trivial
        return "MISSING"


MISSING = _Missing()


@runtime_checkable
class SupportsMap(Protocol[K, V]):
    """The small capability surface every map layer exposes."""

    def get(self, key: K, default: Optional[V] = None) -> Optional[V]: ...

    def lookup(self, key: K) -> object: ...

    def put(self, key: K, value: V) -> Optional[V]: ...

    def remove(self, key: K) -> Optional[V]: ...

    def contains(self, key: K) -> bool: ...

    def size(self) -> int: ...

    def clear(self) -> None: ...

    def items(self) -> Iterator[Tuple[K, V]]: ...
