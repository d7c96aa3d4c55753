from __future__ import annotations
from typing import Generic, Iterable, Iterator, List, Optional, Tuple, TypeVar

from .base import MISSING, SupportsMap
from .tracked_map import TrackedHashMap

K = TypeVar("K")
V = TypeVar("V")


class Dictionary(Generic[K, V]):
    """A dict-like wrapper over any :class:`SupportsMap`, a TrackedHashMap by default.

    Unlike the map layers, which report a missing key with a default,
    subscripting raises ``KeyError`` the way a built-in ``dict`` does.
    ``len()`` is O(1).
    """

    __slots__ = ("_map",)

    def __init__(
        self,
        it: Optional[Iterable[Tuple[K, V]]] = None,
        backing: Optional[SupportsMap[K, V]] = None,
        **kwargs: V,
    ) -> None:
        self._map: SupportsMap[K, V] = backing if backing is not None else TrackedHashMap()
        if it is not None:
            # Accept dict-like or iterable of pairs
            pairs = it.items() if hasattr(it, "items") else it  # type: ignore[attr-defined]
            for k, v in pairs:
                self[k] = v
        for k, v in kwargs.items():
            self[k] = v  # type: ignore[index]

    def __setitem__(self, key: K, value: V) -> None:
        self._map.put(key, value)

    def __getitem__(self, key: K) -> V:
        val = self._map.lookup(key)
        if val is MISSING:
            raise KeyError(key)
        return val  # type: ignore[return-value]

    def __delitem__(self, key: K) -> None:
        self.pop(key)

    def get(self, key: K, default: Optional[V] = None) -> Optional[V]:
        return self._map.get(key, default)

    def pop(self, key: K, default: object = MISSING) -> object:
        """Remove *key* and return its value.

        Raises KeyError when the key is absent and no default was given.
        """
        # A single remove; a stored None is told apart by the size change
        before = self._map.size()
        value = self._map.remove(key)
        if self._map.size() == before:
            if default is MISSING:
                raise KeyError(key)
            return default
        return value

    def clear(self) -> None:
        self._map.clear()

    def __contains__(self, key: K) -> bool:  # pragma: no cover - trivial
        return self._map.contains(key)

    def keys(self) -> List[K]:
        # Materialized so callers may mutate while walking the result
        return [k for k, _ in self._map.items()]

    def values(self) -> List[V]:
        return [v for _, v in self._map.items()]

    def items(self) -> List[Tuple[K, V]]:
        return list(self._map.items())

    def __len__(self) -> int:  # pragma: no cover - trivial
        return self._map.size()

    def to_py(self) -> dict[K, V]:
        """Convert to a native *dict*; recursively uses ``to_py`` when present."""
        d: dict[K, V] = {}
        for k, v in self._map.items():
            if hasattr(v, "to_py") and callable(getattr(v, "to_py")):
                d[k] = v.to_py()  # type: ignore[attr-defined]
            else:
                d[k] = v
        return d

    def __iter__(self) -> Iterator[K]:  # pragma: no cover - simple
        return iter(self.keys())

    def __repr__(self) -> str:  # pragma: no cover - trivial
        return f"Dictionary({self.to_py()!r})"
