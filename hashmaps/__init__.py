from .base import MISSING, SupportsMap
from .linear_map import LinearMap
from .bucketed_map import BucketedMap
from .growable_map import GrowableHashMap
from .tracked_map import TrackedHashMap
from .dictionary import Dictionary

__all__ = [
    "MISSING",
    "SupportsMap",
    "LinearMap",
    "BucketedMap",
    "GrowableHashMap",
    "TrackedHashMap",
    "Dictionary",
]
