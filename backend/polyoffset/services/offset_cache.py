"""
Simple in‑memory caching layer for offset results.

Offsetting a detailed ring with a fine arc resolution can be expensive
because every contour edge is intersected with every other one, so
repeated requests for identical parameters reuse previously computed
rings.  An ``OffsetCacheKey`` uniquely identifies a request by the input
ring, the signed offset (including the sign of a zero offset) and the
arc resolution.

The cache is implemented as an ``OrderedDict`` to provide
least‑recently‑used (LRU) eviction.  When the number of cached entries
exceeds ``MAX_CACHE_ENTRIES`` the oldest entry is dropped.  Entries are
stored and returned as copies so callers cannot alter cached rings.

Usage::

    from .offset_cache import OffsetCacheKey, get_offset_from_cache, put_offset_in_cache
    key = OffsetCacheKey.from_ring(ring, offset=-2.0, arc_resolution=32.0)
    rings = get_offset_from_cache(key)
    if rings is None:
        rings = offset_polygon(ring, -2.0, 32.0)
        put_offset_in_cache(key, rings)

"""

from __future__ import annotations

import math
from collections import OrderedDict
from dataclasses import dataclass
from threading import RLock
from typing import List, Optional, Sequence, Tuple

Point = Tuple[float, float]
Ring = List[Point]


@dataclass(frozen=True)
class OffsetCacheKey:
    """Unique identifier for a cached offset result.

    Attributes:
        ring: Input ring as a tuple of ``(x, y)`` float pairs.
        offset: Signed offset distance.
        offset_sign: ``copysign(1.0, offset)``; keeps ``0.0`` and ``-0.0``
            apart since they compare equal but offset in opposite directions.
        arc_resolution: Arc samples per full turn.
    """

    ring: Tuple[Point, ...]
    offset: float
    arc_resolution: float
    offset_sign: float = 1.0

    @classmethod
    def from_ring(cls, ring: Sequence[Sequence[float]], offset: float, arc_resolution: float) -> "OffsetCacheKey":
        return cls(
            ring=tuple((float(p[0]), float(p[1])) for p in ring),
            offset=float(offset),
            arc_resolution=float(arc_resolution),
            offset_sign=math.copysign(1.0, float(offset)),
        )


_cache: "OrderedDict[OffsetCacheKey, List[Ring]]" = OrderedDict()
_lock = RLock()
# Maximum number of entries retained in the cache.  Once this limit
# is reached the least recently used entry is evicted on insertion of
# a new entry.
MAX_CACHE_ENTRIES: int = 32


def _copy_rings(rings: List[Ring]) -> List[Ring]:
    return [list(ring) for ring in rings]


def get_offset_from_cache(key: OffsetCacheKey) -> Optional[List[Ring]]:
    """Retrieve cached offset rings if available.

    Args:
        key: Cache key identifying the request.

    Returns:
        A copy of the cached rings, otherwise ``None``.
    """
    with _lock:
        rings = _cache.get(key)
        if rings is None:
            return None
        _cache.move_to_end(key)
        return _copy_rings(rings)


def put_offset_in_cache(key: OffsetCacheKey, rings: List[Ring]) -> None:
    """Store offset rings, evicting the least recently used entry when full."""
    with _lock:
        _cache[key] = _copy_rings(rings)
        _cache.move_to_end(key)
        if len(_cache) > MAX_CACHE_ENTRIES:
            _cache.popitem(last=False)


def clear_offset_cache() -> None:
    with _lock:
        _cache.clear()


def offset_cache_size() -> int:
    with _lock:
        return len(_cache)
