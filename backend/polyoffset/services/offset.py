"""
Polygon offsetting using winding numbers.

``offset_polygon`` expands (positive offset) or shrinks (negative
offset) a simple closed ring.  The raw offset contour is built by
:mod:`.contour`, its self‑intersections are resolved by :mod:`.regions`
and the regions wound exactly once by the resolved contour are
returned.  Shrinking a polygon past its thinnest section therefore
yields several rings, and shrinking it past its inradius yields none.

Example::

    offset_polygon([(0.0, 0.0), (1.0, 0.0), (1.0, 1.0), (0.0, 0.0)], -0.1, 10.0)
    # approximately [[(0.9, 0.1), (0.9, 0.7585786437626904), (0.24142135623730954, 0.1), (0.9, 0.1)]]

Input rings must be closed (the last point equal to the first); open
or self‑intersecting input rings produce unspecified results.
"""

from __future__ import annotations

import logging
import os
from typing import List, Sequence, Tuple

from .contour import build_offset_contour
from .offset_cache import OffsetCacheKey, get_offset_from_cache, put_offset_in_cache
from .regions import RegionResolver

logger = logging.getLogger(__name__)

Point = Tuple[float, float]
Ring = List[Point]


def _as_ring(ring: Sequence[Sequence[float]]) -> Ring:
    """Coerce any sequence of coordinate pairs (including numpy arrays) to float tuples."""
    return [(float(p[0]), float(p[1])) for p in ring]


def offset_polygon(ring: Sequence[Sequence[float]], offset: float, arc_resolution: float) -> List[Ring]:
    """Expand or shrink ``ring`` by ``offset``.

    Args:
        ring: Closed ring of ``(x, y)`` points.  Tuples, lists and
            ``(n, 2)`` numpy arrays are accepted.
        offset: Positive values expand the polygon, negative values
            shrink it.  Zero is allowed.
        arc_resolution: Number of vertices a full circle would have; sets
            how densely concave corners are rounded.  Must be positive.

    Returns:
        One closed ring per region of the offset polygon.  An empty ring,
        or one whose edges all have zero length, yields ``[[]]``.

    Raises:
        CombinatorialExplosionError: Too many self‑intersections were
            found while resolving the contour.
        ValueError: If ``arc_resolution`` is not positive.
    """
    points = _as_ring(ring)
    if not points:
        return [[]]
    contour = build_offset_contour(points, float(offset), float(arc_resolution))
    if not contour:
        return [[]]
    rings = RegionResolver(contour).resolve()
    if os.getenv("OFFSET_DEBUG"):
        logger.debug(
            "offset_polygon: input=%d offset=%s rings=%d points=%s",
            len(points),
            offset,
            len(rings),
            [len(r) for r in rings],
        )
    return rings


def offset_polygon_cached(
    ring: Sequence[Sequence[float]],
    offset: float,
    arc_resolution: float,
) -> Tuple[List[Ring], bool]:
    """Like :func:`offset_polygon` but memoised in the offset cache.

    Returns:
        A tuple ``(rings, cached)`` where ``cached`` tells whether the
        rings came from the cache.
    """
    key = OffsetCacheKey.from_ring(ring, offset, arc_resolution)
    rings = get_offset_from_cache(key)
    if rings is not None:
        return rings, True
    rings = offset_polygon(key.ring, key.offset, key.arc_resolution)
    put_offset_in_cache(key, rings)
    return rings, False


def polygon_area(points: Sequence[Point]) -> float:
    """Compute the signed area of a ring using the shoelace formula.

    A duplicated closing point contributes nothing, so open and closed
    rings give the same result.  The area is positive for
    counter‑clockwise rings and negative for clockwise ones.
    """
    n = len(points)
    if n < 3:
        return 0.0
    area = 0.0
    for i in range(n):
        x0, y0 = points[i]
        x1, y1 = points[(i + 1) % n]
        area += x0 * y1 - x1 * y0
    return 0.5 * area
