"""
Winding‑number containment test used to classify candidate regions.

Based on the crossing rule described at geomalgorithms.com (a03,
"inclusion of a point in a polygon"): every upward edge crossing with
the query point on its left adds one, every downward crossing with the
point on its right subtracts one.  A small negative tolerance is folded
into the left/right comparison so that points lying on, or a hair to
the right of, an upward edge still count as inside.  The offset
contour places many region midpoints exactly on the resolved boundary,
which is why the tolerance matters.
"""

from __future__ import annotations

from typing import Optional, Sequence, Tuple

import numpy as np

Point = Tuple[float, float]

WINDING_TOLERANCE: float = -0.00001
# Edges flatter than this in Y are skipped when picking a region's
# representative point.
REGION_Y_TOLERANCE: float = 0.01


def is_left(p0, p1, p2):
    """Cross product telling on which side of ``p0→p1`` the point ``p2`` lies.

    Positive when ``p2`` is left of the directed line, negative when it
    is right and zero when collinear.  Accepts single points or arrays of
    shape ``(n, 2)``; arrays broadcast against single points.
    """
    p0 = np.asarray(p0, dtype=np.float64)
    p1 = np.asarray(p1, dtype=np.float64)
    p2 = np.asarray(p2, dtype=np.float64)
    return (p1[..., 0] - p0[..., 0]) * (p2[..., 1] - p0[..., 1]) - (
        p2[..., 0] - p0[..., 0]
    ) * (p1[..., 1] - p0[..., 1])


def winding_number(point: Point, ring: Sequence[Point]) -> int:
    """Signed number of times the closed ``ring`` winds around ``point``."""
    if len(ring) < 2:
        return 0
    pts = np.asarray(ring, dtype=np.float64)
    p0 = pts[:-1]
    p1 = pts[1:]
    py = point[1]
    left = is_left(p0, p1, point)
    upward = (p0[:, 1] <= py) & (p1[:, 1] > py) & (left >= WINDING_TOLERANCE)
    downward = (p0[:, 1] > py) & (p1[:, 1] <= py) & (left < WINDING_TOLERANCE)
    return int(np.count_nonzero(upward)) - int(np.count_nonzero(downward))


def representative_point(region: Sequence[Point]) -> Optional[Point]:
    """Midpoint of the first edge of ``region`` that is not near horizontal.

    Horizontal edges are unreliable for the crossing rule because their
    midpoints share a Y value with both endpoints.  Returns ``None`` when
    every edge is flatter than :data:`REGION_Y_TOLERANCE`.
    """
    for idx in range(len(region) - 1):
        x0, y0 = region[idx]
        x1, y1 = region[idx + 1]
        if abs(y1 - y0) > REGION_Y_TOLERANCE:
            return ((x0 + x1) * 0.5, (y0 + y1) * 0.5)
    return None


def is_offset_region(region: Sequence[Point], boundary: Sequence[Point]) -> bool:
    """Whether ``region`` belongs to the offset polygon.

    A region is kept when its representative point is wound exactly once
    by the crossing‑resolved ``boundary``.  Regions wound zero times lie
    outside the offset; regions wound two or more times are overlaps
    created by the offset folding over itself.
    """
    pt = representative_point(region)
    if pt is None:
        return False
    return winding_number(pt, boundary) == 1
