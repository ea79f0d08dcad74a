"""
Segment–polyline intersection primitive.

``intersect`` finds the nearest crossing of a directed query segment
with any edge of an open reference polyline.  Both parameters of the
classic two‑segment formulation are computed: ``u`` runs along the
query segment and ``t`` along the reference edge that was hit.  The
reference edges are evaluated together with numpy; the arithmetic is
the same element‑wise IEEE double arithmetic as a scalar loop, so
results do not depend on the vectorisation.

When ``exclude_points`` is set the accepted ``t`` window is narrowed so
that touching a reference edge at (or extremely close to) one of its
endpoints is not reported.  The region resolver relies on this to avoid
treating a shared vertex of two consecutive edges as a crossing.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

import numpy as np

Point = Tuple[float, float]

EPSILON: float = sys.float_info.epsilon

# Reference‑edge parameter window used when endpoint touches are excluded.
EXCLUDE_T_MIN: float = 0.00001
EXCLUDE_T_MAX: float = 0.999999


@dataclass(frozen=True)
class IntersectionResult:
    """Nearest accepted crossing of a query segment.

    Attributes:
        u: Parameter along the query segment (0 at start, 1 at end).
        t: Parameter along the reference edge that was crossed.
        point: Coordinates of the crossing, ``start + u * (end - start)``.
        index: Index of the crossed edge within the reference polyline
            (edge ``i`` joins points ``i`` and ``i + 1``).
    """

    u: float
    t: float
    point: Point
    index: int


def cross_product(a: Sequence[float], b: Sequence[float]) -> float:
    """Z component of the 2D cross product ``a × b``."""
    return a[0] * b[1] - a[1] * b[0]


def intersect(
    start: Point,
    end: Point,
    line: Sequence[Point],
    exclude_points: bool = False,
) -> Optional[IntersectionResult]:
    """Return the crossing nearest to ``start`` of ``start→end`` with ``line``.

    Near‑parallel edges (``|r × s| < EPSILON``) are ignored.  A candidate
    is accepted when ``EPSILON <= u <= 1`` and ``t`` lies on the reference
    edge: ``[0, 1]`` normally (a negative zero counts as outside), or
    ``[0.00001, 0.999999]`` with ``exclude_points``.  Among accepted
    candidates the smallest ``u`` wins; on a tie the later edge wins.

    Args:
        start: Start of the query segment.
        end: End of the query segment.
        line: Open reference polyline.  Fewer than two points yields
            ``None``.
        exclude_points: Reject touches at the reference edges' endpoints.

    Returns:
        An :class:`IntersectionResult` or ``None`` if nothing was hit.
    """
    if len(line) < 2:
        return None
    pts = np.asarray(line, dtype=np.float64)
    p0 = pts[:-1]
    p1 = pts[1:]

    sx = end[0] - start[0]
    sy = end[1] - start[1]
    rx = p1[:, 0] - p0[:, 0]
    ry = p1[:, 1] - p0[:, 1]
    rxs = rx * sy - ry * sx
    qx = start[0] - p0[:, 0]
    qy = start[1] - p0[:, 1]

    with np.errstate(divide="ignore", invalid="ignore"):
        u = (qx * ry - qy * rx) / rxs
        t = (qx * sy - qy * sx) / rxs

    accepted = np.abs(rxs) >= EPSILON
    accepted &= (u >= EPSILON) & (u <= 1.0)
    if exclude_points:
        accepted &= (t >= EXCLUDE_T_MIN) & (t <= EXCLUDE_T_MAX)
    else:
        accepted &= ~np.signbit(t) & (t <= 1.0)

    candidates = np.flatnonzero(accepted)
    if candidates.size == 0:
        return None
    best_u = u[candidates].min()
    index = int(candidates[u[candidates] == best_u][-1])

    hit_u = float(u[index])
    return IntersectionResult(
        u=hit_u,
        t=float(t[index]),
        point=(start[0] + hit_u * sx, start[1] + hit_u * sy),
        index=index,
    )
