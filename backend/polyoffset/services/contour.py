"""
Construction of the raw offset contour.

Every edge of the input ring is translated along its unit normal by
the signed offset.  Consecutive translated edges are then joined:

* where the corner is convex as seen from the offset side the join runs
  back through the original shared vertex (a miter through the vertex);
  the loops this creates are removed later by the region resolver,
* where the corner is concave as seen from the offset side a circular
  arc of radius ``|offset|`` around the original vertex is tessellated
  with ``arc_resolution`` samples per full turn,
* where both edges point the same way one of the two coincident points
  is dropped.

The normal of an edge ``p0→p1`` is its right‑hand normal, so for a
counter‑clockwise ring a positive offset moves outward.  The contour
produced here is closed but may intersect itself freely.

Debug logging is enabled via the ``OFFSET_DEBUG`` environment variable.
"""

from __future__ import annotations

import logging
import math
import os
import sys
from dataclasses import dataclass
from typing import List, Sequence, Tuple

logger = logging.getLogger(__name__)

Point = Tuple[float, float]
Ring = List[Point]

EPSILON: float = sys.float_info.epsilon
TWO_PI: float = 2.0 * math.pi


@dataclass
class OffsetEdge:
    """A retained input edge translated by the offset.

    Attributes:
        p0: Translated first endpoint.
        p1: Translated second endpoint.
        p1_orig: Original (untranslated) second endpoint.  This is the
            vertex shared with the next edge and the centre of any arc
            joining the two.
        normal: Unit right‑hand normal of the original edge.
    """

    p0: Point
    p1: Point
    p1_orig: Point
    normal: Tuple[float, float]


def build_offset_edges(ring: Sequence[Point], offset: float) -> List[OffsetEdge]:
    """Translate every non‑degenerate edge of ``ring`` by ``offset``.

    Edges shorter than machine epsilon have no usable normal and are
    dropped; the neighbouring retained edges then become adjacent.
    """
    edges: List[OffsetEdge] = []
    for idx in range(len(ring) - 1):
        x0, y0 = ring[idx]
        x1, y1 = ring[idx + 1]
        length = math.sqrt((x0 - x1) * (x0 - x1) + (y0 - y1) * (y0 - y1))
        if length < EPSILON:
            continue
        nx = (y1 - y0) / length
        ny = (x0 - x1) / length
        edges.append(
            OffsetEdge(
                p0=(x0 + offset * nx, y0 + offset * ny),
                p1=(x1 + offset * nx, y1 + offset * ny),
                p1_orig=(x1, y1),
                normal=(nx, ny),
            )
        )
    return edges


def _corner_angle(start_angle: float, end_angle: float, offset: float) -> float:
    """Turn between two edge normals measured from the offset side, in ``[0, 2π]``."""
    angle = start_angle - end_angle
    if math.copysign(1.0, angle) < 0:
        angle += TWO_PI
    if math.copysign(1.0, offset) < 0:
        # Shrinking flips which side of the corner is outward.
        angle = TWO_PI - angle
    return angle


def arc_points(
    centre: Point,
    start_angle: float,
    end_angle: float,
    offset: float,
    arc_step: float,
) -> List[Point]:
    """Interior samples of the join arc around ``centre``.

    The arc endpoints are the translated endpoints of the adjacent edges
    and are not included.  Negative offsets sweep clockwise (decreasing
    angle) and positive offsets counter‑clockwise; ``end_angle`` is
    unwrapped across the ±π seam accordingly.
    """
    cx, cy = centre
    points: List[Point] = []
    if math.copysign(1.0, offset) < 0:
        if end_angle > start_angle:
            end_angle -= TWO_PI
        count = math.ceil((start_angle - end_angle) / arc_step)
        for step in range(1, count):
            angle = start_angle - float(step) * arc_step
            points.append((cx + offset * math.cos(angle), cy + offset * math.sin(angle)))
    else:
        if end_angle < start_angle:
            end_angle += TWO_PI
        count = math.ceil((end_angle - start_angle) / arc_step)
        for step in range(1, count):
            angle = start_angle + float(step) * arc_step
            points.append((cx + offset * math.cos(angle), cy + offset * math.sin(angle)))
    return points


def join_offset_edges(edges: Sequence[OffsetEdge], offset: float, arc_resolution: float) -> Ring:
    """Chain translated edges into one closed contour.

    Args:
        edges: Output of :func:`build_offset_edges`.
        offset: Signed offset distance used to build ``edges``.
        arc_resolution: Number of arc samples for a full turn; must be
            positive.

    Returns:
        The closed raw contour, or an empty list when ``edges`` is empty.

    Raises:
        ValueError: If ``arc_resolution`` is not positive.
    """
    if not arc_resolution > 0:
        raise ValueError("arc_resolution must be positive")
    if not edges:
        return []
    arc_step = TWO_PI / arc_resolution

    contour: Ring = []
    count = len(edges)
    arcs = 0
    for idx in range(count):
        edge, following = edges[idx], edges[(idx + 1) % count]
        contour.append(edge.p0)
        contour.append(edge.p1)
        start_angle = math.atan2(edge.normal[1], edge.normal[0])
        end_angle = math.atan2(following.normal[1], following.normal[0])
        angle = _corner_angle(start_angle, end_angle, offset)
        if angle < math.pi:
            if angle > EPSILON:
                contour.append(edge.p1_orig)
            else:
                # Edges continue straight on; the next p0 coincides with p1.
                contour.pop()
        elif angle > math.pi:
            contour.extend(arc_points(edge.p1_orig, start_angle, end_angle, offset, arc_step))
            arcs += 1

    contour.append(contour[0])
    if os.getenv("OFFSET_DEBUG"):
        logger.debug(
            "offset contour built: edges=%d points=%d arcs=%d offset=%s arc_resolution=%s",
            count,
            len(contour),
            arcs,
            offset,
            arc_resolution,
        )
    return contour


def build_offset_contour(ring: Sequence[Point], offset: float, arc_resolution: float) -> Ring:
    """Return the raw, possibly self‑intersecting offset boundary of ``ring``."""
    return join_offset_edges(build_offset_edges(ring, offset), offset, arc_resolution)
