"""
Resolution of a self‑intersecting contour into simple regions.

The raw offset contour is held as a cyclic sequence of :class:`VertexRef`
entries.  A reference either points into the raw contour or into the
list of crossing points found so far; both occurrences of a crossing in
the sequence hold equal references, which is what lets the
decomposition jump from one branch of the contour to the other.

Resolution runs in three steps:

1. ``resolve_crossings`` walks the sequence edge by edge, finds every
   crossing with the non‑adjacent edges and inserts the crossing twice,
   once after the current position and once into the edge that was
   crossed.
2. ``decompose`` splits the augmented sequence into closed loops by
   swapping branches at every crossing.
3. ``resolved_boundary`` materialises the whole sequence; candidate
   loops are kept only when the resolved boundary winds exactly once
   around them.

Debug logging is enabled via the ``OFFSET_DEBUG`` environment variable.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import List, Literal, Sequence, Tuple

from .errors import CombinatorialExplosionError
from .intersect import intersect
from .winding import is_offset_region

logger = logging.getLogger(__name__)

Point = Tuple[float, float]
Ring = List[Point]

# Hard cap on materialised crossings for one contour.
MAX_INTERSECTIONS: int = 3000

RAW = "raw"
CROSSING = "crossing"


@dataclass(frozen=True)
class VertexRef:
    """Reference to a contour vertex.

    Attributes:
        kind: ``"raw"`` for a point of the raw contour, ``"crossing"``
            for a materialised self‑intersection.
        index: Index into the raw contour or the crossing list.
    """

    kind: Literal["raw", "crossing"]
    index: int


class RegionResolver:
    """Split a closed, self‑intersecting contour into its offset regions.

    Args:
        boundary: Closed raw contour (first point repeated at the end).
    """

    def __init__(self, boundary: Sequence[Point]) -> None:
        self.boundary: Ring = list(boundary)
        self.crossings: List[Point] = []
        self.sequence: List[VertexRef] = [VertexRef(RAW, idx) for idx in range(len(self.boundary) - 1)]

    def lookup(self, ref: VertexRef) -> Point:
        if ref.kind == CROSSING:
            return self.crossings[ref.index]
        return self.boundary[ref.index]

    def _add_crossing(self, point: Point) -> VertexRef:
        self.crossings.append(point)
        if len(self.crossings) > MAX_INTERSECTIONS:
            logger.warning(
                "crossing cap of %d exceeded on a contour of %d points",
                MAX_INTERSECTIONS,
                len(self.boundary),
            )
            raise CombinatorialExplosionError(limit=MAX_INTERSECTIONS)
        return VertexRef(CROSSING, len(self.crossings) - 1)

    def _rest_points(self, position: int) -> List[Point]:
        """Points of the open polyline formed by every edge not adjacent to ``position``.

        The polyline starts two positions ahead and wraps round to the
        position just before ``position``.
        """
        seq = self.sequence
        if position + 2 < len(seq):
            rest = seq[position + 2:] + seq[:position]
        else:
            rest = seq[(position + 2) % len(seq):position]
        return [self.lookup(ref) for ref in rest]

    def resolve_crossings(self) -> None:
        """Find every self‑intersection and splice it into the sequence.

        The query edge keeps its original end while its start advances to
        each crossing found, so one edge can collect several crossings in
        order.  The twin of each crossing goes into the crossed edge: a
        hit on edge ``k`` of the rest polyline lies ``k + 2`` positions
        ahead of the current one, plus one for the crossing just inserted
        after the current position, plus one more to land after the
        crossed edge's start when that start follows the current
        position.

        Raises:
            CombinatorialExplosionError: More than ``MAX_INTERSECTIONS``
                crossings were found.
        """
        position = 0
        while position < len(self.sequence) - 1:
            start = self.lookup(self.sequence[position])
            end = self.lookup(self.sequence[(position + 1) % len(self.sequence)])
            while True:
                hit = intersect(start, end, self._rest_points(position), exclude_points=True)
                if hit is None:
                    break
                ref = self._add_crossing(hit.point)
                self.sequence.insert(position + 1, ref)
                other = (position + 3 + hit.index) % len(self.sequence)
                if other > position:
                    other += 1
                self.sequence.insert(other, ref)
                start = hit.point
                position += 1
            position += 1
        if os.getenv("OFFSET_DEBUG"):
            logger.debug(
                "crossings resolved: raw=%d crossings=%d sequence=%d",
                len(self.boundary),
                len(self.crossings),
                len(self.sequence),
            )

    def _twin(self, position: int, ref: VertexRef) -> int:
        """Position of the other occurrence of crossing ``ref``, searching forward."""
        seq = self.sequence
        for other in range(position + 1, len(seq)):
            if seq[other] == ref:
                return other
        return seq.index(ref)

    def decompose(self) -> List[Ring]:
        """Split the sequence into closed loops at its crossings.

        Each walk starts at the smallest position not yet visited and
        follows the sequence, switching to the twin branch at every
        crossing, until it returns to where it started.  A walk is
        bounded by the sequence length.
        """
        seq = self.sequence
        count = len(seq)
        remaining = set(range(count))
        regions: List[Ring] = []
        while remaining:
            position = min(remaining)
            start = position
            points: Ring = []
            for _ in range(count):
                ref = seq[position]
                remaining.discard(position)
                points.append(self.lookup(ref))
                if ref.kind == CROSSING:
                    position = self._twin(position, ref)
                position = (position + 1) % count
                if position == start:
                    break
            if points:
                points.append(points[0])
                regions.append(points)
        return regions

    def resolved_boundary(self) -> Ring:
        """The whole sequence as coordinates, closed."""
        points = [self.lookup(ref) for ref in self.sequence]
        if points:
            points.append(points[0])
        return points

    def resolve(self) -> List[Ring]:
        """Run all three steps and return the rings of the offset polygon."""
        self.resolve_crossings()
        regions = self.decompose()
        boundary = self.resolved_boundary()
        kept = [region for region in regions if is_offset_region(region, boundary)]
        if os.getenv("OFFSET_DEBUG"):
            logger.debug("regions: candidates=%d kept=%d", len(regions), len(kept))
        return kept
