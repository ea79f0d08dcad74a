"""
Exception types raised by the offset engine.

The offset computation is a pure function of its inputs, so the only
failure it reports is the safety bound on the number of materialised
self‑intersections.  Callers should treat the error as final for the
given geometry and either reject the input or retry with different
parameters (a coarser arc resolution or a smaller offset magnitude).
"""

from __future__ import annotations

from typing import Optional


class OffsetError(Exception):
    """Base class for errors raised while offsetting a polygon."""


class CombinatorialExplosionError(OffsetError):
    """Too many self‑intersections were found while resolving a contour.

    Attributes:
        limit: The intersection cap that was exceeded, when known.
    """

    def __init__(self, message: str = "Combinatorial explosion.", limit: Optional[int] = None) -> None:
        super().__init__(message)
        self.limit = limit
