"""
Pydantic data models for the polygon offset API.

These models define the shapes of requests and responses used by the
backend.  Keeping the schemas separate from the routes makes the API
contract easy to review and adjust.
"""

from __future__ import annotations

from typing import Any, Dict, List

from pydantic import BaseModel, Field


class OffsetRequest(BaseModel):
    """Request body for offsetting a single ring."""

    points: List[List[float]] = Field(
        ...,
        description="Ring vertices as [x, y] pairs; the last point should repeat the first",
    )
    offset: float = Field(
        ..., description="Signed offset distance: positive expands, negative shrinks"
    )
    arcResolution: float = Field(
        default=32.0,
        gt=0.0,
        description="Number of vertices a full circle would have; controls rounding of concave corners",
    )
    # The engine expects closed rings.  When true an open ring is closed
    # by repeating its first point before offsetting.
    closeRing: bool = Field(
        default=True,
        description="Close the ring by repeating its first point when it is open",
    )


class OffsetRing(BaseModel):
    """One ring of the offset result."""

    index: int = Field(..., description="Position of the ring in the result")
    points: List[List[float]] = Field(..., description="Closed ring vertices as [x, y] pairs")
    area: float = Field(..., description="Signed shoelace area of the ring")


class OffsetResponse(BaseModel):
    """Response returned for an offset request."""

    rings: List[OffsetRing] = Field(
        default_factory=list, description="Rings making up the offset polygon"
    )
    meta: Dict[str, Any] = Field(
        default_factory=dict,
        description="Summary such as ring and point counts, cache use and timings",
    )
