"""
API routes for polygon offsetting.

``POST /offset`` expands or shrinks a ring and returns the resulting
rings with their signed areas and a metadata section.  ``POST
/offset/export`` runs the same computation and returns the rings as
CSV with one ``ring,x,y`` row per vertex.  Results are memoised in the
in‑process offset cache.
"""

from __future__ import annotations

import csv
import io
import logging
import time
from typing import Any, Dict, List, Tuple

from fastapi import APIRouter, HTTPException, Response

from .models import OffsetRequest, OffsetResponse, OffsetRing
from ..services.errors import CombinatorialExplosionError
from ..services.offset import offset_polygon_cached, polygon_area
from ..services.offset_cache import offset_cache_size

logger = logging.getLogger(__name__)

router = APIRouter()

# Maximum number of vertices accepted in a request ring.  Resolution
# intersects every contour edge with every other edge, so very large
# rings are rejected up front.
MAX_RING_POINTS: int = 20000


def _request_ring(body: OffsetRequest) -> List[Tuple[float, float]]:
    ring: List[Tuple[float, float]] = []
    for idx, p in enumerate(body.points):
        if len(p) != 2:
            raise HTTPException(
                status_code=400,
                detail=f"Point {idx} must have exactly two coordinates, got {len(p)}.",
            )
        ring.append((float(p[0]), float(p[1])))
    if len(ring) > MAX_RING_POINTS:
        raise HTTPException(
            status_code=400,
            detail=f"Ring has {len(ring)} points; at most {MAX_RING_POINTS} are accepted.",
        )
    if body.closeRing and ring and ring[0] != ring[-1]:
        ring.append(ring[0])
    return ring


def _run_offset(body: OffsetRequest) -> Tuple[List[List[Tuple[float, float]]], Dict[str, Any]]:
    ring = _request_ring(body)
    t0 = time.perf_counter()
    try:
        rings, cached = offset_polygon_cached(ring, body.offset, body.arcResolution)
    except CombinatorialExplosionError as exc:
        logger.warning(
            "offset rejected: points=%d offset=%s arcResolution=%s: %s",
            len(ring),
            body.offset,
            body.arcResolution,
            exc,
        )
        raise HTTPException(
            status_code=422,
            detail=f"{exc} Try a coarser arc resolution or a smaller offset.",
        )
    except Exception as exc:
        logger.exception("offset endpoint error: %s", exc)
        raise HTTPException(status_code=500, detail=f"Failed to offset polygon: {exc}")
    elapsed_ms = (time.perf_counter() - t0) * 1000.0
    meta = {
        "offset": body.offset,
        "arcResolution": body.arcResolution,
        "inputPoints": len(ring),
        "cached": cached,
        "cacheEntries": offset_cache_size(),
        "timings": {"offsetMs": elapsed_ms},
    }
    return rings, meta


@router.post("/offset", response_model=OffsetResponse)
def create_offset(body: OffsetRequest) -> OffsetResponse:
    """Offset the ring in the request body.

    Returns:
        The rings of the offset polygon.  Degenerate input (an empty
        ring) yields a single empty ring; a polygon shrunk away entirely
        yields no rings.
    """
    rings, meta = _run_offset(body)
    output: List[OffsetRing] = []
    total_points = 0
    for idx, ring in enumerate(rings):
        total_points += len(ring)
        output.append(
            OffsetRing(
                index=idx,
                points=[[x, y] for x, y in ring],
                area=polygon_area(ring),
            )
        )
    meta["totalRings"] = len(output)
    meta["totalPoints"] = total_points
    return OffsetResponse(rings=output, meta=meta)


@router.post("/offset/export")
def export_offset(body: OffsetRequest) -> Response:
    """Offset the ring and return the result as CSV."""
    rings, _meta = _run_offset(body)
    output = io.StringIO()
    writer = csv.writer(output, lineterminator="\n")
    writer.writerow(["ring", "x", "y"])
    for idx, ring in enumerate(rings):
        for x, y in ring:
            writer.writerow([idx, x, y])
    return Response(content=output.getvalue(), media_type="text/csv")
