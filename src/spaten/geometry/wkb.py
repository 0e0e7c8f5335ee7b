"""WKB geometry decoding backed by shapely."""

from __future__ import annotations

import shapely.wkb as swkb
from shapely.errors import ShapelyError
from shapely.geometry.base import BaseGeometry

from spaten.core.exceptions import GeometryDecodeError


def decode_wkb(data: bytes) -> BaseGeometry:
    """
    Parse well-known-binary bytes into a shapely geometry.

    Raises:
        GeometryDecodeError: If data is empty or not valid WKB
    """
    if not data:
        raise GeometryDecodeError("Empty geometry")
    try:
        geom = swkb.loads(bytes(data))
    except (ShapelyError, ValueError, TypeError) as exc:
        raise GeometryDecodeError(f"Invalid WKB geometry: {exc}") from exc
    if geom is None:
        raise GeometryDecodeError("Invalid WKB geometry")
    return geom


__all__ = ["decode_wkb"]
