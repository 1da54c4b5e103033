"""
Point WKT Codec
===============
Converts between ``(lat, lng)`` pairs and the well-known-text form used by
the ``spots.location`` geography column.

Axis order is **longitude first**:

    SRID=4326;POINT(<lng> <lat>)

Decoding is string based.  PostgREST may hand back the column as hex EWKB
instead of text; that shape is not decoded and yields null coordinates.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from typing import Any

SRID = 4326
_POINT_PREFIX = "POINT("

# Longest numeric prefix, the same tolerance as a JavaScript parseFloat.
_FLOAT_PREFIX = re.compile(r"^\s*[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


@dataclass(frozen=True, slots=True)
class LatLng:
    """A decoded coordinate pair.  Either field is ``None`` when unknown."""

    lat: float | None
    lng: float | None

    def as_dict(self) -> dict[str, float | None]:
        return {"lat": self.lat, "lng": self.lng}


def _format_degrees(value: float) -> str:
    value = float(value)
    if value.is_integer():
        return str(int(value))
    return repr(value)


def _parse_float(token: str | None) -> float | None:
    """Lenient float parse; anything unparseable becomes ``None``."""
    if token is None:
        return None
    match = _FLOAT_PREFIX.match(token)
    if match is None:
        return None
    value = float(match.group(0))
    # Overflowing exponents parse to inf, which JSON cannot carry.
    if not math.isfinite(value):
        return None
    return value


def encode_point(lat: float, lng: float) -> str:
    """EWKT for a WGS84 point.  Degrees are not range checked."""
    return f"SRID={SRID};POINT({_format_degrees(lng)} {_format_degrees(lat)})"


def decode_point(value: Any) -> LatLng:
    """
    Decode ``POINT(<lng> <lat>)`` text into a :class:`LatLng`.

    Input that is not a string starting with ``POINT(`` (``None``, hex
    EWKB, GeoJSON dicts) decodes to ``LatLng(None, None)``.
    """
    if not isinstance(value, str) or not value.startswith(_POINT_PREFIX):
        return LatLng(lat=None, lng=None)

    parts = value[len(_POINT_PREFIX):-1].split(" ")
    lng = _parse_float(parts[0])
    lat = _parse_float(parts[1] if len(parts) > 1 else None)
    return LatLng(lat=lat, lng=lng)
