"""Spatial subpackage — WKT point encoding for the PostGIS geography column."""

from spots_api.spatial.wkt import LatLng, decode_point, encode_point

__all__ = [
    "LatLng",
    "decode_point",
    "encode_point",
]
