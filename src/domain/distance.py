"""
Distance helpers for the market search.

* ``haversine_km`` -- great-circle distance between two points.
* ``bounding_box`` -- lat/lng rectangle enclosing a search circle, used as
  a cheap range pre-filter before the exact haversine check.

Known limitation
----------------
The bounding box does not wrap around the ±180° meridian and degenerates
near the poles (``cos(lat)`` tends to zero, so the longitude delta blows
up).  No market sits near either, so neither case is handled.

Complexity: O(1) per call.
"""

from __future__ import annotations

import math

from .entities import BoundingBox

EARTH_RADIUS_KM = 6_371.0
KM_PER_DEGREE_LAT = 111.0


def haversine_km(
    lat1: float, lng1: float, lat2: float, lng2: float
) -> float:
    """Return the great-circle distance in **km** between two points."""
    lat1_r, lat2_r = math.radians(lat1), math.radians(lat2)
    dlat = math.radians(lat2 - lat1)
    dlng = math.radians(lng2 - lng1)

    a = (
        math.sin(dlat / 2) ** 2
        + math.cos(lat1_r) * math.cos(lat2_r) * math.sin(dlng / 2) ** 2
    )
    return 2 * EARTH_RADIUS_KM * math.asin(math.sqrt(a))


def bounding_box(
    center_lat: float, center_lng: float, radius_km: float
) -> BoundingBox:
    """
    Axis-aligned rectangle (degrees) containing every point within
    *radius_km* of the centre.

    One degree of latitude is taken as 111 km everywhere; a degree of
    longitude shrinks with ``cos(latitude)``, so the longitude delta grows
    as the centre moves away from the equator.  The box is loose on
    purpose: callers must still apply ``haversine_km`` afterwards.
    """
    lat_delta = radius_km / KM_PER_DEGREE_LAT
    lng_delta = radius_km / (
        KM_PER_DEGREE_LAT * math.cos(math.radians(center_lat))
    )
    return BoundingBox(
        min_lat=center_lat - lat_delta,
        max_lat=center_lat + lat_delta,
        min_lng=center_lng - lng_delta,
        max_lng=center_lng + lng_delta,
    )
