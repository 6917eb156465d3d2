import math
from typing import Iterable, TypeVar

from app.utils.errors import MissingCoordinates

EARTH_RADIUS_METERS = 6_371_000
DEFAULT_RADIUS_METERS = 50_000

T = TypeVar("T")


def haversine_distance(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance in meters between two lat/lon points given in degrees."""
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lambda = math.radians(lon2 - lon1)

    a = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    return 2 * EARTH_RADIUS_METERS * math.atan2(math.sqrt(a), math.sqrt(1 - a))


def filter_within_radius(
    center_lat: float | None,
    center_lon: float | None,
    listings: Iterable[T],
    radius_meters: float | None = None,
) -> list[T]:
    """Keep listings whose latitude/longitude lie within radius_meters (inclusive).

    Listings without coordinates never match.
    """
    if center_lat is None or center_lon is None:
        raise MissingCoordinates()
    radius = DEFAULT_RADIUS_METERS if radius_meters is None else radius_meters

    matched = []
    for listing in listings:
        lat = getattr(listing, "latitude", None)
        lon = getattr(listing, "longitude", None)
        if lat is None or lon is None:
            continue
        if haversine_distance(center_lat, center_lon, lat, lon) <= radius:
            matched.append(listing)
    return matched
