import math
from typing import Iterable, NamedTuple

from .errors import InvalidCoordinate

EARTH_RADIUS_KM = 6371.0


class GeoPoint(NamedTuple):
    latitude: float
    longitude: float


def validate_point(lat: float, lng: float) -> GeoPoint:
    """Return a GeoPoint, rejecting out-of-range or non-finite degrees"""
    if not math.isfinite(lat) or abs(lat) > 90:
        raise InvalidCoordinate("latitude", lat)
    if not math.isfinite(lng) or abs(lng) > 180:
        raise InvalidCoordinate("longitude", lng)
    return GeoPoint(lat, lng)


def haversine_km(lat1, lon1, lat2, lon2):
    phi1 = math.radians(lat1); phi2 = math.radians(lat2)
    dphi = math.radians(lat2 - lat1); dlambda = math.radians(lon2 - lon1)
    a = math.sin(dphi/2)**2 + math.cos(phi1)*math.cos(phi2)*math.sin(dlambda/2)**2
    c = 2*math.atan2(math.sqrt(a), math.sqrt(1-a))
    return EARTH_RADIUS_KM * c


def distance(a: GeoPoint, b: GeoPoint) -> float:
    """Great-circle distance in kilometers on a spherical Earth"""
    a = validate_point(*a)
    b = validate_point(*b)
    return haversine_km(a.latitude, a.longitude, b.latitude, b.longitude)


def path_length(points: Iterable[GeoPoint]) -> float:
    """Sum of distances over consecutive points; 0 for fewer than two"""
    total = 0.0
    previous = None
    for point in points:
        if previous is not None:
            total += distance(previous, point)
        previous = point
    return total
