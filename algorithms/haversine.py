"""
Haversine Algorithm - Calculate distance between two geographical points
Used to find donors nearest to the patient requesting blood
"""

import math
import numbers
from typing import NamedTuple

import numpy as np

from algorithms.exceptions import InvalidLocation

# Radius of earth in kilometers
EARTH_RADIUS_KM = 6371.0
EARTH_RADIUS_M = EARTH_RADIUS_KM * 1000


class Candidate(NamedTuple):
    donor: object
    distance_meters: float

    @property
    def distance_km(self):
        return self.distance_meters / 1000


def haversine_distance(lat1, lon1, lat2, lon2):
    """
    Calculate straight-line distance between two points.
    Note: This is "as the crow flies" distance, not road distance.

    Args:
        lat1, lon1: Latitude and longitude of point 1 (patient)
        lat2, lon2: Latitude and longitude of point 2 (donor)

    Returns:
        Distance in kilometers
    """
    # Convert decimal degrees to radians
    lat1, lon1, lat2, lon2 = map(math.radians, [lat1, lon1, lat2, lon2])

    dlat = lat2 - lat1
    dlon = lon2 - lon1

    a = math.sin(dlat/2)**2 + math.cos(lat1) * math.cos(lat2) * math.sin(dlon/2)**2
    c = 2 * math.asin(min(1.0, math.sqrt(a)))

    return c * EARTH_RADIUS_KM


def haversine_distances(origin, latitudes, longitudes):
    """
    Vectorised haversine from one origin to many points

    Args:
        origin: (lng, lat) pair
        latitudes, longitudes: sequences of the same length

    Returns:
        numpy array of distances in meters
    """
    lng, lat = origin
    lats = np.radians(np.asarray(latitudes, dtype=float))
    lngs = np.radians(np.asarray(longitudes, dtype=float))
    lat0 = math.radians(lat)
    lng0 = math.radians(lng)

    a = np.sin((lats - lat0) / 2) ** 2 + math.cos(lat0) * np.cos(lats) * np.sin((lngs - lng0) / 2) ** 2
    c = 2 * np.arcsin(np.sqrt(np.clip(a, 0.0, 1.0)))

    return c * EARTH_RADIUS_M


def validate_location(coordinates):
    """
    Validate a [longitude, latitude] pair

    Returns:
        (lng, lat) as floats

    Raises:
        InvalidLocation: not a pair of finite numbers inside the valid ranges
    """
    try:
        lng, lat = coordinates
    except (TypeError, ValueError):
        raise InvalidLocation(f'Expected a [longitude, latitude] pair, got {coordinates!r}')

    for value in (lng, lat):
        if isinstance(value, bool) or not isinstance(value, numbers.Real) or not math.isfinite(value):
            raise InvalidLocation(f'Coordinates must be finite numbers, got {coordinates!r}')

    if not -180 <= lng <= 180 or not -90 <= lat <= 90:
        raise InvalidLocation(f'Coordinates out of range: {coordinates!r}')

    return float(lng), float(lat)


def bounding_box(origin, radius_meters):
    """
    Lat/lng box enclosing the search circle, for cheap database prefiltering.
    Longitude bounds are None when the box touches a pole or wraps the antimeridian.
    """
    lng, lat = origin
    delta_lat = math.degrees(radius_meters / EARTH_RADIUS_M)
    min_lat = lat - delta_lat
    max_lat = lat + delta_lat

    if min_lat <= -90 or max_lat >= 90:
        return max(min_lat, -90.0), min(max_lat, 90.0), None, None

    delta_lng = math.degrees(math.asin(min(1.0, math.sin(radius_meters / EARTH_RADIUS_M) / math.cos(math.radians(lat)))))
    min_lng = lng - delta_lng
    max_lng = lng + delta_lng
    if min_lng < -180 or max_lng > 180:
        return min_lat, max_lat, None, None

    return min_lat, max_lat, min_lng, max_lng


def find_nearby_donors(origin, donors, radius_meters):
    """
    Find all donors within radius_meters of the origin

    Args:
        origin: (lng, lat) of the patient
        donors: QuerySet or list of donor objects with id/latitude/longitude
        radius_meters: Maximum great-circle distance

    Returns:
        List of Candidate sorted by distance, ties broken by donor id
    """
    located = [d for d in donors if d.latitude is not None and d.longitude is not None]
    if not located:
        return []

    distances = haversine_distances(
        origin,
        [d.latitude for d in located],
        [d.longitude for d in located],
    )

    nearby = [
        Candidate(donor, float(distance))
        for donor, distance in zip(located, distances)
        if distance <= radius_meters
    ]

    # Sort by distance (closest first)
    nearby.sort(key=lambda c: (c.distance_meters, c.donor.id))

    return nearby
