"""Geographic distance and travel time estimation"""

import math
from typing import Tuple

from gigroute.models.job import Job, to_float
from gigroute.models.route import Coordinate


EARTH_RADIUS_KM = 6371.0

# Urban driving average
AVERAGE_SPEED_KMH = 25.0

# Seattle downtown, substituted for jobs without coordinates
DEFAULT_LOCATION = Coordinate(lat=47.6062, lng=-122.3321)


def deg2rad(deg: float) -> float:
    """Convert degrees to radians"""
    return deg * (math.pi / 180)


def calculate_distance(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    """
    Great-circle distance between two points using the haversine formula

    Args:
        lat1: Latitude of the first point (degrees)
        lng1: Longitude of the first point (degrees)
        lat2: Latitude of the second point (degrees)
        lng2: Longitude of the second point (degrees)

    Returns:
        Distance in kilometers
    """
    d_lat = deg2rad(lat2 - lat1)
    d_lng = deg2rad(lng2 - lng1)

    a = (
        math.sin(d_lat / 2) * math.sin(d_lat / 2)
        + math.cos(deg2rad(lat1)) * math.cos(deg2rad(lat2))
        * math.sin(d_lng / 2) * math.sin(d_lng / 2)
    )

    # Rounding can push a slightly above 1 for antipodal points
    a = min(max(a, 0.0), 1.0)

    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def estimate_travel_time(distance_km: float, average_speed_kmh: float = AVERAGE_SPEED_KMH) -> float:
    """
    Estimate driving time for a distance

    Args:
        distance_km: Distance in kilometers
        average_speed_kmh: Assumed average speed

    Returns:
        Travel time in minutes (0.0 for a non-positive speed)
    """
    if average_speed_kmh <= 0:
        return 0.0
    return (distance_km / average_speed_kmh) * 60


def job_coordinates(job: Job, fallback: Coordinate = DEFAULT_LOCATION) -> Tuple[float, float]:
    """
    Get a job's coordinates, substituting the fallback point for missing values

    This is a known approximation: jobs without coordinates all sit at the
    fallback point, so travel between them is estimated as zero. Values that
    are not numbers (NaN, unparseable strings) count as missing.
    """
    lat = to_float(job.latitude, None)
    lng = to_float(job.longitude, None)
    return (
        lat if lat is not None else fallback.lat,
        lng if lng is not None else fallback.lng
    )


def estimate_distance(job_a: Job, job_b: Job, fallback: Coordinate = DEFAULT_LOCATION) -> float:
    """Haversine distance between two jobs in kilometers"""
    lat1, lng1 = job_coordinates(job_a, fallback)
    lat2, lng2 = job_coordinates(job_b, fallback)
    return calculate_distance(lat1, lng1, lat2, lng2)


def distance_from(location: Coordinate, job: Job, fallback: Coordinate = DEFAULT_LOCATION) -> float:
    """Haversine distance from a location to a job in kilometers"""
    lat, lng = job_coordinates(job, fallback)
    return calculate_distance(location.lat, location.lng, lat, lng)
