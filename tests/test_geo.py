import pytest

from gigroute.models.job import Job
from gigroute.models.route import Coordinate
from gigroute.utils.geo import (
    DEFAULT_LOCATION,
    calculate_distance,
    deg2rad,
    distance_from,
    estimate_distance,
    estimate_travel_time,
    job_coordinates,
)


SEATTLE = (47.6062, -122.3321)
PORTLAND = (45.5152, -122.6784)


def test_deg2rad():
    assert deg2rad(180) == pytest.approx(3.141592653589793)
    assert deg2rad(0) == 0


def test_distance_is_zero_for_same_point():
    assert calculate_distance(*SEATTLE, *SEATTLE) == 0


def test_distance_is_symmetric():
    there = calculate_distance(*SEATTLE, *PORTLAND)
    back = calculate_distance(*PORTLAND, *SEATTLE)
    assert there == pytest.approx(back)


def test_seattle_to_portland_is_about_234_km():
    assert calculate_distance(*SEATTLE, *PORTLAND) == pytest.approx(234, abs=3)


def test_one_hundredth_degree_of_latitude():
    # 6371 km * 0.01 deg in radians
    assert calculate_distance(47.60, -122.33, 47.61, -122.33) == pytest.approx(1.11195, abs=1e-4)


def test_antipodal_points_do_not_fail():
    assert calculate_distance(0, 0, 0, 180) == pytest.approx(6371 * 3.141592653589793)


def test_travel_time_at_25_kmh():
    assert estimate_travel_time(25) == pytest.approx(60)
    assert estimate_travel_time(5) == pytest.approx(12)


def test_travel_time_of_zero_distance_is_zero():
    assert estimate_travel_time(0) == 0


def test_travel_time_is_monotonic():
    times = [estimate_travel_time(d) for d in (0.1, 0.5, 1, 2.5, 10, 100)]
    assert times == sorted(times)
    assert len(set(times)) == len(times)


def test_travel_time_with_non_positive_speed_is_zero():
    assert estimate_travel_time(10, average_speed_kmh=0) == 0.0


def test_missing_coordinates_use_fallback_location():
    # Known approximation: jobs without coordinates sit downtown
    job = Job(title="No coords", payout=5, address="Somewhere")
    assert job_coordinates(job) == (DEFAULT_LOCATION.lat, DEFAULT_LOCATION.lng)


def test_partial_coordinates_fill_only_the_missing_component():
    job = Job(title="Half", payout=5, address="x", latitude=47.0)
    assert job_coordinates(job) == (47.0, DEFAULT_LOCATION.lng)


def test_zero_is_a_valid_coordinate():
    job = Job(title="Null island", payout=5, address="x", latitude=0.0, longitude=0.0)
    assert job_coordinates(job) == (0.0, 0.0)


def test_two_jobs_without_coordinates_are_zero_apart():
    a = Job(title="a", payout=1, address="x")
    b = Job(title="b", payout=1, address="y")
    assert estimate_distance(a, b) == 0


def test_distance_from_location(make_job):
    job = make_job(lat=47.61, lng=-122.33)
    assert distance_from(Coordinate(47.60, -122.33), job) == pytest.approx(1.11195, abs=1e-4)


@pytest.mark.parametrize("lat,lng", [
    (float("nan"), float("nan")),
    ("north", None),
    (float("inf"), "west"),
])
def test_non_numeric_coordinates_use_fallback_location(lat, lng):
    job = Job(title="Bad coords", payout=5, address="x", latitude=lat, longitude=lng)
    assert job_coordinates(job) == (DEFAULT_LOCATION.lat, DEFAULT_LOCATION.lng)


def test_numeric_string_coordinates_are_read():
    job = Job(title="Text coords", payout=5, address="x", latitude="47.6", longitude=" -122.3 ")
    assert job_coordinates(job) == (47.6, -122.3)
