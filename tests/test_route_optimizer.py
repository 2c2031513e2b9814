from datetime import datetime, timedelta

import pytest

from gigroute.models.route import Coordinate
from gigroute.services.route_optimizer import (
    RouteOptimizer,
    calculate_route_metrics,
    optimize_route,
)
from gigroute.utils.geo import calculate_distance, estimate_travel_time


START = datetime(2024, 5, 1, 9, 0)


@pytest.fixture
def seattle_jobs(make_job):
    return [
        make_job(id="J1", payout=10, duration=30, lat=47.60, lng=-122.33),
        make_job(id="J2", payout=25, duration=20, lat=47.61, lng=-122.34),
        make_job(id="J3", payout=15, duration=40, lat=47.59, lng=-122.30),
    ]


def test_empty_input_gives_empty_route():
    route = optimize_route([], start_time=START)

    assert route.job_ids == []
    assert route.steps == []
    assert route.total_distance == 0
    assert route.total_duration == 0
    assert route.total_earnings == 0
    assert route.estimated_completion_time == START


def test_single_job(make_job):
    job = make_job(id="only", payout=12, duration=25, lat=47.6, lng=-122.3)
    route = optimize_route([job], start_location=Coordinate(40.0, -100.0), start_time=START)

    assert route.job_ids == ["only"]
    assert route.total_distance == 0
    assert route.total_duration == 25
    assert route.total_earnings == 12
    assert route.steps[0].order == 1
    assert route.steps[0].estimated_arrival == START
    assert route.estimated_completion_time == START + timedelta(minutes=25)


def test_route_from_start_location(seattle_jobs):
    route = optimize_route(seattle_jobs, start_location=Coordinate(47.60, -122.33), start_time=START)

    assert route.job_ids == ["J1", "J2", "J3"]

    d12 = calculate_distance(47.60, -122.33, 47.61, -122.34)
    d23 = calculate_distance(47.61, -122.34, 47.59, -122.30)
    assert d12 == pytest.approx(1.341, abs=0.01)
    assert d23 == pytest.approx(3.734, abs=0.01)

    assert route.total_distance == pytest.approx(d12 + d23)
    assert route.total_distance == pytest.approx(5.075, abs=0.02)
    assert route.total_earnings == 50
    assert route.total_duration == pytest.approx(90 + estimate_travel_time(d12) + estimate_travel_time(d23))
    assert route.total_duration == pytest.approx(102.18, abs=0.05)


def test_step_timing(seattle_jobs):
    route = optimize_route(seattle_jobs, start_location=Coordinate(47.60, -122.33), start_time=START)
    first, second, third = route.steps

    assert first.estimated_arrival == START
    assert first.distance_from_previous == 0
    assert first.duration_from_previous == 0

    assert second.duration_from_previous == pytest.approx(3.22, abs=0.01)
    arrival = (second.estimated_arrival - START).total_seconds() / 60
    assert arrival == pytest.approx(30 + second.duration_from_previous)

    gap = (third.estimated_arrival - second.estimated_arrival).total_seconds() / 60
    assert gap == pytest.approx(20 + third.duration_from_previous)

    done = (route.estimated_completion_time - START).total_seconds() / 60
    assert done == pytest.approx(route.total_duration)


def test_route_without_start_begins_with_highest_roi(seattle_jobs):
    route = optimize_route(seattle_jobs, start_time=START)
    assert route.job_ids == ["J2", "J3", "J1"]


def test_every_job_visited_once(make_job):
    jobs = [
        make_job(payout=5 + i, duration=10 + 5 * i, lat=47.5 + i * 0.01, lng=-122.3 - (i % 3) * 0.02)
        for i in range(8)
    ]
    route = optimize_route(jobs, start_time=START)

    assert sorted(route.job_ids) == sorted(job.id for job in jobs)
    assert len(route) == len(jobs)
    assert [step.order for step in route.steps] == list(range(1, 9))


def test_aggregates_match_steps(seattle_jobs):
    route = optimize_route(seattle_jobs, start_time=START)

    assert route.total_distance == pytest.approx(sum(s.distance_from_previous for s in route.steps))
    assert route.total_earnings == pytest.approx(sum(s.job.payout for s in route.steps))
    work = sum(s.job.estimated_duration for s in route.steps)
    travel = sum(s.duration_from_previous for s in route.steps)
    assert route.total_duration == pytest.approx(work + travel)


def test_deterministic(seattle_jobs):
    first = optimize_route(seattle_jobs, start_time=START)
    second = optimize_route(seattle_jobs, start_time=START)

    assert first.job_ids == second.job_ids
    assert first.total_distance == second.total_distance
    assert first.estimated_completion_time == second.estimated_completion_time


def test_ties_keep_input_order(make_job):
    a = make_job(id="a", payout=10, duration=30, lat=47.6, lng=-122.3)
    b = make_job(id="b", payout=10, duration=30, lat=47.6, lng=-122.3)

    assert optimize_route([a, b], start_time=START).job_ids == ["a", "b"]
    assert optimize_route([b, a], start_time=START).job_ids == ["b", "a"]


def test_nearest_tie_keeps_input_order(make_job):
    a = make_job(id="a", payout=5, lat=47.61, lng=-122.33)
    b = make_job(id="b", payout=50, lat=47.61, lng=-122.33)

    route = optimize_route([a, b], start_location=Coordinate(47.60, -122.33), start_time=START)
    assert route.job_ids == ["a", "b"]


def test_jobs_without_coordinates_use_fallback(make_job):
    near_fallback = make_job(id="x", payout=10, duration=30)
    far = make_job(id="y", payout=10, duration=30, lat=45.5, lng=-122.7)

    route = optimize_route([far, near_fallback], start_location=Coordinate(47.6062, -122.3321), start_time=START)
    assert route.job_ids == ["x", "y"]
    assert route.steps[1].distance_from_previous == pytest.approx(235, abs=5)


def test_custom_speed_changes_travel_time(seattle_jobs):
    slow = RouteOptimizer(average_speed_kmh=12.5).optimize_route(
        seattle_jobs, start_location=Coordinate(47.60, -122.33), start_time=START
    )
    fast = RouteOptimizer().optimize_route(
        seattle_jobs, start_location=Coordinate(47.60, -122.33), start_time=START
    )

    assert slow.steps[1].duration_from_previous == pytest.approx(2 * fast.steps[1].duration_from_previous)


def test_input_list_is_not_modified(seattle_jobs):
    before = list(seattle_jobs)
    optimize_route(seattle_jobs, start_time=START)
    assert seattle_jobs == before


def test_route_rows(seattle_jobs):
    rows = optimize_route(seattle_jobs, start_time=START).to_rows()

    assert [row["job_id"] for row in rows] == ["J2", "J3", "J1"]
    assert rows[0]["estimated_arrival"] == START.isoformat()
    assert rows[0]["distance_from_previous"] == 0


def test_metrics(seattle_jobs):
    metrics = calculate_route_metrics(seattle_jobs)

    assert metrics.total_earnings == 50
    assert metrics.total_duration == 90
    assert metrics.average_roi == pytest.approx((20 + 75 + 22.5) / 3)
    assert metrics.estimated_hourly_rate == pytest.approx(50 / 90 * 60)


def test_metrics_of_empty_list():
    metrics = calculate_route_metrics([])

    assert metrics.total_earnings == 0
    assert metrics.total_duration == 0
    assert metrics.average_roi == 0
    assert metrics.estimated_hourly_rate == 0


def test_metrics_use_default_duration(make_job):
    metrics = calculate_route_metrics([make_job(payout=15, duration=None)])

    assert metrics.total_duration == 30
    assert metrics.estimated_hourly_rate == pytest.approx(30)


def test_nan_payout_does_not_win_the_route(make_job):
    bad = make_job(id="bad", payout=float("nan"), duration=30, lat=47.60, lng=-122.33)
    good = make_job(id="good", payout=100, duration=30, lat=47.61, lng=-122.33)
    other = make_job(id="other", payout=50, duration=30, lat=47.62, lng=-122.33)

    route = optimize_route([bad, good, other], start_time=START)

    assert route.job_ids == ["good", "other", "bad"]
    assert route.total_earnings == 150


def test_string_fields_are_coerced(make_job):
    jobs = [
        make_job(id="a", payout="12.50", duration="20", lat="47.60", lng="-122.33"),
        make_job(id="b", payout="junk", duration=30, lat="?", lng=None),
    ]

    route = optimize_route(jobs, start_location=Coordinate(47.60, -122.33), start_time=START)
    metrics = calculate_route_metrics(jobs)

    assert route.job_ids == ["a", "b"]
    assert route.total_earnings == pytest.approx(12.5)
    assert route.total_distance == pytest.approx(calculate_distance(47.60, -122.33, 47.6062, -122.3321))
    assert metrics.total_earnings == pytest.approx(12.5)
    assert metrics.total_duration == 50
    assert metrics.average_roi == pytest.approx(37.5 / 2)
