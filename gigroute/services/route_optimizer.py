"""Greedy route optimizer

Orders a set of selected jobs into a visiting sequence. The first stop is the
job nearest the start location (or the highest-ROI job when there is none);
each following stop is the remaining job with the best reward-per-time score
from the current one. This is a greedy heuristic with no backtracking, so the
result is not guaranteed to be globally optimal.
"""

import logging
from datetime import datetime, timedelta
from typing import Dict, List, Optional

from gigroute.models.job import Job
from gigroute.models.route import Coordinate, Route, RouteMetrics, RouteStep
from gigroute.utils.geo import (
    AVERAGE_SPEED_KMH,
    DEFAULT_LOCATION,
    distance_from,
    estimate_distance,
    estimate_travel_time
)
from gigroute.utils.reward import calculate_job_score, calculate_roi, job_duration, job_payout


class RouteOptimizer:
    """
    Builds routes from job sets

    The optimizer holds only its settings, so one instance can be shared and
    called concurrently. Identical inputs always produce identical routes:
    ties are broken by input order (the first job with the best value wins).
    """

    def __init__(
        self,
        average_speed_kmh: float = AVERAGE_SPEED_KMH,
        fallback_location: Coordinate = DEFAULT_LOCATION
    ):
        """
        Initialize route optimizer

        Args:
            average_speed_kmh: Assumed urban driving speed
            fallback_location: Coordinate used for jobs without coordinates
        """
        self.average_speed_kmh = average_speed_kmh
        self.fallback_location = fallback_location
        self.logger = logging.getLogger("gigroute.optimizer")

    def optimize_route(
        self,
        jobs: List[Job],
        start_location: Optional[Coordinate] = None,
        start_time: Optional[datetime] = None
    ) -> Route:
        """
        Order jobs into a route with timing and earnings rollups

        Args:
            jobs: Jobs to visit (each must carry an id)
            start_location: Where the driver starts, if known
            start_time: Departure time (defaults to now)

        Returns:
            Route visiting every input job exactly once
        """
        if start_time is None:
            start_time = datetime.now()

        if not jobs:
            return Route(
                job_ids=[],
                total_distance=0.0,
                total_duration=0.0,
                total_earnings=0.0,
                estimated_completion_time=start_time,
                steps=[]
            )

        ordered = self._greedy_order(list(jobs), start_location)
        route = self._build_route(ordered, start_time)

        self.logger.debug(
            f"Optimized route over {len(route.steps)} jobs: "
            f"{route.total_distance:.2f} km, {route.total_duration:.0f} min, "
            f"${route.total_earnings:.2f}"
        )

        return route

    def _greedy_order(self, jobs: List[Job], start_location: Optional[Coordinate]) -> List[Job]:
        if len(jobs) <= 1:
            return jobs

        # Remaining candidates keyed by input position
        remaining: Dict[int, Job] = dict(enumerate(jobs))

        if start_location is not None:
            current_index = self._closest_index(remaining, start_location)
        else:
            current_index = self._highest_roi_index(remaining)

        route = [remaining.pop(current_index)]

        while remaining:
            current_index = self._best_next_index(route[-1], remaining)
            route.append(remaining.pop(current_index))

        return route

    def _closest_index(self, candidates: Dict[int, Job], location: Coordinate) -> int:
        best_index = None
        best_distance = None

        for index in sorted(candidates):
            distance = distance_from(location, candidates[index], self.fallback_location)
            if best_distance is None or distance < best_distance:
                best_index, best_distance = index, distance

        return best_index

    def _highest_roi_index(self, candidates: Dict[int, Job]) -> int:
        best_index = None
        best_roi = None

        for index in sorted(candidates):
            roi = calculate_roi(candidates[index])
            if best_roi is None or roi > best_roi:
                best_index, best_roi = index, roi

        return best_index

    def _best_next_index(self, current_job: Job, candidates: Dict[int, Job]) -> int:
        best_index = None
        best_score = None

        for index in sorted(candidates):
            score = calculate_job_score(
                current_job,
                candidates[index],
                self.average_speed_kmh,
                self.fallback_location
            )
            if best_score is None or score > best_score:
                best_index, best_score = index, score

        return best_index

    def _build_route(self, ordered: List[Job], start_time: datetime) -> Route:
        steps: List[RouteStep] = []
        current_time = start_time
        total_distance = 0.0
        total_duration = 0.0
        total_earnings = 0.0

        for index, job in enumerate(ordered):
            if index == 0:
                distance = 0.0
                travel_minutes = 0.0
            else:
                distance = estimate_distance(ordered[index - 1], job, self.fallback_location)
                travel_minutes = estimate_travel_time(distance, self.average_speed_kmh)

            current_time = current_time + timedelta(minutes=travel_minutes)

            steps.append(RouteStep(
                job_id=job.id,
                job=job,
                order=index + 1,
                estimated_arrival=current_time,
                distance_from_previous=distance,
                duration_from_previous=travel_minutes
            ))

            work_minutes = job_duration(job)
            current_time = current_time + timedelta(minutes=work_minutes)

            total_distance += distance
            total_duration += travel_minutes + work_minutes
            total_earnings += job_payout(job)

        return Route(
            job_ids=[job.id for job in ordered],
            total_distance=total_distance,
            total_duration=total_duration,
            total_earnings=total_earnings,
            estimated_completion_time=current_time,
            steps=steps
        )

    def calculate_route_metrics(self, jobs: List[Job]) -> RouteMetrics:
        """
        Aggregate statistics of a job set, ignoring order and travel

        Args:
            jobs: Jobs to summarize

        Returns:
            RouteMetrics (all zero for an empty list)
        """
        total_earnings = sum(job_payout(job) for job in jobs)
        total_duration = sum(job_duration(job) for job in jobs)
        total_roi = sum(calculate_roi(job) for job in jobs)

        return RouteMetrics(
            total_earnings=total_earnings,
            total_duration=total_duration,
            average_roi=total_roi / len(jobs) if jobs else 0.0,
            estimated_hourly_rate=(total_earnings / total_duration) * 60 if total_duration > 0 else 0.0
        )


def optimize_route(
    jobs: List[Job],
    start_location: Optional[Coordinate] = None,
    start_time: Optional[datetime] = None
) -> Route:
    """Convenience function to optimize a route with default settings"""
    return RouteOptimizer().optimize_route(jobs, start_location, start_time)


def calculate_route_metrics(jobs: List[Job]) -> RouteMetrics:
    """Convenience function to compute route metrics"""
    return RouteOptimizer().calculate_route_metrics(jobs)
