"""Reward model: hourly rates and route scoring

"ROI" here is the job's effective hourly earnings rate. It is used as a
ranking signal, not as a return on any investment.
"""

from gigroute.models.job import Job, to_float
from gigroute.models.route import Coordinate
from gigroute.utils.geo import (
    AVERAGE_SPEED_KMH,
    DEFAULT_LOCATION,
    estimate_distance,
    estimate_travel_time
)


DEFAULT_DURATION_MINUTES = 30


def job_duration(job: Job) -> float:
    """Estimated minutes on site, 30 when unknown or not a positive number"""
    minutes = to_float(job.estimated_duration, None)
    if minutes is None or minutes <= 0:
        return DEFAULT_DURATION_MINUTES
    return minutes


def job_payout(job: Job) -> float:
    """Payout as a number, 0.0 when missing or not numeric"""
    return to_float(job.payout, 0.0)


def hourly_rate(payout: float, duration_minutes: float) -> float:
    """
    Effective hourly rate for a payout earned over a duration

    Args:
        payout: Amount earned
        duration_minutes: Minutes spent

    Returns:
        Currency per hour, 0.0 when duration is not positive
    """
    if duration_minutes <= 0:
        return 0.0
    return payout / duration_minutes * 60


def calculate_roi(job: Job) -> float:
    """
    ROI of a job

    A precomputed, non-zero ROI is returned unchanged; otherwise it is derived
    as payout per estimated hour.
    """
    roi = to_float(job.roi, 0.0)
    if roi:
        return roi

    hours = job_duration(job) / 60
    return job_payout(job) / hours if hours > 0 else 0.0


def calculate_job_score(
    current_job: Job,
    candidate: Job,
    average_speed_kmh: float = AVERAGE_SPEED_KMH,
    fallback: Coordinate = DEFAULT_LOCATION
) -> float:
    """
    Score a candidate as the next stop after current_job

    Earnings per minute including the travel to reach the candidate, weighted
    by the candidate's ROI. Higher is better.

    Args:
        current_job: Job the route currently ends at
        candidate: Job being considered
        average_speed_kmh: Assumed driving speed
        fallback: Coordinate used for jobs without coordinates

    Returns:
        Score, 0.0 when the total time is zero
    """
    roi = calculate_roi(candidate)
    distance = estimate_distance(current_job, candidate, fallback)
    travel_time = estimate_travel_time(distance, average_speed_kmh)

    total_time = job_duration(candidate) + travel_time
    if total_time <= 0:
        return 0.0

    return (job_payout(candidate) / total_time) * (roi / 100)
