"""Filtering, sorting and selection of job lists"""

import logging
from collections import Counter
from datetime import datetime
from typing import Dict, Iterable, List, Optional

from gigroute.models.job import Job
from gigroute.models.route import Coordinate
from gigroute.utils.geo import distance_from
from gigroute.utils.reward import calculate_roi, job_payout


ALL_PLATFORMS = "all"

SORT_OPTIONS = ("roi", "payout", "time", "proximity")

logger = logging.getLogger("gigroute.utils.job_filters")


def filter_jobs(
    jobs: List[Job],
    platform: str = ALL_PLATFORMS,
    statuses: Optional[Iterable[str]] = None
) -> List[Job]:
    """
    Filter jobs by platform and status

    Args:
        jobs: Jobs to filter
        platform: Platform id, or 'all' to keep every platform
        statuses: Statuses to keep (None keeps every status)

    Returns:
        Matching jobs in input order
    """
    wanted_platform = (platform or ALL_PLATFORMS).strip().lower()
    wanted_statuses = set(statuses) if statuses is not None else None

    filtered = []
    for job in jobs:
        if wanted_platform != ALL_PLATFORMS and job.platform.lower() != wanted_platform:
            continue
        if wanted_statuses is not None and job.status not in wanted_statuses:
            continue
        filtered.append(job)

    return filtered


def sort_jobs(
    jobs: List[Job],
    sort_by: str = "roi",
    location: Optional[Coordinate] = None
) -> List[Job]:
    """
    Sort jobs for display

    Sorting is stable, so jobs with equal keys keep their input order.

    Args:
        jobs: Jobs to sort
        sort_by: 'roi' (best first), 'payout' (highest first),
            'time' (earliest deadline first, no deadline last) or
            'proximity' (nearest to location first)
        location: Reference point for 'proximity'

    Returns:
        New sorted list (input order for unknown keys or a missing location)
    """
    if sort_by == "roi":
        return sorted(jobs, key=calculate_roi, reverse=True)

    if sort_by == "payout":
        return sorted(jobs, key=job_payout, reverse=True)

    if sort_by == "time":
        return sorted(jobs, key=_deadline_key)

    if sort_by == "proximity":
        if location is None:
            logger.debug("No location given for proximity sort, keeping input order")
            return list(jobs)
        return sorted(jobs, key=lambda job: distance_from(location, job))

    logger.warning(f"Unknown sort option '{sort_by}'. Options: {', '.join(SORT_OPTIONS)}")
    return list(jobs)


def _deadline_key(job: Job):
    # Jobs without a deadline go last; naive and aware timestamps are compared by UTC value
    if job.time_window_end is None:
        return (1, 0.0)

    deadline = job.time_window_end
    if deadline.tzinfo is None:
        return (0, (deadline - datetime(1970, 1, 1)).total_seconds())
    return (0, deadline.timestamp())


def platform_counts(jobs: List[Job]) -> Dict[str, int]:
    """
    Count jobs per platform

    Returns:
        Mapping of platform id to count, with an 'all' entry for the total
    """
    counter = Counter(job.platform for job in jobs)
    counts = {ALL_PLATFORMS: len(jobs)}
    for platform, count in counter.most_common():
        counts[platform] = count
    return counts


def select_jobs(jobs: List[Job], job_ids: Iterable[str]) -> List[Job]:
    """
    Pick the jobs whose id is in the selection

    Ids with no matching job are ignored. Jobs keep their input order.
    """
    wanted = set(job_ids)
    return [job for job in jobs if job.id in wanted]
