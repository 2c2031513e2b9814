"""Route data models"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import List

from gigroute.models.job import Job


@dataclass(frozen=True)
class Coordinate:
    """A point in decimal degrees"""
    lat: float
    lng: float


@dataclass
class RouteStep:
    """
    One stop of a route

    Attributes:
        job_id: Id of the job visited at this stop
        job: The job itself
        order: 1-based position in the route
        estimated_arrival: When the stop is reached
        distance_from_previous: Kilometers travelled from the previous stop
        duration_from_previous: Minutes travelled from the previous stop
    """
    job_id: str
    job: Job
    order: int
    estimated_arrival: datetime
    distance_from_previous: float = 0.0
    duration_from_previous: float = 0.0


@dataclass
class Route:
    """
    Ordered sequence of jobs with travel, time and earnings rollups

    Attributes:
        job_ids: Job ids in visiting order
        total_distance: Kilometers travelled between stops
        total_duration: Minutes of travel plus on-site work
        total_earnings: Sum of payouts (tips and reimbursements excluded)
        estimated_completion_time: When the last job is finished
        steps: Per-stop details
    """
    job_ids: List[str]
    total_distance: float
    total_duration: float
    total_earnings: float
    estimated_completion_time: datetime
    steps: List[RouteStep] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.steps)

    def to_dict(self) -> dict:
        """Convert route to dictionary"""
        return {
            'job_ids': list(self.job_ids),
            'total_distance': self.total_distance,
            'total_duration': self.total_duration,
            'total_earnings': self.total_earnings,
            'estimated_completion_time': self.estimated_completion_time.isoformat(),
            'steps': [
                {
                    'job_id': step.job_id,
                    'order': step.order,
                    'estimated_arrival': step.estimated_arrival.isoformat(),
                    'distance_from_previous': step.distance_from_previous,
                    'duration_from_previous': step.duration_from_previous
                }
                for step in self.steps
            ]
        }

    def to_rows(self) -> List[dict]:
        """Flatten the route into one row per stop (for CSV export)"""
        rows = []
        for step in self.steps:
            rows.append({
                'order': step.order,
                'job_id': step.job_id,
                'title': step.job.title,
                'platform': step.job.platform,
                'address': step.job.address,
                'payout': step.job.payout,
                'estimated_duration': step.job.estimated_duration,
                'estimated_arrival': step.estimated_arrival.isoformat(),
                'distance_from_previous': round(step.distance_from_previous, 3),
                'duration_from_previous': round(step.duration_from_previous, 1)
            })
        return rows


@dataclass
class RouteMetrics:
    """Aggregate statistics of a job set, without ordering"""
    total_earnings: float
    total_duration: float
    average_roi: float
    estimated_hourly_rate: float
