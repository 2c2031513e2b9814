"""Summary generator utility for earnings statistics"""

import logging
import pandas as pd
from pathlib import Path
from datetime import datetime
from typing import List, Optional
from dataclasses import dataclass, field
from collections import defaultdict

from gigroute.models.job import Job, JobStatus
from gigroute.utils.reward import hourly_rate, job_duration, job_payout


@dataclass
class PlatformSummary:
    """Summary statistics for a platform"""
    name: str
    count: int
    percentage: float
    earnings: float
    average_hourly_rate: float


@dataclass
class EarningsSummary:
    """Dashboard summary of a job list"""
    total_jobs: int
    completed_jobs: int
    pending_jobs: int
    total_payout: float
    total_tips: float
    total_reimbursement: float
    platforms: List[PlatformSummary]
    generated_at: datetime = field(default_factory=datetime.now)


def calculate_percentage(count: int, total: int, decimal_places: int = 2) -> float:
    """
    Calculate percentage with safe division

    Args:
        count: The count for the item
        total: The total count
        decimal_places: Number of decimal places to round to

    Returns:
        Percentage value rounded to specified decimal places
    """
    if total == 0:
        return 0.0
    return round((count / total) * 100, decimal_places)


def generate_summary(jobs: List[Job]) -> EarningsSummary:
    """
    Generate an earnings summary from a job list

    Args:
        jobs: Jobs to summarize

    Returns:
        EarningsSummary with a per-platform breakdown sorted by job count
    """
    total_jobs = len(jobs)

    if total_jobs == 0:
        return EarningsSummary(
            total_jobs=0,
            completed_jobs=0,
            pending_jobs=0,
            total_payout=0.0,
            total_tips=0.0,
            total_reimbursement=0.0,
            platforms=[]
        )

    counts = defaultdict(int)
    earnings = defaultdict(float)
    minutes = defaultdict(int)

    for job in jobs:
        counts[job.platform] += 1
        earnings[job.platform] += job_payout(job)
        minutes[job.platform] += job_duration(job)

    platform_summaries = []
    for platform, count in counts.items():
        platform_summaries.append(PlatformSummary(
            name=platform,
            count=count,
            percentage=calculate_percentage(count, total_jobs),
            earnings=round(earnings[platform], 2),
            average_hourly_rate=round(hourly_rate(earnings[platform], minutes[platform]), 2)
        ))

    platform_summaries.sort(key=lambda x: x.count, reverse=True)

    return EarningsSummary(
        total_jobs=total_jobs,
        completed_jobs=sum(1 for job in jobs if job.status == JobStatus.COMPLETED),
        pending_jobs=sum(1 for job in jobs if job.status in JobStatus.PENDING),
        total_payout=round(sum(job_payout(job) for job in jobs), 2),
        total_tips=round(sum(job.tip_estimate for job in jobs), 2),
        total_reimbursement=round(sum(job.reimbursement for job in jobs), 2),
        platforms=platform_summaries
    )


def save_summary_csv(
    summary: EarningsSummary,
    filepath: str,
    logger: Optional[logging.Logger] = None
) -> bool:
    """
    Save the per-platform summary to a CSV file

    Args:
        summary: EarningsSummary object
        filepath: Path to save CSV file
        logger: Optional logger instance

    Returns:
        True if successful, False otherwise
    """
    if logger is None:
        logger = logging.getLogger("gigroute.utils.summary_generator")

    try:
        file_path = Path(filepath).resolve()
        file_path.parent.mkdir(parents=True, exist_ok=True)

        data = []
        for platform in summary.platforms:
            data.append({
                'platform': platform.name,
                'job_count': platform.count,
                'percentage': platform.percentage,
                'earnings': platform.earnings,
                'average_hourly_rate': platform.average_hourly_rate,
                'total_jobs': summary.total_jobs
            })

        columns = ['platform', 'job_count', 'percentage', 'earnings', 'average_hourly_rate', 'total_jobs']
        df = pd.DataFrame(data, columns=columns)
        df.to_csv(file_path, index=False, encoding='utf-8')

        logger.info(f"Saved platform summary to {file_path}")
        return True

    except Exception as e:
        logger.error(f"Failed to save platform summary: {e}", exc_info=True)
        return False
