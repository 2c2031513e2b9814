"""Load job lists from CSV files"""

import logging
import pandas as pd
from pathlib import Path
from typing import List, Optional

from gigroute.models.job import Job


def load_jobs_csv(filename: str, logger: Optional[logging.Logger] = None) -> List[Job]:
    """
    Read jobs from a CSV file

    Columns follow Job field names (id, title, platform, payout, address,
    latitude, longitude, estimated_duration, ...). Empty cells become the
    field defaults. Rows that cannot be read are logged and skipped.

    Args:
        filename: Path to the CSV file
        logger: Optional logger instance

    Returns:
        List of jobs in file order

    Raises:
        FileNotFoundError: If the file doesn't exist
    """
    if logger is None:
        logger = logging.getLogger("gigroute.utils.job_loader")

    file_path = Path(filename)
    if not file_path.exists():
        raise FileNotFoundError(f"Jobs file not found: {file_path}")

    df = pd.read_csv(file_path, dtype={'id': str})
    logger.debug(f"Read {len(df)} rows from {file_path}")

    jobs = []
    for row_number, row in enumerate(df.to_dict('records'), start=1):
        try:
            job = Job.from_dict(row)
        except Exception as e:
            logger.warning(f"Skipping row {row_number} of {file_path}: {e}")
            continue

        if job.id is None:
            job.id = str(row_number)

        jobs.append(job)

    logger.info(f"Loaded {len(jobs)} jobs from {file_path}")
    return jobs
