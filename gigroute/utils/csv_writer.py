"""Locked CSV writes for drafts and route exports

Several inbox workers may append to the same drafts file, so every write
holds a FileLock on `<file>.lock`, and the new content is written to a
temporary file that then replaces the target.
"""

import os
import logging
import pandas as pd
from pathlib import Path
from typing import Dict, List, Optional
from filelock import FileLock, Timeout

from gigroute.models.route import Route


DEFAULT_LOCK_TIMEOUT = 30


def _replace_csv(df: pd.DataFrame, file_path: Path) -> None:
    tmp_path = file_path.with_name(file_path.name + ".tmp")
    df.to_csv(tmp_path, index=False, encoding='utf-8')
    os.replace(tmp_path, file_path)


def _read_existing(file_path: Path, logger: logging.Logger) -> Optional[pd.DataFrame]:
    if not file_path.exists():
        return None
    try:
        return pd.read_csv(file_path, dtype=str, keep_default_na=False)
    except (pd.errors.ParserError, pd.errors.EmptyDataError, UnicodeDecodeError) as e:
        logger.warning(f"Could not read existing {file_path} ({e}), starting a new file")
        return None


def safe_write_csv(
    filename: str,
    data: List[Dict],
    logger: Optional[logging.Logger] = None,
    dedupe_on: Optional[List[str]] = None,
    lock_timeout: int = DEFAULT_LOCK_TIMEOUT
) -> bool:
    """
    Append rows to a CSV file under a file lock

    Existing rows come first. With dedupe_on, a new row whose values in those
    columns match an earlier row is dropped.

    Args:
        filename: CSV path, created with its directory if missing
        data: Rows to append
        logger: Optional logger instance
        dedupe_on: Columns identifying a duplicate row
        lock_timeout: Seconds to wait for the lock

    Returns:
        True if the rows are on disk, False otherwise
    """
    if logger is None:
        logger = logging.getLogger("gigroute.utils.csv_writer")

    if not data:
        return True

    file_path = Path(filename).resolve()

    try:
        file_path.parent.mkdir(parents=True, exist_ok=True)

        with FileLock(str(file_path) + ".lock", timeout=lock_timeout):
            new_df = pd.DataFrame(data).fillna("").astype(str)
            existing = _read_existing(file_path, logger)
            combined = new_df if existing is None else pd.concat([existing, new_df], ignore_index=True)

            columns = [c for c in (dedupe_on or []) if c in combined.columns]
            if columns:
                before = len(combined)
                combined = combined.drop_duplicates(subset=columns, keep='first')
                if len(combined) < before:
                    logger.debug(f"Dropped {before - len(combined)} duplicate row(s) on {', '.join(columns)}")

            _replace_csv(combined, file_path)

        logger.debug(f"Wrote {len(combined)} rows to {file_path}")
        return True

    except Timeout:
        logger.error(f"Gave up waiting {lock_timeout}s for the lock on {file_path}")
        return False
    except Exception as e:
        logger.error(f"Failed to write CSV file {file_path}: {e}", exc_info=True)
        return False


def write_route_csv(
    route: Route,
    filename: str,
    logger: Optional[logging.Logger] = None
) -> bool:
    """
    Export a route: one row per stop followed by a TOTAL row

    Any existing file is replaced.

    Returns:
        True if the file was written
    """
    if logger is None:
        logger = logging.getLogger("gigroute.utils.csv_writer")

    rows = route.to_rows()
    rows.append({
        'order': '',
        'job_id': 'TOTAL',
        'title': '',
        'platform': '',
        'address': '',
        'payout': round(route.total_earnings, 2),
        'estimated_duration': '',
        'estimated_arrival': route.estimated_completion_time.isoformat(),
        'distance_from_previous': round(route.total_distance, 3),
        'duration_from_previous': round(route.total_duration, 1)
    })

    file_path = Path(filename).resolve()

    try:
        file_path.parent.mkdir(parents=True, exist_ok=True)
        with FileLock(str(file_path) + ".lock", timeout=DEFAULT_LOCK_TIMEOUT):
            _replace_csv(pd.DataFrame(rows), file_path)
    except Timeout:
        logger.error(f"Gave up waiting for the lock on {file_path}")
        return False
    except Exception as e:
        logger.error(f"Failed to write route CSV {file_path}: {e}", exc_info=True)
        return False

    logger.info(f"Wrote route with {len(route.steps)} stops to {file_path}")
    return True
