"""Job data model"""

import math
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional


class JobStatus:
    """Lifecycle states of a job (advisory, owned by the storage layer)"""
    AVAILABLE = "available"
    SELECTED = "selected"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    EXPIRED = "expired"

    ALL = (AVAILABLE, SELECTED, IN_PROGRESS, COMPLETED, EXPIRED)
    PENDING = (AVAILABLE, SELECTED)


class JobSource:
    """Where a job record came from"""
    MANUAL = "manual"
    SHARE_TARGET = "share_target"
    CLIPBOARD = "clipboard"
    IMPORT = "import"


def to_float(value: Any, default: Optional[float] = 0.0) -> Optional[float]:
    """
    Coerce a loose value (str, int, float, NaN cell) to float

    Args:
        value: Value to coerce
        default: Returned when the value is missing or not numeric

    Returns:
        Float value or the default
    """
    if value is None or isinstance(value, bool):
        return default

    try:
        result = float(str(value).strip().replace("$", "").replace(",", ""))
    except (TypeError, ValueError):
        return default

    if math.isnan(result) or math.isinf(result):
        return default

    return result


def to_int(value: Any, default: Optional[int] = None) -> Optional[int]:
    """Coerce a loose value to int, falling back to default"""
    number = to_float(value, None)
    if number is None:
        return default
    return int(number)


def to_datetime(value: Any) -> Optional[datetime]:
    """Parse an ISO-8601 timestamp, returning None when it can't be read"""
    if isinstance(value, datetime):
        return value

    if not isinstance(value, str) or not value.strip():
        return None

    try:
        return datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    except ValueError:
        return None


def _to_text(value: Any, default: str = "") -> str:
    if value is None:
        return default
    if isinstance(value, float) and math.isnan(value):
        return default
    return str(value)


def _to_tags(value: Any) -> List[str]:
    if isinstance(value, (list, tuple)):
        return [str(t).strip() for t in value if str(t).strip()]
    if isinstance(value, str):
        return [t.strip() for t in value.split(",") if t.strip()]
    return []


@dataclass
class Job:
    """
    Represents a gig job posting

    Attributes:
        title: Job title
        payout: Base pay for the job
        address: Where the job happens (free text)
        id: Identifier assigned by the storage layer (None while drafting)
        description: Free-text description
        platform: Source platform id (e.g. 'instacart', 'doordash')
        source: How the job entered the system (manual, clipboard, ...)
        tip_estimate: Expected tip, displayed separately from payout
        reimbursement: Money paid back for purchases
        latitude: Decimal degrees (None when unknown)
        longitude: Decimal degrees (None when unknown)
        estimated_duration: Minutes on site (None when unknown)
        roi: Precomputed hourly-rate score (None to derive it)
        time_window_start: Earliest start
        time_window_end: Deadline
        status: Lifecycle state, see JobStatus
        priority: User-assigned priority
        tags: Free-form labels
        metadata: Platform-specific data
    """
    title: str
    payout: float
    address: str
    id: Optional[str] = None
    description: str = ""
    platform: str = "manual"
    source: str = JobSource.MANUAL
    tip_estimate: float = 0.0
    reimbursement: float = 0.0
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    estimated_duration: Optional[int] = None
    roi: Optional[float] = None
    time_window_start: Optional[datetime] = None
    time_window_end: Optional[datetime] = None
    status: str = JobStatus.AVAILABLE
    priority: int = 0
    tags: List[str] = field(default_factory=list)
    metadata: Dict[str, Any] = field(default_factory=dict)

    def __str__(self) -> str:
        """String representation of job"""
        return f"{self.title} on {self.platform} (${self.payout:.2f})"

    @property
    def has_coordinates(self) -> bool:
        return self.latitude is not None and self.longitude is not None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Job':
        """
        Create a Job from a loose mapping (CSV row, JSON object)

        Numeric fields that fail coercion fall back to their defaults
        instead of raising, so one bad record never breaks a route.

        Args:
            data: Dictionary containing job fields

        Returns:
            Job instance
        """
        job_id = data.get('id')

        return cls(
            id=_to_text(job_id) or None,
            title=_to_text(data.get('title'), "Untitled job"),
            description=_to_text(data.get('description')),
            platform=_to_text(data.get('platform'), "manual").strip().lower() or "manual",
            source=_to_text(data.get('source'), JobSource.MANUAL) or JobSource.MANUAL,
            payout=max(to_float(data.get('payout'), 0.0), 0.0),
            tip_estimate=max(to_float(data.get('tip_estimate'), 0.0), 0.0),
            reimbursement=max(to_float(data.get('reimbursement'), 0.0), 0.0),
            address=_to_text(data.get('address'), "Job location") or "Job location",
            latitude=to_float(data.get('latitude'), None),
            longitude=to_float(data.get('longitude'), None),
            estimated_duration=to_int(data.get('estimated_duration'), None),
            roi=to_float(data.get('roi'), None),
            time_window_start=to_datetime(data.get('time_window_start')),
            time_window_end=to_datetime(data.get('time_window_end')),
            status=_to_text(data.get('status'), JobStatus.AVAILABLE) or JobStatus.AVAILABLE,
            priority=to_int(data.get('priority'), 0),
            tags=_to_tags(data.get('tags')),
            metadata=dict(data.get('metadata') or {}) if isinstance(data.get('metadata'), dict) else {}
        )

    def to_dict(self) -> dict:
        """Convert job to dictionary"""
        return {
            'id': self.id,
            'title': self.title,
            'description': self.description,
            'platform': self.platform,
            'source': self.source,
            'payout': self.payout,
            'tip_estimate': self.tip_estimate,
            'reimbursement': self.reimbursement,
            'address': self.address,
            'latitude': self.latitude,
            'longitude': self.longitude,
            'estimated_duration': self.estimated_duration,
            'roi': self.roi,
            'time_window_start': self.time_window_start.isoformat() if self.time_window_start else None,
            'time_window_end': self.time_window_end.isoformat() if self.time_window_end else None,
            'status': self.status,
            'priority': self.priority,
            'tags': ','.join(self.tags),
            'metadata': self.metadata
        }
