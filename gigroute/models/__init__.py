"""Data models for gigroute"""

from .config import AppConfig, WorkerConfig, OptimizerConfig, RedisConfig
from .job import Job, JobStatus, JobSource
from .draft import JobDraft
from .route import Coordinate, Route, RouteStep, RouteMetrics

__all__ = [
    "AppConfig",
    "WorkerConfig",
    "OptimizerConfig",
    "RedisConfig",
    "Job",
    "JobStatus",
    "JobSource",
    "JobDraft",
    "Coordinate",
    "Route",
    "RouteStep",
    "RouteMetrics",
]
