"""Job parsing and route optimization services"""

from .job_parser import JobParser, parse_job_text
from .route_optimizer import RouteOptimizer, optimize_route, calculate_route_metrics

__all__ = [
    "JobParser",
    "parse_job_text",
    "RouteOptimizer",
    "optimize_route",
    "calculate_route_metrics",
]
