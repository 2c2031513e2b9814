"""Utility modules for gigroute"""

from gigroute.utils.geo import calculate_distance, estimate_travel_time
from gigroute.utils.reward import calculate_roi, calculate_job_score, hourly_rate
from gigroute.utils.string_matcher import KeywordMatcher, match_any_keywords

__all__ = [
    'calculate_distance',
    'estimate_travel_time',
    'calculate_roi',
    'calculate_job_score',
    'hourly_rate',
    'KeywordMatcher',
    'match_any_keywords'
]
