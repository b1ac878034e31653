"""Health scoring engine."""

from .completion import calculate_weighted_completion
from .duration import ProjectDuration, calculate_project_duration
from .health import HealthClassifier, calculate_project_health_status_color
from .pipeline import HealthEngine, engine_fields
from .time_remaining import calculate_time_remaining_percentage

__all__ = [
    'calculate_weighted_completion',
    'ProjectDuration',
    'calculate_project_duration',
    'HealthClassifier',
    'calculate_project_health_status_color',
    'HealthEngine',
    'engine_fields',
    'calculate_time_remaining_percentage',
]
