"""Project, milestone and health result models."""

from .project import (
    DEFAULT_MILESTONE_WEIGHT,
    DURATION_FIELDS,
    ENGINE_OWNED_FIELDS,
    HealthCalculationType,
    Milestone,
    Project,
    ProjectStatus,
    StatusColor,
)
from .trace import HealthBasis, HealthDecision, ProjectHealthResult

__all__ = [
    'DEFAULT_MILESTONE_WEIGHT',
    'DURATION_FIELDS',
    'ENGINE_OWNED_FIELDS',
    'HealthCalculationType',
    'Milestone',
    'Project',
    'ProjectStatus',
    'StatusColor',
    'HealthBasis',
    'HealthDecision',
    'ProjectHealthResult',
]
