"""Core health engine: duration, completion and classification in one pass."""

import dataclasses
from datetime import date
from typing import Any, Dict, List, Optional

from ..models.project import Milestone, Project
from ..models.trace import ProjectHealthResult
from ..utils.logging import get_logger
from .completion import calculate_weighted_completion
from .duration import ProjectDuration, calculate_project_duration
from .health import HealthClassifier
from .time_remaining import calculate_time_remaining_percentage

logger = get_logger(__name__)


class HealthEngine:
    """Compute a project's health colour and duration fields."""

    def __init__(self, config: dict = None):
        """Initialize engine with configuration."""
        self.config = config or {}
        self.classifier = HealthClassifier(self.config)

    def evaluate(
        self,
        project: Project,
        milestones: Optional[List[Milestone]] = None,
        today: Optional[date] = None,
    ) -> ProjectHealthResult:
        """
        Evaluate one project against its full milestone list.

        ``today`` is read once and shared by the duration and classification
        steps. Duration fields are derived from ``milestones`` rather than
        taken from the stored snapshot, so writing and re-checking a project
        go through the same computation.
        """
        if today is None:
            today = date.today()
        if milestones is None:
            milestones = project.milestones

        duration = calculate_project_duration(milestones, today)
        weighted_completion = calculate_weighted_completion(milestones)

        snapshot = dataclasses.replace(project, **duration.to_project_fields())
        time_remaining = calculate_time_remaining_percentage(snapshot)
        decision = self.classifier.classify(snapshot, milestones, today)

        logger.debug(
            f"Evaluated project {project.id} as of {today}: {decision.color.value} "
            f"(completion {weighted_completion}%, time remaining {time_remaining})"
        )

        return ProjectHealthResult(
            project_id=project.id,
            today=today,
            color=decision.color,
            decision=decision,
            duration=duration,
            weighted_completion=weighted_completion,
            time_remaining_percentage=time_remaining,
            previous_color=project.computed_status_color,
            metadata={
                'title': project.title,
                'status': project.status,
                'milestone_count': len(milestones),
            },
        )

    def apply_result(self, project: Project, result: ProjectHealthResult) -> Project:
        """Return a copy of the project with the engine-owned fields written."""
        return dataclasses.replace(project, **engine_fields(result))

    def recompute(self, project: Project, milestones: List[Milestone], today: Optional[date] = None) -> Project:
        """Evaluate and write back in one step (compute-on-write)."""
        result = self.evaluate(project, milestones, today)
        return self.apply_result(dataclasses.replace(project, milestones=list(milestones)), result)


def engine_fields(result: ProjectHealthResult) -> Dict[str, Any]:
    """The fields a persistence layer stores from an engine result."""
    duration: ProjectDuration = result.duration
    fields = dict(duration.to_project_fields())
    fields['computed_status_color'] = result.color
    return fields
