"""Project health classifier."""

from datetime import date
from typing import Any, Callable, Dict, List, Optional

from ..models.project import Milestone, Project, ProjectStatus, StatusColor
from ..models.trace import HealthBasis, HealthDecision
from ..utils.config import get_default_config
from ..utils.datetime_utils import parse_date
from ..utils.logging import get_logger
from .completion import calculate_weighted_completion
from .time_remaining import calculate_time_remaining_percentage

logger = get_logger(__name__)

STATUS_COLORS = {
    ProjectStatus.COMPLETED: StatusColor.GREEN,
    ProjectStatus.CANCELLED: StatusColor.RED,
    ProjectStatus.DRAFT: StatusColor.YELLOW,
    ProjectStatus.ON_HOLD: StatusColor.YELLOW,
}

KNOWN_STATUSES = {status.value for status in ProjectStatus}


class HealthClassifier:
    """
    Turn a project snapshot and its milestones into a traffic-light colour.

    Rules are tried in order and the first one that returns a decision wins:
    manual override, lifecycle status, active project without milestones,
    then time-aware milestone scoring.
    """

    def __init__(self, config: dict = None):
        """Initialize classifier thresholds from configuration."""
        config = config or {}
        defaults = get_default_config()['health_thresholds']
        thresholds = dict(defaults)
        thresholds.update(config.get('health_thresholds', {}) or {})

        self.time_bands = sorted(
            thresholds['time_bands'],
            key=lambda band: band['min_time_remaining'],
            reverse=True,
        )
        self.overdue_yellow = thresholds['overdue_yellow']
        self.milestone_only = thresholds['milestone_only']
        self.future_project_yellow_above = thresholds['future_project_yellow_above']

        self.rules: List[Callable[[Project, List[Milestone], date], Optional[HealthDecision]]] = [
            self._manual_override,
            self._status_based,
            self._no_milestones,
            self._time_aware,
        ]

    def classify(self, project: Project, milestones: List[Milestone], today: date) -> HealthDecision:
        """Classify project health; always returns a decision."""
        for rule in self.rules:
            decision = rule(project, milestones, today)
            if decision is not None:
                logger.debug(f"Project {project.id}: {decision.color.value} via {decision.basis.value}")
                return decision

        # _time_aware always decides; kept so the contract holds if rules change
        return HealthDecision(StatusColor.RED, HealthBasis.TIME_AWARE, "No rule matched")

    def _manual_override(self, project: Project, milestones: List[Milestone], today: date) -> Optional[HealthDecision]:
        if project.is_manual and project.manual_status_color:
            color = StatusColor(project.manual_status_color)
            return HealthDecision(
                color=color,
                basis=HealthBasis.MANUAL,
                reasoning=f"Manual override: status set to {color.value} by user",
            )
        return None

    def _status_based(self, project: Project, milestones: List[Milestone], today: date) -> Optional[HealthDecision]:
        status = project.status
        if status not in KNOWN_STATUSES:
            logger.warning(
                f"Project {project.id} has unknown status {status!r}; scoring it as an active project"
            )
            return None

        color = STATUS_COLORS.get(ProjectStatus(status))
        if color is None:
            return None

        return HealthDecision(
            color=color,
            basis=HealthBasis.STATUS_BASED,
            reasoning=f"Status-based: project status is {status!r} which maps to {color.value}",
        )

    def _no_milestones(self, project: Project, milestones: List[Milestone], today: date) -> Optional[HealthDecision]:
        if milestones:
            return None
        return HealthDecision(
            color=StatusColor.GREEN,
            basis=HealthBasis.NO_MILESTONES,
            reasoning="Active project without milestones defaults to green",
            weighted_completion=0,
        )

    def _time_aware(self, project: Project, milestones: List[Milestone], today: date) -> Optional[HealthDecision]:
        completion = calculate_weighted_completion(milestones)
        time_remaining = calculate_time_remaining_percentage(project)

        if time_remaining is None:
            thresholds = self.milestone_only
            color = self._grade(completion, thresholds['green'], thresholds['yellow'])
            return HealthDecision(
                color=color,
                basis=HealthBasis.MILESTONE_ONLY,
                reasoning=f"Milestone-only calculation: {completion}% weighted completion = {color.value}",
                weighted_completion=completion,
            )

        start_date = parse_date(project.calculated_start_date)
        if start_date is not None and start_date > today:
            # High completion before the project has started is suspicious.
            if completion > self.future_project_yellow_above:
                color = StatusColor.YELLOW
            else:
                color = StatusColor.GREEN
            return HealthDecision(
                color=color,
                basis=HealthBasis.FUTURE_PROJECT,
                reasoning=(
                    f"Future project: starts {start_date.isoformat()} with {completion}% completion = {color.value}"
                ),
                weighted_completion=completion,
                time_remaining_percentage=time_remaining,
            )

        if time_remaining == 0:
            color = StatusColor.YELLOW if completion >= self.overdue_yellow else StatusColor.RED
            band = "overdue"
        else:
            color = StatusColor.RED
            band = None
            for threshold in self.time_bands:
                if time_remaining > threshold['min_time_remaining']:
                    # With the default >70 band (yellow at 0) red is unreachable,
                    # completion is never negative. Kept as configured.
                    color = self._grade(completion, threshold['green'], threshold['yellow'])
                    band = f">{threshold['min_time_remaining']}"
                    break

        return HealthDecision(
            color=color,
            basis=HealthBasis.TIME_AWARE,
            reasoning=(
                f"Time-aware calculation: {completion}% completion with "
                f"{time_remaining}% time remaining = {color.value}"
            ),
            weighted_completion=completion,
            time_remaining_percentage=time_remaining,
            band=band,
        )

    @staticmethod
    def _grade(completion: int, green_at: float, yellow_at: float) -> StatusColor:
        if completion >= green_at:
            return StatusColor.GREEN
        if completion >= yellow_at:
            return StatusColor.YELLOW
        return StatusColor.RED


def calculate_project_health_status_color(
    project: Project,
    milestones: List[Milestone],
    today: date,
    config: Dict[str, Any] = None,
) -> StatusColor:
    """Compute the health colour for a project snapshot."""
    return HealthClassifier(config).classify(project, milestones, today).color
