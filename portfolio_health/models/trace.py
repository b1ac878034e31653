"""Health decision and evaluation result models for observability."""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Any, Dict, Optional

from .project import StatusColor


class HealthBasis(str, Enum):
    """Which precedence rule produced a health colour."""

    MANUAL = "manual"
    STATUS_BASED = "status_based"
    NO_MILESTONES = "no_milestones"
    MILESTONE_ONLY = "milestone_only"
    FUTURE_PROJECT = "future_project"
    TIME_AWARE = "time_aware"


@dataclass(frozen=True)
class HealthDecision:
    """Outcome of the health classifier for one project."""

    color: StatusColor
    basis: HealthBasis
    reasoning: str
    weighted_completion: Optional[int] = None
    time_remaining_percentage: Optional[int] = None
    band: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'color': self.color.value,
            'basis': self.basis.value,
            'reasoning': self.reasoning,
            'weighted_completion': self.weighted_completion,
            'time_remaining_percentage': self.time_remaining_percentage,
            'band': self.band,
        }


@dataclass
class ProjectHealthResult:
    """Complete engine output for one project on one day."""

    project_id: str
    today: date
    color: StatusColor
    decision: HealthDecision
    duration: Any
    weighted_completion: int
    time_remaining_percentage: Optional[int]
    previous_color: Optional[StatusColor] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def has_discrepancy(self) -> bool:
        """True when the stored colour differs from the fresh one."""
        return self.previous_color != self.color

    def to_dict(self) -> Dict[str, Any]:
        """Convert result to dictionary for JSON export."""
        return {
            'project_id': self.project_id,
            'today': self.today.isoformat(),
            'color': self.color.value,
            'previous_color': self.previous_color.value if self.previous_color else None,
            'weighted_completion': self.weighted_completion,
            'time_remaining_percentage': self.time_remaining_percentage,
            'decision': self.decision.to_dict(),
            'duration': self.duration.to_dict(),
            'metadata': self.metadata,
        }

    def to_human_readable(self) -> str:
        """Generate human-readable log format."""
        duration = self.duration
        lines = [
            f"=== Project: {self.project_id} ({self.metadata.get('title', '')}) ===",
            f"As of: {self.today.isoformat()}",
            f"Health: {self.color.value.upper()} [{self.decision.basis.value}]",
            f"Reasoning: {self.decision.reasoning}",
            "",
            "Metrics:",
            f"  Weighted completion: {self.weighted_completion}%",
        ]

        if self.time_remaining_percentage is None:
            lines.append("  Time remaining: N/A")
        else:
            lines.append(f"  Time remaining: {self.time_remaining_percentage}%")

        if duration.is_empty:
            lines.append("  Duration: no milestone dates")
        else:
            lines.extend([
                f"  Span: {duration.start_date} -> {duration.end_date}",
                f"  Total days: {duration.total_days} ({duration.working_days} working)",
                f"  Days remaining: {duration.total_days_remaining} ({duration.working_days_remaining} working)",
            ])

        if self.previous_color is not None and self.has_discrepancy:
            lines.append(f"  Stored colour {self.previous_color.value} differs from computed {self.color.value}")

        lines.append("=" * 50)

        return "\n".join(lines)
