"""Project duration derived from milestone dates."""

from dataclasses import dataclass, asdict
from datetime import date
from typing import Any, Dict, List, Optional

from ..models.project import Milestone
from ..utils.datetime_utils import count_working_days, days_between, parse_date
from ..utils.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class ProjectDuration:
    """Calendar and working-day metrics for a project's milestone span."""

    start_date: Optional[date]
    end_date: Optional[date]
    total_days: Optional[int]
    working_days: Optional[int]
    total_days_remaining: Optional[int]
    working_days_remaining: Optional[int]

    @classmethod
    def empty(cls) -> "ProjectDuration":
        """Duration for a project without any usable milestone date."""
        return cls(None, None, None, None, None, None)

    @property
    def is_empty(self) -> bool:
        return self.start_date is None

    @property
    def is_overdue(self) -> bool:
        return self.total_days_remaining is not None and self.total_days_remaining < 0

    def to_project_fields(self) -> Dict[str, Any]:
        """Map onto the project's stored duration field names."""
        return {
            'calculated_start_date': self.start_date,
            'calculated_end_date': self.end_date,
            'total_days': self.total_days,
            'working_days': self.working_days,
            'total_days_remaining': self.total_days_remaining,
            'working_days_remaining': self.working_days_remaining,
        }

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        for key in ('start_date', 'end_date'):
            if data[key] is not None:
                data[key] = data[key].isoformat()
        return data


def calculate_project_duration(milestones: List[Milestone], today: date) -> ProjectDuration:
    """
    Calculate a project's span from its milestones.

    The start is the earliest milestone ``date`` and the end is the latest
    ``end_date`` (a milestone without one ends on its ``date``). Milestones
    whose dates cannot be parsed are skipped. Remaining counts are relative
    to ``today`` and go negative once the end date has passed.
    """
    start_dates = []
    end_dates = []

    for milestone in milestones:
        start = parse_date(milestone.date)
        if start is None:
            logger.debug(f"Skipping milestone {milestone.id or milestone.milestone!r}: unparseable date {milestone.date!r}")
            continue
        start_dates.append(start)

        end = parse_date(milestone.end_date) if milestone.end_date else None
        # An end before its own start is treated as a single-day milestone.
        end_dates.append(max(end, start) if end else start)

    if not start_dates:
        return ProjectDuration.empty()

    start_date = min(start_dates)
    end_date = max(end_dates)

    total_days = days_between(start_date, end_date)
    working_days = count_working_days(start_date, end_date)

    total_days_remaining = days_between(today, end_date)

    # Both directions count inclusively, so the sign carries "overdue".
    working_days_remaining = count_working_days(min(today, end_date), max(today, end_date))
    if end_date < today:
        working_days_remaining = -working_days_remaining

    return ProjectDuration(
        start_date=start_date,
        end_date=end_date,
        total_days=total_days,
        working_days=working_days,
        total_days_remaining=total_days_remaining,
        working_days_remaining=working_days_remaining,
    )
