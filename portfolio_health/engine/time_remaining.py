"""Share of a project's calendar span still ahead of today."""

from typing import Optional

from ..models.project import Project, ProjectStatus
from ..utils.datetime_utils import round_half_up


def calculate_time_remaining_percentage(project: Project) -> Optional[int]:
    """
    Return the percentage (0-100) of the project span that remains.

    Completed projects have no time remaining. ``None`` means there is no
    duration data and callers fall back to milestone-only scoring. Overdue
    projects give 0, and the ratio is capped at 100 for projects that have
    not started yet (days until the end exceed the span itself).
    """
    if project.status == ProjectStatus.COMPLETED:
        return 0

    total_days = project.total_days
    remaining_days = project.total_days_remaining

    # A zero-day span has no usable ratio either.
    if not total_days or remaining_days is None:
        return None

    if remaining_days < 0:
        return 0

    percentage = round_half_up(remaining_days / total_days * 100)
    return max(0, min(100, percentage))
