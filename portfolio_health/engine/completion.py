"""Weighted milestone completion."""

from typing import List

from ..models.project import Milestone
from ..utils.datetime_utils import round_half_up


def calculate_weighted_completion(milestones: List[Milestone]) -> int:
    """Combine milestone completion percentages proportionally to their weights (0-100)."""
    if not milestones:
        return 0

    weighted_sum = sum(m.completion * m.effective_weight for m in milestones)
    total_possible = sum(m.effective_weight * 100 for m in milestones)

    if total_possible <= 0:
        return 0

    return round_half_up(weighted_sum / total_possible * 100)
