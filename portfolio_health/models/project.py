"""Project and milestone data models."""

import math
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Any, Dict, List, Optional

from ..utils.datetime_utils import DateLike, parse_date

DEFAULT_MILESTONE_WEIGHT = 3


class ProjectStatus(str, Enum):
    """Lifecycle status of a project."""

    DRAFT = "draft"
    ACTIVE = "active"
    ON_HOLD = "on_hold"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class HealthCalculationType(str, Enum):
    """Whether the displayed colour is user-set or engine-derived."""

    AUTOMATIC = "automatic"
    MANUAL = "manual"


class StatusColor(str, Enum):
    """Traffic-light health colour."""

    RED = "red"
    YELLOW = "yellow"
    GREEN = "green"

    @classmethod
    def parse(cls, value: Any) -> Optional["StatusColor"]:
        """Return the matching colour, or None for empty/unknown values."""
        if value is None or value == "":
            return None
        try:
            return cls(value)
        except ValueError:
            return None


# Fields written back by the engine; nothing else on a project is touched.
DURATION_FIELDS = (
    'calculated_start_date',
    'calculated_end_date',
    'total_days',
    'working_days',
    'total_days_remaining',
    'working_days_remaining',
)
ENGINE_OWNED_FIELDS = ('computed_status_color',) + DURATION_FIELDS


def _coerce_status(value: Any) -> str:
    if isinstance(value, Enum):
        return value.value
    return str(value) if value is not None else ProjectStatus.ACTIVE.value


def _coerce_number(value: Any) -> float:
    if value is None or value == "":
        return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    return number if math.isfinite(number) else 0.0


def _optional_int(value: Any) -> Optional[int]:
    if value is None or value == "":
        return None
    return int(float(value))


@dataclass
class Milestone:
    """A weighted milestone belonging to a project."""

    date: Optional[DateLike]
    completion: float = 0.0
    weight: Optional[float] = None
    end_date: Optional[DateLike] = None
    status: Optional[str] = None
    milestone: str = ""
    id: Optional[str] = None

    def __post_init__(self):
        """Clamp completion into 0-100."""
        self.completion = min(100.0, max(0.0, _coerce_number(self.completion)))

    @property
    def effective_weight(self) -> float:
        """Weight used in every calculation; missing, non-positive or non-finite means 3."""
        weight = _coerce_number(self.weight)
        return weight if weight > 0 else DEFAULT_MILESTONE_WEIGHT

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Milestone":
        """Build a milestone from a raw storage record."""
        weight = data.get('weight')
        return cls(
            id=data.get('id'),
            milestone=data.get('milestone') or data.get('title') or "",
            date=data.get('date'),
            end_date=data.get('end_date'),
            completion=data.get('completion'),
            weight=_coerce_number(weight) if weight not in (None, "") else None,
            status=data.get('status'),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a storage record."""
        return {
            'id': self.id,
            'milestone': self.milestone,
            'date': _serialize_date(self.date),
            'end_date': _serialize_date(self.end_date),
            'completion': self.completion,
            'weight': self.weight,
            'status': self.status,
        }


@dataclass
class Project:
    """Project snapshot as consumed and produced by the health engine."""

    id: str
    title: str = ""
    status: str = ProjectStatus.ACTIVE.value
    health_calculation_type: str = HealthCalculationType.AUTOMATIC.value
    manual_status_color: Optional[StatusColor] = None
    manual_health_percentage: Optional[float] = None
    calculated_start_date: Optional[date] = None
    calculated_end_date: Optional[date] = None
    total_days: Optional[int] = None
    working_days: Optional[int] = None
    total_days_remaining: Optional[int] = None
    working_days_remaining: Optional[int] = None
    computed_status_color: Optional[StatusColor] = None
    milestones: List[Milestone] = field(default_factory=list)

    def __post_init__(self):
        """Normalize enum-like fields to their storage representation."""
        self.status = _coerce_status(self.status)
        self.health_calculation_type = _enum_value(self.health_calculation_type)
        self.manual_status_color = StatusColor.parse(self.manual_status_color)
        self.computed_status_color = StatusColor.parse(self.computed_status_color)

    @property
    def is_manual(self) -> bool:
        return self.health_calculation_type == HealthCalculationType.MANUAL

    @property
    def has_duration_data(self) -> bool:
        return all(getattr(self, name) is not None for name in DURATION_FIELDS)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Project":
        """Build a project (and its milestones, if present) from a raw record."""
        return cls(
            id=str(data['id']),
            title=data.get('title') or "",
            status=data.get('status'),
            health_calculation_type=(
                data.get('health_calculation_type') or HealthCalculationType.AUTOMATIC.value
            ),
            manual_status_color=data.get('manual_status_color'),
            manual_health_percentage=data.get('manual_health_percentage'),
            calculated_start_date=parse_date(data.get('calculated_start_date')),
            calculated_end_date=parse_date(data.get('calculated_end_date')),
            total_days=_optional_int(data.get('total_days')),
            working_days=_optional_int(data.get('working_days')),
            total_days_remaining=_optional_int(data.get('total_days_remaining')),
            working_days_remaining=_optional_int(data.get('working_days_remaining')),
            computed_status_color=data.get('computed_status_color'),
            milestones=[Milestone.from_dict(m) for m in data.get('milestones') or []],
        )

    def to_dict(self, include_milestones: bool = True) -> Dict[str, Any]:
        """Convert to a storage record."""
        record = {
            'id': self.id,
            'title': self.title,
            'status': self.status,
            'health_calculation_type': _enum_value(self.health_calculation_type),
            'manual_status_color': _enum_value(self.manual_status_color),
            'manual_health_percentage': self.manual_health_percentage,
            'calculated_start_date': _serialize_date(self.calculated_start_date),
            'calculated_end_date': _serialize_date(self.calculated_end_date),
            'total_days': self.total_days,
            'working_days': self.working_days,
            'total_days_remaining': self.total_days_remaining,
            'working_days_remaining': self.working_days_remaining,
            'computed_status_color': _enum_value(self.computed_status_color),
        }
        if include_milestones:
            record['milestones'] = [m.to_dict() for m in self.milestones]
        return record


def _enum_value(value: Any) -> Any:
    return value.value if isinstance(value, Enum) else value


def _serialize_date(value: Any) -> Any:
    if isinstance(value, date):
        return value.isoformat()
    return value
