"""Bulk recalculation and stored-value reconciliation."""

from datetime import date
from typing import Dict, List, Optional

from ..engine.pipeline import HealthEngine, engine_fields
from ..models.project import ProjectStatus
from ..models.trace import ProjectHealthResult
from ..storage.base import ProjectRepository
from ..utils.datetime_utils import days_between, parse_date, round_half_up
from ..utils.logging import get_logger

logger = get_logger(__name__)


class ReconciliationReport:
    """Results from a recalculate-all sweep."""

    def __init__(self, today: date, applied: bool):
        self.today = today
        self.applied = applied
        self.total_count = 0
        self.updated_count = 0
        self.results: List[ProjectHealthResult] = []
        self.errors: List[str] = []

    @property
    def mismatches(self) -> List[ProjectHealthResult]:
        return [r for r in self.results if r.has_discrepancy]

    @property
    def mismatch_count(self) -> int:
        return len(self.mismatches)

    @property
    def success(self) -> bool:
        return not self.errors

    def to_dict(self) -> Dict:
        """Convert to dictionary for JSON export."""
        return {
            'today': self.today.isoformat(),
            'applied': self.applied,
            'success': self.success,
            'total_count': self.total_count,
            'updated_count': self.updated_count,
            'mismatch_count': self.mismatch_count,
            'mismatches': [
                {
                    'project_id': r.project_id,
                    'title': r.metadata.get('title'),
                    'stored': r.previous_color.value if r.previous_color else None,
                    'computed': r.color.value,
                }
                for r in self.mismatches
            ],
            'errors': self.errors,
        }


class Reconciler:
    """Recompute project health against a repository."""

    def __init__(self, engine: HealthEngine, repository: ProjectRepository):
        """Initialize reconciler with an engine and a project store."""
        self.engine = engine
        self.repository = repository

    def update_project(self, project_id: str, today: Optional[date] = None) -> bool:
        """Recompute one project from its freshly fetched milestones and persist it."""
        today = today or date.today()
        try:
            project = self.repository.get_project(project_id)
            milestones = self.repository.get_milestones(project_id)
            result = self.engine.evaluate(project, milestones, today)
            self.repository.save_engine_fields(project_id, engine_fields(result))
        except Exception as e:
            logger.error(f"Failed to update project {project_id}: {e}")
            return False

        logger.info(f"Updated project {project_id}: {result.color.value}")
        return True

    def recalculate_all(self, today: Optional[date] = None, apply: bool = False) -> ReconciliationReport:
        """
        Recompute every project with one shared ``today``.

        Stored colours that differ from the fresh ones are reported. Nothing
        is written unless ``apply`` is set.
        """
        today = today or date.today()
        report = ReconciliationReport(today, applied=apply)
        projects = self.repository.list_projects()
        report.total_count = len(projects)

        logger.info(f"Recalculating health for {len(projects)} projects as of {today}")

        for project in projects:
            try:
                milestones = self.repository.get_milestones(project.id)
                result = self.engine.evaluate(project, milestones, today)
                report.results.append(result)

                if result.has_discrepancy:
                    logger.warning(
                        f"Discrepancy for {project.title or project.id}: stored "
                        f"{result.previous_color.value if result.previous_color else None}, "
                        f"computed {result.color.value}"
                    )

                if apply:
                    self.repository.save_engine_fields(project.id, engine_fields(result))
                    report.updated_count += 1
            except Exception as e:
                message = f"Error updating project {project.title or project.id}: {e}"
                logger.error(message)
                report.errors.append(message)

        logger.info(
            f"Recalculation complete: {report.mismatch_count} mismatches, "
            f"{report.updated_count}/{report.total_count} updated"
        )
        if report.errors:
            logger.error(f"Errors encountered: {report.errors}")

        return report

    def projects_needing_duration_update(self) -> List[str]:
        """Ids of projects with any duration field missing."""
        return [project.id for project in self.repository.list_projects() if not project.has_duration_data]

    def duration_stats(self) -> Dict[str, int]:
        """Duration statistics across non-cancelled projects."""
        projects = [
            p for p in self.repository.list_projects()
            if p.status != ProjectStatus.CANCELLED
        ]
        with_duration = [p for p in projects if p.total_days is not None and p.working_days is not None]

        def average(values: List[int]) -> int:
            return round_half_up(sum(values) / len(values)) if values else 0

        return {
            'total_projects': len(projects),
            'projects_with_duration': len(with_duration),
            'projects_without_duration': len(projects) - len(with_duration),
            'average_total_days': average([p.total_days for p in with_duration]),
            'average_working_days': average([p.working_days for p in with_duration]),
        }

    def validate_durations(self) -> Dict:
        """Check stored duration fields for internal consistency."""
        inconsistencies = []
        projects = [
            p for p in self.repository.list_projects()
            if p.status != ProjectStatus.CANCELLED
        ]

        for project in projects:
            issues = []
            start = parse_date(project.calculated_start_date)
            end = parse_date(project.calculated_end_date)
            has_dates = start is not None, end is not None
            has_days = project.total_days is not None, project.working_days is not None

            if has_dates[0] != has_dates[1]:
                issues.append("Inconsistent start/end dates")
            if has_days[0] != has_days[1]:
                issues.append("Inconsistent total/working days")
            if all(has_dates) != all(has_days):
                issues.append("Inconsistent date and duration data")

            if start is not None and end is not None and project.total_days is not None:
                actual_days = days_between(start, end)
                if abs(actual_days - project.total_days) > 1:
                    issues.append(
                        f"Total days mismatch: calculated {actual_days}, stored {project.total_days}"
                    )

            inconsistencies.extend({'project_id': project.id, 'issue': issue} for issue in issues)

        invalid_ids = {item['project_id'] for item in inconsistencies}
        return {
            'valid_projects': len(projects) - len(invalid_ids),
            'invalid_projects': len(invalid_ids),
            'inconsistencies': inconsistencies,
        }
