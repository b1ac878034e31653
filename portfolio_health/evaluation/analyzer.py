"""Per-project health analysis and portfolio issue detection."""

from dataclasses import dataclass, field
from datetime import date
from typing import Dict, List, Optional

from ..engine.pipeline import HealthEngine
from ..models.project import Milestone, Project, StatusColor
from ..models.trace import HealthBasis, ProjectHealthResult
from ..utils.datetime_utils import days_between, parse_date


@dataclass
class MilestoneDetail:
    """A milestone as seen from a given day."""

    milestone: str
    date: Optional[date]
    completion: float
    weight: float
    days_from_today: Optional[int]
    status: Optional[str]


@dataclass
class HealthAnalysis:
    """Explanation of why a project received its colour."""

    result: ProjectHealthResult
    starts_in_future: bool
    is_overdue: bool
    milestone_details: List[MilestoneDetail] = field(default_factory=list)
    recommendations: List[str] = field(default_factory=list)

    @property
    def color(self) -> StatusColor:
        return self.result.color

    @property
    def basis(self) -> HealthBasis:
        return self.result.decision.basis

    @property
    def overdue_milestones(self) -> List[MilestoneDetail]:
        return [
            m for m in self.milestone_details
            if m.days_from_today is not None and m.days_from_today < 0 and m.completion < 100
        ]

    def to_dict(self) -> Dict:
        data = self.result.to_dict()
        data.update({
            'starts_in_future': self.starts_in_future,
            'is_overdue': self.is_overdue,
            'milestones': [
                {
                    'milestone': m.milestone,
                    'date': m.date.isoformat() if m.date else None,
                    'completion': m.completion,
                    'weight': m.weight,
                    'days_from_today': m.days_from_today,
                    'status': m.status,
                }
                for m in self.milestone_details
            ],
            'recommendations': self.recommendations,
        })
        return data


class HealthAnalyzer:
    """Explains health decisions and flags suspicious project data."""

    def __init__(self, engine: HealthEngine):
        self.engine = engine

    def analyze(self, project: Project, milestones: List[Milestone], today: date) -> HealthAnalysis:
        """Analyze a project's health calculation in detail."""
        result = self.engine.evaluate(project, milestones, today)
        duration = result.duration

        starts_in_future = duration.start_date is not None and duration.start_date > today

        details = []
        for milestone in milestones:
            milestone_date = parse_date(milestone.date)
            details.append(MilestoneDetail(
                milestone=milestone.milestone,
                date=milestone_date,
                completion=milestone.completion,
                weight=milestone.effective_weight,
                days_from_today=days_between(today, milestone_date) if milestone_date else None,
                status=milestone.status,
            ))

        analysis = HealthAnalysis(
            result=result,
            starts_in_future=starts_in_future,
            is_overdue=duration.is_overdue,
            milestone_details=details,
        )
        analysis.recommendations = self._recommendations(analysis)
        return analysis

    def _recommendations(self, analysis: HealthAnalysis) -> List[str]:
        recommendations = []
        completion = analysis.result.weighted_completion
        time_remaining = analysis.result.time_remaining_percentage

        if analysis.color in (StatusColor.YELLOW, StatusColor.RED):
            if analysis.starts_in_future:
                recommendations.append(
                    "Project starts in the future - check that milestone dates and completion percentages are realistic"
                )
            elif analysis.is_overdue:
                recommendations.append(
                    "Project is overdue - update milestone dates or mark completed milestones"
                )
            elif time_remaining is not None and time_remaining > 50 and completion < 20:
                recommendations.append(
                    "Low completion with substantial time remaining - consider breaking milestones into smaller tasks"
                )
            elif time_remaining is not None and time_remaining < 30 and completion < 60:
                recommendations.append(
                    "Limited time remaining with low completion - project may need more resources or less scope"
                )

        if not analysis.milestone_details:
            recommendations.append("No milestones defined - add milestones to get accurate health calculations")
        elif len(analysis.milestone_details) < 3:
            recommendations.append("Consider adding more milestones for better project tracking")

        overdue = analysis.overdue_milestones
        if overdue:
            recommendations.append(f"{len(overdue)} milestone(s) are overdue but not marked as complete")

        far_future_done = [
            m for m in analysis.milestone_details
            if m.days_from_today is not None and m.days_from_today > 30 and m.completion > 80
        ]
        if far_future_done:
            recommendations.append(
                f"{len(far_future_done)} milestone(s) are far in the future but marked as highly complete"
            )

        return recommendations

    def find_issues(self, projects: List[Project], today: date) -> List[Dict]:
        """Scan a portfolio for data that makes health scores misleading."""
        issues = []

        for project in projects:
            analysis = self.analyze(project, project.milestones, today)
            result = analysis.result

            def report(issue: str, severity: str, recommendation: str):
                issues.append({
                    'project_id': project.id,
                    'project_title': project.title,
                    'issue': issue,
                    'severity': severity,
                    'recommendation': recommendation,
                })

            if analysis.starts_in_future and analysis.color in (StatusColor.YELLOW, StatusColor.RED):
                report(
                    "Future project with poor health status",
                    "medium",
                    "Review milestone completion percentages for future projects",
                )

            if not analysis.milestone_details:
                report("No milestones defined", "low", "Add milestones to enable proper health tracking")

            overdue = analysis.overdue_milestones
            if overdue:
                report(
                    f"{len(overdue)} overdue milestone(s) not marked complete",
                    "high",
                    "Update completion status for overdue milestones",
                )

            if (
                result.time_remaining_percentage is not None
                and result.time_remaining_percentage > 70
                and result.weighted_completion < 5
            ):
                report(
                    "Very low completion with substantial time remaining",
                    "low",
                    "Consider if project timeline or milestone breakdown is realistic",
                )

        return issues

    def quick_check(self, project: Project, milestones: List[Milestone], today: date) -> str:
        """One-line health summary."""
        result = self.analyze(project, milestones, today).result
        time_remaining = result.time_remaining_percentage
        time_text = f"{time_remaining}%" if time_remaining is not None else "N/A"
        return (
            f"{result.color.value.upper()}: {result.decision.reasoning} "
            f"({result.weighted_completion}% complete, {time_text} time remaining)"
        )
