"""Sample portfolio generator for demos and evaluation."""

import random
from datetime import date, timedelta
from typing import List

from ..models.project import HealthCalculationType, Milestone, Project, ProjectStatus, StatusColor


class PortfolioGenerator:
    """Generates deterministic project portfolios."""

    def __init__(self, seed: int = 42, config: dict = None):
        """Initialize generator with seed for reproducibility."""
        self.seed = seed
        self.random = random.Random(seed)
        self.config = config or {}
        self.generator_config = self.config.get('generator', {})

    def generate_milestones(self, project_id: str, anchor: date, count: int, span_days: int) -> List[Milestone]:
        """Generate milestones spread across a span starting at anchor."""
        milestones = []
        step = max(1, span_days // max(1, count))

        for i in range(count):
            start = anchor + timedelta(days=i * step)

            # Some milestones run over several days
            end_date = None
            if self.random.random() < 0.4:
                end_date = start + timedelta(days=self.random.randint(1, step))

            # Earlier milestones tend to be further along
            progress = 1.0 - i / max(1, count)
            completion = min(100, max(0, int(progress * 100 + self.random.randint(-30, 20))))

            # Leave some weights unset to exercise the default
            weight = self.random.choice([None, 1, 2, 3, 4, 5])

            milestones.append(Milestone(
                id=f"{project_id}_m{i:02d}",
                milestone=f"Milestone {i + 1}",
                date=start,
                end_date=end_date,
                completion=completion,
                weight=weight,
                status=self.random.choice([c.value for c in StatusColor]),
            ))

        return milestones

    def generate_portfolio(self, today: date, project_count: int = None) -> List[Project]:
        """Generate projects with a mix of statuses, timelines and overrides."""
        project_count = project_count or self.generator_config.get('project_count', 12)
        max_milestones = self.generator_config.get('max_milestones', 6)
        date_range_days = self.generator_config.get('date_range_days', 180)

        statuses = [s.value for s in ProjectStatus]
        projects = []

        for i in range(project_count):
            project_id = f"project_{i:03d}"

            # Mostly active projects
            if self.random.random() < 0.6:
                status = ProjectStatus.ACTIVE.value
            else:
                status = self.random.choice(statuses)

            # Anchor anywhere from well in the past to a little in the future
            anchor = today + timedelta(days=self.random.randint(-date_range_days, date_range_days // 4))
            span_days = self.random.randint(14, date_range_days)

            count = self.random.randint(0, max_milestones)
            milestones = self.generate_milestones(project_id, anchor, count, span_days)

            manual = self.random.random() < 0.15
            projects.append(Project(
                id=project_id,
                title=f"Project {i}",
                status=status,
                health_calculation_type=(
                    HealthCalculationType.MANUAL.value if manual else HealthCalculationType.AUTOMATIC.value
                ),
                manual_status_color=self.random.choice(list(StatusColor)) if manual else None,
                manual_health_percentage=self.random.randint(0, 100) if manual else None,
                computed_status_color=self.random.choice([None] + list(StatusColor)),
                milestones=milestones,
            ))

        return projects
