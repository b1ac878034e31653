"""Pytest configuration and shared fixtures."""

from datetime import date

import pytest

from portfolio_health.engine.pipeline import HealthEngine
from portfolio_health.models.project import Milestone, Project
from portfolio_health.storage.memory import InMemoryProjectRepository


@pytest.fixture
def today():
    """A fixed evaluation date (Friday 15 March 2024)."""
    return date(2024, 3, 15)


@pytest.fixture
def make_milestone():
    """Factory for milestones with sensible defaults."""
    def _make(completion=0, weight=None, day=date(2024, 1, 1), end_date=None, **kwargs):
        return Milestone(date=day, end_date=end_date, completion=completion, weight=weight, **kwargs)
    return _make


@pytest.fixture
def make_project():
    """Factory for projects with sensible defaults."""
    def _make(project_id="p1", **kwargs):
        kwargs.setdefault('title', f"Project {project_id}")
        return Project(id=project_id, **kwargs)
    return _make


@pytest.fixture
def engine():
    return HealthEngine()


@pytest.fixture
def quarter_milestones(make_milestone):
    """Two milestones spanning 2024-01-01 to 2024-04-30, half complete overall."""
    return [
        make_milestone(completion=100, weight=3, day=date(2024, 1, 1), milestone="Kickoff"),
        make_milestone(completion=0, weight=3, day=date(2024, 4, 30), milestone="Launch"),
    ]


@pytest.fixture
def repository(make_project, make_milestone):
    """A small portfolio with one stale stored colour."""
    on_track = make_project(
        "on_track",
        status="active",
        computed_status_color="green",
        milestones=[
            make_milestone(completion=100, weight=3, day=date(2024, 1, 1)),
            make_milestone(completion=0, weight=3, day=date(2024, 4, 30)),
        ],
    )
    stale = make_project(
        "stale",
        status="cancelled",
        computed_status_color="green",
        milestones=[make_milestone(completion=100, day=date(2024, 1, 1))],
    )
    return InMemoryProjectRepository([on_track, stale])
