"""Tests for health analysis, issue detection and the sample generator."""

from datetime import date

from portfolio_health.evaluation.analyzer import HealthAnalyzer
from portfolio_health.evaluation.generator import PortfolioGenerator
from portfolio_health.models.project import StatusColor
from portfolio_health.models.trace import HealthBasis


def test_analyze_overdue_project(engine, make_project, make_milestone):
    project = make_project(status="active")
    milestones = [
        make_milestone(completion=100, day=date(2024, 1, 1)),
        make_milestone(completion=40, day=date(2024, 2, 1)),
    ]

    analysis = HealthAnalyzer(engine).analyze(project, milestones, date(2024, 3, 1))

    assert analysis.color == StatusColor.RED
    assert analysis.is_overdue
    assert not analysis.starts_in_future
    assert [m.days_from_today for m in analysis.milestone_details] == [-60, -29]
    assert len(analysis.overdue_milestones) == 1
    assert analysis.recommendations[0].startswith("Project is overdue")
    assert "1 milestone(s) are overdue but not marked as complete" in analysis.recommendations


def test_analyze_future_project(engine, make_project, make_milestone):
    project = make_project(status="active")
    milestones = [
        make_milestone(completion=90, day=date(2024, 6, 1)),
        make_milestone(completion=90, day=date(2024, 7, 1)),
        make_milestone(completion=90, day=date(2024, 8, 1)),
    ]

    analysis = HealthAnalyzer(engine).analyze(project, milestones, date(2024, 3, 1))

    assert analysis.starts_in_future
    assert analysis.basis == HealthBasis.FUTURE_PROJECT
    assert analysis.color == StatusColor.YELLOW
    assert analysis.recommendations[0].startswith("Project starts in the future")
    assert "3 milestone(s) are far in the future but marked as highly complete" in analysis.recommendations
    assert analysis.to_dict()['milestones'][0]['date'] == "2024-06-01"


def test_find_issues(engine, make_project, make_milestone):
    projects = [
        make_project("empty", status="active"),
        make_project("late", status="active", milestones=[
            make_milestone(completion=10, day=date(2024, 1, 1)),
            make_milestone(completion=10, day=date(2024, 6, 1)),
        ]),
        make_project("idle", status="active", milestones=[
            make_milestone(completion=0, day=date(2024, 2, 1)),
            make_milestone(completion=0, day=date(2024, 12, 31)),
        ]),
    ]

    issues = HealthAnalyzer(engine).find_issues(projects, date(2024, 2, 15))

    found = {(issue['project_id'], issue['severity']) for issue in issues}
    assert ("empty", "low") in found
    assert ("late", "high") in found
    assert ("idle", "high") in found
    assert any(i['issue'] == "Very low completion with substantial time remaining" for i in issues)


def test_quick_check(engine, make_project, today):
    text = HealthAnalyzer(engine).quick_check(make_project(status="draft"), [], today)

    assert text.startswith("YELLOW: Status-based")
    assert "N/A time remaining" in text


def test_generator_is_deterministic(today):
    first = PortfolioGenerator(seed=3).generate_portfolio(today, project_count=8)
    second = PortfolioGenerator(seed=3).generate_portfolio(today, project_count=8)

    assert [p.to_dict() for p in first] == [p.to_dict() for p in second]
    assert len(first) == 8


def test_generated_portfolio_scores_cleanly(engine, today):
    projects = PortfolioGenerator(seed=42, config={'generator': {'project_count': 25}}).generate_portfolio(today)

    for project in projects:
        result = engine.evaluate(project, project.milestones, today)
        assert result.color in set(StatusColor)
        assert 0 <= result.weighted_completion <= 100
        if result.time_remaining_percentage is not None:
            assert 0 <= result.time_remaining_percentage <= 100
