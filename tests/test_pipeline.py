"""Tests for the end-to-end health engine."""

from datetime import date

from portfolio_health.engine.pipeline import HealthEngine, engine_fields
from portfolio_health.models.project import ENGINE_OWNED_FIELDS, StatusColor
from portfolio_health.models.trace import HealthBasis


def test_evaluate_active_project(engine, make_project, quarter_milestones, today):
    project = make_project(status="active")

    result = engine.evaluate(project, quarter_milestones, today)

    assert result.duration.total_days == 120
    assert result.duration.total_days_remaining == 46
    assert result.weighted_completion == 50
    assert result.time_remaining_percentage == 38
    assert result.color == StatusColor.GREEN
    assert result.decision.basis == HealthBasis.TIME_AWARE


def test_evaluate_ignores_stale_stored_duration(engine, make_project, quarter_milestones, today):
    stale = make_project(status="active", total_days=10, total_days_remaining=-5)

    result = engine.evaluate(stale, quarter_milestones, today)

    assert result.time_remaining_percentage == 38
    assert result.color == StatusColor.GREEN


def test_colour_changes_as_days_pass(engine, make_project, quarter_milestones):
    project = make_project(status="active")

    colours = [
        engine.evaluate(project, quarter_milestones, day).color
        for day in (date(2024, 3, 15), date(2024, 4, 29), date(2024, 5, 1))
    ]

    assert colours == [StatusColor.GREEN, StatusColor.YELLOW, StatusColor.RED]


def test_future_start_project(engine, make_project, quarter_milestones, make_milestone):
    project = make_project(status="active")
    before_start = date(2023, 12, 1)

    result = engine.evaluate(project, quarter_milestones, before_start)
    assert result.time_remaining_percentage == 100
    assert result.decision.basis == HealthBasis.FUTURE_PROJECT
    assert result.color == StatusColor.GREEN

    ahead = quarter_milestones[:1] + [make_milestone(completion=10, weight=3, day=date(2024, 4, 30))]
    assert engine.evaluate(project, ahead, before_start).color == StatusColor.YELLOW


def test_defaults_to_project_milestones(engine, make_project, quarter_milestones, today):
    project = make_project(status="active", milestones=quarter_milestones)

    assert engine.evaluate(project, today=today).weighted_completion == 50


def test_apply_result_only_writes_engine_fields(engine, make_project, quarter_milestones, today):
    project = make_project(
        status="active",
        health_calculation_type="manual",
        manual_status_color="yellow",
        manual_health_percentage=42,
        computed_status_color="red",
    )

    result = engine.evaluate(project, quarter_milestones, today)
    updated = engine.apply_result(project, result)

    assert updated.computed_status_color == StatusColor.YELLOW
    assert updated.manual_status_color == StatusColor.YELLOW
    assert updated.manual_health_percentage == 42
    assert updated.health_calculation_type == "manual"
    assert updated.calculated_start_date == date(2024, 1, 1)
    assert updated.calculated_end_date == date(2024, 4, 30)
    assert updated.total_days == 120
    assert updated.working_days_remaining is not None
    # input snapshot untouched
    assert project.total_days is None


def test_engine_fields_match_owned_fields(engine, make_project, quarter_milestones, today):
    result = engine.evaluate(make_project(), quarter_milestones, today)

    assert set(engine_fields(result)) == set(ENGINE_OWNED_FIELDS)


def test_recompute_matches_evaluate(engine, make_project, quarter_milestones, today):
    project = make_project(status="active")

    recomputed = engine.recompute(project, quarter_milestones, today)
    fresh = engine.evaluate(recomputed, recomputed.milestones, today)

    assert recomputed.computed_status_color == fresh.color
    assert not fresh.has_discrepancy
    assert len(recomputed.milestones) == 2


def test_result_rendering(engine, make_project, quarter_milestones, today):
    project = make_project(status="active", computed_status_color="red")

    result = engine.evaluate(project, quarter_milestones, today)

    data = result.to_dict()
    assert data['color'] == "green"
    assert data['previous_color'] == "red"
    assert data['duration']['start_date'] == "2024-01-01"

    text = result.to_human_readable()
    assert "Health: GREEN [time_aware]" in text
    assert "differs from computed green" in text


def test_empty_project_rendering(engine, make_project, today):
    result = engine.evaluate(make_project(status="active"), [], today)

    assert result.color == StatusColor.GREEN
    assert "no milestone dates" in result.to_human_readable()
    assert "Time remaining: N/A" in result.to_human_readable()


def test_uses_custom_config(make_project, quarter_milestones, today):
    config = {
        'health_thresholds': {
            'time_bands': [{'min_time_remaining': 0, 'green': 90, 'yellow': 60}],
        },
    }

    result = HealthEngine(config).evaluate(make_project(status="active"), quarter_milestones, today)

    assert result.color == StatusColor.RED
