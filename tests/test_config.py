"""Tests for configuration loading and logging setup."""

import json
import logging
from datetime import date

import pytest

from portfolio_health.utils.config import get_default_config, load_config, merge_config
from portfolio_health.utils.datetime_utils import get_working_days, is_working_day, parse_date
from portfolio_health.utils.logging import setup_logging


def test_default_bands_match_threshold_table():
    bands = get_default_config()['health_thresholds']['time_bands']

    assert [(b['min_time_remaining'], b['green'], b['yellow']) for b in bands] == [
        (70, 5, 0),
        (40, 15, 5),
        (20, 30, 15),
        (0, 70, 50),
    ]


def test_load_yaml_merges_with_defaults(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("health_thresholds:\n  overdue_yellow: 80\nlogging:\n  level: DEBUG\n")

    config = load_config(str(path))

    assert config['health_thresholds']['overdue_yellow'] == 80
    assert config['health_thresholds']['future_project_yellow_above'] == 50
    assert config['logging']['level'] == "DEBUG"
    assert config['generator']['project_count'] == 12


def test_load_json(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({'generator': {'project_count': 3}}))

    assert load_config(str(path))['generator']['project_count'] == 3


def test_load_config_errors(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(str(tmp_path / "missing.yaml"))

    path = tmp_path / "config.ini"
    path.write_text("[section]")
    with pytest.raises(ValueError):
        load_config(str(path))


def test_merge_does_not_mutate_base():
    base = {'a': {'b': 1, 'c': 2}}

    merged = merge_config(base, {'a': {'b': 5}})

    assert merged == {'a': {'b': 5, 'c': 2}}
    assert base == {'a': {'b': 1, 'c': 2}}


def test_setup_logging_writes_file(tmp_path):
    root = logging.getLogger()
    saved_level, saved_handlers = root.level, root.handlers[:]
    log_file = tmp_path / "logs" / "health.log"

    try:
        setup_logging({'logging': {'level': 'debug', 'file': str(log_file)}})
        logging.getLogger("portfolio_health.test").debug("hello from test")
        for handler in root.handlers:
            handler.flush()

        assert root.level == logging.DEBUG
        assert "hello from test" in log_file.read_text()
    finally:
        for handler in root.handlers:
            if handler not in saved_handlers:
                handler.close()
        root.handlers = saved_handlers
        root.setLevel(saved_level)


@pytest.mark.parametrize("raw, expected", [
    ("2024-02-29", (2024, 2, 29)),
    ("2024-02-29T23:59:59", (2024, 2, 29)),
    ("2024-02-29T10:00:00.000Z", (2024, 2, 29)),
    ("2024-02-30", None),
    ("soon", None),
    (42, None),
])
def test_parse_date(raw, expected):
    parsed = parse_date(raw)

    if expected is None:
        assert parsed is None
    else:
        assert (parsed.year, parsed.month, parsed.day) == expected


def test_working_days_follow_custom_week():
    saturday, monday = date(2024, 3, 16), date(2024, 3, 18)

    assert not is_working_day(saturday)
    assert is_working_day(saturday, [5, 6])
    assert get_working_days(saturday, monday) == [monday]
    assert get_working_days(saturday, monday, [5, 6]) == [saturday, date(2024, 3, 17)]
