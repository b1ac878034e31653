"""Utility functions."""

from .config import load_config, get_default_config
from .datetime_utils import count_working_days, get_working_days, is_working_day, parse_date
from .logging import get_logger, setup_logging

__all__ = [
    'load_config',
    'get_default_config',
    'count_working_days',
    'get_working_days',
    'is_working_day',
    'parse_date',
    'get_logger',
    'setup_logging',
]
