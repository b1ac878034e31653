"""Logging setup shared by the engine, reconciliation tools and CLI."""

import logging
import sys
from pathlib import Path
from typing import Any, Dict

DEFAULT_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logging(config: Dict[str, Any] = None) -> None:
    """
    Set up logging for the application.

    Args:
        config: Full application config; only the ``logging`` section is read.
    """
    config = config or {}
    log_config = config.get('logging', {}) or {}

    level_name = str(log_config.get('level', 'INFO')).upper()
    level = getattr(logging, level_name, logging.INFO)
    formatter = logging.Formatter(log_config.get('format') or DEFAULT_FORMAT)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers = []

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    log_file = log_config.get('file')
    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        try:
            file_handler = logging.FileHandler(log_path)
        except OSError as e:
            logging.warning(f"Failed to set up file logging: {e}")
        else:
            file_handler.setFormatter(formatter)
            root_logger.addHandler(file_handler)
            logging.info(f"Logging to file: {log_path}")


def get_logger(name: str) -> logging.Logger:
    """Get a logger for a module."""
    return logging.getLogger(name)
