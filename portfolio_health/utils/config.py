"""Configuration management."""

import copy
import json
import yaml
from pathlib import Path
from typing import Dict, Any


def load_config(config_path: str) -> Dict[str, Any]:
    """Load configuration from YAML or JSON file."""
    path = Path(config_path)

    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(path, 'r') as f:
        if path.suffix.lower() in ['.yaml', '.yml']:
            loaded = yaml.safe_load(f) or {}
        elif path.suffix.lower() == '.json':
            loaded = json.load(f)
        else:
            raise ValueError(f"Unsupported config file format: {path.suffix}")

    return merge_config(get_default_config(), loaded)


def merge_config(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively merge override into a copy of base."""
    merged = copy.deepcopy(base)
    for key, value in (override or {}).items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = merge_config(merged[key], value)
        else:
            merged[key] = value
    return merged


def get_default_config() -> Dict[str, Any]:
    """Get default configuration."""
    return {
        'health_thresholds': {
            # Checked top to bottom: first band whose time remaining is
            # strictly above min_time_remaining applies.
            'time_bands': [
                {'min_time_remaining': 70, 'green': 5, 'yellow': 0},
                {'min_time_remaining': 40, 'green': 15, 'yellow': 5},
                {'min_time_remaining': 20, 'green': 30, 'yellow': 15},
                {'min_time_remaining': 0, 'green': 70, 'yellow': 50},
            ],
            'overdue_yellow': 90,
            'milestone_only': {'green': 70, 'yellow': 40},
            'future_project_yellow_above': 50,
        },
        'generator': {
            'project_count': 12,
            'max_milestones': 6,
            'date_range_days': 180,
        },
        'logging': {
            'level': 'INFO',
            'format': '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            'file': None,
        },
    }
