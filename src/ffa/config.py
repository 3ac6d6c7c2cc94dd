"""
Loading and saving FFA bracket settings as YAML.
"""
import os

import yaml

from .models import BracketConfig


def get_default_settings():
    """Return default bracket settings."""
    return {
        'limit': 0,
    }


def load_bracket_config(file_path):
    """Load bracket settings from a YAML file, merging with defaults."""
    with open(file_path, 'r', encoding='utf-8') as f:
        data = yaml.safe_load(f)
    if not data:
        raise ValueError(f"No bracket settings found in {file_path}")
    if not isinstance(data, dict):
        raise ValueError(f"Bracket settings in {file_path} must be a mapping")
    for key, value in get_default_settings().items():
        if key not in data:
            data[key] = value
    return BracketConfig.from_dict(data)


def save_bracket_config(config, file_path):
    """Save bracket settings to a YAML file."""
    directory = os.path.dirname(file_path)
    if directory:
        os.makedirs(directory, exist_ok=True)
    with open(file_path, 'w', encoding='utf-8') as f:
        yaml.dump(config.to_dict(), f, default_flow_style=False)
