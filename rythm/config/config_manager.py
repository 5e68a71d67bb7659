# rythm/config/config_manager.py
import copy
import logging
import os

import yaml

logger = logging.getLogger(__name__)

DEFAULT_CONFIG = {
    'insights': {
        'sleep_threshold': 7,
        'tag_driver_min_count': 3,
        'tag_insights_limit': 5,
        'report_range_days': 30,
    },
    'data': {
        'data_dir': 'data',
    },
    'logging': {
        'level': 'INFO',
        'format': '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    },
}


def _deep_merge(base, override):
    merged = copy.deepcopy(base)
    for key, value in (override or {}).items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


class ConfigManager:
    """Central configuration manager"""

    def __init__(self, config_path=None):
        self.config_path = config_path or 'config/config.yaml'
        self.config = self._load_config()

    def _load_config(self):
        """Load configuration from file, layered over the built-in defaults"""
        if not os.path.exists(self.config_path):
            logger.debug(f"Config file {self.config_path} not found, using defaults")
            return copy.deepcopy(DEFAULT_CONFIG)

        with open(self.config_path, 'r') as file:
            loaded = yaml.safe_load(file) or {}

        if not isinstance(loaded, dict):
            raise ValueError(f"Config file {self.config_path} must contain a mapping")

        return _deep_merge(DEFAULT_CONFIG, loaded)

    def get(self, key, default=None):
        """Get configuration value"""
        # Support nested keys with dot notation
        keys = key.split('.')
        value = self.config
        for k in keys:
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default
        return value
