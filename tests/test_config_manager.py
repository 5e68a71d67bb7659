"""Tests for the YAML configuration layer."""

from pathlib import Path

import pytest

from rythm.config.config_manager import DEFAULT_CONFIG, ConfigManager


def test_missing_file_uses_defaults(tmp_path):
    config = ConfigManager(str(tmp_path / 'missing.yaml'))
    assert config.config == DEFAULT_CONFIG
    assert config.get('insights.sleep_threshold') == 7
    assert config.get('data.data_dir') == 'data'


def test_file_values_override_defaults(tmp_path):
    path = tmp_path / 'config.yaml'
    path.write_text('insights:\n  sleep_threshold: 8\ndata:\n  data_dir: /tmp/rythm\n')

    config = ConfigManager(str(path))
    assert config.get('insights.sleep_threshold') == 8
    assert config.get('insights.tag_driver_min_count') == 3
    assert config.get('data.data_dir') == '/tmp/rythm'


def test_defaults_are_not_mutated(tmp_path):
    path = tmp_path / 'config.yaml'
    path.write_text('insights:\n  report_range_days: 7\n')
    ConfigManager(str(path))
    assert DEFAULT_CONFIG['insights']['report_range_days'] == 30


def test_get_returns_default_for_unknown_keys(tmp_path):
    config = ConfigManager(str(tmp_path / 'missing.yaml'))
    assert config.get('insights.unknown') is None
    assert config.get('insights.sleep_threshold.deeper', 'fallback') == 'fallback'


def test_empty_file_uses_defaults(tmp_path):
    path = tmp_path / 'config.yaml'
    path.write_text('')
    assert ConfigManager(str(path)).config == DEFAULT_CONFIG


def test_non_mapping_file_is_rejected(tmp_path):
    path = tmp_path / 'config.yaml'
    path.write_text('- just\n- a list\n')
    with pytest.raises(ValueError):
        ConfigManager(str(path))


def test_bundled_config_matches_defaults():
    config = ConfigManager(str(Path(__file__).parent.parent / 'config' / 'config.yaml'))
    assert config.get('insights.sleep_threshold') == DEFAULT_CONFIG['insights']['sleep_threshold']
