"""
Tests for dynaconf-backed configuration.
"""

import pytest

from usage_monitor.config import settings as settings_module
from usage_monitor.config.settings import MonitorConfig, get_config, reload_config
from usage_monitor.stats.models import ReferenceZone, TimeRange


@pytest.fixture
def fresh_config(clean_env):
    """Provide a freshly loaded configuration and restore it afterwards."""
    config = reload_config()
    yield config
    reload_config()


class TestMonitorConfig:
    """Test cases for the configuration wrapper."""

    def test_get_config_returns_global_instance(self):
        assert isinstance(get_config(), MonitorConfig)
        assert get_config() is settings_module.config

    def test_defaults_from_config_file(self, fresh_config):
        assert fresh_config.default_range is TimeRange.THIRTY_DAYS
        assert fresh_config.reference_zone is ReferenceZone.LOCAL
        assert fresh_config.usage_file is None
        assert fresh_config.dashboard.get("port") == 8050

    def test_override_from_cli(self, fresh_config):
        fresh_config.override_from_cli(
            {"dashboard_port": 9000, "timezone": "utc", "default_range": "7d", "dashboard_host": None}
        )

        assert fresh_config.dashboard.get("port") == 9000
        assert fresh_config.dashboard.get("host") == "127.0.0.1"
        assert fresh_config.reference_zone is ReferenceZone.UTC
        assert fresh_config.default_range is TimeRange.SEVEN_DAYS

    def test_invalid_values_fall_back(self, fresh_config):
        fresh_config.override_from_cli({"timezone": "mars", "default_range": "90d"})

        assert fresh_config.reference_zone is ReferenceZone.LOCAL
        assert fresh_config.default_range is TimeRange.THIRTY_DAYS

    def test_usage_file_override(self, fresh_config, temp_dir):
        path = temp_dir / "events.csv"
        fresh_config.override_from_cli({"usage_file": str(path)})

        assert fresh_config.usage_file == str(path)

    def test_environment_override(self, clean_env, monkeypatch):
        monkeypatch.setenv("USAGEMON_DASHBOARD__PORT", "8123")
        try:
            config = reload_config()
            assert config.dashboard.get("port") == 8123
        finally:
            monkeypatch.delenv("USAGEMON_DASHBOARD__PORT")
            reload_config()
