"""
Configuration management for the usage cost monitor.

Uses dynaconf for flexible configuration with YAML files and environment overrides.
"""

import logging
from pathlib import Path
from typing import Any

from dynaconf import Dynaconf, Validator

from ..stats.models import ReferenceZone, TimeRange

logger = logging.getLogger(__name__)

# Get the project root directory
PROJECT_ROOT = Path(__file__).resolve().parents[3]
CONFIG_DIR = PROJECT_ROOT / "config"

VALID_RANGES = [time_range.value for time_range in TimeRange]
VALID_ZONES = [zone.value for zone in ReferenceZone]

settings = Dynaconf(
    envvar_prefix="USAGEMON",
    settings_files=[
        str(CONFIG_DIR / "config.yaml"),  # Base configuration
        str(CONFIG_DIR / "config.local.yaml"),  # Local overrides (git-ignored)
    ],
    environments=False,
    load_dotenv=True,
    merge_enabled=True,
    envvar_separator="__",  # Support nested config via USAGEMON_DASHBOARD__PORT=8051
    validators=[
        Validator("stats.default_range", is_in=VALID_RANGES),
        Validator("stats.timezone", is_in=VALID_ZONES),
        Validator("dashboard.port", gte=1024, lte=65535),
        Validator("dashboard.host", must_exist=True),
    ],
)


class MonitorConfig:
    """Configuration wrapper for usage monitor settings."""

    def __init__(self):
        self.settings = settings
        self._validate_config()

    def _validate_config(self):
        """Validate the configuration on initialization."""
        try:
            settings.validators.validate()
        except Exception as e:
            logger.warning(f"Configuration validation warning: {e}")
            logger.warning("Falling back to defaults for invalid settings")

    @property
    def dashboard(self) -> dict[str, Any]:
        """Dashboard configuration."""
        return self.settings.get("dashboard", {})

    @property
    def stats(self) -> dict[str, Any]:
        """Aggregation configuration."""
        return self.settings.get("stats", {})

    @property
    def ingest(self) -> dict[str, Any]:
        """Record source configuration."""
        return self.settings.get("ingest", {})

    @property
    def default_range(self) -> TimeRange:
        """Range selected when none is given."""
        value = self.stats.get("default_range", TimeRange.THIRTY_DAYS.value)
        return TimeRange(value) if value in VALID_RANGES else TimeRange.THIRTY_DAYS

    @property
    def reference_zone(self) -> ReferenceZone:
        """Timezone reference for window flooring and bucket keys."""
        value = str(self.stats.get("timezone", ReferenceZone.LOCAL.value)).lower()
        return ReferenceZone(value) if value in VALID_ZONES else ReferenceZone.LOCAL

    @property
    def usage_file(self) -> str | None:
        """Usage export loaded at dashboard start, if any."""
        return self.ingest.get("usage_file") or None

    def override_from_cli(self, cli_args: dict[str, Any]):
        """Override configuration with CLI arguments."""
        cli_mapping = {
            "dashboard_host": "dashboard.host",
            "dashboard_port": "dashboard.port",
            "dashboard_debug": "dashboard.debug",
            "default_range": "stats.default_range",
            "timezone": "stats.timezone",
            "usage_file": "ingest.usage_file",
        }

        for cli_key, config_path in cli_mapping.items():
            if cli_args.get(cli_key) is not None:
                self.settings.set(config_path, cli_args[cli_key])

        # Re-validate after overrides
        self._validate_config()


# Global configuration instance
config = MonitorConfig()


def get_config() -> MonitorConfig:
    """Get the global configuration instance."""
    return config


def reload_config() -> MonitorConfig:
    """Reload configuration from files."""
    global config
    settings.reload()
    config = MonitorConfig()
    return config


def load_config_file(path: str) -> MonitorConfig:
    """Load an additional settings file on top of the defaults."""
    global config
    settings.load_file(path=path)
    config = MonitorConfig()
    return config
