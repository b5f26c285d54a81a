"""
Pytest configuration and shared fixtures for usage-monitor tests.

This module provides common fixtures and configurations used across
all test modules in the usage cost monitor.
"""

import os
import tempfile
from collections.abc import Generator
from datetime import datetime
from pathlib import Path

import pytest

from usage_monitor.stats.models import ReferenceZone, TimeRange, UsageRecord

CSV_HEADER = (
    "Date,Kind,Model,Max Mode,Input (w/ Cache Write),Input (w/o Cache Write),"
    "Cache Read,Output Tokens,Total Tokens,Cost"
)


# Pytest configuration
def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: mark test as a unit test")
    config.addinivalue_line("markers", "integration: mark test as an integration test")
    config.addinivalue_line("markers", "dashboard: mark test as requiring Dash")


# Temporary directory fixture
@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


# Environment fixture
@pytest.fixture
def clean_env() -> Generator[dict[str, str], None, None]:
    """Provide an environment without USAGEMON_ overrides."""
    original_env = os.environ.copy()
    for var in [name for name in os.environ if name.startswith("USAGEMON_")]:
        os.environ.pop(var, None)

    yield os.environ

    os.environ.clear()
    os.environ.update(original_env)


# Sample data fixtures
@pytest.fixture
def scenario_now() -> datetime:
    """Reference instant used by the three-record scenario."""
    return datetime(2025, 1, 1, 12, 0)


@pytest.fixture
def scenario_records() -> list[UsageRecord]:
    """Three records spread over two hours and two models."""
    return [
        UsageRecord(timestamp=datetime(2025, 1, 1, 10, 0), category="gpt", cost=1.5),
        UsageRecord(timestamp=datetime(2025, 1, 1, 10, 30), category="claude", cost=2.0),
        UsageRecord(timestamp=datetime(2025, 1, 1, 11, 15), category="gpt", cost=0.5),
    ]


@pytest.fixture
def sample_usage_record() -> UsageRecord:
    """Create a fully populated usage record."""
    return UsageRecord(
        timestamp=datetime(2025, 3, 10, 9, 30),
        category="claude-4-sonnet",
        cost=0.1234,
        kind="Included in Pro",
        max_mode="No",
        input_with_cache_write=1200,
        input_without_cache_write=300,
        cache_read=45000,
        output_tokens=800,
        total_tokens=47300,
    )


@pytest.fixture
def sample_csv_content() -> str:
    """A small usage export with one row of each kind of problem."""
    return "\n".join(
        [
            CSV_HEADER,
            '"2025-03-10T09:30:00.000Z","Included in Pro","claude-4-sonnet","No","1200","300","45000","800","47300","0.12"',
            '"2025-03-10T10:05:00.000Z","Usage-based","gpt-4.1","Yes","0","150","0","90","240","0.03"',
            '"2025-03-10T10:45:00.000Z","Included in Pro","","No","","","","","","0.05"',
            '"2025-03-10T11:00:00.000Z","Errored, Not Charged","gpt-4.1","No","0","0","0","0","0",""',
            '"not a date","Usage-based","gpt-4.1","No","0","0","0","0","0","1.00"',
            '"2025-03-10T11:30:00.000Z","Usage-based","gpt-4.1","No","0","0","0","0","0","Included"',
            "",
        ]
    )


@pytest.fixture
def sample_csv_file(temp_dir, sample_csv_content) -> Path:
    """Write the sample export to disk."""
    path = temp_dir / "usage-events.csv"
    path.write_text(sample_csv_content, encoding="utf-8")
    return path


# Configuration mocking classes for realistic config behavior
class MockConfigSection(dict):
    """Mock config section that supports dict-like access."""


class MockMonitorConfig:
    """Mock MonitorConfig that behaves like the real one."""

    def __init__(self, usage_file: str | None = None):
        self.dashboard = MockConfigSection({"host": "localhost", "port": 8050, "debug": True})
        self.stats = MockConfigSection({"default_range": "30d", "timezone": "utc"})
        self.ingest = MockConfigSection({"usage_file": usage_file or ""})
        self.default_range = TimeRange.THIRTY_DAYS
        self.reference_zone = ReferenceZone.UTC
        self.usage_file = usage_file

    def override_from_cli(self, cli_args):
        for key, value in cli_args.items():
            if value is not None and key.startswith("dashboard_"):
                self.dashboard[key.removeprefix("dashboard_")] = value


@pytest.fixture
def mock_monitor_config():
    """Provide a realistic mock configuration."""
    return MockMonitorConfig()
