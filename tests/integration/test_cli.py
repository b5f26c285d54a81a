"""
End-to-end tests for the command line interface.

Runs the click commands against a usage export on disk.
"""

import json

import pytest
from click.testing import CliRunner

from usage_monitor.main import cli

SCENARIO_CSV = "\n".join(
    [
        "Date,Kind,Model,Max Mode,Input (w/ Cache Write),Input (w/o Cache Write),"
        "Cache Read,Output Tokens,Total Tokens,Cost",
        "2025-01-01T10:00:00Z,Usage-based,gpt,No,0,100,0,50,150,1.5",
        "2025-01-01T10:30:00Z,Usage-based,claude,No,0,200,0,80,280,2.0",
        "2025-01-01T11:15:00Z,Usage-based,gpt,No,0,40,0,10,50,0.5",
        "2024-11-01T08:00:00Z,Usage-based,gpt,No,0,40,0,10,50,7.0",
        "",
    ]
)

COMMON_ARGS = ["--now", "2025-01-01T12:00:00", "--timezone", "utc"]


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def usage_file(temp_dir):
    path = temp_dir / "usage-events.csv"
    path.write_text(SCENARIO_CSV, encoding="utf-8")
    return path


@pytest.mark.integration
class TestStatsCommand:
    """Test cases for the stats command."""

    def test_json_output(self, runner, usage_file):
        result = runner.invoke(
            cli, ["stats", str(usage_file), "--range", "1d", "--format", "json", *COMMON_ARGS]
        )

        assert result.exit_code == 0, result.output
        payload = json.loads(result.output)
        assert payload["granularity"] == "hour"
        assert payload["categories"] == ["gpt", "claude"]
        assert payload["total_cost"] == 4.0
        assert len(payload["summaries"]) == 25

        by_bucket = {item["bucket"]: item for item in payload["summaries"]}
        assert by_bucket["2025-01-01T10"]["total_cost"] == 3.5
        assert by_bucket["2025-01-01T11"]["cost_by_category"] == {"gpt": 0.5, "claude": 0.0}

    def test_table_output_ends_with_total(self, runner, usage_file):
        result = runner.invoke(cli, ["stats", str(usage_file), "--range", "7d", *COMMON_ARGS])

        assert result.exit_code == 0, result.output
        lines = result.output.strip().splitlines()
        assert lines[-1] == "Total Cost: $4.00"
        assert "2024-12-26" in result.output
        assert "2025-01-01" in result.output

    def test_skip_empty_hides_zero_rows(self, runner, usage_file):
        result = runner.invoke(
            cli, ["stats", str(usage_file), "--range", "30d", "--skip-empty", *COMMON_ARGS]
        )

        assert result.exit_code == 0, result.output
        assert "2025-01-01" in result.output
        assert "2024-12-26" not in result.output
        assert result.output.strip().splitlines()[-1] == "Total Cost: $4.00"

    def test_csv_output(self, runner, usage_file):
        result = runner.invoke(
            cli, ["stats", str(usage_file), "--range", "1d", "--format", "csv", *COMMON_ARGS]
        )

        assert result.exit_code == 0, result.output
        lines = result.output.splitlines()
        assert lines[0] == "bucket,total_cost,gpt,claude"
        assert "2025-01-01T10,3.5,1.5,2.0" in lines

    def test_missing_file(self, runner, temp_dir):
        result = runner.invoke(cli, ["stats", str(temp_dir / "missing.csv"), *COMMON_ARGS])

        assert result.exit_code == 1
        assert "Cannot read usage export" in result.output

    def test_missing_columns(self, runner, temp_dir):
        path = temp_dir / "bad.csv"
        path.write_text("Date,Model\n2025-01-01,gpt\n", encoding="utf-8")

        result = runner.invoke(cli, ["stats", str(path), *COMMON_ARGS])

        assert result.exit_code == 1
        assert "missing required columns" in result.output

    def test_invalid_now(self, runner, usage_file):
        result = runner.invoke(cli, ["stats", str(usage_file), "--now", "noon"])

        assert result.exit_code != 0
        assert "ISO-8601" in result.output


@pytest.mark.integration
class TestDetailCommand:
    """Test cases for the detail command."""

    def test_json_detail(self, runner, usage_file):
        result = runner.invoke(
            cli,
            ["detail", str(usage_file), "2025-01-01T10", "--range", "1d", "--format", "json", *COMMON_ARGS],
        )

        assert result.exit_code == 0, result.output
        payload = json.loads(result.output)
        assert payload["total_requests"] == 2
        assert payload["total_cost"] == 3.5
        assert payload["average_cost"] == 1.75
        assert payload["by_category"]["claude"] == {"count": 1, "cost": 2.0}

    def test_table_detail(self, runner, usage_file):
        result = runner.invoke(
            cli, ["detail", str(usage_file), "2025-01-01", "--range", "7d", *COMMON_ARGS]
        )

        assert result.exit_code == 0, result.output
        assert "Total Requests: 3" in result.output
        assert "gpt: 2 requests, $2.0000" in result.output

    def test_invalid_bucket(self, runner, usage_file):
        result = runner.invoke(
            cli, ["detail", str(usage_file), "2025-01-01", "--range", "1d", *COMMON_ARGS]
        )

        assert result.exit_code == 1
        assert "not a valid hour bucket key" in result.output


@pytest.mark.integration
class TestInfoCommands:
    """Test cases for informational commands."""

    def test_version(self, runner):
        result = runner.invoke(cli, ["version"])

        assert result.exit_code == 0
        assert "Usage Cost Monitor v" in result.output

    def test_config_info(self, runner):
        result = runner.invoke(cli, ["config-info"])

        assert result.exit_code == 0, result.output
        assert "Default Range:" in result.output
        assert "Port:" in result.output
