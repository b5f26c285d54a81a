"""
Tests for CSV usage export parsing.

Covers column mapping, skipped rows, timestamp conversion and the
upload decoding used by the dashboard.
"""

import base64
import logging
from datetime import datetime

import pytest

from usage_monitor.exceptions import UsageDataError
from usage_monitor.ingest.csv_loader import (
    decode_upload,
    load_usage_csv,
    parse_cost,
    parse_timestamp,
    parse_token_count,
    parse_usage_csv,
)
from usage_monitor.stats.models import ReferenceZone


class TestFieldParsers:
    """Test cases for single-field parsers."""

    def test_parse_iso_timestamp_with_z(self):
        parsed = parse_timestamp("2025-03-10T09:30:00.000Z", ReferenceZone.UTC)
        assert parsed == datetime(2025, 3, 10, 9, 30)

    def test_parse_timestamp_with_offset(self):
        parsed = parse_timestamp("2025-03-10T09:30:00+02:00", ReferenceZone.UTC)
        assert parsed == datetime(2025, 3, 10, 7, 30)

    def test_parse_naive_timestamp(self):
        parsed = parse_timestamp("2025-03-10 09:30:00", ReferenceZone.UTC)
        assert parsed == datetime(2025, 3, 10, 9, 30)

    def test_parse_us_style_timestamp(self):
        parsed = parse_timestamp("03/10/2025 09:30", ReferenceZone.UTC)
        assert parsed == datetime(2025, 3, 10, 9, 30)

    @pytest.mark.parametrize("value", [None, "", "   ", "yesterday"])
    def test_invalid_timestamp(self, value):
        assert parse_timestamp(value, ReferenceZone.UTC) is None

    @pytest.mark.parametrize(
        "value, expected",
        [("0.12", 0.12), (" 3 ", 3.0), ("", 0.0), (None, 0.0), ("Included", None), ("NaN", None)],
    )
    def test_parse_cost(self, value, expected):
        assert parse_cost(value) == expected

    @pytest.mark.parametrize(
        "value, expected",
        [("1200", 1200), ("12.0", 12), ("", 0), (None, 0), ("n/a", 0)],
    )
    def test_parse_token_count(self, value, expected):
        assert parse_token_count(value) == expected


class TestParseUsageCsv:
    """Test cases for whole-file parsing."""

    def test_valid_rows_parsed(self, sample_csv_content):
        records = parse_usage_csv(sample_csv_content, zone=ReferenceZone.UTC)

        assert len(records) == 4
        first = records[0]
        assert first.timestamp == datetime(2025, 3, 10, 9, 30)
        assert first.category == "claude-4-sonnet"
        assert first.kind == "Included in Pro"
        assert first.max_mode == "No"
        assert first.input_with_cache_write == 1200
        assert first.input_without_cache_write == 300
        assert first.cache_read == 45000
        assert first.output_tokens == 800
        assert first.total_tokens == 47300
        assert first.cost == 0.12

    def test_missing_model_becomes_unknown(self, sample_csv_content):
        records = parse_usage_csv(sample_csv_content, zone=ReferenceZone.UTC)

        assert records[2].category is None
        assert records[2].category_label == "Unknown"
        assert records[2].total_tokens == 0

    def test_empty_cost_is_zero(self, sample_csv_content):
        records = parse_usage_csv(sample_csv_content, zone=ReferenceZone.UTC)

        assert records[3].kind == "Errored, Not Charged"
        assert records[3].cost == 0.0

    def test_skipped_rows_logged(self, sample_csv_content, caplog):
        with caplog.at_level(logging.WARNING):
            parse_usage_csv(sample_csv_content, zone=ReferenceZone.UTC)

        assert "Skipping row 6: invalid date" in caplog.text
        assert "Skipping row 7: invalid cost" in caplog.text

    def test_negative_cost_row_skipped(self):
        content = "Date,Model,Cost\n2025-03-10T09:30:00Z,gpt,-1\n2025-03-10T09:31:00Z,gpt,1\n"
        records = parse_usage_csv(content, zone=ReferenceZone.UTC)

        assert len(records) == 1
        assert records[0].cost == 1.0

    def test_header_whitespace_ignored(self):
        content = " Date , Model , Cost \n2025-03-10T09:30:00Z,gpt,0.5\n"
        records = parse_usage_csv(content, zone=ReferenceZone.UTC)

        assert records[0].category == "gpt"
        assert records[0].cost == 0.5

    def test_blank_lines_skipped(self):
        content = "Date,Model,Cost\n\n2025-03-10T09:30:00Z,gpt,0.5\n,,\n"
        records = parse_usage_csv(content, zone=ReferenceZone.UTC)

        assert len(records) == 1

    def test_missing_required_column(self):
        with pytest.raises(UsageDataError, match="missing required columns: Cost"):
            parse_usage_csv("Date,Model\n2025-03-10,gpt\n", source="events.csv")

    def test_empty_content(self):
        with pytest.raises(UsageDataError):
            parse_usage_csv("")


class TestLoadUsageCsv:
    """Test cases for reading exports from disk."""

    def test_load_file(self, sample_csv_file):
        records = load_usage_csv(sample_csv_file, zone=ReferenceZone.UTC)
        assert len(records) == 4

    def test_load_file_with_bom(self, temp_dir):
        path = temp_dir / "bom.csv"
        path.write_text("Date,Model,Cost\n2025-03-10T09:30:00Z,gpt,0.5\n", encoding="utf-8-sig")

        records = load_usage_csv(path, zone=ReferenceZone.UTC)
        assert len(records) == 1

    def test_missing_file(self, temp_dir):
        with pytest.raises(UsageDataError) as exc_info:
            load_usage_csv(temp_dir / "missing.csv")

        assert exc_info.value.source.endswith("missing.csv")


class TestDecodeUpload:
    """Test cases for upload data URLs."""

    def test_decode_data_url(self, sample_csv_content):
        encoded = base64.b64encode(sample_csv_content.encode("utf-8")).decode("ascii")
        contents = f"data:text/csv;base64,{encoded}"

        assert decode_upload(contents) == sample_csv_content

    def test_invalid_data_url(self):
        with pytest.raises(UsageDataError):
            decode_upload("not a data url")

    def test_invalid_base64(self):
        with pytest.raises(UsageDataError):
            decode_upload("data:text/csv;base64,@@@")
