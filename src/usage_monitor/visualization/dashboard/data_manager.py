"""
Usage data management for the dashboard.

Loads usage exports, converts records to and from the JSON form kept in
the browser-side stores, and runs the aggregation engine for callbacks.
"""

import logging
from pathlib import Path
from typing import Any

from ...exceptions import UsageDataError
from ...ingest.csv_loader import decode_upload, load_usage_csv, parse_usage_csv
from ...stats.aggregator import (
    as_reference_records,
    filter_in_window,
    process_stats,
    unique_categories,
)
from ...stats.detail import bucket_detail
from ...stats.models import BucketDetail, ReferenceZone, TimeRange, UsageRecord
from ...stats.window import current_time, resolve_window

logger = logging.getLogger(__name__)


class UsageDataManager:
    """Manages usage records and aggregation for dashboard callbacks."""

    def __init__(self, config=None):
        self.config = config
        if config is not None:
            self.zone = config.reference_zone
            self.usage_file = config.usage_file
        else:
            self.zone = ReferenceZone.LOCAL
            self.usage_file = None
        self._initial_records: list[UsageRecord] = []

    def initialize(self) -> bool:
        """Load the configured usage export, if any."""
        if not self.usage_file:
            logger.info("No usage file configured, waiting for upload")
            return True

        path = Path(self.usage_file)
        try:
            self._initial_records = load_usage_csv(path, zone=self.zone)
            logger.info(f"Loaded {len(self._initial_records)} usage records from {path}")
            return True
        except UsageDataError as e:
            logger.error(f"Failed to load usage file: {e}")
            return False

    def initial_store_data(self) -> list[dict[str, Any]]:
        """Records loaded at startup, serialized for the records store."""
        return self.serialize_records(self._initial_records)

    @staticmethod
    def serialize_records(records: list[UsageRecord]) -> list[dict[str, Any]]:
        return [record.to_dict() for record in records]

    @staticmethod
    def records_from_store(data: list[dict[str, Any]] | None) -> list[UsageRecord]:
        """Rebuild usage records from the records store."""
        return [UsageRecord.model_validate(item) for item in data or []]

    def parse_upload(self, contents: str, filename: str | None = None) -> list[dict[str, Any]]:
        """Parse an uploaded CSV data URL into store-ready records.

        Raises:
            UsageDataError: If the upload cannot be decoded or parsed
        """
        text = decode_upload(contents)
        records = parse_usage_csv(text, zone=self.zone, source=filename)
        logger.info(f"Parsed {len(records)} usage records from upload {filename}")
        return self.serialize_records(records)

    def compute_stats(
        self, records_data: list[dict[str, Any]] | None, time_range: TimeRange | str
    ) -> dict[str, Any]:
        """Aggregate stored records into the stats store payload."""
        time_range = TimeRange(time_range)
        records = self.records_from_store(records_data)
        now = current_time(self.zone)
        summaries = process_stats(records, time_range, now=now, zone=self.zone)

        window = resolve_window(time_range, now)
        in_window = filter_in_window(as_reference_records(records, self.zone), window)

        return {
            "range": time_range.value,
            "granularity": time_range.granularity.value,
            "generated_at": now.isoformat(timespec="seconds"),
            "record_count": len(in_window),
            "loaded_count": len(records),
            "summaries": [summary.to_dict() for summary in summaries],
            "categories": unique_categories(summaries),
            "total_cost": sum(summary.total_cost for summary in summaries),
        }

    def compute_detail(
        self, records_data: list[dict[str, Any]] | None, bucket: str, time_range: TimeRange | str
    ) -> BucketDetail:
        """Drill down into a single bucket of the selected range.

        Raises:
            InvalidBucketError: If the bucket key does not match the range granularity
        """
        granularity = TimeRange(time_range).granularity
        records = self.records_from_store(records_data)
        return bucket_detail(records, bucket, granularity, zone=self.zone)
