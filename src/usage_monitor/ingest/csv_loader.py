"""
CSV usage export parsing.

Maps the rows of a usage export (one row per request) onto UsageRecord
objects. Rows without a usable date or cost are skipped and logged rather
than failing the whole file.
"""

import base64
import binascii
import csv
import io
import logging
import math
from datetime import datetime
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from ..exceptions import UsageDataError
from ..stats.models import ReferenceZone, UsageRecord
from ..stats.window import to_reference_time

logger = logging.getLogger(__name__)

# Export column -> UsageRecord field for the token count columns
TOKEN_COLUMNS = {
    "Input (w/ Cache Write)": "input_with_cache_write",
    "Input (w/o Cache Write)": "input_without_cache_write",
    "Cache Read": "cache_read",
    "Output Tokens": "output_tokens",
    "Total Tokens": "total_tokens",
}
REQUIRED_COLUMNS = ("Date", "Cost")
FALLBACK_DATE_FORMATS = ["%m/%d/%Y %H:%M:%S", "%m/%d/%Y %H:%M", "%m/%d/%Y"]


def parse_timestamp(value: str | None, zone: ReferenceZone = ReferenceZone.LOCAL) -> datetime | None:
    """Parse an export timestamp, converting offsets into the reference zone."""
    if not value or not value.strip():
        return None

    text = value.strip()
    try:
        parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError:
        parsed = None
        for date_format in FALLBACK_DATE_FORMATS:
            try:
                parsed = datetime.strptime(text, date_format)
                break
            except ValueError:
                continue

    if parsed is None:
        logger.debug(f"Could not parse date: '{value}'")
        return None
    return to_reference_time(parsed, zone)


def parse_cost(value: str | None) -> float | None:
    """Parse the cost column; blank means zero, anything non-numeric is rejected."""
    if value is None or not value.strip():
        return 0.0
    try:
        cost = float(value.strip())
    except ValueError:
        return None
    return cost if not math.isnan(cost) else None


def parse_token_count(value: str | None) -> int:
    """Parse a token count column, falling back to zero."""
    if value is None or not value.strip():
        return 0
    try:
        return int(value.strip())
    except ValueError:
        try:
            return int(float(value.strip()))
        except (ValueError, OverflowError):
            return 0


def create_usage_record(row: dict[str, Any], timestamp: datetime, cost: float) -> UsageRecord:
    """Create a UsageRecord from a parsed CSV row."""
    fields: dict[str, Any] = {
        "timestamp": timestamp,
        "category": row.get("Model"),
        "cost": cost,
        "kind": row.get("Kind"),
        "max_mode": row.get("Max Mode"),
    }
    for column, field_name in TOKEN_COLUMNS.items():
        fields[field_name] = parse_token_count(row.get(column))
    return UsageRecord(**fields)


def parse_usage_csv(
    csv_content: str, zone: ReferenceZone = ReferenceZone.LOCAL, source: str | None = None
) -> list[UsageRecord]:
    """
    Parse CSV content into usage records.

    Args:
        csv_content: Full text of the export, header row first
        zone: Reference zone timestamps are converted into
        source: Name of the file, used in log and error messages

    Returns:
        List of usage records in file order

    Raises:
        UsageDataError: If the header lacks the Date or Cost column
    """
    csv_reader = csv.DictReader(io.StringIO(csv_content))
    header = [name.strip() for name in (csv_reader.fieldnames or [])]
    missing = [column for column in REQUIRED_COLUMNS if column not in header]
    if missing:
        label = f"Usage export {source}" if source else "Usage export"
        raise UsageDataError(
            f"{label} is missing required columns: {', '.join(missing)}", source=source
        )
    csv_reader.fieldnames = header

    records = []
    total_rows = 0
    skipped_rows = 0

    for line_number, row in enumerate(csv_reader, start=2):
        if not any((value or "").strip() for value in row.values() if isinstance(value, str)):
            continue
        total_rows += 1

        timestamp = parse_timestamp(row.get("Date"), zone)
        if timestamp is None:
            skipped_rows += 1
            logger.warning(f"Skipping row {line_number}: invalid date {row.get('Date')!r}")
            continue

        cost = parse_cost(row.get("Cost"))
        if cost is None:
            skipped_rows += 1
            logger.warning(f"Skipping row {line_number}: invalid cost {row.get('Cost')!r}")
            continue

        try:
            records.append(create_usage_record(row, timestamp, cost))
        except ValidationError as e:
            skipped_rows += 1
            logger.warning(f"Skipping row {line_number}: {e.errors()[0]['msg']}")

    logger.info(
        f"Processed {total_rows} rows from {source or 'usage export'}: "
        f"{len(records)} records, {skipped_rows} skipped"
    )
    return records


def load_usage_csv(path: str | Path, zone: ReferenceZone = ReferenceZone.LOCAL) -> list[UsageRecord]:
    """Read and parse a usage export from disk."""
    path = Path(path)
    try:
        content = path.read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as e:
        raise UsageDataError(f"Cannot read usage export {path}: {e}", source=str(path)) from e
    return parse_usage_csv(content, zone=zone, source=path.name)


def decode_upload(contents: str) -> str:
    """Decode a base64 data URL as produced by an upload component."""
    try:
        _, encoded = contents.split(",", 1)
        return base64.b64decode(encoded, validate=True).decode("utf-8-sig")
    except (ValueError, binascii.Error, UnicodeDecodeError) as e:
        raise UsageDataError(f"Uploaded file could not be decoded: {e}") from e
