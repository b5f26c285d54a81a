"""
Single-bucket drill-down.

Recomputes request counts and costs for the records that fall inside one
bucket, using the same window rule as the aggregation engine.
"""

import logging
from collections.abc import Iterable
from datetime import datetime

from ..exceptions import InvalidBucketError
from .aggregator import as_reference_records
from .models import (
    COST_DECIMALS,
    BucketDetail,
    CategoryDetail,
    ReferenceZone,
    TimeGranularity,
    UsageRecord,
)
from .window import current_time, to_reference_time

logger = logging.getLogger(__name__)


def bucket_span(bucket_key: str, granularity: TimeGranularity) -> tuple[datetime, datetime]:
    """
    Get the time span covered by a bucket.

    Args:
        bucket_key: Key such as ``2025-01-01T10`` or ``2025-01-01``
        granularity: Granularity the key was produced with

    Returns:
        Tuple of (start, exclusive end)

    Raises:
        InvalidBucketError: If the key does not match the granularity format
    """
    try:
        start = datetime.strptime(bucket_key, granularity.key_format)
    except (TypeError, ValueError) as e:
        raise InvalidBucketError(
            f"Bucket '{bucket_key}' is not a valid {granularity.value} bucket key", bucket=bucket_key
        ) from e

    return start, start + granularity.width


def bucket_detail(
    records: Iterable[UsageRecord],
    bucket_key: str,
    granularity: TimeGranularity,
    now: datetime | None = None,
    zone: ReferenceZone = ReferenceZone.LOCAL,
) -> BucketDetail:
    """Summarize requests and costs of one bucket, broken down by category."""
    start, end = bucket_span(bucket_key, granularity)
    now = to_reference_time(now, zone) if now is not None else current_time(zone)

    in_bucket = [
        record
        for record in as_reference_records(records, zone)
        if start <= record.timestamp < end and record.timestamp <= now
    ]

    counts: dict[str, int] = {}
    costs: dict[str, float] = {}
    for record in in_bucket:
        label = record.category_label
        counts[label] = counts.get(label, 0) + 1
        costs[label] = costs.get(label, 0.0) + record.cost

    total_cost = sum(costs.values())
    total_requests = len(in_bucket)
    average_cost = total_cost / total_requests if total_requests else 0.0

    by_category = {
        label: CategoryDetail(count=counts[label], cost=round(costs[label], COST_DECIMALS))
        for label in sorted(costs, key=lambda name: costs[name], reverse=True)
    }

    logger.debug(f"Bucket {bucket_key}: {total_requests} requests, ${total_cost:.4f}")

    return BucketDetail(
        bucket=bucket_key,
        total_requests=total_requests,
        total_cost=round(total_cost, COST_DECIMALS),
        average_cost=round(average_cost, COST_DECIMALS),
        by_category=by_category,
    )
