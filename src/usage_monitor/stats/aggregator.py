"""
Time-bucketed cost aggregation.

Filters usage records to a trailing window, assigns them to hourly or daily
buckets and pivots them into a dense per-category cost table. Every bucket
of the window is present in the output, including buckets without records,
and every bucket carries the same set of category columns.
"""

import logging
from collections import defaultdict
from collections.abc import Iterable
from datetime import datetime

from .models import (
    COST_DECIMALS,
    BucketSummary,
    ReferenceZone,
    TimeGranularity,
    TimeRange,
    TimeWindow,
    UsageRecord,
)
from .window import current_time, floor_to, resolve_window, to_reference_time

logger = logging.getLogger(__name__)


def filter_in_window(records: Iterable[UsageRecord], window: TimeWindow) -> list[UsageRecord]:
    """Keep records timestamped from the window start up to the call instant, inclusive."""
    return [record for record in records if window.start <= record.timestamp <= window.now]


def bucket_key_of(record: UsageRecord, granularity: TimeGranularity) -> str:
    """Return the key of the bucket containing the record's timestamp."""
    return format_bucket_key(record.timestamp, granularity)


def format_bucket_key(value: datetime, granularity: TimeGranularity) -> str:
    """Format the bucket key for an instant (``YYYY-MM-DDTHH`` or ``YYYY-MM-DD``)."""
    return floor_to(value, granularity).strftime(granularity.key_format)


def group_records(
    records: Iterable[UsageRecord], granularity: TimeGranularity
) -> tuple[dict[str, list[UsageRecord]], list[str]]:
    """
    Group records by bucket key and discover categories.

    Categories are collected across the whole record set rather than per
    bucket, so that every bucket can be given the same columns.

    Returns:
        Tuple of (bucket key -> records, categories in first-appearance order)
    """
    groups: defaultdict[str, list[UsageRecord]] = defaultdict(list)
    categories: dict[str, None] = {}

    for record in records:
        groups[bucket_key_of(record, granularity)].append(record)
        categories.setdefault(record.category_label, None)

    return dict(groups), list(categories)


def enumerate_periods(window: TimeWindow) -> list[str]:
    """List every bucket key from window start to end inclusive, oldest first."""
    step = window.granularity.width
    cursor = floor_to(window.start, window.granularity)
    periods = []

    while cursor <= window.end:
        periods.append(cursor.strftime(window.granularity.key_format))
        cursor += step

    return periods


def build_summaries(
    periods: list[str],
    groups: dict[str, list[UsageRecord]],
    categories: list[str],
) -> list[BucketSummary]:
    """
    Pivot grouped records into one zero-filled summary per period.

    Category totals are rounded independently; the bucket total is the
    rounded sum of the unrounded category totals.
    """
    summaries = []

    for period in periods:
        category_costs = dict.fromkeys(categories, 0.0)

        for record in groups.get(period, []):
            label = record.category_label
            category_costs[label] = category_costs.get(label, 0.0) + record.cost

        total_cost = sum(category_costs.values())
        summaries.append(
            BucketSummary(
                bucket=period,
                total_cost=round(total_cost, COST_DECIMALS),
                cost_by_category={
                    category: round(cost, COST_DECIMALS)
                    for category, cost in category_costs.items()
                },
            )
        )

    return sorted(summaries, key=lambda summary: summary.bucket)


def unique_categories(summaries: Iterable[BucketSummary]) -> list[str]:
    """Collect category names across summaries in first-appearance order."""
    seen: dict[str, None] = {}
    for summary in summaries:
        for category in summary.cost_by_category:
            seen.setdefault(category, None)
    return list(seen)


def as_reference_records(
    records: Iterable[UsageRecord], zone: ReferenceZone = ReferenceZone.LOCAL
) -> list[UsageRecord]:
    """Return records whose timestamps are naive values in the reference zone."""
    converted = []
    for record in records:
        if record.timestamp.tzinfo is not None:
            record = record.model_copy(
                update={"timestamp": to_reference_time(record.timestamp, zone)}
            )
        converted.append(record)
    return converted


def process_stats(
    records: Iterable[UsageRecord],
    time_range: TimeRange | str,
    now: datetime | None = None,
    zone: ReferenceZone = ReferenceZone.LOCAL,
) -> list[BucketSummary]:
    """
    Aggregate usage records into per-bucket cost summaries.

    Args:
        records: Usage records in any order
        time_range: ``1d`` (hourly buckets), ``7d`` or ``30d`` (daily buckets)
        now: Instant of the call; defaults to the current time in ``zone``
        zone: Reference zone used for flooring and bucket keys

    Returns:
        One BucketSummary per bucket of the window, ascending by bucket key
    """
    now = to_reference_time(now, zone) if now is not None else current_time(zone)
    window = resolve_window(time_range, now)

    filtered = filter_in_window(as_reference_records(records, zone), window)
    groups, categories = group_records(filtered, window.granularity)
    periods = enumerate_periods(window)
    summaries = build_summaries(periods, groups, categories)

    logger.debug(
        f"Aggregated {len(filtered)} records into {len(summaries)} "
        f"{window.granularity.value} buckets across {len(categories)} categories"
    )
    return summaries
