"""
Time window resolution for usage aggregation.

All datetimes handled here are naive values in a single reference zone
(local time or UTC). Aware datetimes are converted on the way in so that
window flooring and bucket keys agree on where an hour or a day starts.
"""

from datetime import datetime, timedelta, timezone

from .models import ReferenceZone, TimeGranularity, TimeRange, TimeWindow

# Days between the first daily bucket and today's midnight; today is the last bucket
DAY_RANGE_OFFSETS = {
    TimeRange.SEVEN_DAYS: 6,
    TimeRange.THIRTY_DAYS: 29,
}


def current_time(zone: ReferenceZone = ReferenceZone.LOCAL) -> datetime:
    """Return the current instant as a naive datetime in the reference zone."""
    if zone is ReferenceZone.UTC:
        return datetime.now(timezone.utc).replace(tzinfo=None)
    return datetime.now()


def to_reference_time(value: datetime, zone: ReferenceZone = ReferenceZone.LOCAL) -> datetime:
    """Convert an aware datetime into a naive one in the reference zone.

    Naive values are assumed to already be in the reference zone and are
    returned unchanged.
    """
    if value.tzinfo is None:
        return value
    if zone is ReferenceZone.UTC:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value.astimezone().replace(tzinfo=None)


def floor_hour(value: datetime) -> datetime:
    """Truncate to the top of the hour."""
    return value.replace(minute=0, second=0, microsecond=0)


def floor_day(value: datetime) -> datetime:
    """Truncate to midnight."""
    return value.replace(hour=0, minute=0, second=0, microsecond=0)


def floor_to(value: datetime, granularity: TimeGranularity) -> datetime:
    """Truncate to the start of the bucket containing ``value``."""
    return floor_hour(value) if granularity is TimeGranularity.HOUR else floor_day(value)


def resolve_window(time_range: TimeRange | str, now: datetime) -> TimeWindow:
    """
    Compute the aggregation window for a range selector.

    Args:
        time_range: ``1d``, ``7d`` or ``30d`` (enum or value)
        now: Instant of the aggregation call, naive in the reference zone

    Returns:
        TimeWindow with granularity, start, end and the call instant

    Raises:
        ValueError: If ``time_range`` is not a known range value
    """
    time_range = TimeRange(time_range)

    if time_range is TimeRange.ONE_DAY:
        # Last 24 hours, starting at the top of the hour a day ago
        start = floor_hour(now - timedelta(days=1))
        end = now
    else:
        # Full days including today
        end = floor_day(now)
        start = end - timedelta(days=DAY_RANGE_OFFSETS[time_range])

    return TimeWindow(granularity=time_range.granularity, start=start, end=end, now=now)
