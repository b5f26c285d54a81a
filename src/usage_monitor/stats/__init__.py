"""
Usage cost aggregation engine.
"""

from .aggregator import (
    build_summaries,
    bucket_key_of,
    enumerate_periods,
    filter_in_window,
    group_records,
    process_stats,
    unique_categories,
)
from .detail import bucket_detail, bucket_span
from .models import (
    BucketDetail,
    BucketSummary,
    CategoryDetail,
    ReferenceZone,
    TimeGranularity,
    TimeRange,
    TimeWindow,
    UsageRecord,
)
from .window import resolve_window

__all__ = [
    "BucketDetail",
    "BucketSummary",
    "CategoryDetail",
    "ReferenceZone",
    "TimeGranularity",
    "TimeRange",
    "TimeWindow",
    "UsageRecord",
    "bucket_detail",
    "bucket_key_of",
    "bucket_span",
    "build_summaries",
    "enumerate_periods",
    "filter_in_window",
    "group_records",
    "process_stats",
    "resolve_window",
    "unique_categories",
]
