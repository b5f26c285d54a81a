"""
Data models for usage cost aggregation.

Defines the usage record consumed by the aggregation engine, the time
window it works over, and the bucket summaries it produces.
"""

import logging
import math
from datetime import datetime, timedelta
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, field_validator, model_validator

logger = logging.getLogger(__name__)

UNKNOWN_CATEGORY = "Unknown"
COST_DECIMALS = 4


class TimeGranularity(Enum):
    """Bucket sizes supported by the aggregation engine."""

    HOUR = "hour"
    DAY = "day"

    @property
    def width(self) -> timedelta:
        """Length of one bucket."""
        return timedelta(hours=1) if self is TimeGranularity.HOUR else timedelta(days=1)

    @property
    def key_format(self) -> str:
        """strftime pattern of the bucket key."""
        return "%Y-%m-%dT%H" if self is TimeGranularity.HOUR else "%Y-%m-%d"


class TimeRange(Enum):
    """Trailing windows selectable by the user."""

    ONE_DAY = "1d"
    SEVEN_DAYS = "7d"
    THIRTY_DAYS = "30d"

    @property
    def granularity(self) -> TimeGranularity:
        return TimeGranularity.HOUR if self is TimeRange.ONE_DAY else TimeGranularity.DAY

    @property
    def label(self) -> str:
        return {
            TimeRange.ONE_DAY: "Last 24 Hours",
            TimeRange.SEVEN_DAYS: "Last 7 Days",
            TimeRange.THIRTY_DAYS: "Last 30 Days",
        }[self]


class ReferenceZone(Enum):
    """Timezone reference shared by window flooring and bucket keys."""

    LOCAL = "local"
    UTC = "utc"


class UsageRecord(BaseModel):
    """A single logged usage event."""

    timestamp: datetime
    category: str | None = Field(None, description="Model label the cost is attributed to")
    cost: float = Field(..., ge=0, description="Cost of the event")
    kind: str | None = None
    max_mode: str | None = None
    input_with_cache_write: int = Field(0, ge=0)
    input_without_cache_write: int = Field(0, ge=0)
    cache_read: int = Field(0, ge=0)
    output_tokens: int = Field(0, ge=0)
    total_tokens: int = Field(0, ge=0)

    @field_validator("category", "kind", "max_mode")
    @classmethod
    def validate_labels(cls, v: str | None) -> str | None:
        """Strip labels, treating blank values as missing."""
        if v is not None:
            stripped = v.strip()
            return stripped if stripped else None
        return v

    @field_validator("cost")
    @classmethod
    def validate_cost(cls, v: float) -> float:
        if not math.isfinite(v):
            raise ValueError(f"Cost must be a finite number, got {v}")
        return v

    @property
    def category_label(self) -> str:
        """Category used for aggregation, with missing labels reported as Unknown."""
        return self.category or UNKNOWN_CATEGORY

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return self.model_dump(mode="json")


class TimeWindow(BaseModel):
    """Span of time covered by one aggregation call."""

    granularity: TimeGranularity
    start: datetime
    end: datetime
    now: datetime

    @model_validator(mode="after")
    def validate_bounds(self):
        """Validate the window boundaries."""
        if self.start > self.end:
            raise ValueError(f"Window start {self.start} must not be after end {self.end}")
        return self


class BucketSummary(BaseModel):
    """Aggregated cost of one time bucket."""

    bucket: str = Field(..., description="Bucket key")
    total_cost: float = Field(0.0, description="Total cost in the bucket")
    cost_by_category: dict[str, float] = Field(
        default_factory=dict, description="Cost per category, zero-filled"
    )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return self.model_dump()


class CategoryDetail(BaseModel):
    """Request count and cost of one category within a bucket."""

    count: int = 0
    cost: float = 0.0


class BucketDetail(BaseModel):
    """Drill-down view of a single bucket."""

    bucket: str
    total_requests: int = 0
    total_cost: float = 0.0
    average_cost: float = 0.0
    by_category: dict[str, CategoryDetail] = Field(default_factory=dict)

    @model_validator(mode="after")
    def validate_detail_consistency(self):
        """Check category counts against the request total."""
        category_requests = sum(item.count for item in self.by_category.values())
        if category_requests != self.total_requests:
            logger.warning(
                f"Category request counts ({category_requests}) don't match "
                f"total requests ({self.total_requests}) for bucket {self.bucket}"
            )
        return self

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return self.model_dump()
