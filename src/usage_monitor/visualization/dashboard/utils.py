"""
Dashboard utility helpers.

Contains performance monitoring for callbacks and label formatting for
bucket keys.
"""

import logging
import time

from ...stats.models import TimeGranularity

logger = logging.getLogger(__name__)


def format_bucket_label(bucket: str, granularity: TimeGranularity | str) -> str:
    """Short axis label for a bucket key: ``HH:00`` for hours, ``MM-DD`` for days."""
    granularity = TimeGranularity(granularity)
    if granularity is TimeGranularity.HOUR:
        return f"{bucket[11:13]}:00"
    return bucket[5:]


def format_bucket_title(bucket: str, granularity: TimeGranularity | str) -> str:
    """Heading for a bucket key in hover labels and the detail card."""
    granularity = TimeGranularity(granularity)
    if granularity is TimeGranularity.HOUR:
        return f"Hour: {bucket[:10]} {bucket[11:13]}:00"
    return f"Date: {bucket}"


class PerformanceMonitor:
    """Simple performance monitoring for dashboard operations."""

    def __init__(self, history_size: int = 10):
        self.metrics: dict[str, list[float]] = {}
        self.operation_times: dict[str, float] = {}
        self.history_size = history_size

    def start_operation(self, operation_name: str):
        """Start timing an operation."""
        self.operation_times[operation_name] = time.time()

    def end_operation(self, operation_name: str) -> float | None:
        """End timing an operation and log the result."""
        if operation_name not in self.operation_times:
            return None

        duration = time.time() - self.operation_times.pop(operation_name)
        history = self.metrics.setdefault(operation_name, [])
        history.append(duration)

        # Keep only the most recent measurements per operation
        if len(history) > self.history_size:
            del history[: len(history) - self.history_size]

        avg_time = sum(history) / len(history)
        logger.info(f"⚡ Performance: {operation_name} took {duration:.3f}s (avg: {avg_time:.3f}s)")

        if duration > 2.0:
            logger.warning(f"Slow operation detected: {operation_name} took {duration:.3f}s")

        return duration
