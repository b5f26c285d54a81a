"""
Exception hierarchy for the usage cost monitor.
"""


class UsageMonitorError(Exception):
    """Base exception for usage monitor errors."""

    pass


class UsageDataError(UsageMonitorError):
    """Usage export could not be read or lacks required columns."""

    def __init__(self, message: str, source: str | None = None):
        super().__init__(message)
        self.source = source


class InvalidBucketError(UsageMonitorError):
    """Bucket key does not match the expected granularity format."""

    def __init__(self, message: str, bucket: str | None = None):
        super().__init__(message)
        self.bucket = bucket
