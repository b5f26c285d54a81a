"""
Tabular export of bucket summaries.
"""

from collections.abc import Sequence

import pandas as pd

from .aggregator import unique_categories
from .models import BucketSummary

SUMMARY_COLUMNS = ("bucket", "total_cost")
CATEGORY_COLUMN_PREFIX = "model:"


def category_columns(categories: Sequence[str]) -> dict[str, str]:
    """
    Map each category to its column name in the summaries frame.

    Categories keep their own name unless it would shadow ``bucket`` or
    ``total_cost`` (or an already used column), in which case it is prefixed.
    """
    used = set(SUMMARY_COLUMNS)
    used.update(category for category in categories if category not in SUMMARY_COLUMNS)

    columns = {}
    for category in categories:
        column = category
        if category in SUMMARY_COLUMNS:
            column = f"{CATEGORY_COLUMN_PREFIX}{category}"
            while column in used:
                column = f"{CATEGORY_COLUMN_PREFIX}{column}"
            used.add(column)
        columns[category] = column
    return columns


def summaries_to_dataframe(summaries: Sequence[BucketSummary]) -> pd.DataFrame:
    """Build a frame with one row per bucket: bucket, total_cost, then one column per category."""
    columns = category_columns(unique_categories(summaries))

    rows = [
        {
            "bucket": summary.bucket,
            "total_cost": summary.total_cost,
            **{
                column: summary.cost_by_category.get(category, 0.0)
                for category, column in columns.items()
            },
        }
        for summary in summaries
    ]
    return pd.DataFrame(rows, columns=[*SUMMARY_COLUMNS, *columns.values()])


def format_currency(value: float, digits: int = 4) -> str:
    """Format a cost in dollars with a fixed number of decimals."""
    return f"${value:,.{digits}f}"
