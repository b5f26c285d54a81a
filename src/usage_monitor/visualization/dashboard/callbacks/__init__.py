"""
Dashboard callbacks organized by functionality.

Contains callback modules for:
- Data store management (uploads, aggregation, summary metrics)
- Chart updates
- User interactions (bucket drill-down)
- Tables
"""

from .charts import setup_chart_callbacks
from .data_store import setup_data_store_callbacks
from .interactions import setup_interaction_callbacks
from .tables import setup_table_callbacks

__all__ = [
    "setup_chart_callbacks",
    "setup_data_store_callbacks",
    "setup_interaction_callbacks",
    "setup_table_callbacks",
]
