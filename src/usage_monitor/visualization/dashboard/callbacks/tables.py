"""
Table-related callbacks for the dashboard.

Renders the per-bucket cost table below the chart.
"""

import logging

from dash import Input, Output, dash_table

from ....stats.aggregator import unique_categories
from ....stats.export import category_columns, summaries_to_dataframe
from ....stats.models import BucketSummary
from ..themes import DashboardTheme

logger = logging.getLogger(__name__)


def setup_table_callbacks(dashboard):
    """Set up all table-related callbacks."""
    _setup_bucket_table_callback(dashboard)


def _setup_bucket_table_callback(dashboard):
    """Set up the bucket table callback."""

    @dashboard.app.callback(
        Output("bucket-table", "children"),
        [Input("stats-store", "data")],
    )
    def update_bucket_table(stats_data):
        """Update the per-bucket cost table."""
        if not stats_data or "summaries" not in stats_data:
            return "Loading usage data..."
        if not stats_data.get("loaded_count"):
            return "No usage data loaded."
        return create_bucket_table(stats_data)


def create_bucket_table(stats_data):
    """Build a DataTable with one row per bucket, newest first."""
    summaries = [BucketSummary.model_validate(item) for item in stats_data["summaries"]]
    frame = summaries_to_dataframe(summaries).iloc[::-1]

    columns = [{"name": "Bucket", "id": "bucket"}, {"name": "Total", "id": "total_cost"}]
    columns += [
        {"name": category, "id": column}
        for category, column in category_columns(unique_categories(summaries)).items()
    ]

    # Costs are shown with four decimals
    display = frame.copy()
    for column in display.columns[1:]:
        display[column] = display[column].map(lambda value: f"${value:.4f}")

    return dash_table.DataTable(
        data=display.to_dict("records"),
        columns=columns,
        style_cell={"textAlign": "left", "padding": "10px"},
        style_header={
            "backgroundColor": DashboardTheme.COLORS["background"],
            "color": DashboardTheme.COLORS["accent"],
            "fontWeight": "bold",
        },
        style_data={
            "backgroundColor": DashboardTheme.COLORS["surface"],
            "color": DashboardTheme.COLORS["text"],
        },
        page_size=15,
        page_action="native",
        sort_action="native",
    )
