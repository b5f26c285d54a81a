"""
Data store callbacks for the dashboard.

Handles CSV uploads, aggregation of the stored records for the selected
range and the summary metrics derived from it.
"""

import logging
from datetime import datetime

import dash
import dash_bootstrap_components as dbc
from dash import Input, Output, State, html

from ....exceptions import UsageMonitorError

logger = logging.getLogger(__name__)


def setup_data_store_callbacks(dashboard):
    """Set up data store related callbacks."""
    _setup_upload_callback(dashboard)
    _setup_stats_callback(dashboard)
    _setup_key_metrics_callback(dashboard)


def _setup_upload_callback(dashboard):
    """Set up the CSV upload callback."""

    @dashboard.app.callback(
        [
            Output("usage-records-store", "data"),
            Output("upload-status", "children"),
        ],
        [Input("usage-upload", "contents")],
        [State("usage-upload", "filename")],
        prevent_initial_call=True,
    )
    def handle_upload(contents, filename):
        """Parse an uploaded usage export into the records store."""
        if not contents:
            return dash.no_update, dash.no_update

        dashboard.performance_monitor.start_operation("csv_upload")
        try:
            records_data = dashboard.data_manager.parse_upload(contents, filename)
        except UsageMonitorError as e:
            logger.error(f"Error parsing upload {filename}: {e}")
            return dash.no_update, dbc.Alert(f"❌ {e}", color="danger", className="mb-0")
        finally:
            dashboard.performance_monitor.end_operation("csv_upload")

        status = dbc.Alert(
            f"✅ Loaded {len(records_data)} records from {filename}",
            color="success",
            className="mb-0",
        )
        return records_data, status


def _setup_stats_callback(dashboard):
    """Set up the aggregation callback feeding the stats store."""

    @dashboard.app.callback(
        [
            Output("stats-store", "data"),
            Output("last-update-time", "children"),
        ],
        [
            Input("usage-records-store", "data"),
            Input("range-selector", "value"),
        ],
    )
    def update_stats_store(records_data, selected_range):
        """Recompute bucket summaries for the selected range."""
        dashboard.performance_monitor.start_operation("process_stats")
        try:
            stats_data = dashboard.data_manager.compute_stats(
                records_data, selected_range or dashboard.default_range
            )
        except (UsageMonitorError, ValueError) as e:
            logger.error(f"Error computing stats: {e}")
            return None, html.Div([f"❌ Error: {str(e)}"], className="error-message")
        finally:
            dashboard.performance_monitor.end_operation("process_stats")

        return stats_data, _create_update_timestamp()


def _create_update_timestamp():
    """Create update timestamp display."""
    return f"Last updated: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}"


def _setup_key_metrics_callback(dashboard):
    """Set up key metrics callback."""

    @dashboard.app.callback(
        [
            Output("total-cost-metric", "children"),
            Output("record-count-metric", "children"),
            Output("category-count-metric", "children"),
        ],
        [Input("stats-store", "data")],
    )
    def update_key_metrics(stats_data):
        """Update the summary cards."""
        return compute_key_metrics(stats_data)


def compute_key_metrics(stats_data):
    """Format total cost, record count and category count for the summary cards."""
    if not stats_data:
        return "$0.00", "0", "0"

    total_cost = stats_data.get("total_cost", 0.0)
    record_count = stats_data.get("record_count", 0)
    category_count = len(stats_data.get("categories", []))
    return f"${total_cost:,.2f}", f"{record_count:,}", str(category_count)
