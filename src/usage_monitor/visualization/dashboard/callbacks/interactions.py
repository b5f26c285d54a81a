"""
User interaction callbacks for the dashboard.

Handles clicks on the cost chart and the bucket drill-down card.
"""

import logging

import dash
import dash_bootstrap_components as dbc
from dash import Input, Output, State, html

from ....exceptions import UsageMonitorError
from ....stats.export import format_currency
from ....stats.models import TimeRange
from ..utils import format_bucket_title

logger = logging.getLogger(__name__)

DETAIL_PLACEHOLDER = "Click a bar to see its breakdown."


def setup_interaction_callbacks(dashboard):
    """Set up all user interaction callbacks."""
    _setup_bucket_detail_callback(dashboard)


def _setup_bucket_detail_callback(dashboard):
    """Set up the bucket drill-down callback."""

    @dashboard.app.callback(
        Output("bucket-detail", "children"),
        [
            Input("cost-chart", "clickData"),
            Input("range-selector", "value"),
        ],
        [State("usage-records-store", "data")],
        prevent_initial_call=True,
    )
    def update_bucket_detail(click_data, selected_range, records_data):
        """Show the breakdown of the clicked bucket; clear it when the range changes."""
        ctx = dash.callback_context
        triggered_prop = ctx.triggered[0]["prop_id"].split(".")[0] if ctx.triggered else None

        if triggered_prop != "cost-chart":
            return DETAIL_PLACEHOLDER

        bucket = extract_clicked_bucket(click_data)
        if bucket is None:
            return DETAIL_PLACEHOLDER

        time_range = TimeRange(selected_range or dashboard.default_range)
        logger.info(f"🔍 Drill-down into bucket {bucket} ({time_range.value})")

        try:
            detail = dashboard.data_manager.compute_detail(records_data, bucket, time_range)
        except UsageMonitorError as e:
            logger.error(f"Error computing bucket detail: {e}")
            return dbc.Alert(f"❌ {e}", color="danger", className="mb-0")

        return render_bucket_detail(detail, time_range.granularity)


def extract_clicked_bucket(click_data):
    """Return the bucket key of the clicked bar, if any."""
    if not click_data or not click_data.get("points"):
        return None
    return click_data["points"][0].get("x")


def render_bucket_detail(detail, granularity):
    """Render a BucketDetail as a summary line plus a per-category list."""
    if detail.total_requests == 0:
        return html.Div(
            [
                html.H6(format_bucket_title(detail.bucket, granularity)),
                html.P("No requests in this bucket.", className="text-muted mb-0"),
            ]
        )

    summary = dbc.Row(
        [
            dbc.Col([html.Small("Requests", className="text-muted"), html.H5(f"{detail.total_requests:,}")]),
            dbc.Col([html.Small("Total Cost", className="text-muted"), html.H5(format_currency(detail.total_cost))]),
            dbc.Col(
                [
                    html.Small("Average per Request", className="text-muted"),
                    html.H5(format_currency(detail.average_cost)),
                ]
            ),
        ],
        className="mb-3",
    )

    categories = dbc.ListGroup(
        [
            dbc.ListGroupItem(
                [
                    html.Span(category, className="fw-bold"),
                    html.Span(
                        f"{item.count:,} requests · {format_currency(item.cost)}",
                        className="float-end",
                    ),
                ]
            )
            for category, item in detail.by_category.items()
        ],
        flush=True,
    )

    return html.Div([html.H6(format_bucket_title(detail.bucket, granularity)), summary, categories])
