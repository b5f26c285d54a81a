"""
Chart-related callbacks for the dashboard.

Builds the stacked per-category cost chart from the stats store.
"""

import logging
import time

import plotly.graph_objects as go
from dash import Input, Output

from ..themes import DashboardTheme
from ..utils import format_bucket_label, format_bucket_title

logger = logging.getLogger(__name__)

CHART_TITLE = "Cost by Category"
NO_DATA_MESSAGE = "No data for this range."


def setup_chart_callbacks(dashboard):
    """Set up all chart-related callbacks."""
    _setup_cost_chart_callback(dashboard)


def _setup_cost_chart_callback(dashboard):
    """Set up the stacked cost chart callback."""

    @dashboard.app.callback(
        Output("cost-chart", "figure"),
        [Input("stats-store", "data")],
    )
    def update_cost_chart(stats_data):
        """Update the stacked cost chart."""
        if not stats_data or "summaries" not in stats_data:
            return dashboard._create_initial_loading_chart(CHART_TITLE)

        chart_start_time = time.time()
        fig = create_cost_chart(stats_data)
        logger.info(f"📊 Cost chart updated in {time.time() - chart_start_time:.3f}s")
        return fig


def create_cost_chart(stats_data):
    """
    Create a stacked bar chart with one trace per category.

    Args:
        stats_data: Payload of the stats store

    Returns:
        Plotly figure; a placeholder figure when the range holds no records
    """
    if not stats_data.get("record_count"):
        return _create_no_data_chart(CHART_TITLE)

    summaries = stats_data["summaries"]
    granularity = stats_data["granularity"]
    buckets = [summary["bucket"] for summary in summaries]
    titles = [format_bucket_title(bucket, granularity) for bucket in buckets]

    fig = go.Figure()
    for index, category in enumerate(stats_data.get("categories", [])):
        fig.add_trace(
            go.Bar(
                x=buckets,
                y=[summary["cost_by_category"].get(category, 0.0) for summary in summaries],
                name=category,
                marker_color=DashboardTheme.category_color(index),
                customdata=titles,
                hovertemplate=f"<b>{category}</b><br>%{{customdata}}<br>$%{{y:.4f}}<extra></extra>",
            )
        )

    _update_chart_layout(fig, buckets, granularity)
    return fig


def _update_chart_layout(fig, buckets, granularity):
    """Apply stacking, axis labels and theme to the cost chart."""
    fig.update_layout(
        title=CHART_TITLE,
        barmode="stack",
        xaxis=dict(
            type="category",
            tickmode="array",
            tickvals=buckets,
            ticktext=[format_bucket_label(bucket, granularity) for bucket in buckets],
            showgrid=False,
        ),
        yaxis=dict(title="Cost ($)", tickprefix="$", gridcolor=DashboardTheme.COLORS["border"]),
        legend=dict(orientation="h", yanchor="bottom", y=1.02, xanchor="right", x=1),
        hovermode="closest",
        **DashboardTheme.LAYOUT,
    )


def _create_no_data_chart(title):
    """Create an empty chart with a centered notice."""
    no_data_fig = go.Figure()
    no_data_fig.add_annotation(
        text=NO_DATA_MESSAGE,
        xref="paper",
        yref="paper",
        x=0.5,
        y=0.5,
        xanchor="center",
        yanchor="middle",
        showarrow=False,
        font=dict(size=16, color=DashboardTheme.COLORS["text_muted"]),
    )
    no_data_fig.update_layout(
        title=title,
        xaxis=dict(showgrid=False, showticklabels=False, zeroline=False),
        yaxis=dict(showgrid=False, showticklabels=False, zeroline=False),
        **DashboardTheme.LAYOUT,
    )
    return no_data_fig
