"""
Dashboard layout configuration and HTML structure.

Contains the main layout function and component definitions
for the dashboard UI structure.
"""

import dash_bootstrap_components as dbc
from dash import dcc, html

from ...stats.models import TimeRange


def _get_plotly_config(debug_mode=False):
    """Get Plotly configuration based on environment."""
    if debug_mode:
        return {"displaylogo": False}
    return {
        "displaylogo": False,
        "modeBarButtonsToRemove": ["lasso2d", "select2d"],
    }


def _range_options():
    return [{"label": time_range.label, "value": time_range.value} for time_range in TimeRange]


def _metric_card(title, metric_id, initial, class_name):
    return dbc.Card(
        [
            dbc.CardHeader(title),
            dbc.CardBody(html.H4(initial, id=metric_id, className=f"{class_name} mb-0")),
        ],
        className="mb-3",
    )


def create_dashboard_layout(dashboard):
    """Create the main dashboard layout."""
    plotly_config = _get_plotly_config(debug_mode=dashboard.debug)
    return dbc.Container(
        [
            # Header
            dbc.Row(
                [
                    dbc.Col(
                        [
                            html.H1(
                                "📈 Usage Cost Monitor",
                                className="text-center mb-4",
                                style={"color": "#7aa2f7", "font-weight": "bold"},
                            ),
                        ]
                    )
                ],
                className="mb-4",
            ),
            # Data source and range controls
            dbc.Row(
                [
                    dbc.Col(
                        [
                            html.H5("📂 Usage Export", className="mb-3"),
                            dbc.Card(
                                dbc.CardBody(
                                    [
                                        dcc.Upload(
                                            id="usage-upload",
                                            children=html.Div(
                                                ["Drag and drop or ", html.A("select a CSV file")]
                                            ),
                                            accept=".csv,text/csv",
                                            multiple=False,
                                            style={
                                                "borderWidth": "1px",
                                                "borderStyle": "dashed",
                                                "borderRadius": "6px",
                                                "padding": "16px",
                                                "textAlign": "center",
                                            },
                                        ),
                                        html.Div(id="upload-status", className="mt-2"),
                                    ]
                                )
                            ),
                        ],
                        md=8,
                    ),
                    dbc.Col(
                        [
                            html.H5("📅 Time Range", className="mb-3"),
                            dbc.Card(
                                dbc.CardBody(
                                    dbc.Select(
                                        id="range-selector",
                                        options=_range_options(),
                                        value=dashboard.default_range.value,
                                    )
                                )
                            ),
                        ],
                        md=4,
                    ),
                ],
                className="mb-4",
            ),
            # Key metrics row
            dbc.Row(
                [
                    dbc.Col(
                        [
                            html.H5("📊 Summary", className="mb-3"),
                            dbc.Row(
                                [
                                    dbc.Col(
                                        _metric_card(
                                            "Total Cost", "total-cost-metric", "$0.00", "text-primary"
                                        ),
                                        md=4,
                                    ),
                                    dbc.Col(
                                        _metric_card(
                                            "Requests", "record-count-metric", "0", "text-info"
                                        ),
                                        md=4,
                                    ),
                                    dbc.Col(
                                        _metric_card(
                                            "Categories", "category-count-metric", "0", "text-warning"
                                        ),
                                        md=4,
                                    ),
                                ],
                                id="key-metrics-row",
                            ),
                        ]
                    )
                ],
                className="mb-4",
            ),
            # Stacked cost chart
            dbc.Row(
                [
                    dbc.Col(
                        [
                            dbc.Card(
                                [
                                    dbc.CardHeader(
                                        html.H5("💹 Cost by Category", className="mb-0")
                                    ),
                                    dbc.CardBody(
                                        [
                                            dcc.Graph(
                                                id="cost-chart",
                                                style={"height": "400px"},
                                                config=plotly_config,
                                            )
                                        ]
                                    ),
                                ]
                            )
                        ],
                        lg=12,
                    ),
                ],
                className="mb-4",
            ),
            # Bucket drill-down
            dbc.Row(
                [
                    dbc.Col(
                        [
                            dbc.Card(
                                [
                                    dbc.CardHeader(html.H5("🔍 Bucket Detail", className="mb-0")),
                                    dbc.CardBody(
                                        html.Div(
                                            "Click a bar to see its breakdown.",
                                            id="bucket-detail",
                                            className="text-muted",
                                        )
                                    ),
                                ]
                            )
                        ]
                    )
                ],
                className="mb-4",
            ),
            # Data table section
            dbc.Row(
                [
                    dbc.Col(
                        [
                            dbc.Card(
                                [
                                    dbc.CardHeader(html.H5("📋 Cost per Bucket", className="mb-0")),
                                    dbc.CardBody([html.Div(id="bucket-table")]),
                                ]
                            )
                        ]
                    )
                ],
                className="mb-4",
            ),
            # Hidden components for state management
            dcc.Store(id="usage-records-store", data=dashboard.data_manager.initial_store_data()),
            dcc.Store(id="stats-store"),
            html.Div(id="last-update-time", className="text-muted text-center mt-3"),
        ],
        fluid=True,
    )
