"""
Core dashboard application and initialization.

Contains the main UsageMonitorDashboard class with initialization,
layout setup, and helper methods.
"""

import logging
import time

import dash
import dash_bootstrap_components as dbc
import plotly.graph_objects as go

from ...config.settings import MonitorConfig, get_config
from .data_manager import UsageDataManager
from .themes import DashboardTheme
from .utils import PerformanceMonitor

logger = logging.getLogger(__name__)


class UsageMonitorDashboard:
    """Main dashboard application class."""

    def __init__(self, config: MonitorConfig | None = None):
        logger.info("🏗️ Initializing UsageMonitorDashboard...")
        self.config = config or get_config()
        self.data_manager = UsageDataManager(self.config)
        self.performance_monitor = PerformanceMonitor()

        # Dashboard configuration
        dashboard_config = self.config.dashboard
        self.host = dashboard_config.get("host", "127.0.0.1")
        self.port = dashboard_config.get("port", 8050)
        self.debug = dashboard_config.get("debug", False)
        self.default_range = self.config.default_range

        init_start = time.time()
        self.data_manager.initialize()
        logger.info(f"Data manager initialized in {time.time() - init_start:.3f}s")

        self.app = dash.Dash(
            __name__,
            external_stylesheets=[dbc.themes.DARKLY, dbc.icons.FONT_AWESOME],
            title="Usage Cost Monitor",
        )
        self.app.index_string = self._get_custom_css_template()

        self._setup_layout()
        self._setup_callbacks()
        logger.info("🎯 Dashboard initialized successfully")

    def _get_custom_css_template(self) -> str:
        """Get custom CSS template for the dashboard."""
        return """
        <!DOCTYPE html>
        <html>
            <head>
                {%metas%}
                <title>{%title%}</title>
                {%favicon%}
                {%css%}
                <style>
                :root {
                    --bg: #1a1b26;
                    --bg-surface: #24283b;
                    --text: #c0caf5;
                    --text-muted: #565f89;
                    --accent: #7aa2f7;
                    --accent-dim: #3d59a1;
                    --border: #3b4261;
                }
                body {
                    background-color: var(--bg) !important;
                    color: var(--text) !important;
                }
                .card {
                    background-color: var(--bg-surface) !important;
                    border-color: var(--border) !important;
                }
                .card-header {
                    background-color: var(--bg) !important;
                    border-color: var(--border) !important;
                    color: var(--accent) !important;
                }
                .text-muted {
                    color: var(--text-muted) !important;
                }
                .dash-table-container .dash-spreadsheet-container .dash-spreadsheet-inner th,
                .dash-table-container .dash-spreadsheet-container .dash-spreadsheet-inner td {
                    color: var(--text) !important;
                }
                .js-plotly-plot .plotly .modebar {
                    background-color: transparent !important;
                }
                select {
                    background-color: var(--bg-surface) !important;
                    color: var(--text) !important;
                    border-color: var(--border) !important;
                }
                a {
                    color: var(--accent);
                }
                </style>
            </head>
            <body>
                {%app_entry%}
                <footer>
                    {%config%}
                    {%scripts%}
                    {%renderer%}
                </footer>
            </body>
        </html>
        """

    def _create_initial_loading_chart(self, title: str):
        """Create a loading chart placeholder."""
        loading_fig = go.Figure()
        loading_fig.add_annotation(
            text="Loading data...",
            xref="paper",
            yref="paper",
            x=0.5,
            y=0.5,
            xanchor="center",
            yanchor="middle",
            showarrow=False,
            font=dict(size=16, color=DashboardTheme.COLORS["text_muted"]),
        )
        loading_fig.update_layout(
            title=title,
            xaxis=dict(showgrid=False, showticklabels=False, zeroline=False),
            yaxis=dict(showgrid=False, showticklabels=False, zeroline=False),
            **DashboardTheme.LAYOUT,
        )
        return loading_fig

    def _setup_layout(self):
        """Set up the dashboard layout."""
        from .layout import create_dashboard_layout

        self.app.layout = create_dashboard_layout(self)

    def _setup_callbacks(self):
        """Set up all dashboard callbacks."""
        from .callbacks.charts import setup_chart_callbacks
        from .callbacks.data_store import setup_data_store_callbacks
        from .callbacks.interactions import setup_interaction_callbacks
        from .callbacks.tables import setup_table_callbacks

        setup_data_store_callbacks(self)
        setup_chart_callbacks(self)
        setup_interaction_callbacks(self)
        setup_table_callbacks(self)

    def run(self):
        """Start the dashboard server."""
        try:
            print(f"🚀 Starting dashboard on {self.host}:{self.port}")
            self.app.run(host=self.host, port=self.port, debug=self.debug)
        except Exception as e:
            logger.error(f"Failed to start dashboard: {e}")
            raise
