"""
Dashboard package for usage cost monitoring.

Provides a Dash application with:
- CSV upload and range selection
- A stacked per-category cost chart with bucket drill-down
- Centralized theme management
"""

import logging

from .core import UsageMonitorDashboard
from .data_manager import UsageDataManager
from .themes import DashboardTheme
from .utils import PerformanceMonitor

logger = logging.getLogger(__name__)

__all__ = [
    "UsageMonitorDashboard",
    "UsageDataManager",
    "DashboardTheme",
    "PerformanceMonitor",
    "main",
]


def main(config=None):
    """Main entry point for the dashboard."""
    logging.basicConfig(
        level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )
    logger.info("🚀 Starting usage dashboard")

    try:
        dashboard = UsageMonitorDashboard(config)
        dashboard.run()
    except KeyboardInterrupt:
        logger.info("Dashboard stopped by user")
    except Exception as e:
        logger.error(f"Dashboard error: {e}")
        raise
