"""
Usage Cost Monitor

Turns usage-log exports into hourly and daily cost breakdowns per model,
with a command line report and an interactive dashboard.
"""

__version__ = "1.0.0"
__author__ = "Usage Monitor Team"
