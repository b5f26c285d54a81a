"""
Configuration for the usage cost monitor.
"""

from .settings import MonitorConfig, get_config, reload_config

__all__ = ["MonitorConfig", "get_config", "reload_config"]
