"""
Usage export readers.
"""

from .csv_loader import decode_upload, load_usage_csv, parse_usage_csv

__all__ = ["decode_upload", "load_usage_csv", "parse_usage_csv"]
