"""
Reporting module for sleep and mood insights.

This module contains the report data derivation and the CSV export of
entry history.
"""

from rythm.core.reporting.report_data import build_report_data, get_entries_in_range, get_report_range
from rythm.core.reporting.csv_export import export_entries_csv, read_entries_csv

__all__ = [
    'build_report_data',
    'get_entries_in_range',
    'get_report_range',
    'export_entries_csv',
    'read_entries_csv',
]
