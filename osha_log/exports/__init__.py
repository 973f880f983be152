"""Exports & reporting: OSHA CSV writers and Markdown reports.

- writers.py: fixed-column CSV serializers for incidents and 300A summaries
- reports.py: dashboard.md and validation_report.md generators
"""

from .writers import (
    EXPORT_FILENAMES,
    INCIDENT_COLUMNS,
    SUMMARY_COLUMNS,
    format_cell,
    serialize_incidents,
    serialize_summaries,
)
