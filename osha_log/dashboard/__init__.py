"""Dashboard: incident totals and display rows (see `metrics.py`)."""

from .metrics import DashboardMetrics, IncidentRow, compute_dashboard
