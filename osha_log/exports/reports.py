from __future__ import annotations
from typing import List

from osha_log.dashboard.metrics import DashboardMetrics


def dashboard_md(metrics: DashboardMetrics) -> str:
    lines = ["# Dashboard", ""]
    lines.append(f"- Total incidents: {metrics.total_incidents}")
    lines.append(f"- Days away (DAFW): {metrics.total_days_away}")
    lines.append(f"- Days restricted (DJTR): {metrics.total_days_restricted}")
    lines.append(f"- Injury types: {metrics.unique_categories}")
    if metrics.injury_type_counts:
        lines.append("\n## Injury types")
        for label, n in metrics.injury_type_counts.items():
            lines.append(f"- {label}: {n}")
    lines.append("\n## Incidents")
    if not metrics.rows:
        lines.append("No incidents recorded yet")
        return "\n".join(lines) + "\n"
    lines.append("")
    lines.append("| Case # | Date | Employee | Location | Type | Outcome | DAFW |")
    lines.append("|---|---|---|---|---|---|---|")
    for r in metrics.rows:
        lines.append(
            f"| {r.case_number} | {r.date_of_incident} | {r.job_title} | {r.incident_location} "
            f"| {r.type_label} | {r.outcome_label} | {r.dafw_num_away} |"
        )
    return "\n".join(lines) + "\n"


def validation_report_md(warnings: List[str]) -> str:
    lines = ["# Validation Report", ""]
    if not warnings:
        lines.append("- advisory checks: PASS")
    for w in warnings:
        lines.append(f"- WARN: {w}")
    return "\n".join(lines) + "\n"
