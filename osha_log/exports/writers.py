from __future__ import annotations
from typing import Any, Callable, Dict, Iterable, List, Sequence
import logging

from osha_log.records.schema import AnnualSummary, IncidentRecord

log = logging.getLogger(__name__)

# Column orders follow OSHA's ITA CSV submission layout; do not reorder
INCIDENT_COLUMNS: List[str] = [
    "establishment_name", "year_of_filing", "case_number", "job_title", "date_of_incident",
    "incident_location", "incident_description", "incident_outcome", "dafw_num_away", "djtr_num_tr",
    "type_of_incident", "date_of_birth", "date_of_hire", "sex", "treatment_facility_type",
    "treatment_in_patient", "time_started_work", "time_of_incident", "time_unknown",
    "nar_before_incident", "nar_what_happened", "nar_injury_illness", "nar_object_substance",
    "date_of_death",
]

SUMMARY_COLUMNS: List[str] = [
    "establishment_name", "ein", "company_name", "street_address", "city", "state", "zip",
    "naics_code", "industry_description", "size", "establishment_type", "year_filing_for",
    "annual_average_employees", "total_hours_worked", "no_injuries_illnesses", "total_deaths",
    "total_dafw_cases", "total_djtr_cases", "total_other_cases", "total_dafw_days",
    "total_djtr_days", "total_injuries", "total_skin_disorders", "total_respiratory_conditions",
    "total_poisonings", "total_hearing_loss", "total_other_illnesses", "change_reason",
]

EXPORT_FILENAMES: Dict[str, str] = {
    "incidents": "osha-300-301-incidents.csv",
    "summaries": "osha-300a-summary.csv",
}

_NEEDS_QUOTES = (",", '"', "\n")


def format_cell(value: Any) -> str:
    """Render one cell. Quote only when the text holds a comma, quote or newline."""
    text = "" if value is None else str(value)
    if any(ch in text for ch in _NEEDS_QUOTES):
        return '"' + text.replace('"', '""') + '"'
    return text


def write_csv(rows: Iterable[Sequence[Any]], columns: List[str]) -> str:
    lines = [",".join(format_cell(c) for c in columns)]
    for r in rows:
        lines.append(",".join(format_cell(v) for v in r))
    return "\n".join(lines)


def _incident_row(r: IncidentRecord) -> List[Any]:
    return [
        r.establishment_name,
        r.year_of_filing,
        r.case_number,
        r.job_title,
        r.date_of_incident,
        r.incident_location,
        r.incident_description,
        r.incident_outcome,
        r.dafw_num_away,
        r.djtr_num_tr,
        r.type_of_incident,
        r.date_of_birth,
        r.date_of_hire,
        r.sex,
        r.treatment_facility_type,
        r.treatment_in_patient,
        r.time_started_work,
        r.time_of_incident,
        1 if r.time_unknown else "",
        r.nar_before_incident,
        r.nar_what_happened,
        r.nar_injury_illness,
        r.nar_object_substance,
        r.date_of_death or "",
    ]


def _summary_row(s: AnnualSummary) -> List[Any]:
    row: List[Any] = [getattr(s, name) for name in SUMMARY_COLUMNS[:-1]]
    row.append(s.change_reason or "")
    return row


def _serialize(kind: str, records: Iterable[Any], to_row: Callable[[Any], List[Any]], columns: List[str]) -> str:
    rows = [to_row(r) for r in records]
    log.debug("serializing %d %s", len(rows), kind)
    return write_csv(rows, columns)


def serialize_incidents(records: Iterable[IncidentRecord]) -> str:
    return _serialize("incidents", records, _incident_row, INCIDENT_COLUMNS)


def serialize_summaries(records: Iterable[AnnualSummary]) -> str:
    return _serialize("summaries", records, _summary_row, SUMMARY_COLUMNS)
