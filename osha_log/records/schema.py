from __future__ import annotations
from dataclasses import dataclass, asdict, fields
from typing import Any, Dict, Optional, Tuple, Union
import uuid

UNKNOWN_LABEL = "Unknown"

INCIDENT_OUTCOMES: Dict[int, str] = {
    1: "Death",
    2: "Days away from work",
    3: "Job transfer or restriction",
    4: "Other recordable cases",
    5: "Privacy case",
    6: "Not recorded",
}

INCIDENT_TYPES: Dict[int, str] = {
    1: "Injury",
    2: "Skin disorder",
    3: "Respiratory condition",
    4: "Poisoning",
    5: "Hearing loss",
    6: "All other illnesses",
}


@dataclass(frozen=True)
class IncidentRecord:
    """One Form 300/301 case. Dates are MM/DD/YYYY text, never parsed.

    Fields without a default are the ones the entry form requires; CSV column
    order lives in exports.writers, not here.
    """
    id: str
    establishment_name: str
    year_of_filing: int
    case_number: int
    job_title: str
    date_of_incident: str
    incident_location: str
    incident_description: str
    incident_outcome: int  # 1..6, see INCIDENT_OUTCOMES
    type_of_incident: int  # 1..6, see INCIDENT_TYPES
    date_of_birth: str
    date_of_hire: str
    nar_before_incident: str  # what the employee was doing
    nar_what_happened: str
    nar_injury_illness: str
    nar_object_substance: str
    dafw_num_away: int = 0  # days away from work
    djtr_num_tr: int = 0  # days of job transfer or restriction
    sex: str = ""
    treatment_facility_type: int = 0
    treatment_in_patient: int = 0
    time_started_work: str = ""
    time_of_incident: str = ""
    time_unknown: bool = False
    date_of_death: Optional[str] = None


@dataclass(frozen=True)
class AnnualSummary:
    """Form 300A establishment totals for one year."""
    id: str
    establishment_name: str
    ein: str  # NN-NNNNNNN
    company_name: str
    street_address: str
    city: str
    state: str
    zip: str
    naics_code: str
    industry_description: str
    size: int
    establishment_type: int
    year_filing_for: int
    annual_average_employees: int
    total_hours_worked: int
    no_injuries_illnesses: int = 0  # 0/1 flag
    total_deaths: int = 0
    total_dafw_cases: int = 0
    total_djtr_cases: int = 0
    total_other_cases: int = 0
    total_dafw_days: int = 0
    total_djtr_days: int = 0
    total_injuries: int = 0
    total_skin_disorders: int = 0
    total_respiratory_conditions: int = 0
    total_poisonings: int = 0
    total_hearing_loss: int = 0
    total_other_illnesses: int = 0
    change_reason: Optional[str] = None


Record = Union[IncidentRecord, AnnualSummary]

INCIDENT_REQUIRED_FIELDS: Tuple[str, ...] = (
    "establishment_name",
    "year_of_filing",
    "case_number",
    "job_title",
    "date_of_birth",
    "date_of_hire",
    "date_of_incident",
    "incident_location",
    "incident_description",
    "type_of_incident",
    "incident_outcome",
    "nar_before_incident",
    "nar_what_happened",
    "nar_injury_illness",
    "nar_object_substance",
)

SUMMARY_REQUIRED_FIELDS: Tuple[str, ...] = (
    "establishment_name",
    "ein",
    "company_name",
    "street_address",
    "city",
    "state",
    "zip",
    "naics_code",
    "industry_description",
    "size",
    "establishment_type",
    "year_filing_for",
    "annual_average_employees",
    "total_hours_worked",
)

INCIDENT_INT_FIELDS: Tuple[str, ...] = (
    "year_of_filing",
    "case_number",
    "incident_outcome",
    "dafw_num_away",
    "djtr_num_tr",
    "type_of_incident",
    "treatment_facility_type",
    "treatment_in_patient",
)

# Every integer on the 300A is a count, code or flag and must be >= 0
SUMMARY_INT_FIELDS: Tuple[str, ...] = tuple(
    f.name for f in fields(AnnualSummary) if f.type in ("int", int)
)


def _text_fields(cls) -> Tuple[str, ...]:
    return tuple(f.name for f in fields(cls) if f.type in ("str", "Optional[str]", str))


INCIDENT_TEXT_FIELDS: Tuple[str, ...] = _text_fields(IncidentRecord)
SUMMARY_TEXT_FIELDS: Tuple[str, ...] = _text_fields(AnnualSummary)

# Stored counts must fit a signed 64-bit column (SQLite INTEGER)
MAX_INT = 2**63 - 1

INCIDENT_DATE_FIELDS: Tuple[str, ...] = ("date_of_incident", "date_of_birth", "date_of_hire", "date_of_death")


def incident_outcome_label(code: int) -> str:
    return INCIDENT_OUTCOMES.get(code, UNKNOWN_LABEL)


def incident_type_label(code: int) -> str:
    return INCIDENT_TYPES.get(code, UNKNOWN_LABEL)


def new_record_id() -> str:
    return uuid.uuid4().hex


def _from_dict(cls, data: Dict[str, Any]):
    # Unknown keys are dropped; missing optional keys take the dataclass default
    names = {f.name for f in fields(cls)}
    return cls(**{k: v for k, v in data.items() if k in names})


def incident_from_dict(data: Dict[str, Any]) -> IncidentRecord:
    rec = _from_dict(IncidentRecord, data)
    if not isinstance(rec.time_unknown, bool):
        # sqlite and some JSON producers hand back 0/1
        rec = IncidentRecord(**{**asdict(rec), "time_unknown": bool(rec.time_unknown)})
    return rec


def summary_from_dict(data: Dict[str, Any]) -> AnnualSummary:
    return _from_dict(AnnualSummary, data)


def record_to_dict(record: Record) -> Dict[str, Any]:
    return asdict(record)
