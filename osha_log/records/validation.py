from __future__ import annotations
from collections import Counter
from typing import Any, Dict, Iterable, List, Mapping, Tuple
import re

from osha_log.records.schema import (
    AnnualSummary,
    IncidentRecord,
    INCIDENT_DATE_FIELDS,
    INCIDENT_INT_FIELDS,
    INCIDENT_OUTCOMES,
    INCIDENT_REQUIRED_FIELDS,
    INCIDENT_TEXT_FIELDS,
    INCIDENT_TYPES,
    SUMMARY_INT_FIELDS,
    SUMMARY_REQUIRED_FIELDS,
    SUMMARY_TEXT_FIELDS,
    MAX_INT,
    incident_from_dict,
    new_record_id,
    summary_from_dict,
)

REQUIRED_MESSAGE = "This field is required"

_DATE_RE = re.compile(r"^\d{2}/\d{2}/\d{4}$")
_TRUE_STRINGS = {"1", "true", "yes", "on"}
_FALSE_STRINGS = {"", "0", "false", "no", "off"}

# Summary totals that should all be zero when no_injuries_illnesses is set
_CASE_TOTALS: Tuple[str, ...] = (
    "total_deaths",
    "total_dafw_cases",
    "total_djtr_cases",
    "total_other_cases",
    "total_dafw_days",
    "total_djtr_days",
    "total_injuries",
    "total_skin_disorders",
    "total_respiratory_conditions",
    "total_poisonings",
    "total_hearing_loss",
    "total_other_illnesses",
)


class RecordValidationError(ValueError):
    """Raised when a submitted form payload cannot become a record.

    ``errors`` maps field name to a user-facing message.
    """

    def __init__(self, errors: Dict[str, str]):
        self.errors = dict(errors)
        super().__init__("invalid record: " + ", ".join(sorted(self.errors)))


def _is_blank(v: Any) -> bool:
    return v is None or (isinstance(v, str) and not v.strip())


def _coerce_int(v: Any) -> int:
    # Number inputs arrive as strings; bools are not counts
    if isinstance(v, bool):
        raise ValueError("not an integer")
    if isinstance(v, int):
        return v
    if isinstance(v, float) and v.is_integer():
        return int(v)
    if isinstance(v, str) and re.fullmatch(r"\s*-?\d+\s*", v):
        return int(v)
    raise ValueError("not an integer")


def _coerce_bool(v: Any) -> bool:
    if isinstance(v, bool):
        return v
    if v is None:
        return False
    if isinstance(v, int):
        return v != 0
    s = str(v).strip().lower()
    if s in _TRUE_STRINGS:
        return True
    if s in _FALSE_STRINGS:
        return False
    raise ValueError("not a boolean")


def _check_required(payload: Mapping[str, Any], required: Iterable[str], errors: Dict[str, str]) -> None:
    for name in required:
        if _is_blank(payload.get(name)):
            errors[name] = REQUIRED_MESSAGE


def _coerce_ints(
    payload: Mapping[str, Any], names: Iterable[str], out: Dict[str, Any], errors: Dict[str, str]
) -> None:
    for name in names:
        if name in errors:
            continue
        raw = payload.get(name)
        if _is_blank(raw):
            out.pop(name, None)  # fall back to the dataclass default
            continue
        try:
            val = _coerce_int(raw)
        except ValueError:
            errors[name] = "Must be a whole number"
            continue
        if val < 0:
            errors[name] = "Must not be negative"
            continue
        if val > MAX_INT:
            errors[name] = "Number is too large"
            continue
        out[name] = val


def _check_text(payload: Mapping[str, Any], names: Iterable[str], errors: Dict[str, str]) -> None:
    for name in names:
        v = payload.get(name)
        if name not in errors and v is not None and not isinstance(v, str):
            errors[name] = "Must be text"


def validate_incident(payload: Mapping[str, Any]) -> IncidentRecord:
    """Validate a Form 300/301 submission and build the record.

    Keeps ``payload['id']`` when present so an edit overwrites in place;
    otherwise a fresh id is assigned.
    """
    errors: Dict[str, str] = {}
    _check_required(payload, INCIDENT_REQUIRED_FIELDS, errors)
    _check_text(payload, INCIDENT_TEXT_FIELDS, errors)

    data: Dict[str, Any] = {k: v for k, v in payload.items() if v is not None}
    _coerce_ints(payload, INCIDENT_INT_FIELDS, data, errors)

    for name, table in (("incident_outcome", INCIDENT_OUTCOMES), ("type_of_incident", INCIDENT_TYPES)):
        if name not in errors and name in data and data[name] not in table:
            errors[name] = "Must be a code between 1 and 6"

    for name in INCIDENT_DATE_FIELDS:
        v = payload.get(name)
        if name in errors or _is_blank(v):
            continue
        if not isinstance(v, str) or not _DATE_RE.match(v.strip()):
            errors[name] = "Use MM/DD/YYYY"

    try:
        data["time_unknown"] = _coerce_bool(payload.get("time_unknown"))
    except ValueError:
        errors["time_unknown"] = "Must be true or false"

    if _is_blank(payload.get("date_of_death")):
        data["date_of_death"] = None

    if errors:
        raise RecordValidationError(errors)
    if _is_blank(data.get("id")):
        data["id"] = new_record_id()
    return incident_from_dict(data)


def validate_summary(payload: Mapping[str, Any]) -> AnnualSummary:
    """Validate a Form 300A submission; all integer totals must be >= 0."""
    errors: Dict[str, str] = {}
    _check_required(payload, SUMMARY_REQUIRED_FIELDS, errors)
    _check_text(payload, SUMMARY_TEXT_FIELDS, errors)

    flag = payload.get("no_injuries_illnesses")
    if isinstance(flag, bool):
        # checkbox value; stored as 0/1
        payload = {**payload, "no_injuries_illnesses": int(flag)}

    data: Dict[str, Any] = {k: v for k, v in payload.items() if v is not None}
    _coerce_ints(payload, SUMMARY_INT_FIELDS, data, errors)
    if "no_injuries_illnesses" not in errors and data.get("no_injuries_illnesses", 0) not in (0, 1):
        errors["no_injuries_illnesses"] = "Must be 0 or 1"

    if _is_blank(payload.get("change_reason")):
        data["change_reason"] = None

    if errors:
        raise RecordValidationError(errors)
    if _is_blank(data.get("id")):
        data["id"] = new_record_id()
    return summary_from_dict(data)


def advisory_warnings(
    incidents: Iterable[IncidentRecord], summaries: Iterable[AnnualSummary]
) -> List[str]:
    """Checks that are reported but never enforced.

    - duplicate case numbers within one establishment and filing year
    - a 300A marked "no injuries or illnesses" that still carries totals
    """
    warnings: List[str] = []
    keys = Counter((i.establishment_name, i.year_of_filing, i.case_number) for i in incidents)
    for (est, year, case), n in sorted(keys.items(), key=lambda kv: (kv[0][0], kv[0][1], kv[0][2])):
        if n > 1:
            warnings.append(f"case number {case} appears {n} times for {est} ({year})")
    for s in summaries:
        if s.no_injuries_illnesses:
            nonzero = [name for name in _CASE_TOTALS if getattr(s, name)]
            if nonzero:
                warnings.append(
                    f"{s.establishment_name} ({s.year_filing_for}) is marked no injuries/illnesses "
                    f"but has non-zero {', '.join(nonzero)}"
                )
    return warnings
