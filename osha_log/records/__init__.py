"""OSHA record shapes (Forms 300/301 and 300A).

- schema.py: record dataclasses, code tables and label lookups, required fields
- validation.py: form validation and advisory cross-record checks
"""

from .schema import (
    AnnualSummary,
    IncidentRecord,
    INCIDENT_REQUIRED_FIELDS,
    SUMMARY_REQUIRED_FIELDS,
    UNKNOWN_LABEL,
    incident_outcome_label,
    incident_type_label,
)
from .validation import RecordValidationError, advisory_warnings, validate_incident, validate_summary
