from __future__ import annotations
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Iterable, List

from osha_log.records.schema import IncidentRecord, incident_outcome_label, incident_type_label

DEATH_OUTCOME = 1


@dataclass(frozen=True)
class IncidentRow:
    case_number: int
    date_of_incident: str
    job_title: str
    incident_location: str
    type_label: str
    outcome_label: str
    dafw_num_away: int
    is_death: bool


@dataclass
class DashboardMetrics:
    total_incidents: int = 0
    total_days_away: int = 0
    total_days_restricted: int = 0
    injury_type_counts: Dict[str, int] = field(default_factory=dict)
    rows: List[IncidentRow] = field(default_factory=list)

    @property
    def unique_categories(self) -> int:
        return len(self.injury_type_counts)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total_incidents": self.total_incidents,
            "total_days_away": self.total_days_away,
            "total_days_restricted": self.total_days_restricted,
            "injury_type_counts": dict(self.injury_type_counts),
            "unique_categories": self.unique_categories,
            "incidents": [asdict(r) for r in self.rows],
        }


def compute_dashboard(incidents: Iterable[IncidentRecord]) -> DashboardMetrics:
    """Totals, per-type counts and display rows, in input order."""
    m = DashboardMetrics()
    for inc in incidents:
        m.total_incidents += 1
        m.total_days_away += inc.dafw_num_away
        m.total_days_restricted += inc.djtr_num_tr
        label = incident_type_label(inc.type_of_incident)
        m.injury_type_counts[label] = m.injury_type_counts.get(label, 0) + 1
        m.rows.append(
            IncidentRow(
                case_number=inc.case_number,
                date_of_incident=inc.date_of_incident,
                job_title=inc.job_title,
                incident_location=inc.incident_location,
                type_label=label,
                outcome_label=incident_outcome_label(inc.incident_outcome),
                dafw_num_away=inc.dafw_num_away,
                is_death=inc.incident_outcome == DEATH_OUTCOME,
            )
        )
    return m
