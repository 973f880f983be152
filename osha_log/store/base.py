from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, List
import logging

from osha_log.records.schema import (
    AnnualSummary,
    IncidentRecord,
    incident_from_dict,
    record_to_dict,
    summary_from_dict,
)

log = logging.getLogger(__name__)

INCIDENTS = "osha_incidents"
SUMMARIES = "osha_summaries"

_DECODERS: Dict[str, Callable[[Dict[str, Any]], Any]] = {
    INCIDENTS: incident_from_dict,
    SUMMARIES: summary_from_dict,
}


class RecordNotFound(KeyError):
    def __init__(self, collection: str, record_id: str):
        self.collection = collection
        self.record_id = record_id
        super().__init__(f"{collection}: no record with id {record_id!r}")


class RecordStore(ABC):
    """Two flat collections of records keyed by id, in insertion order.

    Backends implement the four primitives over plain dicts; the typed
    incident/summary API is shared. Saving an existing id overwrites it in
    place (position kept), and list calls return snapshots.
    """

    @abstractmethod
    def _load(self, collection: str) -> List[Dict[str, Any]]:
        ...

    @abstractmethod
    def _upsert(self, collection: str, data: Dict[str, Any]) -> bool:
        """Insert or overwrite by ``data['id']``. Returns True if it existed."""

    @abstractmethod
    def _remove(self, collection: str, record_id: str) -> bool:
        ...

    @abstractmethod
    def clear(self) -> None:
        ...

    def _list(self, collection: str) -> List[Any]:
        decode = _DECODERS[collection]
        return [decode(d) for d in self._load(collection)]

    def _get(self, collection: str, record_id: str) -> Any:
        for rec in self._list(collection):
            if rec.id == record_id:
                return rec
        raise RecordNotFound(collection, record_id)

    def _save(self, collection: str, record: Any) -> None:
        existed = self._upsert(collection, record_to_dict(record))
        log.info("%s %s in %s", "overwrote" if existed else "created", record.id, collection)

    def _delete(self, collection: str, record_id: str) -> None:
        if not self._remove(collection, record_id):
            raise RecordNotFound(collection, record_id)
        log.info("deleted %s from %s", record_id, collection)

    # Incidents
    def list_incidents(self) -> List[IncidentRecord]:
        return self._list(INCIDENTS)

    def get_incident(self, record_id: str) -> IncidentRecord:
        return self._get(INCIDENTS, record_id)

    def save_incident(self, incident: IncidentRecord) -> None:
        self._save(INCIDENTS, incident)

    def delete_incident(self, record_id: str) -> None:
        self._delete(INCIDENTS, record_id)

    # Summaries
    def list_summaries(self) -> List[AnnualSummary]:
        return self._list(SUMMARIES)

    def get_summary(self, record_id: str) -> AnnualSummary:
        return self._get(SUMMARIES, record_id)

    def save_summary(self, summary: AnnualSummary) -> None:
        self._save(SUMMARIES, summary)

    def delete_summary(self, record_id: str) -> None:
        self._delete(SUMMARIES, record_id)
