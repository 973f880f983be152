from __future__ import annotations
from typing import Any, Dict, List
import copy
import threading

from osha_log.store.base import INCIDENTS, SUMMARIES, RecordStore


class InMemoryStore(RecordStore):
    def __init__(self):
        self._data: Dict[str, List[Dict[str, Any]]] = {INCIDENTS: [], SUMMARIES: []}
        self._lock = threading.Lock()

    def _load(self, collection: str) -> List[Dict[str, Any]]:
        with self._lock:
            return copy.deepcopy(self._data[collection])

    def _upsert(self, collection: str, data: Dict[str, Any]) -> bool:
        with self._lock:
            items = self._data[collection]
            for idx, existing in enumerate(items):
                if existing["id"] == data["id"]:
                    items[idx] = dict(data)
                    return True
            items.append(dict(data))
            return False

    def _remove(self, collection: str, record_id: str) -> bool:
        with self._lock:
            items = self._data[collection]
            kept = [d for d in items if d["id"] != record_id]
            self._data[collection] = kept
            return len(kept) != len(items)

    def clear(self) -> None:
        with self._lock:
            for k in self._data:
                self._data[k] = []
