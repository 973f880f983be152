from __future__ import annotations
from pathlib import Path
from typing import Any, Dict, List
import json
import logging
import threading

from osha_log.store.base import INCIDENTS, SUMMARIES, RecordStore

log = logging.getLogger(__name__)


class JsonFileStore(RecordStore):
    """Each collection is one JSON array file (``osha_incidents.json``,
    ``osha_summaries.json``) under ``root``. Every write rewrites the file.
    """

    def __init__(self, root: str | Path):
        self.root = Path(root).resolve()
        self.root.mkdir(parents=True, exist_ok=True)
        self._lock = threading.Lock()

    def _path(self, collection: str) -> Path:
        return self.root / f"{collection}.json"

    def _read(self, collection: str) -> List[Dict[str, Any]]:
        p = self._path(collection)
        if not p.exists():
            return []
        text = p.read_text(encoding="utf-8")
        return json.loads(text) if text.strip() else []

    def _write(self, collection: str, items: List[Dict[str, Any]]) -> None:
        p = self._path(collection)
        tmp = p.with_suffix(".json.tmp")
        tmp.write_text(json.dumps(items, indent=2), encoding="utf-8")
        tmp.replace(p)
        log.debug("wrote %d records to %s", len(items), p)

    def _load(self, collection: str) -> List[Dict[str, Any]]:
        with self._lock:
            return self._read(collection)

    def _upsert(self, collection: str, data: Dict[str, Any]) -> bool:
        with self._lock:
            items = self._read(collection)
            existed = False
            for idx, existing in enumerate(items):
                if existing.get("id") == data["id"]:
                    items[idx] = data
                    existed = True
                    break
            if not existed:
                items.append(data)
            self._write(collection, items)
            return existed

    def _remove(self, collection: str, record_id: str) -> bool:
        with self._lock:
            items = self._read(collection)
            kept = [d for d in items if d.get("id") != record_id]
            if len(kept) == len(items):
                return False
            self._write(collection, kept)
            return True

    def clear(self) -> None:
        with self._lock:
            for c in (INCIDENTS, SUMMARIES):
                self._write(c, [])
