"""SQLite-backed record store.

One table per collection with a column per record field. Column types are
derived from the record dataclasses so the tables cannot drift from the
schema. Rows are listed in insertion order (rowid); an upsert keeps the
original rowid so an overwritten record stays in place.
"""

from __future__ import annotations
from dataclasses import fields
from pathlib import Path
from typing import Any, Dict, List
import logging
import sqlite3

from osha_log.records.schema import AnnualSummary, IncidentRecord
from osha_log.store.base import INCIDENTS, SUMMARIES, RecordStore

log = logging.getLogger(__name__)

TABLES: Dict[str, str] = {
    INCIDENTS: "osha_incident",
    SUMMARIES: "osha_300a_summary",
}


def _sql_type(type_name: Any) -> str:
    return "INTEGER" if str(type_name) in ("int", "bool") else "TEXT"


def _columns(cls) -> List[tuple]:
    return [(f.name, _sql_type(f.type)) for f in fields(cls)]


_SCHEMAS = {
    INCIDENTS: _columns(IncidentRecord),
    SUMMARIES: _columns(AnnualSummary),
}


class SqliteStore(RecordStore):
    def __init__(self, db_path: str | Path):
        self.db_path = Path(db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self.init_db()

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        return conn

    def init_db(self) -> None:
        conn = self._connect()
        try:
            for collection, cols in _SCHEMAS.items():
                col_sql = ",\n".join(
                    f"{name} TEXT PRIMARY KEY" if name == "id" else f"{name} {typ}" for name, typ in cols
                )
                conn.execute(f"CREATE TABLE IF NOT EXISTS {TABLES[collection]} (\n{col_sql}\n)")
            conn.commit()
        finally:
            conn.close()
        log.debug("initialized sqlite store at %s", self.db_path)

    def _load(self, collection: str) -> List[Dict[str, Any]]:
        conn = self._connect()
        try:
            rows = conn.execute(f"SELECT * FROM {TABLES[collection]} ORDER BY rowid").fetchall()
            return [dict(r) for r in rows]
        finally:
            conn.close()

    def _upsert(self, collection: str, data: Dict[str, Any]) -> bool:
        table = TABLES[collection]
        names = [name for name, _ in _SCHEMAS[collection]]
        values = [int(data[n]) if isinstance(data.get(n), bool) else data.get(n) for n in names]
        updates = ", ".join(f"{n} = excluded.{n}" for n in names if n != "id")
        conn = self._connect()
        try:
            existed = conn.execute(f"SELECT 1 FROM {table} WHERE id = ?", (data["id"],)).fetchone() is not None
            conn.execute(
                f"INSERT INTO {table} ({', '.join(names)}) VALUES ({', '.join('?' for _ in names)}) "
                f"ON CONFLICT(id) DO UPDATE SET {updates}",
                values,
            )
            conn.commit()
            return existed
        finally:
            conn.close()

    def _remove(self, collection: str, record_id: str) -> bool:
        conn = self._connect()
        try:
            cur = conn.execute(f"DELETE FROM {TABLES[collection]} WHERE id = ?", (record_id,))
            conn.commit()
            return cur.rowcount > 0
        finally:
            conn.close()

    def clear(self) -> None:
        conn = self._connect()
        try:
            for table in TABLES.values():
                conn.execute(f"DELETE FROM {table}")
            conn.commit()
        finally:
            conn.close()
