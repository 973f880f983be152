"""Record stores: where incidents and 300A summaries live.

Callers receive a store explicitly (see `build_store`); nothing here is a
module-level singleton.
"""

from __future__ import annotations
from pathlib import Path

from osha_log.config.env import StoreConfig, get_store_config
from .base import RecordNotFound, RecordStore
from .json_file import JsonFileStore
from .memory import InMemoryStore
from .sqlite import SqliteStore


def build_store(cfg: StoreConfig | None = None) -> RecordStore:
    cfg = cfg or get_store_config()
    if cfg.backend == "memory":
        return InMemoryStore()
    if cfg.backend == "sqlite":
        p = Path(cfg.path)
        return SqliteStore(p if p.suffix else p / "osha.db")
    return JsonFileStore(cfg.path)
