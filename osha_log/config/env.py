from __future__ import annotations
import logging
import os
from dataclasses import dataclass

STORE_BACKENDS = ("memory", "json", "sqlite")


@dataclass(frozen=True)
class StoreConfig:
    backend: str = "json"
    path: str = "./osha_data"


def get_store_config() -> StoreConfig:
    backend = os.getenv("OSHA_STORE_BACKEND", "json").strip().lower()
    if backend not in STORE_BACKENDS:
        raise ValueError(f"OSHA_STORE_BACKEND must be one of {', '.join(STORE_BACKENDS)}, got {backend!r}")
    return StoreConfig(backend=backend, path=os.getenv("OSHA_STORE_PATH", "./osha_data"))


@dataclass(frozen=True)
class ServerConfig:
    host: str = "0.0.0.0"
    port: int = 8000


def get_server_config() -> ServerConfig:
    return ServerConfig(host=os.getenv("HOST", "0.0.0.0"), port=int(os.getenv("PORT", "8000")))


@dataclass(frozen=True)
class LogConfig:
    level: str = "INFO"


def get_log_config() -> LogConfig:
    return LogConfig(level=os.getenv("LOG_LEVEL", "INFO").upper())


def configure_logging(cfg: LogConfig | None = None) -> None:
    cfg = cfg or get_log_config()
    logging.basicConfig(
        level=getattr(logging, cfg.level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
