"""
Task API Configuration
=======================
Server settings read from TASKS_* environment variables.
CLI flags are applied on top by taskapi.cli.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, replace

DEFAULT_PORT = 3000


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


@dataclass(frozen=True)
class ServerConfig:
    """Settings for one server process."""

    data_file: str = "tasks.json"   # Backing file for the json storage
    storage: str = "json"           # "json" or "memory"
    host: str = "0.0.0.0"
    port: int = DEFAULT_PORT
    log_level: str = "info"

    @classmethod
    def from_env(cls) -> ServerConfig:
        return cls(
            data_file=os.environ.get("TASKS_FILE", "").strip() or cls.data_file,
            storage=os.environ.get("TASKS_STORAGE", "").strip() or cls.storage,
            host=os.environ.get("TASKS_HOST", "").strip() or cls.host,
            port=_env_int("TASKS_PORT", DEFAULT_PORT),
            log_level=os.environ.get("TASKS_LOG_LEVEL", "").strip().lower() or cls.log_level,
        )

    def override(self, **changes) -> ServerConfig:
        """Return a copy with every non-None value in `changes` applied."""
        return replace(self, **{k: v for k, v in changes.items() if v is not None})
