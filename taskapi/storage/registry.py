"""
Storage Registry — Register and Instantiate Storage Backends
==============================================================
Maps backend names ("json", "memory") to their implementation classes.
"""

from __future__ import annotations

from typing import Type, TYPE_CHECKING

from taskapi.storage.base import BaseTaskStorage

if TYPE_CHECKING:
    from taskapi.config import ServerConfig

# ─────────────────────────────────────────────────────────────
#  Registry
# ─────────────────────────────────────────────────────────────

_REGISTRY: dict[str, Type[BaseTaskStorage]] = {}


def register_storage(name: str, storage_class: Type[BaseTaskStorage]):
    """Register a storage backend class under a name."""
    _REGISTRY[name.lower()] = storage_class


def get_storage(config: ServerConfig) -> BaseTaskStorage:
    """Instantiate the storage backend named in config.

    Args:
        config: ServerConfig with storage and data_file set.

    Returns:
        A ready-to-use BaseTaskStorage subclass instance.

    Raises:
        ValueError: If the backend is not registered.
    """
    _register_builtins()
    name = config.storage.lower()

    if name not in _REGISTRY:
        raise ValueError(
            f"Unknown storage '{name}'. Available: {sorted(_REGISTRY)}."
        )

    return _REGISTRY[name].from_config(config)


def list_storages() -> list[str]:
    """List all registered storage backend names."""
    _register_builtins()
    return sorted(_REGISTRY.keys())


def _register_builtins():
    from taskapi.storage.json_storage import JsonFileStorage
    from taskapi.storage.memory_storage import InMemoryStorage

    _REGISTRY.setdefault("json", JsonFileStorage)
    _REGISTRY.setdefault("memory", InMemoryStorage)
