"""
Storage Abstraction Layer
==========================
Backends that load and save the whole tasks collection.
Supports a JSON file on disk and an in-memory list.
"""

from taskapi.storage.base import BaseTaskStorage
from taskapi.storage.registry import get_storage, list_storages, register_storage

__all__ = [
    "BaseTaskStorage",
    "get_storage", "list_storages", "register_storage",
]
