"""
Task Storage Base — Abstract Interface
========================================
Backend-agnostic interface for persisting the tasks collection.
Every backend reads and writes the full collection at once.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from taskapi.models import Task

if TYPE_CHECKING:
    from taskapi.config import ServerConfig


class BaseTaskStorage(ABC):
    """Abstract base class for task storage backends.

    All backends must implement:
        - load(): Return the full collection in insertion order
        - save(): Replace the full collection
    """

    name: str = ""

    @classmethod
    def from_config(cls, config: ServerConfig) -> BaseTaskStorage:
        """Build the backend from server settings. Override when it needs any."""
        return cls()

    @abstractmethod
    def load(self) -> list[Task]:
        """Read the whole collection.

        Returns:
            Tasks in the order they were saved.
        """
        ...

    @abstractmethod
    def save(self, tasks: list[Task]) -> None:
        """Overwrite the stored collection with `tasks`."""
        ...

    def reserved_ids(self) -> set[int]:
        """Ids held by stored records that load() could not return."""
        return set()
