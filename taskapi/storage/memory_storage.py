"""
In-Memory Storage
==================
Holds the collection in a list. Nothing touches disk, so it backs the
test suite and throwaway servers.
"""

from __future__ import annotations

import copy
from typing import Optional

from taskapi.models import Task
from taskapi.storage.base import BaseTaskStorage


class InMemoryStorage(BaseTaskStorage):
    """Task storage kept in process memory.

    Copies on the way in and out so callers can't mutate stored state
    without going through save().
    """

    name = "memory"

    def __init__(self, tasks: Optional[list[Task]] = None):
        self._tasks: list[Task] = copy.deepcopy(tasks) if tasks else []
        self.save_count = 0

    def load(self) -> list[Task]:
        return copy.deepcopy(self._tasks)

    def save(self, tasks: list[Task]) -> None:
        self._tasks = copy.deepcopy(tasks)
        self.save_count += 1
