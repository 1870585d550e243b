"""
Task Service — Collection Operations
=====================================
Implements list / create / complete / delete on top of a storage backend.

Every mutating call is one full load-modify-save cycle. The cycle runs
under a lock so two requests in the same process never interleave and
lose each other's writes.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable

from taskapi.errors import InvalidRequestError, TaskNotFoundError
from taskapi.models import Task
from taskapi.storage.base import BaseTaskStorage

logger = logging.getLogger(__name__)


class TaskService:
    """Operations on the tasks collection.

    Args:
        storage: Backend the collection is loaded from and saved to.
    """

    def __init__(self, storage: BaseTaskStorage):
        self.storage = storage
        self._lock = threading.Lock()

    # ── Reads ────────────────────────────────────────────────

    def list_tasks(self) -> list[Task]:
        with self._lock:
            return self.storage.load()

    def get_task(self, task_id: int) -> Task:
        """Return one task.

        Raises:
            TaskNotFoundError: If no task has this id.
        """
        with self._lock:
            tasks = self.storage.load()
            return tasks[self._find_index(tasks, task_id)]

    # ── Writes ───────────────────────────────────────────────

    def create_task(self, title: str) -> Task:
        """Append a new, incomplete task.

        Raises:
            InvalidRequestError: If the title is empty after trimming.
        """
        title = (title or "").strip()
        if not title:
            raise InvalidRequestError("Task title is required.")

        with self._lock:
            tasks = self.storage.load()
            task_id = self.next_id(tasks, self.storage.reserved_ids())
            task = Task(id=task_id, title=title, completed=False)
            tasks.append(task)
            self.storage.save(tasks)

        logger.debug("Created task id=%s", task.id)
        return task

    def complete_task(self, task_id: int, completed: bool = True) -> Task:
        """Set the completed flag of one task.

        Raises:
            TaskNotFoundError: If no task has this id.
        """
        with self._lock:
            tasks = self.storage.load()
            index = self._find_index(tasks, task_id)
            tasks[index].completed = completed
            self.storage.save(tasks)
            task = tasks[index]

        logger.debug("Updated task id=%s completed=%s", task_id, completed)
        return task

    def delete_task(self, task_id: int) -> Task:
        """Remove one task and return it.

        Raises:
            TaskNotFoundError: If no task has this id.
        """
        with self._lock:
            tasks = self.storage.load()
            removed = tasks.pop(self._find_index(tasks, task_id))
            self.storage.save(tasks)

        logger.debug("Deleted task id=%s", task_id)
        return removed

    # ── Helpers ──────────────────────────────────────────────

    @staticmethod
    def next_id(tasks: list[Task], reserved: Iterable[int] = ()) -> int:
        """One past the highest id in use, or 1 for an empty collection."""
        ids = [t.id for t in tasks] + list(reserved)
        if not ids:
            return 1
        return max(ids) + 1

    @staticmethod
    def _find_index(tasks: list[Task], task_id: int) -> int:
        for i, task in enumerate(tasks):
            if task.id == task_id:
                return i
        raise TaskNotFoundError(task_id)
