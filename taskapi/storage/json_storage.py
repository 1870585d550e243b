"""
JSON File Storage
==================
Keeps the collection as one pretty-printed JSON array on disk.
The file is fully rewritten on every save; there is no atomic rename.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from taskapi.errors import StorageError
from taskapi.models import Task, as_int_id
from taskapi.storage.base import BaseTaskStorage

logger = logging.getLogger(__name__)


class JsonFileStorage(BaseTaskStorage):
    """Task storage backed by a single JSON file."""

    name = "json"
    DEFAULT_PATH = "tasks.json"

    def __init__(self, path: str | Path = DEFAULT_PATH):
        self.path = Path(path)
        # Records from the last load that aren't valid tasks; written back untouched.
        self._unreadable: list = []

    @classmethod
    def from_config(cls, config) -> JsonFileStorage:
        return cls(config.data_file)

    def load(self) -> list[Task]:
        if not self.path.exists():
            self._write_text("[]")
            logger.info("Created empty task store at %s", self.path)

        try:
            raw = self.path.read_text(encoding="utf-8")
        except OSError as e:
            raise StorageError(f"Could not read {self.path}: {e}") from e

        # A corrupted store reads as empty until the next save replaces it.
        try:
            data = json.loads(raw)
            if not isinstance(data, list):
                raise ValueError(f"expected a JSON array, got {type(data).__name__}")
        except ValueError as e:
            logger.error("Could not parse %s. Using empty list. (%s)", self.path, e)
            self._unreadable = []
            return []

        tasks: list[Task] = []
        unreadable: list = []
        for item in data:
            try:
                tasks.append(Task.from_dict(item))
            except ValueError as e:
                logger.warning("Skipping unreadable record in %s: %s", self.path, e)
                unreadable.append(item)
        self._unreadable = unreadable
        return tasks

    def save(self, tasks: list[Task]) -> None:
        records = [t.to_dict() for t in tasks] + self._unreadable
        payload = json.dumps(records, indent=2, ensure_ascii=False)
        self._write_text(payload)

    def reserved_ids(self) -> set[int]:
        ids = set()
        for item in self._unreadable:
            if isinstance(item, dict):
                task_id = as_int_id(item.get("id"))
                if task_id is not None:
                    ids.add(task_id)
        return ids

    def _write_text(self, text: str) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(text, encoding="utf-8")
        except OSError as e:
            raise StorageError(f"Could not write {self.path}: {e}") from e
