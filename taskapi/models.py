"""
Task API Models
================
The persisted Task record plus the pydantic bodies accepted by the
create and update routes.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from pydantic import BaseModel, StrictStr

CORE_FIELDS = ("id", "title", "completed")


# ─────────────────────────────────────────────────────────────
#  Task Record
# ─────────────────────────────────────────────────────────────

@dataclass
class Task:
    """A single entry of the tasks collection.

    Only `completed` changes after creation; `id` and `title` are fixed.
    Keys the service doesn't know about ride along in `extra` so a
    load/save cycle leaves them untouched.
    """

    id: int
    title: str
    completed: bool = False
    extra: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict:
        """Serialize to the on-disk / on-wire shape."""
        data = {"id": self.id, "title": self.title, "completed": self.completed}
        for key, value in self.extra.items():
            data.setdefault(key, value)
        return data

    @classmethod
    def from_dict(cls, data: dict) -> Task:
        """Deserialize a stored record.

        Older records may carry `description` instead of `title`; those
        are written back with `title`. Integral floats (`2.0`) are
        accepted as ids.

        Raises:
            ValueError: If the record has no integer id or no text label.
        """
        if not isinstance(data, dict):
            raise ValueError(f"Task record must be an object, got {type(data).__name__}")

        task_id = as_int_id(data.get("id"))
        if task_id is None:
            raise ValueError(f"Task record has invalid id: {data.get('id')!r}")

        label_key = "title" if "title" in data else "description"
        title = data.get(label_key)
        if not isinstance(title, str):
            raise ValueError(f"Task {task_id} has no title")

        completed = data.get("completed", False)
        extra = {k: v for k, v in data.items() if k not in CORE_FIELDS and k != label_key}

        return cls(
            id=task_id,
            title=title,
            completed=completed if isinstance(completed, bool) else False,
            extra=extra,
        )


def as_int_id(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return None


# ─────────────────────────────────────────────────────────────
#  Request Bodies
# ─────────────────────────────────────────────────────────────

class CreateTaskRequest(BaseModel):
    title: Optional[StrictStr] = None
    description: Any = None

    @property
    def label(self) -> str:
        """The trimmed task text; `title` wins over `description`."""
        if self.title is not None:
            return self.title.strip()
        if isinstance(self.description, str):
            return self.description.strip()
        return ""


class UpdateTaskRequest(BaseModel):
    completed: Any = None

    @property
    def resolved_completed(self) -> bool:
        """Use the client's flag only when it is a real boolean."""
        if isinstance(self.completed, bool):
            return self.completed
        return True
