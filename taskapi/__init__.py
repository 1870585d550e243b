"""
Task API — JSON-File Backed Task Service
=========================================
A small HTTP service exposing a "tasks" collection persisted as a single
JSON array on disk.

Layers:
    Models   — Task record and request bodies
    Storage  — Pluggable load/save backends (JSON file, in-memory)
    Service  — List / create / complete / delete under a write lock
    Server   — FastAPI routes, CORS, error translation
"""

__version__ = "0.1.0"

from taskapi.models import Task, CreateTaskRequest, UpdateTaskRequest
from taskapi.errors import TaskAPIError, InvalidRequestError, TaskNotFoundError, StorageError
from taskapi.service import TaskService

__all__ = [
    "Task", "CreateTaskRequest", "UpdateTaskRequest",
    "TaskAPIError", "InvalidRequestError", "TaskNotFoundError", "StorageError",
    "TaskService",
]
