"""
Task API Errors
================
Every failure a request can hit maps to one of these, and each carries
the HTTP status it is reported with.
"""

from __future__ import annotations


class TaskAPIError(Exception):
    """Base error. Rendered to clients as {"error": message}."""

    status_code: int = 500

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code

    def to_dict(self) -> dict:
        return {"error": self.message}


class InvalidRequestError(TaskAPIError):
    """Malformed JSON body or missing/empty title."""

    status_code = 400


class TaskNotFoundError(TaskAPIError):
    """No task with the requested id."""

    status_code = 404

    def __init__(self, task_id: int):
        super().__init__("Task not found.")
        self.task_id = task_id


class StorageError(TaskAPIError):
    """The backing store could not be read or written."""

    status_code = 500
