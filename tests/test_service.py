"""
Task API Test Suite — Task Service
===================================
Tests for id assignment, completion, deletion and the write lock.
Uses the in-memory backend unless a test needs a real file.

Usage:
    python -m pytest tests/test_service.py -v
"""
import sys
import os
import tempfile
import threading
import unittest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from taskapi.errors import InvalidRequestError, TaskNotFoundError
from taskapi.models import Task
from taskapi.service import TaskService
from taskapi.storage.json_storage import JsonFileStorage
from taskapi.storage.memory_storage import InMemoryStorage


class TestCreate(unittest.TestCase):

    def setUp(self):
        self.storage = InMemoryStorage()
        self.service = TaskService(self.storage)

    def test_first_id_is_one(self):
        task = self.service.create_task("buy milk")
        self.assertEqual(task, Task(id=1, title="buy milk", completed=False))

    def test_sequential_ids(self):
        ids = [self.service.create_task(f"task {i}").id for i in range(5)]
        self.assertEqual(ids, [1, 2, 3, 4, 5])

    def test_title_trimmed(self):
        self.assertEqual(self.service.create_task("  spaced  ").title, "spaced")

    def test_empty_title_rejected(self):
        for title in ("", "   ", None):
            with self.assertRaises(InvalidRequestError):
                self.service.create_task(title)
        self.assertEqual(self.storage.save_count, 0)
        self.assertEqual(self.service.list_tasks(), [])

    def test_insertion_order_kept(self):
        self.service.create_task("a")
        self.service.create_task("b")
        self.assertEqual([t.title for t in self.service.list_tasks()], ["a", "b"])


class TestNextId(unittest.TestCase):

    def test_empty(self):
        self.assertEqual(TaskService.next_id([]), 1)

    def test_gaps(self):
        self.assertEqual(TaskService.next_id([Task(2, "b"), Task(7, "g"), Task(4, "d")]), 8)

    def test_reserved_ids_counted(self):
        self.assertEqual(TaskService.next_id([Task(1, "a")], {9}), 10)
        self.assertEqual(TaskService.next_id([], [3]), 4)

    def test_after_delete_uses_remaining_max(self):
        service = TaskService(InMemoryStorage())
        for title in ("a", "b", "c"):
            service.create_task(title)
        service.delete_task(2)
        self.assertEqual(service.create_task("d").id, 4)
        service.delete_task(4)
        self.assertEqual(service.create_task("e").id, 4)
        ids = [t.id for t in service.list_tasks()]
        self.assertEqual(len(ids), len(set(ids)))


class TestComplete(unittest.TestCase):

    def setUp(self):
        self.storage = InMemoryStorage([Task(1, "buy milk"), Task(2, "walk dog")])
        self.service = TaskService(self.storage)

    def test_marks_completed(self):
        task = self.service.complete_task(1)
        self.assertEqual(task, Task(1, "buy milk", True))
        self.assertTrue(self.storage.load()[0].completed)

    def test_explicit_false(self):
        self.service.complete_task(2)
        self.assertFalse(self.service.complete_task(2, completed=False).completed)

    def test_idempotent(self):
        first = self.service.complete_task(1)
        second = self.service.complete_task(1)
        self.assertEqual(first, second)

    def test_unknown_id(self):
        with self.assertRaises(TaskNotFoundError) as ctx:
            self.service.complete_task(99)
        self.assertEqual(ctx.exception.task_id, 99)
        self.assertEqual(self.storage.save_count, 0)


class TestGet(unittest.TestCase):

    def test_found(self):
        service = TaskService(InMemoryStorage([Task(1, "a"), Task(2, "b")]))
        self.assertEqual(service.get_task(2), Task(2, "b"))

    def test_unknown_id(self):
        service = TaskService(InMemoryStorage())
        with self.assertRaises(TaskNotFoundError):
            service.get_task(1)


class TestDelete(unittest.TestCase):

    def setUp(self):
        self.storage = InMemoryStorage([Task(1, "a"), Task(2, "b"), Task(3, "c")])
        self.service = TaskService(self.storage)

    def test_returns_removed(self):
        self.assertEqual(self.service.delete_task(2), Task(2, "b"))
        self.assertEqual([t.id for t in self.service.list_tasks()], [1, 3])

    def test_unknown_id(self):
        with self.assertRaises(TaskNotFoundError):
            self.service.delete_task(4)
        self.assertEqual(len(self.service.list_tasks()), 3)

    def test_removes_first_duplicate_only(self):
        storage = InMemoryStorage([Task(1, "first"), Task(1, "second")])
        service = TaskService(storage)
        self.assertEqual(service.delete_task(1).title, "first")
        self.assertEqual(storage.load(), [Task(1, "second")])


class TestWriteLock(unittest.TestCase):

    def test_concurrent_creates_do_not_lose_updates(self):
        with tempfile.TemporaryDirectory() as tmp:
            service = TaskService(JsonFileStorage(os.path.join(tmp, "tasks.json")))
            threads = [
                threading.Thread(target=service.create_task, args=(f"task {i}",))
                for i in range(20)
            ]
            for t in threads:
                t.start()
            for t in threads:
                t.join()

            ids = sorted(t.id for t in service.list_tasks())
            self.assertEqual(ids, list(range(1, 21)))


if __name__ == "__main__":
    unittest.main()
