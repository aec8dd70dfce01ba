from pathlib import Path
from unittest import mock
import shutil
import tempfile
import unittest
from tasklist.task.task_catalog import TaskCatalog, TaskCatalogError, LookupStatus

class TestTaskCatalog(unittest.TestCase):
    def setUp(self):
        self.test_dir = Path(tempfile.mkdtemp())

    def tearDown(self):
        shutil.rmtree(self.test_dir)

    def create_file(self, filename: str, content: str) -> Path:
        path = self.test_dir / filename
        path.write_text(content, encoding="utf-8")
        return path

    def test_all_empty_directory(self):
        catalog = TaskCatalog(self.test_dir)
        self.assertEqual(catalog.all(), [])

    def test_all_one_task_per_text_file(self):
        # Arrange
        self.create_file("Buy-Milk.txt", "Get 2% milk\n")
        self.create_file("Weekly_Review.txt", "Archive the inbox\nPlan the week\n")
        self.create_file("notes.md", "not a task")
        self.create_file("README", "not a task")
        (self.test_dir / "folder.txt").mkdir()
        catalog = TaskCatalog(self.test_dir)

        # Act
        tasks = catalog.all()

        # Assert
        self.assertEqual(len(tasks), 2)
        self.assertEqual({task.file_name for task in tasks}, {"Buy-Milk.txt", "Weekly_Review.txt"})

    def test_all_missing_directory_raises(self):
        catalog = TaskCatalog(self.test_dir / "missing")
        with self.assertRaises(TaskCatalogError) as cm:
            catalog.all()
        self.assertIsInstance(cm.exception.__cause__, OSError)

    def test_all_unreadable_file_raises(self):
        self.create_file("a.txt", "text")
        catalog = TaskCatalog(self.test_dir)
        with mock.patch.object(Path, "read_text", side_effect=PermissionError("denied")):
            with self.assertRaises(TaskCatalogError):
                catalog.all()

    def test_all_unknown_timestamp_is_recovered(self):
        self.create_file("a.txt", "text")
        catalog = TaskCatalog(self.test_dir)
        with mock.patch("tasklist.task.task_item.os.path.getmtime", side_effect=OSError("no stat")):
            tasks = catalog.all()
        self.assertEqual(len(tasks), 1)
        self.assertEqual(tasks[0].created_at, "Unknown")

    def test_find(self):
        # Arrange
        self.create_file("Buy-Milk.txt", "Get 2% milk")
        self.create_file("Fix-the-bike.txt", "Replace the rear tube")
        catalog = TaskCatalog(self.test_dir)

        # Act
        task = catalog.find("buy-milk")

        # Assert
        self.assertIsNotNone(task)
        self.assertEqual(task.title, "Buy Milk")
        self.assertEqual(task.content, "Get 2% milk")

    def test_find_is_case_sensitive(self):
        self.create_file("Buy-Milk.txt", "Get 2% milk")
        catalog = TaskCatalog(self.test_dir)
        self.assertIsNone(catalog.find("Buy-Milk"))

    def test_find_not_found(self):
        self.create_file("Buy-Milk.txt", "Get 2% milk")
        catalog = TaskCatalog(self.test_dir)
        self.assertIsNone(catalog.find("no-such-task"))

    def test_find_colliding_ids_returns_a_match(self):
        # Both normalize to "buy-milk".
        self.create_file("Buy Milk.txt", "first")
        self.create_file("buy_milk.txt", "second")
        catalog = TaskCatalog(self.test_dir)

        task = catalog.find("buy-milk")

        self.assertIsNotNone(task)
        self.assertEqual(task.id, "buy-milk")
        self.assertIn(task.file_name, {"Buy Milk.txt", "buy_milk.txt"})

    def test_list_tasks_ok(self):
        self.create_file("a.txt", "text")
        result = TaskCatalog(self.test_dir).list_tasks()
        self.assertTrue(result.ok)
        self.assertEqual(len(result.tasks), 1)

    def test_list_tasks_io_error(self):
        result = TaskCatalog(self.test_dir / "missing").list_tasks()
        self.assertFalse(result.ok)
        self.assertEqual(result.tasks, [])
        self.assertIsNotNone(result.error)

    def test_lookup_found(self):
        self.create_file("Buy-Milk.txt", "Get 2% milk")
        result = TaskCatalog(self.test_dir).lookup("buy-milk")
        self.assertEqual(result.status, LookupStatus.FOUND)
        self.assertEqual(result.task.file_name, "Buy-Milk.txt")

    def test_lookup_not_found(self):
        result = TaskCatalog(self.test_dir).lookup("buy-milk")
        self.assertEqual(result.status, LookupStatus.NOT_FOUND)
        self.assertIsNone(result.task)
        self.assertIsNone(result.error)

    def test_lookup_io_error(self):
        result = TaskCatalog(self.test_dir / "missing").lookup("buy-milk")
        self.assertEqual(result.status, LookupStatus.IO_ERROR)
        self.assertIsNone(result.task)

    def test_reflects_changes_on_disk(self):
        catalog = TaskCatalog(self.test_dir)
        self.assertEqual(len(catalog.all()), 0)
        self.create_file("a.txt", "text")
        self.assertEqual(len(catalog.all()), 1)


class TestDefaultTasksDir(unittest.TestCase):
    def test_bundled_tasks(self):
        tasks_dir = TaskCatalog.path_to_default_tasks_dir()
        self.assertTrue(tasks_dir.is_dir())
        task = TaskCatalog(tasks_dir).find("buy-milk")
        self.assertIsNotNone(task)
        self.assertEqual(task.content, "Get 2% milk")
