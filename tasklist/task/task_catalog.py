"""
Catalog of the tasks stored as text files in a single directory.

PROMPT> python -m tasklist.task.task_catalog

PROMPT> python -m tasklist.task.task_catalog /path/to/tasks
"""
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Optional
import importlib.resources
import logging
import os
import sys

from tasklist.task.task_item import TaskItem, TASK_FILE_SUFFIX

logger = logging.getLogger(__name__)


class TaskCatalogError(Exception):
    """Raised when the tasks directory or one of its files cannot be read."""
    pass


class LookupStatus(str, Enum):
    FOUND = "found"
    NOT_FOUND = "not_found"
    IO_ERROR = "io_error"


@dataclass(frozen=True)
class TaskListResult:
    tasks: List[TaskItem] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class TaskLookupResult:
    status: LookupStatus
    task: Optional[TaskItem] = None
    error: Optional[str] = None


class TaskCatalog:
    """
    Read-only view of the tasks directory.

    Holds nothing but the directory path. Every call rescans the directory,
    so the result always reflects the files on disk.
    """
    def __init__(self, tasks_dir: Path):
        self._tasks_dir = Path(tasks_dir)

    @property
    def tasks_dir(self) -> Path:
        return self._tasks_dir

    def _task_paths(self) -> List[Path]:
        paths = []
        with os.scandir(self._tasks_dir) as entries:
            for entry in entries:
                if not entry.name.endswith(TASK_FILE_SUFFIX):
                    continue
                if not entry.is_file():
                    continue
                paths.append(Path(entry.path))
        # Sorted so that the first match for a colliding id is stable.
        paths.sort(key=lambda path: path.name)
        return paths

    def all(self) -> List[TaskItem]:
        """
        Return one TaskItem per text file in the tasks directory.

        Raises TaskCatalogError if the directory cannot be listed or a file cannot be read.
        """
        try:
            paths = self._task_paths()
        except OSError as e:
            logger.error(f"TaskCatalog.all. Unable to list tasks directory {str(self._tasks_dir)!r}: {e}")
            raise TaskCatalogError(f"Unable to list tasks directory {str(self._tasks_dir)!r}") from e

        logger.debug(f"TaskCatalog.all. found {len(paths)} task files in {str(self._tasks_dir)!r}")
        tasks = []
        for path in paths:
            try:
                tasks.append(TaskItem.from_path(path))
            except OSError as e:
                logger.error(f"TaskCatalog.all. Unable to read task file {str(path)!r}: {e}")
                raise TaskCatalogError(f"Unable to read task file {path.name!r}") from e
        return tasks

    def find(self, task_id: str) -> Optional[TaskItem]:
        """
        Retrieve the first TaskItem whose id matches exactly. Returns None if not found.

        Different filenames may normalize to the same id, in which case the first one wins.
        """
        for task in self.all():
            if task.id == task_id:
                return task
        return None

    def list_tasks(self) -> TaskListResult:
        try:
            return TaskListResult(tasks=self.all())
        except TaskCatalogError as e:
            return TaskListResult(error=str(e))

    def lookup(self, task_id: str) -> TaskLookupResult:
        try:
            task = self.find(task_id)
        except TaskCatalogError as e:
            return TaskLookupResult(status=LookupStatus.IO_ERROR, error=str(e))
        if task is None:
            return TaskLookupResult(status=LookupStatus.NOT_FOUND)
        return TaskLookupResult(status=LookupStatus.FOUND, task=task)

    @classmethod
    def path_to_default_tasks_dir(cls) -> Path:
        """Return the path to the task files that ship with the package."""
        resource_path = 'tasklist.task'
        try:
            dir_traversable = importlib.resources.files(resource_path)
            dirpath = Path(os.fspath(dir_traversable.joinpath('data')))
        except Exception as e:
            logger.error(f"TaskCatalog.path_to_default_tasks_dir. resource_path: {resource_path!r}. Error finding resource: {e}. Using the folder next to this file.")
            dirpath = Path(__file__).parent / 'data'
        return dirpath

    def __repr__(self):
        return f"TaskCatalog(tasks_dir={str(self._tasks_dir)!r})"


if __name__ == "__main__":
    logging.basicConfig(level=logging.DEBUG)
    if len(sys.argv) > 1:
        tasks_dir = Path(sys.argv[1])
    else:
        tasks_dir = TaskCatalog.path_to_default_tasks_dir()
    catalog = TaskCatalog(tasks_dir)
    tasks = catalog.all()
    for task in tasks:
        print(f"{task.id!r} {task.title!r} created_at={task.created_at!r} file_name={task.file_name!r}")
    print(f"TaskCatalog. loaded {len(tasks)} tasks from {str(catalog.tasks_dir)!r}")
