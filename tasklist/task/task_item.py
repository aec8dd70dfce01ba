"""
A task is a read-only projection of one text file in the tasks directory.

The record is rebuilt from the file every time it's requested, nothing is cached.
"""
from dataclasses import dataclass, asdict
from datetime import datetime
from pathlib import Path
import logging
import os
import re

logger = logging.getLogger(__name__)

TASK_FILE_SUFFIX = ".txt"
CREATED_AT_FORMAT = "%Y-%m-%d %H:%M"
CREATED_AT_UNKNOWN = "Unknown"

_NON_ID_CHARS = re.compile(r"[^a-z0-9]")
_TITLE_SEPARATORS = re.compile(r"[-_]")


def task_id_from_filename(file_name: str) -> str:
    """
    Derive the lookup id from a filename.

    "Buy-Milk.txt" -> "buy-milk"
    "Report (Q3).txt" -> "report--q3-"
    """
    stem = file_name.lower().replace(TASK_FILE_SUFFIX, "")
    return _NON_ID_CHARS.sub("-", stem)


def title_from_filename(file_name: str) -> str:
    """
    Derive a human readable title from a filename. Case and other punctuation are kept.

    "Buy-Milk.txt" -> "Buy Milk"
    """
    stem = file_name.replace(TASK_FILE_SUFFIX, "")
    return _TITLE_SEPARATORS.sub(" ", stem)


def read_task_content(path: Path) -> str:
    """
    Read the file and join its lines with a single newline.
    Line breaks are normalized, and the final line break is not kept.

    Raises OSError if the file cannot be read.
    """
    text = path.read_text(encoding="utf-8", errors="replace")
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return "\n".join(lines)


def modified_time_string(path: Path) -> str:
    """Last modification time in local time, or "Unknown" if it cannot be determined."""
    try:
        mtime = os.path.getmtime(path)
        return datetime.fromtimestamp(mtime).strftime(CREATED_AT_FORMAT)
    except (OSError, ValueError, OverflowError) as e:
        logger.warning(f"Unable to read modification time of {path!r}: {e}")
        return CREATED_AT_UNKNOWN


@dataclass(frozen=True)
class TaskItem:
    id: str
    title: str
    content: str
    created_at: str
    file_name: str

    @classmethod
    def from_path(cls, path: Path) -> "TaskItem":
        file_name = path.name
        return cls(
            id=task_id_from_filename(file_name),
            title=title_from_filename(file_name),
            content=read_task_content(path),
            created_at=modified_time_string(path),
            file_name=file_name,
        )

    def to_dict(self) -> dict:
        return asdict(self)
