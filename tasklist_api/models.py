"""
Pydantic models for the API responses.
"""
from pydantic import BaseModel, Field, ConfigDict
from typing import Optional

from tasklist.task.task_item import TaskItem


class TaskResponse(BaseModel):
    """A task, as seen by the front end"""
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., description="Identifier derived from the filename")
    title: str = Field(..., description="Human readable title derived from the filename")
    content: str = Field(..., description="Full text of the task file")
    created_at: str = Field(..., alias="createdAt", description="Last modification time, 'YYYY-MM-DD HH:MM' local time, or 'Unknown'")
    file_name: str = Field(..., alias="fileName", description="Original filename")

    @classmethod
    def from_task_item(cls, task: TaskItem) -> "TaskResponse":
        return cls(
            id=task.id,
            title=task.title,
            content=task.content,
            created_at=task.created_at,
            file_name=task.file_name,
        )


class HealthResponse(BaseModel):
    """API health check response"""
    status: str = Field("healthy", description="'healthy', or 'degraded' when the tasks directory cannot be read")
    version: str = Field(..., description="API version")
    tasks_dir: str = Field(..., description="Directory the tasks are read from")
    task_count: Optional[int] = Field(None, description="Number of tasks, None when the tasks directory cannot be read")
