"""
FastAPI REST API for the task list.

PROMPT> python -m tasklist_api.api

PROMPT> uvicorn tasklist_api.api:app --port 8080
"""
import logging
from pathlib import Path
from typing import List, Optional

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse
from fastapi.staticfiles import StaticFiles
from starlette.types import ASGIApp, Receive, Scope, Send

from tasklist.task.task_catalog import TaskCatalog, LookupStatus
from tasklist.utils.tasklist_config import TasklistConfig
from tasklist_api.models import TaskResponse, HealthResponse

logger = logging.getLogger(__name__)

API_VERSION = "1.0.0"
TASKS_API_PREFIX = "/api/tasks"
INDEX_FILENAME = "index.html"


class PathPrefixCORSMiddleware(CORSMiddleware):
    """CORSMiddleware that only applies to requests below `path_prefix`."""

    def __init__(self, app: ASGIApp, path_prefix: str, **kwargs) -> None:
        super().__init__(app, **kwargs)
        self.path_prefix = path_prefix

    def _applies_to(self, path: str) -> bool:
        return path == self.path_prefix or path.startswith(self.path_prefix + "/")

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] == "http" and not self._applies_to(scope["path"]):
            await self.app(scope, receive, send)
            return
        await super().__call__(scope, receive, send)


def create_app(
    catalog: TaskCatalog,
    static_dir: Path,
    cors_allow_origins: Optional[List[str]] = None,
) -> FastAPI:
    """Build the application around an already constructed catalog."""
    app = FastAPI(
        title="Task List API",
        description="REST API serving tasks stored as text files",
        version=API_VERSION,
    )

    if cors_allow_origins is None:
        cors_allow_origins = ["*"]
    app.add_middleware(
        PathPrefixCORSMiddleware,
        path_prefix=TASKS_API_PREFIX,
        allow_origins=cors_allow_origins,
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    index_path = static_dir / INDEX_FILENAME
    logger.info(f"Serving tasks from: {str(catalog.tasks_dir)!r}")

    @app.get("/health", response_model=HealthResponse)
    def health_check():
        """Health check endpoint"""
        result = catalog.list_tasks()
        return HealthResponse(
            status="healthy" if result.ok else "degraded",
            version=API_VERSION,
            tasks_dir=str(catalog.tasks_dir),
            task_count=len(result.tasks) if result.ok else None,
        )

    @app.get(TASKS_API_PREFIX, response_model=List[TaskResponse])
    def get_all_tasks():
        """List every task in the tasks directory"""
        result = catalog.list_tasks()
        if not result.ok:
            logger.error(f"Failed to list tasks: {result.error}")
            raise HTTPException(status_code=500)
        return [TaskResponse.from_task_item(task) for task in result.tasks]

    # Registered before the {task_id} route, so "search" is not taken for an id.
    @app.get(TASKS_API_PREFIX + "/search", response_model=List[TaskResponse])
    def search_tasks(title: Optional[str] = None, content: Optional[str] = None):
        """Search is not supported, the result is always empty"""
        logger.debug(f"search_tasks. title={title!r} content={content!r}")
        return []

    @app.get(TASKS_API_PREFIX + "/{task_id}", response_model=TaskResponse)
    def get_task(task_id: str):
        """Get a single task by its id"""
        result = catalog.lookup(task_id)
        if result.status == LookupStatus.IO_ERROR:
            logger.error(f"Failed to get task {task_id!r}: {result.error}")
            raise HTTPException(status_code=500)
        if result.status == LookupStatus.NOT_FOUND:
            raise HTTPException(status_code=404, detail="Task not found")
        return TaskResponse.from_task_item(result.task)

    def index_page():
        if not index_path.is_file():
            raise HTTPException(status_code=404, detail="Front end not found")
        return FileResponse(index_path, media_type="text/html")

    def index_subpage(page_path: str):
        return index_page()

    # The front end does its own routing below /tasks, so all of these serve the same page.
    app.add_api_route("/", index_page, methods=["GET"], include_in_schema=False)
    app.add_api_route("/tasks", index_page, methods=["GET"], include_in_schema=False)
    app.add_api_route("/tasks/{page_path:path}", index_subpage, methods=["GET"], include_in_schema=False)

    # Mount the front end assets after all other routes are registered.
    if static_dir.is_dir():
        app.mount("/", StaticFiles(directory=str(static_dir)), name="static")
        logger.info(f"Serving static UI from: {str(static_dir)!r}")
    else:
        logger.warning(f"Static UI directory not found: {str(static_dir)!r}")

    return app


config = TasklistConfig.load()
logging.basicConfig(
    level=config.log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler()],
)

app = create_app(
    catalog=TaskCatalog(config.tasks_dir),
    static_dir=config.static_dir,
    cors_allow_origins=config.cors_allow_origins,
)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=config.host, port=config.port, reload=False)
