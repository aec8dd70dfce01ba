"""
Settings for the task list service.

Values are resolved in this order:
1. Environment variables.
2. The ".env" file in the directory specified by TASKLIST_CONFIG_PATH, or in the current working directory.
3. Defaults. The tasks and the front end that ship with the package.

PROMPT> python -m tasklist.utils.tasklist_config

PROMPT> TASKLIST_TASKS_DIR=/srv/tasks TASKLIST_PORT=9000 python -m tasklist.utils.tasklist_config
"""
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Dict, List, Mapping, Optional
import importlib.resources
import logging
import os
from dotenv import dotenv_values
from tasklist.task.task_catalog import TaskCatalog

logger = logging.getLogger(__name__)


class ConfigKeyEnum(str, Enum):
    TASKLIST_CONFIG_PATH = "TASKLIST_CONFIG_PATH"
    TASKLIST_TASKS_DIR = "TASKLIST_TASKS_DIR"
    TASKLIST_STATIC_DIR = "TASKLIST_STATIC_DIR"
    TASKLIST_HOST = "TASKLIST_HOST"
    TASKLIST_PORT = "TASKLIST_PORT"
    TASKLIST_LOG_LEVEL = "TASKLIST_LOG_LEVEL"
    TASKLIST_CORS_ORIGINS = "TASKLIST_CORS_ORIGINS"


DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 8080
DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_CORS_ORIGINS = "*"


def _path_to_default_static_dir() -> Path:
    """Return the path to the front end that ships with the tasklist_api package."""
    resource_path = 'tasklist_api'
    try:
        dir_traversable = importlib.resources.files(resource_path)
        return Path(os.fspath(dir_traversable.joinpath('static')))
    except Exception as e:
        logger.error(f"_path_to_default_static_dir. resource_path: {resource_path!r}. Error finding resource: {e}. Using the folder relative to this file.")
        return Path(__file__).parent.parent.parent / 'tasklist_api' / 'static'


def _load_settings(environ: Mapping[str, str], dotenv_path: Optional[Path]) -> Dict[str, str]:
    """Merge the .env file and the environment. Environment variables win."""
    settings: Dict[str, str] = {}
    if dotenv_path is not None and dotenv_path.is_file():
        logger.debug(f"Loading .env file from: {str(dotenv_path)!r}")
        for key, value in dotenv_values(dotenv_path=dotenv_path).items():
            if value:
                settings[key] = value
    for key in ConfigKeyEnum:
        value = environ.get(key.value)
        if value is not None and value.strip() != "":
            settings[key.value] = value
    return settings


def _int_setting(settings: Mapping[str, str], name: str, default: int) -> int:
    value = settings.get(name)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError as exc:
        raise ValueError(f"Setting {name} must be an integer, got {value!r}") from exc


def _dir_setting(settings: Mapping[str, str], name: str, default: Path) -> Path:
    value = settings.get(name)
    if value is None:
        return default
    path = Path(value).expanduser()
    if not path.is_absolute():
        logger.warning(f"{name} is a relative path: {value!r}. Resolving it against the current working directory.")
        path = path.resolve()
    return path


@dataclass(frozen=True)
class TasklistConfig:
    """
    Attributes:
        tasks_dir: Directory with the task text files.
        static_dir: Directory with the front end, index.html and its assets.
        host: Bind address for the development server.
        port: Bind port for the development server.
        log_level: Name of the root log level, like "INFO" or "DEBUG".
        cors_allow_origins: Origins allowed to call the /api/tasks endpoints.
        dotenv_path: The .env file that was consulted, whether it exists or not.
    """
    tasks_dir: Path
    static_dir: Path
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    log_level: str = DEFAULT_LOG_LEVEL
    cors_allow_origins: List[str] = field(default_factory=lambda: [DEFAULT_CORS_ORIGINS])
    dotenv_path: Optional[Path] = None

    @classmethod
    def load(cls, environ: Optional[Mapping[str, str]] = None) -> "TasklistConfig":
        if environ is None:
            environ = os.environ

        config_dir = environ.get(ConfigKeyEnum.TASKLIST_CONFIG_PATH.value)
        if config_dir:
            dotenv_path = Path(config_dir).expanduser() / ".env"
        else:
            dotenv_path = Path.cwd() / ".env"

        settings = _load_settings(environ, dotenv_path)

        origins_raw = settings.get(ConfigKeyEnum.TASKLIST_CORS_ORIGINS.value, DEFAULT_CORS_ORIGINS)
        cors_allow_origins = [origin.strip() for origin in origins_raw.split(",") if origin.strip()]

        config = cls(
            tasks_dir=_dir_setting(settings, ConfigKeyEnum.TASKLIST_TASKS_DIR.value, TaskCatalog.path_to_default_tasks_dir()),
            static_dir=_dir_setting(settings, ConfigKeyEnum.TASKLIST_STATIC_DIR.value, _path_to_default_static_dir()),
            host=settings.get(ConfigKeyEnum.TASKLIST_HOST.value, DEFAULT_HOST),
            port=_int_setting(settings, ConfigKeyEnum.TASKLIST_PORT.value, DEFAULT_PORT),
            log_level=settings.get(ConfigKeyEnum.TASKLIST_LOG_LEVEL.value, DEFAULT_LOG_LEVEL).upper(),
            cors_allow_origins=cors_allow_origins or [DEFAULT_CORS_ORIGINS],
            dotenv_path=dotenv_path,
        )
        logger.debug(f"TasklistConfig.load. {config!r}")
        return config


if __name__ == "__main__":
    logging.basicConfig(level=logging.DEBUG)
    config = TasklistConfig.load()
    print(config)
