from typing import Literal

from pydantic import ConfigDict
from pydantic_settings import BaseSettings


class TaskSettings(BaseSettings):
    """Selects the task store and how created tasks are dispatched."""
    STORAGE_BACKEND: Literal["memory", "sql"] = "memory"
    DISPATCH_BACKEND: Literal["local", "celery"] = "local"
    MAX_CONCURRENT_TASKS: int | None = None

    model_config = ConfigDict(env_file=".env", extra="ignore")


def get_task_settings() -> TaskSettings:
    """Return a fresh task settings instance."""
    return TaskSettings()
