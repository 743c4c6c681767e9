
from pydantic import ConfigDict
from pydantic_settings import BaseSettings


class ApiSettings(BaseSettings):
    APP_NAME: str = "savesense-tasks"
    APP_VERSION: str = "0.1.0"
    LOG_LEVEL: str = "INFO"
    USER_TASKS_DEFAULT_LIMIT: int = 10
    USER_TASKS_MAX_LIMIT: int = 100

    model_config = ConfigDict(env_file=".env", extra="ignore")


def get_api_settings() -> ApiSettings:
    return ApiSettings() # type: ignore[call-arg]
