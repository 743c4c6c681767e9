from pydantic import ConfigDict
from pydantic_settings import BaseSettings


class AnalysisSettings(BaseSettings):
    """Configuration for the spending analysis provider."""
    GEMINI_API_KEY: str | None = None
    GEMINI_MODEL: str = "gemini-1.5-flash"
    GEMINI_BASE_URL: str = "https://generativelanguage.googleapis.com/v1beta"
    GEMINI_TIMEOUT_SECONDS: float = 60.0

    model_config = ConfigDict(env_file=".env", extra="ignore")


def get_analysis_settings() -> AnalysisSettings:
    return AnalysisSettings()
