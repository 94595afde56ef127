"""Configuration for the pulse-stats service."""
from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings


# ---------------------------------------------------------------------------
# Load .env from project root (one level above pulse_stats/)
# Uses Path(__file__) so it works regardless of cwd.
# ---------------------------------------------------------------------------
_PROJECT_ROOT = Path(__file__).resolve().parent.parent
_ENV_FILE = _PROJECT_ROOT / ".env"

if _ENV_FILE.exists():
    load_dotenv(_ENV_FILE, override=False)


class PulseStatsSettings(BaseSettings):
    """Settings for the pulse-stats service."""

    # Target project, fixed per deployment
    github_owner: str = Field(default="wagtail")
    github_repo: str = Field(default="wagtail")
    github_web_base: str = Field(default="https://github.com")
    github_api_base: str = Field(default="https://api.github.com")
    project_name: str = Field(
        default="Wagtail",
        description="Display name used in the HTML report"
    )

    server_host: str = Field(default="0.0.0.0")
    server_port: int = Field(default=8000)
    log_level: str = Field(default="INFO")

    class Config:
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"


@lru_cache()
def get_settings() -> PulseStatsSettings:
    """Return a cached settings instance."""
    return PulseStatsSettings()


settings = get_settings()
