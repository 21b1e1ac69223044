from __future__ import annotations

import json
import os
from functools import lru_cache
from pathlib import Path
from typing import Any

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


# Load project-root .env early so both pydantic-settings and any direct os.getenv access
# see consistent values, even if the process CWD is not the repo root.
_ENV_PATH = Path(__file__).resolve().parents[1] / ".env"
_IN_TEST = (os.getenv("ENVIRONMENT") or "").lower() == "test" or bool(os.getenv("PYTEST_CURRENT_TEST"))
if _ENV_PATH.exists() and not _IN_TEST:
    load_dotenv(dotenv_path=_ENV_PATH, override=True)


def _parse_origins(raw: Any) -> list[str]:
    if raw is None:
        return []

    items: list[Any]
    if isinstance(raw, (list, tuple, set)):
        items = list(raw)
    elif isinstance(raw, str):
        s = raw.strip()
        if not s:
            return []

        # Support JSON array string or comma-separated string.
        if s.startswith("["):
            try:
                parsed = json.loads(s)
                items = parsed if isinstance(parsed, list) else [parsed]
            except ValueError:
                items = [p.strip() for p in s.split(",")]
        else:
            items = [p.strip() for p in s.split(",")]
    else:
        items = [raw]

    return [str(item).strip().rstrip("/") for item in items if item is not None and str(item).strip()]


class Settings(BaseSettings):
    app_name: str = Field(default="SkillPath")
    api_prefix: str = Field(default="/api")
    version: str = Field(default="0.1.0")
    environment: str = Field(default="development")
    debug: bool = Field(default=True)

    # SQLAlchemy URL for the progress store. ORM_DB_URL wins over DB_URL.
    db_url: str | None = Field(default=None, validation_alias="DB_URL")
    orm_db_url: str | None = Field(default=None, validation_alias="ORM_DB_URL")

    # "sql" persists roadmap progress in the ORM DB; "memory" keeps it per process.
    progress_storage: str = Field(default="sql", validation_alias="PROGRESS_STORAGE")

    # Remote resume-analysis service (resume parsing, scoring, careers, roadmaps).
    analysis_api_url: str = Field(default="http://localhost:4001", validation_alias="ANALYSIS_API_URL")
    analysis_api_timeout: float = Field(default=15.0, validation_alias="ANALYSIS_API_TIMEOUT")

    # Tokens are issued by the analysis service; the secret is shared with it.
    jwt_secret: str = Field(default="change-me")
    jwt_algorithm: str = Field(default="HS256")

    cors_origins: list[str] = Field(
        default_factory=lambda: ["http://localhost:3000", "http://127.0.0.1:3000"],
        validation_alias="CORS_ORIGINS",
    )

    @field_validator("cors_origins", mode="before")
    @classmethod
    def _validate_cors_origins(cls, v: Any) -> list[str]:
        return _parse_origins(v)

    @field_validator("progress_storage")
    @classmethod
    def _validate_progress_storage(cls, v: str) -> str:
        value = (v or "").strip().lower()
        if value not in {"sql", "memory"}:
            raise ValueError("PROGRESS_STORAGE must be 'sql' or 'memory'")
        return value

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()


def build_sqlalchemy_db_url(settings: Settings) -> str:
    if settings.orm_db_url:
        return settings.orm_db_url
    if settings.db_url:
        return settings.db_url
    return "sqlite:///./dev.db"
