"""
Application Configuration

Pydantic settings for the pipeline compiler service: application metadata,
HTTP surface, logging and project storage. Values load from the environment
and an optional ``.env`` file; ``FASTAPI_ENV`` picks the environment profile.
"""

import os
from functools import lru_cache
from pathlib import Path
from typing import List, Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from backend.utils.logging_utils import setup_universal_logging


class Settings(BaseSettings):
    """Application settings with automatic environment variable loading."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="allow",
    )

    # === CORE APPLICATION METADATA ===
    APP_NAME: str = "Pipeline Compiler"
    APP_VERSION: str = "0.1.0"
    APP_SUMMARY: str = "Compile visual ML pipeline graphs into validated Python scripts and notebooks."
    APP_DESCRIPTION: str = (
        "Validate node/edge pipeline graphs, generate ordered Python source with hoisted imports, "
        "export Jupyter notebooks, and store pipeline projects."
    )
    DEBUG: bool = False
    TESTING: bool = False

    # Server configuration
    HOST: str = "127.0.0.1"
    PORT: int = 8000
    WORKERS: int = 1

    # CORS and security
    CORS_ORIGINS: List[str] = ["http://localhost:3000", "http://localhost:5173"]
    ALLOWED_HOSTS: List[str] = ["localhost", "127.0.0.1"]
    API_DOCS_ENABLED: bool | None = None
    API_DOCS_URL: str = "/docs"
    API_REDOC_URL: str = "/redoc"
    API_OPENAPI_URL: str = "/openapi.json"

    # === LOGGING ===
    LOG_LEVEL: str = "INFO"
    LOG_FILE: str = "logs/pipeline_compiler.log"
    LOG_ROTATION_TYPE: str = "size"
    LOG_ROTATION_WHEN: str | None = None
    LOG_ROTATION_INTERVAL: int = 1
    LOG_MAX_SIZE: int = 10 * 1024 * 1024  # 10MB
    LOG_BACKUP_COUNT: int = 5
    CONSOLE_LOG_LEVEL: str = "WARNING"

    # === PROJECT STORAGE ===
    PROJECT_STORAGE_TYPE: Literal["memory", "local"] = "local"
    PROJECT_STORAGE_PATH: str = "data/projects"
    DEFAULT_PROJECT_NAME: str = "ML Pipeline"
    DEFAULT_USER_ID: str = "local"

    @field_validator("CORS_ORIGINS", mode="before")
    @classmethod
    def parse_cors_origins(cls, v):
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",")]
        return v

    @field_validator("ALLOWED_HOSTS", mode="before")
    @classmethod
    def parse_allowed_hosts(cls, v):
        if isinstance(v, str):
            return [host.strip() for host in v.split(",")]
        return v

    @field_validator("LOG_LEVEL", "CONSOLE_LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unsupported log level: {v}")
        return level

    def create_directories(self) -> None:
        """Create the directories the configured storage and logging need."""
        directories = [Path(self.LOG_FILE).parent]
        if self.PROJECT_STORAGE_TYPE == "local":
            directories.append(Path(self.PROJECT_STORAGE_PATH))
        for directory in directories:
            directory.mkdir(parents=True, exist_ok=True)

    def setup_logging(self) -> None:
        """Initialize application logging."""
        setup_universal_logging(
            log_file=self.LOG_FILE,
            log_level=self.LOG_LEVEL,
            rotation_type=self.LOG_ROTATION_TYPE,
            rotation_when=self.LOG_ROTATION_WHEN,
            rotation_interval=self.LOG_ROTATION_INTERVAL,
            max_bytes=self.LOG_MAX_SIZE,
            backup_count=self.LOG_BACKUP_COUNT,
            console_log_level=self.CONSOLE_LOG_LEVEL,
        )

    @property
    def docs_enabled(self) -> bool:
        if self.API_DOCS_ENABLED is None:
            return self.DEBUG
        return self.API_DOCS_ENABLED


class DevelopmentSettings(Settings):
    """Development environment settings."""
    DEBUG: bool = True
    LOG_LEVEL: str = "DEBUG"
    HOST: str = "0.0.0.0"
    CORS_ORIGINS: List[str] = ["*"]


class ProductionSettings(Settings):
    """Production environment settings."""
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    API_DOCS_ENABLED: bool | None = False


class TestingSettings(Settings):
    """Testing environment settings."""
    TESTING: bool = True
    DEBUG: bool = True
    LOG_LEVEL: str = "DEBUG"
    LOG_FILE: str = "logs/test_pipeline_compiler.log"
    PROJECT_STORAGE_TYPE: Literal["memory", "local"] = "memory"
    ALLOWED_HOSTS: List[str] = ["localhost", "127.0.0.1", "testserver"]


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings based on environment.
    Uses lru_cache to avoid recreating settings on every call.
    """
    env = os.getenv("FASTAPI_ENV", "development").lower()

    settings: Settings
    if env == "production":
        settings = ProductionSettings()
    elif env == "testing":
        settings = TestingSettings()
    else:
        settings = DevelopmentSettings()

    settings.create_directories()
    settings.setup_logging()
    return settings
