# Settings management (reads env vars/.env)
# empmovies/core/config.py

import logging
from functools import lru_cache
from typing import Annotated, List, Optional, Union

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """
    Application configuration settings loaded from environment variables or .env file.
    """
    # --- Project Info ---
    PROJECT_NAME: str = Field("Employees & Movies API", validation_alias="PROJECT_NAME")
    VERSION: str = Field("1.0.0", validation_alias="APP_VERSION")
    ENVIRONMENT: str = Field("development", validation_alias="ENVIRONMENT")

    # --- Server ---
    PORT: int = Field(8000, validation_alias="PORT")

    # --- Logging ---
    LOG_LEVEL: str = Field("INFO", validation_alias="LOG_LEVEL")

    # --- Employees store (always configured) ---
    # SecretStr keeps credentials embedded in the URI out of logs
    MONGODB_URI_EMPLOYEES: SecretStr = Field(
        SecretStr("mongodb://localhost:27017/employees"),
        validation_alias="MONGODB_URI_EMPLOYEES",
    )
    EMPLOYEES_DB_NAME: Optional[str] = Field(
        None,
        validation_alias="EMPLOYEES_DB_NAME",
        description="Database name used when the employees URI does not name one.",
    )

    # --- Movies store (optional: unset disables every movie route with 503) ---
    MONGODB_URI_MOVIES: Optional[SecretStr] = Field(None, validation_alias="MONGODB_URI_MOVIES")
    MOVIES_DB_NAME: Optional[str] = Field(
        None,
        validation_alias="MOVIES_DB_NAME",
        description="Database name used when the movies URI does not name one.",
    )
    MOVIES_COLLECTION: str = Field("movies", validation_alias="MOVIES_COLLECTION")

    MONGO_SERVER_SELECTION_TIMEOUT_MS: int = Field(
        default=5000,
        validation_alias="MONGO_SERVER_SELECTION_TIMEOUT_MS",
        description="How long Motor waits for a reachable server before failing an operation.",
    )

    # --- Result caps ---
    MOVIES_API_LIST_LIMIT: int = Field(200, validation_alias="MOVIES_API_LIST_LIMIT")
    MOVIES_UI_LIST_LIMIT: int = Field(50, validation_alias="MOVIES_UI_LIST_LIMIT")

    # --- CORS ---
    # Expects a comma-separated string in env var like "http://localhost:3000,https://*.example.com"
    BACKEND_CORS_ORIGINS: Annotated[List[str], NoDecode] = Field(
        default=["*"],
        validation_alias="BACKEND_CORS_ORIGINS"
    )

    @field_validator("BACKEND_CORS_ORIGINS", mode='before')
    @classmethod
    def assemble_cors_origins(cls, v: Union[str, List[str]]) -> Union[List[str], str]:
        if isinstance(v, str) and not v.startswith("["):
            return [i.strip() for i in v.split(",") if i.strip()]
        elif isinstance(v, list):
            return v
        raise ValueError(f"Invalid BACKEND_CORS_ORIGINS format: {v}")

    @field_validator("MONGODB_URI_MOVIES", mode='before')
    @classmethod
    def blank_movies_uri_is_unset(cls, v):
        # MONGODB_URI_MOVIES= in a .env file means "not configured"
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @property
    def movies_configured(self) -> bool:
        return self.MONGODB_URI_MOVIES is not None

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT.lower() == "production"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding='utf-8',
        case_sensitive=False,
        extra='ignore'
    )


@lru_cache()
def get_settings() -> Settings:
    """Returns the application settings instance."""
    logger.info("Attempting to load application settings...")
    try:
        settings_instance = Settings()
        logger.info(f"Settings loaded successfully for Project: {settings_instance.PROJECT_NAME}")
        logger.info(f"Environment: {settings_instance.ENVIRONMENT}, Log Level: {settings_instance.LOG_LEVEL}")
        logger.info(f"Movies collection: {settings_instance.MOVIES_COLLECTION}")
        logger.info(f"Movies store configured: {settings_instance.movies_configured}")
        return settings_instance
    except Exception as e:
        logger.critical(f"CRITICAL ERROR: Failed to load application settings: {e}", exc_info=True)
        raise RuntimeError(f"Could not load settings: {e}")
