"""
Application configuration settings
Handles environment variables and configuration management
Values can be set in a .env file or as environment variables
Reference: https://fastapi.tiangolo.com/advanced/settings/
"""
from pathlib import Path

from pydantic import ConfigDict, Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables
    Uses pydantic BaseSettings for validation and type conversion

    Every value has a development default, so the API starts with no .env file
    """
    # API Configuration
    API_PREFIX: str = "/api"
    PROJECT_NAME: str = "Task Manager API"
    VERSION: str = "1.0.0"

    # Server Configuration
    HOST: str = "0.0.0.0"
    PORT: int = Field(3000, description="Port the HTTP server listens on")

    # Runtime environment
    # Anything other than "production" exposes internal error detail in 500 responses
    ENVIRONMENT: str = Field(
        "development",
        description="Deployment environment (development, test, production)",
    )

    # Database Configuration
    # Path of the SQLite file; its directory is created on first use
    # Reference: https://docs.sqlalchemy.org/en/20/dialects/sqlite.html#module-sqlalchemy.dialects.sqlite.aiosqlite
    DATABASE_PATH: str = Field(
        "database/tasks.db",
        description="Location of the SQLite database file",
    )
    SQL_ECHO: bool = False  # Set to True for SQL query logging

    # Static frontend served for every non-API path
    FRONTEND_DIR: str = "frontend"

    LOG_LEVEL: str = "INFO"

    @property
    def is_production(self) -> bool:
        """True when running with ENVIRONMENT=production"""
        return self.ENVIRONMENT.strip().lower() == "production"

    @property
    def database_url(self) -> str:
        """
        SQLAlchemy URL for the async SQLite driver

        Reference: https://docs.sqlalchemy.org/en/20/core/engines.html#sqlite
        """
        return f"sqlite+aiosqlite:///{Path(self.DATABASE_PATH).as_posix()}"

    # Pydantic v2 configuration
    # Reference: https://docs.pydantic.dev/latest/api/config/
    model_config = ConfigDict(
        env_file=".env",
        case_sensitive=True,  # Environment variable names are case-sensitive
        extra="ignore",  # Ignore extra environment variables not defined in this class
    )


# Global settings instance
# The application factory falls back to it when no settings are passed in
settings = Settings()
