"""
Commander Backend — Application Configuration
=============================================

What:  Centralized configuration management using Pydantic Settings.
How:   Pydantic Settings reads from environment variables (or a .env file),
       validates types/ranges, and exposes a default `settings` object.
Who:   Read by `create_app()`, the database layer and the logging setup.
When:  Loaded once at import time; `create_app()` also accepts an explicit
       Settings instance so tests can wire their own database.
"""

from typing import List, Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings have development defaults. A production deployment points
    DATABASE_URL at its server (e.g. postgresql+asyncpg://...) and keeps
    REPOSITORY_BACKEND=sql.
    """

    # ── Database ──────────────────────────────────────────────────────────
    # Format: <dialect>+<async driver>://user:password@host:port/dbname
    database_url: str = Field(
        default="sqlite+aiosqlite:///./commander.db",
        description="Async SQLAlchemy connection URL",
    )

    # Pool sizing only applies to server databases; SQLite URLs ignore it.
    db_pool_size: int = Field(default=10, ge=1, le=100)
    db_max_overflow: int = Field(default=5, ge=0, le=50)
    db_pool_pre_ping: bool = Field(default=True)

    # What: Create the commands table from ORM metadata on startup.
    # There is no migration tool; turn this off when the schema is managed
    # outside the service.
    db_create_tables: bool = Field(default=True)

    # ── Repository ────────────────────────────────────────────────────────
    # What: Which data-access implementation serves requests.
    #   sql  → SqlCommanderRepository over the configured database
    #   mock → MockCommanderRepository (canned reads, mutations unsupported)
    repository_backend: Literal["sql", "mock"] = Field(default="sql")

    # ── CORS ──────────────────────────────────────────────────────────────
    # Format: Comma-separated origins
    cors_origins: str = Field(default="http://localhost:3000")

    @property
    def cors_origins_list(self) -> List[str]:
        """Splits comma-separated CORS origins into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    # ── Server ────────────────────────────────────────────────────────────
    backend_host: str = Field(default="0.0.0.0")
    backend_port: int = Field(default=8000, ge=1024, le=65535)

    # Valid: DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_level: str = Field(default="INFO")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensures log level is a valid Python logging level name."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"Invalid log_level '{v}'. Must be one of: {valid_levels}")
        return upper

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")

    # ── Pydantic Settings Config ──────────────────────────────────────────
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
    }

    def validate_required_for_production(self) -> None:
        """
        What:  Flags settings that are only acceptable during development.
        When:  Called during app startup (lifespan).
        Raises ValueError listing every problem found.
        """
        errors = []
        if self.repository_backend == "mock":
            errors.append(
                "REPOSITORY_BACKEND=mock serves canned data and rejects every write. "
                "Use REPOSITORY_BACKEND=sql outside local development."
            )
        if not self.database_url:
            errors.append("DATABASE_URL is empty.")
        if errors:
            raise ValueError(
                "Configuration validation failed:\n" + "\n".join(f"  - {e}" for e in errors)
            )


settings = Settings()
