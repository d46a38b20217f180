"""
Idea Canvas Backend — Application Configuration
================================================

What:  Centralized configuration management using Pydantic Settings.
How:   Pydantic Settings reads from environment variables (or .env file),
       validates types/ranges, and provides a singleton `settings` object.
Who:   Imported by every module that needs configuration values.
When:  Loaded once at module import time; validated before app starts.
"""

from typing import List
from urllib.parse import quote_plus

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings have sensible defaults for local development against a
    MongoDB on localhost. Atlas deployments set DB_USER, DB_PASS and
    MONGODB_CLUSTER_HOST instead of MONGODB_URI.
    """

    # ── MongoDB ───────────────────────────────────────────────────────────
    # Plain connection string, used when no Atlas credentials are given
    mongodb_uri: str = Field(
        default="mongodb://localhost:27017",
        description="MongoDB connection URI",
    )

    # Atlas credentials: all three must be set together
    db_user: str = Field(default="")
    db_pass: str = Field(default="")
    mongodb_cluster_host: str = Field(
        default="",
        description="Atlas cluster host, e.g. cluster0.abcde.mongodb.net",
    )

    mongodb_database: str = Field(default="idea-Canvas")

    mongodb_max_pool_size: int = Field(default=50, ge=1, le=500)

    # Milliseconds the driver waits to find a usable server before failing
    mongodb_server_selection_timeout_ms: int = Field(default=5000, ge=500, le=60000)

    @property
    def mongodb_connection_uri(self) -> str:
        """
        What: The URI handed to the Motor client.
        How:  Builds a mongodb+srv URI from the Atlas credentials when they are
              configured, otherwise falls back to MONGODB_URI.
        """
        if self.db_user and self.db_pass and self.mongodb_cluster_host:
            return (
                f"mongodb+srv://{quote_plus(self.db_user)}:{quote_plus(self.db_pass)}"
                f"@{self.mongodb_cluster_host}/?retryWrites=true&w=majority"
            )
        return self.mongodb_uri

    # ── CORS ──────────────────────────────────────────────────────────────
    # Format: Comma-separated URLs (split by cors_origins_list)
    cors_origins: str = Field(default="http://localhost:5173,http://127.0.0.1:5173")

    @property
    def cors_origins_list(self) -> List[str]:
        """Splits comma-separated CORS origins into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    # ── Server ────────────────────────────────────────────────────────────
    backend_host: str = Field(default="0.0.0.0")
    backend_port: int = Field(default=3000, ge=1024, le=65535)

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

    # ── Startup Connectivity Retry ────────────────────────────────────────
    # Tenacity settings for the ping issued when the app starts
    retry_max_attempts: int = Field(default=3, ge=1, le=10)
    retry_min_wait: int = Field(default=1, ge=1, le=30)
    retry_max_wait: int = Field(default=10, ge=1, le=120)

    # ── Rate Limiting ─────────────────────────────────────────────────────
    # Per-IP sliding window
    rate_limit_requests: int = Field(default=1000, ge=10, le=100000)
    rate_limit_window: int = Field(default=3600, ge=60, le=86400)  # seconds

    # ── Listing Defaults ──────────────────────────────────────────────────
    blogs_page_size: int = Field(default=12, ge=1, le=100)
    blogs_max_page_size: int = Field(default=100, ge=1, le=1000)

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
    }

    def validate_required_for_production(self) -> None:
        """
        What:  Validates that the MongoDB settings are coherent.
        When:  Called during app startup (lifespan).
        How:   Collects every problem and raises one ValueError listing them.
        """
        errors = []
        atlas_parts = [self.db_user, self.db_pass, self.mongodb_cluster_host]
        if any(atlas_parts) and not all(atlas_parts):
            errors.append(
                "DB_USER, DB_PASS and MONGODB_CLUSTER_HOST must be set together "
                "to connect to MongoDB Atlas."
            )
        if not self.mongodb_connection_uri:
            errors.append("MONGODB_URI is empty.")
        if not self.mongodb_database:
            errors.append("MONGODB_DATABASE is empty.")
        if errors:
            raise ValueError(
                "Configuration validation failed:\n" + "\n".join(f"  - {e}" for e in errors)
            )


# Singleton instance, imported throughout the application
settings = Settings()
