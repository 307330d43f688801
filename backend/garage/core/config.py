"""Application configuration with validation."""

from enum import Enum
from pydantic_settings import BaseSettings
from pydantic import Field, field_validator
from typing import List


class Environment(str, Enum):
    """Application environment."""
    DEVELOPMENT = "development"
    PRODUCTION = "production"


class StorageBackend(str, Enum):
    """Which Storage implementation backs the API."""
    MEMORY = "memory"
    SQL = "sql"


class ConfigurationError(Exception):
    """Raised when application configuration is invalid for the environment."""
    pass


class Settings(BaseSettings):
    """
    Application settings with validation.

    Every field can be overridden by the upper-cased environment variable
    of the same name or from a ``.env`` file.
    """

    # Environment
    environment: Environment = Field(
        default=Environment.DEVELOPMENT,
        description="Application environment (development/production)"
    )

    # CORS Configuration
    cors_allowed_origins: str = Field(
        default="http://localhost:5000,http://localhost:5173",
        description="Allowed CORS origins (comma-separated)"
    )

    # Storage Configuration
    storage_backend: StorageBackend = Field(
        default=StorageBackend.MEMORY,
        description="Entity store implementation: 'memory' or 'sql'"
    )
    # Only read when storage_backend is 'sql'. The default keeps the SQL
    # backend process-lifetime, like the memory store.
    database_url: str = Field(
        default="sqlite://",
        description="SQLAlchemy database URL for the sql backend"
    )

    # Upload Configuration
    upload_dir: str = Field(
        default="uploads",
        description="Directory uploaded files are written to and served from"
    )
    max_upload_bytes: int = Field(
        default=100 * 1024 * 1024,
        description="Largest accepted upload in bytes"
    )
    upload_chunk_bytes: int = Field(
        default=1024 * 1024,
        description="Read size used while streaming uploads to disk"
    )

    # Mock identity. There is no login: every request acts as this user,
    # which is seeded into the store on startup.
    default_username: str = Field(default="admin")
    default_password: str = Field(default="hashed_password")
    default_role: str = Field(default="road_captain")

    # Logging Configuration
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )
    log_format: str = Field(
        default="json",
        description="Log output format: 'json' for structured, 'text' for human-readable"
    )

    def get_cors_origins(self) -> List[str]:
        """
        Get CORS origins as a list.

        Parses comma-separated string and validates no wildcards.
        """
        origins = [origin.strip() for origin in self.cors_allowed_origins.split(',') if origin.strip()]

        if "*" in origins:
            raise ValueError(
                "Wildcard CORS (*) not allowed. "
                "Specify explicit origins in CORS_ALLOWED_ORIGINS"
            )

        return origins

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is one of the standard Python logging levels."""
        valid_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"Invalid log level. Must be one of: {valid_levels}")
        return v_upper

    @field_validator('default_role')
    @classmethod
    def validate_default_role(cls, v: str) -> str:
        valid_roles = ['road_captain', 'wrench', 'prospect']
        if v not in valid_roles:
            raise ValueError(f"Invalid default role. Must be one of: {valid_roles}")
        return v

    @field_validator('max_upload_bytes', 'upload_chunk_bytes')
    @classmethod
    def validate_positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("Must be a positive number of bytes")
        return v

    def validate_production_config(self) -> None:
        """Validate configuration for the production environment.

        Raises:
            ConfigurationError: If production config is insecure.
        """
        errors: list[str] = []

        if self.default_password == "hashed_password":
            errors.append(
                "DEFAULT_PASSWORD is using the built-in placeholder value."
            )

        origins = self.get_cors_origins()
        localhost_origins = [o for o in origins if "localhost" in o or "127.0.0.1" in o]
        if localhost_origins:
            errors.append(
                f"CORS allows localhost origins: {localhost_origins}. "
                "Remove localhost origins for production."
            )

        if errors and self.environment == Environment.PRODUCTION:
            raise ConfigurationError(
                "Production configuration is insecure:\n  - " + "\n  - ".join(errors)
            )

    class Config:
        """Pydantic configuration."""
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False


# Global settings instance
settings = Settings()
