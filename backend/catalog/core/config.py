"""Application configuration with validation."""

from enum import Enum
from pydantic_settings import BaseSettings
from pydantic import Field, field_validator
from typing import List


class Environment(str, Enum):
    """Application environment."""
    DEVELOPMENT = "development"
    PRODUCTION = "production"


class ConfigurationError(Exception):
    """Raised when application configuration is invalid for the environment."""
    pass


class Settings(BaseSettings):
    """
    Application settings with validation.

    Built once per process and handed to the sync clients and services
    explicitly; instances are frozen so nothing rewires credentials at runtime.
    """

    # Environment
    environment: Environment = Field(
        default=Environment.DEVELOPMENT,
        description="Application environment (development/production)"
    )

    # CORS Configuration
    cors_allowed_origins: str = Field(
        default="http://localhost:3000",
        description="Allowed CORS origins (comma-separated)"
    )

    # Database Configuration
    database_url: str = Field(
        default="sqlite:///./catalog.db",
        description="Database connection URL"
    )
    # Connection pool tuning (PostgreSQL only; ignored for SQLite).
    db_pool_size: int = Field(default=5, description="Number of persistent database connections")
    db_max_overflow: int = Field(default=10, description="Extra connections allowed during bursts")
    db_pool_timeout: int = Field(default=30, description="Seconds to wait for a pooled connection")
    db_pool_recycle: int = Field(default=1800, description="Seconds before a connection is recycled")

    # Cloudinary (external namespace)
    cloudinary_cloud_name: str = Field(default="", description="Cloudinary cloud name")
    cloudinary_api_key: str = Field(default="", description="Cloudinary API key")
    cloudinary_api_secret: str = Field(default="", description="Cloudinary API secret")
    cloudinary_root_folders: str = Field(
        default="",
        description="Comma-separated Cloudinary folder paths to reconcile"
    )
    cloudinary_api_base: str = Field(
        default="https://api.cloudinary.com/v1_1",
        description="Cloudinary REST API base URL"
    )

    # Supabase Storage (JSON documents)
    supabase_url: str = Field(default="", description="Supabase project URL")
    supabase_service_key: str = Field(default="", description="Supabase service role key")
    supabase_storage_bucket: str = Field(
        default="",
        description="Bucket holding testimonials/packages/FAQ documents"
    )
    testimonials_json_file: str = Field(default="testimonials.json")
    packages_json_file: str = Field(default="packages.json")
    faq_json_file: str = Field(default="faq.json")

    # External call limits
    # Every Cloudinary/Supabase request carries this deadline; an unresponsive
    # provider fails the call instead of blocking the sync.
    external_timeout_seconds: float = Field(default=30.0, gt=0)
    external_max_retries: int = Field(default=3, ge=1)

    # Sync behaviour
    # False: the first failing stage stops the run (original behaviour).
    # True: every stage runs and all failures are reported together.
    sync_isolate_stages: bool = Field(default=False)
    # Importer strictness: strict importers abort on any invalid record,
    # lenient ones skip it with a warning.
    testimonials_strict: bool = Field(default=True)
    packages_strict: bool = Field(default=False)
    faqs_strict: bool = Field(default=False)
    sync_interval_seconds: int = Field(
        default=24 * 60 * 60,
        description="Seconds between scheduled sync runs in the worker"
    )

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

    def get_root_folders(self) -> List[str]:
        """Root folder paths from CLOUDINARY_ROOT_FOLDERS, blanks dropped."""
        return [f.strip() for f in self.cloudinary_root_folders.split(",") if f.strip()]

    @property
    def cloudinary_configured(self) -> bool:
        return bool(
            self.cloudinary_cloud_name and self.cloudinary_api_key and self.cloudinary_api_secret
        )

    @property
    def storage_configured(self) -> bool:
        return bool(self.supabase_url and self.supabase_service_key)

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is one of the standard Python logging levels."""
        valid_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"Invalid log level. Must be one of: {valid_levels}")
        return v_upper

    def validate_production_config(self) -> None:
        """Validate configuration for production environment.

        In production, fails startup when the sync sources are unconfigured
        or CORS still allows localhost. In development this is a no-op and
        main.py logs warnings instead.

        Raises:
            ConfigurationError: If production config is incomplete.
        """
        errors: list[str] = []

        if not self.cloudinary_configured:
            errors.append("CLOUDINARY_CLOUD_NAME / CLOUDINARY_API_KEY / CLOUDINARY_API_SECRET are not all set.")
        if not self.storage_configured:
            errors.append("SUPABASE_URL / SUPABASE_SERVICE_KEY are not both set.")

        origins = self.get_cors_origins()
        localhost_origins = [o for o in origins if "localhost" in o or "127.0.0.1" in o]
        if localhost_origins:
            errors.append(
                f"CORS allows localhost origins: {localhost_origins}. "
                "Remove localhost origins for production."
            )

        if errors and self.environment == Environment.PRODUCTION:
            raise ConfigurationError(
                "Production configuration is incomplete:\n  - " + "\n  - ".join(errors)
            )

    class Config:
        """Pydantic configuration."""
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"
        frozen = True


# Global settings instance
settings = Settings()
