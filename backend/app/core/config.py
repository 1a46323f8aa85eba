"""Application configuration."""

from typing import Literal
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Database (empty URL means no persistent store: demo mode)
    database_url: str = Field(
        default="sqlite+aiosqlite:///./ideaboard.db",
        description="Database connection URL"
    )
    demo_mode: bool = Field(
        default=False,
        description="Force the local, non-persistent demo board even if a database is configured"
    )

    # Upvotes
    upvote_mode: Literal["gated", "direct"] = Field(
        default="gated",
        description="Which upvote mechanism is the source of truth: "
                    "'gated' (one vote per user, ledger-backed) or 'direct' (plain counter)"
    )
    transaction_max_attempts: int = Field(
        default=5,
        description="Attempts the transaction runner makes before giving up on contention"
    )

    # CORS
    cors_origins: str = Field(
        default="http://localhost:3000,http://localhost:5173",
        description="Comma-separated list of allowed CORS origins"
    )

    @property
    def cors_origins_list(self) -> list[str]:
        """Parse CORS origins from comma-separated string."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    @property
    def is_configured(self) -> bool:
        """Whether a persistent store should be used."""
        return bool(self.database_url.strip()) and not self.demo_mode

    # Anonymous sessions
    secret_key: str = Field(
        default="change-this-to-a-random-secret-key-in-production",
        description="Secret key for JWT token generation"
    )
    jwt_algorithm: str = Field(default="HS256", description="JWT algorithm")
    jwt_expiration_hours: int = Field(default=24, description="JWT token expiration in hours")

    # Development Settings
    debug: bool = Field(default=False, description="Debug mode")
    log_level: str = Field(default="INFO", description="Log level")

    # Idea Validation
    max_idea_length: int = Field(
        default=280,
        description="Maximum length of idea text in characters, after trimming"
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is valid."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"log_level must be one of {valid_levels}")
        return v_upper

    @field_validator("jwt_algorithm")
    @classmethod
    def validate_jwt_algorithm(cls, v: str) -> str:
        """Only symmetric HMAC algorithms are supported with a shared secret."""
        v_upper = v.upper()
        if v_upper not in ("HS256", "HS384", "HS512"):
            raise ValueError("jwt_algorithm must be one of HS256, HS384, HS512")
        return v_upper

    @field_validator("secret_key")
    @classmethod
    def validate_secret_key(cls, v: str) -> str:
        if not v:
            raise ValueError("secret_key must not be empty")
        return v

    @field_validator("jwt_expiration_hours")
    @classmethod
    def validate_positive_int(cls, v: int) -> int:
        """Validate integer is positive."""
        if v <= 0:
            raise ValueError(f"Value must be positive, got {v}")
        return v

    @field_validator("transaction_max_attempts")
    @classmethod
    def validate_transaction_max_attempts(cls, v: int) -> int:
        """Validate the retry budget is within a sane range."""
        if v < 1:
            raise ValueError("transaction_max_attempts must be at least 1")
        if v > 50:
            raise ValueError("transaction_max_attempts should not exceed 50")
        return v

    @field_validator("max_idea_length")
    @classmethod
    def validate_max_idea_length(cls, v: int) -> int:
        if not 1 <= v <= 10000:
            raise ValueError("max_idea_length must be between 1 and 10000")
        return v


# Global settings instance
settings = Settings()


def get_settings() -> Settings:
    """FastAPI dependency returning the process-wide settings."""
    return settings
