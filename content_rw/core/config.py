"""Application settings and configuration."""

from typing import Literal

from pydantic import Field, field_validator  # type: ignore
from pydantic_settings import BaseSettings, SettingsConfigDict  # type: ignore


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Environment
    ENV: Literal["dev", "staging", "prod", "test"] = Field(default="dev")

    # Application
    APP_NAME: str = Field(default="content-rw-neo4j")
    APP_SYSTEM_CODE: str = Field(default="upp-content-rw-neo4j")
    APP_DESCRIPTION: str = Field(
        default=(
            "A RESTful API for managing content (bare-bones representation as full "
            "content is served from MongoDB) in Neo4j"
        )
    )
    APP_PORT: int = Field(default=8080)

    # Neo4j
    NEO4J_URI: str = Field(default="bolt://localhost:7687")  # leader node or neo4j:// scheme
    NEO4J_USERNAME: str = Field(default="neo4j")
    NEO4J_PASSWORD: str | None = Field(default=None)
    NEO4J_DATABASE: str = Field(default="neo4j")
    NEO4J_MAX_CONNECTION_LIFETIME: int = Field(default=3600)  # seconds

    # Logging
    LOG_LEVEL: str = Field(default="INFO")
    DB_DRIVER_LOG_LEVEL: str = Field(default="WARN")

    # Policy agent
    OPA_URL: str = Field(default="http://localhost:8181")
    OPA_SPECIAL_CONTENT_POLICY_PATH: str = Field(default="content_rw_neo4j/special_content")
    OPA_TIMEOUT_SECONDS: float = Field(default=5.0)

    # Health
    HEALTH_CHECK_TIMEOUT_SECONDS: int = Field(default=10)

    @field_validator("LOG_LEVEL", "DB_DRIVER_LOG_LEVEL")
    @classmethod
    def normalize_level(cls, value: str) -> str:
        """Upper-case log levels and map Go-style WARN to WARNING."""
        value = value.strip().upper()
        return "WARNING" if value == "WARN" else value

    def __init__(self, **kwargs):
        """Validate settings on initialization."""
        super().__init__(**kwargs)
        # Fail fast in production if critical vars are missing
        if self.ENV == "prod":
            if not self.NEO4J_URI:
                raise ValueError("NEO4J_URI must be set in production")
            if not self.OPA_URL:
                raise ValueError("OPA_URL must be set in production")


# Global settings instance
settings = Settings()
