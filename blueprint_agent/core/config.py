"""Configuration management for the Blueprint Agent service."""

from functools import lru_cache

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load environment variables from .env file (only if accessible)
try:
    load_dotenv()
except (PermissionError, OSError):
    # Environment variables should be set directly in this case
    pass


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )

    # Completion endpoint (required)
    GROQ_API_KEY: str = Field(..., description="Bearer credential for the completion endpoint")
    COMPLETION_BASE_URL: str = Field(
        default="https://api.groq.com/openai/v1",
        description="Base URL of the OpenAI-compatible completion endpoint",
    )
    COMPLETION_MODEL: str = Field(
        default="llama-3.3-70b-versatile", description="Model used for blueprint generation"
    )
    COMPLETION_MAX_TOKENS: int = Field(default=1200, description="Max tokens per completion")
    COMPLETION_TEMPERATURE: float = Field(default=0.7, description="Sampling temperature")
    COMPLETION_TIMEOUT_SECONDS: float = Field(
        default=60.0, description="Timeout for a single completion call"
    )

    # Mail transport (Resend)
    RESEND_API_KEY: str = Field(default="", description="Resend API key")
    EMAIL_FROM: str = Field(default="", description="Sender address for blueprint emails")
    EMAIL_TIMEOUT_SECONDS: float = Field(default=15.0, description="Timeout for mail submission")

    # Document content
    DISCOUNT_PERCENT: int = Field(default=25, description="Discount offered in the blueprint PDF")
    HEADING_STRATEGY: str = Field(
        default="markdown", description="Paragraph classification: markdown, outline"
    )

    # HTTP surface
    FRONTEND_ORIGIN: str = Field(default="*", description="Allowed CORS origin(s), comma separated")
    HOST: str = Field(default="0.0.0.0", description="Bind address")
    PORT: int = Field(default=5000, description="Listening port")
    STATIC_DIR: str | None = Field(default=None, description="Optional static files directory")

    # Session store
    SESSION_TTL_SECONDS: int = Field(
        default=86_400, description="Idle sessions older than this are evicted (0 disables)"
    )
    SESSION_SWEEP_INTERVAL_SECONDS: int = Field(
        default=300, description="How often the background sweeper runs"
    )

    # Environment
    BLUEPRINT_ENV: str = Field(default="dev", description="Environment: dev, staging, prod")

    @property
    def cors_origins(self) -> list[str]:
        """Parse FRONTEND_ORIGIN into a list of origins."""
        return [origin.strip() for origin in self.FRONTEND_ORIGIN.split(",") if origin.strip()]


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Returns:
        Settings instance

    Raises:
        ValidationError: If required environment variables are missing
    """
    return Settings()
