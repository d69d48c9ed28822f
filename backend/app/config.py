"""
Notes AI Proxy - Application Configuration
==========================================

What:  Centralized configuration management using Pydantic Settings.
Why:   Type-safe environment variable loading with validation on startup.
How:   Pydantic Settings reads from environment variables (or .env file),
       validates types/ranges, and provides a cached `Settings` instance.
Who:   The app factory, the route dependencies and the Groq adapter.
When:  Loaded once; routes receive it through `Depends(get_settings)` so tests
       can override it per request.
"""

from functools import lru_cache
from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

# Value shipped in .env.example; treated the same as an empty key.
API_KEY_PLACEHOLDER = "your_groq_api_key_here"


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Defaults reproduce the upstream call parameters the service has always
    used, so only GROQ_API_KEY has to be provided in a real deployment.
    """

    # ── Groq ──────────────────────────────────────────────────────────────
    # Required: YES. Without it /api/ai answers 500 and /api/health reports
    # apiKeyConfigured=false.
    groq_api_key: str = Field(
        default="",
        description="Bearer credential for the Groq chat-completions API",
    )
    groq_api_url: str = Field(
        default="https://api.groq.com/openai/v1/chat/completions",
    )
    groq_model: str = Field(default="llama-3.1-8b-instant")

    # Sampling parameters sent with every completion request
    llm_temperature: float = Field(default=0.7, ge=0.0, le=2.0)
    llm_max_tokens: int = Field(default=1024, ge=1, le=32768)
    llm_top_p: float = Field(default=1.0, gt=0.0, le=1.0)

    # One attempt per request; this bounds how long that attempt may take.
    upstream_timeout_seconds: float = Field(default=30.0, gt=0.0, le=600.0)

    # ── Requests ──────────────────────────────────────────────────────────
    max_content_length: int = Field(default=50_000, ge=1)

    # ── CORS ──────────────────────────────────────────────────────────────
    # Format: comma-separated origins, "*" allows any origin
    cors_origins: str = Field(default="*")

    @property
    def cors_origins_list(self) -> List[str]:
        """Splits comma-separated CORS origins into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    # ── Server ────────────────────────────────────────────────────────────
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=3001, ge=1, le=65535)

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

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
    }

    @property
    def api_key_configured(self) -> bool:
        """True when a real (non-placeholder) Groq key is present."""
        return bool(self.groq_api_key) and self.groq_api_key != API_KEY_PLACEHOLDER

    def validate_required_for_production(self) -> None:
        """
        What:  Validates that critical settings are configured.
        When:  Called during app startup (lifespan).
        How:   Raises ValueError with guidance for each missing value.
        """
        errors = []
        if not self.api_key_configured:
            errors.append(
                "GROQ_API_KEY is not set. "
                "Create a key at https://console.groq.com/keys"
            )
        if errors:
            raise ValueError(
                "Configuration validation failed:\n" + "\n".join(f"  - {e}" for e in errors)
            )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
