"""Runtime settings read from the environment (and a .env file)."""

import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

from persona.errors import StartupConfigurationMissing
from persona.models.agent import DEFAULT_GROQ_BASE_URL, DEFAULT_MODEL

# load environment variables
load_dotenv()


def _split_origins(raw: str) -> list[str]:
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


@dataclass
class Settings:
    """Process-wide settings; build with load_settings()."""

    groq_api_key: str | None = None
    groq_base_url: str = DEFAULT_GROQ_BASE_URL
    default_model: str = DEFAULT_MODEL
    host: str = "0.0.0.0"
    port: int = 3000
    cors_origins: list[str] = field(default_factory=lambda: ["*"])
    log_level: str = "INFO"
    langsmith_api_key: str | None = None
    langsmith_project: str = "persona-agents"
    langsmith_tracing: bool = True


def load_settings() -> Settings:
    """Read settings from environment variables."""
    return Settings(
        groq_api_key=os.getenv("GROQ_API_KEY") or None,
        groq_base_url=os.getenv("GROQ_BASE_URL", DEFAULT_GROQ_BASE_URL),
        default_model=os.getenv("DEFAULT_MODEL", DEFAULT_MODEL),
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "3000")),
        # comma-separated, or "*" for all (development only)
        cors_origins=_split_origins(os.getenv("CORS_ORIGINS", "*")),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        langsmith_api_key=os.getenv("LANGSMITH_API_KEY") or None,
        langsmith_project=os.getenv("LANGSMITH_PROJECT", "persona-agents"),
        langsmith_tracing=os.getenv("LANGSMITH_TRACING", "true").lower() == "true",
    )


def require_credentials(settings: Settings) -> None:
    """Refuse to start without model credentials.

    Raises:
        StartupConfigurationMissing: if GROQ_API_KEY is not set
    """
    if not settings.groq_api_key:
        raise StartupConfigurationMissing("FATAL: GROQ_API_KEY environment variable not found!")
