"""LangSmith tracing setup."""

import os

from persona.config import Settings


def get_langsmith_config(settings: Settings) -> dict:
    """configure LangSmith tracing."""
    return {
        "project_name": settings.langsmith_project,
        "api_key": settings.langsmith_api_key,
        "tracing_enabled": settings.langsmith_tracing,
    }


def setup_telemetry(settings: Settings) -> dict:
    """Enable LangSmith tracing when an API key is configured."""
    config = get_langsmith_config(settings)

    if not config["tracing_enabled"]:
        print("⚠ LangSmith tracing disabled - LANGSMITH_TRACING is false")
    elif config["api_key"]:
        os.environ["LANGCHAIN_TRACING_V2"] = "true"
        os.environ["LANGCHAIN_PROJECT"] = config["project_name"]
        os.environ["LANGCHAIN_API_KEY"] = config["api_key"]
        print(f"✓ LangSmith tracing enabled for project: {config['project_name']}")
    else:
        print("⚠ LangSmith tracing disabled - API key not found")

    return config
