"""Core data models for persona agents."""

from persona.models.agent import (
    DEFAULT_INSTRUCTIONS,
    DEFAULT_GROQ_BASE_URL,
    DEFAULT_MAX_MEMORY_MESSAGES,
    DEFAULT_MODEL,
    DEFAULT_NAME,
    DEFAULT_PERSONALITY,
    AgentConfig,
    AgentDefinition,
)
from persona.models.session import Session

__all__ = [
    # Agent configuration
    "AgentConfig",
    "AgentDefinition",
    "DEFAULT_NAME",
    "DEFAULT_INSTRUCTIONS",
    "DEFAULT_PERSONALITY",
    "DEFAULT_MODEL",
    "DEFAULT_MAX_MEMORY_MESSAGES",
    "DEFAULT_GROQ_BASE_URL",
    # Sessions
    "Session",
]
