"""Data models for agent configuration.

AgentConfig is what a caller hands in (every field optional),
AgentDefinition is the normalized record that gets registered.
"""

from pydantic import BaseModel, Field, PositiveInt

DEFAULT_NAME = "Base Agent"
DEFAULT_INSTRUCTIONS = "You are a helpful assistant."
DEFAULT_PERSONALITY = "neutral"
DEFAULT_MODEL = "qwen-2.5-32b"
DEFAULT_MAX_MEMORY_MESSAGES = 10

# Groq serves its models behind an OpenAI-compatible API
DEFAULT_GROQ_BASE_URL = "https://api.groq.com/openai/v1"


class AgentConfig(BaseModel):
    """partial agent configuration supplied by a caller."""

    model_config = {"populate_by_name": True, "protected_namespaces": ()}

    name: str | None = None
    instructions: str | None = None
    personality: str | None = None
    model: str | None = None
    max_memory_messages: PositiveInt | None = Field(default=None, alias="maxMemoryMessages")


class AgentDefinition(BaseModel):
    """a fully defaulted agent, immutable once built."""

    model_config = {"frozen": True, "populate_by_name": True, "protected_namespaces": ()}

    identity: str
    name: str
    instructions: str
    system_prompt: str = Field(alias="systemPrompt")
    personality: str
    model: str
    max_memory_messages: int = Field(alias="maxMemoryMessages")

    def public_view(self) -> dict:
        """the caller-facing view returned by the API and printed by the CLI."""
        return {
            "id": self.identity,
            "name": self.name,
            "instructions": self.instructions,
            "personality": self.personality,
            "model": self.model,
            "maxMemoryMessages": self.max_memory_messages,
            "systemPrompt": self.system_prompt,
        }
