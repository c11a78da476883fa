"""Turn a partial AgentConfig into a complete AgentDefinition."""

import re

from persona.models.agent import (
    DEFAULT_INSTRUCTIONS,
    DEFAULT_MAX_MEMORY_MESSAGES,
    DEFAULT_MODEL,
    DEFAULT_NAME,
    DEFAULT_PERSONALITY,
    AgentConfig,
    AgentDefinition,
)
from persona.utils.identifiers import generate_agent_id

_WHITESPACE_RUN = re.compile(r"\s+")


def _is_blank(value: str | None) -> bool:
    return value is None or not value.strip()


def _coalesce(value: str | None, default: str) -> str:
    """blank strings fall back to the default, same as missing ones."""
    return default if _is_blank(value) else value


def derive_identity(name: str | None) -> str:
    """Derive the registry key for an agent name.

    "Friendly Bot" -> "friendly_bot". A blank name gets a time-based
    fallback id, see generate_agent_id.
    """
    if _is_blank(name):
        return generate_agent_id()
    return _WHITESPACE_RUN.sub("_", name.strip().lower())


def compose_system_prompt(name: str, instructions: str, personality: str) -> str:
    """Instructions first, then identity and tone framing."""
    prompt = f"""
{instructions}
Your name is {name}.
Please respond in a {personality} tone.
"""
    return prompt.strip()


def normalize(config: AgentConfig | None = None, default_model: str = DEFAULT_MODEL) -> AgentDefinition:
    """Fill defaults and compute identity and system prompt.

    Args:
        config: partial configuration; None is treated as an empty one
        default_model: model used when the config names none

    Returns:
        A frozen AgentDefinition with every field populated
    """
    config = config or AgentConfig()

    name = _coalesce(config.name, DEFAULT_NAME)
    instructions = _coalesce(config.instructions, DEFAULT_INSTRUCTIONS)
    personality = _coalesce(config.personality, DEFAULT_PERSONALITY)
    model = _coalesce(config.model, default_model)
    max_memory = config.max_memory_messages or DEFAULT_MAX_MEMORY_MESSAGES

    return AgentDefinition(
        identity=derive_identity(config.name),
        name=name,
        instructions=instructions,
        system_prompt=compose_system_prompt(name, instructions, personality),
        personality=personality,
        model=model,
        max_memory_messages=max_memory,
    )
