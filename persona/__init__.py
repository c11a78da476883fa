"""Persona Agents - personalized conversational agents from a configuration."""

from persona.models.agent import AgentConfig, AgentDefinition
from persona.models.session import Session
from persona.normalizer import derive_identity, normalize
from persona.registry import AgentRegistry
from persona.sessions import resolve_session
from persona.conversation import ConversationResult, run_conversation, stream_conversation

__all__ = [
    # Models
    "AgentConfig",
    "AgentDefinition",
    "Session",
    # Configuration & identity
    "normalize",
    "derive_identity",
    # Registry & sessions
    "AgentRegistry",
    "resolve_session",
    # Conversations
    "ConversationResult",
    "run_conversation",
    "stream_conversation",
]
