"""Adapters for the model invocation collaborator."""

from persona.adapters.base import Invoker
from persona.adapters.langchain_invoker import LangChainInvoker
from persona.adapters.memory import ConversationMemory
from persona.models.agent import DEFAULT_GROQ_BASE_URL

__all__ = [
    "Invoker",
    "LangChainInvoker",
    "ConversationMemory",
    "DEFAULT_GROQ_BASE_URL",
]
