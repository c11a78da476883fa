"""LangChain-backed model invocation.

Models are served through Groq's OpenAI-compatible endpoint, so the
stock ChatOpenAI client is used with a different base_url and key.
"""

import logging
from collections import OrderedDict
from collections.abc import AsyncIterator, Callable

from langchain_core.language_models.chat_models import BaseChatModel
from langchain_core.messages import AIMessage, BaseMessageChunk, HumanMessage, SystemMessage
from langchain_openai import ChatOpenAI

from persona.adapters.base import Invoker
from persona.adapters.memory import ConversationMemory
from persona.models.agent import DEFAULT_GROQ_BASE_URL, DEFAULT_MODEL

logger = logging.getLogger(__name__)

# model ids come from callers, so only the most recently used are kept
MAX_CACHED_MODELS = 8


def _chunk_text(chunk: BaseMessageChunk) -> str:
    content = chunk.content
    if isinstance(content, str):
        return content
    # content blocks: keep only text parts
    parts = []
    for block in content:
        if isinstance(block, str):
            parts.append(block)
        elif isinstance(block, dict) and block.get("type") == "text":
            parts.append(block.get("text", ""))
    return "".join(parts)


class LangChainInvoker(Invoker):
    """Streams replies from a LangChain chat model with windowed memory."""

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str = DEFAULT_GROQ_BASE_URL,
        memory: ConversationMemory | None = None,
        model_factory: Callable[[str], BaseChatModel] | None = None,
        max_cached_models: int = MAX_CACHED_MODELS,
    ) -> None:
        """
        Args:
            api_key: Groq API key
            base_url: OpenAI-compatible endpoint
            memory: conversation store, one is created if omitted
            model_factory: builds a chat model for a model id (tests swap this)
            max_cached_models: chat models kept before the least recently used is dropped
        """
        self.api_key = api_key
        self.base_url = base_url
        self.memory = memory if memory is not None else ConversationMemory()
        self._model_factory = model_factory or self._build_chat_model
        self.max_cached_models = max_cached_models
        self._models: OrderedDict[str, BaseChatModel] = OrderedDict()

    def _build_chat_model(self, model: str) -> BaseChatModel:
        return ChatOpenAI(
            model=model,
            api_key=self.api_key,
            base_url=self.base_url,
            streaming=True,
            metadata={"provider": "groq"},
        )

    def _get_model(self, model: str) -> BaseChatModel:
        """Get or create the chat model for a model id."""
        if model in self._models:
            self._models.move_to_end(model)
            return self._models[model]

        chat_model = self._model_factory(model)
        self._models[model] = chat_model
        if len(self._models) > self.max_cached_models:
            evicted, _ = self._models.popitem(last=False)
            logger.debug("Dropped cached chat model %s", evicted)
        return chat_model

    async def invoke(
        self,
        system_prompt: str,
        message: str,
        thread_id: str,
        resource_id: str,
        memory_limit: int,
        *,
        model: str = DEFAULT_MODEL,
    ) -> AsyncIterator[str]:
        chat_model = self._get_model(model)
        messages = [
            SystemMessage(content=system_prompt),
            *self.memory.recent(thread_id, resource_id, memory_limit),
            HumanMessage(content=message),
        ]
        logger.debug(
            "Invoking %s for thread %s with %d history messages",
            model,
            thread_id,
            len(messages) - 2,
        )

        reply: list[str] = []
        async for chunk in chat_model.astream(messages):
            text = _chunk_text(chunk)
            if not text:
                continue
            reply.append(text)
            yield text

        # only completed turns are remembered
        self.memory.append(
            thread_id,
            resource_id,
            [HumanMessage(content=message), AIMessage(content="".join(reply))],
            memory_limit,
        )
