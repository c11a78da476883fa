"""Tests for the LangChain invocation adapter and conversation memory."""

import asyncio

from langchain_core.language_models.fake_chat_models import GenericFakeChatModel
from langchain_core.messages import AIMessage, AIMessageChunk, HumanMessage

from persona.adapters.langchain_invoker import LangChainInvoker, _chunk_text
from persona.adapters.memory import ConversationMemory
from persona.models.agent import DEFAULT_GROQ_BASE_URL


async def _drain(stream):
    return [fragment async for fragment in stream]


class TestChunkText:
    def test_string_content(self):
        assert _chunk_text(AIMessageChunk(content="abc")) == "abc"

    def test_content_blocks(self):
        chunk = AIMessageChunk(content=[
            {"type": "text", "text": "hello "},
            {"type": "image_url", "image_url": {"url": "https://example.invalid/a.png"}},
            "world",
        ])
        assert _chunk_text(chunk) == "hello world"


class TestConversationMemory:
    """Keyed, bounded chat histories."""

    def setup_method(self):
        self.memory = ConversationMemory()

    def test_histories_are_keyed_by_thread_and_resource(self):
        self.memory.append("t1", "u1", [HumanMessage(content="a")], limit=10)
        self.memory.append("t1", "u2", [HumanMessage(content="b")], limit=10)

        assert [m.content for m in self.memory.recent("t1", "u1", 10)] == ["a"]
        assert [m.content for m in self.memory.recent("t1", "u2", 10)] == ["b"]
        assert len(self.memory) == 2

    def test_append_trims_to_limit(self):
        messages = [HumanMessage(content=str(i)) for i in range(5)]
        self.memory.append("t", "u", messages, limit=3)

        assert [m.content for m in self.memory.history("t", "u").messages] == ["2", "3", "4"]

    def test_recent_windows_history(self):
        messages = [HumanMessage(content=str(i)) for i in range(4)]
        self.memory.append("t", "u", messages, limit=10)

        assert [m.content for m in self.memory.recent("t", "u", 2)] == ["2", "3"]
        assert self.memory.recent("t", "u", 0) == []

    def test_unknown_session_is_empty(self):
        assert self.memory.recent("new", "user", 5) == []


class TestLangChainInvoker:
    """Streaming through a fake LangChain chat model."""

    def setup_method(self):
        self.requested_models = []
        self.memory = ConversationMemory()

        def factory(model):
            self.requested_models.append(model)
            return GenericFakeChatModel(messages=iter([
                AIMessage(content="Hi there friend"),
                AIMessage(content="Second answer"),
            ]))

        self.invoker = LangChainInvoker(memory=self.memory, model_factory=factory)

    def _invoke(self, message, limit=10, model="qwen-2.5-32b"):
        return asyncio.run(_drain(self.invoker.invoke(
            "You are a test agent.", message, "thread-1", "user-1", limit, model=model,
        )))

    def test_streams_reply_fragments(self):
        fragments = self._invoke("Hello")

        assert len(fragments) > 1
        assert "".join(fragments) == "Hi there friend"

    def test_uses_the_memory_it_was_given(self):
        """An empty store passed in is kept, not replaced by a fresh one."""
        assert len(self.memory) == 0
        assert self.invoker.memory is self.memory

        self._invoke("Hello")
        assert len(self.memory.recent("thread-1", "user-1", 10)) == 2

    def test_remembers_completed_turn(self):
        self._invoke("Hello")

        history = self.memory.recent("thread-1", "user-1", 10)
        assert [type(m) for m in history] == [HumanMessage, AIMessage]
        assert history[0].content == "Hello"
        assert history[1].content == "Hi there friend"

    def test_memory_bound_is_honored(self):
        self._invoke("Hello", limit=2)
        self._invoke("Again", limit=2)

        history = self.memory.recent("thread-1", "user-1", 10)
        assert [m.content for m in history] == ["Again", "Second answer"]

    def test_model_is_built_once_per_id(self):
        self._invoke("Hello")
        self._invoke("Again")

        assert self.requested_models == ["qwen-2.5-32b"]

    def test_model_cache_drops_least_recently_used(self):
        invoker = LangChainInvoker(
            model_factory=lambda model: GenericFakeChatModel(messages=iter([])),
            max_cached_models=2,
        )
        first = invoker._get_model("a")
        invoker._get_model("b")
        assert invoker._get_model("a") is first

        invoker._get_model("c")

        assert list(invoker._models) == ["a", "c"]
        assert invoker._get_model("a") is first
        assert invoker._get_model("b") is not None
        assert len(invoker._models) == 2

    def test_default_factory_builds_chat_openai(self):
        from langchain_openai import ChatOpenAI

        invoker = LangChainInvoker(api_key="test-key", base_url="https://example.invalid/v1")
        model = invoker._get_model("llama-3.1-8b-instant")

        assert isinstance(model, ChatOpenAI)
        assert model.model_name == "llama-3.1-8b-instant"
        assert invoker._get_model("llama-3.1-8b-instant") is model

    def test_default_base_url_is_groq(self):
        invoker = LangChainInvoker(api_key="test-key")
        assert invoker.base_url == DEFAULT_GROQ_BASE_URL == "https://api.groq.com/openai/v1"
