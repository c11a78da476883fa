"""Tests for the agent registry and session resolution."""

import threading
import time

import pytest

from persona.errors import AgentNotFound
from persona.models.agent import AgentConfig
from persona.normalizer import normalize
from persona.registry import AgentRegistry
from persona.sessions import resolve_session


class TestAgentRegistry:
    """Registration, overwrite and lookup semantics."""

    def setup_method(self):
        self.registry = AgentRegistry()

    def test_starts_empty(self):
        assert len(self.registry) == 0
        assert self.registry.list() == []

    def test_register_and_resolve(self):
        definition = normalize(AgentConfig(name="Helper"))
        self.registry.register(definition.identity, definition)

        assert self.registry.resolve("helper") is definition
        assert "helper" in self.registry

    def test_overwrite_keeps_only_latest(self):
        """Registering twice at one identity leaves only the second definition."""
        first = normalize(AgentConfig(name="Bot", personality="formal", max_memory_messages=3))
        second = normalize(AgentConfig(name="Bot", instructions="New rules."))

        self.registry.register("bot", first)
        self.registry.register("bot", second)

        resolved = self.registry.resolve("bot")
        assert resolved == second
        assert resolved.personality == "neutral"
        assert resolved.max_memory_messages == 10
        assert len(self.registry) == 1

    def test_create_normalizes_and_registers(self):
        definition = self.registry.create(AgentConfig(name="Friendly Bot"))

        assert definition.identity == "friendly_bot"
        assert self.registry.resolve("friendly_bot") == definition

    def test_create_with_no_config(self):
        definition = self.registry.create()
        assert definition.identity.startswith("agent_")
        assert self.registry.resolve(definition.identity) == definition

    def test_registry_default_model(self):
        registry = AgentRegistry(default_model="llama-3.1-8b-instant")

        assert registry.create(AgentConfig(name="Quick")).model == "llama-3.1-8b-instant"
        assert registry.create(AgentConfig(name="Big", model="qwen-qwq-32b")).model == "qwen-qwq-32b"

    def test_resolve_miss_returns_none(self):
        assert self.registry.resolve("nonexistent") is None

    def test_resolve_miss_does_not_create_entry(self):
        self.registry.resolve("ghost")
        assert "ghost" not in self.registry
        assert len(self.registry) == 0

    def test_require_raises_not_found(self):
        with pytest.raises(AgentNotFound) as exc_info:
            self.registry.require("nonexistent")
        assert exc_info.value.status_code == 404
        assert "nonexistent" in exc_info.value.message

    def test_list_is_sorted_by_identity(self):
        self.registry.create(AgentConfig(name="Zed"))
        self.registry.create(AgentConfig(name="Alpha"))

        assert [d.identity for d in self.registry.list()] == ["alpha", "zed"]

    def test_clear(self):
        self.registry.create(AgentConfig(name="Temp"))
        self.registry.clear()
        assert len(self.registry) == 0

    def test_registries_are_independent(self):
        other = AgentRegistry()
        self.registry.create(AgentConfig(name="Solo"))
        assert other.resolve("solo") is None

    def test_concurrent_writes_to_one_key(self):
        """Concurrent creations leave exactly one whole definition behind."""
        configs = [AgentConfig(name="Shared", personality=f"tone{i}") for i in range(20)]
        threads = [threading.Thread(target=self.registry.create, args=(c,)) for c in configs]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        resolved = self.registry.resolve("shared")
        assert len(self.registry) == 1
        assert resolved.system_prompt.endswith(f"Please respond in a {resolved.personality} tone.")


class TestResolveSession:
    """Thread/resource id synthesis and pass-through."""

    def test_generates_both_when_absent(self):
        session = resolve_session()

        assert session.thread_id.startswith("thread_")
        assert session.resource_id.startswith("user_")
        assert session.thread_id != session.resource_id

    def test_passes_through_supplied_thread(self):
        session = resolve_session("t1", None)

        assert session.thread_id == "t1"
        assert session.resource_id.startswith("user_")

    def test_passes_through_supplied_resource(self):
        session = resolve_session(None, "alice")

        assert session.thread_id.startswith("thread_")
        assert session.resource_id == "alice"

    def test_empty_strings_are_treated_as_absent(self):
        session = resolve_session("", "")
        assert session.thread_id.startswith("thread_")
        assert session.resource_id.startswith("user_")

    def test_opaque_ids_are_not_validated(self):
        session = resolve_session("never-seen-before", "??")
        assert (session.thread_id, session.resource_id) == ("never-seen-before", "??")

    def test_generated_ids_change_over_time(self):
        first = resolve_session()
        time.sleep(0.005)
        second = resolve_session()
        assert first.thread_id != second.thread_id
        assert first.resource_id != second.resource_id
