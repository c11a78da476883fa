"""Shared fixtures: a scripted stand-in for the model collaborator."""

import pytest

from persona.adapters.base import Invoker
from persona.models.agent import DEFAULT_MODEL


class ScriptedInvoker(Invoker):
    """Yields a fixed list of fragments, optionally failing part way."""

    def __init__(self, fragments: list[str], fail_after: int | None = None) -> None:
        self.fragments = fragments
        self.fail_after = fail_after
        self.calls: list[dict] = []

    async def invoke(
        self,
        system_prompt,
        message,
        thread_id,
        resource_id,
        memory_limit,
        *,
        model=DEFAULT_MODEL,
    ):
        self.calls.append({
            "system_prompt": system_prompt,
            "message": message,
            "thread_id": thread_id,
            "resource_id": resource_id,
            "memory_limit": memory_limit,
            "model": model,
        })
        for index, fragment in enumerate(self.fragments):
            if self.fail_after is not None and index >= self.fail_after:
                raise RuntimeError("model backend unavailable")
            yield fragment
        if self.fail_after is not None and self.fail_after >= len(self.fragments):
            raise RuntimeError("stream terminated abnormally")


@pytest.fixture
def invoker() -> ScriptedInvoker:
    return ScriptedInvoker(["Hello", ", ", "friend!"])


@pytest.fixture
def failing_invoker() -> ScriptedInvoker:
    return ScriptedInvoker(["Partial ", "reply"], fail_after=1)
