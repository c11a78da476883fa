"""Interface for the model invocation collaborator."""

from collections.abc import AsyncIterator

from persona.models.agent import DEFAULT_MODEL


class Invoker:
    """Protocol for turning a prompt and a message into streamed text."""

    def invoke(
        self,
        system_prompt: str,
        message: str,
        thread_id: str,
        resource_id: str,
        memory_limit: int,
        *,
        model: str = DEFAULT_MODEL,
    ) -> AsyncIterator[str]:
        """Return a single-pass stream of text fragments.

        Errors surface while iterating; implementations do not retry.
        """
        raise NotImplementedError
