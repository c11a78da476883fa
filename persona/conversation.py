"""Run a conversation turn against a registered agent.

stream_conversation relays fragments as they arrive;
run_conversation buffers them into a single reply.
"""

import logging
from collections.abc import AsyncIterator

from pydantic import BaseModel

from persona.adapters.base import Invoker
from persona.errors import APOLOGY_MESSAGE, InvocationFailure, MessageMissing
from persona.models.agent import AgentDefinition
from persona.models.session import Session
from persona.relay import CHUNK, DONE, RelayEvent, relay

logger = logging.getLogger(__name__)


class ConversationResult(BaseModel):
    """Buffered outcome of one turn.

    error holds the InvocationFailure when the turn did not complete.
    """

    model_config = {"arbitrary_types_allowed": True}

    success: bool
    response: str
    thread_id: str
    resource_id: str
    error: InvocationFailure | None = None


def stream_conversation(
    definition: AgentDefinition,
    message: str | None,
    session: Session,
    invoker: Invoker,
) -> AsyncIterator[RelayEvent]:
    """Start a turn and return its relay events.

    Raises:
        MessageMissing: if message is empty
    """
    if not message:
        raise MessageMissing()

    logger.info(
        "Conversation for agent: %s, thread: %s, resource: %s",
        definition.identity,
        session.thread_id,
        session.resource_id,
    )

    async def fragments() -> AsyncIterator[str]:
        stream = invoker.invoke(
            definition.system_prompt,
            message,
            session.thread_id,
            session.resource_id,
            definition.max_memory_messages,
            model=definition.model,
        )
        async for fragment in stream:
            yield fragment

    return relay(fragments(), label=definition.identity)


async def run_conversation(
    definition: AgentDefinition,
    message: str | None,
    session: Session,
    invoker: Invoker,
) -> ConversationResult:
    """Run a turn and collect the full reply.

    On failure the reply is the apology message and success is False.
    """
    parts: list[str] = []
    error: InvocationFailure | None = None
    async for event in stream_conversation(definition, message, session, invoker):
        if event.kind == CHUNK:
            parts.append(event.text)
        elif event.kind != DONE:
            error = InvocationFailure(event.cause)

    return ConversationResult(
        success=error is None,
        response="".join(parts) if error is None else APOLOGY_MESSAGE,
        thread_id=session.thread_id,
        resource_id=session.resource_id,
        error=error,
    )
