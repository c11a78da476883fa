"""API routes for talking to a registered agent.

POST /interact/{agent_id} buffers the whole reply; the /stream variant
relays fragments as newline-delimited JSON while they are produced.
"""

import json
from collections.abc import AsyncIterator
from contextlib import aclosing

from fastapi import APIRouter, Body, Depends
from fastapi.responses import JSONResponse, StreamingResponse
from pydantic import BaseModel, Field

from persona.adapters.base import Invoker
from persona.conversation import run_conversation, stream_conversation
from persona.errors import MessageMissing
from persona.models.session import Session
from persona.registry import AgentRegistry
from persona.relay import CHUNK, DONE, RelayEvent
from persona.sessions import resolve_session
from persona_server.dependencies import get_invoker, get_registry

router = APIRouter()


class InteractRequest(BaseModel):
    """request body for a conversation turn."""

    model_config = {"populate_by_name": True}

    message: str | None = None
    thread_id: str | None = Field(default=None, alias="threadId")
    resource_id: str | None = Field(default=None, alias="resourceId")


def _session_fields(session: Session) -> dict:
    return {"threadId": session.thread_id, "resourceId": session.resource_id}


@router.post("/interact/{agent_id}")
async def interact(
    agent_id: str,
    request: InteractRequest | None = Body(default=None),
    registry: AgentRegistry = Depends(get_registry),
    invoker: Invoker = Depends(get_invoker),
):
    """send a message and return the complete reply."""
    request = request or InteractRequest()
    if not request.message:
        raise MessageMissing()

    definition = registry.require(agent_id)
    session = resolve_session(request.thread_id, request.resource_id)

    result = await run_conversation(definition, request.message, session, invoker)
    if result.error is not None:
        return JSONResponse(
            status_code=result.error.status_code,
            content={
                "status": "error",
                "message": result.error.message,
                "response": result.response,
                **_session_fields(session),
            },
        )

    return {
        "status": "success",
        "response": result.response,
        **_session_fields(session),
    }


async def _ndjson(events: AsyncIterator[RelayEvent], session: Session) -> AsyncIterator[str]:
    async with aclosing(events):
        async for event in events:
            if event.kind == CHUNK:
                payload = {"type": "chunk", "text": event.text}
            elif event.kind == DONE:
                payload = {"type": "done", "status": "success", **_session_fields(session)}
            else:
                payload = {
                    "type": "error",
                    "status": "error",
                    "message": event.text,
                    **_session_fields(session),
                }
            yield json.dumps(payload) + "\n"


@router.post("/interact/{agent_id}/stream")
async def interact_stream(
    agent_id: str,
    request: InteractRequest | None = Body(default=None),
    registry: AgentRegistry = Depends(get_registry),
    invoker: Invoker = Depends(get_invoker),
) -> StreamingResponse:
    """send a message and stream the reply as NDJSON lines."""
    request = request or InteractRequest()
    if not request.message:
        raise MessageMissing()

    definition = registry.require(agent_id)
    session = resolve_session(request.thread_id, request.resource_id)
    events = stream_conversation(definition, request.message, session, invoker)

    return StreamingResponse(
        _ndjson(events, session),
        media_type="application/x-ndjson",
        headers={"X-Thread-Id": session.thread_id, "X-Resource-Id": session.resource_id},
    )
