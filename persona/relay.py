"""Relay a model stream to a caller through an asyncio queue.

A producer task drains the collaborator's fragments onto the queue and
closes it with a single terminal event. The consumer side yields events
in the order they were produced. Fragments that were already relayed
stay relayed when the stream fails.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
from collections.abc import AsyncIterable, AsyncIterator
from dataclasses import dataclass

from persona.errors import APOLOGY_MESSAGE

logger = logging.getLogger(__name__)

CHUNK = "chunk"
DONE = "done"
ERROR = "error"


@dataclass(frozen=True)
class RelayEvent:
    """One item on the relay channel."""

    kind: str
    text: str = ""
    # set on error events only
    cause: BaseException | None = None

    @property
    def terminal(self) -> bool:
        return self.kind != CHUNK


async def relay(fragments: AsyncIterable[str], label: str = "agent") -> AsyncIterator[RelayEvent]:
    """Yield chunk events for each fragment, then one done or error event.

    Args:
        fragments: the collaborator's text stream
        label: name used in log lines

    Failures in the stream are logged and turned into an error event
    carrying the apology message; they never propagate to the caller.
    """
    # one slot: the producer never reads further ahead than the next event
    queue: asyncio.Queue[RelayEvent] = asyncio.Queue(maxsize=1)

    async def produce() -> None:
        try:
            async for fragment in fragments:
                await queue.put(RelayEvent(CHUNK, fragment))
        except Exception as exc:
            logger.exception("Invocation failed for %s", label)
            await queue.put(RelayEvent(ERROR, APOLOGY_MESSAGE, cause=exc))
        else:
            await queue.put(RelayEvent(DONE))

    producer = asyncio.create_task(produce())
    try:
        while True:
            event = await queue.get()
            yield event
            if event.terminal:
                break
    finally:
        # consumer went away early (e.g. client disconnect)
        if not producer.done():
            producer.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await producer
