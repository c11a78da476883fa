"""Resolve the thread/resource ids that scope a conversation."""

from persona.models.session import Session
from persona.utils.identifiers import generate_resource_id, generate_thread_id


def resolve_session(thread_id: str | None = None, resource_id: str | None = None) -> Session:
    """Fill in whichever ids are missing.

    Supplied ids pass through untouched; nothing checks that they were
    seen before. Resolve once per request and echo the result back so the
    client can resume the same conversation.
    """
    return Session(
        thread_id=thread_id if thread_id else generate_thread_id(),
        resource_id=resource_id if resource_id else generate_resource_id(),
    )
