"""Conversation scope passed to the memory collaborator."""

from pydantic import BaseModel


class Session(BaseModel):
    """thread/resource pair; thread ~ conversation, resource ~ user."""

    model_config = {"frozen": True}

    thread_id: str
    resource_id: str
