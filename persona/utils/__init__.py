"""Utility functions for persona agents."""

from persona.utils.identifiers import (
    epoch_millis,
    generate_agent_id,
    generate_thread_id,
    generate_resource_id,
)

__all__ = [
    "epoch_millis",
    "generate_agent_id",
    "generate_thread_id",
    "generate_resource_id",
]
