"""ID generation utilities.

Fallback ids are derived from the wall clock in milliseconds. Two calls
inside the same millisecond produce the same token; callers that need
stronger uniqueness should supply their own ids.
"""

import time


def epoch_millis() -> int:
    """Current time as integer milliseconds since the epoch."""
    return time.time_ns() // 1_000_000


def generate_agent_id() -> str:
    """Generate a fallback agent identity for a nameless config."""
    return f"agent_{epoch_millis()}"


def generate_thread_id() -> str:
    """Generate a thread (conversation) ID."""
    return f"thread_{epoch_millis()}"


def generate_resource_id() -> str:
    """Generate a resource (user) ID."""
    return f"user_{epoch_millis()}"
