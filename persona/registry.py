"""In-process agent registry.

The registry is owned by whoever builds it (the FastAPI app keeps one on
app.state, the CLI keeps its own) and is never persisted. Writes replace
the whole entry for a key; there is no merge.
"""

import logging
import threading

from persona.errors import AgentNotFound
from persona.models.agent import DEFAULT_MODEL, AgentConfig, AgentDefinition
from persona.normalizer import normalize

logger = logging.getLogger(__name__)


class AgentRegistry:
    """Maps agent identity to its AgentDefinition."""

    def __init__(self, default_model: str = DEFAULT_MODEL) -> None:
        self.default_model = default_model
        self._agents: dict[str, AgentDefinition] = {}
        self._lock = threading.Lock()

    def register(self, identity: str, definition: AgentDefinition) -> None:
        """Store a definition, replacing anything already at that identity."""
        with self._lock:
            replaced = identity in self._agents
            self._agents[identity] = definition
        logger.info(
            "%s agent %s (model=%s)",
            "Replaced" if replaced else "Registered",
            identity,
            definition.model,
        )

    def create(self, config: AgentConfig | None = None) -> AgentDefinition:
        """Normalize a config and register the result under its identity."""
        definition = normalize(config, default_model=self.default_model)
        self.register(definition.identity, definition)
        return definition

    def resolve(self, identity: str) -> AgentDefinition | None:
        """Look up a definition; None when nothing is registered."""
        with self._lock:
            return self._agents.get(identity)

    def require(self, identity: str) -> AgentDefinition:
        """Like resolve, but raises AgentNotFound on a miss."""
        definition = self.resolve(identity)
        if definition is None:
            raise AgentNotFound(identity)
        return definition

    def list(self) -> list[AgentDefinition]:
        """All registered definitions ordered by identity."""
        with self._lock:
            return [self._agents[key] for key in sorted(self._agents)]

    def clear(self) -> None:
        with self._lock:
            self._agents.clear()

    def __contains__(self, identity: object) -> bool:
        with self._lock:
            return identity in self._agents

    def __len__(self) -> int:
        with self._lock:
            return len(self._agents)
