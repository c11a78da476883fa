"""API routes for creating and inspecting agents."""

from fastapi import APIRouter, Body, Depends

from persona.errors import ConfigurationMissing
from persona.models.agent import AgentConfig
from persona.registry import AgentRegistry
from persona_server.dependencies import get_registry

router = APIRouter()


@router.post("/create-agent")
def create_agent(
    config: AgentConfig | None = Body(default=None),
    registry: AgentRegistry = Depends(get_registry),
) -> dict:
    """create an agent from a partial configuration.

    An existing agent with the same identity is replaced.
    """
    if config is None:
        raise ConfigurationMissing()

    definition = registry.create(config)
    return {"status": "success", "agent": definition.public_view()}


@router.get("/agents")
def list_agents(registry: AgentRegistry = Depends(get_registry)) -> list[dict]:
    """list all registered agents."""
    return [definition.public_view() for definition in registry.list()]


@router.get("/agents/{agent_id}")
def get_agent(agent_id: str, registry: AgentRegistry = Depends(get_registry)) -> dict:
    """get a single agent's normalized configuration."""
    return registry.require(agent_id).public_view()
