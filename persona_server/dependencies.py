"""FastAPI dependencies exposing the app-owned registry and invoker."""

from fastapi import Request

from persona.adapters.base import Invoker
from persona.registry import AgentRegistry


def get_registry(request: Request) -> AgentRegistry:
    return request.app.state.registry


def get_invoker(request: Request) -> Invoker:
    return request.app.state.invoker
