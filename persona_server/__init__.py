"""HTTP API for persona agents."""

from persona_server.app import create_app

__all__ = ["create_app"]
