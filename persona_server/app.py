"""FastAPI application serving persona agents."""

import argparse
import logging
import sys
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from persona.adapters.base import Invoker
from persona.adapters.langchain_invoker import LangChainInvoker
from persona.config import Settings, load_settings, require_credentials
from persona.errors import AgentError, StartupConfigurationMissing
from persona.logging_config import setup_logging
from persona.registry import AgentRegistry
from persona.telemetry import setup_telemetry
from persona_server.agent_routes import router as agent_router
from persona_server.dependencies import get_registry
from persona_server.interact_routes import router as interact_router

logger = logging.getLogger(__name__)

VERSION = "0.1.0"


def _register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(AgentError)
    async def agent_error_handler(request: Request, exc: AgentError) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={"status": "error", "message": exc.message},
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(
            status_code=422,
            content={
                "status": "error",
                "message": "Invalid request",
                "errors": jsonable_encoder(exc.errors()),
            },
        )

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Server error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=500,
            content={"status": "error", "message": "Internal server error"},
        )


def create_app(
    settings: Settings | None = None,
    registry: AgentRegistry | None = None,
    invoker: Invoker | None = None,
) -> FastAPI:
    """Build the API.

    Args:
        settings: runtime settings, read from the environment if omitted
        registry: agent store owned by this app, a fresh one if omitted
        invoker: model collaborator; when omitted a LangChainInvoker is
            built, which requires GROQ_API_KEY

    Raises:
        StartupConfigurationMissing: if no invoker is given and credentials are absent
    """
    settings = settings or load_settings()
    if invoker is None:
        require_credentials(settings)
        invoker = LangChainInvoker(api_key=settings.groq_api_key, base_url=settings.groq_base_url)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        print("=" * 60)
        print("Starting Persona Agents API")
        print("=" * 60)
        setup_telemetry(settings)
        yield

    app = FastAPI(
        title="Persona Agents API",
        description="Create personalized agents and chat with them",
        version=VERSION,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.registry = registry if registry is not None else AgentRegistry(settings.default_model)
    app.state.invoker = invoker

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(agent_router)
    app.include_router(interact_router)
    _register_exception_handlers(app)

    @app.get("/")
    def root() -> dict:
        """index of endpoints."""
        return {
            "message": "Persona Agents API",
            "version": VERSION,
            "endpoints": {
                "create": "POST /create-agent",
                "interact": "POST /interact/{agent_id}",
                "stream": "POST /interact/{agent_id}/stream",
                "agents": "GET /agents",
                "health": "GET /health",
            },
        }

    @app.get("/health")
    def health_check(registry: AgentRegistry = Depends(get_registry)) -> dict:
        """Health check endpoint."""
        return {"status": "ok", "message": "Server is running", "agents": len(registry)}

    return app


def main(argv: list[str] | None = None) -> None:
    settings = load_settings()

    parser = argparse.ArgumentParser(description="Persona Agents API server")
    parser.add_argument("--host", type=str, default=settings.host, help=f"Bind address (default: {settings.host})")
    parser.add_argument("--port", "-p", type=int, default=settings.port, help=f"Port (default: {settings.port})")
    args = parser.parse_args(argv)

    setup_logging(settings.log_level)
    try:
        app = create_app(settings)
    except StartupConfigurationMissing as e:
        print(str(e), file=sys.stderr)
        sys.exit(1)

    print(f"API server running on port {args.port}")
    print("API endpoints available at:")
    print(f"  - http://localhost:{args.port}/create-agent [POST]")
    print(f"  - http://localhost:{args.port}/interact/:agentId [POST]")
    print(f"  - http://localhost:{args.port}/interact/:agentId/stream [POST]")
    print(f"  - http://localhost:{args.port}/health [GET]")

    import uvicorn
    uvicorn.run(app, host=args.host, port=args.port)


if __name__ == "__main__":
    main()
