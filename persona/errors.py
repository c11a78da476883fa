"""Error types raised by persona agents.

Every AgentError carries the HTTP status the API layer renders it with.
StartupConfigurationMissing is not an AgentError: it is fatal and is
never turned into a response.
"""

APOLOGY_MESSAGE = "Sorry, I encountered an error while processing your request."


class AgentError(Exception):
    """Base class for caller-facing agent errors."""

    status_code: int = 500

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ConfigurationMissing(AgentError):
    """No configuration object was supplied at all."""

    status_code = 400

    def __init__(self, message: str = "Missing agent configuration") -> None:
        super().__init__(message)


class MessageMissing(AgentError):
    """A converse call omitted the message."""

    status_code = 400

    def __init__(self, message: str = "Missing message") -> None:
        super().__init__(message)


class AgentNotFound(AgentError):
    """No agent is registered under the requested identity."""

    status_code = 404

    def __init__(self, agent_id: str) -> None:
        self.agent_id = agent_id
        super().__init__(f"Agent with ID {agent_id} not found")


class InvocationFailure(AgentError):
    """The model collaborator failed or its stream ended abnormally."""

    status_code = 500

    def __init__(self, cause: BaseException | None = None) -> None:
        self.cause = cause
        super().__init__("Agent failed to process the message")


class StartupConfigurationMissing(RuntimeError):
    """Required credentials are absent at process start."""
