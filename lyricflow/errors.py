"""Error taxonomy shared by the generation client, the agents and the orchestrator."""

from __future__ import annotations


class LyricflowError(Exception):
    """Base class for every error raised by the lyric pipeline."""

    code = "LYRICFLOW_ERROR"


class ConfigurationError(LyricflowError):
    """Bad input the user has to fix themselves. Never retried."""

    code = "CONFIGURATION"


class MissingCredentialsError(ConfigurationError):
    """API key absent, malformed, or rejected by the provider."""

    code = "MISSING_CREDENTIALS"

    def __init__(self, message: str = "API Key is missing. Please configure it in the sidebar.") -> None:
        super().__init__(message)


class TransientProviderError(LyricflowError):
    """Network blip, provider 5xx or timeout. Retried with backoff."""

    code = "PROVIDER_ERROR"


class EmptyResponseError(TransientProviderError):
    """The provider answered without any response text."""

    code = "NO_RESPONSE_TEXT"


class ProviderRequestError(LyricflowError):
    """The provider refused the request itself (bad model id, malformed payload). Never retried."""

    code = "PROVIDER_REQUEST_REJECTED"


class ParseFailureError(LyricflowError):
    """A schema-constrained call returned text that is not valid JSON for the schema."""

    code = "PARSE_FAILURE"

    def __init__(self, message: str = "Failed to parse agent output", raw_text: str | None = None) -> None:
        super().__init__(message)
        self.raw_text = raw_text


class AgentError(LyricflowError):
    """Generic wrapped failure of one agent stage."""

    code = "AGENT_ERROR"

    def __init__(self, agent: str, message: str) -> None:
        super().__init__(f"{agent} agent failed: {message}")
        self.agent = agent


RETRYABLE_ERRORS: tuple[type[Exception], ...] = (TransientProviderError, ParseFailureError)


def wrap_agent_error(agent: str, error: BaseException) -> LyricflowError:
    """Return credential errors verbatim, wrap everything else into an AgentError."""
    if isinstance(error, ConfigurationError):
        return error
    if isinstance(error, AgentError):
        return error
    return AgentError(agent, str(error) or type(error).__name__)
