# errors.py
# Exception hierarchy for the lite agent.
#
# Every error terminates the current invocation. Nothing here is caught
# inside the loop; the invocation boundary in agent.py is the only place
# that turns these into a user-visible failure message.


class AgentError(Exception):
    """Base class for every failure the agent reports to its caller."""


# ---------------------------------------------------------------------------
# Invocation / configuration
# ---------------------------------------------------------------------------


class InvalidInputError(AgentError):
    """Caller-supplied invocation input failed basic shape checks."""


class ConfigurationError(AgentError):
    """Required external configuration (API key, model) is absent."""


# ---------------------------------------------------------------------------
# Model side
# ---------------------------------------------------------------------------


class MalformedOutputError(AgentError):
    """Model response did not conform to the tool/final JSON protocol."""


class ModelResponseError(AgentError):
    """The model endpoint returned no usable completion content."""


class MaxIterationsExceeded(AgentError):
    """The loop used its whole iteration budget without a final answer."""

    def __init__(self, max_iterations: int) -> None:
        self.max_iterations = max_iterations
        super().__init__(
            f"Exceeded max iterations ({max_iterations}) without a final answer."
        )


# ---------------------------------------------------------------------------
# Tool side
# ---------------------------------------------------------------------------


class ToolError(AgentError):
    """Raised by the tool layer. Fatal to the invocation."""


class UnknownToolError(ToolError):
    """The model requested a tool that is not registered."""


class InvalidArgumentsError(ToolError):
    """Tool arguments are missing, extra, or of the wrong type."""


class PathEscapeError(ToolError):
    """A user path resolved outside the sandbox root."""


class ToolExecutionError(ToolError):
    """A filesystem operation failed while running a tool."""
