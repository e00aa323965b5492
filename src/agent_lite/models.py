# models.py
# Data contracts for the lite agent loop.
# No business logic lives here — pure schema and validation.

from typing import Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictInt, StrictStr, field_validator

DEFAULT_MAX_ITERATIONS = 6


# ---------------------------------------------------------------------------
# Actions — one decoded model turn
# ---------------------------------------------------------------------------


class ToolAction(BaseModel):
    """The model asks the harness to run a registered tool."""

    type: Literal["tool"] = "tool"
    name: str
    args: Any = Field(default_factory=dict, description="Opaque until the tool decodes it.")


class FinalAction(BaseModel):
    """The model's terminal answer. Empty content is allowed."""

    type: Literal["final"] = "final"
    content: str


Action = Union[ToolAction, FinalAction]


# ---------------------------------------------------------------------------
# Step trace
# ---------------------------------------------------------------------------


class ToolStep(BaseModel):
    type: Literal["tool"] = "tool"
    name: str
    args: Any
    result: str


class FinalStep(BaseModel):
    type: Literal["final"] = "final"
    content: str


Step = Union[ToolStep, FinalStep]


# ---------------------------------------------------------------------------
# Conversation / tools
# ---------------------------------------------------------------------------


class Message(BaseModel):
    role: Literal["system", "user", "assistant"]
    content: str


class ToolDefinition(BaseModel):
    """Name, description and argument schema as rendered into the system prompt."""

    model_config = ConfigDict(frozen=True)

    name: str
    description: str
    schema_: dict[str, Any] = Field(..., alias="schema")


# ---------------------------------------------------------------------------
# Invocation contract
# ---------------------------------------------------------------------------


class RunRequest(BaseModel):
    """One /run-lite style invocation."""

    model_config = ConfigDict(populate_by_name=True)

    input: StrictStr
    include_steps: StrictBool = Field(default=False, alias="includeSteps")
    max_iterations: StrictInt = Field(default=DEFAULT_MAX_ITERATIONS, ge=1, alias="maxIterations")

    @field_validator("input")
    @classmethod
    def _input_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("input must be a non-empty string.")
        return value


class RunResult(BaseModel):
    output: str
    steps: list[Step] | None = None

    def to_payload(self) -> dict[str, Any]:
        """Wire shape: `steps` is present only when tracing was requested."""
        payload: dict[str, Any] = {"output": self.output}
        if self.steps is not None:
            payload["steps"] = [step.model_dump() for step in self.steps]
        return payload
