# agent.py
# Lite agent loop.
#
# The LiteAgent owns all control flow. The model is a passive responder:
# each turn it returns one JSON action, the loop decodes it, runs the tool
# against the sandbox and feeds the result back as an observation.
#
# Control flow per iteration:
#   iteration cap → model call → record assistant turn → parse
#   → final: done  |  tool: execute → step + observation → next iteration
#
# Every error is fatal to the invocation. Nothing is retried or re-prompted.
# All terminal output is delegated to display.py — no formatting here.

import json
from typing import Any

from openai import OpenAIError
from pydantic import ValidationError

from agent_lite import display
from agent_lite.config import sandbox_root
from agent_lite.errors import AgentError, InvalidInputError, MaxIterationsExceeded
from agent_lite.llm import ChatClient, get_chat_client
from agent_lite.models import (
    DEFAULT_MAX_ITERATIONS,
    FinalAction,
    FinalStep,
    Message,
    RunRequest,
    RunResult,
    Step,
    ToolDefinition,
    ToolStep,
)
from agent_lite.parser import parse_model_output
from agent_lite.tools import TOOL_DEFINITIONS, run_tool


# ---------------------------------------------------------------------------
# System prompt
# ---------------------------------------------------------------------------


def build_system_prompt(tools: tuple[ToolDefinition, ...] = TOOL_DEFINITIONS) -> str:
    """Render the action protocol and the tool list the parser accepts."""
    tool_lines = "\n".join(
        f"- {tool.name}: {tool.description}\n  schema: {json.dumps(tool.schema_)}"
        for tool in tools
    )
    return "\n".join(
        [
            "You are a tool-using agent.",
            "You must respond with valid JSON only.",
            "Use exactly one of the following JSON shapes:",
            '{ "type": "tool", "name": "tool_name", "args": { ... } }',
            '{ "type": "final", "content": "your answer" }',
            "If a tool is needed, respond with type=tool.",
            "When you are done, respond with type=final.",
            "Do not wrap JSON in markdown fences.",
            "Available tools:",
            tool_lines,
        ]
    )


def _observation(name: str, result: str) -> str:
    return json.dumps({"type": "observation", "name": name, "result": result})


# ---------------------------------------------------------------------------
# LiteAgent
# ---------------------------------------------------------------------------


class LiteAgent:
    """
    Reason / act / observe loop over the sandboxed file tools.

    One instance may serve many invocations. The message history and step
    trace are local to each run() call and discarded when it returns.

    Example:
        agent = LiteAgent(client=get_chat_client(), sandbox="/tmp/sandbox-lite")
        result = agent.run(RunRequest(input="List the sandbox files."))
    """

    def __init__(
        self,
        client: ChatClient,
        sandbox: str,
        tools: tuple[ToolDefinition, ...] = TOOL_DEFINITIONS,
    ) -> None:
        self._client = client
        self._sandbox = sandbox
        self._system_prompt = build_system_prompt(tools)

    def _call_model(self, messages: list[Message]) -> str:
        return self._client.complete([m.model_dump() for m in messages])

    # ------------------------------------------------------------------
    # Loop
    # ------------------------------------------------------------------

    def _loop(self, request: RunRequest) -> RunResult:
        messages = [
            Message(role="system", content=self._system_prompt),
            Message(role="user", content=request.input),
        ]
        steps: list[Step] = []

        for iteration in range(request.max_iterations):
            display.model_call(iteration, request.max_iterations)
            content = self._call_model(messages)
            # Recorded before parsing so a rejected turn stays in the history.
            messages.append(Message(role="assistant", content=content))
            display.model_response(content)

            action = parse_model_output(content)

            if isinstance(action, FinalAction):
                steps.append(FinalStep(content=action.content))
                display.final_answer(action.content)
                if request.include_steps:
                    display.step_summary(steps)
                return RunResult(
                    output=action.content,
                    steps=steps if request.include_steps else None,
                )

            display.tool_action(action.name, action.args)
            result = run_tool(action.name, action.args, self._sandbox)
            display.observation(result)

            steps.append(ToolStep(name=action.name, args=action.args, result=result))
            messages.append(Message(role="user", content=_observation(action.name, result)))

        raise MaxIterationsExceeded(request.max_iterations)

    def run(self, request: RunRequest) -> RunResult:
        """
        Drive the loop to a final answer.

        Raises MalformedOutputError, ToolError subclasses, MaxIterationsExceeded,
        ModelResponseError or SDK errors unchanged; no partial result is returned.
        """
        display.request_received(request.input, self._sandbox, request.max_iterations)
        try:
            return self._loop(request)
        except (AgentError, OpenAIError) as exc:
            display.halt(f"{type(exc).__name__}: {exc}")
            raise


# ---------------------------------------------------------------------------
# Invocation contract
# ---------------------------------------------------------------------------


def parse_request(body: Any) -> RunRequest:
    """Validate a raw request body. Raises InvalidInputError."""
    if not isinstance(body, dict):
        raise InvalidInputError("request body must be a JSON object.")
    try:
        return RunRequest.model_validate(body)
    except ValidationError as exc:
        errors = exc.errors()
        if any(error["loc"] and error["loc"][0] == "input" for error in errors):
            raise InvalidInputError("input must be a non-empty string.") from exc
        first = errors[0]
        field = ".".join(str(p) for p in first["loc"])
        raise InvalidInputError(f"{field}: {first['msg']}") from exc


def _build_agent(client: ChatClient | None, sandbox: str | None) -> LiteAgent:
    return LiteAgent(
        client=client if client is not None else get_chat_client(),
        sandbox=sandbox if sandbox is not None else sandbox_root(),
    )


def run_lite_agent(
    input: Any,
    include_steps: Any = False,
    max_iterations: Any = DEFAULT_MAX_ITERATIONS,
    *,
    client: ChatClient | None = None,
    sandbox: str | None = None,
) -> dict[str, Any]:
    """
    Run one invocation and return {"output": ...} plus "steps" when requested.

    Input is checked before configuration is read, and configuration before
    the first model call.
    """
    request = parse_request(
        {"input": input, "include_steps": include_steps, "max_iterations": max_iterations}
    )
    return _build_agent(client, sandbox).run(request).to_payload()


def handle_run_lite(
    body: Any,
    *,
    client: ChatClient | None = None,
    sandbox: str | None = None,
) -> tuple[int, dict[str, Any]]:
    """
    Invocation boundary: map a request body to (status, payload).

    400 for bad input, 500 for any other failure, each as {"error": message}.
    No exception escapes this function.
    """
    try:
        request = parse_request(body)
        return 200, _build_agent(client, sandbox).run(request).to_payload()
    except InvalidInputError as exc:
        return 400, {"error": str(exc)}
    except Exception as exc:
        return 500, {"error": str(exc) or "Unknown error"}
