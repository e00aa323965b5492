# parser.py
# Strict decoder for one model turn.
#
# The model must answer with exactly one JSON object, either
#   {"type": "tool", "name": "...", "args": {...}}
# or
#   {"type": "final", "content": "..."}
# Anything else is a MalformedOutputError. No lenient recovery is attempted.

import json
import re

from agent_lite.errors import MalformedOutputError
from agent_lite.models import Action, FinalAction, ToolAction

_OPENING_FENCE = re.compile(r"^```[A-Za-z0-9_+-]*")


def _reject_constant(token: str) -> None:
    raise ValueError(f"non-standard JSON constant {token}")


def strip_code_fence(text: str) -> str:
    """Trim and drop one surrounding ``` fence (with optional language tag)."""
    text = text.strip()
    if text.startswith("```"):
        text = _OPENING_FENCE.sub("", text, count=1)
        if text.endswith("```"):
            text = text[:-3]
        text = text.strip()
    return text


def parse_model_output(raw: str) -> Action:
    """
    Decode raw model text into a ToolAction or FinalAction.

    Tool arguments are passed through untouched (None/absent becomes {});
    checking them is the tool layer's job.
    """
    text = strip_code_fence(raw)

    try:
        payload = json.loads(text, parse_constant=_reject_constant)
    except (ValueError, RecursionError) as exc:
        raise MalformedOutputError("Invalid model output format (expected JSON).") from exc

    if not isinstance(payload, dict):
        raise MalformedOutputError("Invalid model output format (expected JSON object).")

    kind = payload.get("type")
    if kind == "tool":
        name = payload.get("name")
        if not isinstance(name, str) or not name.strip():
            raise MalformedOutputError("Tool call missing name.")
        args = payload.get("args")
        return ToolAction(name=name, args={} if args is None else args)

    if kind == "final":
        content = payload.get("content")
        if not isinstance(content, str):
            raise MalformedOutputError("Final response missing content.")
        return FinalAction(content=content)

    raise MalformedOutputError("Invalid model output format (unknown type).")
