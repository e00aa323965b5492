# tools.py
# Tool registry — the fixed file tool set, confined to the sandbox.
# The agent loop imports TOOL_DEFINITIONS and run_tool() and never calls the
# handlers directly.
#
# Every tool decodes its own arguments with a pydantic model before anything
# touches the filesystem.

import os
from dataclasses import dataclass
from typing import Any, Callable

from pydantic import BaseModel, ConfigDict, Field, StrictStr, ValidationError, field_validator

from agent_lite.errors import InvalidArgumentsError, ToolExecutionError, UnknownToolError
from agent_lite.models import ToolDefinition
from agent_lite.sandbox import ensure_directory, resolve_sandbox_path

EMPTY_LISTING = "(empty)"


# ---------------------------------------------------------------------------
# Argument models
# ---------------------------------------------------------------------------


def _not_blank(value: str, field: str) -> str:
    if not value.strip():
        raise ValueError(f"{field} must be a non-empty string.")
    return value


class ListFilesArgs(BaseModel):
    model_config = ConfigDict(extra="forbid")


class ReadFileArgs(BaseModel):
    file_path: StrictStr = Field(..., alias="filePath")

    @field_validator("file_path")
    @classmethod
    def _check_path(cls, value: str) -> str:
        return _not_blank(value, "filePath")


class WriteFileArgs(BaseModel):
    file_path: StrictStr = Field(..., alias="filePath")
    content: StrictStr

    @field_validator("file_path")
    @classmethod
    def _check_path(cls, value: str) -> str:
        return _not_blank(value, "filePath")

    @field_validator("content")
    @classmethod
    def _check_content(cls, value: str) -> str:
        return _not_blank(value, "content")


# ---------------------------------------------------------------------------
# Handlers
# ---------------------------------------------------------------------------


def _tool_list_files(root: str, args: ListFilesArgs) -> str:
    try:
        names = sorted(os.listdir(root))
    except OSError as exc:
        raise ToolExecutionError(f"list_files failed: {exc}") from exc
    return "\n".join(names) if names else EMPTY_LISTING


def _tool_read_file(root: str, args: ReadFileArgs) -> str:
    target = resolve_sandbox_path(root, args.file_path)
    try:
        with open(target, "r", encoding="utf-8", newline="") as fh:
            return fh.read()
    except (OSError, ValueError) as exc:
        raise ToolExecutionError(f"read_file failed for {args.file_path}: {exc}") from exc


def _tool_write_file(root: str, args: WriteFileArgs) -> str:
    target = resolve_sandbox_path(root, args.file_path)
    try:
        os.makedirs(os.path.dirname(target), exist_ok=True)
        with open(target, "w", encoding="utf-8", newline="") as fh:
            fh.write(args.content)
    except (OSError, ValueError) as exc:
        raise ToolExecutionError(f"write_file failed for {args.file_path}: {exc}") from exc
    return f"Wrote {args.file_path}"


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class RegisteredTool:
    definition: ToolDefinition
    args_model: type[BaseModel]
    handler: Callable[[str, Any], str]


TOOLS: dict[str, RegisteredTool] = {
    tool.definition.name: tool
    for tool in (
        RegisteredTool(
            ToolDefinition(
                name="list_files",
                description="List top-level files in the sandbox.",
                schema={"type": "object", "properties": {}, "additionalProperties": False},
            ),
            ListFilesArgs,
            _tool_list_files,
        ),
        RegisteredTool(
            ToolDefinition(
                name="read_file",
                description="Read a file under the sandbox. Provide a relative filePath.",
                schema={
                    "type": "object",
                    "properties": {"filePath": {"type": "string"}},
                    "required": ["filePath"],
                    "additionalProperties": False,
                },
            ),
            ReadFileArgs,
            _tool_read_file,
        ),
        RegisteredTool(
            ToolDefinition(
                name="write_file",
                description="Write a file under the sandbox. Provide relative filePath and content.",
                schema={
                    "type": "object",
                    "properties": {
                        "filePath": {"type": "string"},
                        "content": {"type": "string"},
                    },
                    "required": ["filePath", "content"],
                    "additionalProperties": False,
                },
            ),
            WriteFileArgs,
            _tool_write_file,
        ),
    )
}

TOOL_DEFINITIONS: tuple[ToolDefinition, ...] = tuple(t.definition for t in TOOLS.values())


# ---------------------------------------------------------------------------
# Dispatch
# ---------------------------------------------------------------------------


def _describe(exc: ValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(p) for p in error["loc"])
        parts.append(f"{location}: {error['msg']}" if location else error["msg"])
    return "; ".join(parts)


def _decode_args(name: str, model: type[BaseModel], args: Any) -> BaseModel:
    if not isinstance(args, dict):
        raise InvalidArgumentsError("args must be an object.")
    try:
        return model.model_validate(args)
    except ValidationError as exc:
        raise InvalidArgumentsError(f"Invalid arguments for {name}: {_describe(exc)}") from exc


def run_tool(name: str, args: Any, root: str) -> str:
    """
    Validate and run one tool call against the sandbox at `root`.

    Unknown names and bad arguments are rejected before the sandbox is
    created or any file is touched.
    """
    tool = TOOLS.get(name)
    if tool is None:
        raise UnknownToolError(f"Unknown tool: {name}")

    decoded = _decode_args(name, tool.args_model, args)

    try:
        ensure_directory(root)
    except OSError as exc:
        raise ToolExecutionError(f"Cannot create sandbox at {root}: {exc}") from exc

    return tool.handler(root, decoded)
