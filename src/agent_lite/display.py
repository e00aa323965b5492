# display.py
# All terminal output for the lite agent.
#
# This module owns presentation entirely. agent.py never formats strings —
# it calls named functions here.
#
# Colour language:
#   cyan    — request / loop scaffolding
#   blue    — model calls and raw responses
#   magenta — actions and observations
#   green   — final answers
#   red     — failures and halts

import json
from typing import Any

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.rule import Rule
from rich.table import Table
from rich.text import Text

from agent_lite.models import FinalStep, Step

console = Console()


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _label(tag: str, color: str) -> Text:
    t = Text()
    t.append(f" {tag} ", style=f"bold white on {color}")
    return t


def _mono(value: str, max_len: int = 120) -> str:
    if len(value) > max_len:
        return value[:max_len] + "…"
    return value


def _args(args: Any) -> str:
    try:
        return json.dumps(args, ensure_ascii=False)
    except (TypeError, ValueError):
        return repr(args)


# ---------------------------------------------------------------------------
# Request entry
# ---------------------------------------------------------------------------


def request_received(task: str, sandbox: str, max_iterations: int) -> None:
    console.print()
    console.print(Rule("[cyan]NEW REQUEST[/cyan]", style="cyan"))
    # Task text is user input; Text avoids rich markup interpretation.
    console.print(
        Panel(
            Text.assemble(
                (task, "white"),
                "\n\n",
                ("Sandbox        : ", "dim"),
                (sandbox, "white"),
                "\n",
                ("Max iterations : ", "dim"),
                (str(max_iterations), "white"),
            ),
            title=_label("TASK", "cyan"),
            border_style="cyan",
            padding=(0, 2),
        )
    )


# ---------------------------------------------------------------------------
# Loop
# ---------------------------------------------------------------------------


def model_call(iteration: int, max_iterations: int) -> None:
    console.print()
    console.print(
        _label("MODEL", "blue"),
        Text(f" → iteration {iteration + 1}/{max_iterations}", style="blue"),
    )


def model_response(content: str) -> None:
    console.print(Text(f"  {_mono(content.strip(), 200)}", style="dim blue"))


def tool_action(name: str, args: Any) -> None:
    line = Text("  Action   ", style="magenta")
    line.append(name, style="bold white")
    line.append(f"  {_args(args)}", style="dim")
    console.print(line)


def observation(result: str) -> None:
    line = Text("  Observe  ", style="magenta")
    line.append(_mono(result.replace("\n", " | "), 140), style="white")
    console.print(line)


def final_answer(content: str) -> None:
    console.print()
    console.print(
        Panel(
            Text(content or "(no content)", style="white"),
            title=_label("FINAL", "green"),
            border_style="green",
            padding=(1, 2),
        )
    )


def halt(reason: str) -> None:
    console.print()
    console.print(
        Panel(
            Text(reason, style="bold white"),
            title=_label("HALT", "red"),
            border_style="red",
            padding=(0, 2),
        )
    )
    console.print()


# ---------------------------------------------------------------------------
# Step trace
# ---------------------------------------------------------------------------


def step_summary(steps: list[Step]) -> None:
    table = Table(
        box=box.SIMPLE_HEAVY,
        border_style="dim",
        show_header=True,
        header_style="bold dim",
        padding=(0, 1),
    )
    table.add_column("#", justify="center", width=4)
    table.add_column("Type", width=6)
    table.add_column("Tool", width=12)
    table.add_column("Result", style="dim white")

    for index, step in enumerate(steps, start=1):
        if isinstance(step, FinalStep):
            table.add_row(str(index), step.type, "", Text(_mono(step.content, 60)))
        else:
            table.add_row(str(index), step.type, step.name, Text(_mono(step.result, 60)))

    console.print(
        Panel(
            table,
            title="[dim]STEP TRACE[/dim]",
            border_style="dim",
            padding=(0, 1),
        )
    )
