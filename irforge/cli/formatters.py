# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

from __future__ import annotations  # PEP 563: Postponed evaluation of annotations

from typing import Any, Iterable

from rich.console import Console as RichConsole
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table

from irforge.build.actions import Action, ShellAction
from irforge.build.providers import BuiltTarget
from irforge.codegen.providers import CodegenInfo


class ActionFormatter:
    """Formatter for displaying planned artifacts and registered actions."""

    def __init__(self, console: RichConsole | None = None):
        self.console = console or RichConsole()

    def format_codegen_info(self, target: BuiltTarget) -> Table:
        info = target[CodegenInfo]
        table = Table(title=f"Codegen outputs of {target.label}", show_header=True, header_style="bold")
        table.add_column("Artifact", style="cyan", no_wrap=True)
        table.add_column("Path")

        for name, value in info.to_dict().items():
            if value is None:
                value = "[dim]-[/dim]"
            table.add_row(name, str(value))
        return table

    def format_action(self, action: Action) -> Panel:
        if isinstance(action, ShellAction):
            title = f"[bold]{action.mnemonic}[/bold] {action.progress_message}"
            body = action.command.replace(" --", " \\\n  --")
            return Panel(Syntax(body, "bash", word_wrap=True), title=title, title_align="left")
        mode = "executable" if action.is_executable else "file"
        return Panel(
            Syntax(action.content, "bash", word_wrap=True),
            title=f"[bold]Write[/bold] {action.output.path} ({mode})",
            title_align="left",
        )

    def show(self, target: BuiltTarget, actions: Iterable[Action]) -> None:
        if CodegenInfo in target:
            self.console.print(self.format_codegen_info(target))
        for action in actions:
            self.console.print(self.format_action(action))


def action_to_dict(action: Action) -> dict[str, Any]:
    if isinstance(action, ShellAction):
        return {
            "mnemonic": action.mnemonic,
            "command": action.command,
            "inputs": [f.path for f in action.inputs],
            "outputs": [f.path for f in action.outputs],
            "progress_message": action.progress_message,
        }
    return {
        "mnemonic": "FileWrite",
        "output": action.output.path,
        "content": action.content,
        "is_executable": action.is_executable,
    }


def target_to_dict(target: BuiltTarget, actions: Iterable[Action]) -> dict[str, Any]:
    data: dict[str, Any] = {"label": str(target.label)}
    if CodegenInfo in target:
        data["codegen_info"] = target[CodegenInfo].to_dict()
    data["files"] = [f.path for f in target.default_info.files]
    data["actions"] = [action_to_dict(a) for a in actions]
    return data
