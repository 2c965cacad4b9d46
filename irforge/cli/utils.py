# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""CLI utility functions for output formatting and user interaction."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import click
from pydantic import ValidationError
from rich.console import Console

from irforge._internal.io.yaml import deep_merge, load_yaml

console = Console()


def success(message: str) -> None:
    console.print(f"[green]✓[/green] {message}")


def parse_key_values(ctx: click.Context, param: click.Parameter, values: tuple[str, ...]) -> dict[str, str]:
    """Click callback turning repeated ``key=value`` options into a dict."""
    result: dict[str, str] = {}
    for item in values:
        key, sep, value = item.partition("=")
        if not sep or not key:
            raise click.BadParameter(f"expected KEY=VALUE, got {item!r}", ctx=ctx, param=param)
        result[key.strip()] = value
    return result


def collect_codegen_args(args_file: Path | None, inline_args: dict[str, str]) -> dict[str, Any]:
    """Codegen arguments from an optional YAML file, overlaid with inline ``-a`` args."""
    file_args = load_yaml(args_file) if args_file else {}
    return deep_merge(file_args, inline_args)


def validation_details(error: ValidationError) -> list[str]:
    """One ``field.path: message`` line per pydantic validation error."""
    return [f"{'.'.join(str(x) for x in err['loc'])}: {err['msg']}" for err in error.errors()]
