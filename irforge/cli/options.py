# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Options shared by commands that analyze a single ir_verilog target."""

from pathlib import Path
from typing import Any, Callable

import click

from .utils import parse_key_values

_OUTPUT_OVERRIDE_OPTIONS = (
    ("--module-sig-file", "Module signature filename (default: <basename>.sig.textproto)"),
    ("--schedule-file", "Schedule filename (default: <basename>.schedule.textproto)"),
    ("--verilog-line-map-file", "Verilog line map filename (default: <basename>.verilog_line_map.textproto)"),
    ("--block-ir-file", "Block IR filename (default: <basename>.block.ir)"),
)


def ir_verilog_options(func: Callable[..., Any]) -> Callable[..., Any]:
    """Attach the ir_verilog attribute options to a command."""
    for flag, help_text in reversed(_OUTPUT_OVERRIDE_OPTIONS):
        func = click.option(flag, type=str, default=None, help=help_text)(func)
    func = click.option(
        "--package", "-p", type=str, default="", show_default=True,
        help="Package the outputs are declared in",
    )(func)
    func = click.option(
        "--name", "-n", type=str, default=None,
        help="Target name (default: Verilog basename)",
    )(func)
    func = click.option(
        "--args-file", type=click.Path(exists=True, dir_okay=False, path_type=Path),
        help="YAML mapping of codegen arguments (overridden by --arg)",
    )(func)
    func = click.option(
        "--arg", "-a", "inline_args", multiple=True, callback=parse_key_values, metavar="KEY=VALUE",
        help="Codegen argument (can specify multiple)",
    )(func)
    func = click.option(
        "--verilog-file", "-o", required=True, type=str,
        help="Filename of the generated Verilog file (.sv or .v)",
    )(func)
    return func
