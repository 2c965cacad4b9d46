# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

from __future__ import annotations

import json
import logging
import posixpath
from pathlib import Path
from typing import TYPE_CHECKING

import click
from pydantic import ValidationError

from irforge.build.artifacts import Label
from irforge.build.context import RuleContext
from irforge.codegen.filenames import split_filename
from irforge.errors import ConfigurationError

from ..formatters import ActionFormatter, target_to_dict
from ..options import ir_verilog_options
from ..utils import collect_codegen_args, console, validation_details

if TYPE_CHECKING:
    from irforge.build.providers import BuiltTarget
    from irforge.rules import IrVerilogAttrs

    from ..context import ApplicationContext

logger = logging.getLogger(__name__)


def build_ir_verilog_attrs(
    src: str,
    verilog_file: str,
    inline_args: dict[str, str],
    args_file: Path | None,
    name: str | None,
    overrides: dict[str, str | None],
) -> "IrVerilogAttrs":
    from irforge.rules import IrVerilogAttrs

    try:
        return IrVerilogAttrs(
            name=name or posixpath.basename(split_filename(verilog_file)[0]),
            src=src,
            codegen_args=collect_codegen_args(args_file, inline_args),
            verilog_file=verilog_file,
            **overrides,
        )
    except ValidationError as e:
        raise ConfigurationError(
            "Invalid ir_verilog attributes",
            details=validation_details(e),
        ) from e


def analyze_ir_verilog(
    app: "ApplicationContext",
    attrs: "IrVerilogAttrs",
    package: str,
) -> tuple["BuiltTarget", RuleContext]:
    from irforge.rules import ir_verilog

    config = app.get_effective_config()
    ctx = RuleContext(label=Label(package, attrs.name), bin_dir=config.bin_dir)
    return ir_verilog(ctx, attrs, app.toolchain()), ctx


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.argument("src", type=str)
@ir_verilog_options
@click.option("--json", "as_json", is_flag=True, help="Print the plan as JSON")
@click.pass_obj
def plan(
    app: "ApplicationContext",
    src: str,
    verilog_file: str,
    inline_args: dict[str, str],
    args_file: Path | None,
    name: str | None,
    package: str,
    module_sig_file: str | None,
    schedule_file: str | None,
    verilog_line_map_file: str | None,
    block_ir_file: str | None,
    as_json: bool,
) -> None:
    """SRC: IR file to generate Verilog from.

    Prints the artifacts the codegen action declares and its command line.
    """
    attrs = build_ir_verilog_attrs(
        src, verilog_file, inline_args, args_file, name,
        {
            "module_sig_file": module_sig_file,
            "schedule_file": schedule_file,
            "verilog_line_map_file": verilog_line_map_file,
            "block_ir_file": block_ir_file,
        },
    )
    target, ctx = analyze_ir_verilog(app, attrs, package)

    if as_json:
        click.echo(json.dumps(target_to_dict(target, ctx.actions.registered), indent=2))
        return
    ActionFormatter(console).show(target, ctx.actions.registered)
