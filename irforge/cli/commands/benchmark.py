# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

from __future__ import annotations

import json
from pathlib import Path
from typing import TYPE_CHECKING

import click

from irforge.build.actions import materialize
from irforge.build.artifacts import Label
from irforge.build.context import RuleContext
from irforge.codegen.providers import OptIRInfo

from ..formatters import ActionFormatter, target_to_dict
from ..options import ir_verilog_options
from ..utils import console, success
from .plan import analyze_ir_verilog, build_ir_verilog_attrs

if TYPE_CHECKING:
    from ..context import ApplicationContext


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.argument("src", type=str)
@ir_verilog_options
@click.option("--opt-ir", type=str, default=None,
              help="Optimized IR the benchmark compares against (default: SRC)")
@click.option("--benchmark-name", type=str, default=None,
              help="Name of the benchmark target (default: <name>_benchmark)")
@click.option("--write", "write_dir", type=click.Path(file_okay=False, path_type=Path),
              help="Write the generated script below this directory")
@click.option("--json", "as_json", is_flag=True, help="Print the result as JSON")
@click.pass_obj
def benchmark(
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
    opt_ir: str | None,
    benchmark_name: str | None,
    write_dir: Path | None,
    as_json: bool,
) -> None:
    """SRC: IR file to generate Verilog from.

    Plans the codegen action, then generates the script that benchmarks its
    outputs. The codegen arguments must name a top entity (top or module_name).
    """
    from irforge.rules import BenchmarkVerilogAttrs, benchmark_verilog, ir_verilog

    attrs = build_ir_verilog_attrs(
        src, verilog_file, inline_args, args_file, name,
        {
            "module_sig_file": module_sig_file,
            "schedule_file": schedule_file,
            "verilog_line_map_file": verilog_line_map_file,
            "block_ir_file": block_ir_file,
        },
    )
    config = app.get_effective_config()
    toolchain = app.toolchain()

    if opt_ir is None:
        verilog_target, _ = analyze_ir_verilog(app, attrs, package)
    else:
        codegen_ctx = RuleContext(label=Label(package, attrs.name), bin_dir=config.bin_dir)
        verilog_target = ir_verilog(
            codegen_ctx, attrs, toolchain,
            opt_ir_info=OptIRInfo(opt_ir_file=codegen_ctx.source_file(opt_ir)),
        )

    bench_attrs = BenchmarkVerilogAttrs(
        name=benchmark_name or f"{attrs.name}_benchmark",
        verilog_target=attrs.name,
    )
    ctx = RuleContext(label=Label(package, bench_attrs.name), bin_dir=config.bin_dir)
    target = benchmark_verilog(ctx, bench_attrs, verilog_target, toolchain)

    if as_json:
        click.echo(json.dumps(target_to_dict(target, ctx.actions.registered), indent=2))
    else:
        ActionFormatter(console).show(target, ctx.actions.registered)

    if write_dir is not None:
        for path in materialize(ctx.actions.registered, write_dir):
            if not as_json:
                success(f"Wrote {path}")
