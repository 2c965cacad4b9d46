# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Benchmark script generation for a codegen target.

The benchmark action consumes what a codegen target already produced: the
CodegenInfo record and the OptIRInfo record of the IR it was built from. It
writes an executable shell script that runs the benchmarking tool on the
optimized IR, the block IR and the Verilog file.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from irforge.build.actions import FileWriteAction
from irforge.build.artifacts import Artifact
from irforge.build.context import RuleContext
from irforge.build.providers import BuiltTarget, DefaultInfo, get_runfiles_for, get_transitive_built_files
from irforge.build.runfiles import Runfiles
from irforge.codegen.command import CommandLineBuilder
from irforge.codegen.providers import CodegenInfo, OptIRInfo
from irforge.errors import MissingTopError
from irforge.toolchain import Toolchain, get_executable_from, get_runfiles_from

logger = logging.getLogger(__name__)

SCRIPT_SHEBANG = "#!/usr/bin/env bash"


@dataclass(frozen=True)
class BenchmarkResult:
    script: Artifact
    runfiles: Runfiles
    action: FileWriteAction
    default_info: DefaultInfo


def benchmark_command(
    tool: Artifact,
    codegen_info: CodegenInfo,
    opt_ir_info: OptIRInfo,
) -> CommandLineBuilder:
    """Benchmark command line, using run-time (short) paths throughout."""
    return (
        CommandLineBuilder(tool.short_path)
        .arg(opt_ir_info.opt_ir_file.short_path)
        .arg(codegen_info.block_ir_file.short_path)
        .arg(codegen_info.verilog_file.short_path)
        .flag("top", codegen_info.top)
        .optional_flag("delay_model", codegen_info.delay_model)
        .optional_flag("pipeline_stages", codegen_info.pipeline_stages)
        .optional_flag("clock_period_ps", codegen_info.clock_period_ps)
    )


def render_script(command: str) -> str:
    return "\n".join([
        SCRIPT_SHEBANG,
        "set -e",
        command,
        "exit 0",
    ])


def build_benchmark_script(
    ctx: RuleContext,
    codegen_info: CodegenInfo,
    opt_ir_info: OptIRInfo,
    toolchain: Toolchain,
    upstream_name: str,
) -> tuple[FileWriteAction, Runfiles]:
    """Register the benchmark script for ``codegen_info``.

    Args:
        ctx: Context of the benchmark target
        codegen_info: Metadata of the codegen target to benchmark
        opt_ir_info: Optimized IR the codegen target was built from
        toolchain: Resolved codegen toolchain
        upstream_name: Name of the codegen target, used in error messages

    Raises:
        MissingTopError: If the codegen target has no top value
        ToolResolutionError: If the benchmarking tool is not available
    """
    if not codegen_info.top:
        raise MissingTopError(upstream_name)
    tool = get_executable_from(toolchain.benchmark_codegen_tool)

    command = benchmark_command(tool, codegen_info, opt_ir_info).render()
    script = ctx.actions.declare_file(ctx.label.name + ".sh")
    runfiles = get_runfiles_for(
        [get_runfiles_from(toolchain.benchmark_codegen_tool)],
        [
            opt_ir_info.opt_ir_file,
            codegen_info.block_ir_file,
            codegen_info.verilog_file,
        ],
    )
    action = ctx.actions.write(output=script, content=render_script(command), is_executable=True)
    logger.debug("Benchmark command for %s: %s", ctx.label, command)
    return action, runfiles


def build_benchmark_action(
    ctx: RuleContext,
    verilog_target: BuiltTarget,
    toolchain: Toolchain,
) -> BenchmarkResult:
    """Benchmark a codegen target that provides CodegenInfo and OptIRInfo.

    Raises:
        MissingProviderError: If the target lacks either record
        MissingTopError: If the codegen target has no top value
        ToolResolutionError: If the benchmarking tool is not available
    """
    codegen_info = verilog_target[CodegenInfo]
    opt_ir_info = verilog_target[OptIRInfo]
    action, runfiles = build_benchmark_script(
        ctx, codegen_info, opt_ir_info, toolchain, verilog_target.label.name
    )
    default_info = DefaultInfo(
        files=(action.output,) + get_transitive_built_files([verilog_target]),
        runfiles=runfiles,
        executable=action.output,
    )
    return BenchmarkResult(
        script=action.output,
        runfiles=runfiles,
        action=action,
        default_info=default_info,
    )
