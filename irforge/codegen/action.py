# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Construction of the codegen build action.

Generates a Verilog file, module signature file, block IR file, Verilog line
map and (for non-combinational generators) a schedule file from one IR file.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Mapping, Optional

from irforge.build.actions import ShellAction
from irforge.build.artifacts import Artifact
from irforge.build.context import RuleContext
from irforge.build.providers import BuiltTarget, get_runfiles_for
from irforge.build.runfiles import Runfiles
from irforge.codegen.command import CommandLineBuilder
from irforge.codegen.filenames import ArtifactRole
from irforge.codegen.planner import ArtifactPlan, plan_artifacts
from irforge.codegen.providers import CodegenInfo
from irforge.toolchain import Toolchain, get_executable_from, get_runfiles_from

logger = logging.getLogger(__name__)

CODEGEN_MNEMONIC = "Codegen"


@dataclass(frozen=True)
class CodegenResult:
    """What the codegen rule hands back to its caller.

    Attributes:
        info: Metadata record for downstream targets
        outputs: Declared outputs in declaration order
        runfiles: Source file plus toolchain runfiles
        action: The registered codegen action
        plan: The artifact plan the action was built from
    """

    info: CodegenInfo
    outputs: tuple[Artifact, ...]
    runfiles: Runfiles
    action: ShellAction
    plan: ArtifactPlan


def package_codegen_info(
    artifacts: Mapping[ArtifactRole, Artifact],
    codegen_args: Mapping[str, str],
) -> CodegenInfo:
    """Assemble the CodegenInfo record.

    ``top`` is ``module_name`` when set, otherwise ``top``, otherwise None.
    """
    return CodegenInfo(
        verilog_file=artifacts[ArtifactRole.VERILOG],
        module_sig_file=artifacts[ArtifactRole.MODULE_SIGNATURE],
        verilog_line_map_file=artifacts[ArtifactRole.VERILOG_LINE_MAP],
        schedule_file=artifacts.get(ArtifactRole.SCHEDULE),
        block_ir_file=artifacts[ArtifactRole.BLOCK_IR],
        delay_model=codegen_args.get("delay_model"),
        top=codegen_args.get("module_name", codegen_args.get("top")),
        pipeline_stages=codegen_args.get("pipeline_stages"),
        clock_period_ps=codegen_args.get("clock_period_ps"),
    )


def codegen_command(
    tool: Artifact,
    src: Artifact,
    codegen_args: Mapping[str, str],
    outputs: Iterable[tuple[ArtifactRole, Artifact]],
) -> CommandLineBuilder:
    """Command line for one codegen invocation.

    Tool, source IR, the codegen arguments sorted by name, then one output
    path flag per declared artifact in declaration order.
    """
    builder = CommandLineBuilder(tool.path).arg(src.path).flags(codegen_args)
    for role, artifact in outputs:
        builder.flag(role.output_flag, artifact.path)
    return builder


def build_codegen_action(
    ctx: RuleContext,
    src: Artifact,
    toolchain: Toolchain,
    codegen_args: Mapping[str, str],
    verilog_file: Optional[str],
    overrides: Optional[Mapping[str, Optional[str]]] = None,
    src_target: Optional[BuiltTarget] = None,
) -> CodegenResult:
    """Plan, declare and register the codegen action for one target.

    The toolchain and the arguments are checked before anything is declared,
    so a failing target leaves the context untouched.

    Args:
        ctx: Context of the target being analyzed
        src: The IR file to generate Verilog from
        toolchain: Resolved codegen toolchain
        codegen_args: User codegen arguments (defaults are merged in)
        verilog_file: Filename of the Verilog output
        overrides: Companion filename overrides keyed by attribute name
        src_target: Target that produced ``src``, whose runfiles are forwarded

    Returns:
        CodegenResult with the metadata record and the registered action

    Raises:
        ToolResolutionError: If the codegen tool is not available
        UnknownOptionError: For unrecognized codegen arguments
        BadExtensionError: If the Verilog filename does not match the dialect
        MissingOutputError: If ``verilog_file`` is not given
        ActionConflictError: If two outputs share a filename
    """
    codegen_tool = get_executable_from(toolchain.codegen_tool)
    plan = plan_artifacts(codegen_args, verilog_file, overrides)

    declared = [(d.role, ctx.actions.declare_file(d.filename)) for d in plan.descriptors]
    artifacts = dict(declared)
    outputs = tuple(artifact for _, artifact in declared)

    command = codegen_command(codegen_tool, src, plan.codegen_args, declared)
    runfiles = get_runfiles_for(
        [get_runfiles_from(toolchain.codegen_tool)],
        [src],
        deps=[src_target] if src_target is not None else [],
    )

    verilog = artifacts[ArtifactRole.VERILOG]
    action = ctx.actions.run_shell(
        outputs=outputs,
        inputs=runfiles.files,
        tools=[codegen_tool],
        command=command.render(),
        mnemonic=CODEGEN_MNEMONIC,
        progress_message=f"Building Verilog file: {verilog.path}",
    )
    logger.debug("Codegen command for %s: %s", ctx.label, action.command)

    return CodegenResult(
        info=package_codegen_info(artifacts, plan.codegen_args),
        outputs=outputs,
        runfiles=runfiles,
        action=action,
        plan=plan,
    )
