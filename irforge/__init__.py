# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""
irforge: build-action planning for hardware codegen.

Turns an IR file plus a mapping of codegen arguments into one codegen build
action (Verilog/SystemVerilog, module signature, schedule, line map and block
IR outputs) and a CodegenInfo record that a benchmark action can consume.

Quick Start:
    >>> from irforge import RuleContext, Toolchain, build_codegen_action
    >>> ctx = RuleContext.for_target("//designs:adder_verilog")
    >>> result = build_codegen_action(
    ...     ctx, ctx.source_file("adder.opt.ir"), toolchain,
    ...     {"pipeline_stages": "1", "top": "adder"}, "adder.sv")
    >>> result.info.schedule_file.path
    'irforge-out/bin/designs/adder.schedule.textproto'
"""

__version__ = "0.1.0"

from .build import Artifact, BuiltTarget, DefaultInfo, Label, RuleContext, Runfiles
from .codegen import (
    ArtifactRole,
    CodegenInfo,
    OptIRInfo,
    build_benchmark_action,
    build_codegen_action,
    plan_artifacts,
)
from .errors import (
    BadExtensionError,
    ConfigurationError,
    IrforgeError,
    MissingTopError,
    ToolResolutionError,
    UnknownOptionError,
)
from .toolchain import Toolchain, ToolTarget

__all__ = [
    "Artifact",
    "ArtifactRole",
    "BadExtensionError",
    "BuiltTarget",
    "CodegenInfo",
    "ConfigurationError",
    "DefaultInfo",
    "IrforgeError",
    "Label",
    "MissingTopError",
    "OptIRInfo",
    "RuleContext",
    "Runfiles",
    "ToolResolutionError",
    "ToolTarget",
    "Toolchain",
    "UnknownOptionError",
    "build_benchmark_action",
    "build_codegen_action",
    "plan_artifacts",
]
