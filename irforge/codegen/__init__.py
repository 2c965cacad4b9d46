# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Codegen step planning: IR in, Verilog and companion artifacts out."""

from .action import CodegenResult, build_codegen_action, package_codegen_info
from .benchmark import BenchmarkResult, build_benchmark_action, build_benchmark_script
from .command import CommandLineBuilder
from .filenames import ArtifactRole, derive_filename, split_filename
from .flags import CODEGEN_FLAGS, DEFAULT_CODEGEN_ARGS, GeneratorMode, validate_args, validate_verilog_filename
from .planner import ArtifactDescriptor, ArtifactPlan, plan_artifacts
from .providers import CodegenInfo, OptIRInfo

__all__ = [
    "ArtifactDescriptor",
    "ArtifactPlan",
    "ArtifactRole",
    "BenchmarkResult",
    "CODEGEN_FLAGS",
    "CodegenInfo",
    "CodegenResult",
    "CommandLineBuilder",
    "DEFAULT_CODEGEN_ARGS",
    "GeneratorMode",
    "OptIRInfo",
    "build_benchmark_action",
    "build_benchmark_script",
    "build_codegen_action",
    "derive_filename",
    "package_codegen_info",
    "plan_artifacts",
    "split_filename",
    "validate_args",
    "validate_verilog_filename",
]
