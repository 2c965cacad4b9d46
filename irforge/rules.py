# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Rule attribute schemas and rule implementations.

Two rules are provided:

``ir_verilog``
    Generates a Verilog file and its companion artifacts from an IR file.

    Example (targets YAML)::

        - kind: ir_verilog
          name: adder_verilog
          src: adder.opt.ir
          verilog_file: adder.sv
          codegen_args:
            pipeline_stages: "1"
            top: adder

``benchmark_verilog``
    Produces an executable script that computes metrics for an
    ``ir_verilog`` target.

    Example (targets YAML)::

        - kind: benchmark_verilog
          name: adder_benchmark
          verilog_target: adder_verilog
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Literal, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

from irforge._internal.io.yaml import expand_env_vars, load_yaml
from irforge.build.artifacts import Label
from irforge.build.context import RuleContext
from irforge.build.providers import BuiltTarget, DefaultInfo, get_transitive_built_files
from irforge.codegen.action import build_codegen_action
from irforge.codegen.benchmark import build_benchmark_action
from irforge.codegen.filenames import ArtifactRole
from irforge.codegen.providers import OptIRInfo
from irforge.constants import DEFAULT_BIN_DIR
from irforge.errors import ConfigurationError
from irforge.toolchain import Toolchain

logger = logging.getLogger(__name__)


def _stringify(value: Any) -> str:
    # YAML turns True/1 into bool/int; the codegen tool expects "True"/"1".
    if isinstance(value, bool):
        return "True" if value else "False"
    return str(value)


class IrVerilogAttrs(BaseModel):
    """Attributes of an ``ir_verilog`` target."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    kind: Literal["ir_verilog"] = "ir_verilog"
    name: str
    src: str = Field(description="The IR source file")
    codegen_args: dict[str, str] = Field(
        default_factory=dict,
        description="Arguments of the codegen tool, rendered as --key=value flags",
    )
    verilog_file: str = Field(
        description="Filename of the generated Verilog file; '.sv' for SystemVerilog, '.v' otherwise",
    )
    module_sig_file: Optional[str] = Field(
        default=None,
        description="Module signature filename (default: <basename>.sig.textproto)",
    )
    schedule_file: Optional[str] = Field(
        default=None,
        description="Schedule filename (default: <basename>.schedule.textproto)",
    )
    verilog_line_map_file: Optional[str] = Field(
        default=None,
        description="Verilog line map filename (default: <basename>.verilog_line_map.textproto)",
    )
    block_ir_file: Optional[str] = Field(
        default=None,
        description="Block IR filename (default: <basename>.block.ir)",
    )

    @field_validator("codegen_args", mode="before")
    @classmethod
    def _stringify_args(cls, value: Any) -> Any:
        # A YAML null (`top:`) means the argument is unset.
        if isinstance(value, dict):
            return {str(k): _stringify(v) for k, v in value.items() if v is not None}
        return value

    def output_overrides(self) -> dict[str, Optional[str]]:
        return {
            role.attribute: getattr(self, role.attribute)
            for role in ArtifactRole
            if role is not ArtifactRole.VERILOG
        }


class BenchmarkVerilogAttrs(BaseModel):
    """Attributes of a ``benchmark_verilog`` target."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    kind: Literal["benchmark_verilog"] = "benchmark_verilog"
    name: str
    verilog_target: str = Field(description="The ir_verilog target to benchmark")


TargetAttrs = Union[IrVerilogAttrs, BenchmarkVerilogAttrs]


def ir_verilog(
    ctx: RuleContext,
    attrs: IrVerilogAttrs,
    toolchain: Toolchain,
    src_target: Optional[BuiltTarget] = None,
    opt_ir_info: Optional[OptIRInfo] = None,
) -> BuiltTarget:
    """Implementation of the ``ir_verilog`` rule.

    The IR handed to codegen is the optimized IR, so unless ``opt_ir_info``
    says otherwise the target reports ``src`` as its OptIRInfo.

    Returns:
        BuiltTarget providing CodegenInfo, OptIRInfo and DefaultInfo
    """
    src = ctx.source_file(attrs.src)
    result = build_codegen_action(
        ctx,
        src,
        toolchain,
        attrs.codegen_args,
        attrs.verilog_file,
        overrides=attrs.output_overrides(),
        src_target=src_target,
    )
    transitive = get_transitive_built_files([src_target]) if src_target is not None else ()
    default_info = DefaultInfo(files=result.info.files() + transitive, runfiles=result.runfiles)
    return BuiltTarget.create(
        ctx.label,
        result.info,
        opt_ir_info or OptIRInfo(opt_ir_file=src),
        default_info,
    )


def benchmark_verilog(
    ctx: RuleContext,
    attrs: BenchmarkVerilogAttrs,
    verilog_target: BuiltTarget,
    toolchain: Toolchain,
) -> BuiltTarget:
    """Implementation of the ``benchmark_verilog`` rule.

    Returns:
        BuiltTarget providing DefaultInfo whose executable is the script
    """
    logger.debug("Benchmarking %s as %s", attrs.verilog_target, ctx.label)
    result = build_benchmark_action(ctx, verilog_target, toolchain)
    return BuiltTarget.create(ctx.label, result.default_info)


def _parse_target(entry: Any, source: Path) -> TargetAttrs:
    if not isinstance(entry, dict):
        raise ConfigurationError(f"Invalid target entry in {source}: {entry!r}")
    kind = entry.get("kind")
    if kind == "ir_verilog":
        return IrVerilogAttrs.model_validate(entry)
    if kind == "benchmark_verilog":
        return BenchmarkVerilogAttrs.model_validate(entry)
    raise ConfigurationError(
        f"Unknown target kind {kind!r} in {source}",
        details=["Expected 'ir_verilog' or 'benchmark_verilog'"],
    )


def load_targets(path: str | Path) -> tuple[str, list[TargetAttrs]]:
    """Load a targets file.

    The file holds an optional ``package`` and a ``targets`` list.

    Returns:
        (package, targets) in file order

    Raises:
        ConfigurationError: For unknown kinds or duplicate names
        pydantic.ValidationError: For invalid attributes
    """
    path = Path(path)
    try:
        data = expand_env_vars(load_yaml(path))
    except (ValueError, yaml.YAMLError) as e:
        raise ConfigurationError(f"Cannot read targets file {path}: {e}") from e
    package = str(data.get("package", ""))
    targets = [_parse_target(entry, path) for entry in data.get("targets") or []]

    seen: set[str] = set()
    for target in targets:
        if target.name in seen:
            raise ConfigurationError(f"Duplicate target name '{target.name}' in {path}")
        seen.add(target.name)

    logger.debug("Loaded %d targets from %s", len(targets), path)
    return package, targets


def analyze_targets(
    targets: list[TargetAttrs],
    toolchain: Toolchain,
    package: str = "",
    bin_dir: str = DEFAULT_BIN_DIR,
) -> dict[str, tuple[BuiltTarget, RuleContext]]:
    """Run every rule and collect the built targets by name.

    ``ir_verilog`` targets are analyzed first so benchmarks can reference
    them regardless of file order. References resolve by full label, so
    ``//other:adder`` never matches a target named ``adder`` in this package.

    Raises:
        ConfigurationError: If a benchmark references an unknown target
    """
    analyzed: dict[str, tuple[BuiltTarget, RuleContext]] = {}
    by_label: dict[Label, BuiltTarget] = {}
    ordered = sorted(targets, key=lambda t: 0 if isinstance(t, IrVerilogAttrs) else 1)
    for attrs in ordered:
        ctx = RuleContext(label=Label(package, attrs.name), bin_dir=bin_dir)
        if isinstance(attrs, IrVerilogAttrs):
            built = ir_verilog(ctx, attrs, toolchain)
        else:
            dep_label = Label.parse(attrs.verilog_target, default_package=package)
            if dep_label not in by_label:
                raise ConfigurationError(
                    f"Target '{attrs.name}' references unknown verilog_target '{attrs.verilog_target}'",
                    details=[f"Resolved as {dep_label}; targets in this file live in //{package}"],
                )
            built = benchmark_verilog(ctx, attrs, by_label[dep_label], toolchain)
        analyzed[attrs.name] = (built, ctx)
        by_label[ctx.label] = built
    return analyzed

