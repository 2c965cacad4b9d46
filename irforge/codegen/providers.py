# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Metadata records exposed to downstream targets."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from irforge.build.artifacts import Artifact


@dataclass(frozen=True)
class CodegenInfo:
    """Outputs and key settings of a codegen action.

    ``schedule_file`` is None when the combinational generator was used.
    The scalar fields echo the codegen arguments so benchmarking does not
    have to re-derive them.
    """

    verilog_file: Artifact
    module_sig_file: Artifact
    verilog_line_map_file: Artifact
    block_ir_file: Artifact
    schedule_file: Optional[Artifact] = None
    delay_model: Optional[str] = None
    top: Optional[str] = None
    pipeline_stages: Optional[str] = None
    clock_period_ps: Optional[str] = None

    @property
    def has_schedule(self) -> bool:
        return self.schedule_file is not None

    def files(self) -> tuple[Artifact, ...]:
        """Generated files in declaration order."""
        return tuple(
            f for f in (
                self.verilog_line_map_file,
                self.schedule_file,
                self.verilog_file,
                self.module_sig_file,
                self.block_ir_file,
            )
            if f is not None
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "verilog_file": self.verilog_file.path,
            "module_sig_file": self.module_sig_file.path,
            "verilog_line_map_file": self.verilog_line_map_file.path,
            "schedule_file": self.schedule_file.path if self.schedule_file else None,
            "block_ir_file": self.block_ir_file.path,
            "delay_model": self.delay_model,
            "top": self.top,
            "pipeline_stages": self.pipeline_stages,
            "clock_period_ps": self.clock_period_ps,
        }


@dataclass(frozen=True)
class OptIRInfo:
    """The optimized IR file a codegen target was built from."""

    opt_ir_file: Artifact
