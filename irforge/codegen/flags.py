# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Codegen argument schema and validation.

Only flag *names* are checked here. Whether a value makes sense (a reachable
clock period, a valid reset signal name) is left to the codegen tool.
"""

from __future__ import annotations

import logging
from enum import Enum
from types import MappingProxyType
from typing import AbstractSet, Mapping

from irforge.codegen.filenames import (
    SYSTEM_VERILOG_FILE_EXTENSION,
    VERILOG_FILE_EXTENSION,
    is_combinational_generator,
    split_filename,
)
from irforge.errors import BadExtensionError, UnknownOptionError

logger = logging.getLogger(__name__)

DEFAULT_CODEGEN_ARGS: Mapping[str, str] = MappingProxyType({
    "delay_model": "unit",
    "use_system_verilog": "True",
})

CODEGEN_FLAGS: frozenset[str] = frozenset({
    # Timing
    "clock_period_ps",
    "additional_input_delay_ps",
    "pipeline_stages",
    "clock_margin_percent",
    "period_relaxation_percent",
    "delay_model",
    # Scheduling and structure
    "generator",
    "io_constraints",
    "receives_first_sends_last",
    "ram_configurations",
    "gate_recvs",
    "array_index_bounds_checking",
    "add_idle_output",
    # Naming
    "top",
    "module_name",
    "streaming_channel_data_suffix",
    "streaming_channel_ready_suffix",
    "streaming_channel_valid_suffix",
    # I/O signaling
    "input_valid_signal",
    "output_valid_signal",
    "manual_load_enable_signal",
    "flop_inputs",
    "flop_inputs_kind",
    "flop_outputs",
    "flop_outputs_kind",
    "flop_single_value_channels",
    # Reset
    "reset",
    "reset_active_low",
    "reset_asynchronous",
    "reset_data_path",
    # Formatting
    "use_system_verilog",
    "separate_lines",
    "assert_format",
    "gate_format",
    "smulp_format",
    "umulp_format",
})


class GeneratorMode(Enum):
    COMBINATIONAL = "combinational"
    PIPELINE = "pipeline"
    OTHER = "other"

    @property
    def produces_schedule(self) -> bool:
        return self is not GeneratorMode.COMBINATIONAL


def generator_mode(codegen_args: Mapping[str, str]) -> GeneratorMode:
    if is_combinational_generator(codegen_args):
        return GeneratorMode.COMBINATIONAL
    if codegen_args.get("generator") == "pipeline":
        return GeneratorMode.PIPELINE
    return GeneratorMode.OTHER


def uses_system_verilog(codegen_args: Mapping[str, str]) -> bool:
    return str(codegen_args.get("use_system_verilog", "")).lower() == "true"


def merge_defaults(
    codegen_args: Mapping[str, str],
    defaults: Mapping[str, str] = DEFAULT_CODEGEN_ARGS,
) -> Mapping[str, str]:
    """Overlay ``codegen_args`` on ``defaults`` into a new read-only mapping.

    Neither input is modified. Defaults come first in iteration order,
    followed by keys only present in ``codegen_args``.
    """
    merged = dict(defaults)
    merged.update(codegen_args)
    return MappingProxyType(merged)


def validate_args(
    codegen_args: Mapping[str, str],
    allowed: AbstractSet[str] = CODEGEN_FLAGS,
) -> Mapping[str, str]:
    """Check every argument name against the allow-list.

    Returns:
        ``codegen_args`` unchanged

    Raises:
        UnknownOptionError: Naming the first unrecognized key in iteration order
    """
    for key in codegen_args:
        if key not in allowed:
            raise UnknownOptionError(key)
    return codegen_args


def validate_verilog_filename(verilog_filename: str, use_system_verilog: bool) -> None:
    """Check the Verilog filename's extension against the Verilog dialect.

    A SystemVerilog build must write a ``.sv`` file and a plain Verilog
    build a ``.v`` file. A missing extension always fails.

    Raises:
        BadExtensionError: If the extension does not match exactly
    """
    expected = SYSTEM_VERILOG_FILE_EXTENSION if use_system_verilog else VERILOG_FILE_EXTENSION
    extension = split_filename(verilog_filename)[1]
    if extension != expected:
        raise BadExtensionError(verilog_filename, expected, use_system_verilog)
    logger.debug("Verilog filename %s matches '.%s'", verilog_filename, expected)
