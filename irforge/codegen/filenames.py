# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Output artifact roles and their default filenames.

Every file the codegen tool writes has a role. Companion files default to
the Verilog file's basename followed by a fixed per-role suffix:

    adder.sv -> adder.sig.textproto
                adder.schedule.textproto
                adder.verilog_line_map.textproto
                adder.block.ir
"""

from __future__ import annotations

import posixpath
from enum import Enum
from typing import Any, Mapping, MutableMapping

SYSTEM_VERILOG_FILE_EXTENSION = "sv"
VERILOG_FILE_EXTENSION = "v"
SIGNATURE_TEXTPROTO_FILE_EXTENSION = ".sig.textproto"
SCHEDULE_TEXTPROTO_FILE_EXTENSION = ".schedule.textproto"
VERILOG_LINE_MAP_TEXTPROTO_FILE_EXTENSION = ".verilog_line_map.textproto"
BLOCK_IR_FILE_EXTENSION = ".block.ir"

VERILOG_EXTENSIONS = (SYSTEM_VERILOG_FILE_EXTENSION, VERILOG_FILE_EXTENSION)


class ArtifactRole(Enum):
    """Logical role of a codegen output.

    The value is the rule attribute that overrides the role's filename.
    """

    VERILOG = "verilog_file"
    MODULE_SIGNATURE = "module_sig_file"
    SCHEDULE = "schedule_file"
    VERILOG_LINE_MAP = "verilog_line_map_file"
    BLOCK_IR = "block_ir_file"

    @property
    def attribute(self) -> str:
        return self.value

    @property
    def output_flag(self) -> str:
        """Codegen tool flag that receives this artifact's path."""
        return _OUTPUT_FLAGS[self]

    @property
    def suffix(self) -> str | None:
        """Fixed filename suffix, or None for the Verilog file itself."""
        return _SUFFIXES.get(self)


_SUFFIXES = {
    ArtifactRole.MODULE_SIGNATURE: SIGNATURE_TEXTPROTO_FILE_EXTENSION,
    ArtifactRole.SCHEDULE: SCHEDULE_TEXTPROTO_FILE_EXTENSION,
    ArtifactRole.VERILOG_LINE_MAP: VERILOG_LINE_MAP_TEXTPROTO_FILE_EXTENSION,
    ArtifactRole.BLOCK_IR: BLOCK_IR_FILE_EXTENSION,
}

_OUTPUT_FLAGS = {
    ArtifactRole.VERILOG: "output_verilog_path",
    ArtifactRole.MODULE_SIGNATURE: "output_signature_path",
    ArtifactRole.SCHEDULE: "output_schedule_path",
    ArtifactRole.VERILOG_LINE_MAP: "output_verilog_line_map_path",
    ArtifactRole.BLOCK_IR: "output_block_ir_path",
}

COMPANION_ROLES = (
    ArtifactRole.MODULE_SIGNATURE,
    ArtifactRole.BLOCK_IR,
    ArtifactRole.SCHEDULE,
    ArtifactRole.VERILOG_LINE_MAP,
)


def split_filename(filename: str) -> tuple[str, str]:
    """Split a filename into (basename, extension) at the last dot.

    Only the final path component is considered, so dots in directory names
    are kept in the basename. The extension has no leading dot and is empty
    when the filename has none.
    """
    head, tail = posixpath.split(filename)
    stem, dot, extension = tail.rpartition(".")
    if not dot or not stem:
        return filename, ""
    return posixpath.join(head, stem) if head else stem, extension


def derive_filename(
    basename: str,
    role: ArtifactRole,
    verilog_extension: str = SYSTEM_VERILOG_FILE_EXTENSION,
) -> str:
    """Default filename for ``role`` given the Verilog file's basename.

    Args:
        basename: Verilog filename without its extension
        role: Artifact role
        verilog_extension: ``sv`` or ``v``; only used for the Verilog role

    Raises:
        ValueError: If ``verilog_extension`` is not a Verilog extension
    """
    if role is ArtifactRole.VERILOG:
        if verilog_extension not in VERILOG_EXTENSIONS:
            raise ValueError(f"Not a Verilog extension: {verilog_extension!r}")
        return f"{basename}.{verilog_extension}"
    return basename + _SUFFIXES[role]


def strip_role_suffix(filename: str, role: ArtifactRole) -> str:
    """Recover the basename from a filename produced by :func:`derive_filename`."""
    if role is ArtifactRole.VERILOG:
        return split_filename(filename)[0]
    suffix = _SUFFIXES[role]
    if not filename.endswith(suffix):
        raise ValueError(f"{filename!r} does not end with {suffix!r}")
    return filename[: -len(suffix)]


def is_combinational_generator(codegen_args: Mapping[str, str]) -> bool:
    """Returns True if the ``generator`` argument is ``combinational``."""
    return codegen_args.get("generator", "") == "combinational"


def append_generated_filenames(
    args: MutableMapping[str, Any],
    basename: str,
    codegen_args: Mapping[str, str],
) -> MutableMapping[str, Any]:
    """Fill in default companion filenames for an ``ir_verilog`` target.

    Entries already present in ``args`` are left untouched. The schedule
    filename is only added for non-combinational generators.

    Returns:
        ``args``, updated in place
    """
    for role in COMPANION_ROLES:
        if role is ArtifactRole.SCHEDULE and is_combinational_generator(codegen_args):
            continue
        args.setdefault(role.attribute, derive_filename(basename, role))
    return args


def get_generated_filenames(args: Mapping[str, Any], codegen_args: Mapping[str, str]) -> list[str]:
    """List the companion filenames recorded in ``args``."""
    generated = [
        args.get(ArtifactRole.MODULE_SIGNATURE.attribute),
        args.get(ArtifactRole.BLOCK_IR.attribute),
        args.get(ArtifactRole.VERILOG_LINE_MAP.attribute),
    ]
    if not is_combinational_generator(codegen_args):
        generated.append(args.get(ArtifactRole.SCHEDULE.attribute))
    return generated
