# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Artifact planning for a single codegen invocation.

The plan is a pure function of the codegen arguments, the Verilog filename
and the explicit filename overrides. It decides which artifacts the codegen
tool produces and what they are called, before anything is declared.

Example:
    >>> plan = plan_artifacts({}, "adder.sv")
    >>> plan.filename(ArtifactRole.SCHEDULE)
    'adder.schedule.textproto'
"""

from __future__ import annotations

import logging
import posixpath
from dataclasses import dataclass
from typing import Mapping, Optional

from irforge.codegen.filenames import ArtifactRole, derive_filename, split_filename
from irforge.codegen.flags import (
    GeneratorMode,
    generator_mode,
    merge_defaults,
    uses_system_verilog,
    validate_args,
    validate_verilog_filename,
)
from irforge.errors import ActionConflictError, MissingOutputError, UnknownOptionError

logger = logging.getLogger(__name__)

# Declaration order of the artifacts; also the order of the output flags.
PLANNED_ROLE_ORDER = (
    ArtifactRole.VERILOG_LINE_MAP,
    ArtifactRole.SCHEDULE,
    ArtifactRole.VERILOG,
    ArtifactRole.MODULE_SIGNATURE,
    ArtifactRole.BLOCK_IR,
)

_OVERRIDE_ATTRIBUTES = frozenset(
    role.attribute for role in ArtifactRole if role is not ArtifactRole.VERILOG
)


@dataclass(frozen=True)
class ArtifactDescriptor:
    role: ArtifactRole
    filename: str


@dataclass(frozen=True)
class ArtifactPlan:
    """Everything decided before the codegen action is declared.

    Attributes:
        mode: Generator mode derived from the ``generator`` argument
        basename: Verilog filename without extension
        codegen_args: Validated arguments merged over the defaults (read-only)
        use_system_verilog: Whether the Verilog output is SystemVerilog
        descriptors: Planned artifacts in declaration order
    """

    mode: GeneratorMode
    basename: str
    codegen_args: Mapping[str, str]
    use_system_verilog: bool
    descriptors: tuple[ArtifactDescriptor, ...]

    @property
    def roles(self) -> tuple[ArtifactRole, ...]:
        return tuple(d.role for d in self.descriptors)

    def get(self, role: ArtifactRole) -> Optional[ArtifactDescriptor]:
        for descriptor in self.descriptors:
            if descriptor.role is role:
                return descriptor
        return None

    def filename(self, role: ArtifactRole) -> Optional[str]:
        descriptor = self.get(role)
        return descriptor.filename if descriptor else None


def plan_artifacts(
    codegen_args: Mapping[str, str],
    verilog_file: Optional[str],
    overrides: Optional[Mapping[str, Optional[str]]] = None,
) -> ArtifactPlan:
    """Plan the codegen outputs for one target.

    Args:
        codegen_args: User codegen arguments (without defaults)
        verilog_file: Filename of the Verilog output; mandatory
        overrides: Companion filenames keyed by attribute name
            (``module_sig_file``, ``schedule_file``, ``verilog_line_map_file``,
            ``block_ir_file``); ``None`` values fall back to the default

    Raises:
        MissingOutputError: If ``verilog_file`` is empty
        UnknownOptionError: For unrecognized codegen arguments or override keys
        BadExtensionError: If the Verilog extension does not match the dialect
        ActionConflictError: If two planned artifacts share a filename
    """
    if not verilog_file:
        raise MissingOutputError(ArtifactRole.VERILOG.attribute)

    overrides = {k: v for k, v in (overrides or {}).items() if v}
    for key in overrides:
        if key not in _OVERRIDE_ATTRIBUTES:
            raise UnknownOptionError(key)

    merged = validate_args(merge_defaults(codegen_args))
    mode = generator_mode(merged)
    use_system_verilog = uses_system_verilog(merged)
    validate_verilog_filename(verilog_file, use_system_verilog)
    basename = split_filename(verilog_file)[0]

    descriptors = []
    for role in PLANNED_ROLE_ORDER:
        if role is ArtifactRole.VERILOG:
            descriptors.append(ArtifactDescriptor(role, verilog_file))
            continue
        if role is ArtifactRole.SCHEDULE and not mode.produces_schedule:
            if role.attribute in overrides:
                logger.warning(
                    "Ignoring schedule_file '%s': the combinational generator does not produce a schedule",
                    overrides[role.attribute],
                )
            continue
        filename = overrides.get(role.attribute) or derive_filename(basename, role)
        descriptors.append(ArtifactDescriptor(role, filename))

    seen = set()
    for descriptor in descriptors:
        normalized = posixpath.normpath(descriptor.filename)
        if normalized in seen:
            raise ActionConflictError(normalized)
        seen.add(normalized)

    logger.debug(
        "Planned %d artifacts for %s (generator=%s)",
        len(descriptors),
        verilog_file,
        mode.value,
    )
    return ArtifactPlan(
        mode=mode,
        basename=basename,
        codegen_args=merged,
        use_system_verilog=use_system_verilog,
        descriptors=tuple(descriptors),
    )
