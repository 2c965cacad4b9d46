# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Codegen toolchain resolution.

A toolchain names the two executables irforge builds actions around: the
codegen tool and the codegen benchmarking tool. Either may be unresolved;
that only becomes an error when a rule actually needs the missing tool.
"""

from __future__ import annotations

import logging
import os
import shutil
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Iterable, Optional

from irforge.build.artifacts import Artifact
from irforge.build.runfiles import Runfiles
from irforge.constants import (
    BENCHMARK_CODEGEN_TOOL_NAME,
    BENCHMARK_CODEGEN_TOOL_SETTING,
    CODEGEN_TOOL_NAME,
    CODEGEN_TOOL_SETTING,
)
from irforge.errors import ToolResolutionError

if TYPE_CHECKING:
    from irforge.settings import IrforgeSettings

logger = logging.getLogger(__name__)


def _tool_artifact(path: Path) -> Artifact:
    return Artifact(short_path=path.as_posix())


@dataclass(frozen=True)
class ToolTarget:
    """An executable plus the files it needs at run time.

    ``setting`` names the settings field that configures the tool.
    """

    name: str
    executable: Optional[Artifact] = None
    runfiles: Runfiles = field(default_factory=Runfiles)
    setting: Optional[str] = None

    @classmethod
    def from_path(
        cls,
        name: str,
        path: Optional[Path],
        data: Iterable[Path] = (),
        setting: Optional[str] = None,
    ) -> ToolTarget:
        if path is None:
            return cls(name=name, setting=setting)
        executable = _tool_artifact(path)
        runfiles = Runfiles.of([executable, *(_tool_artifact(p) for p in data)])
        return cls(name=name, executable=executable, runfiles=runfiles, setting=setting)

    @property
    def resolved(self) -> bool:
        return self.executable is not None


@dataclass(frozen=True)
class Toolchain:
    codegen_tool: ToolTarget
    benchmark_codegen_tool: ToolTarget

    @classmethod
    def from_settings(cls, settings: IrforgeSettings) -> Toolchain:
        """Resolve both tools from settings, falling back to a PATH lookup."""
        data = [settings.resolve_path(p) for p in settings.tool_runfiles]
        return cls(
            codegen_tool=ToolTarget.from_path(
                CODEGEN_TOOL_NAME,
                _locate(CODEGEN_TOOL_NAME, settings.codegen_tool, settings),
                data,
                setting=CODEGEN_TOOL_SETTING,
            ),
            benchmark_codegen_tool=ToolTarget.from_path(
                BENCHMARK_CODEGEN_TOOL_NAME,
                _locate(BENCHMARK_CODEGEN_TOOL_NAME, settings.benchmark_codegen_tool, settings),
                data,
                setting=BENCHMARK_CODEGEN_TOOL_SETTING,
            ),
        )


def _locate(name: str, configured: Optional[Path], settings: IrforgeSettings) -> Optional[Path]:
    if configured is not None:
        path = settings.resolve_path(configured)
        if not (path.is_file() and os.access(path, os.X_OK)):
            logger.warning("Configured %s is not an executable file: %s", name, path)
            return None
        return path
    found = shutil.which(name)
    if found is None:
        logger.debug("%s not configured and not found on PATH", name)
        return None
    return Path(found)


def get_executable_from(tool: ToolTarget) -> Artifact:
    """Return the tool's executable.

    Raises:
        ToolResolutionError: If the tool was not resolved
    """
    if tool.executable is None:
        raise ToolResolutionError(tool.name, tool.setting)
    return tool.executable


def get_runfiles_from(tool: ToolTarget) -> Runfiles:
    return tool.runfiles
