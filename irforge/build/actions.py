# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Registered build actions.

Actions are descriptions only. irforge never runs a ShellAction; executing
the action graph is the job of whatever build orchestrator consumes it.
"""

from __future__ import annotations

import logging
import os
import stat
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Union

from irforge.build.artifacts import Artifact

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ShellAction:
    """One external tool invocation.

    Attributes:
        mnemonic: Short action kind, e.g. ``Codegen``
        command: Full shell command line
        inputs: Files the command reads (sources and tool runfiles)
        outputs: Files the command must produce
        tools: Executables invoked by the command
        progress_message: Human-readable label shown while the action runs
    """

    mnemonic: str
    command: str
    inputs: tuple[Artifact, ...]
    outputs: tuple[Artifact, ...]
    tools: tuple[Artifact, ...] = ()
    progress_message: str = ""


@dataclass(frozen=True)
class FileWriteAction:
    """Write fixed content to a declared output file."""

    output: Artifact
    content: str
    is_executable: bool = False

    @property
    def outputs(self) -> tuple[Artifact, ...]:
        return (self.output,)


Action = Union[ShellAction, FileWriteAction]


def materialize(actions: Iterable[Action], root: str | Path) -> list[Path]:
    """Write the content of file-write actions below ``root``.

    Shell actions are skipped. Returns the paths that were written.
    """
    root = Path(root)
    written = []
    for action in actions:
        if not isinstance(action, FileWriteAction):
            logger.debug("Skipping %s action (not executed by irforge)", getattr(action, "mnemonic", "?"))
            continue
        target = root / action.output.short_path
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(action.content)
        if action.is_executable:
            mode = os.stat(target).st_mode
            os.chmod(target, mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        logger.info("Wrote %s", target)
        written.append(target)
    return written
