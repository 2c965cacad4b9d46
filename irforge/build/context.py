# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Per-target analysis context.

A RuleContext is created for one target, handed to one rule implementation
and then discarded. Output declarations and registered actions live on its
ActionRegistry; nothing is shared between contexts.
"""

from __future__ import annotations

import logging
import posixpath
from dataclasses import dataclass, field
from typing import Iterable

from irforge.build.actions import Action, FileWriteAction, ShellAction
from irforge.build.artifacts import Artifact, Label, source_artifact
from irforge.constants import DEFAULT_BIN_DIR
from irforge.errors import ActionConflictError

logger = logging.getLogger(__name__)


class ActionRegistry:
    """Declares output files and records the actions that generate them."""

    def __init__(self, label: Label, bin_dir: str):
        self._label = label
        self._bin_dir = bin_dir
        self._declared: dict[str, Artifact] = {}
        self._generated: set[str] = set()
        self._actions: list[Action] = []

    def declare_file(self, filename: str) -> Artifact:
        """Declare an output file in the target's package.

        Raises:
            ActionConflictError: If the file was already declared
        """
        short_path = posixpath.normpath(posixpath.join(self._label.package, filename))
        if short_path in self._declared:
            raise ActionConflictError(short_path)
        artifact = Artifact(short_path=short_path, root=self._bin_dir)
        self._declared[short_path] = artifact
        return artifact

    def run_shell(
        self,
        outputs: Iterable[Artifact],
        inputs: Iterable[Artifact],
        command: str,
        tools: Iterable[Artifact] = (),
        mnemonic: str = "Genrule",
        progress_message: str = "",
    ) -> ShellAction:
        action = ShellAction(
            mnemonic=mnemonic,
            command=command,
            inputs=tuple(inputs),
            outputs=tuple(outputs),
            tools=tuple(tools),
            progress_message=progress_message,
        )
        self._register(action)
        return action

    def write(self, output: Artifact, content: str, is_executable: bool = False) -> FileWriteAction:
        action = FileWriteAction(output=output, content=content, is_executable=is_executable)
        self._register(action)
        return action

    def _register(self, action: Action) -> None:
        for output in action.outputs:
            if output.short_path not in self._declared:
                raise ValueError(f"Output '{output.short_path}' was not declared by {self._label}")
            if output.short_path in self._generated:
                raise ActionConflictError(output.short_path)
        self._generated.update(output.short_path for output in action.outputs)
        self._actions.append(action)
        logger.info(
            "Registered %s action for %s (%d outputs)",
            getattr(action, "mnemonic", "FileWrite"),
            self._label,
            len(action.outputs),
        )

    @property
    def registered(self) -> tuple[Action, ...]:
        return tuple(self._actions)


@dataclass
class RuleContext:
    """Analysis context for a single target."""

    label: Label
    bin_dir: str = DEFAULT_BIN_DIR
    actions: ActionRegistry = field(init=False)

    def __post_init__(self) -> None:
        self.actions = ActionRegistry(self.label, self.bin_dir)

    @classmethod
    def for_target(cls, label: str | Label, bin_dir: str = DEFAULT_BIN_DIR) -> RuleContext:
        if isinstance(label, str):
            label = Label.parse(label)
        return cls(label=label, bin_dir=bin_dir)

    def source_file(self, path: str) -> Artifact:
        """Handle to a source file, relative to the target's package."""
        return source_artifact(posixpath.join(self.label.package, path))
