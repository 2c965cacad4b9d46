# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Minimal model of the host build system's analysis phase.

Provides artifact handles, runfiles, a per-target rule context that declares
outputs and registers actions, and the providers targets hand to each other.
"""

from .actions import Action, FileWriteAction, ShellAction, materialize
from .artifacts import Artifact, Label, source_artifact
from .context import ActionRegistry, RuleContext
from .providers import BuiltTarget, DefaultInfo, get_runfiles_for, get_transitive_built_files
from .runfiles import Runfiles

__all__ = [
    "Action",
    "ActionRegistry",
    "Artifact",
    "BuiltTarget",
    "DefaultInfo",
    "FileWriteAction",
    "Label",
    "RuleContext",
    "Runfiles",
    "ShellAction",
    "get_runfiles_for",
    "get_transitive_built_files",
    "materialize",
    "source_artifact",
]
