# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""File handles and target labels for the action graph."""

from __future__ import annotations

import posixpath
from dataclasses import dataclass


@dataclass(frozen=True, order=True)
class Label:
    """Target label of the form ``//package:name``."""

    package: str
    name: str

    @classmethod
    def parse(cls, text: str, default_package: str = "") -> Label:
        """Parse ``//pkg:name``, ``:name`` or ``name``."""
        body = text[2:] if text.startswith("//") else text
        if ":" in body:
            package, name = body.split(":", 1)
            if not text.startswith("//") and not package:
                package = default_package
        elif text.startswith("//"):
            package, name = body, posixpath.basename(body)
        else:
            package, name = default_package, body
        if not name:
            raise ValueError(f"Invalid label: {text!r}")
        return cls(package=package, name=name)

    def __str__(self) -> str:
        return f"//{self.package}:{self.name}"


@dataclass(frozen=True, order=True)
class Artifact:
    """Handle to a source or generated file.

    Attributes:
        short_path: Workspace-relative path, e.g. ``designs/adder.sv``
        root: Output root the file lives under; empty for source files
    """

    short_path: str
    root: str = ""

    @property
    def path(self) -> str:
        """Execution-root relative path used on tool command lines."""
        if not self.root:
            return self.short_path
        return posixpath.join(self.root, self.short_path)

    @property
    def basename(self) -> str:
        return posixpath.basename(self.short_path)

    @property
    def is_source(self) -> bool:
        return not self.root

    def __str__(self) -> str:
        return self.path


def source_artifact(path: str) -> Artifact:
    """Create a handle to a checked-in source file."""
    return Artifact(short_path=posixpath.normpath(path))
