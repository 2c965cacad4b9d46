# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from irforge.build.artifacts import Artifact


def _dedupe(files: Iterable[Artifact]) -> tuple[Artifact, ...]:
    # First occurrence wins so merged runfiles keep a stable order.
    return tuple(dict.fromkeys(files))


@dataclass(frozen=True)
class Runfiles:
    """Ordered, duplicate-free set of files a tool or script needs at run time."""

    files: tuple[Artifact, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "files", _dedupe(self.files))

    @classmethod
    def of(cls, files: Iterable[Artifact]) -> Runfiles:
        return cls(files=tuple(files))

    def merge(self, other: Runfiles) -> Runfiles:
        return Runfiles(files=self.files + other.files)

    def merge_all(self, others: Iterable[Runfiles]) -> Runfiles:
        merged = self.files
        for other in others:
            merged += other.files
        return Runfiles(files=merged)

    def __contains__(self, artifact: object) -> bool:
        return artifact in self.files

    def __iter__(self):
        return iter(self.files)

    def __len__(self) -> int:
        return len(self.files)
