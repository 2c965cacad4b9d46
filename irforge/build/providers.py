# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Provider records passed between targets."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Iterable, Mapping, Optional, TypeVar

from irforge.build.artifacts import Artifact, Label
from irforge.build.runfiles import Runfiles
from irforge.errors import MissingProviderError

P = TypeVar("P")


@dataclass(frozen=True)
class DefaultInfo:
    """Files a target builds and what it needs at run time."""

    files: tuple[Artifact, ...] = ()
    runfiles: Runfiles = field(default_factory=Runfiles)
    executable: Optional[Artifact] = None


@dataclass(frozen=True)
class BuiltTarget:
    """An analyzed target: its label plus the providers it returned."""

    label: Label
    providers: Mapping[type, Any]

    def __post_init__(self) -> None:
        object.__setattr__(self, "providers", MappingProxyType(dict(self.providers)))

    @classmethod
    def create(cls, label: Label, *providers: Any) -> BuiltTarget:
        return cls(label=label, providers={type(p): p for p in providers})

    def __getitem__(self, provider: type[P]) -> P:
        try:
            return self.providers[provider]
        except KeyError:
            raise MissingProviderError(str(self.label), provider.__name__) from None

    def __contains__(self, provider: type) -> bool:
        return provider in self.providers

    @property
    def default_info(self) -> DefaultInfo:
        return self.providers.get(DefaultInfo, DefaultInfo())


def get_transitive_built_files(targets: Iterable[BuiltTarget]) -> tuple[Artifact, ...]:
    """Collect the built files of the given dependency targets."""
    files: list[Artifact] = []
    for target in targets:
        files.extend(target.default_info.files)
    return tuple(dict.fromkeys(files))


def get_runfiles_for(
    runfiles_list: Iterable[Runfiles],
    files: Iterable[Artifact],
    deps: Iterable[BuiltTarget] = (),
) -> Runfiles:
    """Merge tool runfiles, direct files and dependency runfiles.

    Args:
        runfiles_list: Runfiles of the tools the target invokes
        files: Files the target's actions read directly
        deps: Dependency targets whose runfiles are forwarded
    """
    direct = Runfiles.of(files)
    return direct.merge_all(list(runfiles_list) + [dep.default_info.runfiles for dep in deps])
