# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""irforge configuration schema using Pydantic.

Configuration Priority
----------------------
Settings are loaded from multiple sources with the following priority (highest to lowest):
1. CLI arguments (passed to IrforgeSettings constructor)
2. Environment variables (IRFORGE_* prefix, ``__`` for nested fields)
3. Project config file (irforge.yaml)
4. Built-in defaults (Field defaults in IrforgeSettings)

The project config file is found by walking up from the current directory,
unless IRFORGE_PROJECT_DIR names the directory to use.

Relative tool paths resolve against the directory holding irforge.yaml
(or the current directory when there is none).
"""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

from irforge._internal.io.yaml import expand_env_vars
from irforge.constants import (
    DEFAULT_BIN_DIR,
    ENV_PREFIX,
    ENV_PROJECT_DIR,
    PROJECT_CONFIG_FILE,
    project_config_path,
)


def _find_project_config() -> Path | None:
    """Find the project configuration file.

    Search order:
    1. If IRFORGE_PROJECT_DIR is set, check that directory only
    2. Otherwise, walk up from CWD to find irforge.yaml

    Returns:
        Path to config file, or None if not found
    """
    if project_dir_override := os.environ.get(ENV_PROJECT_DIR):
        candidate = project_config_path(Path(project_dir_override).resolve())
        return candidate if candidate.exists() else None

    current = Path.cwd().resolve()
    while True:
        candidate = project_config_path(current)
        if candidate.exists():
            return candidate
        if current == current.parent:
            return None
        current = current.parent


class YamlSettingsSource(PydanticBaseSettingsSource):
    """Settings source backed by the project's irforge.yaml."""

    def __init__(self, settings_cls: type[BaseSettings], project_file: Path | None = None):
        super().__init__(settings_cls)
        self.project_file_used = None

        if project_file is None:
            project_file = _find_project_config()
        else:
            project_file = Path(project_file)
        if project_file is not None and project_file.is_file():
            self.project_file_used = project_file

        self._data = self._load_yaml_file() if self.project_file_used else {}

    def _load_yaml_file(self) -> dict[str, Any]:
        """Load the project YAML file with env var expansion.

        Raises:
            yaml.YAMLError: If the config file has syntax errors
        """
        try:
            with open(self.project_file_used) as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            if hasattr(e, "problem_mark"):
                mark = e.problem_mark
                location = f"line {mark.line + 1}, column {mark.column + 1}"
            else:
                location = "unknown location"
            raise yaml.YAMLError(
                f"\n\nInvalid YAML in config file: {self.project_file_used}\n"
                f"Error at {location}: {getattr(e, 'problem', None) or str(e)}\n\n"
                f"Fix the syntax error and try again."
            ) from e
        return expand_env_vars(data)

    def get_field_value(self, field_name: str, field_info: Any) -> tuple[Any, str, bool]:
        if field_name in self._data:
            return self._data[field_name], field_name, True
        return None, field_name, False

    def __call__(self) -> dict[str, Any]:
        data = self._data.copy()
        if self.project_file_used:
            data["project_file"] = self.project_file_used
        return data


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = Field(
        default="normal", description="Console verbosity level: quiet | normal | verbose | debug"
    )

    model_config = ConfigDict(extra="forbid")

    @field_validator("level")
    @classmethod
    def _check_level(cls, value: str) -> str:
        allowed = {"quiet", "normal", "verbose", "debug", "error", "warning", "info"}
        if value.lower() not in allowed:
            raise ValueError(f"Unknown log level '{value}' (expected one of {sorted(allowed)})")
        return value.lower()


class IrforgeSettings(BaseSettings):
    """Configuration schema with hierarchical priority.

    Priority order (highest to lowest):
    1. CLI arguments (passed to constructor)
    2. Environment variables (IRFORGE_* prefix)
    3. Project config (irforge.yaml)
    4. Built-in defaults
    """

    codegen_tool: Path | None = Field(
        default=None,
        description="Path to the codegen executable (looked up on PATH when unset)",
    )
    benchmark_codegen_tool: Path | None = Field(
        default=None,
        description="Path to the codegen benchmarking executable (looked up on PATH when unset)",
    )
    tool_runfiles: list[Path] = Field(
        default_factory=list,
        description="Extra data files both tools need at run time (delay models, libraries)",
    )
    bin_dir: str = Field(
        default=DEFAULT_BIN_DIR,
        description="Output root under which generated artifacts are declared",
    )
    project_file: Path | None = Field(
        default=None,
        description="Project config file in use (detected, not user-configurable)",
    )
    logging: LoggingConfig = Field(
        default_factory=LoggingConfig,
        description="Logging configuration",
    )

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        env_nested_delimiter="__",
        validate_assignment=True,
        extra="forbid",
        case_sensitive=False,
        env_file=None,  # Config files are handled by YamlSettingsSource
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Customize settings sources.

        Priority order (first source wins):
        1. Init settings (CLI/constructor args)
        2. Environment variables (IRFORGE_*)
        3. irforge.yaml
        """
        project_file = init_settings().get("project_file")
        return (
            init_settings,
            env_settings,
            YamlSettingsSource(settings_cls, project_file=project_file),
        )

    @property
    def project_dir(self) -> Path:
        """Directory relative tool paths resolve against."""
        if self.project_file is not None:
            return Path(self.project_file).resolve().parent
        return Path.cwd()

    def resolve_path(self, path: Path) -> Path:
        return path if path.is_absolute() else (self.project_dir / path).resolve()


__all__ = ["IrforgeSettings", "LoggingConfig", "PROJECT_CONFIG_FILE"]
