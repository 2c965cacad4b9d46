# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Configuration loading and management for irforge."""

import os
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Optional

from pydantic import ValidationError
from rich.console import Console

from irforge.constants import ENV_LOG_LEVEL

from .schema import IrforgeSettings

console = Console(stderr=True)

_TOOL_PATH_FIELDS = ("codegen_tool", "benchmark_codegen_tool")


def _resolve_cli_paths(cli_overrides: Dict[str, Any]) -> Dict[str, Any]:
    """Resolve relative tool paths given on the command line against CWD.

    CLI paths follow shell semantics; paths from irforge.yaml or the
    environment resolve against the project directory instead.
    """
    result = {}
    cwd = Path.cwd()
    for key, value in cli_overrides.items():
        if key in _TOOL_PATH_FIELDS and value is not None:
            path = Path(value)
            result[key] = path if path.is_absolute() else (cwd / path).resolve()
        else:
            result[key] = value
    return result


def load_config(project_file: Optional[Path] = None, **cli_overrides) -> IrforgeSettings:
    """Load configuration with hierarchical priority.

    Priority order (highest to lowest):
    1. CLI arguments (passed as kwargs; None values are ignored)
    2. Environment variables (IRFORGE_* prefix)
    3. Project config file (irforge.yaml)
    4. Built-in defaults

    IRFORGE_LOG_LEVEL is accepted as shorthand for IRFORGE_LOGGING__LEVEL.

    Args:
        project_file: Path to project config file (for non-standard locations)
        **cli_overrides: CLI argument overrides

    Returns:
        IrforgeSettings object

    Raises:
        pydantic.ValidationError: If any source holds an invalid value
    """
    cli_overrides = _resolve_cli_paths(
        {k: v for k, v in cli_overrides.items() if v is not None}
    )

    if "logging" not in cli_overrides and ENV_LOG_LEVEL in os.environ:
        cli_overrides["logging"] = {"level": os.environ[ENV_LOG_LEVEL]}

    if project_file:
        cli_overrides["project_file"] = Path(project_file)

    try:
        return IrforgeSettings(**cli_overrides)
    except ValidationError as e:
        console.print("[bold red]Configuration validation failed:[/bold red]")
        for error in e.errors():
            field = " → ".join(str(x) for x in error["loc"])
            console.print(f"  [red]{field}: {error['msg']}[/red]")
        raise


@lru_cache(maxsize=1)
def get_config() -> IrforgeSettings:
    """Get cached configuration instance."""
    return load_config()


def reset_config() -> None:
    """Reset the cached configuration (mainly for testing)."""
    get_config.cache_clear()
