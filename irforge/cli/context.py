# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

from __future__ import annotations  # PEP 563: Postponed evaluation of annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from irforge.errors import ConfigurationError

from .utils import validation_details

# Type hints only - settings imported lazily inside methods
if TYPE_CHECKING:
    from irforge.settings import IrforgeSettings
    from irforge.toolchain import Toolchain

logger = logging.getLogger(__name__)


@dataclass
class ApplicationContext:
    """CLI execution context with settings loading and CLI argument handling."""

    config_file: Path | None = None
    overrides: dict[str, Any] = field(default_factory=dict)

    config: "IrforgeSettings | None" = None

    @classmethod
    def from_cli_args(
        cls,
        config_file: Path | None,
        log_level: str | None,
        overrides: dict[str, Any],
    ) -> "ApplicationContext":
        """Create context from CLI arguments, set up logging and load settings.

        Args:
            config_file: Path to config file override
            log_level: Logging level from the command line, or None to use settings
            overrides: Settings overrides from CLI options (None values ignored)

        Returns:
            Initialized ApplicationContext with loaded configuration
        """
        from irforge._internal.logging import setup_logging

        context = cls(
            config_file=config_file,
            overrides={k: v for k, v in overrides.items() if v is not None},
        )
        if log_level is not None:
            context.overrides["logging"] = {"level": log_level}

        context.load_configuration()
        setup_logging(level=context.config.logging.level)
        logger.debug("irforge CLI initialized with config=%s", context.config.project_file)
        return context

    def load_configuration(self) -> None:
        from irforge.settings import load_config

        try:
            self.config = load_config(project_file=self.config_file, **self.overrides)
        except ValidationError as e:
            raise ConfigurationError(
                "Invalid irforge configuration",
                details=validation_details(e),
            ) from e

    def get_effective_config(self) -> "IrforgeSettings":
        if self.config is None:
            self.load_configuration()
        return self.config

    def toolchain(self) -> "Toolchain":
        from irforge.toolchain import Toolchain

        return Toolchain.from_settings(self.get_effective_config())
