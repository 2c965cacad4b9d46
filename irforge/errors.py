# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Exception hierarchy for codegen planning and action construction.

Every error here is fatal for the target being analyzed: nothing is retried
and nothing is registered with the action graph once one is raised. Each
error carries the offending key, filename or target name in its message so
the CLI can report it without further context.
"""

from irforge.constants import ENV_PREFIX, EX_CONFIG, EX_SOFTWARE, PROJECT_CONFIG_FILE


class IrforgeError(Exception):
    """Base exception for all irforge errors.

    Attributes:
        message: Main error message
        details: Optional list of additional detail lines
        exit_code: Suggested exit code for this error type (class attribute)
    """

    exit_code: int = EX_SOFTWARE

    def __init__(self, message: str, details: list[str] | None = None):
        self.message = message
        self.details = details or []
        super().__init__(message)

    def format_for_console(self) -> str:
        """Format error message for Rich console output."""
        lines = [f"[red]Error:[/red] {self.message}"]
        if self.details:
            lines.append("")
            for detail in self.details:
                lines.append(f"  • {detail}")
        return "\n".join(lines)


class ConfigurationError(IrforgeError):
    """A target's attributes or the toolchain configuration are invalid."""

    exit_code = EX_CONFIG


class UnknownOptionError(ConfigurationError):
    """A codegen argument is not in the recognized flag set."""

    def __init__(self, key: str, details: list[str] | None = None):
        self.key = key
        super().__init__(f"Unrecognized argument: {key}.", details)


class BadExtensionError(ConfigurationError):
    """The Verilog output filename does not match the Verilog dialect."""

    def __init__(self, filename: str, expected_extension: str, system_verilog: bool):
        self.filename = filename
        self.expected_extension = expected_extension
        dialect = "SystemVerilog" if system_verilog else "Verilog"
        super().__init__(
            f"{dialect} filename must contain the '{expected_extension}' extension: {filename!r}."
        )


class MissingTopError(ConfigurationError):
    """Benchmarking was requested for a target without a top entity."""

    def __init__(self, target_name: str):
        self.target_name = target_name
        super().__init__(
            f"Verilog target '{target_name}' does not provide a top value",
            details=["Set 'top' or 'module_name' in the target's codegen_args"],
        )


class ToolResolutionError(ConfigurationError):
    """A toolchain executable could not be resolved."""

    def __init__(self, tool_name: str, setting: str | None = None):
        self.tool_name = tool_name
        self.setting = setting
        details = []
        if setting:
            details.append(
                f"Set {ENV_PREFIX}{setting.upper()} or '{setting}' in {PROJECT_CONFIG_FILE}"
            )
        details.append(f"Or put '{tool_name}' on PATH")
        super().__init__(f"Toolchain executable '{tool_name}' is not available", details=details)


class MissingOutputError(ConfigurationError):
    """A mandatory output attribute was not supplied."""

    def __init__(self, attribute: str):
        self.attribute = attribute
        super().__init__(f"Mandatory output attribute '{attribute}' is not set.")


class BuildGraphError(IrforgeError):
    """The action graph cannot accept the requested declaration."""


class ActionConflictError(BuildGraphError):
    """Two declarations or actions claim the same output path."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Output '{path}' is already declared or generated by another action.")


class MissingProviderError(BuildGraphError):
    """A target does not carry the provider a rule depends on."""

    def __init__(self, label: str, provider: str):
        self.label = label
        self.provider = provider
        super().__init__(f"Target '{label}' does not provide {provider}.")
