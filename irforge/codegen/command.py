# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Structured command-line assembly for tool invocations.

This module provides the CommandLineBuilder class for building tool command
lines from typed flag/value pairs instead of ad-hoc string concatenation.

Example:
    >>> builder = CommandLineBuilder("bin/codegen_main")
    >>> builder.arg("adder.opt.ir")
    >>> builder.flags({"pipeline_stages": "2", "delay_model": "unit"})
    >>> builder.flag("output_verilog_path", "out/adder.sv")
    >>> builder.render()
    'bin/codegen_main adder.opt.ir --delay_model=unit --pipeline_stages=2 --output_verilog_path=out/adder.sv'
"""

from typing import Mapping, Optional


class CommandLineBuilder:
    """Accumulates a tool path, positional arguments and ``--name=value`` flags.

    Nothing is serialized until :meth:`generate` or :meth:`render` is called,
    so the element order is exactly the order of the builder calls.
    """

    def __init__(self, tool: Optional[str] = None):
        self._parts: list[tuple[str, Optional[str]]] = []
        if tool is not None:
            self.arg(tool)

    def arg(self, value: str) -> "CommandLineBuilder":
        """Append a positional argument.

        Returns:
            Self for method chaining
        """
        self._parts.append((str(value), None))
        return self

    def flag(self, name: str, value: object) -> "CommandLineBuilder":
        """Append a ``--name=value`` flag.

        Returns:
            Self for method chaining
        """
        self._parts.append((name, str(value)))
        return self

    def optional_flag(self, name: str, value: Optional[object]) -> "CommandLineBuilder":
        """Append a flag only when ``value`` is set (not None or empty)."""
        if value:
            self.flag(name, value)
        return self

    def flags(self, values: Mapping[str, object]) -> "CommandLineBuilder":
        """Append one flag per mapping entry, sorted by flag name.

        Sorting makes the result independent of the mapping's insertion order.
        """
        for name in sorted(values):
            self.flag(name, values[name])
        return self

    def generate(self) -> list[str]:
        """Serialize to a list of command-line tokens."""
        return [
            name if value is None else f"--{name}={value}"
            for name, value in self._parts
        ]

    def render(self) -> str:
        """Serialize to a single space-separated command string."""
        return " ".join(self.generate())

    def __len__(self) -> int:
        return len(self._parts)
