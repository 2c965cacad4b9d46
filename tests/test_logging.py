# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Essential tests for logging configuration."""

import logging

import pytest
from click.testing import CliRunner
from rich.logging import RichHandler

from irforge._internal.logging import setup_logging
from irforge.cli.cli import create_cli


def test_logging_levels_documentation(reset_logging):
    """Document expected logging levels for each verbosity mode."""
    setup_logging(level="quiet")
    assert logging.getLogger().level == logging.ERROR

    setup_logging(level="normal")
    assert logging.getLogger().level == logging.WARNING

    setup_logging(level="verbose")
    assert logging.getLogger().level == logging.INFO

    setup_logging(level="debug")
    assert logging.getLogger().level == logging.DEBUG


@pytest.mark.parametrize("level,expected", [
    ("error", logging.ERROR),
    ("warning", logging.WARNING),
    ("info", logging.INFO),
    ("DEBUG", logging.DEBUG),
    ("chatty", logging.WARNING),
])
def test_plain_level_names(reset_logging, level, expected):
    setup_logging(level=level)
    assert logging.getLogger().level == expected


def test_repeated_setup_does_not_stack_handlers(reset_logging):
    """Repeated setup adjusts existing handlers instead of adding more."""
    root = logging.getLogger()
    setup_logging(level="normal")
    count = len(root.handlers)
    setup_logging(level="debug")
    assert len(root.handlers) == count
    assert all(h.level == logging.DEBUG for h in root.handlers)
    assert sum(isinstance(h, RichHandler) for h in root.handlers) <= 1


def test_cli_log_level_flag(reset_logging):
    """The -l flag reaches the root logger before any command runs."""
    runner = CliRunner()
    result = runner.invoke(create_cli(), ["-l", "debug", "build", "--help"])
    assert result.exit_code == 0
    assert logging.getLogger().level == logging.DEBUG


def test_cli_rejects_unknown_level():
    result = CliRunner().invoke(create_cli(), ["-l", "loud", "plan", "--help"])
    assert result.exit_code == 2


def test_registration_logged_at_info(caplog, ctx, src, toolchain):
    from irforge.codegen.action import build_codegen_action

    with caplog.at_level(logging.INFO, logger="irforge.build.context"):
        build_codegen_action(ctx, src, toolchain, {}, "adder.sv")
    assert "Registered Codegen action for //designs:adder_verilog (5 outputs)" in caplog.text
