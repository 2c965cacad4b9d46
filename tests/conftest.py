# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Shared fixtures for the irforge test suite."""

import logging
import os
from pathlib import Path

import pytest

from irforge.build.artifacts import Label
from irforge.build.context import RuleContext
from irforge.settings import reset_config
from irforge.toolchain import Toolchain, ToolTarget

CODEGEN_TOOL = "tools/codegen_main"
BENCHMARK_TOOL = "tools/benchmark_codegen_main"
DELAY_MODEL_DATA = "tools/delay_models.textproto"
BIN = "irforge-out/bin/designs"


@pytest.fixture
def toolchain():
    """Toolchain with both tools resolved to workspace-relative paths."""
    return Toolchain(
        codegen_tool=ToolTarget.from_path(
            "codegen_main", Path(CODEGEN_TOOL), [Path(DELAY_MODEL_DATA)]
        ),
        benchmark_codegen_tool=ToolTarget.from_path(
            "benchmark_codegen_main", Path(BENCHMARK_TOOL)
        ),
    )


@pytest.fixture
def unresolved_toolchain():
    return Toolchain(
        codegen_tool=ToolTarget(name="codegen_main"),
        benchmark_codegen_tool=ToolTarget(name="benchmark_codegen_main"),
    )


@pytest.fixture
def ctx():
    return RuleContext(label=Label("designs", "adder_verilog"))


@pytest.fixture
def bench_ctx():
    return RuleContext(label=Label("designs", "adder_benchmark"))


@pytest.fixture
def src(ctx):
    return ctx.source_file("adder.opt.ir")


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch, tmp_path):
    """Keep tests away from real irforge.yaml files and IRFORGE_* variables."""
    for key in list(os.environ):
        if key.startswith("IRFORGE_"):
            monkeypatch.delenv(key)
    monkeypatch.setenv("IRFORGE_PROJECT_DIR", str(tmp_path / "no-project"))
    reset_config()
    yield
    reset_config()


@pytest.fixture
def reset_logging():
    """Reset logging system between tests."""
    root = logging.getLogger()
    for handler in root.handlers[:]:
        root.removeHandler(handler)
    root.setLevel(logging.WARNING)
    yield
    for handler in root.handlers[:]:
        root.removeHandler(handler)
    root.setLevel(logging.WARNING)
