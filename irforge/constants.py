# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

from enum import IntEnum
from pathlib import Path

# ============================================================================
# Configuration Files
# ============================================================================

PROJECT_CONFIG_FILE = "irforge.yaml"
DEFAULT_BIN_DIR = "irforge-out/bin"

# ============================================================================
# Environment Variables
# ============================================================================

ENV_PREFIX = "IRFORGE_"
ENV_PROJECT_DIR = "IRFORGE_PROJECT_DIR"
ENV_LOG_LEVEL = "IRFORGE_LOG_LEVEL"

# ============================================================================
# Toolchain
# ============================================================================

CODEGEN_TOOL_NAME = "codegen_main"
BENCHMARK_CODEGEN_TOOL_NAME = "benchmark_codegen_main"

# Settings fields that configure each tool
CODEGEN_TOOL_SETTING = "codegen_tool"
BENCHMARK_CODEGEN_TOOL_SETTING = "benchmark_codegen_tool"

# ============================================================================
# CLI
# ============================================================================

CLI_NAME = "irforge"
PACKAGE_NAME = "irforge"

# ============================================================================
# Exit Codes (BSD sysexits.h)
# ============================================================================

EX_OK = 0
EX_USAGE = 64
EX_DATAERR = 65
EX_SOFTWARE = 70
EX_CONFIG = 78


class ExitCode(IntEnum):
    SUCCESS = EX_OK
    USAGE = EX_USAGE
    DATAERR = EX_DATAERR
    SOFTWARE = EX_SOFTWARE
    CONFIG = EX_CONFIG
    INTERRUPTED = 130


def project_config_path(directory: Path) -> Path:
    return directory / PROJECT_CONFIG_FILE
