# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""irforge command line interface."""

from .cli import create_cli, main

__all__ = ["create_cli", "main"]
