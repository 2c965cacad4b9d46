# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""irforge CLI commands.

Single source of truth for command registration. Command mappings are used
by cli.py's LazyGroup for lazy loading.
"""

# Format: 'command_name': (relative_module, attribute_name)
_COMMAND_REGISTRY = {
    "plan": (".plan", "plan"),
    "benchmark": (".benchmark", "benchmark"),
    "build": (".build", "build"),
}

COMMAND_MAP = {
    name: (f"irforge.cli.commands{module}", attr)
    for name, (module, attr) in _COMMAND_REGISTRY.items()
}

__all__ = ["COMMAND_MAP"]
