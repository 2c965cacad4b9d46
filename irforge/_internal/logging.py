# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Simple logging configuration using Python's standard logging with Rich.

Usage:
    from irforge._internal.logging import setup_logging

    # In CLI setup
    setup_logging(level="normal")

    # In application code
    import logging
    logger = logging.getLogger(__name__)
    logger.info("Registered Codegen action")
"""

import logging

_LEVEL_MAP = {
    "quiet": logging.ERROR,
    "error": logging.ERROR,
    "normal": logging.WARNING,
    "warning": logging.WARNING,
    "verbose": logging.INFO,
    "info": logging.INFO,
    "debug": logging.DEBUG,
}


def setup_logging(level: str = "normal") -> None:
    """Configure Python logging with Rich handler.

    Maps CLI verbosity ('quiet', 'normal', 'verbose', 'debug') and the plain
    level names ('error', 'warning', 'info') to logging constants. Unknown
    names fall back to WARNING.
    """
    from rich.console import Console
    from rich.logging import RichHandler

    log_level = _LEVEL_MAP.get(level.lower(), logging.WARNING)

    root = logging.getLogger()
    root.setLevel(log_level)

    if not root.handlers:
        handler = RichHandler(
            console=Console(stderr=True),
            rich_tracebacks=(log_level == logging.DEBUG),
            show_path=False,
            markup=False,
            show_time=False,
        )
        handler.setLevel(log_level)
        handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
        root.addHandler(handler)
    else:
        for handler in root.handlers:
            handler.setLevel(log_level)
