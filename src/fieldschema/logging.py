# Copyright 2026 FieldSchema Contributors
# SPDX-License-Identifier: Apache-2.0

"""Logger hierarchy for fieldschema.

Console output goes to standard error and stays at WARNING unless verbose
output is requested. A log file, when given, always records the full DEBUG
trace of a run so that a quiet invocation can still be inspected afterwards.
"""

from __future__ import annotations

import logging
from pathlib import Path

# ###############
# Public Interface
# ###############


def get_logger(name: str | None = None) -> logging.Logger:
    """Return ``fieldschema`` or the ``fieldschema.<name>`` child logger."""
    return logging.getLogger(_ROOT if name is None else f"{_ROOT}.{name}")


def configure_logging(*, verbose: bool = False, log_file: Path | None = None) -> logging.Logger:
    """Install the console handler and, optionally, a DEBUG-level file handler.

    Handlers installed by an earlier call are closed and replaced, so the
    function can be called once per CLI invocation.

    Args:
        verbose: Show DEBUG messages on the console.
        log_file: File that receives every message of the run.

    Returns:
        The configured ``fieldschema`` logger.
    """
    console_level = logging.DEBUG if verbose else logging.WARNING
    logger = logging.getLogger(_ROOT)
    logger.propagate = False
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    _attach(logger, logging.StreamHandler(), console_level, _CONSOLE_FORMAT)
    if log_file is not None:
        _attach(logger, logging.FileHandler(log_file, mode="w", encoding="utf-8"), logging.DEBUG, _FILE_FORMAT)
    logger.setLevel(min(handler.level for handler in logger.handlers))
    return logger


# ################
# Implementation
# ################

_ROOT = "fieldschema"
_CONSOLE_FORMAT = "[fieldschema] %(levelname)s %(message)s"
_FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _attach(logger: logging.Logger, handler: logging.Handler, level: int, fmt: str) -> None:
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt))
    logger.addHandler(handler)


__all__ = ["configure_logging", "get_logger"]
