"""Logging setup shared by the CLI and the web service."""

from __future__ import annotations

import logging
import sys


def configure_logging(log_level: int | str) -> logging.Logger:
    """Configure the root logger with a single stderr handler.

    Args:
        log_level: Numeric level or level name such as ``"DEBUG"``.

    Returns:
        The configured root logger.
    """
    if isinstance(log_level, int):
        resolved_level = log_level
    else:
        resolved_level = getattr(logging, str(log_level).upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(resolved_level)
    root_logger.handlers.clear()

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(resolved_level)
    handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    root_logger.addHandler(handler)
    return root_logger
