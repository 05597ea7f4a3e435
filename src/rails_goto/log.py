"""Logger plumbing.

Components never log through a module global: each function takes an
optional ``logger`` and falls back to :func:`get_logger`. The facade binds
per-resolution context and hands that bound logger down the chain.
"""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING, Any

from loguru import logger as loguru_logger

if TYPE_CHECKING:
    from loguru import Logger

COMPONENT = "rails_goto"

_LOG_FORMAT = (
    "<green>{time:HH:mm:ss.SSS}</green> | <level>{level: <8}</level> | "
    "{extra[component]} | {message}"
)


def get_logger(**context: Any) -> Logger:
    """Return the package logger bound with ``context``."""
    return loguru_logger.bind(component=COMPONENT, **context)


def configure_logging(*, verbose: bool = False) -> None:
    """Route package logs to stderr (CLI use only).

    Stdout is left for command output.
    """
    loguru_logger.remove()
    loguru_logger.add(
        sys.stderr,
        level="DEBUG" if verbose else "WARNING",
        format=_LOG_FORMAT,
        filter=lambda record: record["extra"].get("component") == COMPONENT,
    )
