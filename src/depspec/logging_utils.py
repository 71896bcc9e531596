"""Logging helpers shared by the parsers.

Parsers attach structured fields to DEBUG records through ``extra_context``
so that log handlers can filter on ``event``/``component`` without parsing
message text. Nothing here touches the root logger unless
``configure_logging`` is called explicitly.
"""
from __future__ import annotations

import logging
import os
from typing import Any, Dict, Optional

from .constants import Constants

_CONTEXT_FIELDS = ("event", "component", "action", "outcome")


def extra_context(**kwargs: Any) -> Dict[str, Any]:
    """Build an ``extra`` mapping for logger calls, dropping ``None`` values."""
    context = {key: value for key, value in kwargs.items() if value is not None}
    for field in _CONTEXT_FIELDS:
        context.setdefault(field, None)
    return context


def is_debug_enabled(logger: logging.Logger) -> bool:
    """Return True when DEBUG records would be emitted by ``logger``."""
    return logger.isEnabledFor(logging.DEBUG)


def configure_logging(level: Optional[str] = None) -> None:
    """Configure root logging for applications embedding the parsers.

    Args:
        level: Level name; falls back to the DEPSPEC_LOG_LEVEL environment
            variable and then to WARNING.
    """
    name = level or os.environ.get(Constants.ENV_LOG_LEVEL) or Constants.DEFAULT_LOG_LEVEL
    numeric = logging.getLevelName(name.strip().upper())
    if not isinstance(numeric, int):
        raise ValueError(f"Unknown log level: {name}")
    logging.basicConfig(level=numeric, format=Constants.LOG_FORMAT)
