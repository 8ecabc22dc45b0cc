"""
Formkit Utils Package
=====================

Logging utilities.
"""

from __future__ import annotations

from formkit.utils.logger import (
    JsonFormatter,
    Logger,
    LogLevel,
    MemoryHandler,
    StreamHandler,
    TextFormatter,
    configure_logging,
    get_logger,
)

__all__ = [
    "JsonFormatter",
    "Logger",
    "LogLevel",
    "MemoryHandler",
    "StreamHandler",
    "TextFormatter",
    "configure_logging",
    "get_logger",
]
