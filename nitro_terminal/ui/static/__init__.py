#!/usr/bin/env python3
# nitro_terminal/ui/static/__init__.py
from __future__ import annotations
from .logging import (
    Severity,
    LogEntry,
    FormattedEntry,
    LogFormatter,
    SEVERITY_COLORS,
    SEVERITY_TAGS,
    TerminalHandler,
    PlainFormatter,
    init_logger,
)

__all__ = [
    "Severity",
    "LogEntry",
    "FormattedEntry",
    "LogFormatter",
    "SEVERITY_COLORS",
    "SEVERITY_TAGS",
    "TerminalHandler",
    "PlainFormatter",
    "init_logger",
]
