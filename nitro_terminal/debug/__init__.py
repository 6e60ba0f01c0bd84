#!/usr/bin/env python3
# nitro_terminal/debug/__init__.py
from __future__ import annotations
from .writer import (
    DebugLogWriter,
    DebugLogError,
    DEFAULT_DIRECTORY,
    log_file_name,
    next_rotation_index,
)

__all__ = [
    "DebugLogWriter",
    "DebugLogError",
    "DEFAULT_DIRECTORY",
    "log_file_name",
    "next_rotation_index",
]
