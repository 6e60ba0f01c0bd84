#!/usr/bin/env python3
# nitro_terminal/ui/utils/__init__.py
from __future__ import annotations
from .ansi import (
    ANSI,
    ColorToken,
    strip_ansi,
    visible_length,
    enable_windows_vt,
    rgb,
    hex_color,
    stylize,
)
from .console import PRINT_MUTEX, write, print_line, get_terminal_columns

__all__ = [
    "ANSI",
    "ColorToken",
    "strip_ansi",
    "visible_length",
    "enable_windows_vt",
    "rgb",
    "hex_color",
    "stylize",
    "PRINT_MUTEX",
    "write",
    "print_line",
    "get_terminal_columns",
]
