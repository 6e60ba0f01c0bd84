#!/usr/bin/env python3
# nitro_terminal/ui/__init__.py
from __future__ import annotations
# Re-export convenient top-level API
from .utils import (
    ANSI,
    ColorToken,
    strip_ansi,
    visible_length,
    enable_windows_vt,
    hex_color,
    rgb,
    stylize,
    PRINT_MUTEX,
    write,
    print_line,
    get_terminal_columns,
)
from .static import (
    Severity,
    LogEntry,
    FormattedEntry,
    LogFormatter,
    TerminalHandler,
    PlainFormatter,
    init_logger,
)
from .animated import (
    FRAMES,
    AnimationDriver,
    AnimationState,
    IntervalTicker,
    State,
    render_frame,
)

__all__ = [
    "ANSI",
    "ColorToken",
    "strip_ansi",
    "visible_length",
    "enable_windows_vt",
    "hex_color",
    "rgb",
    "stylize",
    "PRINT_MUTEX",
    "write",
    "print_line",
    "get_terminal_columns",
    "Severity",
    "LogEntry",
    "FormattedEntry",
    "LogFormatter",
    "TerminalHandler",
    "PlainFormatter",
    "init_logger",
    "FRAMES",
    "AnimationDriver",
    "AnimationState",
    "IntervalTicker",
    "State",
    "render_frame",
]
