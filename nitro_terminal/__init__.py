#!/usr/bin/env python3
# nitro_terminal/__init__.py
from __future__ import annotations
"""
Terminal interaction engine for CLI tooling.

Spinners, categorized log lines and question/answer prompts share one
output stream without ever drawing over each other; log entries can be
mirrored to per-session debug files.

Notes:
- Everything hangs off a Terminal instance; the module-level helpers use a
  lazily created default instance (see get_terminal / set_terminal).
"""

from .config import TerminalSettings, load_settings
from .config_reader import ConfigErrorCode, ConfigReadError, read_app_config
from .coordinator import EnterResult, OutputMode, OutputModeCoordinator
from .debug import DebugLogError, DebugLogWriter
from .interface import PromptEngine, PromptToolkitReader, StreamReader, make_reader
from .terminal import (
    Terminal,
    get_terminal,
    set_terminal,
    log,
    success,
    warning,
    error,
    notice,
    log_custom,
    animate,
    update_animation,
    stop_animation,
    ask_string,
    ask_yes_no,
    set_debug_directory,
    set_debug_uses_military_time,
    set_debug_enabled,
    set_timestamps_enabled,
)
from .ui import (
    ColorToken,
    Severity,
    State,
    TerminalHandler,
    init_logger,
    render_frame,
    strip_ansi,
    stylize,
)

__version__ = "1.0.0"

__all__ = [
    "TerminalSettings",
    "load_settings",
    "ConfigErrorCode",
    "ConfigReadError",
    "read_app_config",
    "EnterResult",
    "OutputMode",
    "OutputModeCoordinator",
    "DebugLogError",
    "DebugLogWriter",
    "PromptEngine",
    "PromptToolkitReader",
    "StreamReader",
    "make_reader",
    "Terminal",
    "get_terminal",
    "set_terminal",
    "log",
    "success",
    "warning",
    "error",
    "notice",
    "log_custom",
    "animate",
    "update_animation",
    "stop_animation",
    "ask_string",
    "ask_yes_no",
    "set_debug_directory",
    "set_debug_uses_military_time",
    "set_debug_enabled",
    "set_timestamps_enabled",
    "ColorToken",
    "Severity",
    "State",
    "TerminalHandler",
    "init_logger",
    "render_frame",
    "strip_ansi",
    "stylize",
]
