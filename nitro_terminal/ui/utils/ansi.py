#!/usr/bin/env python3
# nitro_terminal/ui/utils/ansi.py
from __future__ import annotations

import ctypes
import os
import re
from enum import Enum
from typing import Optional, Union

# ---- Core SGR maps ----------------------------------------------------------

# Foreground: 30-37, Bright Foreground: 90-97
ANSI = {
    "reset": "\x1b[0m",
    "fg_reset": "\x1b[39m",

    # styles
    "bold": "\x1b[1m",
    "dim": "\x1b[2m",
    "underline": "\x1b[4m",

    # fg 8-color
    "black": "\x1b[30m",
    "red": "\x1b[31m",
    "green": "\x1b[32m",
    "yellow": "\x1b[33m",
    "blue": "\x1b[34m",
    "magenta": "\x1b[35m",
    "cyan": "\x1b[36m",
    "white": "\x1b[37m",

    # fg bright 8-color
    "bright_black": "\x1b[90m",
    "bright_red": "\x1b[91m",
    "bright_green": "\x1b[92m",
    "bright_yellow": "\x1b[93m",
}

ANSI_REGEX = re.compile(r"\x1b\[[0-9;]*[A-Za-z]")
_HEX_RE = re.compile(r"#[0-9A-Fa-f]{6}")

_vt_enabled_cache: Optional[bool] = None  # cached across calls


class ColorToken(str, Enum):
    """Colour tokens shared by log bullets, prompts and animation end states."""

    NEUTRAL = "#999999"
    GREEN = "#50ffab"
    AMBER = "#FFAB00"
    RED = "#FF5555"


# ---- Utilities --------------------------------------------------------------

def strip_ansi(text: str) -> str:
    """Remove ANSI escape sequences from text."""
    return ANSI_REGEX.sub("", text)


def visible_length(text: str) -> int:
    """Length of text as it appears on screen (escape codes excluded)."""
    return len(strip_ansi(text))


def enable_windows_vt() -> bool:
    """
    Enable ANSI (VT) processing on Windows consoles when possible.
    Returns True if ANSI escapes should work on the current process.
    On non-Windows systems, always returns True.
    """
    global _vt_enabled_cache
    if _vt_enabled_cache is not None:
        return _vt_enabled_cache

    if os.name != "nt":
        _vt_enabled_cache = True
        return True

    # Terminals that already support ANSI
    if (
        os.environ.get("WT_SESSION")                  # Windows Terminal
        or os.environ.get("ANSICON")
        or os.environ.get("ConEmuANSI") == "ON"
        or os.environ.get("TERM", "").startswith(("xterm", "vt100"))
    ):
        _vt_enabled_cache = True
        return True

    # Try to enable VT on classic console
    try:
        kernel32 = ctypes.windll.kernel32  # type: ignore[attr-defined]
        ENABLE_VIRTUAL_TERMINAL_PROCESSING = 0x0004
        STD_OUTPUT_HANDLE = -11

        handle = kernel32.GetStdHandle(STD_OUTPUT_HANDLE)
        mode = ctypes.c_uint()
        if handle in (0, -1) or not kernel32.GetConsoleMode(handle, ctypes.byref(mode)):
            _vt_enabled_cache = False
        else:
            new_mode = mode.value | ENABLE_VIRTUAL_TERMINAL_PROCESSING
            _vt_enabled_cache = bool(kernel32.SetConsoleMode(handle, new_mode))
    except (AttributeError, OSError):
        _vt_enabled_cache = False

    return _vt_enabled_cache


# ---- Low-level color builders ----------------------------------------------

def _parse_hex(rgb_hex: str) -> tuple[int, int, int]:
    r = int(rgb_hex[1:3], 16)
    g = int(rgb_hex[3:5], 16)
    b = int(rgb_hex[5:7], 16)
    return r, g, b


def rgb(r: int, g: int, b: int) -> str:
    """Return a true-color foreground SGR sequence for (r,g,b)."""
    r = max(0, min(255, r))
    g = max(0, min(255, g))
    b = max(0, min(255, b))
    return f"\x1b[38;2;{r};{g};{b}m"


def hex_color(hex_code: str) -> str:
    """Return a true-color SGR from '#RRGGBB'."""
    if not _HEX_RE.fullmatch(hex_code):
        raise ValueError("hex_code must be like '#RRGGBB'.")
    return rgb(*_parse_hex(hex_code))


# ---- High-level helpers -----------------------------------------------------

def stylize(text: str, color: Union[ColorToken, str]) -> str:
    """
    Colour text with a ColorToken, a '#RRGGBB' code or an ANSI key ('red').

    Only the foreground is reset afterwards, so styled fragments can be
    nested inside text that is itself coloured.
    """
    if not enable_windows_vt():
        return text
    value = color.value if isinstance(color, ColorToken) else color
    if value in ANSI:
        seq = ANSI[value]
    else:
        seq = hex_color(value)
    return f"{seq}{text}{ANSI['fg_reset']}"
