#!/usr/bin/env python3
# nitro_terminal/ui/utils/console.py
from __future__ import annotations

import shutil
import sys
import threading
from typing import TextIO

# Single shared print mutex for all terminal output (frames, log lines, prompts).
PRINT_MUTEX = threading.RLock()


def write(text: str, *, file: TextIO | None = None) -> None:
    """Write raw text (no newline) and flush; used for in-place frames."""
    file = file if file is not None else sys.stdout
    with PRINT_MUTEX:
        file.write(text)
        file.flush()


def print_line(text: str = "", *, file: TextIO | None = None, flush: bool = True) -> None:
    """Thread-safe single-line print that cooperates with running animations."""
    file = file if file is not None else sys.stdout
    with PRINT_MUTEX:
        file.write(f"{text}\n")
        if flush:
            file.flush()


def get_terminal_columns(default: int = 80) -> int:
    """Return current terminal column width with a sensible default."""
    try:
        return shutil.get_terminal_size((default, 20)).columns
    except (OSError, ValueError):
        return default
