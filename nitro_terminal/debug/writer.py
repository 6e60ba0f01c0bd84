#!/usr/bin/env python3
# nitro_terminal/debug/writer.py
from __future__ import annotations

"""
Debug log persistence.

One file per writer lifetime, named ``debug-log-<index>.txt``. The index is
one past the highest index already present when the first entry is written,
so earlier sessions are never appended to.
"""

import logging
import re
from datetime import datetime
from pathlib import Path
from typing import Callable, Optional

logger = logging.getLogger(__name__)

DEFAULT_DIRECTORY = "debug"
FILE_PREFIX = "debug-log-"
FILE_SUFFIX = ".txt"
LINE_BREAK = "\r\n"

_FILE_RE = re.compile(rf"^{re.escape(FILE_PREFIX)}(\d+){re.escape(FILE_SUFFIX)}$")


class DebugLogError(RuntimeError):
    """Raised when the debug directory or file cannot be prepared or written."""


def log_file_name(index: int) -> str:
    return f"{FILE_PREFIX}{index}{FILE_SUFFIX}"


def next_rotation_index(directory: Path) -> int:
    """Return max(existing indices) + 1, or 0 for an empty/missing directory."""
    if not directory.is_dir():
        return 0
    indices = [
        int(m.group(1))
        for m in (_FILE_RE.match(p.name) for p in directory.iterdir())
        if m
    ]
    return max(indices) + 1 if indices else 0


class DebugLogWriter:
    def __init__(
        self,
        directory: str | Path | None = None,
        *,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._directory = Path(directory) if directory is not None else Path.cwd() / DEFAULT_DIRECTORY
        self._clock = clock
        self.current_index: Optional[int] = None

    @property
    def directory(self) -> Path:
        return self._directory

    @directory.setter
    def directory(self, value: str | Path) -> None:
        # a new location gets its own rotation scan
        self._directory = Path(value)
        self.current_index = None

    @property
    def path(self) -> Optional[Path]:
        """The file entries go to, once the first entry has been written."""
        if self.current_index is None:
            return None
        return self._directory / log_file_name(self.current_index)

    def reset(self) -> None:
        self.current_index = None

    def append(self, line: str) -> Path:
        try:
            self._ensure_directory()
            if self.current_index is None:
                self.current_index = next_rotation_index(self._directory)
                logger.debug("debug log index %d in %s", self.current_index, self._directory)

            target = self._directory / log_file_name(self.current_index)
            if not target.exists():
                header = f" Debug Log [ {self._clock():%Y-%m-%d %H:%M:%S} ]"
                target.write_text(header, encoding="utf-8", newline="")

            with target.open("a", encoding="utf-8", newline="") as fh:
                fh.write(LINE_BREAK + line)
        except OSError as exc:
            raise DebugLogError(f"Failed to write debug log in {self._directory}: {exc}") from exc
        return target

    def _ensure_directory(self) -> None:
        if self._directory.exists() and not self._directory.is_dir():
            logger.debug("replacing file at debug directory path %s", self._directory)
            self._directory.unlink()
        if not self._directory.is_dir():
            self._directory.mkdir(parents=True, exist_ok=True)
