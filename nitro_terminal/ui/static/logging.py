#!/usr/bin/env python3
# nitro_terminal/ui/static/logging.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from logging.handlers import RotatingFileHandler
from typing import TYPE_CHECKING, Optional

from nitro_terminal.ui.animated.frames import BULLET
from nitro_terminal.ui.utils import ColorToken, strip_ansi, stylize

if TYPE_CHECKING:
    from nitro_terminal.terminal import Terminal

LIBRARY_LOGGER = "nitro_terminal"


class Severity(Enum):
    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"
    NOTICE = "notice"


SEVERITY_COLORS = {
    Severity.INFO: ColorToken.NEUTRAL,
    Severity.SUCCESS: ColorToken.GREEN,
    Severity.WARNING: ColorToken.AMBER,
    Severity.ERROR: ColorToken.RED,
    Severity.NOTICE: ColorToken.AMBER,
}

SEVERITY_TAGS = {
    Severity.INFO: "Info",
    Severity.SUCCESS: "Success",
    Severity.WARNING: "Warning",
    Severity.ERROR: "Error",
    Severity.NOTICE: "Notice",
}

MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun",
          "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


def twelve_hour_clock(now: datetime) -> str:
    """hh:mm:ss AM/PM in English whatever the locale."""
    meridiem = "AM" if now.hour < 12 else "PM"
    return f"{now.hour % 12 or 12:02d}:{now:%M:%S} {meridiem}"


@dataclass(frozen=True)
class LogEntry:
    severity: Severity
    text: str
    debug_only: bool = False
    # custom tag and colour (hex or ColorToken) override the severity's own
    tag: Optional[str] = None
    color: Optional[str] = None
    color_throughout: bool = False


@dataclass(frozen=True)
class FormattedEntry:
    console_line: Optional[str]
    debug_line: str


class LogFormatter:
    """
    Render a LogEntry as a console line and a debug-file line.

    Console:  " • [ 03:04:05 PM ] message"   (timestamp only when enabled)
    Debug:    " [ Standard ] [ 2024 Jan 05 ] [ 03:04:05 PM ] [ Info ] message"

    Month names and AM/PM are always English so debug files read the same
    on every machine.
    """

    def __init__(self, *, timestamps: bool = False, military_time: bool = False) -> None:
        self.timestamps = timestamps
        self.military_time = military_time

    def format(self, entry: LogEntry, now: Optional[datetime] = None) -> FormattedEntry:
        now = now or datetime.now()
        console_line = None if entry.debug_only else self.console_line(entry, now)
        return FormattedEntry(console_line=console_line, debug_line=self.debug_line(entry, now))

    def console_line(self, entry: LogEntry, now: datetime) -> str:
        color = entry.color or SEVERITY_COLORS[entry.severity]
        parts = [" " + stylize(BULLET, color)]
        if self.timestamps:
            parts.append(stylize(f"[ {twelve_hour_clock(now)} ]", ColorToken.NEUTRAL))
        if entry.tag is not None:
            parts.append(
                stylize("[ ", ColorToken.NEUTRAL) + stylize(entry.tag, color)
                + stylize(" ]", ColorToken.NEUTRAL))
        text = entry.text
        if entry.color_throughout or entry.severity is Severity.NOTICE:
            text = stylize(text, color)
        parts.append(text)
        return " ".join(parts)

    def debug_line(self, entry: LogEntry, now: datetime) -> str:
        kind = "Debug" if entry.debug_only else "Standard"
        clock = f"{now:%H:%M:%S}" if self.military_time else twelve_hour_clock(now)
        date = f"{now.year} {MONTHS[now.month - 1]} {now.day:02d}"
        tag = entry.tag if entry.tag is not None else SEVERITY_TAGS[entry.severity]
        return (
            f" [ {kind} ] [ {date} ] [ {clock} ] "
            f"[ {strip_ansi(tag)} ] {strip_ansi(entry.text)}"
        )


# ---- stdlib logging bridge ---------------------------------------------------

class _SkipLibraryRecords(logging.Filter):
    """Keep the library's own diagnostics out of the terminal they describe."""

    def filter(self, record: logging.LogRecord) -> bool:
        return not (record.name == LIBRARY_LOGGER or record.name.startswith(LIBRARY_LOGGER + "."))


class TerminalHandler(logging.Handler):
    """
    Handler that routes records through a Terminal, so they obey its
    output mode (nothing is printed over a running spinner or prompt).

    DEBUG records become debug-only entries.
    """

    def __init__(self, terminal: Optional["Terminal"] = None, level: int = logging.NOTSET) -> None:
        super().__init__(level)
        self._terminal = terminal
        self.addFilter(_SkipLibraryRecords())

    @property
    def terminal(self) -> "Terminal":
        if self._terminal is None:
            from nitro_terminal.terminal import get_terminal

            self._terminal = get_terminal()
        return self._terminal

    def emit(self, record: logging.LogRecord) -> None:
        try:
            message = self.format(record)
            terminal = self.terminal
            if record.levelno >= logging.ERROR:
                terminal.error(message)
            elif record.levelno >= logging.WARNING:
                terminal.warning(message)
            elif record.levelno >= logging.INFO:
                terminal.log(message)
            else:
                terminal.log(message, debug=True)
        except Exception:
            self.handleError(record)


class PlainFormatter(logging.Formatter):
    """Formatter that strips ANSI (good for log files)."""

    def format(self, record: logging.LogRecord) -> str:
        return strip_ansi(super().format(record))


def init_logger(
    name: str = "",
    level: int = logging.INFO,
    terminal: Optional["Terminal"] = None,
    logfile: Optional[str] = None,
) -> logging.Logger:
    """
    Initialize a logger whose console output goes through the terminal.

    Console: TerminalHandler (mode-aware, coloured bullets).
    File (optional): rotating, plain text, UTF-8.
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)
    logger.propagate = False

    if not any(isinstance(h, TerminalHandler) for h in logger.handlers):
        console_handler = TerminalHandler(terminal, level=level)
        console_handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(console_handler)

    if logfile and not any(isinstance(h, RotatingFileHandler) for h in logger.handlers):
        file_handler = RotatingFileHandler(
            logfile, maxBytes=2_000_000, backupCount=3, encoding="utf-8"
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(
            PlainFormatter(
                "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        logger.addHandler(file_handler)

    return logger
