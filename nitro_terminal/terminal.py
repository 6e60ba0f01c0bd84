#!/usr/bin/env python3
# nitro_terminal/terminal.py
from __future__ import annotations

"""
Terminal service.

Owns the output mode coordinator, the spinner, the prompt engine and the
debug log writer for one output stream. A lazily created default instance
backs the module-level helpers (``nitro_terminal.log`` and friends).
"""

import logging
import os
import sys
import threading
from contextlib import contextmanager
from datetime import datetime
from typing import Callable, Iterator, Optional, TextIO

from nitro_terminal.config import TerminalSettings, load_settings
from nitro_terminal.coordinator import OutputMode, OutputModeCoordinator
from nitro_terminal.debug import DebugLogError, DebugLogWriter
from nitro_terminal.interface import LineReader, PromptEngine
from nitro_terminal.interface.prompt import Validator
from nitro_terminal.ui.animated import AnimationDriver, IntervalTicker, State
from nitro_terminal.ui.animated.spinner import TickerFactory
from nitro_terminal.ui.static import LogEntry, LogFormatter, Severity
from nitro_terminal.ui.utils import ColorToken, enable_windows_vt, get_terminal_columns, print_line

logger = logging.getLogger(__name__)


class Terminal:
    def __init__(
        self,
        file: TextIO | None = None,
        *,
        settings: Optional[TerminalSettings] = None,
        reader: Optional[LineReader] = None,
        columns: Callable[[], int] = get_terminal_columns,
        ticker_factory: TickerFactory = IntervalTicker,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        settings = settings or TerminalSettings()
        self.file = file if file is not None else sys.stdout
        self.clock = clock
        self.debug_enabled = settings.debug_enabled

        self.coordinator = OutputModeCoordinator()
        self.animation = AnimationDriver(
            self.coordinator,
            file=self.file,
            columns=columns,
            interval=settings.animation_interval,
            ticker_factory=ticker_factory,
        )
        self.formatter = LogFormatter(
            timestamps=settings.timestamps_enabled,
            military_time=settings.debug_military_time,
        )
        self.debug_log = DebugLogWriter(settings.debug_directory, clock=clock)
        self.prompts = PromptEngine(self.coordinator, self._report_prompt_error, reader=reader)
        enable_windows_vt()

    @classmethod
    def from_settings(cls, path: str | os.PathLike[str] | None = None, **kwargs) -> "Terminal":
        """Build a terminal from settings files and NITRO_TERMINAL_* variables."""
        return cls(settings=load_settings(path), **kwargs)

    # ---- state -------------------------------------------------------------

    @property
    def mode(self) -> OutputMode:
        return self.coordinator.mode

    def is_blocking(self) -> bool:
        return self.coordinator.is_blocking()

    @property
    def animation_running(self) -> bool:
        return self.animation.running

    @property
    def prompt_running(self) -> bool:
        return self.prompts.running

    def reset(self) -> None:
        """Stop any animation, drop any prompt, and start a fresh debug file on next write."""
        self.animation.stop(State.INFO)
        self.prompts.cancel()
        self.coordinator.reset()
        self.debug_log.reset()

    # ---- configuration -----------------------------------------------------

    def set_debug_directory(self, path: str | os.PathLike[str]) -> None:
        self.debug_log.directory = path

    def set_debug_uses_military_time(self, mode: bool) -> None:
        self.formatter.military_time = mode

    def set_debug_enabled(self, mode: bool) -> None:
        self.debug_enabled = mode

    def set_timestamps_enabled(self, mode: bool) -> None:
        self.formatter.timestamps = mode

    # ---- log lines ---------------------------------------------------------

    def log(self, text: str, debug: bool = False) -> None:
        self._log(LogEntry(Severity.INFO, text, debug))

    def success(self, text: str, debug: bool = False) -> None:
        self._log(LogEntry(Severity.SUCCESS, text, debug))

    def warning(self, text: str, debug: bool = False) -> None:
        self._log(LogEntry(Severity.WARNING, text, debug))

    def error(self, text: str, debug: bool = False) -> None:
        self._log(LogEntry(Severity.ERROR, text, debug))

    def notice(self, text: str, debug: bool = False) -> None:
        self._log(LogEntry(Severity.NOTICE, text, debug))

    def log_custom(
        self,
        text: str,
        tag: str,
        color: ColorToken | str = ColorToken.NEUTRAL,
        color_throughout: bool = False,
        debug: bool = False,
    ) -> None:
        """
        Log under a caller-chosen tag such as ``[ Deploy ]``.

        ``color`` is a ColorToken or a '#RRGGBB' code and styles the bullet and
        the tag; with ``color_throughout`` the text is coloured too. The entry
        is gated like an info line and the tag replaces the severity in the
        debug file.
        """
        self._log(LogEntry(
            Severity.INFO, text, debug,
            tag=tag, color=color, color_throughout=color_throughout))

    # ---- animation ---------------------------------------------------------

    def animate(self, text: str) -> None:
        self.animation.start(text)

    def update_animation(self, text: str) -> None:
        self.animation.update(text)

    def stop_animation(self, state: State = State.INFO, message: Optional[str] = None) -> None:
        self.animation.stop(state, message)

    @contextmanager
    def animating(
        self,
        text: str,
        success: Optional[str] = None,
        failure: Optional[str] = None,
    ) -> Iterator["Terminal"]:
        """Spin while the block runs; finish green, or red if it raises."""
        self.animate(text)
        try:
            yield self
        except BaseException:
            self.stop_animation(State.ERROR, failure)
            raise
        self.stop_animation(State.SUCCESS, success)

    # ---- prompts -----------------------------------------------------------

    def ask_string(
        self,
        question: str,
        default: Optional[str] = None,
        validate: Optional[Validator] = None,
    ) -> Optional[str]:
        return self.prompts.ask(question, default, validate)

    def ask_yes_no(self, question: str, default: bool) -> Optional[bool]:
        return self.prompts.ask_yes_no(question, default)

    async def ask_string_async(
        self,
        question: str,
        default: Optional[str] = None,
        validate: Optional[Validator] = None,
    ) -> Optional[str]:
        return await self.prompts.ask_async(question, default, validate)

    async def ask_yes_no_async(self, question: str, default: bool) -> Optional[bool]:
        return await self.prompts.ask_yes_no_async(question, default)

    # ---- internals ---------------------------------------------------------

    def _report_prompt_error(self, message: str) -> None:
        # printed inside PROMPTING, between two reads of the same question
        self._log(LogEntry(Severity.ERROR, message), force=True)

    def _log(self, entry: LogEntry, *, force: bool = False) -> None:
        formatted = self.formatter.format(entry, self.clock())

        if formatted.console_line is not None:
            with self.coordinator.lock:
                if force or not self.coordinator.is_blocking():
                    print_line(formatted.console_line, file=self.file)

        if self.debug_enabled:
            try:
                self.debug_log.append(formatted.debug_line)
            except DebugLogError as exc:
                logger.warning("debug capture failed: %s", exc)


# ---- default instance --------------------------------------------------------

_default_terminal: Optional[Terminal] = None
_default_mutex = threading.Lock()


def get_terminal() -> Terminal:
    """Return the process-wide default terminal, creating it on first use."""
    global _default_terminal
    with _default_mutex:
        if _default_terminal is None:
            _default_terminal = Terminal()
        return _default_terminal


def set_terminal(terminal: Optional[Terminal]) -> None:
    """Replace the default terminal (None drops it; the next call recreates one)."""
    global _default_terminal
    with _default_mutex:
        _default_terminal = terminal


def log(text: str, debug: bool = False) -> None:
    get_terminal().log(text, debug)


def success(text: str, debug: bool = False) -> None:
    get_terminal().success(text, debug)


def warning(text: str, debug: bool = False) -> None:
    get_terminal().warning(text, debug)


def error(text: str, debug: bool = False) -> None:
    get_terminal().error(text, debug)


def notice(text: str, debug: bool = False) -> None:
    get_terminal().notice(text, debug)


def log_custom(
    text: str,
    tag: str,
    color: ColorToken | str = ColorToken.NEUTRAL,
    color_throughout: bool = False,
    debug: bool = False,
) -> None:
    get_terminal().log_custom(text, tag, color, color_throughout, debug)


def animate(text: str) -> None:
    get_terminal().animate(text)


def update_animation(text: str) -> None:
    get_terminal().update_animation(text)


def stop_animation(state: State = State.INFO, message: Optional[str] = None) -> None:
    get_terminal().stop_animation(state, message)


def ask_string(
    question: str,
    default: Optional[str] = None,
    validate: Optional[Validator] = None,
) -> Optional[str]:
    return get_terminal().ask_string(question, default, validate)


def ask_yes_no(question: str, default: bool) -> Optional[bool]:
    return get_terminal().ask_yes_no(question, default)


def set_debug_directory(path: str | os.PathLike[str]) -> None:
    get_terminal().set_debug_directory(path)


def set_debug_uses_military_time(mode: bool) -> None:
    get_terminal().set_debug_uses_military_time(mode)


def set_debug_enabled(mode: bool) -> None:
    get_terminal().set_debug_enabled(mode)


def set_timestamps_enabled(mode: bool) -> None:
    get_terminal().set_timestamps_enabled(mode)
