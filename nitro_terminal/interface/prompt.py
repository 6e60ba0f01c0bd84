#!/usr/bin/env python3
# nitro_terminal/interface/prompt.py
from __future__ import annotations

"""
Interactive question/answer prompts.

Readers:
    1) prompt_toolkit (interactive TTY, line editing)
    2) plain stream reader (piped stdin, tests)
"""

import asyncio
import sys
from dataclasses import dataclass
from typing import Callable, Optional, Protocol, TextIO

import prompt_toolkit
from prompt_toolkit.formatted_text import ANSI as ANSIText

from nitro_terminal.coordinator import OutputMode, OutputModeCoordinator
from nitro_terminal.ui.utils import ColorToken, stylize, write

Validator = Callable[[str], Optional[str]]

YES_NO_SUFFIX = " (Y/n)"
YES_NO_ERROR = 'Please specify "Y" or "n"'


class LineReader(Protocol):
    def __call__(self, prompt: str) -> str: ...

    async def read_async(self, prompt: str) -> str: ...


class StreamReader:
    """Reads one line per call from a text stream, echoing the prompt to ``stdout``."""

    def __init__(self, stdin: TextIO | None = None, stdout: TextIO | None = None) -> None:
        self.stdin = stdin if stdin is not None else sys.stdin
        self.stdout = stdout if stdout is not None else sys.stdout

    def __call__(self, prompt: str) -> str:
        write(prompt, file=self.stdout)
        line = self.stdin.readline()
        if line == "":
            raise EOFError("input stream closed")
        return line.rstrip("\r\n")

    async def read_async(self, prompt: str) -> str:
        return await asyncio.get_running_loop().run_in_executor(None, self, prompt)


class PromptToolkitReader:
    """Line editor with history for interactive terminals."""

    def __init__(self) -> None:
        self._session: prompt_toolkit.PromptSession[str] | None = None

    @property
    def session(self) -> prompt_toolkit.PromptSession[str]:
        # created on first use; needs a real terminal
        if self._session is None:
            self._session = prompt_toolkit.PromptSession()
        return self._session

    def __call__(self, prompt: str) -> str:
        return self.session.prompt(ANSIText(prompt))

    async def read_async(self, prompt: str) -> str:
        return await self.session.prompt_async(ANSIText(prompt))


def make_reader(stdin: TextIO | None = None, stdout: TextIO | None = None) -> LineReader:
    """
    Select the best reader for the input stream: prompt_toolkit for the
    process's own interactive stdin, a plain stream reader otherwise.
    """
    if stdin is None and sys.stdin is not None and sys.stdin.isatty():
        return PromptToolkitReader()
    return StreamReader(stdin, stdout)


def validate_yes_no(answer: str) -> Optional[str]:
    if answer.lower() not in ("y", "n"):
        return YES_NO_ERROR
    return None


def render_question(question: str, default: Optional[str] = None) -> str:
    hint = stylize(f" [ {default} ]", ColorToken.NEUTRAL) if default else ""
    return f" {stylize('>', ColorToken.NEUTRAL)} {question}{hint}: "


@dataclass
class PromptSession:
    question: str
    default: Optional[str] = None
    validator: Optional[Validator] = None
    active: bool = True
    attempts: int = 0


class PromptEngine:
    """
    Read-validate-retry loop over single lines of input.

    The coordinator stays in PROMPTING for the whole loop, retries included,
    so nothing else can write between a failed answer and the next question.
    """

    def __init__(
        self,
        coordinator: OutputModeCoordinator,
        report_error: Callable[[str], None],
        *,
        reader: Optional[LineReader] = None,
    ) -> None:
        self.coordinator = coordinator
        self.report_error = report_error
        self._reader = reader
        self.session: Optional[PromptSession] = None

    @property
    def reader(self) -> LineReader:
        if self._reader is None:
            self._reader = make_reader()
        return self._reader

    @reader.setter
    def reader(self, value: LineReader) -> None:
        self._reader = value

    @property
    def running(self) -> bool:
        return self.session is not None and self.session.active

    def ask(
        self,
        question: str,
        default: Optional[str] = None,
        validate: Optional[Validator] = None,
    ) -> Optional[str]:
        """Ask until the validator passes; None when another mode is active."""
        session = self._open(question, default, validate)
        if session is None:
            return None
        try:
            prompt_text = render_question(question, default)
            while session.active:
                answer = self._check(session, self.reader(prompt_text))
                if answer is not None:
                    return answer
            return None
        finally:
            self._close(session)

    async def ask_async(
        self,
        question: str,
        default: Optional[str] = None,
        validate: Optional[Validator] = None,
    ) -> Optional[str]:
        session = self._open(question, default, validate)
        if session is None:
            return None
        try:
            prompt_text = render_question(question, default)
            while session.active:
                answer = self._check(session, await self.reader.read_async(prompt_text))
                if answer is not None:
                    return answer
            return None
        finally:
            self._close(session)

    def ask_yes_no(self, question: str, default: bool) -> Optional[bool]:
        answer = self.ask(question + YES_NO_SUFFIX, "Y" if default else "n", validate_yes_no)
        return None if answer is None else answer.lower() == "y"

    async def ask_yes_no_async(self, question: str, default: bool) -> Optional[bool]:
        answer = await self.ask_async(question + YES_NO_SUFFIX, "Y" if default else "n", validate_yes_no)
        return None if answer is None else answer.lower() == "y"

    def cancel(self) -> None:
        """Drop the active session; its loop returns None after the pending read."""
        if self.session is not None:
            self.session.active = False

    # ---- internals ---------------------------------------------------------

    def _open(self, question: str, default: Optional[str], validate: Optional[Validator]) -> Optional[PromptSession]:
        if not self.coordinator.try_enter(OutputMode.PROMPTING):
            return None
        self.session = PromptSession(question, default, validate)
        return self.session

    def _close(self, session: PromptSession) -> None:
        session.active = False
        if self.session is session:
            self.session = None
            self.coordinator.exit(OutputMode.PROMPTING)

    def _check(self, session: PromptSession, raw: str) -> Optional[str]:
        if not session.active:
            return None
        session.attempts += 1
        answer = raw if raw else (session.default or "")
        if session.validator is not None:
            message = session.validator(answer)
            if message:
                self.report_error(message)
                return None
        return answer
