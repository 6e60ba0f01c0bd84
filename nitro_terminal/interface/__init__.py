#!/usr/bin/env python3
# nitro_terminal/interface/__init__.py
from __future__ import annotations

"""
Interactive input: prompt engine and line readers.
"""

from .prompt import (
    LineReader,
    PromptEngine,
    PromptSession,
    PromptToolkitReader,
    StreamReader,
    make_reader,
    render_question,
    validate_yes_no,
    YES_NO_ERROR,
    YES_NO_SUFFIX,
)

__all__ = [
    "LineReader",
    "PromptEngine",
    "PromptSession",
    "PromptToolkitReader",
    "StreamReader",
    "make_reader",
    "render_question",
    "validate_yes_no",
    "YES_NO_ERROR",
    "YES_NO_SUFFIX",
]
