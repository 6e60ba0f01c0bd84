#!/usr/bin/env python3
# nitro_terminal/ui/animated/frames.py
from __future__ import annotations

from typing import Union

from nitro_terminal.ui.utils import ColorToken, stylize

FRAMES = "|/-\\"
BULLET = "•"
ELLIPSIS = "..."
PREFIX_WIDTH = 3  # " <glyph> "


def fit_text(message: str, width: int) -> str:
    """
    Cut or pad ``message`` to exactly ``width`` characters.

    Overlong text keeps its head and ends with an ellipsis; short text is
    padded with spaces so a shorter frame fully overwrites a longer one.
    """
    if width <= 0:
        return ""
    if len(message) > width:
        keep = width - len(ELLIPSIS)
        if keep <= 0:
            return ELLIPSIS[:width]
        return message[:keep] + ELLIPSIS
    return message + " " * (width - len(message))


def render_frame(
    glyph: str,
    message: str,
    columns: int,
    *,
    final: bool = False,
    end_color: Union[ColorToken, str] = ColorToken.NEUTRAL,
) -> str:
    """
    Build one animation line.

    The visible width (escape codes excluded) equals ``columns`` for any
    terminal at least four columns wide. On the final frame the spinner glyph
    becomes a bullet coloured with ``end_color``.
    """
    lead = stylize(BULLET, end_color) if final else glyph
    return f" {lead} " + fit_text(message, columns - PREFIX_WIDTH)
