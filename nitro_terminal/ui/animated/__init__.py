#!/usr/bin/env python3
# nitro_terminal/ui/animated/__init__.py
from __future__ import annotations
from .frames import FRAMES, BULLET, fit_text, render_frame
from .spinner import (
    AnimationDriver,
    AnimationState,
    IntervalTicker,
    State,
    END_COLORS,
)

__all__ = [
    "FRAMES",
    "BULLET",
    "fit_text",
    "render_frame",
    "AnimationDriver",
    "AnimationState",
    "IntervalTicker",
    "State",
    "END_COLORS",
]
