#!/usr/bin/env python3
# nitro_terminal/coordinator.py
from __future__ import annotations

"""
Output mode coordination.

Exactly one of Idle / Animating / Prompting is active at a time. Every
console write is gated on the current mode so that spinner frames, prompts
and log lines never interleave.
"""

import logging
import threading
from enum import Enum
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class OutputMode(Enum):
    IDLE = "idle"
    ANIMATING = "animating"
    PROMPTING = "prompting"


class EnterResult(Enum):
    ENTERED = "entered"
    REJECTED = "rejected"
    QUEUED_AFTER_FORCE_STOP = "queued_after_force_stop"

    def __bool__(self) -> bool:
        return self is not EnterResult.REJECTED


class OutputModeCoordinator:
    """
    Mutual-exclusion state machine between animations, prompts and plain logs.

    ``preempt`` is called when a new animation is requested while one is
    already running; it must stop-render the running animation and bring the
    coordinator back to Idle (normally ``AnimationDriver.preempt``).
    """

    def __init__(self, preempt: Optional[Callable[[], None]] = None) -> None:
        self._mode = OutputMode.IDLE
        self._mutex = threading.RLock()
        self._preempt = preempt

    @property
    def mode(self) -> OutputMode:
        return self._mode

    @property
    def lock(self) -> threading.RLock:
        """Held while a write depends on the current mode."""
        return self._mutex

    def set_preempt(self, preempt: Optional[Callable[[], None]]) -> None:
        self._preempt = preempt

    def try_enter(self, mode: OutputMode) -> EnterResult:
        if mode is OutputMode.IDLE:
            raise ValueError("use exit() to return to idle")

        with self._mutex:
            if self._mode is OutputMode.IDLE:
                self._mode = mode
                return EnterResult.ENTERED

            if mode is OutputMode.ANIMATING and self._mode is OutputMode.ANIMATING:
                if self._preempt is not None:
                    self._preempt()
                # the hook normally exits; force it so the invariant holds either way
                self._mode = OutputMode.ANIMATING
                return EnterResult.QUEUED_AFTER_FORCE_STOP

            logger.debug("rejected %s while %s", mode.value, self._mode.value)
            return EnterResult.REJECTED

    def exit(self, mode: OutputMode) -> None:
        with self._mutex:
            if self._mode is mode:
                self._mode = OutputMode.IDLE

    def is_blocking(self) -> bool:
        return self._mode is not OutputMode.IDLE

    def reset(self) -> None:
        """Force the coordinator back to Idle."""
        with self._mutex:
            self._mode = OutputMode.IDLE
