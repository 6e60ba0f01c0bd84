#!/usr/bin/env python3
# nitro_terminal/ui/animated/spinner.py
from __future__ import annotations

import sys
import threading
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional, Protocol, TextIO

from nitro_terminal.coordinator import EnterResult, OutputMode, OutputModeCoordinator
from nitro_terminal.ui.utils import ColorToken, get_terminal_columns, write
from .frames import FRAMES, render_frame

DEFAULT_INTERVAL = 0.1


class State(Enum):
    """End state of an animation; decides the colour of the final bullet."""

    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"


END_COLORS = {
    State.INFO: ColorToken.NEUTRAL,
    State.SUCCESS: ColorToken.GREEN,
    State.WARNING: ColorToken.AMBER,
    State.ERROR: ColorToken.RED,
}


class Ticker(Protocol):
    def start(self) -> None: ...

    def cancel(self) -> None: ...

    def join(self) -> None: ...


TickerFactory = Callable[[float, Callable[[], None]], Ticker]


class IntervalTicker:
    """Calls ``callback`` every ``interval`` seconds on a daemon thread."""

    def __init__(self, interval: float, callback: Callable[[], None]) -> None:
        self.interval = interval
        self.callback = callback
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None

    def start(self) -> None:
        self._thread = threading.Thread(
            target=self._run, name="nitro-terminal-ticker", daemon=True)
        self._thread.start()

    def cancel(self) -> None:
        # Never joins here: the callback takes the driver lock, which the canceller holds.
        self._stop_event.set()

    def join(self) -> None:
        thread = self._thread
        if thread is None or thread is threading.current_thread():
            return
        thread.join()

    @property
    def cancelled(self) -> bool:
        return self._stop_event.is_set()

    def _run(self) -> None:
        while not self._stop_event.wait(self.interval):
            self.callback()


@dataclass
class AnimationState:
    message: str = ""
    frame_index: int = 0
    running: bool = False
    fully_stopped: bool = True
    end_color: ColorToken = ColorToken.NEUTRAL


class AnimationDriver:
    """
    Owns the spinner timer and writes frames in place.

    Every guard is a silent no-op: stopping an animation that never ran,
    updating after a stop, or starting while a prompt is active does nothing.
    """

    def __init__(
        self,
        coordinator: OutputModeCoordinator,
        *,
        file: TextIO | None = None,
        columns: Callable[[], int] = get_terminal_columns,
        interval: float = DEFAULT_INTERVAL,
        ticker_factory: TickerFactory = IntervalTicker,
    ) -> None:
        self.coordinator = coordinator
        self.file = file if file is not None else sys.stdout
        self.columns = columns
        self.interval = interval
        self.ticker_factory = ticker_factory
        self.state = AnimationState()
        self._ticker: Optional[Ticker] = None
        self._retired: list[Ticker] = []
        self._generation = 0
        self._mutex = threading.RLock()
        coordinator.set_preempt(self.preempt)

    @property
    def running(self) -> bool:
        return self.state.running

    def start(self, message: str) -> EnterResult:
        with self._mutex:
            result = self.coordinator.try_enter(OutputMode.ANIMATING)
            if result:
                self.state = AnimationState(
                    message=message, running=True, fully_stopped=False)
                self._generation += 1
                generation = self._generation
                self._ticker = self.ticker_factory(
                    self.interval, lambda: self._tick(generation))
                self._ticker.start()
        # a preempted animation's ticker is joined once the lock is free
        self._join_retired()
        return result

    def tick(self) -> None:
        """Advance the current animation by one frame."""
        self._tick(self._generation)

    def update(self, message: str) -> None:
        with self._mutex:
            if not self.state.running or self.state.fully_stopped:
                return
            if self.coordinator.mode is OutputMode.PROMPTING:
                return
            self.state.message = message
            self._render(final=False)

    def stop(self, state: State = State.INFO, message: Optional[str] = None) -> bool:
        """
        Stop with a final coloured frame; returns False when there was nothing to stop.

        The ticker thread has exited by the time this returns, unless stop was
        called from that thread.
        """
        with self._mutex:
            stopped = self._stop(state, message)
        self._join_retired()
        return stopped

    def preempt(self) -> None:
        """Stop-render the running animation, keeping its message."""
        # runs inside start(), which joins the old ticker after releasing the lock
        with self._mutex:
            self._stop(State.INFO, None)

    # ---- internals ---------------------------------------------------------

    def _stop(self, state: State, message: Optional[str]) -> bool:
        if not self.state.running or self.state.fully_stopped:
            return False

        if message:
            self.state.message = message
        self.state.running = False
        self.state.end_color = END_COLORS[state]

        if self._ticker is not None:
            self._ticker.cancel()
            self._retired.append(self._ticker)
            self._ticker = None

        self._render(final=True)
        write("\n", file=self.file)
        self.state.fully_stopped = True
        self.coordinator.exit(OutputMode.ANIMATING)
        return True

    def _join_retired(self) -> None:
        with self._mutex:
            retired, self._retired = self._retired, []
        for ticker in retired:
            ticker.join()

    def _tick(self, generation: int) -> None:
        with self._mutex:
            if generation != self._generation or not self.state.running:
                return
            self.state.frame_index = (self.state.frame_index + 1) % len(FRAMES)
            self._render(final=False)

    def _render(self, *, final: bool) -> None:
        line = render_frame(
            FRAMES[self.state.frame_index],
            self.state.message,
            self.columns(),
            final=final,
            end_color=self.state.end_color,
        )
        write("\r" + line, file=self.file)
