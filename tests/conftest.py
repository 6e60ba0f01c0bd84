"""Pytest configuration and common fixtures for nitro-terminal tests."""

import io
from datetime import datetime

import pytest

from nitro_terminal import Terminal, TerminalSettings, set_terminal
from nitro_terminal.coordinator import OutputModeCoordinator


FIXED_NOW = datetime(2024, 1, 5, 15, 4, 5)
COLUMNS = 40


class ManualTicker:
    """Ticker that only fires when a test tells it to."""

    def __init__(self, interval, callback):
        self.interval = interval
        self.callback = callback
        self.started = False
        self.cancelled = False
        self.joined = False

    def start(self):
        self.started = True

    def cancel(self):
        self.cancelled = True

    def join(self):
        self.joined = True

    def fire(self, times=1):
        for _ in range(times):
            self.callback()


class ScriptedReader:
    """Line reader that answers from a list and records every prompt shown."""

    def __init__(self, answers=None):
        self.answers = list(answers or [])
        self.prompts = []
        self.on_read = None

    def __call__(self, prompt):
        self.prompts.append(prompt)
        if self.on_read is not None:
            self.on_read(prompt)
        if not self.answers:
            raise EOFError("no scripted answers left")
        return self.answers.pop(0)

    async def read_async(self, prompt):
        return self(prompt)


@pytest.fixture
def stream():
    """In-memory console."""
    return io.StringIO()


@pytest.fixture
def tickers():
    """Every ticker created by ``ticker_factory``, in creation order."""
    return []


@pytest.fixture
def ticker_factory(tickers):
    def factory(interval, callback):
        ticker = ManualTicker(interval, callback)
        tickers.append(ticker)
        return ticker
    return factory


@pytest.fixture
def reader():
    return ScriptedReader()


@pytest.fixture
def clock():
    return lambda: FIXED_NOW


@pytest.fixture
def coordinator():
    return OutputModeCoordinator()


@pytest.fixture
def debug_dir(tmp_path):
    return tmp_path / "debug"


@pytest.fixture
def make_terminal(stream, reader, ticker_factory, clock, debug_dir):
    """Build a Terminal wired to the in-memory fixtures."""
    def factory(**settings):
        settings.setdefault("debug_directory", debug_dir)
        return Terminal(
            stream,
            settings=TerminalSettings(**settings),
            reader=reader,
            columns=lambda: COLUMNS,
            ticker_factory=ticker_factory,
            clock=clock,
        )
    return factory


@pytest.fixture
def terminal(make_terminal):
    return make_terminal()


@pytest.fixture(autouse=True)
def setup_test_environment(monkeypatch, tmp_path):
    """Run every test from a scratch directory with no default terminal."""
    monkeypatch.chdir(tmp_path)
    for name in ("DEBUG_ENABLED", "DEBUG_DIRECTORY", "DEBUG_MILITARY_TIME",
                 "TIMESTAMPS_ENABLED", "ANIMATION_INTERVAL"):
        monkeypatch.delenv(f"NITRO_TERMINAL_{name}", raising=False)
    set_terminal(None)

    yield

    set_terminal(None)
