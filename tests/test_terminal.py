"""Integration tests for the Terminal service."""

import logging

import pytest

import nitro_terminal
from nitro_terminal import OutputMode, State, Terminal, TerminalSettings, get_terminal, set_terminal
from nitro_terminal.ui import strip_ansi

COLUMNS = 40  # matches the make_terminal fixture


def debug_lines(debug_dir, index=0):
    text = (debug_dir / f"debug-log-{index}.txt").read_text(encoding="utf-8")
    return text.splitlines()[1:]


class TestLogging:
    def test_log_while_idle_prints_one_line(self, terminal, stream):
        """Test the bullet-prefixed console line."""
        terminal.log("hello")
        terminal.success("done")
        assert strip_ansi(stream.getvalue()) == " • hello\n • done\n"

    def test_log_while_animating_prints_nothing(self, terminal, stream):
        """Test that nothing is drawn over the spinner."""
        terminal.animate("Working")
        terminal.error("hidden")
        assert stream.getvalue() == ""

    def test_blocked_log_still_reaches_debug_file(self, make_terminal, stream, debug_dir):
        """Test debug capture independent of the output mode."""
        terminal = make_terminal(debug_enabled=True)
        terminal.animate("Working")

        terminal.warning("while spinning")

        assert stream.getvalue() == ""
        assert debug_lines(debug_dir) == [
            " [ Standard ] [ 2024 Jan 05 ] [ 03:04:05 PM ] [ Warning ] while spinning"
        ]

    def test_log_custom_tag(self, make_terminal, stream, debug_dir):
        """Test logging under a caller-chosen tag and colour."""
        terminal = make_terminal(debug_enabled=True)
        terminal.log_custom("shipped", "Deploy", "#40c283", color_throughout=True)

        assert strip_ansi(stream.getvalue()) == " • [ Deploy ] shipped\n"
        assert debug_lines(debug_dir) == [
            " [ Standard ] [ 2024 Jan 05 ] [ 03:04:05 PM ] [ Deploy ] shipped"
        ]

    def test_log_custom_is_gated(self, terminal, stream):
        """Test that custom-tag lines respect the animation gate."""
        terminal.animate("Working")
        nitro_terminal.set_terminal(terminal)
        nitro_terminal.log_custom("hidden", "Deploy")
        assert stream.getvalue() == ""

    def test_debug_only_message(self, make_terminal, stream, debug_dir):
        """Test that debug-only entries skip the console."""
        terminal = make_terminal(debug_enabled=True)
        terminal.log("trace", debug=True)
        assert stream.getvalue() == ""
        assert debug_lines(debug_dir) == [
            " [ Debug ] [ 2024 Jan 05 ] [ 03:04:05 PM ] [ Info ] trace"
        ]

    def test_debug_disabled_writes_no_files(self, terminal, debug_dir):
        """Test that capture is off by default."""
        terminal.log("hello")
        terminal.log("trace", debug=True)
        assert not debug_dir.exists()

    def test_consecutive_entries_share_a_file(self, make_terminal, debug_dir):
        """Test two writes in one session."""
        terminal = make_terminal(debug_enabled=True)
        terminal.log("one")
        terminal.notice("two")
        assert [line.split("] ")[-1] for line in debug_lines(debug_dir)] == ["one", "two"]
        assert "[ Notice ]" in debug_lines(debug_dir)[1]
        assert sorted(p.name for p in debug_dir.iterdir()) == ["debug-log-0.txt"]

    def test_debug_failure_does_not_break_console(self, make_terminal, stream, tmp_path, caplog):
        """Test that a broken debug directory is reported, not raised."""
        blocker = tmp_path / "blocker"
        blocker.write_text("file", encoding="utf-8")
        terminal = make_terminal(debug_enabled=True, debug_directory=blocker / "debug")

        with caplog.at_level(logging.WARNING, logger="nitro_terminal"):
            terminal.log("still printed")

        assert strip_ansi(stream.getvalue()) == " • still printed\n"
        assert "debug capture failed" in caplog.text


class TestSettingsToggles:
    def test_timestamps(self, terminal, stream):
        """Test console timestamps."""
        terminal.set_timestamps_enabled(True)
        terminal.log("hello")
        assert strip_ansi(stream.getvalue()) == " • [ 03:04:05 PM ] hello\n"

    def test_military_time(self, terminal, debug_dir):
        """Test the 24-hour debug clock."""
        terminal.set_debug_enabled(True)
        terminal.set_debug_uses_military_time(True)
        terminal.log("hello")
        assert "[ 15:04:05 ]" in debug_lines(debug_dir)[0]

    def test_debug_directory(self, terminal, tmp_path):
        """Test moving the debug directory."""
        terminal.set_debug_enabled(True)
        terminal.set_debug_directory(tmp_path / "elsewhere")
        terminal.log("hello")
        assert (tmp_path / "elsewhere" / "debug-log-0.txt").exists()

    def test_settings_applied_at_construction(self, make_terminal, tickers):
        """Test that settings reach every component."""
        terminal = make_terminal(timestamps_enabled=True, debug_military_time=True, animation_interval=0.25)
        assert terminal.formatter.timestamps
        assert terminal.formatter.military_time
        terminal.animate("x")
        assert tickers[0].interval == 0.25


class TestAnimationFlow:
    def test_animate_and_stop(self, terminal, stream, tickers):
        """Test a full spinner lifecycle through the terminal."""
        terminal.animate("Working")
        tickers[0].fire()
        terminal.update_animation("Almost")
        terminal.stop_animation(State.SUCCESS, "Done")

        output = strip_ansi(stream.getvalue())
        assert output.endswith("\r • Done" + " " * (COLUMNS - 7) + "\n")
        assert output.count("\n") == 1
        assert terminal.mode is OutputMode.IDLE

    def test_log_after_stop_prints(self, terminal, stream):
        """Test that logging resumes once the animation is finished."""
        terminal.animate("Working")
        terminal.stop_animation(State.SUCCESS)
        terminal.log("after")
        assert strip_ansi(stream.getvalue()).endswith("\n • after\n")

    def test_animate_refused_during_prompt(self, terminal, reader, tickers):
        """Test that a spinner cannot start while a question is open."""
        reader.on_read = lambda prompt: terminal.animate("sneaky")
        reader.answers = ["x"]
        assert terminal.ask_string("Name") == "x"
        assert tickers == []

    def test_animating_context_success(self, terminal, stream):
        """Test the green finish of the context manager."""
        with terminal.animating("Working", success="Finished"):
            assert terminal.animation_running
        assert "Finished" in stream.getvalue()
        assert terminal.animation.state.end_color.value == "#50ffab"

    def test_animating_context_failure(self, terminal, stream):
        """Test the red finish when the block raises."""
        with pytest.raises(RuntimeError):
            with terminal.animating("Working", failure="Broke"):
                raise RuntimeError("boom")
        assert "Broke" in stream.getvalue()
        assert terminal.animation.state.end_color.value == "#FF5555"


class TestPromptFlow:
    def test_validation_error_is_printed_during_prompt(self, make_terminal, reader, stream, debug_dir):
        """Test that the retry error line bypasses the prompt gate."""
        terminal = make_terminal(debug_enabled=True)
        reader.answers = ["maybe", "n"]

        assert terminal.ask_yes_no("Continue?", True) is False

        assert strip_ansi(stream.getvalue()) == ' • Please specify "Y" or "n"\n'
        assert debug_lines(debug_dir)[0].endswith('[ Error ] Please specify "Y" or "n"')

    def test_log_during_prompt_is_suppressed(self, terminal, reader, stream):
        """Test that ordinary logs cannot interleave with a prompt."""
        reader.on_read = lambda prompt: terminal.log("interleaved")
        reader.answers = ["x"]
        terminal.ask_string("Name")
        assert stream.getvalue() == ""

    def test_log_during_prompt_reaches_debug_file(self, make_terminal, reader, stream, debug_dir):
        """Test debug capture of both entry kinds while a prompt holds the console."""
        terminal = make_terminal(debug_enabled=True)

        def log_both(prompt):
            terminal.log("x")
            terminal.log("y", debug=True)

        reader.on_read = log_both
        reader.answers = ["answer"]

        assert terminal.ask_string("Name") == "answer"
        assert stream.getvalue() == ""
        assert debug_lines(debug_dir) == [
            " [ Standard ] [ 2024 Jan 05 ] [ 03:04:05 PM ] [ Info ] x",
            " [ Debug ] [ 2024 Jan 05 ] [ 03:04:05 PM ] [ Info ] y",
        ]

    def test_prompt_running_flag(self, terminal, reader):
        """Test the read-only prompt flag."""
        seen = []
        reader.on_read = lambda prompt: seen.append(terminal.prompt_running)
        reader.answers = ["x"]
        terminal.ask_string("Name")
        assert seen == [True]
        assert not terminal.prompt_running

    def test_reset_cancels_prompt(self, terminal, reader):
        """Test the external force-reset in the middle of a prompt."""
        reader.on_read = lambda prompt: terminal.reset()
        reader.answers = ["x"]
        assert terminal.ask_string("Name") is None
        assert terminal.mode is OutputMode.IDLE


class TestDefaultTerminal:
    def test_module_helpers_use_default(self, terminal, stream):
        """Test the module-level API."""
        set_terminal(terminal)
        nitro_terminal.log("via module")
        nitro_terminal.set_timestamps_enabled(True)
        nitro_terminal.warning("stamped")
        assert strip_ansi(stream.getvalue()) == " • via module\n • [ 03:04:05 PM ] stamped\n"

    def test_get_terminal_is_lazy_singleton(self):
        """Test that the default instance is created once."""
        first = get_terminal()
        assert isinstance(first, Terminal)
        assert get_terminal() is first

    def test_from_settings_reads_environment(self, monkeypatch, tmp_path):
        """Test building a terminal from NITRO_TERMINAL_* variables."""
        monkeypatch.setenv("NITRO_TERMINAL_DEBUG_ENABLED", "yes")
        monkeypatch.setenv("NITRO_TERMINAL_DEBUG_DIRECTORY", str(tmp_path / "logs"))
        terminal = Terminal.from_settings()
        assert terminal.debug_enabled
        assert terminal.debug_log.directory == tmp_path / "logs"

    def test_from_settings_reads_explicit_path(self, tmp_path, stream):
        """Test that from_settings takes a settings file path plus constructor kwargs."""
        path = tmp_path / "custom.json"
        path.write_text('{"timestamps_enabled": true}', encoding="utf-8")
        terminal = Terminal.from_settings(path, file=stream)
        assert terminal.formatter.timestamps
        assert terminal.file is stream

    def test_default_settings(self):
        """Test the built-in defaults."""
        settings = TerminalSettings()
        assert not settings.debug_enabled
        assert settings.debug_directory.name == "debug"
