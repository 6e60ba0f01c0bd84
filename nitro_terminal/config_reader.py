#!/usr/bin/env python3
# nitro_terminal/config_reader.py
from __future__ import annotations

"""
Application config loading with progress output.

Spins while the file is read, then finishes green with a success message or
red with a message specific to what went wrong. Parse errors are echoed line
by line underneath.
"""

import json
import tomllib
from enum import Enum
from pathlib import Path
from typing import Any, Mapping, Optional

from nitro_terminal.terminal import Terminal, get_terminal
from nitro_terminal.ui.animated import State

DEFAULT_CONFIG_PATH = "nitro.config.toml"
SUPPORTED_SUFFIXES = (".toml", ".json")

LOADING_MESSAGE = "Loading your application's configuration"
LOADED_MESSAGE = "Successfully loaded your application's configuration"


class ConfigErrorCode(Enum):
    PATH_IS_DIRECTORY = "path_is_directory"
    INVALID_PATH = "invalid_path"
    UNSUPPORTED_TYPE = "unsupported_type"
    NOT_A_TABLE = "not_a_table"
    CONTENTS_INVALID = "contents_invalid"


ERROR_MESSAGES = {
    ConfigErrorCode.PATH_IS_DIRECTORY:
        "Failed to load the configuration because the file path provided was a directory",
    ConfigErrorCode.INVALID_PATH:
        "Failed to load the configuration because the file path provided is invalid "
        "or the file doesn't exist in the current directory",
    ConfigErrorCode.UNSUPPORTED_TYPE:
        "Failed to load the configuration because the file extension is unsupported "
        "for loading configurations in this app",
    ConfigErrorCode.NOT_A_TABLE:
        "Failed to load the configuration because the file does not contain a "
        "top-level table of settings",
    ConfigErrorCode.CONTENTS_INVALID:
        "Failed to load your configuration because the file contains errors",
}


class ConfigReadError(RuntimeError):
    def __init__(self, code: ConfigErrorCode, detail: str = "") -> None:
        super().__init__(detail or ERROR_MESSAGES[code])
        self.code = code
        self.detail = detail


def _deep_merge(base: Mapping[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, Mapping) and isinstance(merged.get(key), Mapping):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def parse_config_file(path: Path) -> dict[str, Any]:
    """Parse a TOML or JSON config file, raising ConfigReadError on any failure."""
    if path.is_dir():
        raise ConfigReadError(ConfigErrorCode.PATH_IS_DIRECTORY)
    if not path.is_file():
        raise ConfigReadError(ConfigErrorCode.INVALID_PATH)
    if path.suffix not in SUPPORTED_SUFFIXES:
        raise ConfigReadError(ConfigErrorCode.UNSUPPORTED_TYPE)

    try:
        if path.suffix == ".toml":
            with path.open("rb") as f:
                data: Any = tomllib.load(f)
        else:
            data = json.loads(path.read_text(encoding="utf-8"))
    except (tomllib.TOMLDecodeError, json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise ConfigReadError(ConfigErrorCode.CONTENTS_INVALID, str(exc)) from exc
    except OSError as exc:
        raise ConfigReadError(ConfigErrorCode.INVALID_PATH, str(exc)) from exc

    if not isinstance(data, dict):
        raise ConfigReadError(ConfigErrorCode.NOT_A_TABLE)
    return data


def read_app_config(
    path: str | Path = DEFAULT_CONFIG_PATH,
    *,
    defaults: Optional[Mapping[str, Any]] = None,
    terminal: Optional[Terminal] = None,
) -> Optional[dict[str, Any]]:
    """
    Load ``path`` (relative to the working directory) over ``defaults``.

    Returns the merged config, or None after reporting the failure.
    """
    terminal = terminal or get_terminal()
    terminal.animate(LOADING_MESSAGE)

    try:
        loaded = parse_config_file(Path.cwd() / path)
    except ConfigReadError as exc:
        terminal.stop_animation(State.ERROR, ERROR_MESSAGES[exc.code])
        if exc.code is ConfigErrorCode.CONTENTS_INVALID:
            for line in exc.detail.split("\n"):
                terminal.error("  " + line)
            terminal.error("The error has been printed above")
        return None

    terminal.stop_animation(State.SUCCESS, LOADED_MESSAGE)
    return _deep_merge(defaults or {}, loaded)
