#!/usr/bin/env python3
# nitro_terminal/config.py
from __future__ import annotations

"""
Terminal settings loader (stdlib-only).

Precedence (low → high):
  1) Built-in defaults
  2) Files in CWD: nitro-terminal.json, nitro-terminal.toml
  3) An explicit settings file passed to load_settings()
  4) Environment variables prefixed NITRO_TERMINAL_

Nested tables are flattened, so ``[debug] enabled = true`` and
``DEBUG_ENABLED = true`` are the same key.

Validation:
  - DEBUG_DIRECTORY: normalized path, relative to CWD (no creation here)
  - DEBUG_ENABLED / DEBUG_MILITARY_TIME / TIMESTAMPS_ENABLED: bool
  - ANIMATION_INTERVAL: float > 0 (seconds)
"""

import json
import os
import re
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping, Optional

ENV_PREFIX = "NITRO_TERMINAL_"
CONFIG_FILE_NAMES = ("nitro-terminal.json", "nitro-terminal.toml")

DEFAULTS: dict[str, Any] = {
    "DEBUG_DIRECTORY": "debug",
    "DEBUG_ENABLED": False,
    "DEBUG_MILITARY_TIME": False,
    "TIMESTAMPS_ENABLED": False,
    "ANIMATION_INTERVAL": 0.1,
}


# ---------- data model ----------

@dataclass(frozen=True)
class TerminalSettings:
    debug_directory: Path = field(default_factory=lambda: Path.cwd() / "debug")
    debug_enabled: bool = False
    debug_military_time: bool = False
    timestamps_enabled: bool = False
    animation_interval: float = 0.1

    # Unrecognized keys preserved for debugging/forward-compat
    extra: dict[str, Any] = field(default_factory=dict)


# ---------- file loaders ----------

def _load_json_file(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {}
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON in {path}: {exc}") from exc
    return data if isinstance(data, dict) else {}


def _load_toml_file(path: Path) -> dict[str, Any]:
    try:
        with path.open("rb") as f:
            return tomllib.load(f)
    except FileNotFoundError:
        return {}
    except tomllib.TOMLDecodeError as exc:
        raise ValueError(f"Invalid TOML in {path}: {exc}") from exc


def _load_file(path: Path) -> dict[str, Any]:
    if path.suffix == ".json":
        return _normalize_keys(_flatten_mapping(_load_json_file(path)))
    if path.suffix == ".toml":
        return _normalize_keys(_flatten_mapping(_load_toml_file(path)))
    raise ValueError(f"Unsupported settings file type: {path.suffix or path.name!r}")


def _flatten_mapping(obj: Any, prefix: str = "") -> dict[str, Any]:
    """
    Flatten nested dicts to UPPER_SNAKE keys.
    Example: {'debug': {'enabled': true}} -> {'DEBUG_ENABLED': True}
    """
    flat: dict[str, Any] = {}
    if isinstance(obj, Mapping):
        for k, v in obj.items():
            key = f"{prefix}_{k}" if prefix else str(k)
            if isinstance(v, Mapping):
                flat.update(_flatten_mapping(v, key))
            else:
                flat[str(key).upper()] = v
    return flat


def _normalize_keys(d: Mapping[str, Any]) -> dict[str, Any]:
    return {str(k).upper().replace("-", "_"): v for k, v in d.items()}


# ---------- normalization & coercion ----------

_BOOL_TRUE = {"1", "true", "yes", "y", "on"}
_BOOL_FALSE = {"0", "false", "no", "n", "off"}


def _as_bool(val: Any) -> bool:
    if isinstance(val, bool):
        return val
    s = str(val).strip().lower()
    if s in _BOOL_TRUE:
        return True
    if s in _BOOL_FALSE:
        return False
    raise ValueError(f"Expected boolean, got: {val!r}")


def _as_float(val: Any) -> float:
    if isinstance(val, (int, float)) and not isinstance(val, bool):
        return float(val)
    try:
        return float(str(val).strip())
    except ValueError as exc:
        raise ValueError(f"Expected number, got: {val!r}") from exc


def _as_path(val: Any) -> Path:
    s = os.path.expandvars(os.path.expanduser(str(val)))
    p = Path(s)
    return p if p.is_absolute() else (Path.cwd() / p).resolve()


# ---------- merge & load ----------

def _merge_sources(path: Optional[Path], environ: Mapping[str, str]) -> dict[str, Any]:
    merged: dict[str, Any] = dict(DEFAULTS)

    cwd = Path.cwd()
    for name in CONFIG_FILE_NAMES:
        merged.update(_load_file(cwd / name))

    if path is not None:
        if not path.is_file():
            raise FileNotFoundError(f"Settings file not found: {path}")
        merged.update(_load_file(path))

    env_overrides = {
        k[len(ENV_PREFIX):]: v
        for k, v in environ.items()
        if k.startswith(ENV_PREFIX) and re.fullmatch(r"[A-Z0-9_]+", k)
    }
    merged.update(env_overrides)
    return merged


def _validate_and_build(config: dict[str, Any]) -> TerminalSettings:
    interval = _as_float(config.get("ANIMATION_INTERVAL", DEFAULTS["ANIMATION_INTERVAL"]))
    if interval <= 0:
        raise ValueError("ANIMATION_INTERVAL must be > 0")

    recognized = set(DEFAULTS.keys())
    extra = {k: v for k, v in config.items() if k not in recognized}

    return TerminalSettings(
        debug_directory=_as_path(config.get("DEBUG_DIRECTORY", DEFAULTS["DEBUG_DIRECTORY"])),
        debug_enabled=_as_bool(config.get("DEBUG_ENABLED", DEFAULTS["DEBUG_ENABLED"])),
        debug_military_time=_as_bool(config.get("DEBUG_MILITARY_TIME", DEFAULTS["DEBUG_MILITARY_TIME"])),
        timestamps_enabled=_as_bool(config.get("TIMESTAMPS_ENABLED", DEFAULTS["TIMESTAMPS_ENABLED"])),
        animation_interval=interval,
        extra=extra,
    )


# ---------- public API ----------

def load_settings(
    path: str | os.PathLike[str] | None = None,
    *,
    environ: Optional[Mapping[str, str]] = None,
) -> TerminalSettings:
    """
    Load, merge, normalize, and validate terminal settings.
    No filesystem side-effects (the debug directory is created on first write).
    """
    raw = _merge_sources(
        Path(path) if path is not None else None,
        os.environ if environ is None else environ,
    )
    return _validate_and_build(raw)
