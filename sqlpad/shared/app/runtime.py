"""Runtime configuration for sqlpad."""

from __future__ import annotations

import os
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

EnvLookup = Callable[[str], "str | None"]

DEFAULT_MAX_ROWS = 10000
APP_DIR_NAME = "sqlpad"


def resolve_history_root(env_lookup: EnvLookup) -> Path:
    """Resolve the directory holding per-database history files.

    First match wins: ``SQLPAD_HISTORY_DIR``, then ``$XDG_DATA_HOME/sqlpad/history``,
    then ``$HOME/.sqlpad/history``.
    """
    explicit = (env_lookup("SQLPAD_HISTORY_DIR") or "").strip()
    if explicit:
        return Path(explicit).expanduser()

    xdg_data = (env_lookup("XDG_DATA_HOME") or "").strip()
    if xdg_data:
        return Path(xdg_data).expanduser() / APP_DIR_NAME / "history"

    home = (env_lookup("HOME") or "").strip()
    base = Path(home) if home else Path.home()
    return base / f".{APP_DIR_NAME}" / "history"


@dataclass
class RuntimeConfig:
    """Runtime configuration provided by CLI or tests."""

    history_root: Path = field(default_factory=lambda: resolve_history_root(os.environ.get))
    max_rows: int = DEFAULT_MAX_ROWS
    debug_mode: bool = False
    debug_log_path: Path | None = None

    @classmethod
    def from_env(cls, env_lookup: EnvLookup | None = None) -> RuntimeConfig:
        lookup = env_lookup or os.environ.get

        def _parse_int(value: str | None) -> int | None:
            if not value:
                return None
            try:
                return int(value)
            except (TypeError, ValueError):
                return None

        def _parse_bool(value: str | None, default: bool) -> bool:
            if value is None or not value.strip():
                return default
            return value.strip().lower() in {"1", "true", "yes", "on"}

        history_root = resolve_history_root(lookup)
        max_rows = _parse_int(lookup("SQLPAD_MAX_ROWS"))
        if max_rows is None or max_rows <= 0:
            max_rows = DEFAULT_MAX_ROWS
        debug_mode = _parse_bool(lookup("SQLPAD_DEBUG"), False)
        log_raw = (lookup("SQLPAD_DEBUG_LOG") or "").strip()
        if log_raw:
            debug_log_path: Path | None = Path(log_raw).expanduser()
        elif debug_mode:
            debug_log_path = history_root.parent / "debug.log"
        else:
            debug_log_path = None

        return cls(
            history_root=history_root,
            max_rows=max_rows,
            debug_mode=debug_mode,
            debug_log_path=debug_log_path,
        )
