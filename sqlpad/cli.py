"""Command-line entry point for sqlpad."""

from __future__ import annotations

import argparse
import os
import sqlite3
import sys
from pathlib import Path

from sqlpad import __version__
from sqlpad.shared.app import RuntimeConfig, build_app_services
from sqlpad.shared.core.debug_events import configure_debug_events


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sqlpad",
        description="Keyboard-driven query workspace for a sqlite database.",
    )
    parser.add_argument("database", metavar="DATABASE", help="Path to the sqlite database file")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def check_database_path(path: Path) -> str | None:
    """Return why ``path`` cannot be opened, or None if it looks usable."""
    if not path.exists():
        return "no such file"
    if not path.is_file():
        return "not a regular file"
    if not os.access(path, os.R_OK):
        return "permission denied"
    return None


def cmd_open(args: argparse.Namespace, runtime: RuntimeConfig) -> int:
    """Open the workspace on ``args.database`` and run until quit."""
    from sqlpad.domains.shell.app.main import SqlpadApp

    path = Path(args.database).expanduser()
    reason = check_database_path(path)
    if reason is not None:
        print(f"Error: cannot open database '{args.database}': {reason}", file=sys.stderr)
        return 1

    try:
        services = build_app_services(runtime, path)
    except sqlite3.Error as e:
        print(f"Error: cannot open database '{args.database}': {e}", file=sys.stderr)
        return 1

    try:
        SqlpadApp(services=services).run()
    finally:
        services.close()
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    runtime = RuntimeConfig.from_env()
    configure_debug_events(runtime.debug_mode, runtime.debug_log_path)
    return cmd_open(args, runtime)
