"""Structured debug events.

Events are kept in a bounded in-memory history and, when a log path is
configured, appended to a JSON-lines file. Emitting never raises.
"""

from __future__ import annotations

import json
import time
from collections import deque
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any

MAX_HISTORY = 500


@dataclass
class DebugEvent:
    """A single recorded event."""

    ts: float
    iso: str
    category: str
    name: str
    data: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "ts": self.ts,
            "iso": self.iso,
            "category": self.category,
            "name": self.name,
            "data": self.data,
        }


class _DebugEventSink:
    def __init__(self) -> None:
        self.enabled = False
        self.log_path: Path | None = None
        self.history: deque[DebugEvent] = deque(maxlen=MAX_HISTORY)

    def write(self, event: DebugEvent) -> None:
        self.history.append(event)
        if self.log_path is None:
            return
        try:
            self.log_path.parent.mkdir(parents=True, exist_ok=True)
            with self.log_path.open("a", encoding="utf-8") as handle:
                handle.write(json.dumps(event.to_dict(), default=str) + "\n")
        except OSError:
            # A broken log file must not take the UI down.
            self.log_path = None


_sink = _DebugEventSink()


def configure_debug_events(enabled: bool, log_path: Path | None = None) -> None:
    """Enable or disable event recording."""
    _sink.enabled = bool(enabled)
    _sink.log_path = log_path if enabled else None


def debug_events_enabled() -> bool:
    return _sink.enabled


def get_debug_event_history() -> list[DebugEvent]:
    return list(_sink.history)


def clear_debug_event_history() -> None:
    _sink.history.clear()


def emit_debug_event(name: str, *, category: str = "app", **data: Any) -> None:
    """Record an event if debug events are enabled."""
    if not _sink.enabled:
        return
    now = time.time()
    event = DebugEvent(
        ts=now,
        iso=datetime.fromtimestamp(now).isoformat(timespec="milliseconds"),
        category=category,
        name=name,
        data=dict(data),
    )
    _sink.write(event)

