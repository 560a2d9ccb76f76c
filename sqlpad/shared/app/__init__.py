"""Shared application wiring."""

from .runtime import RuntimeConfig, resolve_history_root
from .services import AppServices, build_app_services

__all__ = [
    "AppServices",
    "RuntimeConfig",
    "build_app_services",
    "resolve_history_root",
]
