"""sqlpad - a keyboard-driven terminal workspace for sqlite databases."""

__version__ = "0.1.0"
