"""Workspace key bindings, grouped by binding context (UI-agnostic)."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from sqlpad.shared.core.debug_events import emit_debug_event

# Footer/help labels for named keys; anything else is shown as typed.
KEY_LABELS: dict[str, str] = {
    "escape": "<esc>",
    "enter": "<enter>",
    "tab": "<tab>",
    "space": "<space>",
    "question_mark": "?",
    "backspace": "<backspace>",
    "delete": "<del>",
    "home": "<home>",
    "end": "<end>",
    "left": "<left>",
    "right": "<right>",
    "up": "<up>",
    "down": "<down>",
}


def format_key(key: str) -> str:
    """Render a Textual key name for display (``ctrl+q`` -> ``^q``)."""
    modifier, _, base = key.rpartition("+")
    label = KEY_LABELS.get(base, base)
    if modifier == "ctrl":
        return f"^{label}"
    return label


@dataclass(frozen=True)
class ActionKeyDef:
    """One key bound to one action inside a binding context."""

    key: str
    action: str
    context: str
    primary: bool = True  # secondary aliases are left out of hints


@dataclass(frozen=True)
class CharacterActionDef:
    """Action that receives any printable character typed in ``context``."""

    action: str
    context: str


class KeymapProvider(ABC):
    """Source of key bindings; swap it with ``set_keymap`` to rebind keys."""

    @abstractmethod
    def get_action_keys(self) -> list[ActionKeyDef]:
        raise NotImplementedError

    @abstractmethod
    def get_character_actions(self) -> list[CharacterActionDef]:
        raise NotImplementedError

    def keys_for_action(self, action_name: str, *, include_secondary: bool = True) -> list[str]:
        """Keys bound to ``action_name`` in any context, primary keys first."""
        matching = [ak for ak in self.get_action_keys() if ak.action == action_name]
        keys = [ak.key for ak in matching if ak.primary]
        if include_secondary:
            keys += [ak.key for ak in matching if not ak.primary]
        return list(dict.fromkeys(keys))

    def action(self, action_name: str) -> str | None:
        """The key to advertise for ``action_name``."""
        keys = self.keys_for_action(action_name)
        return keys[0] if keys else None

    def bindings_for_key(self, key: str, context: str) -> list[ActionKeyDef]:
        return [ak for ak in self.get_action_keys() if ak.key == key and ak.context == context]

    def character_action(self, context: str) -> str | None:
        for definition in self.get_character_actions():
            if definition.context == context:
                return definition.action
        return None


# context -> (key, action) pairs; a trailing False marks a secondary alias.
DEFAULT_BINDINGS: dict[str, list[tuple]] = {
    "global": [
        ("ctrl+q", "quit"),
    ],
    "normal": [
        ("tab", "toggle_focus"),
        ("q", "quit_workspace"),
        ("question_mark", "show_help"),
    ],
    "query_normal": [
        ("i", "enter_insert_mode"),
        ("enter", "execute_query"),
        ("h", "history_prev"),
        ("left", "history_prev", False),
        ("l", "history_next"),
        ("right", "history_next", False),
        ("n", "new_query"),
        ("t", "show_table_picker"),
    ],
    "query_insert": [
        ("escape", "exit_insert_mode"),
        ("ctrl+enter", "execute_query_insert"),
        ("ctrl+j", "execute_query_insert", False),  # what most terminals send for ctrl+enter
        ("enter", "insert_newline"),
        ("backspace", "delete_left"),
        ("delete", "delete_right"),
        ("left", "cursor_left"),
        ("right", "cursor_right"),
        ("up", "cursor_up"),
        ("down", "cursor_down"),
        ("home", "cursor_line_start"),
        ("end", "cursor_line_end"),
    ],
    "autocomplete": [
        ("tab", "autocomplete_accept"),
        ("enter", "autocomplete_accept", False),
        ("down", "autocomplete_next"),
        ("up", "autocomplete_prev"),
        ("escape", "autocomplete_close"),
    ],
    "table_picker": [
        ("enter", "picker_accept"),
        ("escape", "picker_close"),
        ("down", "picker_next"),
        ("up", "picker_prev"),
        ("backspace", "picker_backspace"),
    ],
    "results": [
        ("j", "results_cursor_down"),
        ("down", "results_cursor_down", False),
        ("k", "results_cursor_up"),
        ("up", "results_cursor_up", False),
    ],
}

DEFAULT_CHARACTER_ACTIONS: dict[str, str] = {
    "table_picker": "picker_type",
    "query_insert": "insert_character",
}


class DefaultKeymapProvider(KeymapProvider):
    """Built-in bindings. Registration is reported as debug events once."""

    def __init__(self) -> None:
        self._action_keys = self._build_action_keys()
        for binding in self._action_keys:
            emit_debug_event(
                "keybinding.register",
                category="keybinding",
                provider=type(self).__name__,
                key=binding.key,
                action=binding.action,
                context=binding.context,
                primary=binding.primary,
            )

    def _build_action_keys(self) -> list[ActionKeyDef]:
        return [
            ActionKeyDef(entry[0], entry[1], context, *entry[2:])
            for context, entries in DEFAULT_BINDINGS.items()
            for entry in entries
        ]

    def get_action_keys(self) -> list[ActionKeyDef]:
        return list(self._action_keys)

    def get_character_actions(self) -> list[CharacterActionDef]:
        return [CharacterActionDef(action, context) for context, action in DEFAULT_CHARACTER_ACTIONS.items()]


_keymap_provider: KeymapProvider | None = None


def get_keymap() -> KeymapProvider:
    """The active keymap, created on first use."""
    global _keymap_provider
    if _keymap_provider is None:
        _keymap_provider = DefaultKeymapProvider()
    return _keymap_provider


def set_keymap(provider: KeymapProvider) -> None:
    global _keymap_provider
    _keymap_provider = provider


def reset_keymap() -> None:
    """Drop any custom keymap; the next ``get_keymap`` builds the default."""
    global _keymap_provider
    _keymap_provider = None
