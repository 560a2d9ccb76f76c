"""Resolve a key press to an action name for the active binding contexts."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from sqlpad.core.binding_contexts import ordered_binding_contexts
from sqlpad.core.input_context import InputContext
from sqlpad.core.keymap import get_keymap
from sqlpad.shared.core.debug_events import emit_debug_event


@dataclass(frozen=True)
class ResolvedAction:
    action: str
    character: str | None = None


def is_printable(character: str | None) -> bool:
    return bool(character) and len(character) == 1 and character.isprintable()


def resolve_action(
    key: str,
    ctx: InputContext,
    *,
    character: str | None = None,
    is_allowed: Callable[[str], bool] | None = None,
) -> ResolvedAction | None:
    """Find the action bound to ``key``, most specific context first.

    Keys with no binding fall through to the context's character action
    (typing into the editor or the picker filter) when they carry a
    printable character. Returns None for keys that do nothing here.
    """
    keymap = get_keymap()
    contexts = ordered_binding_contexts(ctx)

    for context in contexts:
        for binding in keymap.bindings_for_key(key, context):
            if is_allowed is not None and not is_allowed(binding.action):
                continue
            emit_debug_event("key.resolved", category="key", key=key, context=context, action=binding.action)
            return ResolvedAction(binding.action)

    if not is_printable(character):
        return None

    for context in contexts:
        action = keymap.character_action(context)
        if action is None:
            continue
        if is_allowed is not None and not is_allowed(action):
            continue
        emit_debug_event("key.resolved", category="key", key=key, context=context, action=action)
        return ResolvedAction(action, character)
    return None
