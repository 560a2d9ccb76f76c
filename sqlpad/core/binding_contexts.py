"""Resolve active keybinding contexts from the input context."""

from __future__ import annotations

from sqlpad.core.input_context import Focus, InputContext
from sqlpad.core.vim import VimMode

# Most specific first; the key router tries contexts in this order.
CONTEXT_PRIORITY: tuple[str, ...] = (
    "table_picker",
    "autocomplete",
    "query_insert",
    "query_normal",
    "results",
    "normal",
    "global",
)


def get_binding_contexts(ctx: InputContext) -> set[str]:
    """Determine which keybinding contexts should be active."""
    contexts = {"global"}

    if ctx.table_picker_visible:
        contexts.add("table_picker")
        return contexts

    if ctx.focus == Focus.EDITOR:
        if ctx.vim_mode == VimMode.INSERT:
            contexts.add("query_insert")
        else:
            contexts.add("query_normal")
    if ctx.autocomplete_visible:
        contexts.add("autocomplete")

    if ctx.focus == Focus.RESULTS:
        contexts.add("results")

    if ctx.vim_mode == VimMode.NORMAL:
        contexts.add("normal")

    return contexts


def ordered_binding_contexts(ctx: InputContext) -> list[str]:
    active = get_binding_contexts(ctx)
    return [name for name in CONTEXT_PRIORITY if name in active]
