"""Base classes for the hierarchical key-state machine.

Each state declares the actions it allows; children inherit from their
parent unless they forbid an action explicitly.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum, auto

from sqlpad.core.input_context import InputContext

Guard = Callable[[InputContext], bool]


class ActionResult(Enum):
    """Result of checking an action in a state."""

    ALLOWED = auto()
    FORBIDDEN = auto()
    UNHANDLED = auto()  # delegate to parent


@dataclass
class DisplayBinding:
    """A binding to display in the footer."""

    key: str
    label: str
    action: str


@dataclass
class HelpEntry:
    """An entry for the help text."""

    key: str
    description: str
    category: str


@dataclass
class ActionSpec:
    guard: Guard | None = None
    display_label: str | None = None
    help_description: str | None = None

    def is_allowed(self, ctx: InputContext) -> bool:
        if self.guard is None:
            return True
        return self.guard(ctx)


def resolve_display_key(action_name: str) -> str | None:
    """Primary key for an action, formatted for display."""
    from sqlpad.core.keymap import format_key, get_keymap

    key = get_keymap().action(action_name)
    if key is None:
        return None
    return format_key(key)


class State(ABC):
    """Base class for hierarchical states."""

    help_category: str | None = None

    def __init__(self, parent: State | None = None):
        self.parent = parent
        self._actions: dict[str, ActionSpec] = {}
        self._forbidden: set[str] = set()
        self._display_order: list[str] = []
        self._right_bindings: list[str] = []
        self._setup_actions()

    @abstractmethod
    def _setup_actions(self) -> None:
        """Define the actions handled by this state."""

    @abstractmethod
    def is_active(self, app: InputContext) -> bool:
        """Return True if this state is currently active."""

    def allows(
        self,
        action_name: str,
        guard: Guard | None = None,
        *,
        label: str | None = None,
        right: bool = False,
        help: str | None = None,
    ) -> None:
        """Register an action as allowed in this state.

        ``label`` puts the action in the footer; its key comes from the keymap.
        """
        self._actions[action_name] = ActionSpec(
            guard=guard,
            display_label=label,
            help_description=help,
        )
        if label:
            if right:
                self._right_bindings.append(action_name)
            else:
                self._display_order.append(action_name)

    def forbids(self, *action_names: str) -> None:
        """Explicitly forbid actions (blocks parent allowance)."""
        self._forbidden.update(action_names)

    def check_action(self, app: InputContext, action_name: str) -> ActionResult:
        if action_name in self._forbidden:
            return ActionResult.FORBIDDEN
        spec = self._actions.get(action_name)
        if spec is not None:
            return ActionResult.ALLOWED if spec.is_allowed(app) else ActionResult.FORBIDDEN
        if self.parent:
            return self.parent.check_action(app, action_name)
        return ActionResult.UNHANDLED

    def _binding_for(self, app: InputContext, action_name: str) -> DisplayBinding | None:
        spec = self._actions.get(action_name)
        if spec is None or not spec.display_label or not spec.is_allowed(app):
            return None
        if action_name in self._forbidden:
            return None
        key = resolve_display_key(action_name)
        if key is None:
            return None
        return DisplayBinding(key=key, label=spec.display_label, action=action_name)

    def get_display_bindings(self, app: InputContext) -> tuple[list[DisplayBinding], list[DisplayBinding]]:
        """Bindings for the footer (left, right), this state's first."""
        left: list[DisplayBinding] = []
        right: list[DisplayBinding] = []
        seen: set[str] = set()

        for action_name in self._display_order:
            binding = self._binding_for(app, action_name)
            if binding:
                left.append(binding)
                seen.add(action_name)
        for action_name in self._right_bindings:
            binding = self._binding_for(app, action_name)
            if binding:
                right.append(binding)
                seen.add(action_name)

        if self.parent:
            parent_left, parent_right = self.parent.get_display_bindings(app)
            for binding in parent_left:
                if binding.action not in seen and binding.action not in self._forbidden:
                    left.append(binding)
                    seen.add(binding.action)
            for binding in parent_right:
                if binding.action not in seen and binding.action not in self._forbidden:
                    right.append(binding)
                    seen.add(binding.action)

        return left, right

    def get_help_entries(self) -> list[HelpEntry]:
        entries: list[HelpEntry] = []
        if not self.help_category:
            return entries
        for action_name, spec in self._actions.items():
            if not spec.help_description:
                continue
            key = resolve_display_key(action_name)
            if key is None:
                continue
            entries.append(HelpEntry(key=key, description=spec.help_description, category=self.help_category))
        return entries
