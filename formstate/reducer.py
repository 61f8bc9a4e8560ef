"""Form state reducer.

This module holds the immutable form state and the pure transition function
that produces a new state from an action. The reducer understands exactly
three action kinds (see ActionType); each one shallow-merges its payload into
one of the three state mappings. Any other kind is a caller bug and raises
UnrecognizedActionError.

Usage:
    >>> state = FormState()
    >>> state = reduce(state, Action(ActionType.UPDATE, {"name": "Ada"}))
    >>> state.value
    {'name': 'Ada'}
    >>> reduce(state, {"type": "unknown"})
    Traceback (most recent call last):
        ...
    formstate.errors.UnrecognizedActionError: unrecognized action type: unknown
"""

from dataclasses import dataclass, field, replace
from typing import Any, Dict, Mapping, Union

from formstate.config import FormConfig
from formstate.errors import UnrecognizedActionError
from formstate.types import ActionType, Values

# Map each action kind to the state mapping it merges into
ACTION_TO_ATTRIBUTE: Dict[ActionType, str] = {
    ActionType.UPDATE: "value",
    ActionType.VALIDATE: "error",
    ActionType.REQUIRED: "required",
}


@dataclass(frozen=True)
class FormState:
    """Snapshot of the form's values, error messages and required flags.

    All three mappings are keyed by field name. Keys are never removed;
    a field is cleared by setting its entry to None.

    Attributes:
        value: Field name to raw (unparsed) value
        error: Field name to error message or None
        required: Field name to whether the field is registered as required
    """
    value: Values = field(default_factory=dict)
    error: Dict[str, Any] = field(default_factory=dict)
    required: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dict for serialization."""
        return {
            "value": dict(self.value),
            "error": dict(self.error),
            "required": dict(self.required),
        }


@dataclass(frozen=True)
class Action:
    """A dispatchable state transition.

    Attributes:
        type: The action kind; plain strings are accepted and checked on reduce
        payload: Mapping merged into the state mapping selected by type
    """
    type: Union[ActionType, str]
    payload: Mapping[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Action":
        """Create an Action from a ``{"type": ..., "payload": ...}`` mapping."""
        return cls(type=data.get("type"), payload=data.get("payload") or {})

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dict for serialization."""
        return {
            "type": self.type.value if isinstance(self.type, ActionType) else self.type,
            "payload": dict(self.payload),
        }


def _action_type(action: Action) -> ActionType:
    try:
        return ActionType(action.type)
    except ValueError:
        raise UnrecognizedActionError(action.type) from None


def reduce(state: FormState, action: Union[Action, Mapping[str, Any]]) -> FormState:
    """Apply an action to a state and return the new state.

    Args:
        state: The current state (left untouched)
        action: An Action or an equivalent mapping

    Returns:
        A new FormState with the payload merged into the selected mapping

    Raises:
        UnrecognizedActionError: If the action kind is not one of ActionType
    """
    if not isinstance(action, Action):
        action = Action.from_dict(action)

    attribute = ACTION_TO_ATTRIBUTE[_action_type(action)]
    merged = {**getattr(state, attribute), **action.payload}
    return replace(state, **{attribute: merged})


def build_initial_state(config: FormConfig) -> FormState:
    """Seed a FormState from a resolved configuration.

    Every validator-declared field starts as None/None/False; initial values
    then override the value mapping key by key.
    """
    fields = config.fields
    return FormState(
        value={**{name: None for name in fields}, **config.initial_values},
        error={name: None for name in fields},
        required={name: False for name in fields},
    )


__all__ = [
    "FormState",
    "Action",
    "ACTION_TO_ATTRIBUTE",
    "reduce",
    "build_initial_state",
]
