"""Core type definitions for formstate.

This module defines the fundamental types used throughout the engine:
- ActionType: The three state transitions the reducer understands
- EventType: Notification types emitted to event listeners
- Validator / Parser / Values: Callable and mapping aliases for field handling

Field values use ``None`` for "unset". A validator returns an error message
(a non-empty string) when its field is invalid and ``None`` otherwise.
"""

from enum import Enum
from typing import Any, Awaitable, Callable, Dict, Optional, Union

from typing_extensions import TypeAlias


class ActionType(str, Enum):
    """Action kinds accepted by the form reducer.

    Each kind shallow-merges its payload into exactly one state mapping.
    """
    UPDATE = "update"
    VALIDATE = "validate"
    REQUIRED = "required"


class EventType(str, Enum):
    """Event types emitted by the form engine.

    Listeners subscribe to these through an EventEmitter.
    """
    VALUE_UPDATED = "value.updated"
    ERROR_UPDATED = "error.updated"
    REQUIRED_UPDATED = "required.updated"
    VALIDATION_PASSED = "validation.passed"
    VALIDATION_FAILED = "validation.failed"
    SUBMISSION_SUBMITTED = "submission.submitted"
    SUBMISSION_REJECTED = "submission.rejected"


Values: TypeAlias = Dict[str, Any]
"""Mapping of field name to its raw or parsed value."""

ValidationMessage: TypeAlias = Optional[str]

Validator: TypeAlias = Callable[
    [Values, bool], Union[ValidationMessage, Awaitable[ValidationMessage]]
]
"""Validator signature: ``(all_values, run_async_check) -> message | None``.

May be a plain function or a coroutine function. Validators taking a single
positional argument are called with the values only.
"""

Parser: TypeAlias = Callable[[Any], Any]
"""Maps a raw input value to the value passed to validators and submitted."""


__all__ = [
    "ActionType",
    "EventType",
    "Values",
    "ValidationMessage",
    "Validator",
    "Parser",
]
