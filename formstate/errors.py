"""Exception types for formstate.

Only caller bugs are raised as exceptions. A validator returning a message is
ordinary form state and is stored, never raised. Exceptions raised by a
validator itself propagate to whoever awaited the validation unchanged.
"""

from typing import Any, Optional


class FormStateError(Exception):
    """Base class for all errors raised by the form engine."""


class UnrecognizedActionError(FormStateError):
    """Raised when the reducer receives an action kind it does not handle.

    Attributes:
        action_type: The offending action kind as it was dispatched

    Examples:
        >>> err = UnrecognizedActionError("unknown")
        >>> str(err)
        'unrecognized action type: unknown'
    """

    def __init__(self, action_type: Any):
        self.action_type = action_type
        kind = action_type.value if hasattr(action_type, "value") else action_type
        super().__init__(f"unrecognized action type: {kind}")


class FormConfigError(FormStateError):
    """Raised when a form configuration cannot be resolved.

    Attributes:
        field: The field whose configuration is malformed, if any
    """

    def __init__(self, message: str, field: Optional[str] = None):
        self.field = field
        super().__init__(message)


__all__ = [
    "FormStateError",
    "UnrecognizedActionError",
    "FormConfigError",
]
