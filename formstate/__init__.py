"""formstate: form state management and validation engine.

formstate tracks the values, validation errors and required flags of a form
and provides:
- A reducer-driven state model with three merge actions (update, validate, required)
- Field registration producing change/blur handlers with parsing and re-validation
- A submit pipeline that validates every field concurrently and only calls
  the submit callback for a valid form
- An event stream for observing every state change

Basic usage:
    >>> from formstate import create_form
    >>> def email(form, run_async_check):
    ...     if not (form.get("email") or "").strip():
    ...         return "Email is required"
    >>> form = create_form({"email": email})
    >>> form.value
    {'email': None}
    >>> form.register("email", required=True).required
    True
"""

__version__ = "0.1.0"
__author__ = "formstate developers"

# Version info
VERSION = (0, 1, 0)

# Core exports
from formstate.config import FormConfig
from formstate.engine import FormEngine, create_form
from formstate.errors import FormConfigError, FormStateError, UnrecognizedActionError
from formstate.events import EventEmitter, FormEvent
from formstate.fields import FieldBinding, RegisterOptions
from formstate.reducer import Action, FormState
from formstate.types import ActionType, EventType

# Package metadata
__all__ = [
    "__version__",
    "VERSION",
    "FormEngine",
    "create_form",
    "FormConfig",
    "FormState",
    "Action",
    "ActionType",
    "EventType",
    "FormEvent",
    "EventEmitter",
    "FieldBinding",
    "RegisterOptions",
    "FormStateError",
    "FormConfigError",
    "UnrecognizedActionError",
]
