"""Validator invocation for formstate.

Validators may be plain functions or coroutine functions. This module calls
them uniformly and implements the validate-all pass used on submit: every
validator is called before any result is awaited, and the results are
reported in field declaration order.

Exceptions raised by a validator are not caught here; they propagate to the
caller that triggered validation.
"""

import asyncio
import inspect
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Mapping, Union

from formstate.types import ValidationMessage, Validator, Values

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of validating a set of fields.

    Attributes:
        messages: Field name to validator result (None when the field passed),
            in declaration order

    Examples:
        >>> result = ValidationResult({"name": "Name is required", "email": None})
        >>> result.is_valid
        False
        >>> result.errors
        {'name': 'Name is required'}
    """
    messages: Dict[str, ValidationMessage] = field(default_factory=dict)

    @property
    def errors(self) -> Dict[str, str]:
        """Fields that produced a non-empty message."""
        return {name: msg for name, msg in self.messages.items() if msg}

    @property
    def is_valid(self) -> bool:
        return not self.errors

    @property
    def invalid_fields(self) -> List[str]:
        return list(self.errors)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dict for serialization."""
        return {
            "isValid": self.is_valid,
            "errors": self.errors,
            "invalidFields": self.invalid_fields,
        }


def _takes_values_only(validator: Validator) -> bool:
    try:
        signature = inspect.signature(validator)
    except (TypeError, ValueError):
        return False

    positional = 0
    for param in signature.parameters.values():
        if param.kind == param.VAR_POSITIONAL:
            return False
        if param.kind in (param.POSITIONAL_ONLY, param.POSITIONAL_OR_KEYWORD):
            positional += 1
    return positional == 1


def call_validator(validator: Validator, values: Values, run_async_check: bool) -> Any:
    """Call a validator, leaving out the flag for validators taking only the values."""
    if _takes_values_only(validator):
        return validator(values)
    return validator(values, run_async_check)


async def resolve_message(result: Union[ValidationMessage, Any]) -> ValidationMessage:
    """Await a validator result if it is awaitable."""
    if inspect.isawaitable(result):
        return await result
    return result


async def run_validator(
    validator: Validator,
    values: Values,
    run_async_check: bool = False,
) -> ValidationMessage:
    """Call a single validator and return its message.

    Args:
        validator: Plain or coroutine validator function
        values: The full value mapping the validator sees
        run_async_check: Whether the validator may run its async checks

    Returns:
        The validator's error message, or None when the value is valid
    """
    return await resolve_message(call_validator(validator, values, run_async_check))


async def validate_fields(
    validators: Mapping[str, Validator],
    values_for: Callable[[str], Values],
) -> ValidationResult:
    """Run every validator concurrently without async checks.

    ``values_for(name)`` is called once per field, in declaration order, right
    before that field's validator is called; it supplies the values the
    validator sees. All validators are started before any is awaited.

    Args:
        validators: Field name to validator, in declaration order
        values_for: Builds the value mapping for a field's validator

    Returns:
        ValidationResult with one message per validator
    """
    names = list(validators)
    pending: List[Any] = []
    try:
        for name in names:
            pending.append(call_validator(validators[name], values_for(name), False))
    except BaseException:
        # Coroutines already created will never be awaited
        for result in pending:
            if inspect.iscoroutine(result):
                result.close()
        raise

    messages = await asyncio.gather(*(resolve_message(result) for result in pending))
    result = ValidationResult(messages=dict(zip(names, messages)))
    logger.debug(
        "Validated %d field(s), %d invalid: %s",
        len(names),
        len(result.invalid_fields),
        result.invalid_fields,
    )
    return result


__all__ = [
    "ValidationResult",
    "call_validator",
    "resolve_message",
    "run_validator",
    "validate_fields",
]
