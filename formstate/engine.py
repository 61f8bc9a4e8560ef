"""FormEngine orchestrator for formstate.

This module provides the FormEngine class that ties together the reducer,
field parsers, validators and event emitter. It owns the form state and is
the only place where state transitions are dispatched.

The engine tracks, per field, the raw value, the current error message and
whether the field is registered as required. Validation runs on blur, on
change while a field is already in error, and for every field on submit.

Usage:
    >>> def name(form, run_async_check):
    ...     if not (form.get("name") or "").strip():
    ...         return "Name is required"
    >>> form = create_form({"name": name})
    >>> form.value
    {'name': None}
    >>> form.set_value({"name": "Ada"})
    >>> form.is_blank
    False
"""

from datetime import datetime, timezone
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Union
import inspect
import logging
import uuid

from formstate.config import FormConfig
from formstate.events import EventEmitter, FormEvent
from formstate.fields import FieldBinding, RegisterOptions, read_target, resolve_parser
from formstate.parsers import identity
from formstate.reducer import Action, FormState, build_initial_state, reduce
from formstate.types import ActionType, EventType, Parser, ValidationMessage, Validator, Values
from formstate.validation import ValidationResult, run_validator, validate_fields

logger = logging.getLogger(__name__)

# Event emitted after each successfully reduced action
ACTION_TO_EVENT_TYPE: Dict[ActionType, EventType] = {
    ActionType.UPDATE: EventType.VALUE_UPDATED,
    ActionType.VALIDATE: EventType.ERROR_UPDATED,
    ActionType.REQUIRED: EventType.REQUIRED_UPDATED,
}

SubmitCallback = Callable[[Values, Any], Any]


class FormEngine:
    """Form state manager with field registration and validated submit.

    Attributes:
        config: The resolved configuration the current state was built from
        validators: Field name to validator, in declaration order
        emitter: EventEmitter receiving a FormEvent for every state change

    Examples:
        >>> form = FormEngine({"initialValues": {"city": "Oslo"}})
        >>> form.value
        {'city': 'Oslo'}
        >>> form.clear_errors()
        >>> form.is_invalid
        False
    """

    def __init__(
        self,
        config: Optional[Union[FormConfig, Mapping[str, Any]]] = None,
        emitter: Optional[EventEmitter] = None,
    ):
        """Initialize the engine.

        Args:
            config: Validator mapping, ``{"validators", "initialValues"}`` mapping,
                or a FormConfig
            emitter: Optional EventEmitter to publish events on

        Raises:
            FormConfigError: If the configuration cannot be resolved
        """
        self.emitter = emitter if emitter is not None else EventEmitter()
        self._initialize(FormConfig.from_value(config))

    def _initialize(self, config: FormConfig) -> None:
        self.config = config
        self.validators: Dict[str, Validator] = dict(config.validators)
        self._state = build_initial_state(config)
        self._parsers: Dict[str, Parser] = {name: identity for name in config.fields}
        self._parsed_values: Values = {}
        self._required_fields: Dict[str, bool] = {}
        logger.debug("Initialized form with fields %s", config.fields)

    def reset(self, config: Optional[Union[FormConfig, Mapping[str, Any]]] = None) -> None:
        """Rebuild all state from scratch.

        Nothing from the previous session is kept: values, errors, required
        flags, parsers and caches are all recomputed.

        Args:
            config: New configuration; the current one is reused when omitted
        """
        self._initialize(self.config if config is None else FormConfig.from_value(config))

    # -- read views -----------------------------------------------------------

    @property
    def state(self) -> FormState:
        return self._state

    @property
    def value(self) -> Values:
        return dict(self._state.value)

    @property
    def error(self) -> Dict[str, ValidationMessage]:
        return dict(self._state.error)

    @property
    def required(self) -> Dict[str, bool]:
        """Required flags of registered fields."""
        return dict(self._required_fields)

    @property
    def parser(self) -> Dict[str, Parser]:
        return dict(self._parsers)

    @property
    def validation_fields(self) -> List[str]:
        return list(self.validators)

    # -- derived status -------------------------------------------------------

    @property
    def is_blank(self) -> bool:
        """True when every known field is unset."""
        return all(value is None for value in self._state.value.values())

    @property
    def has_blank_required(self) -> bool:
        value = self._state.value
        return any(
            value.get(name) is None
            for name, required in self._state.required.items()
            if required
        )

    @property
    def has_validation_error(self) -> bool:
        return any(self._state.error.get(name) for name in self.validators)

    @property
    def is_invalid(self) -> bool:
        return self.has_blank_required or self.has_validation_error

    # -- dispatch -------------------------------------------------------------

    def dispatch(self, action: Union[Action, Mapping[str, Any]]) -> None:
        """Apply an action to the form state.

        Args:
            action: An Action or a ``{"type": ..., "payload": ...}`` mapping

        Raises:
            UnrecognizedActionError: If the action kind is not update, validate
                or required
        """
        if not isinstance(action, Action):
            action = Action.from_dict(action)

        self._state = reduce(self._state, action)
        action_type = ActionType(action.type)
        logger.debug("Dispatched %s %s", action_type.value, dict(action.payload))
        self._emit(ACTION_TO_EVENT_TYPE[action_type], payload={"changes": dict(action.payload)})

    def set_value(self, payload: Mapping[str, Any]) -> None:
        """Merge raw values into the form, e.g. to set values outside user input."""
        self.dispatch(Action(ActionType.UPDATE, payload))

    def set_validation(self, payload: Mapping[str, ValidationMessage]) -> None:
        """Merge error messages into the form."""
        self.dispatch(Action(ActionType.VALIDATE, payload))

    def clear_errors(self, fields: Optional[Union[str, Iterable[str]]] = None) -> None:
        """Clear errors for one field, several fields, or every field when omitted.

        Values and required flags are left untouched.
        """
        if fields is None:
            keys = list(self._state.error)
        elif isinstance(fields, str):
            keys = [fields]
        else:
            keys = list(fields)

        self.dispatch(Action(ActionType.VALIDATE, {key: None for key in keys}))

    # -- registration ---------------------------------------------------------

    def register(
        self,
        name: str,
        options: Optional[Union[RegisterOptions, Mapping[str, Any]]] = None,
        **overrides: Any,
    ) -> FieldBinding:
        """Bind a field to an input and return its value and event handlers.

        Every call installs the field's parser and reconciles its required
        flag. A field that stops being required while empty also loses its
        error, since that error most likely reported the missing value.

        The returned ``on_change`` always stores the new raw value, and only
        re-runs validation when the field is already in error. ``on_blur``
        validates the stored value and is a no-op for fields without a
        validator.

        Args:
            name: Field name
            options: RegisterOptions or mapping with camelCase/snake_case keys
            **overrides: Option values taking precedence over ``options``

        Returns:
            FieldBinding for the field

        Raises:
            TypeError: If an option name is not recognized
        """
        if isinstance(options, RegisterOptions):
            options = options.to_dict()
        opts = RegisterOptions.from_dict(options, **overrides)
        parse = resolve_parser(opts)
        self._parsers[name] = parse

        if opts.required and not self._required_fields.get(name):
            self._required_fields[name] = True
            self.dispatch(Action(ActionType.REQUIRED, {name: True}))

        if not opts.required and self._required_fields.get(name):
            self._required_fields[name] = False
            self.dispatch(Action(ActionType.REQUIRED, {name: False}))

            current = self._state.value.get(name)
            if (current is None or current == "") and self._state.error.get(name):
                self.clear_errors(name)

        async def on_change(event: Any) -> None:
            raw = read_target(event, opts.binary)
            self.dispatch(Action(ActionType.UPDATE, {name: raw}))

            validator = self.validators.get(name)
            if validator is None or not self._state.error.get(name):
                return

            self._parsed_values[name] = parse(raw)
            message = await run_validator(validator, self._merged_values(), False)
            self._record_validation(name, message)

        async def on_blur(event: Any = None) -> None:
            validator = self.validators.get(name)
            if validator is None:
                return

            self._parsed_values[name] = parse(self._state.value.get(name))
            message = await run_validator(
                validator, self._merged_values(), opts.run_async_check
            )
            self._record_validation(name, message)

        current = self._state.value.get(name)
        return FieldBinding(
            name=name,
            value=current if current is not None else "",
            required=opts.required,
            on_change=on_change,
            on_blur=on_blur,
        )

    # -- validation & submit --------------------------------------------------

    async def validate_all(self) -> ValidationResult:
        """Validate every validator-declared field without async checks.

        Each field's current value is parsed and cached before its validator
        is called. Fields that produced a message have it stored as their
        error; fields that passed keep their current error entry.

        Returns:
            ValidationResult with one message per declared field
        """
        def values_for(name: str) -> Values:
            parse = self._parsers.get(name, identity)
            self._parsed_values[name] = parse(self._state.value.get(name))
            return self._merged_values()

        result = await validate_fields(self.validators, values_for)
        for name, message in result.messages.items():
            if message:
                self._record_validation(name, message)
            else:
                self._emit(EventType.VALIDATION_PASSED, field=name)
        return result

    def handle_on_submit(self, on_submit: SubmitCallback) -> Callable[[Any], Any]:
        """Create a submit handler that only calls ``on_submit`` for a valid form.

        The handler prevents the event's default action, validates all fields
        and, when none produced a message, calls ``on_submit(values, event)``
        with values substituted by their parsed representation. Async checks
        are not run on submit; they belong to data entry, e.g. on blur.

        Args:
            on_submit: Callback receiving the parsed values and the event;
                awaited when it returns an awaitable

        Returns:
            Coroutine function taking the submit event and returning whether
            ``on_submit`` was called
        """
        async def handler(event: Any) -> bool:
            event.prevent_default()

            result = await self.validate_all()
            if not result.is_valid:
                logger.debug("Submit rejected, invalid fields: %s", result.invalid_fields)
                self._emit(EventType.SUBMISSION_REJECTED, payload={"errors": result.errors})
                return False

            values = self._submit_values()
            logger.debug("Submitting fields %s", list(values))
            self._emit(EventType.SUBMISSION_SUBMITTED, payload={"values": values})

            outcome = on_submit(values, event)
            if inspect.isawaitable(outcome):
                await outcome
            return True

        return handler

    # -- internals ------------------------------------------------------------

    def _merged_values(self) -> Values:
        return {**self._state.value, **self._parsed_values}

    def _submit_values(self) -> Values:
        values = dict(self._state.value)
        for name, raw in values.items():
            if raw is None:
                continue
            parsed = self._parsed_values.get(name)
            if parsed is None:
                parsed = self._parsers.get(name, identity)(raw)
            values[name] = parsed
        return values

    def _record_validation(self, name: str, message: ValidationMessage) -> None:
        self.dispatch(Action(ActionType.VALIDATE, {name: message}))
        if message:
            logger.debug("Field %s failed validation: %s", name, message)
            self._emit(EventType.VALIDATION_FAILED, field=name, payload={"message": message})
        else:
            self._emit(EventType.VALIDATION_PASSED, field=name)

    def _emit(
        self,
        event_type: EventType,
        field: Optional[str] = None,
        payload: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.emitter.emit(
            FormEvent(
                event_id=f"evt_{uuid.uuid4().hex[:16]}",
                type=event_type,
                ts=datetime.now(timezone.utc),
                field=field,
                payload=payload,
            )
        )


def create_form(
    config: Optional[Union[FormConfig, Mapping[str, Any]]] = None,
    emitter: Optional[EventEmitter] = None,
) -> FormEngine:
    """Create a FormEngine for a validator mapping or full configuration."""
    return FormEngine(config, emitter=emitter)


__all__ = [
    "FormEngine",
    "create_form",
    "ACTION_TO_EVENT_TYPE",
]
