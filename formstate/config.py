"""Form configuration resolution.

A form is configured either with a bare mapping of field name to validator,
or with a mapping holding ``validators`` and/or ``initialValues``
(``initial_values`` is accepted too). FormConfig normalizes both shapes.

Usage:
    >>> config = FormConfig.from_value({"name": lambda form, run_async_check: None})
    >>> config.fields
    ['name']
    >>> FormConfig.from_value({"initialValues": {"city": "Oslo"}}).initial_values
    {'city': 'Oslo'}
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from formstate.errors import FormConfigError
from formstate.types import Validator, Values

VALIDATORS_KEY = "validators"
INITIAL_VALUES_KEYS = ("initialValues", "initial_values")


@dataclass(frozen=True)
class FormConfig:
    """Resolved form configuration.

    Attributes:
        validators: Field name to validator, in declaration order
        initial_values: Field name to initial raw value
    """
    validators: Dict[str, Validator] = field(default_factory=dict)
    initial_values: Values = field(default_factory=dict)

    def __post_init__(self):
        for name, validator in self.validators.items():
            if not callable(validator):
                raise FormConfigError(
                    f"Validator for field '{name}' must be callable, "
                    f"got {type(validator).__name__}",
                    field=name,
                )

    @property
    def fields(self) -> List[str]:
        """Validator-declared field names in declaration order."""
        return list(self.validators)

    @classmethod
    def from_value(cls, config: Optional[Any] = None) -> "FormConfig":
        """Resolve any accepted configuration shape into a FormConfig.

        If a ``validators`` key is present it supplies the validators. Otherwise,
        if an initial values key is present, there are no validators. Otherwise
        the whole mapping is the validator map.

        Args:
            config: A FormConfig, a mapping, or None for an empty form

        Returns:
            The resolved FormConfig

        Raises:
            FormConfigError: If config is not a mapping or a validator is not callable
        """
        if config is None:
            return cls()
        if isinstance(config, FormConfig):
            return config
        if not isinstance(config, Mapping):
            raise FormConfigError(
                f"Form configuration must be a mapping, got {type(config).__name__}"
            )

        initial_values: Values = {}
        for key in INITIAL_VALUES_KEYS:
            if key in config:
                initial_values = dict(config[key] or {})
                break

        if VALIDATORS_KEY in config:
            validators = dict(config[VALIDATORS_KEY] or {})
        elif any(key in config for key in INITIAL_VALUES_KEYS):
            validators = {}
        else:
            validators = dict(config)

        return cls(validators=validators, initial_values=initial_values)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dict using the camelCase configuration keys."""
        return {
            "validators": dict(self.validators),
            "initialValues": dict(self.initial_values),
        }


__all__ = [
    "FormConfig",
]
