"""Field registration options and bindings.

``FormEngine.register`` takes RegisterOptions (or an equivalent mapping) and
returns a FieldBinding: everything an input element needs to display a field
and report changes back to the engine.
"""

from dataclasses import dataclass, field, fields
from typing import Any, Awaitable, Callable, Dict, Mapping, Optional

from formstate.parsers import identity, parse_int, parse_number
from formstate.types import Parser

# camelCase option names accepted from mappings, mapped to attribute names
OPTION_ALIASES: Dict[str, str] = {
    "runAsyncCheck": "run_async_check",
    "parseAsInt": "parse_as_int",
    "parseAsNumber": "parse_as_number",
}


@dataclass(frozen=True)
class RegisterOptions:
    """Options controlling how a field is bound.

    Attributes:
        required: Whether blankness alone makes the form invalid
        binary: Read ``target.checked`` instead of ``target.value`` on change
        run_async_check: Flag passed to the validator on blur
        parser: Parser applied before validation and submit
        parse_as_int: Parse as an integer; supersedes parse_as_number and parser
        parse_as_number: Parse as a number; supersedes parser

    Examples:
        >>> opts = RegisterOptions.from_dict({"required": True, "parseAsInt": True})
        >>> opts.parse_as_int
        True
        >>> opts.to_dict()["parseAsInt"]
        True
    """
    required: bool = False
    binary: bool = False
    run_async_check: bool = False
    parser: Parser = field(default=identity, compare=False)
    parse_as_int: bool = False
    parse_as_number: bool = False

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]] = None, **overrides: Any) -> "RegisterOptions":
        """Create RegisterOptions from camelCase or snake_case keys.

        Keyword overrides take precedence over the mapping.

        Raises:
            TypeError: If an option name is not recognized
        """
        known = {f.name for f in fields(cls)}
        kwargs: Dict[str, Any] = {}
        unknown = []
        for key, value in {**(data or {}), **overrides}.items():
            name = OPTION_ALIASES.get(key, key)
            if name not in known:
                unknown.append(key)
                continue
            kwargs[name] = value

        if unknown:
            raise TypeError(
                f"Unknown register option(s): {', '.join(sorted(unknown))}"
            )
        if kwargs.get("parser") is None:
            kwargs.pop("parser", None)
        return cls(**kwargs)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dict using camelCase option names."""
        return {
            "required": self.required,
            "binary": self.binary,
            "runAsyncCheck": self.run_async_check,
            "parser": self.parser,
            "parseAsInt": self.parse_as_int,
            "parseAsNumber": self.parse_as_number,
        }


def resolve_parser(options: RegisterOptions) -> Parser:
    """Pick the parser for a field: parse_as_int, then parse_as_number, then parser."""
    if options.parse_as_int:
        return parse_int
    if options.parse_as_number:
        return parse_number
    return options.parser


def read_target(event: Any, binary: bool = False) -> Any:
    """Read the raw input value carried by a change event.

    The event's ``target`` may expose ``value``/``checked`` as attributes or as
    mapping keys. Missing properties read as None.
    """
    target = event["target"] if isinstance(event, Mapping) else getattr(event, "target")
    prop = "checked" if binary else "value"
    if isinstance(target, Mapping):
        return target.get(prop)
    return getattr(target, prop, None)


@dataclass(frozen=True)
class FieldBinding:
    """Value and handlers for one registered input.

    Attributes:
        name: Field name
        value: Current raw value, or "" when unset
        required: Whether the field was registered as required
        on_change: Coroutine function taking a change event
        on_blur: Coroutine function taking an optional blur event
    """
    name: str
    value: Any
    required: bool
    on_change: Callable[[Any], Awaitable[None]] = field(repr=False, compare=False)
    on_blur: Callable[..., Awaitable[None]] = field(repr=False, compare=False)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the props mapping an input element expects."""
        return {
            "name": self.name,
            "value": self.value,
            "required": self.required,
            "onChange": self.on_change,
            "onBlur": self.on_blur,
        }


__all__ = [
    "RegisterOptions",
    "FieldBinding",
    "resolve_parser",
    "read_target",
]
