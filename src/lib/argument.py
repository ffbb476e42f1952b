"""
Argument capabilities

Directives never look at concrete argument types. They ask an argument for
a capability instead:

- format_human()   - text for ~A
- format_machine() - quoted, re-readable text for ~S
- as_integer()     - integer value for ~D and integer parameters (optional)
- as_float()       - floating point value for ~F (optional)
- as_sequence()    - elements for ~{ iteration (optional)

The optional methods return None when the argument cannot provide the value.
Plain Python values are wrapped in Argument, which implements all of them;
any other object that provides format_human() and format_machine() is used
as is.
"""

import numbers
from collections.abc import Iterable, Mapping
from typing import Any, Optional, Protocol, Sequence, runtime_checkable


@runtime_checkable
class Formattable(Protocol):
    """Minimal capability set every argument must provide"""

    def format_human(self) -> str:
        ...

    def format_machine(self) -> str:
        ...


def string_quote(text: str) -> str:
    r"""
    Quote a string for machine-readable output

    Example:
        >>> string_quote('say "hi"')
        '"say \\"hi\\""'
    """
    escaped = text.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


class Argument:
    """
    Formattable adapter around a native Python value

    Strings render bare for ~A and quoted for ~S. Lists, tuples and other
    non-string iterables render element by element in brackets and can be
    iterated by ~{. Booleans are not numbers here: ~D of True is a type
    mismatch rather than "1".
    """

    __slots__ = ("value",)

    def __init__(self, value: Any) -> None:
        self.value = value

    def __repr__(self) -> str:
        return f"Argument({self.value!r})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Argument):
            return self.value == other.value
        return NotImplemented

    def format_human(self) -> str:
        value = self.value
        if isinstance(value, str):
            return value
        if isinstance(value, Mapping):
            pairs = (f"{argument_wrap(k).format_human()}: {argument_wrap(v).format_human()}"
                     for k, v in value.items())
            return "{" + ", ".join(pairs) + "}"
        elements = self.as_sequence()
        if elements is not None:
            return "[" + ", ".join(element.format_human() for element in elements) + "]"
        return str(value)

    def format_machine(self) -> str:
        value = self.value
        if isinstance(value, str):
            return string_quote(value)
        if isinstance(value, Mapping):
            pairs = (f"{argument_wrap(k).format_machine()}: {argument_wrap(v).format_machine()}"
                     for k, v in value.items())
            return "{" + ", ".join(pairs) + "}"
        elements = self.as_sequence()
        if elements is not None:
            return "[" + ", ".join(element.format_machine() for element in elements) + "]"
        return repr(value)

    def as_integer(self) -> Optional[int]:
        value = self.value
        if isinstance(value, bool) or not isinstance(value, numbers.Integral):
            return None
        return int(value)

    def as_float(self) -> Optional[float]:
        value = self.value
        if isinstance(value, bool) or not isinstance(value, numbers.Real):
            return None
        return float(value)

    def as_sequence(self) -> Optional[Sequence["Formattable"]]:
        value = self.value
        if isinstance(value, (str, bytes, bytearray, Mapping)):
            return None
        if not isinstance(value, Iterable):
            return None
        # Materialize once so generators are not drained by a second call
        if not isinstance(value, (list, tuple, range)):
            value = self.value = tuple(value)
        return [argument_wrap(element) for element in value]


def argument_wrap(value: Any) -> Formattable:
    """
    Return value itself if it is Formattable, else wrap it in Argument

    Example:
        >>> argument_wrap(42).format_human()
        '42'
        >>> argument_wrap("x").format_machine()
        '"x"'
    """
    if isinstance(value, Formattable):
        return value
    return Argument(value)


def argument_unwrap(argument: Formattable) -> Any:
    """Native value behind an argument (the argument itself for custom types)"""
    if isinstance(argument, Argument):
        return argument.value
    return argument
