"""
Argument cursor

Read-once view over the caller's arguments for a single render pass. The
position only moves forward; peeking past the end is allowed and returns
None so escape checks can look ahead without consuming anything.
"""

from typing import Any, Optional, Sequence

from .argument import Formattable, argument_wrap
from .errors import ArgumentExhaustedError


class ArgumentCursor:
    """
    Stateful read pointer over an argument sequence

    A cursor is created per render and must not be shared between
    concurrent renders. Values are wrapped into Formattable arguments as
    they are read.

    Example:
        >>> cursor = ArgumentCursor(["a", 1])
        >>> cursor.remaining()
        2
        >>> cursor.advance().format_machine()
        '"a"'
        >>> cursor.remaining()
        1
    """

    def __init__(self, arguments: Sequence[Any] = ()) -> None:
        self.arguments = arguments
        self.position = 0

    def __repr__(self) -> str:
        return f"ArgumentCursor(position={self.position}, remaining={self.remaining()})"

    def remaining(self) -> int:
        """Number of arguments not yet consumed"""
        return max(len(self.arguments) - self.position, 0)

    @property
    def exhausted(self) -> bool:
        return self.remaining() == 0

    def peek(self) -> Optional[Formattable]:
        """Next argument without consuming it, or None at the end"""
        if self.exhausted:
            return None
        return argument_wrap(self.arguments[self.position])

    def advance(self) -> Formattable:
        """
        Consume and return the next argument

        Raises:
            ArgumentExhaustedError: If no arguments remain
        """
        if self.exhausted:
            raise ArgumentExhaustedError(
                f"argument {self.position + 1} requested but only "
                f"{len(self.arguments)} supplied"
            )
        argument = argument_wrap(self.arguments[self.position])
        self.position += 1
        return argument
