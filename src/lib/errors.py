"""
Error types raised while parsing and rendering templates

Two disjoint families:

- ParseError: the template itself is malformed. Raised before any output
  is produced and always carries the offending character offset.
- RenderError: the arguments do not fit the template. Raised while
  rendering; the render is aborted and any text produced so far is kept
  on the exception (``partial``) for diagnostics only.
"""

from typing import Optional


class FormatError(Exception):
    """Base class for every clformat error"""

    def __init__(self, message: str, position: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        self.position = position

    def __str__(self) -> str:
        if self.position is None:
            return self.message
        return f"{self.message} (at offset {self.position})"


class ParseError(FormatError):
    """
    Template could not be parsed

    Attributes:
        template: Template text being parsed
        context: Excerpt of the template with a caret under the error
    """

    def __init__(
        self,
        message: str,
        position: int,
        template: str = "",
        context: str = "",
    ) -> None:
        super().__init__(message, position)
        self.template = template
        self.context = context

    def __str__(self) -> str:
        text = super().__str__()
        if self.context:
            text += f"\n{self.context}"
        return text


class UnknownDirectiveError(ParseError):
    """Directive character is not registered"""
    pass


class UnmatchedDelimiterError(ParseError):
    """~{ ~} ~< ~> ~; do not pair up"""
    pass


class InvalidParameterError(ParseError):
    """Malformed parameter token, wrong parameter kind or unsupported modifier"""
    pass


class MisplacedEscapeError(ParseError):
    """~^ outside any iteration or justification"""
    pass


class RenderError(FormatError):
    """
    Template could not be rendered against the given arguments

    Attributes:
        directive: Directive being rendered when the error occurred (e.g. "~D")
        partial: Output produced before the failure; never a valid result
    """

    def __init__(
        self,
        message: str,
        position: Optional[int] = None,
        directive: str = "",
    ) -> None:
        super().__init__(message, position)
        self.directive = directive
        self.partial: Optional[str] = None


class ArgumentExhaustedError(RenderError):
    """A directive needed an argument but none remain"""
    pass


class TypeMismatchError(RenderError):
    """An argument lacks the capability a directive needs"""
    pass


class UnsupportedFormatError(RenderError):
    """Parameter combination or value the formatting primitives do not handle"""
    pass


class EscapeOutsideConstructError(RenderError):
    """~^ reached with no enclosing iteration or justification"""
    pass
