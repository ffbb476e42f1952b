"""
clformat - Common Lisp style format templates for Python

A template such as "~{~A~^, ~}" is parsed once into a directive tree and
rendered against positional arguments:

    >>> import clformat
    >>> clformat.format("~{~A~^, ~}", ["ook", "onk", "nork"])
    'ook, onk, nork'
"""

__version__ = "0.3.0"
__author__ = "clformat developers"

from .lib import (
    Parser,
    parse,
    Interpreter,
    DirectiveRegistry,
    ArgumentCursor,
    Argument,
    Formattable,
    Template,
    template_compile,
    format,
    LOG,
    state_connectToLogger,
)
from .lib.errors import (
    FormatError,
    ParseError,
    UnknownDirectiveError,
    UnmatchedDelimiterError,
    InvalidParameterError,
    MisplacedEscapeError,
    RenderError,
    ArgumentExhaustedError,
    TypeMismatchError,
    UnsupportedFormatError,
    EscapeOutsideConstructError,
)

__all__ = [
    "Parser",
    "parse",
    "Interpreter",
    "DirectiveRegistry",
    "ArgumentCursor",
    "Argument",
    "Formattable",
    "Template",
    "template_compile",
    "format",
    "LOG",
    "state_connectToLogger",
    "FormatError",
    "ParseError",
    "UnknownDirectiveError",
    "UnmatchedDelimiterError",
    "InvalidParameterError",
    "MisplacedEscapeError",
    "RenderError",
    "ArgumentExhaustedError",
    "TypeMismatchError",
    "UnsupportedFormatError",
    "EscapeOutsideConstructError",
    "__version__",
]
