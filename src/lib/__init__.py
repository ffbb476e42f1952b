"""
clformat - Common Lisp style format templates for Python

Parser, interpreter and supporting layers.
"""

__version__ = "0.3.0"
__author__ = "clformat developers"

from .parser import Parser, parse
from .interpreter import Interpreter
from .directives import DirectiveRegistry
from .cursor import ArgumentCursor
from .argument import Argument, Formattable
from .formatter import Template, template_compile, format
from .log import LOG, logger_install, state_connectToLogger

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
    "logger_install",
    "state_connectToLogger",
    "__version__",
]
