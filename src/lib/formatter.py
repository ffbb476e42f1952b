"""
Public formatting entry points

Ties the parser, interpreter and template cache together:

- Template: a parsed template, reusable against many argument lists
- template_compile(): Template for a text, served from the shared cache
- format(): parse (cached) and render in one call, returning the text or
  writing it to a stream

Example:
    >>> format("~{~A~^, ~}", [1, 2, 3])
    '1, 2, 3'
"""

from typing import Any, Optional, TextIO

from ..config import appsettings
from ..models.tree import Group
from .cache import TemplateCache
from .cursor import ArgumentCursor
from .directives import DirectiveRegistry
from .interpreter import Interpreter
from .parser import Parser


class Template:
    """
    A parsed template

    Parsing happens once, in the constructor, so malformed templates fail
    before any argument is looked at. The tree is immutable and render()
    uses a fresh cursor per call, so a Template may be shared between
    threads.

    Attributes:
        text: Template source text
        tree: Parsed directive tree
    """

    def __init__(self, text: str, registry: Optional[DirectiveRegistry] = None) -> None:
        """
        Args:
            text: Template source text
            registry: Directive set to parse and render with (defaults to the built-ins)

        Raises:
            ParseError: If the template is malformed
        """
        self.registry = registry or default_registry
        self.text = text
        self.tree: Group = Parser(text, registry=self.registry).parse()
        self.interpreter = Interpreter(registry=self.registry)

    def __repr__(self) -> str:
        return f"Template({self.text!r})"

    def render(self, *args: Any) -> str:
        """
        Render the template against positional arguments

        Raises:
            RenderError: If the arguments do not fit the template
        """
        return self.interpreter.render(self.tree, ArgumentCursor(args))


default_registry = DirectiveRegistry()
template_cache: TemplateCache[Template] = TemplateCache(maxsize=appsettings.cache_maxsize)


def template_compile(text: str) -> Template:
    """
    Parsed Template for text, shared through the template cache

    Raises:
        ParseError: If the template is malformed (not cached)
    """
    return template_cache.get_orCreate(text, Template)


def format(template: str, *args: Any, destination: Optional[TextIO] = None) -> Optional[str]:
    """
    Render a format template against arguments

    Args:
        template: Template text, e.g. "~A scored ~,1F"
        *args: Arguments consumed by the template's directives
        destination: None to return the text, or a writable text stream

    Returns:
        Rendered text when destination is None, else None

    Raises:
        ParseError: If the template is malformed
        RenderError: If the arguments do not fit; nothing is written to
                     destination in that case

    Example:
        >>> format("~A: ~5D", "total", 42)
        'total:    42'
    """
    text = template_compile(template).render(*args)
    if destination is None:
        return text
    destination.write(text)
    return None
