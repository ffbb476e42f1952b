"""
Parser for ~directive template syntax

Transforms a format template into an immutable directive tree.

The parser makes a single left-to-right pass:
1. Scanning: literal text runs up to the next '~'; each directive is read
   as marker, parameter list, modifiers and directive character
2. Structuring: ~{ and ~< push a frame on an explicit stack, the matching
   closer pops it into an Iteration or Justify node, ~; splits the
   innermost justification into segments

Key features:
- Parameters: signed integers, 'c characters, # (arguments left) and
  v (next argument), comma separated, any of them may be omitted
- Modifier flags ':' and '@'
- Bracket matching with the offset of the offending marker on error
- ~^ checked against the enclosing construct at parse time

Example:
    >>> tree = Parser("Items: ~{~A~^, ~}.").parse()
    >>> [type(node).__name__ for node in tree]
    ['Literal', 'Iteration', 'Literal']
"""

import string
from typing import List, Optional, Tuple, Type

from ..models.directives import CLOSERS, OPENERS, SEPARATOR, DirectiveCategory, DirectiveSpec
from ..models.parser import DirectiveToken, Frame
from ..models.tree import (
    Escape,
    Group,
    Iteration,
    Justify,
    Literal,
    Modifiers,
    Param,
    ParamKind,
    Simple,
    modifiers_describe,
)
from .errors import (
    InvalidParameterError,
    MisplacedEscapeError,
    ParseError,
    UnknownDirectiveError,
    UnmatchedDelimiterError,
)
from .log import LOG

MARKER = "~"

# Characters that can only continue a parameter list, never end a directive
PARAM_CHARS = string.digits + "'#+-vV"


class Parser:
    """
    Parser for format templates

    Handles:
    - Literal text and single-step directives (~A ~S ~D ~F ~* ~% ~~)
    - Nested ~{...~} iterations and ~<...~;...~> justifications
    - ~^ escapes and their enclosing-construct depth
    - ~<newline> whitespace skipping
    - Error reporting with character offsets and a caret excerpt
    """

    def __init__(self, template: str, registry=None):
        """
        Initialize parser with template text

        Args:
            template: Format template to parse
            registry: Optional DirectiveRegistry deciding which directives exist

        Attributes:
            template: Template text being parsed
            position: Current character offset (for scanning)
            stack: Open constructs, root frame at the bottom
            literal_parts: Pending literal text not yet turned into a node
            literal_start: Offset where the pending literal text began
            registry: DirectiveRegistry for validating directive characters
        """
        self.template = template
        self.position = 0
        self.stack: List[Frame] = []
        self.literal_parts: List[str] = []
        self.literal_start = 0

        # Import and create registry if not provided
        if registry is None:
            from .directives import DirectiveRegistry
            registry = DirectiveRegistry()
        self.registry = registry

    def parse(self) -> Group:
        """
        Parse template text into a directive tree

        Returns:
            Group holding the top-level directives. An empty template parses
            to an empty Group.

        Raises:
            ParseError: UnknownDirectiveError, UnmatchedDelimiterError,
                        InvalidParameterError or MisplacedEscapeError

        Example:
            >>> tree = Parser("~5D apples").parse()
            >>> tree.items[0].kind
            <DirectiveKind.DECIMAL: 'D'>
        """
        template = self.template
        self.position = 0
        self.stack = [Frame()]
        self.literal_parts = []

        while self.position < len(template):
            marker = template.find(MARKER, self.position)
            if marker == -1:
                self.literal_append(template[self.position:], self.position)
                break
            if marker > self.position:
                self.literal_append(template[self.position:marker], self.position)

            token = self.directive_scan(marker)
            self.position = token.end
            self.token_dispatch(token)

        self.literal_flush()

        if len(self.stack) > 1:
            opener = self.stack[-1].opener
            self.error(
                UnmatchedDelimiterError,
                f"{opener.name} is never closed",
                opener.position,
            )

        root = Group(tuple(self.stack[0].items))
        LOG(f"Parsed {len(template)} characters into {len(root)} top-level nodes", level=3)
        return root

    def directive_scan(self, start: int) -> DirectiveToken:
        """
        Read one directive starting at the '~' at offset start

        Returns:
            DirectiveToken with parameters, modifiers and directive character

        Raises:
            UnknownDirectiveError: If the template ends before the directive character
        """
        params, pos = self.params_scan(start + 1)
        modifiers, pos = self.modifiers_scan(pos)

        if pos >= len(self.template):
            self.error(UnknownDirectiveError, "template ends inside a directive", start)

        return DirectiveToken(
            char=self.template[pos],
            params=tuple(params),
            modifiers=modifiers,
            position=start,
            end=pos + 1,
        )

    def params_scan(self, pos: int) -> Tuple[List[Param], int]:
        """
        Read a comma-separated parameter list

        An empty slot before a comma is an omitted parameter, so "~,2F"
        yields [OMITTED, 2] and "~5,D" yields [5, OMITTED].

        Returns:
            (parameters, offset after the list)
        """
        params: List[Param] = []
        template = self.template

        while True:
            param, pos = self.param_scan(pos)
            if pos < len(template) and template[pos] == ",":
                params.append(param or Param(ParamKind.OMITTED, position=pos))
                pos += 1
                continue
            if param is None and params:
                # Slot after a trailing comma
                params.append(Param(ParamKind.OMITTED, position=pos))
            elif param is not None:
                if pos < len(template) and template[pos] in PARAM_CHARS:
                    self.error(
                        InvalidParameterError,
                        f"expected ',' between parameters, found {template[pos]!r}",
                        pos,
                    )
                params.append(param)
            return params, pos

    def param_scan(self, pos: int) -> Tuple[Optional[Param], int]:
        """
        Read a single parameter token, if one starts at pos

        Returns:
            (Param or None when no parameter starts here, offset after it)
        """
        template = self.template
        if pos >= len(template):
            return None, pos

        char = template[pos]
        if char in "+-" or char in string.digits:
            end = pos + 1
            while end < len(template) and template[end] in string.digits:
                end += 1
            text = template[pos:end]
            if text in ("+", "-"):
                self.error(InvalidParameterError, f"sign {text!r} without digits", pos)
            return Param(ParamKind.INTEGER, int(text), pos), end

        if char == "'":
            if pos + 1 >= len(template):
                self.error(InvalidParameterError, "character parameter missing after quote", pos)
            return Param(ParamKind.CHARACTER, template[pos + 1], pos), pos + 2

        if char in "vV":
            return Param(ParamKind.NEXT_ARGUMENT, position=pos), pos + 1

        if char == "#":
            return Param(ParamKind.REMAINING, position=pos), pos + 1

        return None, pos

    def modifiers_scan(self, pos: int) -> Tuple[Modifiers, int]:
        """Read ':' and '@' flags; each may appear once, in any order"""
        modifiers = Modifiers.NONE
        template = self.template

        while pos < len(template) and template[pos] in ":@":
            flag = Modifiers.COLON if template[pos] == ":" else Modifiers.AT
            if flag in modifiers:
                self.error(InvalidParameterError, f"repeated modifier {template[pos]!r}", pos)
            modifiers |= flag
            pos += 1

        return modifiers, pos

    def token_dispatch(self, token: DirectiveToken) -> None:
        """Turn a scanned directive into tree structure"""
        spec = self.registry.get(token.char)
        if spec is None:
            self.error(UnknownDirectiveError, f"unknown directive {token.name!r}", token.position)

        self.token_validate(token, spec)

        if spec.category == DirectiveCategory.WHITESPACE:
            self.whitespace_skip(token)
        elif spec.category == DirectiveCategory.STRUCTURAL:
            if token.char in OPENERS:
                self.frame_push(token)
            elif token.char in CLOSERS:
                self.frame_pop(token)
            elif token.char == SEPARATOR:
                self.segment_split(token)
        elif spec.category == DirectiveCategory.ESCAPE:
            self.escape_add(token)
        else:
            self.node_add(Simple(spec.kind, token.params, token.modifiers, token.position))

    def token_validate(self, token: DirectiveToken, spec: DirectiveSpec) -> None:
        """
        Check parameter count, literal parameter kinds and modifiers

        Argument-sourced parameters (v and #) are checked when rendering.

        Raises:
            InvalidParameterError: On any mismatch with the directive's spec
        """
        if len(token.params) > len(spec.params):
            extra = token.params[len(spec.params)]
            self.error(
                InvalidParameterError,
                f"{spec.name} takes at most {len(spec.params)} parameter(s), got {len(token.params)}",
                extra.position,
            )

        for param, param_spec in zip(token.params, spec.params):
            if not param.literal:
                continue
            if not param_spec.accepts(param.value):
                self.error(
                    InvalidParameterError,
                    f"{spec.name} parameter '{param_spec.name}' must be {param_spec.type.value}, "
                    f"got {param.value!r}",
                    param.position,
                )
            if not param_spec.inRange(param.value):
                self.error(
                    InvalidParameterError,
                    f"{spec.name} parameter '{param_spec.name}' must be at least "
                    f"{param_spec.minimum}, got {param.value}",
                    param.position,
                )

        unsupported = token.modifiers & ~spec.modifiers
        if unsupported:
            self.error(
                InvalidParameterError,
                f"{spec.name} does not accept the '{modifiers_describe(unsupported)}' modifier",
                token.position,
            )

    def whitespace_skip(self, token: DirectiveToken) -> None:
        """
        Handle ~<newline>

        Plain: drop the newline and the indentation after it.
        ':' keeps the indentation, '@' keeps the newline.
        """
        if Modifiers.AT in token.modifiers:
            self.literal_append("\n", token.position)
        if Modifiers.COLON in token.modifiers:
            return

        pos = token.end
        template = self.template
        while pos < len(template) and template[pos] != "\n" and template[pos].isspace():
            pos += 1
        self.position = pos

    def frame_push(self, token: DirectiveToken) -> None:
        """Open a ~{ or ~< construct"""
        self.literal_flush()
        self.stack.append(Frame(opener=token))

    def frame_pop(self, token: DirectiveToken) -> None:
        """
        Close the innermost construct with ~} or ~>

        Raises:
            UnmatchedDelimiterError: If the closer does not match the innermost opener
            UnknownDirectiveError: For ~{~} (an empty body means an indirect
                                   template, which is not supported)
        """
        self.literal_flush()
        frame = self.stack[-1]
        expected = CLOSERS[token.char]

        if frame.opener is None:
            self.error(
                UnmatchedDelimiterError,
                f"{token.name} without a matching ~{expected}",
                token.position,
            )
        if frame.char != expected:
            self.error(
                UnmatchedDelimiterError,
                f"{token.name} cannot close {frame.opener.name} opened at offset {frame.opener.position}",
                token.position,
            )

        self.stack.pop()
        opener = frame.opener

        if opener.char == "{":
            body = frame.segments[0]
            if not body:
                self.error(
                    UnknownDirectiveError,
                    "~{~} with an empty body (indirect template) is not supported",
                    opener.position,
                )
            node = Iteration(
                body=Group(tuple(body)),
                params=opener.params,
                modifiers=opener.modifiers,
                at_least_once=Modifiers.COLON in token.modifiers,
                position=opener.position,
            )
        else:
            node = Justify(
                segments=tuple(Group(tuple(segment)) for segment in frame.segments),
                params=opener.params,
                modifiers=opener.modifiers,
                position=opener.position,
            )

        self.node_add(node)

    def segment_split(self, token: DirectiveToken) -> None:
        """Start a new segment of the innermost ~< construct"""
        self.literal_flush()
        frame = self.stack[-1]
        if frame.char != "<":
            self.error(UnmatchedDelimiterError, "~; outside ~<...~>", token.position)
        frame.segments.append([])

    def escape_add(self, token: DirectiveToken) -> None:
        """
        Add a ~^ node tagged with the depth of its enclosing construct

        Raises:
            MisplacedEscapeError: If no construct encloses the escape
            InvalidParameterError: For ~:^ not directly inside ~:{...~}
        """
        depth = len(self.stack) - 1
        if depth == 0:
            self.error(MisplacedEscapeError, "~^ outside ~{...~} or ~<...~>", token.position)

        if Modifiers.COLON in token.modifiers:
            frame = self.stack[-1]
            if frame.char != "{" or Modifiers.COLON not in frame.opener.modifiers:
                self.error(
                    InvalidParameterError,
                    "~:^ is only valid directly inside ~:{...~}",
                    token.position,
                )

        self.node_add(Escape(token.params, token.modifiers, depth, token.position))

    def node_add(self, node) -> None:
        self.literal_flush()
        self.stack[-1].items.append(node)

    def literal_append(self, text: str, start: int) -> None:
        if not self.literal_parts:
            self.literal_start = start
        self.literal_parts.append(text)

    def literal_flush(self) -> None:
        if self.literal_parts:
            text = "".join(self.literal_parts)
            self.stack[-1].items.append(Literal(text, self.literal_start))
            self.literal_parts = []

    def error(self, error_class: Type[ParseError], message: str, position: int) -> None:
        """
        Report parser error with template context

        Raises the given ParseError subclass with:
        - Custom error message
        - Character offset
        - Template excerpt (±40 characters around the error)
        - Caret indicator pointing to the error position

        Raises:
            ParseError: Always (this is an error reporting function)

        Example output:
            UnmatchedDelimiterError: ~{ is never closed (at offset 7)
              Items: ~{~A,
                     ^
        """
        context_start = max(0, position - 40)
        context_end = min(len(self.template), position + 40)
        excerpt = self.template[context_start:context_end].replace("\n", " ")
        context = f"  {excerpt}\n  {' ' * (position - context_start)}^"

        LOG(f"{error_class.__name__}: {message} at offset {position}", level=2)
        raise error_class(message, position, self.template, context)


def parse(template: str, registry=None) -> Group:
    """Parse a template with a fresh Parser"""
    return Parser(template, registry=registry).parse()
