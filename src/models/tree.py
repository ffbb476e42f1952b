"""
Directive tree models

Immutable node types produced by the Parser and walked by the Interpreter.
Every node is a frozen dataclass holding tuples only, so a parsed tree can be
cached and shared between threads; all per-render state lives in the
ArgumentCursor.
"""

from enum import Enum, Flag
from dataclasses import dataclass, field
from typing import Optional, Tuple, Union


class Modifiers(Flag):
    """Modifier symbols written between the parameters and the directive character"""
    NONE = 0
    COLON = 1   # ':'
    AT = 2      # '@'


class ParamKind(Enum):
    """How a directive parameter obtains its value"""
    OMITTED = "omitted"            # ~,2F - first parameter left empty
    INTEGER = "integer"            # ~5D
    CHARACTER = "character"        # ~5,'0D
    NEXT_ARGUMENT = "argument"     # ~vD - take the next argument
    REMAINING = "remaining"        # ~#D - number of arguments left


class DirectiveKind(Enum):
    """Kinds of single-step directives; the value is the directive character"""
    HUMAN_READABLE = "A"
    MACHINE_READABLE = "S"
    DECIMAL = "D"
    FIXED_FLOAT = "F"
    SKIP = "*"
    NEWLINE = "%"
    TILDE = "~"


@dataclass(frozen=True)
class Param:
    """
    One entry of a directive's parameter list

    Attributes:
        kind: Where the value comes from
        value: Integer or single character for literal parameters, else None
        position: Character offset of the parameter in the template
    """
    kind: ParamKind
    value: Union[int, str, None] = None
    position: int = 0

    @property
    def literal(self) -> bool:
        return self.kind in (ParamKind.INTEGER, ParamKind.CHARACTER)


@dataclass(frozen=True)
class Literal:
    """Raw template text emitted verbatim"""
    text: str
    position: int = 0


@dataclass(frozen=True)
class Simple:
    """
    A directive that renders in one step (~A, ~S, ~D, ~F, ~*, ~%, ~~)

    Attributes:
        kind: Which directive this is
        params: Parameter list as written in the template
        modifiers: ':' / '@' flags
        position: Offset of the '~' that starts the directive
    """
    kind: DirectiveKind
    params: Tuple[Param, ...] = ()
    modifiers: Modifiers = Modifiers.NONE
    position: int = 0

    @property
    def name(self) -> str:
        return f"~{self.kind.value}"


@dataclass(frozen=True)
class Group:
    """Ordered sequence of directives: a template root or a construct body"""
    items: Tuple["Directive", ...] = ()

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self):
        return iter(self.items)


@dataclass(frozen=True)
class Iteration:
    """
    ~{body~} - render body once per element of an argument source

    Attributes:
        body: Directives rendered on every pass
        params: Optional maximum number of passes
        modifiers: ':' iterates over sublists, '@' uses the remaining arguments
        at_least_once: Closed with ~:} - run one pass even on an empty source
        position: Offset of the opening '~{'
    """
    body: Group
    params: Tuple[Param, ...] = ()
    modifiers: Modifiers = Modifiers.NONE
    at_least_once: bool = False
    position: int = 0

    @property
    def name(self) -> str:
        return "~{"


@dataclass(frozen=True)
class Justify:
    """
    ~<segment~;segment~> - pad rendered segments out to a column width

    Attributes:
        segments: One Group per clause separated by ~;
        params: mincol, colinc, minpad, padchar
        modifiers: ':' pads before the first segment, '@' after the last
        position: Offset of the opening '~<'
    """
    segments: Tuple[Group, ...] = field(default_factory=lambda: (Group(),))
    params: Tuple[Param, ...] = ()
    modifiers: Modifiers = Modifiers.NONE
    position: int = 0

    @property
    def name(self) -> str:
        return "~<"


@dataclass(frozen=True)
class Escape:
    """
    ~^ - leave the nearest enclosing iteration or justification

    Attributes:
        params: Up to three values that replace the "no arguments left" test
        modifiers: ':' leaves a whole ~:{ loop instead of the current pass
        depth: Nesting depth of the construct this escape belongs to
        position: Offset of the '~^'
    """
    params: Tuple[Param, ...] = ()
    modifiers: Modifiers = Modifiers.NONE
    depth: int = 0
    position: int = 0

    @property
    def name(self) -> str:
        return "~^"


Directive = Union[Literal, Simple, Iteration, Justify, Escape, Group]


def modifiers_describe(modifiers: Optional[Modifiers]) -> str:
    """Render a modifier set the way it is written in a template"""
    if not modifiers:
        return ""
    text = ""
    if Modifiers.COLON in modifiers:
        text += ":"
    if Modifiers.AT in modifiers:
        text += "@"
    return text
