"""
Directive specification and metadata models

Defines the structure and categories of format directives for parameter
validation, dispatch and registry management.
"""

from enum import Enum
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Tuple, Union

from .tree import DirectiveKind, Modifiers


class DirectiveCategory(Enum):
    """
    Categories of format directives

    The parser uses the category to decide how a directive character is
    turned into a tree node.
    """
    PRINTING = "printing"        # ~A, ~S
    NUMERIC = "numeric"          # ~D, ~F
    CONTROL = "control"          # ~*, ~%, ~~
    STRUCTURAL = "structural"    # ~{ ~} ~< ~> ~;
    ESCAPE = "escape"            # ~^
    WHITESPACE = "whitespace"    # ~<newline>


class ParamType(Enum):
    """Value type a directive parameter accepts"""
    INTEGER = "integer"
    CHARACTER = "character"
    ANY = "any"


@dataclass(frozen=True)
class ParamSpec:
    """
    Specification of one positional directive parameter

    Attributes:
        name: Parameter name used in error messages (e.g. "mincol")
        type: Accepted value type
        default: Value used when the parameter is omitted
        minimum: Smallest integer accepted, or None for no bound
    """
    name: str
    type: ParamType
    default: Union[int, str, None] = None
    minimum: Optional[int] = 0

    def accepts(self, value: Union[int, str]) -> bool:
        """Check the type of a literal or argument-sourced value"""
        if isinstance(value, bool):
            return False
        if isinstance(value, int):
            return self.type in (ParamType.INTEGER, ParamType.ANY)
        if isinstance(value, str) and len(value) == 1:
            return self.type in (ParamType.CHARACTER, ParamType.ANY)
        return False

    def inRange(self, value: Union[int, str]) -> bool:
        if isinstance(value, int) and self.minimum is not None:
            return value >= self.minimum
        return True


@dataclass
class DirectiveSpec:
    """
    Specification for a format directive

    Defines metadata, validation rules, and handler for a directive.
    Used by DirectiveRegistry to manage available directives.

    Attributes:
        char: Directive character, upper case (e.g. "A", "{", "%")
        category: Category for dispatch
        description: Human-readable description
        params: Positional parameters in order
        modifiers: Modifier symbols the directive accepts
        kind: DirectiveKind for single-step directives, None for constructs
        handler: Rendering function (call) -> str for single-step directives
        examples: Example usage strings
    """
    char: str
    category: DirectiveCategory
    description: str
    params: Tuple[ParamSpec, ...] = ()
    modifiers: Modifiers = Modifiers.NONE
    kind: Optional[DirectiveKind] = None
    handler: Optional[Callable[..., str]] = None
    examples: List[str] = field(default_factory=list)

    @property
    def name(self) -> str:
        return f"~{self.char}"


# Directive characters that open or close bracketed constructs
OPENERS = {"{": "}", "<": ">"}
CLOSERS = {"}": "{", ">": "<"}
SEPARATOR = ";"
