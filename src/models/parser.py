"""
Parser-specific data models

Type-safe structures for parser operations and return values.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple, TYPE_CHECKING

from .tree import Modifiers, Param

if TYPE_CHECKING:
    from .tree import Directive


@dataclass
class DirectiveToken:
    """
    Result of scanning one ~directive in the template

    Returned by Parser.directive_scan() after reading the marker, the
    parameter list, the modifiers and the directive character.

    Attributes:
        char: Directive character as written (case preserved)
        params: Parsed parameter list
        modifiers: ':' / '@' flags
        position: Offset of the '~'
        end: Offset just past the directive character

    Example:
        For template "x~5,'0:D" the token at position 1 is
        DirectiveToken(char="D", params=(Param(INTEGER, 5), Param(CHARACTER, "0")),
                       modifiers=Modifiers.COLON, position=1, end=8)
    """
    char: str
    params: Tuple[Param, ...]
    modifiers: Modifiers
    position: int
    end: int

    @property
    def name(self) -> str:
        return f"~{self.char}"


@dataclass
class Frame:
    """
    Open bracketed construct on the parser stack

    The root of the template is the bottom frame with no opener. Each
    ~{ or ~< pushes a frame; the matching closer pops it and turns its
    segments into an Iteration or Justify node.

    Attributes:
        opener: Token that opened the construct, None for the root
        segments: Directive lists, one per ~; clause (iterations have one)
    """
    opener: Optional[DirectiveToken] = None
    segments: List[List["Directive"]] = field(default_factory=lambda: [[]])

    @property
    def items(self) -> List["Directive"]:
        """Directive list currently being filled"""
        return self.segments[-1]

    @property
    def char(self) -> Optional[str]:
        return self.opener.char if self.opener else None
