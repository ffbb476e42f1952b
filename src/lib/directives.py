"""
Directive implementations for clformat

Each single-step directive is a DirectiveSpec whose handler turns a
DirectiveCall into text. Bracketed constructs and ~^ are registered too so
the parser can validate their parameters and modifiers, but they are
rendered by the Interpreter itself.

Adding a directive means registering one more spec here; neither the
parser nor the interpreter has to change.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from ..config import appsettings
from ..models.directives import DirectiveSpec, DirectiveCategory, ParamSpec, ParamType
from ..models.tree import DirectiveKind, Modifiers, Simple
from . import primitives
from .argument import Formattable
from .cursor import ArgumentCursor
from .errors import ArgumentExhaustedError, TypeMismatchError, UnsupportedFormatError


@dataclass
class DirectiveCall:
    """
    One invocation of a single-step directive during a render

    Attributes:
        node: Directive being rendered
        params: Resolved parameter values, defaults applied
        cursor: Cursor the directive consumes from
    """
    node: Simple
    params: List[Any]
    cursor: ArgumentCursor

    @property
    def colon(self) -> bool:
        return Modifiers.COLON in self.node.modifiers

    @property
    def at(self) -> bool:
        return Modifiers.AT in self.node.modifiers

    def argument_next(self) -> Formattable:
        """Consume the directive's argument, naming the directive on exhaustion"""
        return argument_take(self.cursor, self.node.name, self.node.position)

    def integer_next(self) -> int:
        argument = self.argument_next()
        value = getattr(argument, "as_integer", lambda: None)()
        if value is None:
            raise TypeMismatchError(
                f"{self.node.name} needs an integer, got {argument.format_machine()}",
                self.node.position,
                self.node.name,
            )
        return value

    def float_next(self) -> float:
        argument = self.argument_next()
        value = getattr(argument, "as_float", lambda: None)()
        if value is None:
            raise TypeMismatchError(
                f"{self.node.name} needs a number, got {argument.format_machine()}",
                self.node.position,
                self.node.name,
            )
        return value

    def unsupported(self, error: ValueError) -> UnsupportedFormatError:
        return UnsupportedFormatError(f"{self.node.name}: {error}", self.node.position, self.node.name)


def argument_take(cursor: ArgumentCursor, directive: str, position: int) -> Formattable:
    """
    Consume the next argument for a directive

    Raises:
        ArgumentExhaustedError: Naming the directive and its template offset
    """
    try:
        return cursor.advance()
    except ArgumentExhaustedError as error:
        raise ArgumentExhaustedError(
            f"{directive} needs an argument but none remain ({error.message})",
            position,
            directive,
        ) from error


# Parameters shared by ~A and ~S
PADDING_PARAMS = (
    ParamSpec("mincol", ParamType.INTEGER, 0),
    ParamSpec("colinc", ParamType.INTEGER, 1, minimum=1),
    ParamSpec("minpad", ParamType.INTEGER, 0),
    ParamSpec("padchar", ParamType.CHARACTER, " "),
)


class DirectiveRegistry:
    """
    Registry of directive specifications and handlers

    Maps directive characters to DirectiveSpec objects containing metadata
    and rendering handlers.
    """

    def __init__(self) -> None:
        """Initialize the directive registry and register all built-in directives"""
        self.specs: Dict[str, DirectiveSpec] = {}
        self.kinds: Dict[DirectiveKind, DirectiveSpec] = {}
        self.printingDirectives_register()
        self.numericDirectives_register()
        self.controlDirectives_register()
        self.structuralDirectives_register()

    def register(self, spec: DirectiveSpec) -> None:
        """Register a directive specification"""
        self.specs[spec.char] = spec
        if spec.kind is not None:
            self.kinds[spec.kind] = spec

    def get(self, char: str) -> Optional[DirectiveSpec]:
        """
        Get directive specification by character

        Args:
            char: Directive character, any case

        Returns:
            DirectiveSpec or None if the directive is not supported
        """
        return self.specs.get(char.upper())

    def spec_forKind(self, kind: DirectiveKind) -> DirectiveSpec:
        """Specification of a single-step directive kind"""
        return self.kinds[kind]

    def directives_listByCategory(self, category: DirectiveCategory) -> List[DirectiveSpec]:
        """Get all directives in a category"""
        return [spec for spec in self.specs.values() if spec.category == category]

    def printingDirectives_register(self) -> None:
        """Register ~A and ~S"""

        def human_handler(call: DirectiveCall) -> str:
            """Handle ~A - human-readable text"""
            mincol, colinc, minpad, padchar = call.params
            text = primitives.human_format(call.argument_next())
            return primitives.string_pad(text, mincol, colinc, minpad, padchar, left=call.at)

        def machine_handler(call: DirectiveCall) -> str:
            """Handle ~S - machine-readable, quoted text"""
            mincol, colinc, minpad, padchar = call.params
            text = primitives.machine_format(call.argument_next())
            return primitives.string_pad(text, mincol, colinc, minpad, padchar, left=call.at)

        self.register(DirectiveSpec(
            char="A",
            category=DirectiveCategory.PRINTING,
            description="Print an argument in human-readable form",
            params=PADDING_PARAMS,
            modifiers=Modifiers.AT,
            kind=DirectiveKind.HUMAN_READABLE,
            handler=human_handler,
            examples=["~A", "~10A", "~10@A"],
        ))

        self.register(DirectiveSpec(
            char="S",
            category=DirectiveCategory.PRINTING,
            description="Print an argument in machine-readable form; strings are quoted",
            params=PADDING_PARAMS,
            modifiers=Modifiers.AT,
            kind=DirectiveKind.MACHINE_READABLE,
            handler=machine_handler,
            examples=["~S", "~12S"],
        ))

    def numericDirectives_register(self) -> None:
        """Register ~D and ~F"""

        def decimal_handler(call: DirectiveCall) -> str:
            """Handle ~D - base 10 integer"""
            mincol, padchar, commachar, comma_interval = call.params
            return primitives.decimal_format(
                call.integer_next(),
                mincol=mincol,
                padchar=padchar,
                commachar=commachar,
                comma_interval=comma_interval,
                commas=call.colon,
                sign=call.at,
            )

        def fixed_handler(call: DirectiveCall) -> str:
            """Handle ~F - fixed-point float"""
            width, digits, scale, overflowchar, padchar = call.params
            number = call.float_next()
            try:
                return primitives.fixed_format(
                    number,
                    width=width,
                    digits=digits,
                    scale=scale,
                    overflowchar=overflowchar,
                    padchar=padchar,
                    sign=call.at,
                )
            except ValueError as error:
                raise call.unsupported(error) from error

        self.register(DirectiveSpec(
            char="D",
            category=DirectiveCategory.NUMERIC,
            description="Print an integer in base 10",
            params=(
                ParamSpec("mincol", ParamType.INTEGER, 0),
                ParamSpec("padchar", ParamType.CHARACTER, " "),
                ParamSpec("commachar", ParamType.CHARACTER, appsettings.comma_char),
                ParamSpec("comma-interval", ParamType.INTEGER, appsettings.comma_interval, minimum=1),
            ),
            modifiers=Modifiers.COLON | Modifiers.AT,
            kind=DirectiveKind.DECIMAL,
            handler=decimal_handler,
            examples=["~D", "~5D", "~8,'0D", "~:D", "~10,'_:D"],
        ))

        self.register(DirectiveSpec(
            char="F",
            category=DirectiveCategory.NUMERIC,
            description="Print a number in fixed-point notation",
            params=(
                ParamSpec("w", ParamType.INTEGER, None),
                ParamSpec("d", ParamType.INTEGER, None),
                ParamSpec("k", ParamType.INTEGER, 0, minimum=None),
                ParamSpec("overflowchar", ParamType.CHARACTER, None),
                ParamSpec("padchar", ParamType.CHARACTER, " "),
            ),
            modifiers=Modifiers.AT,
            kind=DirectiveKind.FIXED_FLOAT,
            handler=fixed_handler,
            examples=["~F", "~,2F", "~8,3F", "~6,2,,'*F"],
        ))

    def controlDirectives_register(self) -> None:
        """Register ~*, ~%, ~~ and ~<newline>"""

        def skip_handler(call: DirectiveCall) -> str:
            """Handle ~* - consume arguments without output"""
            (count,) = call.params
            for _ in range(count):
                call.argument_next()
            return ""

        def newline_handler(call: DirectiveCall) -> str:
            """Handle ~% - line breaks, no argument"""
            (count,) = call.params
            return "\n" * count

        def tilde_handler(call: DirectiveCall) -> str:
            """Handle ~~ - literal tildes, no argument"""
            (count,) = call.params
            return "~" * count

        self.register(DirectiveSpec(
            char="*",
            category=DirectiveCategory.CONTROL,
            description="Skip arguments",
            params=(ParamSpec("count", ParamType.INTEGER, 1),),
            kind=DirectiveKind.SKIP,
            handler=skip_handler,
            examples=["~*", "~2*"],
        ))

        self.register(DirectiveSpec(
            char="%",
            category=DirectiveCategory.CONTROL,
            description="Emit line breaks",
            params=(ParamSpec("count", ParamType.INTEGER, 1),),
            kind=DirectiveKind.NEWLINE,
            handler=newline_handler,
            examples=["~%", "~2%"],
        ))

        self.register(DirectiveSpec(
            char="~",
            category=DirectiveCategory.CONTROL,
            description="Emit the tilde character",
            params=(ParamSpec("count", ParamType.INTEGER, 1),),
            kind=DirectiveKind.TILDE,
            handler=tilde_handler,
            examples=["~~", "~3~"],
        ))

        self.register(DirectiveSpec(
            char="\n",
            category=DirectiveCategory.WHITESPACE,
            description="Ignore the line break and the indentation that follows it",
            modifiers=Modifiers.COLON | Modifiers.AT,
            examples=["~\n    "],
        ))

    def structuralDirectives_register(self) -> None:
        """Register iteration, justification and escape directives"""

        self.register(DirectiveSpec(
            char="{",
            category=DirectiveCategory.STRUCTURAL,
            description="Iterate over a list argument (or, with @, the remaining arguments)",
            params=(ParamSpec("max-passes", ParamType.INTEGER, None),),
            modifiers=Modifiers.COLON | Modifiers.AT,
            examples=["~{~A~^, ~}", "~@{~A~}", "~:{~A=~A~^ ~}"],
        ))

        self.register(DirectiveSpec(
            char="}",
            category=DirectiveCategory.STRUCTURAL,
            description="Close an iteration; ~:} runs at least one pass",
            modifiers=Modifiers.COLON,
        ))

        self.register(DirectiveSpec(
            char="<",
            category=DirectiveCategory.STRUCTURAL,
            description="Justify text segments within a column width",
            params=(
                ParamSpec("mincol", ParamType.INTEGER, 0),
                ParamSpec("colinc", ParamType.INTEGER, 1, minimum=1),
                ParamSpec("minpad", ParamType.INTEGER, 0),
                ParamSpec("padchar", ParamType.CHARACTER, " "),
            ),
            modifiers=Modifiers.COLON | Modifiers.AT,
            examples=["~10<~A~>", "~20<~A~;~A~>", "~11:@<~A~>"],
        ))

        self.register(DirectiveSpec(
            char=">",
            category=DirectiveCategory.STRUCTURAL,
            description="Close a justification",
        ))

        self.register(DirectiveSpec(
            char=";",
            category=DirectiveCategory.STRUCTURAL,
            description="Separate justification segments",
        ))

        self.register(DirectiveSpec(
            char="^",
            category=DirectiveCategory.ESCAPE,
            description="Leave the enclosing iteration or justification when no arguments remain",
            params=(
                ParamSpec("a", ParamType.ANY, None, minimum=None),
                ParamSpec("b", ParamType.ANY, None, minimum=None),
                ParamSpec("c", ParamType.ANY, None, minimum=None),
            ),
            modifiers=Modifiers.COLON,
            examples=["~{~A~^, ~}", "~:{~A~:^; ~}"],
        ))
