"""
Interpreter for directive trees

Walks a parsed tree against an ArgumentCursor and produces the output text.

Rendering is a plain recursive walk:
- Literal text is appended as is
- Single-step directives resolve their parameters and delegate to the
  registry handler
- ~{ iterations run their body once per element of the argument source
- ~< justifications render each segment to its own buffer, then pad
- ~^ unwinds to the construct it belongs to through _EscapeSignal

The Interpreter keeps no state between renders; everything that changes
during a render lives in the cursor and the RenderScope passed down the
walk, so one Interpreter and one tree can serve many threads at once.
"""

from dataclasses import dataclass
from typing import Any, List, Optional, Sequence, Union

from ..models.directives import ParamSpec
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
)
from . import primitives
from .argument import Formattable, argument_unwrap
from .cursor import ArgumentCursor
from .directives import DirectiveCall, argument_take
from .errors import (
    EscapeOutsideConstructError,
    RenderError,
    TypeMismatchError,
    UnsupportedFormatError,
)
from .log import LOG


class _EscapeSignal(Exception):
    """Raised by a firing ~^ and caught by the construct it belongs to"""

    def __init__(self, node: Escape) -> None:
        super().__init__(node.name)
        self.node = node

    @property
    def whole_loop(self) -> bool:
        """~:^ leaves the entire ~:{ loop, not just the current pass"""
        return Modifiers.COLON in self.node.modifiers


@dataclass
class RenderScope:
    """
    Innermost construct around the directives being rendered

    Attributes:
        construct: Enclosing Iteration or Justify node
        source: Element source of an iteration (the list of sublists for ~:{)
    """
    construct: Union[Iteration, Justify]
    source: Optional[ArgumentCursor] = None


class Interpreter:
    """
    Renders directive trees

    Responsibilities:
    - Dispatch each node kind to its render method
    - Resolve literal, #, and v parameters
    - Drive iteration passes and escapes
    - Collect justification segments
    """

    def __init__(self, registry=None) -> None:
        """
        Initialize interpreter

        Args:
            registry: DirectiveRegistry providing specs and handlers;
                      must be the registry the tree was parsed with
        """
        if registry is None:
            from .directives import DirectiveRegistry
            registry = DirectiveRegistry()
        self.registry = registry

    def render(self, tree: Group, cursor: ArgumentCursor) -> str:
        """
        Render a tree against a cursor

        Args:
            tree: Parsed template
            cursor: Fresh cursor over the caller's arguments

        Returns:
            Rendered text

        Raises:
            RenderError: The render is aborted; ``partial`` on the exception
                         holds the text produced so far for diagnostics
        """
        output: List[str] = []
        try:
            self.node_render(tree, cursor, output, None)
        except RenderError as error:
            if error.partial is None:
                error.partial = "".join(output)
            LOG(f"{type(error).__name__}: {error}", level=2)
            raise

        text = "".join(output)
        LOG(f"Rendered {len(text)} characters, {cursor.remaining()} argument(s) unused", level=3)
        return text

    def node_render(
        self,
        node: Any,
        cursor: ArgumentCursor,
        output: List[str],
        scope: Optional[RenderScope],
    ) -> None:
        """Render one node of any kind into output"""
        if isinstance(node, Literal):
            output.append(node.text)
        elif isinstance(node, Simple):
            self.simple_render(node, cursor, output)
        elif isinstance(node, Group):
            for item in node.items:
                self.node_render(item, cursor, output, scope)
        elif isinstance(node, Iteration):
            self.iteration_render(node, cursor, output)
        elif isinstance(node, Justify):
            self.justify_render(node, cursor, output)
        elif isinstance(node, Escape):
            self.escape_render(node, cursor, scope)
        else:
            raise TypeError(f"not a directive node: {node!r}")

    def simple_render(self, node: Simple, cursor: ArgumentCursor, output: List[str]) -> None:
        """
        Render a single-step directive

        Parameters are resolved first (v parameters consume arguments ahead
        of the directive's own argument), then the handler runs. Nothing is
        appended when the handler raises.
        """
        spec = self.registry.spec_forKind(node.kind)
        params = self.params_resolve(node, node.params, spec.params, cursor)
        text = spec.handler(DirectiveCall(node, params, cursor))
        output.append(text)

    def iteration_render(self, node: Iteration, cursor: ArgumentCursor, output: List[str]) -> None:
        """
        Render ~{body~}

        Element source:
            ~{    the next argument, which must be a sequence
            ~@{   the remaining arguments of the current cursor
            ~:{   as ~{, but every element is a sublist with its own cursor
            ~:@{  as ~@{, with every remaining argument a sublist

        Each pass starts only while the source has elements left (~:}
        forces the first pass) and at most max-passes times. A firing ~^
        ends the loop, keeping the text of the pass so far; inside ~:{ it
        only ends the current pass and ~:^ ends the loop.
        """
        spec = self.registry.get("{")
        (limit,) = self.params_resolve(node, node.params, spec.params, cursor)
        sublists = Modifiers.COLON in node.modifiers

        if Modifiers.AT in node.modifiers:
            source = cursor
        else:
            argument = argument_take(cursor, node.name, node.position)
            source = ArgumentCursor(self.sequence_extract(argument, node))

        scope = RenderScope(node, source)
        passes = 0

        while limit is None or passes < limit:
            if source.exhausted and not (node.at_least_once and passes == 0):
                break
            passes += 1
            start = source.position

            if sublists and not source.exhausted:
                element = argument_take(source, node.name, node.position)
                pass_cursor = ArgumentCursor(self.sequence_extract(element, node))
            elif sublists:
                pass_cursor = ArgumentCursor()
            else:
                pass_cursor = source

            try:
                self.node_render(node.body, pass_cursor, output, scope)
            except _EscapeSignal as signal:
                if sublists and not signal.whole_loop:
                    continue
                break

            if limit is None and not sublists and source.position == start and not source.exhausted:
                raise UnsupportedFormatError(
                    f"{node.name} body consumed no arguments, the loop would never end",
                    node.position,
                    node.name,
                )

        LOG(f"{node.name} at offset {node.position} ran {passes} pass(es)", level=3)

    def justify_render(self, node: Justify, cursor: ArgumentCursor, output: List[str]) -> None:
        """
        Render ~<segments~>

        Segments render in order against the current cursor. A firing ~^
        stops the construct; only segments that rendered completely are
        justified.
        """
        spec = self.registry.get("<")
        mincol, colinc, minpad, padchar = self.params_resolve(node, node.params, spec.params, cursor)
        scope = RenderScope(node)

        segments: List[str] = []
        try:
            for segment in node.segments:
                buffer: List[str] = []
                self.node_render(segment, cursor, buffer, scope)
                segments.append("".join(buffer))
        except _EscapeSignal:
            pass

        output.append(primitives.justify(
            segments,
            mincol=mincol,
            colinc=colinc,
            minpad=minpad,
            padchar=padchar,
            pad_before=Modifiers.COLON in node.modifiers,
            pad_after=Modifiers.AT in node.modifiers,
        ))

    def escape_render(
        self,
        node: Escape,
        cursor: ArgumentCursor,
        scope: Optional[RenderScope],
    ) -> None:
        """
        Evaluate ~^ and unwind if it fires

        With no parameters it fires when the cursor being iterated has no
        arguments left (for ~:^, when no sublists are left). With one
        parameter it fires when that value is zero, with two when they are
        equal, with three when a <= b <= c. An omitted slot counts toward the
        form and resolves to None, so ~,0^ compares None with 0.

        Raises:
            _EscapeSignal: When the escape fires
            EscapeOutsideConstructError: If no construct encloses the escape
        """
        if scope is None:
            raise EscapeOutsideConstructError(
                f"{node.name} outside any iteration or justification",
                node.position,
                node.name,
            )

        spec = self.registry.get("^")
        # The form is chosen by the number of slots written, omitted ones included
        count = len(node.params)
        values = self.params_resolve(node, node.params, spec.params, cursor)[:count]

        if count == 0:
            target = scope.source if Modifiers.COLON in node.modifiers else cursor
            fires = target is None or target.exhausted
        elif count == 1:
            fires = values[0] == 0
        elif count == 2:
            fires = values[0] == values[1]
        else:
            if None in values or len({type(value) for value in values}) > 1:
                raise TypeMismatchError(
                    f"{node.name} cannot order parameters {values!r}",
                    node.position,
                    node.name,
                )
            fires = values[0] <= values[1] <= values[2]

        if fires:
            raise _EscapeSignal(node)

    def params_resolve(
        self,
        node: Any,
        params: Sequence[Param],
        specs: Sequence[ParamSpec],
        cursor: ArgumentCursor,
    ) -> List[Any]:
        """
        Resolve a directive's parameters to values, defaults applied

        Returns:
            One value per ParamSpec, in order
        """
        values = []
        for index, param_spec in enumerate(specs):
            param = params[index] if index < len(params) else None
            values.append(self.param_resolve(node, param, param_spec, cursor))
        return values

    def param_resolve(
        self,
        node: Any,
        param: Optional[Param],
        param_spec: ParamSpec,
        cursor: ArgumentCursor,
    ) -> Any:
        """
        Resolve a single parameter

        Literal values were validated by the parser. # becomes the number
        of arguments left; v consumes the next argument, where None means
        "use the default".

        Raises:
            ArgumentExhaustedError: v with no arguments left
            TypeMismatchError: v argument or # count of the wrong type
            UnsupportedFormatError: v or # value below the parameter's minimum
        """
        if param is None or param.kind == ParamKind.OMITTED:
            return param_spec.default
        if param.literal:
            return param.value

        if param.kind == ParamKind.REMAINING:
            value = cursor.remaining()
            shown = f"# = {value}"
        else:
            argument = argument_take(cursor, node.name, param.position)
            value = argument_unwrap(argument)
            if value is None:
                return param_spec.default
            shown = argument.format_machine()

        if not param_spec.accepts(value):
            raise TypeMismatchError(
                f"{node.name} parameter '{param_spec.name}' must be {param_spec.type.value}, "
                f"got {shown}",
                param.position,
                node.name,
            )

        if not param_spec.inRange(value):
            raise UnsupportedFormatError(
                f"{node.name} parameter '{param_spec.name}' must be at least "
                f"{param_spec.minimum}, got {value}",
                param.position,
                node.name,
            )
        return value

    def sequence_extract(self, argument: Formattable, node: Iteration) -> Sequence[Formattable]:
        """
        Elements of an iteration argument

        Raises:
            TypeMismatchError: If the argument cannot be iterated
        """
        elements = getattr(argument, "as_sequence", lambda: None)()
        if elements is None:
            raise TypeMismatchError(
                f"{node.name} needs a list argument, got {argument.format_machine()}",
                node.position,
                node.name,
            )
        return elements
