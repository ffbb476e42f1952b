"""
Program state model and pipeline helper

Defines ProgramState dataclass for the command line pipeline and the
pipeline() helper for composing transformation stages.
"""

from pathlib import Path
from argparse import Namespace
from typing import Any, Optional, Type, TypeVar, List, Callable, TYPE_CHECKING
from dataclasses import dataclass, field

# Forward reference for type hint - avoid circular import
if TYPE_CHECKING:
    from ..lib.formatter import Template


PS = TypeVar("PS", bound="ProgramState")


@dataclass
class ProgramState:
    """
    Central state container for the command line pipeline (state bus pattern).

    Pipeline stages and their state additions:
        - Initial: template, arguments, templateFile, argsFile, output, verbosity, highlight
        - env_check: templateText, envOK
        - template_parse: compiledTemplate
        - arguments_load: argumentValues
        - template_render: renderedText
        - results_report: (no additions, terminal stage)

    Attributes:
        template: Template text given on the command line
        arguments: Raw positional argument strings (YAML scalars / flow collections)
        templateFile: Path of a file holding the template
        argsFile: Path of a YAML or JSON file holding the argument list
        output: Path to write the rendered text to (stdout if None)
        verbosity: Logging verbosity level (1-3)
        highlight: Echo the highlighted template to stderr before rendering
        envOK: Environment validation passed
        templateText: Resolved template source
        compiledTemplate: Parsed Template
        argumentValues: Decoded argument list
        renderedText: Render result
    """

    # CLI arguments
    template: Optional[str] = field(default=None)
    arguments: List[str] = field(default_factory=list)
    templateFile: Optional[Path] = field(default=None)
    argsFile: Optional[Path] = field(default=None)
    output: Optional[Path] = field(default=None)
    verbosity: int = field(default=1)
    highlight: bool = field(default=False)

    # Pipeline state
    envOK: bool = field(default=False)
    templateText: str = field(default="")
    compiledTemplate: Optional["Template"] = field(default=None)
    argumentValues: List[Any] = field(default_factory=list)
    renderedText: Optional[str] = field(default=None)

    @classmethod
    def state_createFromNamespace(cls: Type["ProgramState"], options: Namespace) -> "ProgramState":
        """
        Create ProgramState from an argparse Namespace.

        Args:
            options: Parsed CLI arguments

        Returns:
            ProgramState instance with all matching CLI options as attributes
        """
        # Get the dictionary of all attributes from the Namespace
        options_dict = vars(options)

        # Get the set of valid field names for ProgramState
        import dataclasses
        valid_fields = {f.name for f in dataclasses.fields(cls)}

        # Filter options_dict to only include fields that exist in ProgramState
        filtered_options = {k: v for k, v in options_dict.items() if k in valid_fields and v is not None}

        return cls(**filtered_options)

    def copy(self: PS) -> PS:
        """
        Creates a shallow copy of the ProgramState instance.

        Returns:
            A new ProgramState instance.
        """
        return type(self)(**self.__dict__)


def pipeline(
    initial_state: ProgramState, *stages: Callable[[ProgramState], ProgramState]
) -> ProgramState:
    """
    Execute a functional pipeline of state transformations.

    Each stage is a function (ProgramState) -> ProgramState that receives
    the output of the previous stage and returns a new state.

    Args:
        initial_state: Starting ProgramState
        *stages: Variable number of stage functions to execute in order

    Returns:
        Final ProgramState after all transformations

    Example:
        final_state = pipeline(
            initial_state,
            env_check,
            template_parse,
            arguments_load,
            template_render,
            results_report,
        )

    This is equivalent to:
        results_report(template_render(arguments_load(template_parse(env_check(initial_state)))))

    But reads left-to-right instead of inside-out.
    """
    from functools import reduce
    return reduce(lambda state, stage: stage(state), stages, initial_state)
