"""
Models package for clformat

Contains data structures and type definitions for parsing, rendering and
the command line pipeline.
"""

from .state import ProgramState, pipeline
from .directives import DirectiveSpec, DirectiveCategory, ParamSpec, ParamType
from .parser import DirectiveToken, Frame
from .tree import (
    Directive,
    DirectiveKind,
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

__all__ = [
    "ProgramState",
    "pipeline",
    "DirectiveSpec",
    "DirectiveCategory",
    "ParamSpec",
    "ParamType",
    "DirectiveToken",
    "Frame",
    "Directive",
    "DirectiveKind",
    "Escape",
    "Group",
    "Iteration",
    "Justify",
    "Literal",
    "Modifiers",
    "Param",
    "ParamKind",
    "Simple",
]
