#!/usr/bin/env python3
"""
clformat - Common Lisp style format templates

Command line front end: render one template against a list of arguments
and print the result.

Arguments:
    Each positional ARG is decoded as a YAML value, so 42 is an integer,
    3.5 a float, [1, 2, 3] a list and anything else a plain string.
    Alternatively --argsFile names a YAML or JSON file holding a list.

Usage:
    clformat TEMPLATE [ARG ...]
    clformat --templateFile report.clf --argsFile values.yaml

Examples:
    # Comma separated list
    clformat '~{~A~^, ~}' '[ook, onk, nork]'

    # Right-aligned columns, written to a file
    clformat '~10A~8,2F~%' widgets 12.5 --output line.txt

    # Show the highlighted template and trace parsing
    clformat '~:D' 4200 --highlight -vv
"""

import sys
from pathlib import Path
from argparse import ArgumentParser, ArgumentDefaultsHelpFormatter
from typing import List, Optional, Any

import yaml
from pygments import highlight
from pygments.formatters import TerminalFormatter

from .config import appsettings
from .lib import template_compile, __version__, LOG, state_connectToLogger
from .lib.errors import ParseError, RenderError
from .lib.lexer import TemplateLexer
from .lib.log import logger_install
from .models import ProgramState, pipeline


# Define CLI arguments
parser = ArgumentParser(
    prog="clformat",
    description="clformat - render Common Lisp style format templates",
    formatter_class=ArgumentDefaultsHelpFormatter,
)

parser.add_argument(
    "template", nargs="?", default=None, type=str, help="Format template (omit when using --templateFile)"
)

parser.add_argument(
    "arguments", nargs="*", type=str, help="Template arguments, each decoded as a YAML value"
)

parser.add_argument(
    "--templateFile", default=None, type=Path, help="Read the template from this file"
)

parser.add_argument(
    "--argsFile", default=None, type=Path, help="YAML or JSON file holding the argument list"
)

parser.add_argument(
    "--output", default=None, type=Path, help="Write the rendered text to this file instead of stdout"
)

parser.add_argument(
    "--highlight", action="store_true", help="Echo the syntax-highlighted template to stderr"
)

parser.add_argument(
    "-v",
    "--verbosity",
    action="count",
    default=1,
    help="Increase output verbosity (can be repeated: -v, -vv)",
)

parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {__version__}")


def argument_decode(text: str) -> Any:
    """
    Decode one command line argument as a YAML value.

    Text that is not valid YAML is passed through unchanged.
    """
    try:
        value = yaml.safe_load(text)
    except yaml.YAMLError:
        return text
    return text if value is None and text.strip() not in ("null", "~") else value


def env_check(inputstate: ProgramState) -> ProgramState:
    """
    Resolve the template source and validate input files.

    Returns:
        ProgramState with added fields:
            - templateText: Template source
            - envOK: True if the environment is valid

    Exits:
        1 if no template is given or an input file is missing
    """
    state = inputstate.copy()
    LOG("Checking environment...", level=2)

    if state.templateFile is not None:
        if not state.templateFile.exists():
            print(f"Error: Template file not found: {state.templateFile}", file=sys.stderr)
            sys.exit(1)
        # With a template file every positional is an argument
        if state.template is not None:
            state.arguments = [state.template, *state.arguments]
            state.template = None
        state.templateText = state.templateFile.read_text(encoding="utf-8")
        LOG(f"Read {len(state.templateText)} characters from {state.templateFile}", level=2)
    elif state.template is not None:
        state.templateText = state.template
    else:
        print("Error: No template given (pass TEMPLATE or --templateFile)", file=sys.stderr)
        sys.exit(1)

    if state.argsFile is not None and not state.argsFile.exists():
        print(f"Error: Arguments file not found: {state.argsFile}", file=sys.stderr)
        sys.exit(1)

    state.envOK = True
    return state


def template_parse(inputstate: ProgramState) -> ProgramState:
    """
    Parse the template into a directive tree.

    Returns:
        ProgramState with added field:
            - compiledTemplate: Parsed Template

    Exits:
        1 if the template is malformed
    """
    state = inputstate.copy()

    if state.highlight:
        print(highlight(state.templateText, TemplateLexer(), TerminalFormatter()), end="", file=sys.stderr)

    LOG("Parsing template...", level=2)
    try:
        state.compiledTemplate = template_compile(state.templateText)
    except ParseError as e:
        print(f"Parse error: {e}", file=sys.stderr)
        sys.exit(1)
    LOG(f"Parsed {len(state.compiledTemplate.tree)} top-level nodes", level=2)
    return state


def arguments_load(inputstate: ProgramState) -> ProgramState:
    """
    Decode the template arguments.

    Returns:
        ProgramState with added field:
            - argumentValues: Argument list for rendering

    Exits:
        1 if the arguments file cannot be read or parsed
    """
    state = inputstate.copy()
    values: List[Any] = []

    if state.argsFile is not None:
        try:
            loaded = yaml.safe_load(state.argsFile.read_text(encoding="utf-8"))
        except (OSError, yaml.YAMLError) as e:
            print(f"Error reading arguments file: {e}", file=sys.stderr)
            sys.exit(1)
        if loaded is None:
            loaded = []
        values.extend(loaded if isinstance(loaded, list) else [loaded])

    values.extend(argument_decode(text) for text in state.arguments)
    state.argumentValues = values
    LOG(f"Loaded {len(values)} argument(s)", level=2)
    return state


def template_render(inputstate: ProgramState) -> ProgramState:
    """
    Render the parsed template against the arguments.

    Returns:
        ProgramState with added field:
            - renderedText: Rendered output

    Exits:
        1 if rendering fails
    """
    state = inputstate.copy()

    LOG("Rendering template...", level=2)
    try:
        state.renderedText = state.compiledTemplate.render(*state.argumentValues)
    except RenderError as e:
        print(f"Render error: {e}", file=sys.stderr)
        if e.partial:
            print(f"Output before the error: {e.partial!r}", file=sys.stderr)
        if appsettings.debug_mode or state.verbosity >= 3:
            import traceback

            traceback.print_exc()
        sys.exit(1)
    return state


def results_report(inputstate: ProgramState) -> ProgramState:
    """
    Write the rendered text to the output file or stdout.

    Returns:
        ProgramState unchanged (terminal pipeline stage)

    Exits:
        1 if the output file cannot be written
    """
    state: ProgramState = inputstate.copy()

    if state.output is None:
        sys.stdout.write(state.renderedText)
        return state

    try:
        state.output.write_text(state.renderedText, encoding="utf-8")
    except OSError as e:
        print(f"Error writing output file: {e}", file=sys.stderr)
        sys.exit(1)
    LOG(f"Wrote {len(state.renderedText)} characters to {state.output}", level=1)
    return state


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point - render a template from the command line.

    Orchestrates the pipeline:
        1. env_check: Resolve the template source
        2. template_parse: Parse it into a directive tree
        3. arguments_load: Decode the arguments
        4. template_render: Render
        5. results_report: Write the result

    Args:
        argv: Command line arguments (defaults to sys.argv[1:])

    Returns:
        Process exit status (errors exit early through sys.exit)
    """
    options = parser.parse_args(argv)
    state: ProgramState = ProgramState.state_createFromNamespace(options)

    # Standalone process: own the loguru handlers, then connect state for the pipeline
    logger_install()
    state_connectToLogger(state)

    pipeline(state, env_check, template_parse, arguments_load, template_render, results_report)
    return 0


if __name__ == "__main__":
    sys.exit(main())
