"""
Centralized logging using Loguru with context-aware verbosity.

The parser, interpreter and template cache trace their work through LOG().
Messages only appear once a ProgramState (or any object with a
``verbosity`` attribute) has been connected to the current context.

Importing clformat leaves the host application's loguru handlers alone:
the package is disabled in loguru until logger_install() is called, which
the command line front end does at startup. An embedding application can
call ``logger.enable("clformat")`` to route the messages to its own sinks.

Usage:
    from clformat.lib.log import LOG, logger_install, state_connectToLogger

    # Once, in a standalone program:
    logger_install()

    # At start of a pipeline function:
    state_connectToLogger(state)

    # Anywhere in that context:
    LOG("Template cache miss", level=2)
    LOG("Parsed 42 characters into 5 top-level nodes", level=3)
"""

from loguru import logger
from typing import Any, Optional
from contextvars import ContextVar
import sys

# Context variable to hold current ProgramState
_program_state: ContextVar[Optional[Any]] = ContextVar('program_state', default=None)

# clformat-specific format for the standalone sink
logger_format = (
    "<green>{time:HH:mm:ss}</green> │ "
    "<level>{level: <5}</level> │ "
    "<cyan>{module: <12}</cyan>:"
    "<cyan>{function: <18}</cyan> ║ "
    "<level>{message}</level>"
)

logger.disable("clformat")


def logger_install(sink: Any = None) -> int:
    """
    Send log messages to sink in the clformat format and enable the package.

    Replaces every existing loguru handler, so only a program that owns the
    process (the command line front end) should call it.

    Args:
        sink: Any loguru sink (stream, path or callable); defaults to sys.stderr

    Returns:
        Handler id of the new sink
    """
    logger.remove()
    handler_id = logger.add(sink if sink is not None else sys.stderr, format=logger_format, level="DEBUG")
    logger.enable("clformat")
    return handler_id


def state_connectToLogger(state: Any) -> None:
    """
    Connect a ProgramState to the logging context.

    Args:
        state: Object with a ``verbosity`` attribute (1=normal, 2=verbose, 3=trace)
    """
    _program_state.set(state)


def LOG(message: str, level: int = 1, **kwargs: Any) -> None:
    """
    Log message if the connected state's verbosity allows.

    Args:
        message: Log message to display
        level: Minimum verbosity level required
        **kwargs: Additional loguru metadata

    Verbosity levels:
        1 = Normal output (default)
        2 = Verbose (-v): cache activity, stage progress, parse errors
        3 = Trace (-vv): per-template parse and render summaries
    """
    state = _program_state.get()

    if state and hasattr(state, 'verbosity') and state.verbosity >= level:
        logger.opt(depth=1).debug(message, **kwargs)
