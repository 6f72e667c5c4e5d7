"""
Centralized logging using Loguru with context-aware verbosity.

The scanner and locators are library code: they must stay silent unless a
caller has asked for output. LOG() therefore only emits when some object with
a ``verbosity`` attribute (the CLI's ProgramState, or any caller-supplied
object) has been connected to the current context.

Usage:
    from wishtext.lib.log import LOG, state_connectToLogger

    state_connectToLogger(state)       # state.verbosity == 2

    LOG("Locating template...", level=1)           # shown
    LOG("Swallowed parse error at 12", level=2)    # shown
    LOG("Invocation 'Foo' with 3 args", level=3)   # hidden
"""

from loguru import logger
from typing import Any, Optional
from contextvars import ContextVar, Token
import sys

# Context variable holding whatever object supplies the verbosity
_program_state: ContextVar[Optional[Any]] = ContextVar('program_state', default=None)

logger_format = (
    "<green>{time:HH:mm:ss}</green> │ "
    "<level>{level: <5}</level> │ "
    "<cyan>{module: <10}</cyan>:"
    "<cyan>{function: <22}</cyan> ║ "
    "<level>{message}</level>"
)

logger.remove()
logger.add(sys.stderr, format=logger_format, level="DEBUG")


def state_connectToLogger(state: Any) -> Token:
    """
    Connect a verbosity-bearing object to the logging context.

    Args:
        state: Object with an integer ``verbosity`` attribute

    Returns:
        ContextVar token, usable with state_disconnectFromLogger()
    """
    return _program_state.set(state)


def state_disconnectFromLogger(token: Token) -> None:
    """Restore the logging context that was active before a connect"""
    _program_state.reset(token)


def LOG(message: str, level: int = 1, **kwargs: Any) -> None:
    """
    Log message if the connected state's verbosity allows.

    Args:
        message: Log message to display
        level: Minimum verbosity level required (1=normal, 2=verbose, 3=debug)
        **kwargs: Additional loguru arguments passed through to logger.debug

    Verbosity levels:
        1 = Normal output (default)
        2 = Verbose (-v): locator decisions, degraded parse errors
        3 = Debug (-vv): every invocation the scanner reports
    """
    state = _program_state.get()

    if state is not None and getattr(state, 'verbosity', 0) >= level:
        logger.opt(depth=1).debug(message, **kwargs)
