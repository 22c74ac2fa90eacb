"""Error taxonomy for generator replay.

Two kinds of failure exist:
- InvalidArgument: the caller broke the construction contract
- AssertionFailed: an internal invariant does not hold

Neither is recoverable; a computation that failed to construct must be
discarded.
"""

from typing import Optional

import logging
logger = logging.getLogger(__name__)

from .config import ReplayConfig, get_config


class ReplayError(Exception):
    """Base class for all replay errors."""


class InvalidArgument(ReplayError, ValueError):
    """Raised when input/state exclusivity is violated or a resumed state has no input."""


class AssertionFailed(ReplayError, AssertionError):
    """Raised when an internal consistency check fails."""


def require(condition: bool, message: str) -> None:
    """Check a construction precondition.

    Always evaluated, whatever the assertion toggle says.

    Args:
        condition: Condition that must hold
        message: Error message used when it does not

    Raises:
        InvalidArgument: If the condition is false
    """
    if not condition:
        raise InvalidArgument(message)


def check_invariant(
    condition: bool,
    message: str,
    config: Optional[ReplayConfig] = None
) -> None:
    """Check an internal invariant when assertions are enabled.

    Args:
        condition: Condition that must hold
        message: Error message used when it does not
        config: Configuration to consult (process default if not provided)

    Raises:
        AssertionFailed: If assertions are enabled and the condition is false
    """
    config = config or get_config()
    if not config.enable_assertions or condition:
        return

    logger.error(f"Assertion failed: {message}")
    if config.break_on_assertion:
        breakpoint()
    raise AssertionFailed(message)
