"""Configuration for generator replay.

A single ReplayConfig controls the optional consistency checks. It can be
injected into each factory, or set process-wide with configure().
"""

import os
from typing import Optional

from pydantic import BaseModel, ConfigDict

_TRUE_VALUES = {"1", "true", "yes", "on"}


def _env_flag(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in _TRUE_VALUES


class ReplayConfig(BaseModel):
    """Assertion settings for replay factories."""

    model_config = ConfigDict(frozen=True)

    enable_assertions: bool = True
    break_on_assertion: bool = False

    @classmethod
    def from_environment(cls) -> "ReplayConfig":
        """Build a configuration from environment variables.

        Environment Variables:
            REPLAYGEN_ENABLE_ASSERTIONS: Run internal consistency checks (default true)
            REPLAYGEN_BREAK_ON_ASSERTION: Enter the debugger before raising (default false)
        """
        return cls(
            enable_assertions=_env_flag("REPLAYGEN_ENABLE_ASSERTIONS", True),
            break_on_assertion=_env_flag("REPLAYGEN_BREAK_ON_ASSERTION", False),
        )


_default_config: Optional[ReplayConfig] = None


def get_config() -> ReplayConfig:
    """Return the process-wide default configuration."""
    global _default_config
    if _default_config is None:
        _default_config = ReplayConfig.from_environment()
    return _default_config


def configure(
    enable_assertions: bool,
    break_on_assertion: Optional[bool] = None
) -> ReplayConfig:
    """Replace the process-wide default configuration.

    Factories that were not given an explicit config pick this up on their
    next construction.

    Args:
        enable_assertions: Whether internal consistency checks run
        break_on_assertion: Whether to enter the debugger on a failed check
            (unchanged if not provided)

    Returns:
        The new default configuration
    """
    global _default_config
    if break_on_assertion is None:
        break_on_assertion = get_config().break_on_assertion
    _default_config = ReplayConfig(
        enable_assertions=enable_assertions,
        break_on_assertion=break_on_assertion,
    )
    return _default_config


def reset_config() -> None:
    """Drop the process-wide default so it is re-read from the environment."""
    global _default_config
    _default_config = None
