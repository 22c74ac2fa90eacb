"""Core module for generator replay.

This module contains the fundamental building blocks:
- Replay state model and construction origins
- Factories for generators, async generators and plain iterables
- Suspension point helpers
- Configuration and errors
"""

from .async_generator import (
    AsyncGeneratorFactory,
    AsyncGeneratorWithState,
    async_generator_with_state,
)
from .config import ReplayConfig, configure, get_config, reset_config
from .errors import AssertionFailed, InvalidArgument, ReplayError
from .generator import (
    GeneratorFactory,
    GeneratorWithState,
    StatefulFactory,
    generator_with_state,
    prepare_state,
    should_yield,
    yield_if_needed,
)
from .iterator import ReplayingIterableFactory, ReplayingIterator, replaying
from .models import FreshStart, GenState, Origin, Resume

__all__ = [
    # Models
    "GenState",
    "FreshStart",
    "Resume",
    "Origin",
    # Generators
    "StatefulFactory",
    "GeneratorFactory",
    "GeneratorWithState",
    "generator_with_state",
    "prepare_state",
    "should_yield",
    "yield_if_needed",
    "AsyncGeneratorFactory",
    "AsyncGeneratorWithState",
    "async_generator_with_state",
    "ReplayingIterableFactory",
    "ReplayingIterator",
    "replaying",
    # Configuration
    "ReplayConfig",
    "configure",
    "get_config",
    "reset_config",
    # Errors
    "ReplayError",
    "InvalidArgument",
    "AssertionFailed",
]
