"""Persistable generators.

A generator created through generator_with_state() carries a ``state``
attribute (a GenState). Only that state has to be saved to resume the
generator later: on resume the generator body runs again from the top and
every suspension point that was already passed is fast-forwarded without
yielding.

Usage:
    @generator_with_state
    def steps(input, state):
        yield from yield_if_needed(state, f"first {input}")
        yield from yield_if_needed(state, f"second {input}")

    gen = steps(input="job")
    next(gen)
    saved = gen.state.to_json()

    gen = steps(state=GenState.from_json(saved))
    next(gen)  # "second job"

Every ``yield value`` in the body is replaced with
``yield from yield_if_needed(state, value)``.
"""

import functools
import inspect
from abc import ABC, abstractmethod
from collections.abc import Generator, Mapping
from typing import Any, Callable, Optional, Tuple

from pydantic import ValidationError

import logging
logger = logging.getLogger(__name__)

from .config import ReplayConfig, get_config
from .errors import InvalidArgument, check_invariant, require
from .models import FreshStart, GenState, Origin, Resume


def prepare_state(
    input: Any = None,
    state: Any = None,
    config: Optional[ReplayConfig] = None
) -> Tuple[Any, GenState]:
    """Validate construction arguments and set up the state for a new run.

    Exactly one of ``input`` and ``state`` must be given. A fresh state is
    created from ``input``; a saved state is updated in place so that its
    skip target covers everything the previous run got through, and its
    executed counter starts again from zero.

    Args:
        input: Input for a brand new generator
        state: Saved state (GenState or its wire-shape mapping) to resume from
        config: Assertion settings

    Returns:
        The input to pass to the body, and the state to attach

    Raises:
        InvalidArgument: If both or neither argument is given, or the saved
            state has no input, or a saved mapping fails validation
    """
    require(
        input is not None or state is not None,
        "Either input (fresh start) or state (resume) must be provided"
    )
    require(
        input is None or state is None,
        "input and state are mutually exclusive; pass state alone to resume"
    )

    if input is not None:
        state = GenState(input=input, num_of_yields_executed=0)
        logger.debug("Creating fresh generator state")
    else:
        if isinstance(state, Mapping):
            try:
                state = GenState.from_dict(dict(state))
            except ValidationError as e:
                raise InvalidArgument(f"Saved state is not a valid GenState: {e}") from e
        require(
            isinstance(state, GenState),
            f"state must be a GenState or a mapping, got {type(state).__name__}"
        )
        require(state.input is not None, "Saved state is missing its original input")
        input = state.input

    executed = state.num_of_yields_executed
    check_invariant(
        isinstance(executed, int) and executed >= 0,
        f"num_of_yields_executed must be a non-negative int, got {executed!r}",
        config
    )
    check_invariant(
        state.num_of_yields_to_skip is None
        or (isinstance(state.num_of_yields_to_skip, int) and state.num_of_yields_to_skip >= 0),
        f"num_of_yields_to_skip must be None or a non-negative int, "
        f"got {state.num_of_yields_to_skip!r}",
        config
    )

    if state.num_of_yields_to_skip is None or state.num_of_yields_to_skip < executed:
        state.num_of_yields_to_skip = executed
    state.num_of_yields_executed = 0

    if state.num_of_yields_to_skip:
        logger.debug(f"Resuming generator: fast-forwarding {state.num_of_yields_to_skip} yields")

    return input, state


def should_yield(state: GenState) -> bool:
    """Count one suspension point and decide whether it really suspends.

    The point that lands exactly on the skip target is still skipped; the
    first one past it yields.
    """
    state.num_of_yields_executed += 1
    skip = state.num_of_yields_to_skip
    if skip is None or state.num_of_yields_executed > skip:
        return True
    if state.num_of_yields_executed == skip:
        logger.debug(f"Fast-forward complete after {skip} skipped yields")
    return False


def yield_if_needed(state: GenState, value: Any):
    """Yield ``value`` unless this suspension point is being fast-forwarded.

    Use as ``yield from yield_if_needed(state, value)``.
    """
    if should_yield(state):
        yield value


class StatefulFactory(ABC):
    """Common construction logic for every persistable body kind.

    Subclasses only decide how the body is invoked and wrapped.
    """

    def __init__(self, body: Callable, config: Optional[ReplayConfig] = None):
        """Initialize the factory.

        Args:
            body: Body function; it always receives a populated state
            config: Assertion settings (process default if not provided)
        """
        self.body = body
        self.config = config
        functools.update_wrapper(self, body, updated=())

    @property
    def effective_config(self) -> ReplayConfig:
        """Injected configuration, or the current process default."""
        return self.config or get_config()

    def __call__(self, input: Any = None, state: Any = None):
        """Create a handle from either ``input`` or a saved ``state``."""
        config = self.effective_config
        input, state = prepare_state(input, state, config)
        return self._build(input, state, config)

    def fresh(self, input: Any):
        """Create a brand new handle."""
        return self(input=input)

    def resume(self, state: Any):
        """Re-create a handle from a saved state."""
        return self(state=state)

    def start(self, origin: Origin):
        """Create a handle from a FreshStart or Resume value."""
        if isinstance(origin, FreshStart):
            return self.fresh(origin.input)
        if isinstance(origin, Resume):
            return self.resume(origin.state)
        raise InvalidArgument(f"Expected FreshStart or Resume, got {type(origin).__name__}")

    @abstractmethod
    def _build(self, input: Any, state: GenState, config: ReplayConfig):
        """Invoke the body and wrap the result in a handle."""
        pass


class GeneratorWithState(Generator):
    """Generator handle with its replay state attached."""

    def __init__(self, generator: Generator, state: GenState):
        self._generator = generator
        self.state = state

    @property
    def exhausted(self) -> bool:
        """True once the body has returned, raised or been closed."""
        return self._generator.gi_frame is None

    def send(self, value):
        return self._generator.send(value)

    def throw(self, typ, val=None, tb=None):
        if val is None and tb is None:
            return self._generator.throw(typ)
        return self._generator.throw(typ, val, tb)

    def close(self):
        self._generator.close()

    def __repr__(self):
        return f"<{type(self).__name__} state={self.state.to_dict()!r}>"


class GeneratorFactory(StatefulFactory):
    """Factory for persistable synchronous generators."""

    def _build(self, input: Any, state: GenState, config: ReplayConfig) -> GeneratorWithState:
        generator = self.body(input, state)
        check_invariant(
            inspect.isgenerator(generator),
            f"Body {getattr(self.body, '__name__', self.body)!r} did not return a generator",
            config
        )
        return GeneratorWithState(generator, state)


def generator_with_state(
    body: Optional[Callable[[Any, GenState], Generator]] = None,
    *,
    config: Optional[ReplayConfig] = None
):
    """Turn a ``(input, state)`` generator function into a persistable one.

    The returned factory accepts either ``input`` (fresh generator) or
    ``state`` (resumed generator), never both. Can be used as a plain call,
    as ``@generator_with_state`` or as ``@generator_with_state(config=...)``.

    Args:
        body: Generator function that always receives a non-None state
        config: Assertion settings (process default if not provided)

    Returns:
        A GeneratorFactory, or a decorator producing one
    """
    if body is None:
        return lambda fn: GeneratorFactory(fn, config=config)
    return GeneratorFactory(body, config=config)
