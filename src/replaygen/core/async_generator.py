"""Persistable async generators.

Async generators cannot use ``yield from``, so the body asks should_yield()
directly at each suspension point:

    @async_generator_with_state
    async def fetch_pages(input, state):
        for url in input:
            page = await download(url)
            if should_yield(state):
                yield page
"""

import inspect
from collections.abc import AsyncGenerator
from typing import Any, Callable, Optional

from .config import ReplayConfig
from .errors import check_invariant
from .generator import StatefulFactory
from .models import GenState


class AsyncGeneratorWithState(AsyncGenerator):
    """Async generator handle with its replay state attached."""

    def __init__(self, generator: AsyncGenerator, state: GenState):
        self._generator = generator
        self.state = state

    @property
    def exhausted(self) -> bool:
        """True once the body has returned, raised or been closed."""
        return self._generator.ag_frame is None

    async def asend(self, value):
        return await self._generator.asend(value)

    async def athrow(self, typ, val=None, tb=None):
        if val is None and tb is None:
            return await self._generator.athrow(typ)
        return await self._generator.athrow(typ, val, tb)

    async def aclose(self):
        await self._generator.aclose()

    def __repr__(self):
        return f"<{type(self).__name__} state={self.state.to_dict()!r}>"


class AsyncGeneratorFactory(StatefulFactory):
    """Factory for persistable async generators."""

    def _build(self, input: Any, state: GenState, config: ReplayConfig) -> AsyncGeneratorWithState:
        generator = self.body(input, state)
        check_invariant(
            inspect.isasyncgen(generator),
            f"Body {getattr(self.body, '__name__', self.body)!r} did not return an async generator",
            config
        )
        return AsyncGeneratorWithState(generator, state)


def async_generator_with_state(
    body: Optional[Callable[[Any, GenState], AsyncGenerator]] = None,
    *,
    config: Optional[ReplayConfig] = None
):
    """Async counterpart of generator_with_state()."""
    if body is None:
        return lambda fn: AsyncGeneratorFactory(fn, config=config)
    return AsyncGeneratorFactory(body, config=config)
