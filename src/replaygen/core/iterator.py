"""Replay for plain iterables.

Here the body needs no cooperation at all: it is any function returning an
iterable, and each element it produces counts as one suspension point.
On resume the iterator pulls and discards the elements that were already
handed out in the previous run.

    numbers = replaying(lambda n: (i * i for i in range(n)))
    it = numbers(input=5)
    next(it), next(it)           # 0, 1
    it = numbers(state=it.state)
    list(it)                     # [4, 9, 16]
"""

from collections.abc import Iterator
from typing import Any, Callable, Iterable, Optional

from .config import ReplayConfig
from .generator import StatefulFactory, should_yield
from .models import GenState


class ReplayingIterator(Iterator):
    """Lazy, finite, non-restartable iterator with its replay state attached."""

    def __init__(self, iterable: Iterable, state: GenState):
        self._iterator = iter(iterable)
        self.state = state
        self.exhausted = False

    def __next__(self):
        if self.exhausted:
            raise StopIteration
        while True:
            try:
                value = next(self._iterator)
            except StopIteration:
                self.exhausted = True
                raise
            if should_yield(self.state):
                return value

    def __repr__(self):
        return f"<{type(self).__name__} state={self.state.to_dict()!r}>"


class ReplayingIterableFactory(StatefulFactory):
    """Factory for replaying iterators; the body only receives the input."""

    def _build(self, input: Any, state: GenState, config: ReplayConfig) -> ReplayingIterator:
        return ReplayingIterator(self.body(input), state)


def replaying(
    body: Optional[Callable[[Any], Iterable]] = None,
    *,
    config: Optional[ReplayConfig] = None
):
    """Make an ``input -> iterable`` function resumable by discarding replayed elements."""
    if body is None:
        return lambda fn: ReplayingIterableFactory(fn, config=config)
    return ReplayingIterableFactory(body, config=config)
