"""Generator resumption manager.

This module ties factories to a state store:
- Registering named generator factories
- Starting and resuming generators by key
- Driving a generator while checkpointing after every emitted value
"""

from collections.abc import AsyncIterator
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import logging
logger = logging.getLogger(__name__)

from ..core.generator import StatefulFactory
from ..core.models import GenState
from ..storage.base import StateStore


@dataclass
class RunResult:
    """Outcome of driving a generator with ResumptionManager.run()."""

    values: List[Any]
    completed: bool
    state: GenState


class ResumptionManager:
    """Manages persisted generators."""

    def __init__(self, store: StateStore):
        """Initialize the resumption manager.

        Args:
            store: State store used for checkpoints
        """
        self.store = store
        self._factory_registry: Dict[str, StatefulFactory] = {}

    def register(self, name: str, factory: StatefulFactory) -> None:
        """Register a factory under a name used by start() and resume().

        Args:
            name: Unique factory name
            factory: Factory built with generator_with_state() or a sibling
        """
        self._factory_registry[name] = factory
        logger.info(f"Registered generator factory: {name}")

    def get_factory(self, name: str) -> StatefulFactory:
        """Look up a registered factory."""
        factory = self._factory_registry.get(name)
        if factory is None:
            raise ValueError(f"Unknown generator factory: {name}")
        return factory

    async def start(self, name: str, key: str, input: Any):
        """Create a fresh generator and persist its initial state.

        Args:
            name: Registered factory name
            key: Storage key for the generator's state
            input: Input for the generator

        Returns:
            The new generator handle
        """
        handle = self.get_factory(name).fresh(input)
        await self.checkpoint(key, handle)
        logger.info(f"Started {name} generator {key}")
        return handle

    async def resume(self, name: str, key: str):
        """Re-create a generator from the state saved under key.

        Args:
            name: Registered factory name
            key: Storage key of the saved state

        Returns:
            The resumed generator handle

        Raises:
            KeyError: If nothing is stored under key
        """
        factory = self.get_factory(name)
        state = await self.store.load_state(key)
        if state is None:
            raise KeyError(f"No saved state for generator {key}")

        handle = factory.resume(state)
        logger.info(
            f"Resumed {name} generator {key}, "
            f"fast-forwarding {handle.state.num_of_yields_to_skip} yields"
        )
        return handle

    async def checkpoint(self, key: str, handle) -> GenState:
        """Persist the current state of a handle."""
        return await self.store.save_state(key, handle.state)

    async def run(
        self,
        key: str,
        handle,
        max_yields: Optional[int] = None,
        delete_on_completion: bool = False
    ) -> RunResult:
        """Drive a handle, checkpointing after every emitted value.

        Works with sync handles (generators, replaying iterators) and async
        generator handles.

        Args:
            key: Storage key for the handle's state
            handle: Handle returned by a factory, start() or resume()
            max_yields: Stop after this many values (run to completion if None)
            delete_on_completion: Remove the stored state once the body finishes

        Returns:
            Values received, whether the body finished, and the final state
        """
        values: List[Any] = []
        completed = False
        is_async = isinstance(handle, AsyncIterator)

        try:
            while max_yields is None or len(values) < max_yields:
                try:
                    if is_async:
                        value = await handle.__anext__()
                    else:
                        value = next(handle)
                except (StopIteration, StopAsyncIteration):
                    completed = True
                    break

                values.append(value)
                await self.checkpoint(key, handle)
        except Exception as e:
            logger.error(f"Generator {key} failed: {e}", exc_info=True)
            raise

        if completed:
            if delete_on_completion:
                await self.store.delete_state(key)
            else:
                await self.checkpoint(key, handle)
            logger.info(f"Generator {key} completed after {len(values)} values")

        return RunResult(values, completed, handle.state)

    async def list_saved(self) -> List[str]:
        """List the keys of all saved generators."""
        return await self.store.list_keys()
