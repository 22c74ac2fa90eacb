"""Base storage interface for generator states.

This abstract base class defines the contract that all state stores must
follow. States are kept in their JSON wire form, so a loaded state is
always a new object that no live generator handle shares.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from ..core.models import GenState


class StateStore(ABC):
    """Abstract base class for generator state stores."""

    @abstractmethod
    async def initialize(self) -> None:
        """Initialize the store (create tables, connections, etc.)."""
        pass

    @abstractmethod
    async def close(self) -> None:
        """Close connections and cleanup resources."""
        pass

    @abstractmethod
    async def save_state(self, key: str, state: GenState) -> GenState:
        """Save (insert or replace) the state stored under key."""
        pass

    @abstractmethod
    async def load_state(self, key: str) -> Optional[GenState]:
        """Load the state stored under key."""
        pass

    @abstractmethod
    async def delete_state(self, key: str) -> bool:
        """Delete the state stored under key. Returns whether it existed."""
        pass

    @abstractmethod
    async def list_keys(self) -> List[str]:
        """List all stored keys in sorted order."""
        pass

    async def __aenter__(self) -> "StateStore":
        await self.initialize()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()
