"""In-memory state store, for tests and short-lived scripts."""

from typing import Dict, List, Optional

from ..core.models import GenState
from .base import StateStore


class InMemoryStateStore(StateStore):
    """Keeps serialized states in a dict."""

    def __init__(self):
        self._states: Dict[str, str] = {}

    async def initialize(self) -> None:
        pass

    async def close(self) -> None:
        pass

    async def save_state(self, key: str, state: GenState) -> GenState:
        self._states[key] = state.to_json()
        return state

    async def load_state(self, key: str) -> Optional[GenState]:
        data = self._states.get(key)
        if data is None:
            return None
        return GenState.from_json(data)

    async def delete_state(self, key: str) -> bool:
        return self._states.pop(key, None) is not None

    async def list_keys(self) -> List[str]:
        return sorted(self._states)

    def get_raw(self, key: str) -> Optional[str]:
        """Return the serialized state exactly as stored."""
        return self._states.get(key)
