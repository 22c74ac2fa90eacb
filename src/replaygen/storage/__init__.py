"""Storage module for generator states.

This module provides:
- Abstract state store interface
- In-memory and SQLite implementations
- A factory that picks a store from the environment
"""

import os
from typing import Optional

from .base import StateStore
from .memory import InMemoryStateStore
from .sqlite import SQLiteStateStore


def create_state_store(backend_type: Optional[str] = None) -> StateStore:
    """Create a state store based on configuration.

    Args:
        backend_type: Type of store ("sqlite", "memory", or None to read the environment)

    Returns:
        Configured (not yet initialized) state store

    Environment Variables:
        STATE_STORE_BACKEND: Store type (sqlite, memory)
        STATE_STORE_PATH: SQLite database path (for the sqlite store)
    """
    if backend_type is None:
        backend_type = os.getenv("STATE_STORE_BACKEND", "sqlite")
    backend_type = backend_type.lower()

    if backend_type == "sqlite":
        db_path = os.getenv("STATE_STORE_PATH", "data/generator_states.db")
        return SQLiteStateStore(db_path=db_path)

    elif backend_type == "memory":
        return InMemoryStateStore()

    else:
        raise ValueError(
            f"Unknown state store type: {backend_type}. "
            f"Supported types: sqlite, memory"
        )


__all__ = [
    "StateStore",
    "InMemoryStateStore",
    "SQLiteStateStore",
    "create_state_store",
]
