"""SQLite state store implementation.

This implementation uses aiosqlite for async SQLite operations.
It's suitable for development and single-host deployments.
"""

from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional

import aiosqlite

import logging
logger = logging.getLogger(__name__)

from ..core.models import GenState
from .base import StateStore


class SQLiteStateStore(StateStore):
    """SQLite state store implementation."""

    def __init__(self, db_path: str = "data/generator_states.db"):
        """Initialize SQLite storage.

        Args:
            db_path: Path to the SQLite database file (":memory:" for a private in-memory database)
        """
        self.db_path = Path(db_path)
        if db_path != ":memory:":
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._connection: Optional[aiosqlite.Connection] = None

    async def initialize(self) -> None:
        """Initialize database and create tables."""
        if self._connection:
            return
        self._connection = await aiosqlite.connect(str(self.db_path))
        await self._create_tables()
        logger.debug(f"SQLite state store ready at {self.db_path}")

    async def close(self) -> None:
        """Close database connection."""
        if self._connection:
            await self._connection.close()
            self._connection = None

    async def _create_tables(self) -> None:
        """Create database tables."""
        await self._connection.executescript("""
            CREATE TABLE IF NOT EXISTS generator_states (
                key TEXT PRIMARY KEY,
                state TEXT NOT NULL,
                updated_at TEXT NOT NULL
            );
        """)
        await self._connection.commit()

    def _require_connection(self) -> aiosqlite.Connection:
        if self._connection is None:
            raise RuntimeError("SQLiteStateStore used before initialize()")
        return self._connection

    async def save_state(self, key: str, state: GenState) -> GenState:
        """Insert or replace the state stored under key."""
        connection = self._require_connection()
        async with connection.execute(
            """
            INSERT INTO generator_states (key, state, updated_at)
            VALUES (?, ?, ?)
            ON CONFLICT(key) DO UPDATE SET
                state = excluded.state,
                updated_at = excluded.updated_at
            """,
            (key, state.to_json(), datetime.now(timezone.utc).isoformat())
        ):
            pass
        await connection.commit()
        return state

    async def load_state(self, key: str) -> Optional[GenState]:
        """Load the state stored under key."""
        connection = self._require_connection()
        async with connection.execute(
            "SELECT state FROM generator_states WHERE key = ?",
            (key,)
        ) as cursor:
            row = await cursor.fetchone()
            if row:
                return GenState.from_json(row[0])
        return None

    async def delete_state(self, key: str) -> bool:
        """Delete the state stored under key."""
        connection = self._require_connection()
        async with connection.execute(
            "DELETE FROM generator_states WHERE key = ?",
            (key,)
        ) as cursor:
            deleted = cursor.rowcount > 0
        await connection.commit()
        return deleted

    async def list_keys(self) -> List[str]:
        """List all stored keys in sorted order."""
        connection = self._require_connection()
        async with connection.execute(
            "SELECT key FROM generator_states ORDER BY key"
        ) as cursor:
            rows = await cursor.fetchall()
        return [row[0] for row in rows]
