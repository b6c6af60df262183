"""
PostgresKeyValueStore - PostgreSQL storage for dashboard documents.

Uses psycopg2 for PostgreSQL connections with connection pooling.
"""

import os
from typing import Optional

from psycopg2 import pool

from diagnostic_tracker.utils.constants import (
    ENV_DATABASE_URL,
    PG_POOL_MAX_CONNECTIONS,
    PG_POOL_MIN_CONNECTIONS,
)

from .backing_store import KeyValueStore


class PostgresKeyValueStore(KeyValueStore):
    """
    PostgreSQL key/value table.
    Why: Lets a server deployment keep dashboard documents outside the
    process, one row per storage key.
    """

    def __init__(self, connection_string: Optional[str] = None,
                 table_name: str = "dashboard_slots"):
        """
        Initialize store with database connection.

        Args:
            connection_string: PostgreSQL connection string.
                             Defaults to DATABASE_URL env var.
            table_name: Table holding the key/value rows
        """
        self.connection_string = connection_string or os.getenv(ENV_DATABASE_URL)
        if not table_name.isidentifier():
            raise ValueError(f"Invalid table name: {table_name!r}")
        self.table_name = table_name
        self._pool: Optional[pool.SimpleConnectionPool] = None

    def _get_connection(self):
        """Get a connection from the pool."""
        if not self._pool:
            self._pool = pool.SimpleConnectionPool(
                PG_POOL_MIN_CONNECTIONS, PG_POOL_MAX_CONNECTIONS,
                self.connection_string
            )
        return self._pool.getconn()

    def _release_connection(self, conn):
        """Return connection to pool."""
        if self._pool:
            self._pool.putconn(conn)

    def init_schema(self) -> None:
        """Create the key/value table if it doesn't exist."""
        conn = self._get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(f"""
                    CREATE TABLE IF NOT EXISTS {self.table_name} (
                        slot_key TEXT PRIMARY KEY,
                        payload TEXT NOT NULL,
                        updated_at TIMESTAMP NOT NULL DEFAULT NOW()
                    );
                """)
                conn.commit()
        finally:
            self._release_connection(conn)

    def get(self, key: str) -> Optional[str]:
        """
        Retrieve the payload stored under key.

        Args:
            key: Storage key

        Returns:
            Stored text if found, None otherwise
        """
        conn = self._get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(
                    f"SELECT payload FROM {self.table_name} WHERE slot_key = %s",
                    (key,)
                )
                row = cur.fetchone()
                return row[0] if row else None
        finally:
            self._release_connection(conn)

    def set(self, key: str, value: str) -> None:
        """
        Insert or overwrite the payload stored under key.

        Args:
            key: Storage key
            value: Text to store
        """
        conn = self._get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(f"""
                    INSERT INTO {self.table_name} (slot_key, payload, updated_at)
                    VALUES (%s, %s, NOW())
                    ON CONFLICT (slot_key) DO UPDATE SET
                        payload = EXCLUDED.payload,
                        updated_at = EXCLUDED.updated_at
                """, (key, value))
                conn.commit()
        finally:
            self._release_connection(conn)

    def remove(self, key: str) -> None:
        """Delete the row for key, if any."""
        conn = self._get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(
                    f"DELETE FROM {self.table_name} WHERE slot_key = %s",
                    (key,)
                )
                conn.commit()
        finally:
            self._release_connection(conn)

    def close(self) -> None:
        """Close all connections in the pool."""
        if self._pool:
            self._pool.closeall()
            self._pool = None
