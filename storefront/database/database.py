from typing import Dict, Optional
import psycopg
from psycopg import Error


class StorageError(Exception):
    """Raised when a persistence slot cannot be read or written."""


class KeyValueStore:
    """Named slots each holding one serialized collection."""

    def get(self, key: str) -> Optional[str]:
        raise NotImplementedError

    def set(self, key: str, value: str) -> None:
        raise NotImplementedError


class MemoryKeyValueStore(KeyValueStore):
    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self.slots: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self.slots.get(key)

    def set(self, key: str, value: str) -> None:
        self.slots[key] = value


class PostgresKeyValueStore(KeyValueStore):
    def __init__(self, database_url: str):
        if not database_url:
            raise ValueError("DATABASE_URL environment variable is not set")
        self.DATABASE_URL = database_url

    def get_connection(self) -> psycopg.Connection:
        return psycopg.connect(
            self.DATABASE_URL,
            connect_timeout=30,
            application_name='storefront_bot'
        )

    def ensure_schema(self) -> None:
        try:
            with self.get_connection() as conn:
                with conn.cursor() as cur:
                    cur.execute("""
                        CREATE TABLE IF NOT EXISTS kv_store (
                            key TEXT PRIMARY KEY,
                            value TEXT NOT NULL,
                            updated_at TIMESTAMPTZ NOT NULL DEFAULT now()
                        )
                    """)
                    conn.commit()
        except Error as e:
            raise StorageError(f"Could not create kv_store table: {e}") from e

    def get(self, key: str) -> Optional[str]:
        try:
            with self.get_connection() as conn:
                with conn.cursor() as cur:
                    cur.execute("SELECT value FROM kv_store WHERE key = %s", (key,))
                    row = cur.fetchone()
                    return row[0] if row else None
        except Error as e:
            raise StorageError(f"Could not read slot '{key}': {e}") from e

    def set(self, key: str, value: str) -> None:
        try:
            with self.get_connection() as conn:
                with conn.cursor() as cur:
                    cur.execute(
                        """
                        INSERT INTO kv_store (key, value, updated_at) VALUES (%s, %s, now())
                        ON CONFLICT (key) DO UPDATE SET value = EXCLUDED.value, updated_at = now()
                        """,
                        (key, value)
                    )
                    conn.commit()
        except Error as e:
            raise StorageError(f"Could not write slot '{key}': {e}") from e


def create_storage(database_url: Optional[str], backend: str = 'postgres') -> KeyValueStore:
    """Build the storage backend selected by configuration."""
    if backend == 'memory':
        return MemoryKeyValueStore()
    if backend != 'postgres':
        raise ValueError(f"Unknown STORAGE_BACKEND '{backend}'")
    storage = PostgresKeyValueStore(database_url)
    storage.ensure_schema()
    return storage
