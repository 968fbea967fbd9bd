# database/core.py
import os
import sqlite3
import threading
from typing import Optional, Union

import config
from core.errors import KeyNotFoundError

DB_FILE = config.DATABASE_PATH

Bytes = Union[bytes, str]


def ensure_bytes(value: Bytes) -> bytes:
    """Keys and values may be passed as str; the store only holds bytes."""
    return value if isinstance(value, bytes) else value.encode('utf-8')


def ensure_str(value: Bytes) -> str:
    return value.decode('utf-8') if isinstance(value, bytes) else value


def get_db_connection(db_file: Optional[str] = None):
    """Create a database connection with optimized performance settings."""
    # Set timeout to 30 seconds to wait for locks instead of failing immediately
    conn = sqlite3.connect(db_file or DB_FILE, check_same_thread=False, timeout=30.0)

    # WAL mode so searches can read while ingestion writes
    conn.execute("PRAGMA journal_mode = WAL")

    # FULL keeps every committed put durable across power loss
    conn.execute("PRAGMA synchronous = FULL")

    # Negative value means KB
    cache_size_kb = -1 * config.DB_CACHE_SIZE_MB * 1024
    conn.execute(f"PRAGMA cache_size = {cache_size_kb}")

    # Larger pages suit image blobs (only affects NEW databases)
    conn.execute("PRAGMA page_size = 8192")

    mmap_size_bytes = config.DB_MMAP_SIZE_MB * 1024 * 1024
    conn.execute(f"PRAGMA mmap_size = {mmap_size_bytes}")

    conn.execute(f"PRAGMA wal_autocheckpoint = {config.DB_WAL_AUTOCHECKPOINT}")
    return conn


def initialize_database(db_file: Optional[str] = None):
    """Create the database and tables if they don't exist."""
    path = db_file or DB_FILE
    directory = os.path.dirname(os.path.abspath(path))
    os.makedirs(directory, exist_ok=True)

    conn = get_db_connection(path)
    try:
        with conn:
            conn.execute("""
            CREATE TABLE IF NOT EXISTS kv (
                key BLOB PRIMARY KEY,
                value BLOB NOT NULL
            ) WITHOUT ROWID
            """)
    finally:
        conn.close()


class KeyValueStore:
    """
    Byte-oriented persistent map on top of a single SQLite table.

    One connection is opened per store and shared between threads behind a
    lock, so lookups stay cheap when search runs in a worker thread. Every
    write commits before returning. Callers namespace their keys with
    colon-delimited prefixes such as ``download:<url>:data``. Errors other
    than a missing key are sqlite3 errors and propagate unchanged.
    """

    def __init__(self, db_file: Optional[str] = None):
        self.db_file = db_file or DB_FILE
        initialize_database(self.db_file)
        self._conn = get_db_connection(self.db_file)
        self._lock = threading.Lock()

    def close(self) -> None:
        with self._lock:
            self._conn.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()

    def get(self, key: Bytes) -> bytes:
        value = self.get_optional(key)
        if value is None:
            raise KeyNotFoundError(ensure_str(key))
        return value

    def get_optional(self, key: Bytes) -> Optional[bytes]:
        with self._lock:
            row = self._conn.execute("SELECT value FROM kv WHERE key = ?", (ensure_bytes(key),)).fetchone()
        return bytes(row[0]) if row is not None else None

    def has(self, key: Bytes) -> bool:
        with self._lock:
            row = self._conn.execute("SELECT 1 FROM kv WHERE key = ?", (ensure_bytes(key),)).fetchone()
        return row is not None

    def set(self, key: Bytes, value: Bytes) -> None:
        with self._lock, self._conn:
            self._conn.execute(
                "INSERT OR REPLACE INTO kv (key, value) VALUES (?, ?)",
                (ensure_bytes(key), ensure_bytes(value))
            )

    def delete(self, key: Bytes) -> None:
        """Maintenance only; the pipelines never delete."""
        with self._lock, self._conn:
            self._conn.execute("DELETE FROM kv WHERE key = ?", (ensure_bytes(key),))
