from .core import (
    DB_FILE,
    KeyValueStore,
    ensure_bytes,
    ensure_str,
    get_db_connection,
    initialize_database,
)

__all__ = [
    'DB_FILE',
    'KeyValueStore',
    'ensure_bytes',
    'ensure_str',
    'get_db_connection',
    'initialize_database',
]
