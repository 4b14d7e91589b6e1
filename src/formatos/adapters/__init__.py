from .rest_file_store import RestFileStoreAdapter
from .rest_permission import RestPermissionAdapter, StaticPermissionAdapter
from .sqlite_key_value import InMemoryKeyValueStore, SQLiteKeyValueStore

__all__ = [
    "InMemoryKeyValueStore",
    "RestFileStoreAdapter",
    "RestPermissionAdapter",
    "SQLiteKeyValueStore",
    "StaticPermissionAdapter",
]
