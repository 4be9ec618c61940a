"""
Storage module.

SQLite key-value store and the typed state layer on top of it.
"""

from .kv_store import SQLiteKVStore
from .state_store import StateStore, KEYS

__all__ = ['SQLiteKVStore', 'StateStore', 'KEYS']
