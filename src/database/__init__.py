"""
FlagQuest Database Layer.

Persisted player record, key-value stores and the record repository.
"""

from src.database.models import Avatar, PlayerRecord
from src.database.player import PlayerRecordRepository
from src.database.store import InMemoryStore, JsonFileStore, SupabaseStore, build_store

__all__ = [
    "Avatar",
    "InMemoryStore",
    "JsonFileStore",
    "PlayerRecord",
    "PlayerRecordRepository",
    "SupabaseStore",
    "build_store",
]
