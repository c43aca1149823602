"""
FlagQuest - Player Record Repository

Load and save the player record under a fixed storage key.
"""

import json
import logging

from pydantic import ValidationError

from src.database.models import PlayerRecord
from src.database.store import InMemoryStore, JsonFileStore, SupabaseStore

logger = logging.getLogger(__name__)

Store = InMemoryStore | JsonFileStore | SupabaseStore


class PlayerRecordRepository:
    """Reads and writes the serialized player record."""

    def __init__(self, store: Store, key: str = "flagquest_user") -> None:
        self.store = store
        self.key = key

    def load(self) -> PlayerRecord:
        """Stored record with per-field defaults; initial record if unusable."""
        raw = self.store.get(self.key)
        if raw is None:
            return PlayerRecord()

        try:
            parsed = json.loads(raw)
        except (ValueError, RecursionError):
            logger.warning("Stored record under %s is not valid JSON; starting fresh", self.key)
            return PlayerRecord()
        if not isinstance(parsed, dict):
            logger.warning("Stored record under %s is not an object; starting fresh", self.key)
            return PlayerRecord()

        try:
            record = PlayerRecord.model_validate(parsed)
        except ValidationError:
            logger.warning("Stored record under %s failed validation; starting fresh", self.key)
            return PlayerRecord()
        return record.model_copy(
            update={"unlocked_continents": PlayerRecord().unlocked_continents}
        )

    def save(self, record: PlayerRecord) -> None:
        """Serialize and write the record (camelCase keys)."""
        self.store.set(self.key, record.model_dump_json(by_alias=True))
        logger.debug("Saved player record under %s", self.key)
