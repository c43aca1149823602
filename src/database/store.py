"""
FlagQuest - Key-Value Stores

Minimal string stores for the serialized player record. Each store exposes
get(key) -> str | None and set(key, value); writes are synchronous and the
last write wins.
"""

import logging
from pathlib import Path

from supabase import Client

from src.config.settings import Settings

logger = logging.getLogger(__name__)


class InMemoryStore:
    """Dictionary-backed store for tests and embedding."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value


class JsonFileStore:
    """One `<key>.json` file per key inside a directory."""

    def __init__(self, directory: str | Path) -> None:
        self.directory = Path(directory)

    def _path(self, key: str) -> Path:
        return self.directory / f"{key}.json"

    def get(self, key: str) -> str | None:
        path = self._path(key)
        if not path.exists():
            return None
        # Invalid UTF-8 becomes U+FFFD instead of raising.
        return path.read_bytes().decode("utf-8", errors="replace")

    def set(self, key: str, value: str) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        self._path(key).write_text(value, encoding="utf-8")


class SupabaseStore:
    """Rows of the `player_records` table (key text primary key, payload text)."""

    def __init__(self, client: Client) -> None:
        self.client = client
        self.table = client.table("player_records")

    def get(self, key: str) -> str | None:
        data = (
            self.table
            .select("payload")
            .eq("key", key)
            .execute()
        )
        if data.data:
            return data.data[0]["payload"]
        return None

    def set(self, key: str, value: str) -> None:
        (
            self.table
            .upsert({"key": key, "payload": value})
            .execute()
        )


def build_store(settings: Settings) -> InMemoryStore | JsonFileStore | SupabaseStore:
    """Store selected by `settings.storage_backend`."""
    if settings.storage_backend == "file":
        return JsonFileStore(settings.storage_dir)
    if settings.storage_backend == "supabase":
        from src.database.client import get_supabase_client

        return SupabaseStore(get_supabase_client())
    logger.info("Using in-memory player store; progress will not survive restarts")
    return InMemoryStore()
