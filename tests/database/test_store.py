"""Tests for src/database/store.py — key-value stores and backend selection."""

from unittest.mock import MagicMock, patch

import pytest

from src.config.settings import Settings
from src.database.store import InMemoryStore, JsonFileStore, SupabaseStore, build_store


@pytest.fixture
def mock_client():
    """Minimal mock Supabase client."""
    return MagicMock()


class TestInMemoryStore:
    def test_get_missing(self):
        assert InMemoryStore().get("k") is None

    def test_set_get(self):
        store = InMemoryStore()
        store.set("k", "v")
        assert store.get("k") == "v"

    def test_initial_data_copied(self):
        initial = {"k": "v"}
        store = InMemoryStore(initial)
        store.set("k", "w")
        assert initial == {"k": "v"}


class TestJsonFileStore:
    def test_get_missing(self, tmp_path):
        assert JsonFileStore(tmp_path).get("k") is None

    def test_set_creates_directory(self, tmp_path):
        store = JsonFileStore(tmp_path / "nested")
        store.set("player", '{"xp": 1}')
        assert (tmp_path / "nested" / "player.json").read_text(encoding="utf-8") == '{"xp": 1}'
        assert store.get("player") == '{"xp": 1}'

    def test_invalid_utf8_replaced(self, tmp_path):
        (tmp_path / "player.json").write_bytes(b'\xff{"xp": 1}')
        assert JsonFileStore(tmp_path).get("player") == '�{"xp": 1}'


class TestSupabaseStore:
    def test_uses_player_records_table(self, mock_client):
        SupabaseStore(mock_client)
        mock_client.table.assert_called_once_with("player_records")

    def test_get_returns_payload(self, mock_client):
        query = mock_client.table.return_value.select.return_value.eq.return_value
        query.execute.return_value.data = [{"payload": '{"xp": 3}'}]

        assert SupabaseStore(mock_client).get("flagquest_user") == '{"xp": 3}'
        mock_client.table.return_value.select.assert_called_once_with("payload")
        mock_client.table.return_value.select.return_value.eq.assert_called_once_with(
            "key", "flagquest_user"
        )

    def test_get_missing(self, mock_client):
        query = mock_client.table.return_value.select.return_value.eq.return_value
        query.execute.return_value.data = []
        assert SupabaseStore(mock_client).get("flagquest_user") is None

    def test_set_upserts(self, mock_client):
        SupabaseStore(mock_client).set("flagquest_user", "{}")
        mock_client.table.return_value.upsert.assert_called_once_with(
            {"key": "flagquest_user", "payload": "{}"}
        )
        mock_client.table.return_value.upsert.return_value.execute.assert_called_once()


class TestBuildStore:
    def test_memory(self):
        assert isinstance(build_store(Settings(storage_backend="memory", _env_file=None)), InMemoryStore)

    def test_file(self, tmp_path):
        store = build_store(Settings(storage_backend="file", storage_dir=str(tmp_path), _env_file=None))
        assert isinstance(store, JsonFileStore)
        assert store.directory == tmp_path

    @patch("src.database.client.get_supabase_client")
    def test_supabase(self, mock_get_client):
        store = build_store(Settings(storage_backend="supabase", _env_file=None))
        assert isinstance(store, SupabaseStore)
        mock_get_client.assert_called_once()
