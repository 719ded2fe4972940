"""Tests for the Supabase key-value store."""

from dataclasses import dataclass, field

import pytest

from milk_tracker.adapters.supabase_kv_store import SupabaseKeyValueStore
from milk_tracker.services.storage import StorageError


@dataclass
class FakeResponse:
    data: list[dict[str, object]] | None


@dataclass
class FakeTable:
    name: str
    rows: list[dict[str, object]] = field(default_factory=list)
    last_payload: object | None = None
    last_filters: list[tuple[str, object]] = field(default_factory=list)
    on_conflict: str | None = None

    def select(self, *_args) -> "FakeTable":
        self._action = "select"
        return self

    def upsert(self, payload, on_conflict: str = "") -> "FakeTable":  # type: ignore[no-untyped-def]
        self._action = "upsert"
        self.last_payload = payload
        self.on_conflict = on_conflict
        return self

    def eq(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_filters.append((column, value))
        return self

    def limit(self, _count: int) -> "FakeTable":
        return self

    def execute(self) -> FakeResponse:
        if self._action == "upsert":
            return FakeResponse(data=[self.last_payload])
        return FakeResponse(data=self.rows)


@dataclass
class FakeSupabaseClient:
    tables: dict[str, FakeTable] = field(default_factory=dict)

    def table(self, name: str) -> FakeTable:
        return self.tables.setdefault(name, FakeTable(name))


class BrokenSupabaseClient:
    def table(self, name: str) -> FakeTable:
        raise ConnectionError("supabase unreachable")


def test_get_returns_value_column() -> None:
    client = FakeSupabaseClient()
    client.table("kv_store").rows = [{"value": "60"}]
    store = SupabaseKeyValueStore(client)

    assert store.get("cowPrice") == "60"
    assert client.tables["kv_store"].last_filters == [("key", "cowPrice")]


def test_get_missing_key_returns_none() -> None:
    store = SupabaseKeyValueStore(FakeSupabaseClient(), table="settings")

    assert store.get("cowPrice") is None


def test_set_upserts_on_key() -> None:
    client = FakeSupabaseClient()
    store = SupabaseKeyValueStore(client)

    store.set("buffaloPrice", "80")

    table = client.tables["kv_store"]
    assert table.on_conflict == "key"
    assert table.last_payload["key"] == "buffaloPrice"
    assert table.last_payload["value"] == "80"
    assert "updated_at" in table.last_payload


def test_client_failures_raise_storage_error() -> None:
    store = SupabaseKeyValueStore(BrokenSupabaseClient())

    with pytest.raises(StorageError):
        store.get("cowPrice")
    with pytest.raises(StorageError):
        store.set("cowPrice", "60")
