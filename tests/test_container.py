"""Tests for container wiring."""

import asyncio

import pytest

from milk_tracker.adapters.json_file_store import JsonFileKeyValueStore
from milk_tracker.config import Settings
from milk_tracker.containers import build_container, build_store


def test_build_container_creates_services(settings: Settings) -> None:
    container = build_container(settings)

    container.load()

    assert container.price_service.current.cow_price == 60
    assert container.share_service.enabled is False
    asyncio.run(container.close_resources())


def test_build_store_defaults_to_json_file(settings: Settings) -> None:
    store = build_store(settings)

    assert isinstance(store, JsonFileKeyValueStore)
    assert store.path == settings.data_file


def test_supabase_backend_requires_credentials(settings: Settings) -> None:
    settings.storage_backend = "supabase"

    with pytest.raises(ValueError):
        build_store(settings)


def test_unknown_backend_is_rejected(settings: Settings) -> None:
    settings.storage_backend = "redis"

    with pytest.raises(ValueError):
        build_store(settings)
