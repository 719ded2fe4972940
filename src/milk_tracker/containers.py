"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from milk_tracker.adapters.json_file_store import JsonFileKeyValueStore
from milk_tracker.adapters.openai_text_client import OpenAITextClient
from milk_tracker.adapters.supabase_kv_store import SupabaseKeyValueStore
from milk_tracker.adapters.telegram_client import HttpxTelegramClient
from milk_tracker.config import STORAGE_SUPABASE, Settings, validate_storage
from milk_tracker.domain.stats import PriceConfig
from milk_tracker.services.backup import BackupService
from milk_tracker.services.prices import PriceService
from milk_tracker.services.records import RecordService
from milk_tracker.services.share import ShareService
from milk_tracker.services.stats import StatsService
from milk_tracker.services.storage import KeyValueStore
from milk_tracker.services.summary import SummaryService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    record_service: RecordService
    price_service: PriceService
    stats_service: StatsService
    backup_service: BackupService
    summary_service: SummaryService
    share_service: ShareService
    close_resources: Callable[[], Awaitable[None]]

    def load(self) -> None:
        """Read persisted records and prices once at startup."""
        self.record_service.load()
        self.price_service.load()


def build_store(settings: Settings) -> KeyValueStore:
    """Create the configured key-value store."""
    validate_storage(settings)
    if settings.storage_backend == STORAGE_SUPABASE:
        client = create_client(settings.supabase_url, settings.supabase_service_key)
        return SupabaseKeyValueStore(client, table=settings.supabase_table)
    return JsonFileKeyValueStore(settings.data_file)


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    store = build_store(resolved_settings)
    record_service = RecordService(store)
    price_service = PriceService(
        store,
        defaults=PriceConfig(
            cow_price=resolved_settings.default_cow_price,
            buffalo_price=resolved_settings.default_buffalo_price,
        ),
    )
    text_client = OpenAITextClient.create(resolved_settings.openai_api_key)
    telegram_client = (
        HttpxTelegramClient.create(resolved_settings.telegram_bot_token)
        if resolved_settings.telegram_bot_token
        else None
    )

    async def close_resources() -> None:
        await text_client.close()
        if telegram_client is not None:
            await telegram_client.close()

    return AppContainer(
        settings=resolved_settings,
        record_service=record_service,
        price_service=price_service,
        stats_service=StatsService(record_service, price_service),
        backup_service=BackupService(record_service),
        summary_service=SummaryService(
            client=text_client, model=resolved_settings.openai_model
        ),
        share_service=ShareService(
            sink=telegram_client, chat_id=resolved_settings.telegram_chat_id
        ),
        close_resources=close_resources,
    )
