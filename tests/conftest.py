"""Shared test fixtures."""

from dataclasses import dataclass, field
from pathlib import Path

import pytest

from milk_tracker.config import Settings
from milk_tracker.containers import AppContainer
from milk_tracker.domain.stats import PriceConfig
from milk_tracker.services.backup import BackupService
from milk_tracker.services.prices import PriceService
from milk_tracker.services.records import RecordService
from milk_tracker.services.share import MessageSink, ShareService
from milk_tracker.services.stats import StatsService
from milk_tracker.services.storage import KeyValueStore, StorageError
from milk_tracker.services.summary import SummaryService, TextGenerationClient


@dataclass
class InMemoryKeyValueStore(KeyValueStore):
    """In-memory key-value store for tests."""

    values: dict[str, str] = field(default_factory=dict)
    writes: list[str] = field(default_factory=list)

    def get(self, key: str) -> str | None:
        return self.values.get(key)

    def set(self, key: str, value: str) -> None:
        self.writes.append(key)
        self.values[key] = value


@dataclass
class FailingKeyValueStore(InMemoryKeyValueStore):
    """Store whose writes always fail."""

    def set(self, key: str, value: str) -> None:
        raise StorageError(f"cannot write {key}")


@dataclass
class FlakyKeyValueStore(InMemoryKeyValueStore):
    """Store that fails writes to the given keys."""

    failing_keys: set[str] = field(default_factory=set)

    def set(self, key: str, value: str) -> None:
        if key in self.failing_keys:
            raise StorageError(f"cannot write {key}")
        super().set(key, value)


@dataclass
class FakeTextClient(TextGenerationClient):
    """Fake text client returning a fixed answer and recording prompts."""

    answer: str = "સારાંશ"
    prompts: list[str] = field(default_factory=list)
    instructions: list[str] = field(default_factory=list)

    async def generate(self, *, model: str, instructions: str, prompt: str) -> str:
        self.instructions.append(instructions)
        self.prompts.append(prompt)
        return self.answer


@dataclass
class FailingTextClient(TextGenerationClient):
    """Text client that simulates a transport error."""

    async def generate(self, *, model: str, instructions: str, prompt: str) -> str:
        raise ConnectionError("network unreachable")


@dataclass
class FakeMessageSink(MessageSink):
    """Fake chat channel that records messages."""

    messages: list[tuple[int, str]] = field(default_factory=list)

    async def send_message(self, chat_id: int, text: str) -> None:
        self.messages.append((chat_id, text))


DEFAULT_PRICES = PriceConfig(cow_price=60, buffalo_price=80)


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(
        data_file=tmp_path / "milk_tracker.json",
        openai_api_key="openai-key",
        telegram_chat_id=42,
    )


@pytest.fixture
def store() -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore()


@pytest.fixture
def record_service(store: InMemoryKeyValueStore) -> RecordService:
    return RecordService(store)


@pytest.fixture
def price_service(store: InMemoryKeyValueStore) -> PriceService:
    return PriceService(store, defaults=DEFAULT_PRICES)


@pytest.fixture
def text_client() -> FakeTextClient:
    return FakeTextClient()


@pytest.fixture
def message_sink() -> FakeMessageSink:
    return FakeMessageSink()


@pytest.fixture
def container(
    settings: Settings,
    record_service: RecordService,
    price_service: PriceService,
    text_client: FakeTextClient,
    message_sink: FakeMessageSink,
) -> AppContainer:
    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        record_service=record_service,
        price_service=price_service,
        stats_service=StatsService(record_service, price_service),
        backup_service=BackupService(record_service),
        summary_service=SummaryService(client=text_client, model="test-model"),
        share_service=ShareService(sink=message_sink, chat_id=settings.telegram_chat_id),
        close_resources=close_resources,
    )
