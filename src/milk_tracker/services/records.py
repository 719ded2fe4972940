"""Record store mirrored to key-value persistence."""

import json
import logging
from collections.abc import Iterable
from dataclasses import dataclass, field

from milk_tracker.domain.records import DailyRecord, MilkKind
from milk_tracker.services.migration import migrate_records
from milk_tracker.services.storage import RECORDS_KEY, KeyValueStore

logger = logging.getLogger(__name__)


@dataclass
class RecordService:
    """Daily records keyed by date.

    Every mutation re-serializes the whole record list and writes it before
    the in-memory state changes, so a failed write leaves the store as it
    was and surfaces the StorageError to the caller.
    """

    store: KeyValueStore
    _records: dict[str, DailyRecord] = field(default_factory=dict, init=False)

    def load(self) -> None:
        """Read, migrate and index the persisted records."""
        raw = self.store.get(RECORDS_KEY)
        if not raw:
            return
        try:
            parsed = json.loads(raw)
        except json.JSONDecodeError:
            logger.warning("Stored records are not valid JSON; starting empty")
            return
        if not isinstance(parsed, list):
            logger.warning("Stored records are not a list; starting empty")
            return
        records = [
            record
            for record in map(DailyRecord.from_raw, migrate_records(parsed))
            if record is not None
        ]
        self._records = _index(records)
        dropped = len(parsed) - len(records)
        if dropped:
            logger.warning("Ignored %s stored records without a usable date", dropped)
        logger.info("Loaded %s records", len(self._records))

    def get(self, day: str) -> DailyRecord:
        """Return the record for a day, or its zero value."""
        record = self._records.get(day)
        return record if record is not None else DailyRecord.empty(day)

    def list_records(self) -> list[DailyRecord]:
        """Return every stored record."""
        return list(self._records.values())

    def set_received(self, day: str, kind: MilkKind, value: bool) -> DailyRecord:
        """Set one milk flag for a day, creating the record if needed."""
        record = self.get(day).with_received(kind, value)
        self._commit({**self._records, day: record})
        return record

    def set_reason(self, day: str, kind: MilkKind, text: str) -> DailyRecord:
        """Set the not-received reason of one milk for a day."""
        record = self.get(day).with_reason(kind, text)
        self._commit({**self._records, day: record})
        return record

    def bulk_replace(self, records: Iterable[DailyRecord]) -> None:
        """Replace the whole store. Later records win for a repeated date."""
        self._commit(_index(records))

    def _commit(self, records: dict[str, DailyRecord]) -> None:
        payload = json.dumps(
            [record.to_wire() for record in records.values()], ensure_ascii=False
        )
        self.store.set(RECORDS_KEY, payload)
        self._records = records


def _index(records: Iterable[DailyRecord]) -> dict[str, DailyRecord]:
    return {record.date: record for record in records}
