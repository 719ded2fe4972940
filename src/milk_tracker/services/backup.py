"""JSON backup export and import."""

import json
import logging
from dataclasses import dataclass
from datetime import date

from pydantic import ValidationError

from milk_tracker.domain.records import DailyRecord
from milk_tracker.services.migration import migrate_records
from milk_tracker.services.records import RecordService

logger = logging.getLogger(__name__)

RESTORED_MESSAGE = "ડેટા સફળતાપૂર્વક રિસ્ટોર થયો છે!"
INVALID_FORMAT_MESSAGE = "ફાઈલ ફોર્મેટ ખોટું છે."
UNREADABLE_MESSAGE = "ફાઈલ વાંચવામાં ભૂલ આવી છે."


class ImportFormatError(ValueError):
    """Raised when a backup cannot be imported. The message is user-facing."""

    def __init__(self, message: str, rejected: int = 0) -> None:
        super().__init__(message)
        self.message = message
        self.rejected = rejected


@dataclass(frozen=True)
class ImportResult:
    """Outcome of a successful import."""

    imported: int
    message: str


def backup_filename(today: date | None = None) -> str:
    """Return the download name for a backup taken today."""
    return f"milk-records-backup-{(today or date.today()).isoformat()}.json"


def export_records(records: list[DailyRecord]) -> str:
    """Serialize records as a pretty-printed JSON array."""
    return json.dumps(
        [record.to_wire() for record in records], indent=2, ensure_ascii=False
    )


def parse_backup(content: str | bytes) -> list[DailyRecord]:
    """Parse and validate a backup file.

    Legacy quantity rows are migrated first. Any row that is still not a
    valid record rejects the whole file.
    """
    try:
        parsed = json.loads(content)
    except ValueError as exc:
        raise ImportFormatError(UNREADABLE_MESSAGE) from exc
    if not isinstance(parsed, list):
        raise ImportFormatError(INVALID_FORMAT_MESSAGE)

    records: list[DailyRecord] = []
    rejected = 0
    for entry in migrate_records(parsed):
        try:
            records.append(DailyRecord.model_validate(entry))
        except ValidationError:
            rejected += 1
    if rejected:
        raise ImportFormatError(
            f"{INVALID_FORMAT_MESSAGE} અમાન્ય રેકોર્ડ: {rejected}", rejected=rejected
        )
    return records


@dataclass
class BackupService:
    """Exports the record store and restores it from a backup."""

    records: RecordService

    def export(self) -> str:
        """Return the current records as backup JSON."""
        return export_records(self.records.list_records())

    def restore(self, content: str | bytes) -> ImportResult:
        """Replace the record store with the contents of a backup."""
        try:
            records = parse_backup(content)
        except ImportFormatError as exc:
            logger.warning("Rejected backup import: %s", exc.message)
            raise
        self.records.bulk_replace(records)
        logger.info("Restored %s records from backup", len(records))
        return ImportResult(imported=len(records), message=RESTORED_MESSAGE)
