"""One-step migration of quantity-based records to the boolean shape."""

import logging

logger = logging.getLogger(__name__)


def migrate_records(raw_records: list[object]) -> list[object]:
    """Convert legacy quantity records to the current boolean shape.

    Entries that already carry a boolean ``cow`` are returned unchanged.
    Count and order are preserved; no deduplication happens here.
    """
    migrated: list[object] = []
    converted = 0
    for entry in raw_records:
        if not isinstance(entry, dict) or isinstance(entry.get("cow"), bool):
            migrated.append(entry)
            continue
        migrated.append(migrate_legacy_record(entry))
        converted += 1
    if converted:
        logger.info("Migrated %s legacy records", converted)
    return migrated


def migrate_legacy_record(entry: dict[str, object]) -> dict[str, object]:
    """Map a legacy ``cowQty``/``quantity``/``buffaloQty`` entry to booleans."""
    return {
        "date": entry.get("date"),
        "cow": _positive(entry.get("cowQty")) or _positive(entry.get("quantity")),
        "buffalo": _positive(entry.get("buffaloQty")),
        "cowReason": "",
        "buffaloReason": "",
    }


def _positive(value: object) -> bool:
    if isinstance(value, bool) or not isinstance(value, int | float):
        return False
    return value > 0
