"""Daily milk record models."""

import datetime as dt
from collections.abc import Mapping
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

ISO_DATE_PATTERN = r"^\d{4}-\d{2}-\d{2}$"


class MilkKind(str, Enum):
    """Kinds of milk tracked per day."""

    COW = "cow"
    BUFFALO = "buffalo"

    @property
    def reason_field(self) -> str:
        """Name of the record attribute holding the not-received reason."""
        return f"{self.value}_reason"


class DailyRecord(BaseModel):
    """Milk receipt for a single calendar day.

    The date string is the record key. A day without a stored record is
    equivalent to ``DailyRecord.empty(day)``. Reasons only carry meaning
    while the matching flag is False.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, strict=True)

    date: str = Field(pattern=ISO_DATE_PATTERN)
    cow: bool = False
    buffalo: bool = False
    cow_reason: str = Field(default="", alias="cowReason")
    buffalo_reason: str = Field(default="", alias="buffaloReason")

    @field_validator("date")
    @classmethod
    def _check_calendar_date(cls, value: str) -> str:
        dt.date.fromisoformat(value)
        return value

    @field_validator("cow_reason", "buffalo_reason", mode="before")
    @classmethod
    def _null_reason_is_empty(cls, value: object) -> object:
        return "" if value is None else value

    @classmethod
    def empty(cls, day: str) -> "DailyRecord":
        """Return the zero-value record for a day."""
        return cls(date=day)

    @classmethod
    def from_raw(cls, raw: object) -> "DailyRecord | None":
        """Build a record from loosely-typed stored data.

        Fields of the wrong type fall back to their zero values. Returns None
        when the entry has no usable date.
        """
        if not isinstance(raw, Mapping):
            return None
        day = raw.get("date")
        if not isinstance(day, str):
            return None
        try:
            return cls(
                date=day,
                cow=_flag(raw.get("cow")),
                buffalo=_flag(raw.get("buffalo")),
                cow_reason=_text(raw.get("cowReason")),
                buffalo_reason=_text(raw.get("buffaloReason")),
            )
        except ValidationError:
            return None

    @property
    def day(self) -> dt.date:
        """Calendar date of the record."""
        return dt.date.fromisoformat(self.date)

    def received(self, kind: MilkKind) -> bool:
        """Return True when the given milk was received that day."""
        return self.cow if kind is MilkKind.COW else self.buffalo

    def visible_reason(self, kind: MilkKind) -> str:
        """Return the reason for a kind, or "" when the milk was received."""
        if self.received(kind):
            return ""
        return getattr(self, kind.reason_field)

    @property
    def has_visible_reason(self) -> bool:
        """True when at least one not-received kind carries a reason."""
        return any(self.visible_reason(kind) for kind in MilkKind)

    @property
    def is_active(self) -> bool:
        """True when at least one kind of milk was received."""
        return self.cow or self.buffalo

    def in_month(self, year: int, month: int) -> bool:
        """Return True when the record falls in the given month (1-12)."""
        day = self.day
        return day.year == year and day.month == month

    def with_received(self, kind: MilkKind, value: bool) -> "DailyRecord":
        """Return a copy with one flag replaced."""
        return self.model_copy(update={kind.value: value})

    def with_reason(self, kind: MilkKind, text: str) -> "DailyRecord":
        """Return a copy with one reason replaced."""
        return self.model_copy(update={kind.reason_field: text})

    def to_wire(self) -> dict[str, object]:
        """Serialize with the camelCase keys used by stored data and backups."""
        return self.model_dump(by_alias=True)


def _flag(value: object) -> bool:
    return value if isinstance(value, bool) else False


def _text(value: object) -> str:
    return value if isinstance(value, str) else ""
