"""Tests for the daily record model."""

import pytest
from pydantic import ValidationError

from milk_tracker.domain.records import DailyRecord, MilkKind


def test_empty_record_is_zero_value() -> None:
    record = DailyRecord.empty("2024-03-05")

    assert record.to_wire() == {
        "date": "2024-03-05",
        "cow": False,
        "buffalo": False,
        "cowReason": "",
        "buffaloReason": "",
    }


def test_reason_hidden_when_milk_received() -> None:
    record = DailyRecord(date="2024-01-02", cow=True, cow_reason="stale")

    assert record.visible_reason(MilkKind.COW) == ""
    assert record.has_visible_reason is False


def test_reason_visible_when_milk_not_received() -> None:
    record = DailyRecord(date="2024-01-02", cow=True, buffalo_reason="sick")

    assert record.visible_reason(MilkKind.BUFFALO) == "sick"
    assert record.has_visible_reason is True


def test_model_validate_accepts_camel_case_and_null_reason() -> None:
    record = DailyRecord.model_validate(
        {"date": "2024-01-02", "cow": False, "buffalo": True, "cowReason": None}
    )

    assert record.cow_reason == ""
    assert record.buffalo is True


@pytest.mark.parametrize(
    "payload",
    [
        {"date": "2024-02-30", "cow": True, "buffalo": False},
        {"date": "02/01/2024", "cow": True, "buffalo": False},
        {"date": "2024-01-02", "cow": "yes", "buffalo": False},
        {"cow": True},
    ],
)
def test_model_validate_rejects_malformed_rows(payload: dict) -> None:
    with pytest.raises(ValidationError):
        DailyRecord.model_validate(payload)


def test_from_raw_defaults_wrong_typed_fields() -> None:
    record = DailyRecord.from_raw(
        {"date": "2024-01-02", "cow": "yes", "buffalo": True, "buffaloReason": 5}
    )

    assert record == DailyRecord(date="2024-01-02", buffalo=True)


def test_from_raw_without_date_returns_none() -> None:
    assert DailyRecord.from_raw({"cow": True}) is None
    assert DailyRecord.from_raw("2024-01-02") is None


def test_in_month_uses_calendar_month() -> None:
    record = DailyRecord(date="2024-01-31")

    assert record.in_month(2024, 1)
    assert not record.in_month(2024, 2)
    assert not record.in_month(2023, 1)
