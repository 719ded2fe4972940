"""Tests for month helpers."""

from datetime import date

import pytest

from milk_tracker.domain.months import month_days, month_label, shift_month


def test_month_label_is_gujarati() -> None:
    assert month_label(2026, 10) == "ઑક્ટોબર 2026"


def test_shift_month_crosses_year_boundaries() -> None:
    assert shift_month(2024, 12, 1) == date(2025, 1, 1)
    assert shift_month(2024, 1, -1) == date(2023, 12, 1)
    assert shift_month(2024, 5, -17) == date(2022, 12, 1)


def test_month_days_handles_leap_years() -> None:
    assert len(month_days(2024, 2)) == 29
    assert len(month_days(2023, 2)) == 28


def test_shift_month_rejects_years_outside_date_range() -> None:
    with pytest.raises(ValueError):
        shift_month(9999, 12, 1)
    with pytest.raises(ValueError):
        shift_month(1, 1, -1)
    with pytest.raises(ValueError):
        shift_month(2024, 1, 10**20)
