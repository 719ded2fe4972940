"""Month arithmetic and Gujarati month labels."""

import calendar
from datetime import MAXYEAR, MINYEAR, date

DECEMBER = 12

GUJARATI_MONTHS: tuple[str, ...] = (
    "જાન્યુઆરી",
    "ફેબ્રુઆરી",
    "માર્ચ",
    "એપ્રિલ",
    "મે",
    "જૂન",
    "જુલાઈ",
    "ઑગસ્ટ",
    "સપ્ટેમ્બર",
    "ઑક્ટોબર",
    "નવેમ્બર",
    "ડિસેમ્બર",
)


def month_label(year: int, month: int) -> str:
    """Return the long Gujarati label for a month, e.g. "ઑક્ટોબર 2026"."""
    return f"{GUJARATI_MONTHS[month - 1]} {year}"


def shift_month(year: int, month: int, offset: int) -> date:
    """Return the first day of the month ``offset`` months away."""
    index = year * DECEMBER + (month - 1) + offset
    target_year = index // DECEMBER
    if not MINYEAR <= target_year <= MAXYEAR:
        raise ValueError(f"Year {target_year} is out of range")
    return date(target_year, index % DECEMBER + 1, 1)


def month_days(year: int, month: int) -> list[date]:
    """Return every calendar day of a month in order."""
    _, count = calendar.monthrange(year, month)
    return [date(year, month, day) for day in range(1, count + 1)]


def sunday_first_weekday(day: date) -> int:
    """Weekday index with Sunday as 0, as used by the calendar grid."""
    return (day.weekday() + 1) % 7
