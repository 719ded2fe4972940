"""Domain models for prices and monthly statistics."""

from dataclasses import dataclass

from milk_tracker.domain.records import DailyRecord, MilkKind


@dataclass(frozen=True)
class PriceConfig:
    """Per-day price of each kind of milk."""

    cow_price: float
    buffalo_price: float

    def price_for(self, kind: MilkKind) -> float:
        """Return the daily price for a kind of milk."""
        return self.cow_price if kind is MilkKind.COW else self.buffalo_price


@dataclass(frozen=True)
class MonthlyStats:
    """Totals for the records of one month."""

    total_cow_days: int
    total_buffalo_days: int
    active_days: int
    cow_cost: float
    buffalo_cost: float

    @property
    def total_cost(self) -> float:
        return self.cow_cost + self.buffalo_cost


@dataclass(frozen=True)
class MonthSummary:
    """Statistics and not-received reasons for a month."""

    year: int
    month: int
    label: str
    prices: PriceConfig
    stats: MonthlyStats
    reasons: list[DailyRecord]


@dataclass(frozen=True)
class CalendarDay:
    """A single cell of the month calendar."""

    date: str
    weekday: int
    cow: bool
    buffalo: bool
    has_reason: bool
    is_today: bool


def format_amount(value: float) -> str:
    """Render a price or cost without a trailing ".0" for whole numbers."""
    if float(value).is_integer():
        return str(int(value))
    return f"{value:.2f}".rstrip("0")
