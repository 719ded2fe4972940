"""Month-scoped statistics over daily records."""

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date

from milk_tracker.domain.months import month_days, month_label, sunday_first_weekday
from milk_tracker.domain.records import DailyRecord, MilkKind
from milk_tracker.domain.stats import CalendarDay, MonthlyStats, MonthSummary, PriceConfig
from milk_tracker.services.prices import PriceService
from milk_tracker.services.records import RecordService


@dataclass
class StatsService:
    """Derives month summaries from the current records and prices."""

    records: RecordService
    prices: PriceService

    def get_month(self, year: int, month: int) -> MonthSummary:
        """Return totals and not-received reasons for a month."""
        records = records_in_month(self.records.list_records(), year, month)
        prices = self.prices.current
        return MonthSummary(
            year=year,
            month=month,
            label=month_label(year, month),
            prices=prices,
            stats=compute_month_stats(records, prices),
            reasons=reasons_list(records),
        )

    def get_month_records(self, year: int, month: int) -> list[DailyRecord]:
        """Return the stored records of a month, oldest first."""
        records = records_in_month(self.records.list_records(), year, month)
        return sorted(records, key=lambda record: record.date)

    def get_calendar(
        self, year: int, month: int, today: date | None = None
    ) -> list[CalendarDay]:
        """Return one calendar cell per day of a month."""
        today = today or date.today()
        cells = []
        for day in month_days(year, month):
            record = self.records.get(day.isoformat())
            cells.append(
                CalendarDay(
                    date=record.date,
                    weekday=sunday_first_weekday(day),
                    cow=record.cow,
                    buffalo=record.buffalo,
                    has_reason=record.has_visible_reason,
                    is_today=day == today,
                )
            )
        return cells


def records_in_month(
    records: Iterable[DailyRecord], year: int, month: int
) -> list[DailyRecord]:
    """Return records whose date falls in the given month (1-12)."""
    return [record for record in records if record.in_month(year, month)]


def compute_month_stats(
    records: Iterable[DailyRecord], prices: PriceConfig
) -> MonthlyStats:
    """Count received days and price them. Records must be month-scoped."""
    cow_days = buffalo_days = active_days = 0
    for record in records:
        cow_days += record.cow
        buffalo_days += record.buffalo
        active_days += record.is_active
    return MonthlyStats(
        total_cow_days=cow_days,
        total_buffalo_days=buffalo_days,
        active_days=active_days,
        cow_cost=cow_days * prices.price_for(MilkKind.COW),
        buffalo_cost=buffalo_days * prices.price_for(MilkKind.BUFFALO),
    )


def reasons_list(records: Iterable[DailyRecord]) -> list[DailyRecord]:
    """Return records with a visible not-received reason, sorted by date."""
    return sorted(
        (record for record in records if record.has_visible_reason),
        key=lambda record: record.date,
    )
