"""Calendar index over payout events with per-day and per-month aggregates.

Months are 0-indexed (0=January) to match the holding schedule hints.
Range queries are inclusive on both ends unless ``inclusive=False``.
"""

from __future__ import annotations

from calendar import monthrange
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from datetime import date, timedelta
from types import MappingProxyType

import pandas as pd

from divly.calendar import exchange_today
from divly.models.payout import PayoutEvent, PayoutType


@dataclass(frozen=True)
class DaySummary:
    """Events on one calendar day.

    Attributes:
        date: The day.
        events: Events dated that day, in input order.
        total_amount: Sum of per-share amounts.
        has_ex_date: At least one ex-dividend event.
        has_payment: At least one payment event.
    """

    date: date
    events: tuple[PayoutEvent, ...]
    total_amount: float
    has_ex_date: bool
    has_payment: bool

    @property
    def count(self) -> int:
        return len(self.events)


@dataclass(frozen=True)
class CalendarIndex:
    """Read-only day index of a payout event collection.

    Attributes:
        days: ISO day to summary, in ascending day order. Read-only.
    """

    days: Mapping[str, DaySummary] = field(default_factory=lambda: MappingProxyType({}))

    # ---- day lookups ----

    def dates(self) -> list[date]:
        return [s.date for s in self.days.values()]

    def events_on(self, day: date) -> list[PayoutEvent]:
        summary = self.days.get(day.isoformat())
        return list(summary.events) if summary else []

    def daily_total(self, day: date) -> float:
        summary = self.days.get(day.isoformat())
        return summary.total_amount if summary else 0.0

    # ---- range queries ----

    def events_in_range(
        self, start: date, end: date, inclusive: bool = True,
    ) -> list[PayoutEvent]:
        """Events dated between start and end, ascending by date.

        With ``inclusive=False`` both bounds are excluded.
        """
        events: list[PayoutEvent] = []
        for summary in self.days.values():
            d = summary.date
            inside = start <= d <= end if inclusive else start < d < end
            if inside:
                events.extend(summary.events)
        return events

    def upcoming(self, days: int = 30, today: date | None = None) -> list[PayoutEvent]:
        """Events from today through the next ``days`` days."""
        start = today or exchange_today()
        return self.events_in_range(start, start + timedelta(days=days))

    def filter(
        self,
        symbols: Iterable[str] | None = None,
        min_amount: float | None = None,
        max_amount: float | None = None,
        start: date | None = None,
        end: date | None = None,
        types: Iterable[PayoutType] | None = None,
    ) -> list[PayoutEvent]:
        """Events matching every given criterion, ascending by date."""
        wanted_symbols = {s.upper() for s in symbols} if symbols is not None else None
        wanted_types = set(types) if types is not None else None
        result: list[PayoutEvent] = []
        for summary in self.days.values():
            if start is not None and summary.date < start:
                continue
            if end is not None and summary.date > end:
                continue
            for e in summary.events:
                if wanted_symbols is not None and e.symbol.upper() not in wanted_symbols:
                    continue
                if wanted_types is not None and e.type not in wanted_types:
                    continue
                if min_amount is not None and e.amount < min_amount:
                    continue
                if max_amount is not None and e.amount > max_amount:
                    continue
                result.append(e)
        return result

    # ---- month aggregates ----

    def month_events(self, year: int, month: int) -> list[PayoutEvent]:
        first, last = _month_bounds(year, month)
        return self.events_in_range(first, last)

    def month_total(self, year: int, month: int) -> float:
        """Sum of per-share amounts of every event in the month."""
        return sum(e.amount for e in self.month_events(year, month))

    def month_count(self, year: int, month: int) -> int:
        return len(self.month_events(year, month))

    def month_income(self, year: int, month: int) -> float:
        """Position-level cash from payment-date events in the month."""
        return sum(
            e.total_amount for e in self.month_events(year, month)
            if e.type is PayoutType.PAYMENT_DATE
        )

    def monthly_totals(self, year: int) -> list[float]:
        return [self.month_total(year, m) for m in range(12)]

    def to_frame(self) -> pd.DataFrame:
        """One row per day: date, count, total_amount, has_ex_date, has_payment."""
        rows = [
            {
                "date": s.date,
                "count": s.count,
                "total_amount": s.total_amount,
                "has_ex_date": s.has_ex_date,
                "has_payment": s.has_payment,
            }
            for s in self.days.values()
        ]
        df = pd.DataFrame(
            rows, columns=["date", "count", "total_amount", "has_ex_date", "has_payment"],
        )
        df["date"] = pd.to_datetime(df["date"])
        return df


def build_index(events: Iterable[PayoutEvent]) -> CalendarIndex:
    """Group events by ISO day into a new, date-ordered index."""
    grouped: dict[str, list[PayoutEvent]] = {}
    for e in events:
        grouped.setdefault(e.date.isoformat(), []).append(e)

    days: dict[str, DaySummary] = {}
    for key in sorted(grouped):
        day_events = tuple(grouped[key])
        days[key] = DaySummary(
            date=day_events[0].date,
            events=day_events,
            total_amount=sum(e.amount for e in day_events),
            has_ex_date=any(e.type is PayoutType.EX_DATE for e in day_events),
            has_payment=any(e.type is PayoutType.PAYMENT_DATE for e in day_events),
        )
    return CalendarIndex(days=MappingProxyType(days))


def _month_bounds(year: int, month: int) -> tuple[date, date]:
    if not 0 <= month <= 11:
        raise ValueError(f"month must be 0-11 (0=January), got {month}")
    last_day = monthrange(year, month + 1)[1]
    return date(year, month + 1, 1), date(year, month + 1, last_day)
