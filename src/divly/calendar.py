"""NYSE business calendar — weekends, holidays, business-day adjustment.

Holidays are generated from the exchange's observance rules rather than a
hand-maintained list, so any year in the supported range is covered. Dates
are evaluated in exchange-local time (America/New_York).
"""

from __future__ import annotations

from datetime import date, datetime, time, timedelta
from functools import lru_cache
from zoneinfo import ZoneInfo

from divly.errors import PayoutError, PayoutErrorCode

EXCHANGE_TZ = ZoneInfo("America/New_York")

# MLK Day has been an NYSE closure since 1998; the rules below assume it.
MIN_SUPPORTED_YEAR = 1998
MAX_SUPPORTED_YEAR = 2099

# Unscheduled full-day closures the rules cannot derive.
SPECIAL_CLOSURES: frozenset[date] = frozenset({
    date(2001, 9, 11),
    date(2001, 9, 12),
    date(2001, 9, 13),
    date(2001, 9, 14),
    date(2004, 6, 11),   # Reagan funeral
    date(2007, 1, 2),    # Ford funeral
    date(2012, 10, 29),  # Hurricane Sandy
    date(2012, 10, 30),
    date(2018, 12, 5),   # G.H.W. Bush funeral
    date(2025, 1, 9),    # Carter funeral
})


# ---- Fixed-date holidays ----

def _new_years(year: int) -> date | None:
    d = date(year, 1, 1)
    if d.weekday() == 6:  # Sunday → observed Monday
        return date(year, 1, 2)
    if d.weekday() == 5:  # Saturday → not observed
        return None
    return d


def _juneteenth(year: int) -> date | None:
    """Juneteenth, observed since 2022."""
    if year < 2022:
        return None
    return _observed(date(year, 6, 19))


def _independence_day(year: int) -> date:
    return _observed(date(year, 7, 4))


def _christmas(year: int) -> date:
    return _observed(date(year, 12, 25))


def _observed(d: date) -> date:
    """Saturday holidays move to Friday, Sunday holidays to Monday."""
    if d.weekday() == 5:
        return d - timedelta(days=1)
    if d.weekday() == 6:
        return d + timedelta(days=1)
    return d


# ---- Rule-based holidays (Nth weekday of month) ----

def _nth_weekday(year: int, month: int, weekday: int, n: int) -> date:
    """Get the nth occurrence of a weekday in a month (1-indexed)."""
    first = date(year, month, 1)
    delta = (weekday - first.weekday()) % 7
    return first + timedelta(days=delta, weeks=n - 1)


def _last_weekday(year: int, month: int, weekday: int) -> date:
    """Get the last occurrence of a weekday in a month."""
    if month == 12:
        last_day = date(year + 1, 1, 1) - timedelta(days=1)
    else:
        last_day = date(year, month + 1, 1) - timedelta(days=1)
    delta = (last_day.weekday() - weekday) % 7
    return last_day - timedelta(days=delta)


def _good_friday(year: int) -> date:
    """Good Friday (anonymous Gregorian algorithm for Easter)."""
    a = year % 19
    b, c = divmod(year, 100)
    d, e = divmod(b, 4)
    f = (b + 8) // 25
    g = (b - f + 1) // 3
    h = (19 * a + b - d - g + 15) % 30
    i, k = divmod(c, 4)
    l = (32 + 2 * e + 2 * i - h - k) % 7  # noqa: E741
    m = (a + 11 * h + 22 * l) // 451
    month = (h + l - 7 * m + 114) // 31
    day = ((h + l - 7 * m + 114) % 31) + 1
    return date(year, month, day) - timedelta(days=2)


def _check_year(year: int) -> None:
    if not MIN_SUPPORTED_YEAR <= year <= MAX_SUPPORTED_YEAR:
        raise PayoutError(
            f"No NYSE holiday rules for {year}; supported years are "
            f"{MIN_SUPPORTED_YEAR}-{MAX_SUPPORTED_YEAR}",
            code=PayoutErrorCode.UNSUPPORTED_DATE,
        )


@lru_cache(maxsize=256)
def _nyse_holidays(year: int) -> frozenset[date]:
    """All NYSE full-day closures for a given year."""
    _check_year(year)
    candidates = [
        _new_years(year),
        _nth_weekday(year, 1, 0, 3),   # MLK Day, 3rd Monday of January
        _nth_weekday(year, 2, 0, 3),   # Presidents' Day, 3rd Monday of February
        _good_friday(year),
        _last_weekday(year, 5, 0),     # Memorial Day, last Monday of May
        _juneteenth(year),
        _independence_day(year),
        _nth_weekday(year, 9, 0, 1),   # Labor Day, 1st Monday of September
        _nth_weekday(year, 11, 3, 4),  # Thanksgiving, 4th Thursday of November
        _christmas(year),
    ]
    holidays = {d for d in candidates if d is not None}
    holidays.update(d for d in SPECIAL_CLOSURES if d.year == year)
    return frozenset(holidays)


# ---- Timezone handling ----

def to_exchange_date(value: date | datetime) -> date:
    """Return the exchange-local calendar day for a date or datetime.

    Plain dates are taken to be exchange-local already. Naive datetimes are
    interpreted as exchange-local wall time; aware ones are converted.
    """
    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.date()
        return value.astimezone(EXCHANGE_TZ).date()
    return value


def exchange_today() -> date:
    """Today's date on the exchange."""
    return datetime.now(EXCHANGE_TZ).date()


def to_exchange_datetime(d: date, at: time) -> datetime:
    """Combine an exchange-local day and wall time into an aware datetime."""
    return datetime.combine(d, at, tzinfo=EXCHANGE_TZ)


# ---- Public API ----

def holidays_for_year(year: int) -> list[date]:
    """Sorted NYSE closures for a year."""
    return sorted(_nyse_holidays(year))


def is_weekend(value: date | datetime) -> bool:
    """Saturday or Sunday on the exchange."""
    return to_exchange_date(value).weekday() >= 5


def is_market_holiday(value: date | datetime) -> bool:
    """Check if a date is an NYSE holiday or special closure."""
    d = to_exchange_date(value)
    return d in _nyse_holidays(d.year)


def is_trading_day(value: date | datetime) -> bool:
    """Check if a date is a trading day (weekday and not a holiday)."""
    d = to_exchange_date(value)
    return d.weekday() < 5 and not is_market_holiday(d)


def next_business_day(value: date | datetime) -> date:
    """First trading day strictly after the given date."""
    d = to_exchange_date(value) + timedelta(days=1)
    while not is_trading_day(d):
        d += timedelta(days=1)
    return d


def previous_business_day(value: date | datetime) -> date:
    """Last trading day strictly before the given date."""
    d = to_exchange_date(value) - timedelta(days=1)
    while not is_trading_day(d):
        d -= timedelta(days=1)
    return d


def adjust_to_business_day(value: date | datetime) -> date:
    """The date itself when it is a trading day, else the next one."""
    d = to_exchange_date(value)
    if is_trading_day(d):
        return d
    return next_business_day(d)


def get_trading_dates(start: date, end: date) -> list[date]:
    """Return all trading dates in the range [start, end]."""
    dates: list[date] = []
    current = start
    while current <= end:
        if is_trading_day(current):
            dates.append(current)
        current += timedelta(days=1)
    return dates


def market_open_time(d: date) -> time:
    """Regular market open time (always 9:30 ET)."""
    return time(9, 30)
