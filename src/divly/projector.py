"""Forward projection of dividend payouts from holdings.

A holding's calendar is built in three layers: its recorded history, its
announced next distribution, and a forward loop that walks the payout
schedule for a fixed number of cycles. Every projected date is moved onto
an NYSE trading day.
"""

from __future__ import annotations

from calendar import monthrange
from collections.abc import Iterable, Mapping
from datetime import date, timedelta

from dateutil.relativedelta import relativedelta

from divly.calendar import adjust_to_business_day, exchange_today
from divly.models.dividend import DividendEvent, DividendRecord
from divly.models.holding import Holding, PayoutFrequency
from divly.models.payout import PayoutEvent, PayoutType

DEFAULT_HORIZON_CYCLES = 12
DEFAULT_EX_OFFSET_DAYS = 2

# Projected quarterly/semi-annual/annual payers land mid-month.
TYPICAL_MONTH_PAYMENT_DAY = 15


def project_payouts(
    holding: Holding,
    horizon_cycles: int = DEFAULT_HORIZON_CYCLES,
    today: date | None = None,
    ex_offset_days: int = DEFAULT_EX_OFFSET_DAYS,
) -> list[PayoutEvent]:
    """Project the ex-date and payment-date events for one holding.

    Args:
        holding: Position to project.
        horizon_cycles: Number of forward payout cycles to generate.
        today: Starting point when the holding has no announced payment
            date. Defaults to today on the exchange.
        ex_offset_days: Calendar days between a projected payment date and
            its ex-dividend date.

    Returns:
        Auto events: two per history entry, two for the announced next
        payout when both of its dates are known, and ``2 * horizon_cycles``
        forward events. Holdings without a dividend yield yield nothing.
    """
    if not holding.dividend_yield:
        return []

    events: list[PayoutEvent] = []

    for entry in holding.dividend_history:
        events.extend(_event_pair(
            holding, entry.ex_date, entry.payment_date,
            entry.amount, entry.growth, "history",
        ))

    amount = per_share_amount(holding)
    latest = holding.latest_dividend

    if holding.next_ex_date and holding.next_payment_date:
        growth = (
            latest.growth
            if latest is not None and latest.growth is not None
            else holding.dividend_growth_rate
        )
        events.extend(_event_pair(
            holding, holding.next_ex_date, holding.next_payment_date,
            amount, growth, "next",
        ))

    origin = holding.next_payment_date or today or exchange_today()
    cursor = origin
    for cycle in range(1, horizon_cycles + 1):
        # cursor stays on the nominal schedule so weekend shifts don't accumulate
        cursor = _next_nominal_date(holding, cursor, origin, cycle)
        payment_date = adjust_to_business_day(cursor)
        ex_date = adjust_to_business_day(payment_date - timedelta(days=ex_offset_days))
        events.extend(_event_pair(
            holding, ex_date, payment_date,
            amount, holding.dividend_growth_rate, "projection",
        ))

    return events


def project_portfolio(
    holdings: Iterable[Holding],
    horizon_cycles: int = DEFAULT_HORIZON_CYCLES,
    today: date | None = None,
    ex_offset_days: int = DEFAULT_EX_OFFSET_DAYS,
) -> list[PayoutEvent]:
    """Project every holding and concatenate the results."""
    events: list[PayoutEvent] = []
    for holding in holdings:
        events.extend(project_payouts(holding, horizon_cycles, today, ex_offset_days))
    return events


def per_share_amount(holding: Holding) -> float:
    """Latest paid amount, else the yield-implied amount per payout."""
    latest = holding.latest_dividend
    if latest is not None:
        return latest.amount
    if not holding.dividend_yield:
        return 0.0
    frequency = holding.payout_frequency
    return holding.current_price * holding.dividend_yield / 100 / frequency.payments_per_year


def estimate_annual_income(holding: Holding) -> float:
    """Yield-implied dividend income of the whole position for a year."""
    if not holding.dividend_yield:
        return 0.0
    return holding.current_price * holding.shares * holding.dividend_yield / 100


def records_to_events(
    records: Iterable[DividendRecord],
    holdings: Iterable[Holding] | None = None,
) -> list[PayoutEvent]:
    """Turn received dividends into payment-date auto events."""
    shares = {h.symbol: h.shares for h in holdings or ()}
    return [
        PayoutEvent(
            symbol=r.symbol,
            amount=r.amount,
            date=r.date,
            type=PayoutType.PAYMENT_DATE,
            auto=True,
            source="record",
            shares=shares.get(r.symbol, 0.0),
        )
        for r in records
    ]


def external_to_events(
    records: Iterable[DividendEvent],
    shares: Mapping[str, float] | None = None,
) -> list[PayoutEvent]:
    """Turn externally reported distributions into ex/payment auto events.

    Records without a payment date contribute only their ex-date.
    """
    shares = shares or {}
    events: list[PayoutEvent] = []
    for r in records:
        held = shares.get(r.symbol, 0.0)
        events.append(PayoutEvent(
            symbol=r.symbol, amount=r.amount, date=r.ex_date,
            type=PayoutType.EX_DATE, auto=True, source="api", shares=held,
        ))
        if r.pay_date is not None:
            events.append(PayoutEvent(
                symbol=r.symbol, amount=r.amount, date=r.pay_date,
                type=PayoutType.PAYMENT_DATE, auto=True, source="api", shares=held,
            ))
    return events


# ---- internals ----

def _event_pair(
    holding: Holding,
    ex_date: date,
    payment_date: date,
    amount: float,
    growth: float | None,
    source: str,
) -> tuple[PayoutEvent, PayoutEvent]:
    common = dict(
        symbol=holding.symbol,
        amount=amount,
        auto=True,
        growth=growth,
        source=source,
        shares=holding.shares,
    )
    return (
        PayoutEvent(date=ex_date, type=PayoutType.EX_DATE, **common),
        PayoutEvent(date=payment_date, type=PayoutType.PAYMENT_DATE, **common),
    )


def _next_nominal_date(holding: Holding, current: date, origin: date, cycle: int) -> date:
    """Unadjusted payment date of the cycle following ``current``."""
    day = holding.typical_payment_day
    if (
        holding.payout_frequency is PayoutFrequency.MONTHLY
        and isinstance(day, int)
        and day >= 1
    ):
        following = current + relativedelta(months=1)
        return following.replace(day=min(day, monthrange(following.year, following.month)[1]))

    months = _valid_months(holding.typical_payment_months)
    if months:
        current_month = current.month - 1
        later = [m for m in months if m > current_month]
        if later:
            return date(current.year, later[0] + 1, TYPICAL_MONTH_PAYMENT_DAY)
        return date(current.year + 1, months[0] + 1, TYPICAL_MONTH_PAYMENT_DAY)

    # No usable schedule hints: step whole frequency periods from the origin.
    return origin + relativedelta(months=holding.payout_frequency.months * cycle)


def _valid_months(months: Iterable[int] | None) -> list[int]:
    if not months:
        return []
    return sorted({m for m in months if isinstance(m, int) and 0 <= m <= 11})
