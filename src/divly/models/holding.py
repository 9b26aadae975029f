"""Holding data model."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Any

from divly.errors import PayoutError, PayoutErrorCode


class PayoutFrequency(Enum):
    """Dividend payout cadence."""

    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    SEMI_ANNUAL = "semi-annual"
    ANNUAL = "annual"

    @property
    def months(self) -> int:
        """Calendar months between payouts."""
        return _MONTHS[self]

    @property
    def payments_per_year(self) -> int:
        return 12 // _MONTHS[self]


_MONTHS = {
    PayoutFrequency.MONTHLY: 1,
    PayoutFrequency.QUARTERLY: 3,
    PayoutFrequency.SEMI_ANNUAL: 6,
    PayoutFrequency.ANNUAL: 12,
}


@dataclass(frozen=True)
class DividendHistoryEntry:
    """One past distribution of a holding.

    Attributes:
        ex_date: Ex-dividend date.
        payment_date: Payment date.
        amount: Dividend amount per share.
        growth: Year-over-year growth of the payout, in percent.
    """

    ex_date: date
    payment_date: date
    amount: float
    growth: float | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> DividendHistoryEntry:
        return cls(
            ex_date=_parse_date(data.get("ex_date", data.get("exDate"))),
            payment_date=_parse_date(data.get("payment_date", data.get("paymentDate"))),
            amount=float(data["amount"]),
            growth=data.get("growth"),
        )


@dataclass(frozen=True)
class Holding:
    """A position in one dividend-paying security.

    Attributes:
        symbol: Ticker symbol, unique within a portfolio.
        shares: Number of shares held (non-negative).
        current_price: Latest price per share.
        dividend_yield: Trailing dividend yield, in percent.
        payout_frequency: How often the security pays.
        typical_payment_day: Day of month a monthly payer usually pays.
        typical_payment_months: 0-indexed months (0=January) in which a
            quarterly, semi-annual or annual payer usually pays.
        next_ex_date: Announced next ex-dividend date.
        next_payment_date: Announced next payment date.
        dividend_history: Past distributions, most recent first.
        dividend_growth_rate: 5-year average dividend growth, in percent.
        sector: Sector label.
        avg_price: Average cost per share.
    """

    symbol: str
    shares: float
    current_price: float
    dividend_yield: float | None
    payout_frequency: PayoutFrequency = PayoutFrequency.QUARTERLY
    typical_payment_day: int | None = None
    typical_payment_months: tuple[int, ...] | None = None
    next_ex_date: date | None = None
    next_payment_date: date | None = None
    dividend_history: tuple[DividendHistoryEntry, ...] = field(default_factory=tuple)
    dividend_growth_rate: float | None = None
    sector: str | None = None
    avg_price: float | None = None

    def __post_init__(self) -> None:
        if not self.symbol:
            raise PayoutError(
                "Holding symbol must not be empty",
                code=PayoutErrorCode.INVALID_HOLDING,
            )
        if self.shares < 0:
            raise PayoutError(
                f"{self.symbol}: shares must be >= 0, got {self.shares}",
                code=PayoutErrorCode.INVALID_HOLDING,
            )

    @property
    def latest_dividend(self) -> DividendHistoryEntry | None:
        return self.dividend_history[0] if self.dividend_history else None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Holding:
        """Build a holding from a snake_case or camelCase mapping."""

        def pick(*names: str) -> Any:
            for name in names:
                if data.get(name) is not None:
                    return data[name]
            return None

        months = pick("typical_payment_months", "typicalPaymentMonth", "typicalPaymentMonths")
        history = pick("dividend_history", "dividendHistory") or []
        frequency = pick("payout_frequency", "payoutFrequency") or "quarterly"
        next_ex = pick("next_ex_date", "nextExDate")
        next_pay = pick("next_payment_date", "nextPaymentDate")

        return cls(
            symbol=str(data["symbol"]).upper(),
            shares=float(data.get("shares", 0)),
            current_price=float(pick("current_price", "currentPrice") or 0.0),
            dividend_yield=pick("dividend_yield", "dividendYield"),
            payout_frequency=PayoutFrequency(frequency),
            typical_payment_day=pick("typical_payment_day", "typicalPaymentDay"),
            typical_payment_months=tuple(months) if months is not None else None,
            next_ex_date=_parse_date(next_ex) if next_ex else None,
            next_payment_date=_parse_date(next_pay) if next_pay else None,
            dividend_history=tuple(
                h if isinstance(h, DividendHistoryEntry) else DividendHistoryEntry.from_dict(h)
                for h in history
            ),
            dividend_growth_rate=pick("dividend_growth_rate", "dividendGrowthRate"),
            sector=pick("sector"),
            avg_price=pick("avg_price", "avgPrice"),
        )


def _parse_date(value: Any) -> date:
    if isinstance(value, date):
        return value
    if value is None:
        raise PayoutError("Missing date value", code=PayoutErrorCode.INVALID_HOLDING)
    try:
        return date.fromisoformat(str(value)[:10])
    except ValueError as exc:
        raise PayoutError(
            f"Invalid date: {value!r}",
            code=PayoutErrorCode.INVALID_HOLDING,
        ) from exc
