"""Payout event data model."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import date
from enum import Enum
from typing import Any


class PayoutType(Enum):
    """Which side of a distribution an event marks."""

    EX_DATE = "ex-date"
    PAYMENT_DATE = "payment-date"

    @property
    def label(self) -> str:
        return "Ex-Date" if self is PayoutType.EX_DATE else "Payment"


@dataclass(frozen=True)
class PayoutEvent:
    """A single calendar entry for one holding.

    Auto events are derived from holdings and dividend records on every
    pass and never persisted. Manual events come from the user and win
    over an auto event at the same ``key``.

    Attributes:
        symbol: Ticker symbol.
        amount: Dividend amount per share.
        date: Exchange-local day of the event.
        type: Ex-dividend or payment date.
        auto: True for system-generated events.
        growth: Payout growth, in percent.
        source: Origin tag ("history", "next", "projection", "record",
            "api" or "manual").
        priority: User-assigned priority label.
        notification_timing: User-chosen reminder timing.
        shares: Shares held, used for the position-level amount.
    """

    symbol: str
    amount: float
    date: date
    type: PayoutType
    auto: bool = True
    growth: float | None = None
    source: str | None = None
    priority: str | None = None
    notification_timing: str | None = None
    shares: float = 0.0

    @property
    def key(self) -> tuple[str, str]:
        """Merge key: (upper-cased symbol, ISO day)."""
        return (self.symbol.upper(), self.date.isoformat())

    @property
    def total_amount(self) -> float:
        """Cash for the whole position."""
        return self.amount * self.shares

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["date"] = self.date.isoformat()
        data["type"] = self.type.value
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PayoutEvent:
        return cls(
            symbol=data["symbol"],
            amount=float(data["amount"]),
            date=date.fromisoformat(str(data["date"])[:10]),
            type=PayoutType(data["type"]),
            auto=bool(data.get("auto", True)),
            growth=data.get("growth"),
            source=data.get("source"),
            priority=data.get("priority"),
            notification_timing=data.get("notification_timing"),
            shares=float(data.get("shares") or 0.0),
        )
