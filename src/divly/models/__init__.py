"""Payout calendar models."""

from divly.models.dividend import DividendEvent, DividendRecord
from divly.models.holding import DividendHistoryEntry, Holding, PayoutFrequency
from divly.models.payout import PayoutEvent, PayoutType

__all__ = [
    "Holding",
    "PayoutFrequency",
    "DividendHistoryEntry",
    "DividendRecord",
    "DividendEvent",
    "PayoutEvent",
    "PayoutType",
]
