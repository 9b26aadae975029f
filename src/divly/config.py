"""Payout calendar configuration."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import time
from enum import Enum


class PayoutProviderType(Enum):
    """Supported external dividend data backends."""

    MOCK = "mock"


class StoreBackend(Enum):
    """Where manual payouts are kept between sessions."""

    MEMORY = "memory"
    JSON = "json"
    PARQUET = "parquet"


@dataclass
class PayoutCalendarConfig:
    """Configuration for PayoutCalendarManager.

    Attributes:
        horizon_cycles: Number of forward payout cycles projected per holding.
        ex_date_offset_days: Calendar days between a projected payment date
            and its derived ex-dividend date.
        store_backend: Manual payout store ("memory", "json" or "parquet").
        store_path: File used by the json/parquet stores.
        event_time: Exchange-local time of day used for exported events.
        provider: External dividend data backend, or None to skip lookups.
        fetch_lookback_days: Days of dividend history requested per symbol.
        fetch_lookahead_days: Days of announced dividends requested per symbol.
        fetch_max_workers: Thread cap for concurrent lookups (None = one
            worker per symbol).
        fetch_timeout_seconds: Wall-clock limit for a whole lookup batch.
    """

    horizon_cycles: int = 12
    ex_date_offset_days: int = 2
    store_backend: StoreBackend = StoreBackend.MEMORY
    store_path: str = "data/manual_payouts.json"
    event_time: time = time(9, 30)
    provider: PayoutProviderType | None = None
    fetch_lookback_days: int = 365
    fetch_lookahead_days: int = 365
    fetch_max_workers: int | None = None
    fetch_timeout_seconds: float | None = None
