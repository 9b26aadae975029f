"""divly — dividend payout projection and calendar engine.

Projects upcoming ex-dividend and payment dates for a portfolio on the NYSE
business calendar, merges them with received, externally reported and
user-entered payouts, and indexes the result by day and month.

Quick start::

    from divly import create_manager_from_env
    mgr = create_manager_from_env()
    mgr.set_holdings(holdings)
    calendar = mgr.build_calendar()
    upcoming = calendar.upcoming(days=30)
"""

from __future__ import annotations

import os
from datetime import time

from dotenv import load_dotenv

from divly.aggregator import CalendarIndex, DaySummary, build_index
from divly.calendar import (
    adjust_to_business_day,
    is_market_holiday,
    is_trading_day,
    is_weekend,
    next_business_day,
    previous_business_day,
)
from divly.config import PayoutCalendarConfig, PayoutProviderType, StoreBackend
from divly.errors import PayoutError, PayoutErrorCode
from divly.feed import DividendFeed, FeedResult
from divly.ics import generate_ics
from divly.manager import PayoutCalendarManager
from divly.merger import ManualPayouts, merge
from divly.models.dividend import DividendEvent, DividendRecord
from divly.models.holding import DividendHistoryEntry, Holding, PayoutFrequency
from divly.models.payout import PayoutEvent, PayoutType
from divly.projector import project_payouts, project_portfolio
from divly.store import JsonPayoutStore, MemoryPayoutStore, ParquetPayoutStore, PayoutStore

__version__ = "0.1.0"

__all__ = [
    # Manager
    "PayoutCalendarManager",
    "create_manager_from_env",
    # Config
    "PayoutCalendarConfig",
    "PayoutProviderType",
    "StoreBackend",
    # Errors
    "PayoutError",
    "PayoutErrorCode",
    # Models
    "Holding",
    "PayoutFrequency",
    "DividendHistoryEntry",
    "DividendRecord",
    "DividendEvent",
    "PayoutEvent",
    "PayoutType",
    # Business calendar
    "is_weekend",
    "is_market_holiday",
    "is_trading_day",
    "next_business_day",
    "previous_business_day",
    "adjust_to_business_day",
    # Projection, merge, index
    "project_payouts",
    "project_portfolio",
    "merge",
    "ManualPayouts",
    "build_index",
    "CalendarIndex",
    "DaySummary",
    # Stores
    "PayoutStore",
    "MemoryPayoutStore",
    "JsonPayoutStore",
    "ParquetPayoutStore",
    # External data
    "DividendFeed",
    "FeedResult",
    # Export
    "generate_ics",
]


def create_manager_from_env() -> PayoutCalendarManager:
    """Zero-config factory that reads settings from env vars (and ``.env``).

    Environment variables:
        DIVLY_HORIZON_CYCLES: Forward payout cycles per holding (default: 12).
        DIVLY_EX_OFFSET_DAYS: Days from payment back to ex-date (default: 2).
        DIVLY_STORE: Manual payout store: "memory", "json" or "parquet"
            (default: "memory").
        DIVLY_STORE_PATH: Store file (default: "data/manual_payouts.json").
        DIVLY_EVENT_TIME: Exported event time, HH:MM exchange-local
            (default: "09:30").
        DIVLY_PROVIDER: External dividend provider, e.g. "mock" (default: none).
        DIVLY_FETCH_MAX_WORKERS: Lookup thread cap (default: one per symbol).
        DIVLY_FETCH_TIMEOUT: Lookup batch timeout in seconds (default: none).
    """
    load_dotenv()

    provider_name = os.getenv("DIVLY_PROVIDER", "").strip()
    max_workers = os.getenv("DIVLY_FETCH_MAX_WORKERS")
    timeout = os.getenv("DIVLY_FETCH_TIMEOUT")

    config = PayoutCalendarConfig(
        horizon_cycles=int(os.getenv("DIVLY_HORIZON_CYCLES", "12")),
        ex_date_offset_days=int(os.getenv("DIVLY_EX_OFFSET_DAYS", "2")),
        store_backend=StoreBackend(os.getenv("DIVLY_STORE", "memory")),
        store_path=os.getenv("DIVLY_STORE_PATH", "data/manual_payouts.json"),
        event_time=time.fromisoformat(os.getenv("DIVLY_EVENT_TIME", "09:30")),
        provider=PayoutProviderType(provider_name) if provider_name else None,
        fetch_max_workers=int(max_workers) if max_workers else None,
        fetch_timeout_seconds=float(timeout) if timeout else None,
    )

    return PayoutCalendarManager(config)
