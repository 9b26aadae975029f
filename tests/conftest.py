"""Shared fixtures for divly tests."""

from __future__ import annotations

import sys
from datetime import date
from pathlib import Path

import pytest

# Ensure src/ is on the path for editable-style imports
sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "src"))

from divly.models.dividend import DividendEvent
from divly.models.holding import DividendHistoryEntry, Holding, PayoutFrequency
from divly.models.payout import PayoutEvent, PayoutType
from divly.providers.mock import MockProvider


@pytest.fixture
def mock_provider() -> MockProvider:
    return MockProvider()


@pytest.fixture
def aapl() -> Holding:
    """Quarterly payer with history, announced next dates and month hints."""
    return Holding(
        symbol="AAPL",
        shares=10,
        current_price=170.0,
        dividend_yield=0.6,
        payout_frequency=PayoutFrequency.QUARTERLY,
        typical_payment_months=(1, 4, 7, 10),  # Feb, May, Aug, Nov
        next_ex_date=date(2024, 5, 10),
        next_payment_date=date(2024, 5, 16),
        dividend_history=(
            DividendHistoryEntry(date(2024, 2, 9), date(2024, 2, 15), 0.24, 4.3),
            DividendHistoryEntry(date(2023, 11, 10), date(2023, 11, 16), 0.24, 4.3),
            DividendHistoryEntry(date(2023, 8, 11), date(2023, 8, 17), 0.24, 4.3),
            DividendHistoryEntry(date(2023, 5, 12), date(2023, 5, 18), 0.24, 4.3),
        ),
        dividend_growth_rate=5.8,
    )


@pytest.fixture
def att() -> Holding:
    """Monthly payer on the 1st, no history or announced dates."""
    return Holding(
        symbol="T",
        shares=20,
        current_price=16.0,
        dividend_yield=6.5,
        payout_frequency=PayoutFrequency.MONTHLY,
        typical_payment_day=1,
        dividend_growth_rate=2.1,
    )


@pytest.fixture
def msft() -> Holding:
    """Quarterly payer without schedule hints."""
    return Holding(
        symbol="MSFT",
        shares=5,
        current_price=320.0,
        dividend_yield=0.8,
        payout_frequency=PayoutFrequency.QUARTERLY,
        next_payment_date=date(2024, 1, 31),
        dividend_growth_rate=10.2,
    )


@pytest.fixture
def sample_events() -> list[PayoutEvent]:
    return [
        PayoutEvent("AAPL", 0.24, date(2024, 3, 15), PayoutType.PAYMENT_DATE, shares=10),
        PayoutEvent("AAPL", 0.24, date(2024, 3, 20), PayoutType.EX_DATE, shares=10),
        PayoutEvent("MSFT", 0.75, date(2024, 4, 1), PayoutType.PAYMENT_DATE, shares=5),
    ]


@pytest.fixture
def aapl_dividends() -> list[DividendEvent]:
    return [
        DividendEvent("AAPL", date(2024, 2, 9), 0.24, pay_date=date(2024, 2, 15)),
        DividendEvent("AAPL", date(2024, 5, 10), 0.25, pay_date=date(2024, 5, 16)),
    ]
