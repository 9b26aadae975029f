"""Mock provider for testing and demos — no API keys required."""

from __future__ import annotations

from datetime import date

from divly.errors import PayoutError, PayoutErrorCode
from divly.models.dividend import DividendEvent
from divly.providers.base import BaseDividendProvider


class MockProvider(BaseDividendProvider):
    """In-memory provider that returns pre-loaded dividends.

    Use ``set_dividends`` to pre-load data and ``set_failure`` to make a
    symbol raise, for exercising partial-failure handling.
    """

    def __init__(self) -> None:
        self._dividends: dict[str, list[DividendEvent]] = {}
        self._failures: dict[str, PayoutError] = {}
        self.calls: list[str] = []

    # --- Pre-load helpers ---

    def set_dividends(self, symbol: str, events: list[DividendEvent]) -> None:
        self._dividends[symbol.upper()] = sorted(events, key=lambda e: e.ex_date)

    def set_failure(self, symbol: str, error: PayoutError | None = None) -> None:
        self._failures[symbol.upper()] = error or PayoutError(
            f"Lookup failed for {symbol.upper()}",
            code=PayoutErrorCode.PROVIDER_ERROR,
            retryable=True,
        )

    # --- Provider implementation ---

    def get_dividends(self, symbol: str, start: date, end: date) -> list[DividendEvent]:
        key = symbol.upper()
        self.calls.append(key)
        if key in self._failures:
            raise self._failures[key]
        return [e for e in self._dividends.get(key, []) if start <= e.ex_date <= end]
