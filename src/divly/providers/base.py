"""Abstract base class for external dividend data providers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date

from divly.models.dividend import DividendEvent


class BaseDividendProvider(ABC):
    """Abstract base for dividend lookups keyed by symbol and date range.

    Implementations are called from worker threads, one call per symbol,
    and should raise ``PayoutError`` for failures they can classify.
    """

    @abstractmethod
    def get_dividends(
        self,
        symbol: str,
        start: date,
        end: date,
    ) -> list[DividendEvent]:
        """Fetch distributions whose ex-date falls in a range.

        Args:
            symbol: Ticker symbol.
            start: First ex-date (inclusive).
            end: Last ex-date (inclusive).

        Returns:
            DividendEvent objects ordered by ex-date ascending.
        """
        ...

    def capabilities(self) -> set[str]:
        """Return the set of supported features."""
        return {"dividends"}
