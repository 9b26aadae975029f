"""Concurrent external dividend lookups with stale-batch detection.

Each ``fetch`` runs one provider call per symbol on a thread pool. Batches
are numbered; ``invalidate()`` (called when the holdings change) moves the
current generation on, and a batch that finishes under an older generation
comes back marked ``stale`` so callers can drop it.
"""

from __future__ import annotations

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor, as_completed
from concurrent.futures import TimeoutError as FuturesTimeoutError
from dataclasses import dataclass, field
from datetime import date

from divly.errors import PayoutError
from divly.models.dividend import DividendEvent
from divly.providers.base import BaseDividendProvider

logger = logging.getLogger(__name__)


@dataclass
class FeedResult:
    """Outcome of one lookup batch.

    Attributes:
        generation: Batch number the results belong to.
        events: Distributions from every symbol that succeeded.
        failed: Symbol → error message for lookups that failed.
        stale: True when the batch was superseded before it finished.
    """

    generation: int
    events: list[DividendEvent] = field(default_factory=list)
    failed: dict[str, str] = field(default_factory=dict)
    stale: bool = False

    @property
    def warning(self) -> str | None:
        """Single user-facing notice covering every failed symbol."""
        if not self.failed:
            return None
        symbols = ", ".join(sorted(self.failed))
        return f"Could not load dividend data for {symbols}; showing projected payouts only."


class DividendFeed:
    """Fan-out dividend lookups against one provider."""

    def __init__(
        self,
        provider: BaseDividendProvider,
        max_workers: int | None = None,
        timeout_seconds: float | None = None,
    ) -> None:
        self.provider = provider
        self.max_workers = max_workers
        self.timeout_seconds = timeout_seconds
        self._generation = 0
        self._lock = threading.Lock()

    @property
    def generation(self) -> int:
        with self._lock:
            return self._generation

    def invalidate(self) -> int:
        """Supersede every in-flight batch and return the new generation."""
        with self._lock:
            self._generation += 1
            return self._generation

    def is_current(self, generation: int) -> bool:
        with self._lock:
            return generation == self._generation

    def fetch(self, symbols: list[str], start: date, end: date) -> FeedResult:
        """Look up every symbol concurrently; failures are per symbol."""
        generation = self.invalidate()
        unique = list(dict.fromkeys(s.upper() for s in symbols))
        result = FeedResult(generation=generation)
        if not unique:
            return result

        workers = min(len(unique), self.max_workers or len(unique))
        pool = ThreadPoolExecutor(max_workers=workers, thread_name_prefix="divly-feed")
        futures: dict[Future, str] = {
            pool.submit(self.provider.get_dividends, symbol, start, end): symbol
            for symbol in unique
        }
        try:
            for future in as_completed(futures, timeout=self.timeout_seconds):
                symbol = futures[future]
                try:
                    result.events.extend(future.result())
                except PayoutError as exc:
                    result.failed[symbol] = exc.message
                    logger.warning(
                        "Dividend lookup for %s failed (%s): %s",
                        symbol, exc.code.value, exc.message,
                    )
                except Exception as exc:
                    result.failed[symbol] = str(exc)
                    logger.warning("Dividend lookup for %s failed: %s", symbol, exc)
        except FuturesTimeoutError:
            for future, symbol in futures.items():
                if not future.done():
                    result.failed[symbol] = f"timed out after {self.timeout_seconds}s"
            logger.warning(
                "Dividend lookup batch %d timed out; %d symbols pending",
                generation, sum(1 for f in futures if not f.done()),
            )
        finally:
            pool.shutdown(wait=False, cancel_futures=True)

        result.events.sort(key=lambda e: (e.ex_date, e.symbol))
        result.stale = not self.is_current(generation)
        if result.stale:
            logger.info("Dividend lookup batch %d superseded; discarding", generation)
        return result
