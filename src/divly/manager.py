"""PayoutCalendarManager — projection, merge and calendar behind one object."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import date, timedelta
from pathlib import Path
from typing import Any

from divly.aggregator import CalendarIndex, build_index
from divly.calendar import exchange_today
from divly.config import PayoutCalendarConfig
from divly.feed import DividendFeed, FeedResult
from divly.ics import generate_ics, write_ics
from divly.merger import Confirmation, ManualPayouts, merge
from divly.models.dividend import DividendRecord
from divly.models.holding import Holding
from divly.models.payout import PayoutEvent
from divly.projector import external_to_events, project_portfolio, records_to_events
from divly.providers import create_provider
from divly.providers.base import BaseDividendProvider
from divly.quality import validate_holdings
from divly.store import PayoutStore, create_store, events_to_frame

logger = logging.getLogger(__name__)


class PayoutCalendarManager:
    """Central orchestrator: project -> merge -> index.

    Holds the session state the calendar needs: the current holdings,
    received dividend records, the latest external lookup results and the
    manual payout store.

    Usage::

        from divly import create_manager_from_env
        mgr = create_manager_from_env()
        mgr.set_holdings(holdings)
        calendar = mgr.build_calendar()
        march = calendar.month_total(2024, 2)
    """

    def __init__(
        self,
        config: PayoutCalendarConfig | None = None,
        provider: BaseDividendProvider | None = None,
        store: PayoutStore | None = None,
    ) -> None:
        self.config = config or PayoutCalendarConfig()

        if store is None:
            store = create_store(self.config.store_backend.value, self.config.store_path)
        self.manual = ManualPayouts(store)

        if provider is None and self.config.provider is not None:
            provider = create_provider(self.config.provider)
        self.feed: DividendFeed | None = None
        if provider is not None:
            self.feed = DividendFeed(
                provider,
                max_workers=self.config.fetch_max_workers,
                timeout_seconds=self.config.fetch_timeout_seconds,
            )

        self._holdings: list[Holding] = []
        self._records: list[DividendRecord] = []
        self._api_events: list[PayoutEvent] = []

    # ------------------------------------------------------------ holdings

    @property
    def holdings(self) -> list[Holding]:
        return list(self._holdings)

    def set_holdings(self, holdings: Iterable[Holding]) -> None:
        """Replace the portfolio; in-flight external lookups become stale."""
        self._holdings = list(holdings)
        if self.feed is not None:
            self.feed.invalidate()
        held = {h.symbol for h in self._holdings}
        self._api_events = [e for e in self._api_events if e.symbol in held]

        for symbol, result in validate_holdings(self._holdings).items():
            for check in result.failed_checks:
                logger.warning("%s: %s (%s)", symbol, check.name, check.message)

    # ------------------------------------------------------------- records

    def add_records(self, records: Iterable[DividendRecord]) -> None:
        """Append received dividends for this session."""
        self._records.extend(records)

    @property
    def records(self) -> list[DividendRecord]:
        return list(self._records)

    # ------------------------------------------------------------ external

    def refresh_external(self, today: date | None = None) -> FeedResult | None:
        """Look up external dividends for every holding.

        Results from a superseded batch are discarded. Returns None when no
        provider is configured.
        """
        if self.feed is None:
            return None
        today = today or exchange_today()
        start = today - timedelta(days=self.config.fetch_lookback_days)
        end = today + timedelta(days=self.config.fetch_lookahead_days)
        symbols = [h.symbol for h in self._holdings]

        result = self.feed.fetch(symbols, start, end)
        if result.stale:
            return result

        shares = {h.symbol: h.shares for h in self._holdings}
        self._api_events = external_to_events(result.events, shares)
        if result.warning:
            logger.warning(result.warning)
        logger.info(
            "Loaded %d external dividends for %d symbols (%d failed)",
            len(result.events), len(symbols), len(result.failed),
        )
        return result

    @property
    def api_events(self) -> list[PayoutEvent]:
        return list(self._api_events)

    # ------------------------------------------------------------ calendar

    def project(self, today: date | None = None) -> list[PayoutEvent]:
        """Auto events: projections plus received dividend records."""
        auto = project_portfolio(
            self._holdings,
            horizon_cycles=self.config.horizon_cycles,
            today=today,
            ex_offset_days=self.config.ex_date_offset_days,
        )
        auto.extend(records_to_events(self._records, self._holdings))
        return auto

    def events(self, today: date | None = None) -> list[PayoutEvent]:
        """Merged auto, manual and external events."""
        return merge(self.project(today), self._api_events, self.manual.list())

    def build_calendar(self, today: date | None = None) -> CalendarIndex:
        return build_index(self.events(today))

    # -------------------------------------------------------- manual CRUD

    def add_manual_payout(self, event: PayoutEvent) -> PayoutEvent:
        return self.manual.create(event)

    def edit_manual_payout(self, index: int, **changes: Any) -> PayoutEvent:
        return self.manual.edit(index, **changes)

    def delete_manual_payout(self, index: int, confirm: Confirmation) -> PayoutEvent | None:
        removed = self.manual.delete(index, confirm)
        if removed is None:
            logger.info("Deletion of manual payout %d declined", index)
        return removed

    # -------------------------------------------------------------- export

    def export_ics(
        self,
        path: Path | str | None = None,
        events: list[PayoutEvent] | None = None,
        today: date | None = None,
    ) -> str:
        """Render the calendar as iCalendar text, optionally writing it."""
        if events is None:
            events = sorted(self.events(today), key=lambda e: (e.date, e.symbol))
        payload = generate_ics(events, event_time=self.config.event_time)
        if path is not None:
            write_ics(path, payload)
        return payload

    def export_csv(
        self,
        path: Path | str,
        events: list[PayoutEvent] | None = None,
        today: date | None = None,
    ) -> Path:
        if events is None:
            events = sorted(self.events(today), key=lambda e: (e.date, e.symbol))
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        events_to_frame(events).to_csv(path, index=False, date_format="%Y-%m-%d")
        return path
