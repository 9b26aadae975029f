"""Merging auto, external and manual payouts into one event list."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import replace
from typing import Any, Union

from divly.calendar import adjust_to_business_day
from divly.models.payout import PayoutEvent
from divly.store import MemoryPayoutStore, PayoutStore

Confirmation = Union[bool, Callable[[PayoutEvent], bool]]


def merge(
    auto_events: Iterable[PayoutEvent],
    api_events: Iterable[PayoutEvent],
    manual_events: Iterable[PayoutEvent],
) -> list[PayoutEvent]:
    """Combine the three payout sources.

    Auto events whose (symbol, day) key matches a manual event are dropped;
    manual events follow, then external events, which are appended as-is.
    Order beyond that composition is not significant.
    """
    manual = list(manual_events)
    manual_keys = {e.key for e in manual}
    merged = [e for e in auto_events if e.key not in manual_keys]
    merged.extend(manual)
    merged.extend(api_events)
    return merged


class ManualPayouts:
    """User-entered payouts on top of a ``PayoutStore``.

    Every stored date is moved onto a trading day first and symbols are
    upper-cased to match the merge key.
    """

    def __init__(self, store: PayoutStore | None = None) -> None:
        self.store = store or MemoryPayoutStore()

    def list(self) -> list[PayoutEvent]:
        return self.store.list()

    def create(self, event: PayoutEvent) -> PayoutEvent:
        stored = self._as_manual(event)
        self.store.create(stored)
        return stored

    def edit(self, index: int, event: PayoutEvent | None = None, **changes: Any) -> PayoutEvent:
        """Replace the payout at ``index``.

        Pass a whole event, or field changes applied to the current one.
        """
        if event is None:
            event = replace(self.store.get(index), **changes)
        stored = self._as_manual(event)
        self.store.update(index, stored)
        return stored

    def delete(self, index: int, confirm: Confirmation) -> PayoutEvent | None:
        """Remove the payout at ``index`` once the user confirms.

        Args:
            index: Position in ``list()``.
            confirm: True, or a callable shown the event that returns
                whether to proceed.

        Returns:
            The removed event, or None when the deletion was declined.
        """
        current = self.store.get(index)
        approved = confirm(current) if callable(confirm) else bool(confirm)
        if not approved:
            return None
        return self.store.delete(index)

    @staticmethod
    def _as_manual(event: PayoutEvent) -> PayoutEvent:
        return replace(
            event,
            symbol=event.symbol.upper(),
            date=adjust_to_business_day(event.date),
            auto=False,
            source="manual",
        )
