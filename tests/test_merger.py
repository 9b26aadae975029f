"""Tests for merging and manual payout management."""

from datetime import date

import pytest

from divly.errors import PayoutError, PayoutErrorCode
from divly.merger import ManualPayouts, merge
from divly.models.payout import PayoutEvent, PayoutType
from divly.store import MemoryPayoutStore


def _event(symbol, day, payout_type=PayoutType.PAYMENT_DATE, amount=0.24, **kwargs):
    return PayoutEvent(symbol, amount, day, payout_type, **kwargs)


class TestMerge:
    def test_manual_overrides_auto_on_same_day(self):
        auto = [_event("AAPL", date(2024, 5, 16)), _event("AAPL", date(2024, 8, 15))]
        manual = [_event("AAPL", date(2024, 5, 16), amount=0.25, auto=False, source="manual")]
        merged = merge(auto, [], manual)
        assert len(merged) == 2
        on_day = [e for e in merged if e.date == date(2024, 5, 16)]
        assert on_day == manual

    def test_override_ignores_event_type(self):
        auto = [_event("AAPL", date(2024, 5, 16), PayoutType.EX_DATE)]
        manual = [_event("AAPL", date(2024, 5, 16), auto=False)]
        assert merge(auto, [], manual) == manual

    def test_other_symbols_untouched(self):
        auto = [_event("MSFT", date(2024, 5, 16))]
        manual = [_event("AAPL", date(2024, 5, 16), auto=False)]
        assert len(merge(auto, [], manual)) == 2

    def test_override_ignores_symbol_case(self):
        auto = [_event("AAPL", date(2024, 5, 16))]
        manual = [_event("aapl", date(2024, 5, 16), auto=False)]
        assert merge(auto, [], manual) == manual

    def test_api_events_appended_as_is(self):
        auto = [_event("AAPL", date(2024, 5, 16))]
        api = [_event("AAPL", date(2024, 5, 16), source="api")]
        manual = [_event("AAPL", date(2024, 5, 16), auto=False)]
        merged = merge(auto, api, manual)
        assert merged == manual + api

    def test_composition_order(self):
        auto = [_event("KO", date(2024, 4, 1))]
        api = [_event("PEP", date(2024, 3, 29))]
        manual = [_event("JNJ", date(2024, 3, 5), auto=False)]
        assert merge(auto, api, manual) == auto + manual + api

    def test_empty_sources(self):
        assert merge([], [], []) == []


class TestManualPayouts:
    def test_create_marks_manual_and_adjusts_date(self):
        manual = ManualPayouts()
        # 2024-03-29 is Good Friday
        stored = manual.create(_event("AAPL", date(2024, 3, 29)))
        assert stored.date == date(2024, 4, 1)
        assert stored.auto is False
        assert stored.source == "manual"
        assert manual.list() == [stored]

    def test_create_upper_cases_symbol(self):
        stored = ManualPayouts().create(_event("aapl", date(2024, 5, 16)))
        assert stored.symbol == "AAPL"

    def test_edit_with_changes(self):
        manual = ManualPayouts()
        manual.create(_event("AAPL", date(2024, 5, 16)))
        edited = manual.edit(0, amount=0.25, date=date(2024, 5, 18))
        assert edited.amount == 0.25
        assert edited.date == date(2024, 5, 20)
        assert manual.list() == [edited]

    def test_edit_with_whole_event(self):
        manual = ManualPayouts()
        manual.create(_event("AAPL", date(2024, 5, 16)))
        edited = manual.edit(0, _event("MSFT", date(2024, 6, 13), amount=0.75))
        assert edited.symbol == "MSFT"
        assert edited.auto is False

    def test_edit_missing_index(self):
        manual = ManualPayouts()
        with pytest.raises(PayoutError) as exc_info:
            manual.edit(0, amount=1.0)
        assert exc_info.value.code == PayoutErrorCode.NOT_FOUND

    def test_delete_confirmed(self):
        manual = ManualPayouts()
        stored = manual.create(_event("AAPL", date(2024, 5, 16)))
        assert manual.delete(0, confirm=True) == stored
        assert manual.list() == []

    def test_delete_declined_keeps_event(self):
        manual = ManualPayouts()
        manual.create(_event("AAPL", date(2024, 5, 16)))
        assert manual.delete(0, confirm=False) is None
        assert len(manual.list()) == 1

    def test_delete_callback_sees_event(self):
        manual = ManualPayouts()
        manual.create(_event("AAPL", date(2024, 5, 16)))
        manual.create(_event("MSFT", date(2024, 6, 13)))
        seen = []

        def confirm(event):
            seen.append(event.symbol)
            return event.symbol == "MSFT"

        assert manual.delete(0, confirm) is None
        assert manual.delete(1, confirm).symbol == "MSFT"
        assert seen == ["AAPL", "MSFT"]
        assert [e.symbol for e in manual.list()] == ["AAPL"]

    def test_delete_missing_index(self):
        with pytest.raises(PayoutError):
            ManualPayouts().delete(3, confirm=True)

    def test_shares_backing_store(self):
        store = MemoryPayoutStore()
        ManualPayouts(store).create(_event("AAPL", date(2024, 5, 16)))
        assert len(store.list()) == 1
