"""Tests for data models."""

from datetime import date

import pytest

from divly.errors import PayoutError, PayoutErrorCode
from divly.models.dividend import DividendEvent, DividendRecord
from divly.models.holding import DividendHistoryEntry, Holding, PayoutFrequency
from divly.models.payout import PayoutEvent, PayoutType


class TestPayoutFrequency:
    def test_months(self):
        assert PayoutFrequency.MONTHLY.months == 1
        assert PayoutFrequency.QUARTERLY.months == 3
        assert PayoutFrequency.SEMI_ANNUAL.months == 6
        assert PayoutFrequency.ANNUAL.months == 12

    def test_payments_per_year(self):
        assert PayoutFrequency.MONTHLY.payments_per_year == 12
        assert PayoutFrequency.QUARTERLY.payments_per_year == 4
        assert PayoutFrequency.SEMI_ANNUAL.payments_per_year == 2
        assert PayoutFrequency.ANNUAL.payments_per_year == 1

    def test_from_value(self):
        assert PayoutFrequency("semi-annual") is PayoutFrequency.SEMI_ANNUAL


class TestHolding:
    def test_defaults(self):
        h = Holding(symbol="KO", shares=10, current_price=60.0, dividend_yield=3.0)
        assert h.payout_frequency is PayoutFrequency.QUARTERLY
        assert h.dividend_history == ()
        assert h.latest_dividend is None

    def test_negative_shares_rejected(self):
        with pytest.raises(PayoutError) as exc_info:
            Holding(symbol="KO", shares=-1, current_price=60.0, dividend_yield=3.0)
        assert exc_info.value.code == PayoutErrorCode.INVALID_HOLDING

    def test_empty_symbol_rejected(self):
        with pytest.raises(PayoutError):
            Holding(symbol="", shares=1, current_price=60.0, dividend_yield=3.0)

    def test_latest_dividend_is_first_entry(self, aapl):
        assert aapl.latest_dividend.payment_date == date(2024, 2, 15)

    def test_from_camel_case_payload(self):
        h = Holding.from_dict({
            "symbol": "t",
            "shares": 20,
            "currentPrice": 16,
            "dividendYield": 6.5,
            "payoutFrequency": "monthly",
            "nextExDate": "2024-04-09",
            "nextPaymentDate": "2024-05-01",
            "typicalPaymentDay": 1,
            "dividendGrowthRate": 2.1,
            "dividendHistory": [
                {"exDate": "2024-03-07", "paymentDate": "2024-04-01", "amount": 0.2775, "growth": 2.0},
            ],
        })
        assert h.symbol == "T"
        assert h.payout_frequency is PayoutFrequency.MONTHLY
        assert h.next_payment_date == date(2024, 5, 1)
        assert h.typical_payment_day == 1
        assert h.dividend_history[0] == DividendHistoryEntry(
            date(2024, 3, 7), date(2024, 4, 1), 0.2775, 2.0,
        )

    def test_from_dict_months(self):
        h = Holding.from_dict({
            "symbol": "JNJ", "shares": 8, "current_price": 158, "dividend_yield": 3.1,
            "typicalPaymentMonth": [2, 5, 8, 11],
        })
        assert h.typical_payment_months == (2, 5, 8, 11)
        assert h.next_ex_date is None

    def test_from_dict_bad_date(self):
        with pytest.raises(PayoutError) as exc_info:
            Holding.from_dict({
                "symbol": "JNJ", "shares": 8, "currentPrice": 158, "dividendYield": 3.1,
                "nextPaymentDate": "next week",
            })
        assert exc_info.value.code == PayoutErrorCode.INVALID_HOLDING


class TestPayoutEvent:
    def test_key_uses_iso_day(self):
        e = PayoutEvent("AAPL", 0.24, date(2024, 3, 5), PayoutType.EX_DATE)
        assert e.key == ("AAPL", "2024-03-05")

    def test_key_ignores_symbol_case(self):
        lower = PayoutEvent("aapl", 0.24, date(2024, 3, 5), PayoutType.EX_DATE)
        upper = PayoutEvent("AAPL", 0.24, date(2024, 3, 5), PayoutType.PAYMENT_DATE)
        assert lower.key == upper.key

    def test_defaults(self):
        e = PayoutEvent("AAPL", 0.24, date(2024, 3, 5), PayoutType.EX_DATE)
        assert e.auto is True
        assert e.source is None
        assert e.total_amount == 0.0

    def test_total_amount(self):
        e = PayoutEvent("AAPL", 0.24, date(2024, 3, 5), PayoutType.PAYMENT_DATE, shares=10)
        assert e.total_amount == pytest.approx(2.4)

    def test_dict_roundtrip(self):
        e = PayoutEvent(
            "AAPL", 0.24, date(2024, 3, 5), PayoutType.PAYMENT_DATE,
            auto=False, growth=4.3, source="manual", priority="high",
            notification_timing="1d", shares=10,
        )
        data = e.to_dict()
        assert data["date"] == "2024-03-05"
        assert data["type"] == "payment-date"
        assert PayoutEvent.from_dict(data) == e

    def test_frozen(self):
        e = PayoutEvent("AAPL", 0.24, date(2024, 3, 5), PayoutType.EX_DATE)
        with pytest.raises(AttributeError):
            e.amount = 1.0  # type: ignore[misc]

    def test_type_labels(self):
        assert PayoutType.EX_DATE.label == "Ex-Date"
        assert PayoutType.PAYMENT_DATE.label == "Payment"


class TestDividendModels:
    def test_record(self):
        r = DividendRecord(symbol="AAPL", amount=0.24, date=date(2024, 2, 15))
        assert r.amount == 0.24

    def test_event_defaults(self):
        d = DividendEvent(symbol="AAPL", ex_date=date(2024, 2, 9), amount=0.24)
        assert d.dividend_type == "regular"
        assert d.currency == "USD"
        assert d.pay_date is None
