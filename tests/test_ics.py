"""Tests for iCalendar export."""

from datetime import date, datetime, time, timezone

from divly.ics import event_start, generate_ics, write_ics
from divly.models.payout import PayoutEvent, PayoutType

STAMP = datetime(2024, 3, 1, 12, 0, tzinfo=timezone.utc)


def _unfold(payload: str) -> str:
    return payload.replace("\r\n ", "")


class TestGenerateIcs:
    def test_envelope(self, sample_events):
        payload = generate_ics(sample_events, generated_at=STAMP)
        assert payload.startswith("BEGIN:VCALENDAR\r\nVERSION:2.0\r\n")
        assert payload.endswith("END:VCALENDAR\r\n")
        assert "PRODID:" in payload

    def test_one_vevent_per_event(self, sample_events):
        payload = generate_ics(sample_events, generated_at=STAMP)
        assert payload.count("BEGIN:VEVENT") == 3
        assert payload.count("END:VEVENT") == 3

    def test_empty_calendar(self):
        payload = generate_ics([], generated_at=STAMP)
        assert "BEGIN:VEVENT" not in payload
        assert payload.count("\r\n") == 6

    def test_times_at_market_open_in_utc(self, sample_events):
        payload = _unfold(generate_ics(sample_events, generated_at=STAMP))
        # 09:30 EDT on 2024-03-15
        assert "DTSTART:20240315T133000Z" in payload
        assert "DTEND:20240315T143000Z" in payload
        assert "DTSTAMP:20240301T120000Z" in payload

    def test_winter_offset(self):
        event = PayoutEvent("T", 0.2775, date(2024, 1, 2), PayoutType.PAYMENT_DATE)
        payload = generate_ics([event], generated_at=STAMP)
        assert "DTSTART:20240102T143000Z" in payload

    def test_custom_event_time(self, sample_events):
        payload = generate_ics(sample_events[:1], event_time=time(16, 0), generated_at=STAMP)
        assert "DTSTART:20240315T200000Z" in payload

    def test_summary_and_description(self, sample_events):
        payload = _unfold(generate_ics(sample_events, generated_at=STAMP))
        assert "SUMMARY:AAPL Payment" in payload
        assert "SUMMARY:AAPL Ex-Date" in payload
        assert "AAPL ex-date: $0.24 per share" in payload
        assert "$2.40 total for 10 shares" in payload

    def test_manual_events_flagged(self):
        event = PayoutEvent("KO", 0.485, date(2024, 4, 1), PayoutType.PAYMENT_DATE, auto=False)
        payload = _unfold(generate_ics([event], generated_at=STAMP))
        assert "Entered manually" in payload

    def test_uids_unique(self, sample_events):
        events = sample_events + sample_events[:1]
        payload = _unfold(generate_ics(events, generated_at=STAMP))
        uids = [line for line in payload.split("\r\n") if line.startswith("UID:")]
        assert len(uids) == 4
        assert len(set(uids)) == 4

    def test_lines_folded_at_75_octets(self, sample_events):
        payload = generate_ics(sample_events, generated_at=STAMP)
        assert all(len(line.encode("utf-8")) <= 75 for line in payload.split("\r\n"))

    def test_crlf_only(self, sample_events):
        payload = generate_ics(sample_events, generated_at=STAMP)
        assert "\n" not in payload.replace("\r\n", "")


class TestEventStart:
    def test_aware_utc(self, sample_events):
        start = event_start(sample_events[0])
        assert start == datetime(2024, 3, 15, 13, 30, tzinfo=timezone.utc)


class TestWriteIcs:
    def test_writes_payload_unchanged(self, tmp_path, sample_events):
        payload = generate_ics(sample_events, generated_at=STAMP)
        path = write_ics(tmp_path / "out" / "dividends.ics", payload)
        assert path.read_bytes() == payload.encode("utf-8")
