"""iCalendar (RFC 5545) export of payout events."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime, time, timedelta, timezone
from pathlib import Path

from divly.calendar import market_open_time, to_exchange_datetime
from divly.models.payout import PayoutEvent

PRODID = "-//Divly//Dividend Calendar//EN"
EVENT_DURATION = timedelta(hours=1)
_UTC_FORMAT = "%Y%m%dT%H%M%SZ"


def format_utc(dt: datetime) -> str:
    """``YYYYMMDDTHHMMSSZ`` for an aware datetime."""
    return dt.astimezone(timezone.utc).strftime(_UTC_FORMAT)


def event_start(event: PayoutEvent, at: time | None = None) -> datetime:
    """Exchange-local instant of an event, as an aware UTC datetime."""
    at = at or market_open_time(event.date)
    return to_exchange_datetime(event.date, at).astimezone(timezone.utc)


def generate_ics(
    events: Iterable[PayoutEvent],
    event_time: time | None = None,
    generated_at: datetime | None = None,
) -> str:
    """Render events as a VCALENDAR payload with one VEVENT each.

    Args:
        events: Events to export, in output order.
        event_time: Exchange-local time of day for every event. Defaults
            to the market open.
        generated_at: DTSTAMP value. Defaults to now.
    """
    stamp = format_utc(generated_at or datetime.now(timezone.utc))
    lines = [
        "BEGIN:VCALENDAR",
        "VERSION:2.0",
        f"PRODID:{PRODID}",
        "CALSCALE:GREGORIAN",
        "METHOD:PUBLISH",
    ]
    for index, event in enumerate(events):
        start = event_start(event, event_time)
        dtstart = format_utc(start)
        lines.extend([
            "BEGIN:VEVENT",
            f"UID:divly-{event.symbol}-{dtstart}-{index}@divly",
            f"DTSTAMP:{stamp}",
            f"DTSTART:{dtstart}",
            f"DTEND:{format_utc(start + EVENT_DURATION)}",
            f"SUMMARY:{_escape(f'{event.symbol} {event.type.label}')}",
            f"DESCRIPTION:{_escape(_describe(event))}",
            "END:VEVENT",
        ])
    lines.append("END:VCALENDAR")
    return "".join(_fold(line) + "\r\n" for line in lines)


def write_ics(path: Path | str, payload: str) -> Path:
    """Write a rendered calendar to ``path``, keeping its CRLF line ends."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8", newline="") as f:
        f.write(payload)
    return path


def _describe(event: PayoutEvent) -> str:
    text = f"{event.symbol} {event.type.label.lower()}: {_money(event.amount)} per share"
    if event.shares:
        text += f"\n{_money(event.total_amount)} total for {event.shares:g} shares"
    if not event.auto:
        text += "\nEntered manually"
    return text


def _money(amount: float) -> str:
    return f"${amount:,.2f}"


def _escape(text: str) -> str:
    return (
        text.replace("\\", "\\\\")
        .replace(";", "\\;")
        .replace(",", "\\,")
        .replace("\n", "\\n")
    )


def _fold(line: str, limit: int = 75) -> str:
    """Split content lines longer than ``limit`` octets."""
    encoded = line.encode("utf-8")
    if len(encoded) <= limit:
        return line
    parts: list[str] = []
    current = ""
    size = 0
    for ch in line:
        width = len(ch.encode("utf-8"))
        # continuation lines carry a leading space
        if size + width > (limit if not parts else limit - 1):
            parts.append(current)
            current, size = "", 0
        current += ch
        size += width
    parts.append(current)
    return "\r\n ".join(parts)
