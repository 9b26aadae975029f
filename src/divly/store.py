"""Manual payout stores: in memory, JSON file and Parquet file."""

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path

import pandas as pd

from divly.errors import PayoutError, PayoutErrorCode
from divly.models.payout import PayoutEvent, PayoutType

logger = logging.getLogger(__name__)


class PayoutStore(ABC):
    """Ordered collection of user-entered payouts, addressed by index."""

    @abstractmethod
    def list(self) -> list[PayoutEvent]:
        ...

    @abstractmethod
    def create(self, event: PayoutEvent) -> int:
        """Append an event and return its index."""
        ...

    @abstractmethod
    def update(self, index: int, event: PayoutEvent) -> PayoutEvent:
        """Replace the event at ``index`` and return the previous one."""
        ...

    @abstractmethod
    def delete(self, index: int) -> PayoutEvent:
        """Remove and return the event at ``index``."""
        ...

    @abstractmethod
    def clear(self) -> None:
        ...

    def get(self, index: int) -> PayoutEvent:
        """Return the event at ``index``; raises NOT_FOUND when out of range."""
        events = self.list()
        self._check_index(events, index)
        return events[index]

    @staticmethod
    def _check_index(events: list[PayoutEvent], index: int) -> None:
        if not 0 <= index < len(events):
            raise PayoutError(
                f"No manual payout at index {index} ({len(events)} stored)",
                code=PayoutErrorCode.NOT_FOUND,
            )


class MemoryPayoutStore(PayoutStore):
    """Process-local store; contents vanish with the process."""

    def __init__(self, events: list[PayoutEvent] | None = None) -> None:
        self._events: list[PayoutEvent] = list(events or [])

    def list(self) -> list[PayoutEvent]:
        return list(self._events)

    def create(self, event: PayoutEvent) -> int:
        self._events.append(event)
        return len(self._events) - 1

    def update(self, index: int, event: PayoutEvent) -> PayoutEvent:
        self._check_index(self._events, index)
        previous = self._events[index]
        self._events[index] = event
        return previous

    def delete(self, index: int) -> PayoutEvent:
        self._check_index(self._events, index)
        return self._events.pop(index)

    def clear(self) -> None:
        self._events.clear()


class _FilePayoutStore(PayoutStore):
    """Read-modify-write store over a single file."""

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)

    @abstractmethod
    def _read(self) -> list[PayoutEvent]:
        ...

    @abstractmethod
    def _write(self, events: list[PayoutEvent]) -> None:
        ...

    def _load(self) -> list[PayoutEvent]:
        if not self.path.exists():
            return []
        try:
            return self._read()
        except (OSError, ValueError, KeyError) as exc:
            raise PayoutError(
                f"Cannot read manual payouts from {self.path}: {exc}",
                code=PayoutErrorCode.STORE_ERROR,
            ) from exc

    def _save(self, events: list[PayoutEvent]) -> None:
        try:
            self._write(events)
        except (OSError, ValueError) as exc:
            raise PayoutError(
                f"Cannot write manual payouts to {self.path}: {exc}",
                code=PayoutErrorCode.STORE_ERROR,
            ) from exc
        logger.debug("Saved %d manual payouts to %s", len(events), self.path)

    def list(self) -> list[PayoutEvent]:
        return self._load()

    def create(self, event: PayoutEvent) -> int:
        events = self._load()
        events.append(event)
        self._save(events)
        return len(events) - 1

    def update(self, index: int, event: PayoutEvent) -> PayoutEvent:
        events = self._load()
        self._check_index(events, index)
        previous = events[index]
        events[index] = event
        self._save(events)
        return previous

    def delete(self, index: int) -> PayoutEvent:
        events = self._load()
        self._check_index(events, index)
        removed = events.pop(index)
        self._save(events)
        return removed

    def clear(self) -> None:
        if self.path.exists():
            self.path.unlink()


class JsonPayoutStore(_FilePayoutStore):
    """Manual payouts as a JSON array of event objects."""

    def _read(self) -> list[PayoutEvent]:
        with open(self.path, encoding="utf-8") as f:
            data = json.load(f)
        return [PayoutEvent.from_dict(item) for item in data]

    def _write(self, events: list[PayoutEvent]) -> None:
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump([e.to_dict() for e in events], f, indent=2)


class ParquetPayoutStore(_FilePayoutStore):
    """Manual payouts as one Parquet file with Snappy compression."""

    def _read(self) -> list[PayoutEvent]:
        df = pd.read_parquet(self.path)
        return self._df_to_events(df)

    def _write(self, events: list[PayoutEvent]) -> None:
        if not events:
            if self.path.exists():
                self.path.unlink()
            return
        events_to_frame(events).to_parquet(self.path, compression="snappy", index=False)

    @staticmethod
    def _df_to_events(df: pd.DataFrame) -> list[PayoutEvent]:
        events: list[PayoutEvent] = []
        for _, row in df.iterrows():
            events.append(PayoutEvent(
                symbol=str(row["symbol"]),
                amount=float(row["amount"]),
                date=pd.Timestamp(row["date"]).date(),
                type=PayoutType(row["type"]),
                auto=bool(row["auto"]),
                growth=float(row["growth"]) if pd.notna(row.get("growth")) else None,
                source=row["source"] if pd.notna(row.get("source")) else None,
                priority=row["priority"] if pd.notna(row.get("priority")) else None,
                notification_timing=(
                    row["notification_timing"]
                    if pd.notna(row.get("notification_timing")) else None
                ),
                shares=float(row["shares"]) if pd.notna(row.get("shares")) else 0.0,
            ))
        return events


EVENT_COLUMNS = [
    "symbol", "amount", "date", "type", "auto", "growth", "source",
    "priority", "notification_timing", "shares", "total_amount",
]


def events_to_frame(events: list[PayoutEvent]) -> pd.DataFrame:
    """Tabulate events, one row each, dates as ``datetime64`` days."""
    if not events:
        return pd.DataFrame(columns=EVENT_COLUMNS)
    records = []
    for e in events:
        record = e.to_dict()
        record["total_amount"] = e.total_amount
        records.append(record)
    df = pd.DataFrame(records, columns=EVENT_COLUMNS)
    df["date"] = pd.to_datetime(df["date"])
    return df


def create_store(backend: str, path: Path | str | None = None) -> PayoutStore:
    """Instantiate a store by backend name ("memory", "json", "parquet")."""
    if backend == "memory":
        return MemoryPayoutStore()
    if path is None:
        raise PayoutError(
            f"Store backend '{backend}' needs a file path",
            code=PayoutErrorCode.STORE_ERROR,
        )
    if backend == "json":
        return JsonPayoutStore(path)
    if backend == "parquet":
        return ParquetPayoutStore(path)
    raise PayoutError(
        f"Unknown store backend: {backend}",
        code=PayoutErrorCode.STORE_ERROR,
    )
