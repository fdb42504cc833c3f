from __future__ import annotations

from datetime import date, datetime

from ..core.constants import DATE_FORMAT


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, DATE_FORMAT).date()


def now_local() -> datetime:
    """Current server-local time, truncated to whole seconds.

    Note: Wrapped so tests can patch/mocked easier. DATETIME columns store
    seconds only, so the in-memory value matches what is persisted.
    """
    return datetime.now().replace(microsecond=0)


def hours_between(start: datetime, end: datetime) -> float:
    return (end - start).total_seconds() / 3600.0
