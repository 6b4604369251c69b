from __future__ import annotations

from datetime import date, datetime

INSTANT_FORMAT = "%Y-%m-%dT%H:%M:%SZ"


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def parse_iso_instant(value: str) -> datetime:
    """Parse an ISO-8601 timestamp such as '2024-01-10T09:00:00Z'.

    A trailing 'Z' is accepted as UTC.
    """
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    return datetime.fromisoformat(text)


def snapshot_suffix(now: datetime | None = None) -> str:
    """Timestamp fragment used to name temporary snapshot files."""
    now = now or datetime.now()
    return now.strftime("%Y%m%d_%H%M%S_%f")
