from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional


UTC = timezone.utc


def utcnow() -> datetime:
    """
    Returns timezone-aware current UTC time.
    """
    return datetime.now(UTC)


def ensure_aware(dt: datetime, assume_utc: bool = True) -> datetime:
    """
    Ensure a datetime is timezone-aware. If naive and assume_utc is True,
    interpret as UTC; otherwise raise ValueError.
    """
    if dt.tzinfo is not None:
        return dt.astimezone(UTC)
    if assume_utc:
        return dt.replace(tzinfo=UTC)
    raise ValueError("Naive datetime provided and assume_utc=False")


def to_epoch_ms(dt: datetime) -> int:
    """
    Epoch milliseconds for a (aware or naive-as-UTC) datetime.
    """
    return int(ensure_aware(dt).timestamp() * 1000)


def from_epoch_ms(ms: int) -> datetime:
    return datetime.fromtimestamp(ms / 1000, tz=UTC)


def human_timestamp(dt: Optional[datetime] = None) -> str:
    """
    Journal-style display stamp, e.g. 'Oct 19, 2026 at 1:05 PM'.
    Naive datetimes are rendered as-is (local wall clock).
    """
    dt = dt or datetime.now()
    hour = dt.hour % 12 or 12
    return f"{dt:%b %d, %Y} at {hour}:{dt:%M} {dt:%p}"


def time_of_day(dt: Optional[datetime] = None) -> str:
    """
    Bucket an hour into morning (6-11), afternoon (12-17), evening (18-22) or night.
    """
    hour = (dt or datetime.now()).hour
    if 6 <= hour <= 11:
        return "morning"
    if 12 <= hour <= 17:
        return "afternoon"
    if 18 <= hour <= 22:
        return "evening"
    return "night"
