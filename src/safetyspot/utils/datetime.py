"""Date-time helpers for timestamps and daily reporting windows."""

from datetime import date, datetime, timedelta, timezone


def utcnow() -> datetime:
    """Naive UTC timestamp, matching how the tables store times."""

    return datetime.now(timezone.utc).replace(tzinfo=None)


def start_of_day(now: datetime | None = None) -> datetime:
    """Return midnight (UTC, naive) of the day containing the timestamp."""

    current = now or utcnow()
    return datetime(current.year, current.month, current.day)


def last_n_days(n: int, today: date | None = None) -> list[date]:
    """Return the last ``n`` calendar days ending today, oldest first."""

    end = today or utcnow().date()
    return [end - timedelta(days=offset) for offset in range(n - 1, -1, -1)]
