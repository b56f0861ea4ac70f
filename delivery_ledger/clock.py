from datetime import date, datetime, timezone


class SystemClock:
    """Single source of "now" for step timestamps and dashboard windows"""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)


def get_clock() -> SystemClock:
    return SystemClock()


def to_utc_naive(ts: datetime) -> datetime:
    """Normalise to naive UTC; naive input is taken to already be UTC"""
    if ts.tzinfo is not None:
        ts = ts.astimezone(timezone.utc).replace(tzinfo=None)
    return ts


def utc_date(value) -> date:
    """Calendar day of a datetime in UTC (dates pass through)"""
    if isinstance(value, datetime):
        return to_utc_naive(value).date()
    return value
