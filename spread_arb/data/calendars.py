"""
Market session calendar utilities for US listed options.

Sessions are Mon-Fri in the exchange timezone (no holiday calendar for now).
"""

from datetime import datetime, time, timezone
from typing import Optional, Tuple
from zoneinfo import ZoneInfo

UTC = timezone.utc
ET = ZoneInfo("America/New_York")

# Default regular trading hours (ET)
DEFAULT_SESSION_OPEN = time(9, 30)
DEFAULT_SESSION_CLOSE = time(16, 0)


def _to_local(now: datetime, tz: ZoneInfo) -> datetime:
    if now.tzinfo is None:
        now = now.replace(tzinfo=UTC)
    return now.astimezone(tz)


def is_weekday(now: datetime, tz: ZoneInfo = ET) -> bool:
    """True Mon-Fri in the exchange timezone."""
    return _to_local(now, tz).weekday() < 5


def session_window(
    now: datetime,
    session_open: time = DEFAULT_SESSION_OPEN,
    session_close: time = DEFAULT_SESSION_CLOSE,
    tz: ZoneInfo = ET,
) -> Optional[Tuple[datetime, datetime]]:
    """
    Session (open_utc, close_utc) for the exchange-local day containing now.

    Returns None on weekends. For 2024-01-02 15:00 UTC the window is 14:30-21:00 UTC
    (09:30-16:00 EST).
    """
    local = _to_local(now, tz)
    if local.weekday() >= 5:
        return None
    open_dt = datetime.combine(local.date(), session_open).replace(tzinfo=tz)
    close_dt = datetime.combine(local.date(), session_close).replace(tzinfo=tz)
    return open_dt.astimezone(UTC), close_dt.astimezone(UTC)


def is_market_open(
    now: datetime,
    session_open: time = DEFAULT_SESSION_OPEN,
    session_close: time = DEFAULT_SESSION_CLOSE,
    tz: ZoneInfo = ET,
) -> bool:
    """True when now falls inside [open, close) of a weekday session."""
    window = session_window(now, session_open, session_close, tz)
    if window is None:
        return False
    open_utc, close_utc = window
    now_utc = _to_local(now, UTC)
    return open_utc <= now_utc < close_utc
