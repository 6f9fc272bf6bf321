from __future__ import annotations
from typing import Any, Iterable, Optional
from datetime import datetime, timezone
import math
import re
import pandas as pd
import pytz

_DIGITS = re.compile(r"^[0-9]+$")


def parse_any_datetime(
    s: str,
    formats: Iterable[str] = ("%Y-%m-%d", "%m/%d/%Y", "%Y-%m-%d %H:%M:%S", "%Y-%m-%dT%H:%M:%S"),
) -> Optional[datetime]:
    for f in formats:
        try:
            return datetime.strptime(s, f)
        except (TypeError, ValueError):
            continue
    # pandas to_datetime as fallback
    try:
        dt = pd.to_datetime(s, errors="raise")
    except (TypeError, ValueError, OverflowError):
        return None
    if pd.isna(dt):
        return None
    return dt.to_pydatetime()


def from_epoch_ms(ms: float, tz: str = "UTC") -> Optional[datetime]:
    """Epoch milliseconds -> aware datetime in `tz`; None when out of range."""
    if isinstance(ms, float) and not math.isfinite(ms):
        return None
    try:
        dt = datetime.fromtimestamp(float(ms) / 1000.0, tz=timezone.utc)
    except (OverflowError, OSError, ValueError):
        return None
    return to_timezone(dt, tz)


def to_timezone(dt: datetime, tz: str) -> datetime:
    tzinfo = pytz.timezone(tz)
    if dt.tzinfo is None:
        return tzinfo.localize(dt)
    return dt.astimezone(tzinfo)


def coerce_datetime(value: Any, tz: str = "UTC") -> Optional[datetime]:
    """
    Accepts a numeric epoch (ms), a purely-digit string (epoch ms) or any other
    string (calendar parse). Naive calendar strings stay naive (wall clock).
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return from_epoch_ms(value, tz)
    if isinstance(value, str):
        if _DIGITS.match(value):
            return from_epoch_ms(int(value), tz)
        dt = parse_any_datetime(value.strip())
        if dt is None:
            return None
        return dt if dt.tzinfo is None else dt.astimezone(pytz.timezone(tz))
    return None
