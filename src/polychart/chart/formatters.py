from __future__ import annotations
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any, Dict, Literal, Optional
import math

from ..utils.time import coerce_datetime

FormatCode = Literal["normal", "money", "thousand", "date", "datetime", "time"]
FORMAT_CODES = ("normal", "money", "thousand", "date", "datetime", "time")

_DATE_PATTERNS: Dict[str, str] = {
    "date": "%Y-%m-%d",
    "datetime": "%Y-%m-%d %H:%M",
    "time": "%H:%M",
}


def _to_decimal(value: Any) -> Optional[Decimal]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, float) and not math.isfinite(value):
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    try:
        d = Decimal(str(value))
    except (InvalidOperation, ValueError, TypeError):
        return None
    return d if d.is_finite() else None


def _grouped(value: Any, places: int) -> Any:
    d = _to_decimal(value)
    if d is None:
        return value
    quantum = Decimal(1).scaleb(-places)
    return f"{d.quantize(quantum, rounding=ROUND_HALF_UP):,.{places}f}"


def format_axis_value(value: Any, code: str = "normal", tz: str = "UTC") -> Any:
    """
    Map a raw axis value to its display string.

    Unknown codes behave like `normal`. Any value that cannot be coerced is
    returned unchanged.
    """
    if code == "money":
        return _grouped(value, 2)
    if code == "thousand":
        return _grouped(value, 0)
    if code in _DATE_PATTERNS:
        dt = coerce_datetime(value, tz)
        return value if dt is None else dt.strftime(_DATE_PATTERNS[code])
    return value


@dataclass(frozen=True)
class AxisLabelFormatter:
    """Callable label formatter placed into `xaxis.labels.formatter` / `yaxis.labels.formatter`."""
    code: FormatCode
    tz: str = "UTC"

    def __call__(self, value: Any) -> Any:
        return format_axis_value(value, self.code, self.tz)


def normalize_code(raw: Optional[str]) -> str:
    return raw if raw in FORMAT_CODES else "normal"
