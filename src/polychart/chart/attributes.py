"""String-valued attribute state and the typed readers the builder uses."""
from __future__ import annotations
from typing import Any, Dict, Iterator, List, Optional, Tuple
import json
import logging
import re

from .formatters import normalize_code

log = logging.getLogger(__name__)

OBSERVED_ATTRIBUTES: Tuple[str, ...] = (
    "type", "data", "options", "height", "width", "theme", "loading",
    "show-legend", "legend-position", "show-toolbar", "title",
    "show-data-labels", "data-label-orientation", "data-label-position",
    "x-axis-title", "y-axis-title", "bar-orientation", "curve", "line-width",
    "categories", "donut-show-total", "hollow-size", "dashed-radial",
    "track-width", "bar", "x-axis-offsety", "x-axis-label-rotate",
    "x-axis-label-rotate-offsety", "gradient", "realtime", "marker-size",
    "stacked", "border-radius", "x-axis-output-format", "y-axis-output-format",
    "column-width", "start-angle", "end-angle", "bar-labels", "colors",
)

# Attributes folded into the consolidated visual patch.
VISUAL_ATTRIBUTES: Tuple[str, ...] = (
    "title", "height", "width", "show-legend", "legend-position",
    "show-toolbar", "show-data-labels", "data-label-orientation",
    "data-label-position",
)

_INT_PREFIX = re.compile(r"^\s*([+-]?\d+)")


class AttributeState:
    """Name -> string value. Absence is distinct from an empty string."""

    def __init__(self, initial: Optional[Dict[str, Any]] = None):
        self._values: Dict[str, str] = {}
        for k, v in (initial or {}).items():
            if v is not None:
                self._values[k] = str(v)

    def set(self, name: str, value: Any) -> bool:
        """Store `value`; returns False when nothing changed."""
        if value is None:
            return self.remove(name)
        new = str(value)
        if self._values.get(name) == new:
            return False
        self._values[name] = new
        return True

    def remove(self, name: str) -> bool:
        return self._values.pop(name, None) is not None

    def get(self, name: str, default: Optional[str] = None) -> Optional[str]:
        return self._values.get(name, default)

    def has(self, name: str) -> bool:
        return name in self._values

    def snapshot(self) -> Dict[str, str]:
        return dict(self._values)

    def __contains__(self, name: object) -> bool:
        return name in self._values

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"AttributeState({self._values!r})"


def is_observed(name: str) -> bool:
    return name in OBSERVED_ATTRIBUTES


# ---------- scalar readers ----------

def parse_int(raw: Optional[str]) -> Optional[int]:
    """Leading-integer parse: '12px' -> 12, '3.9' -> 3, 'abc' -> None."""
    if raw is None:
        return None
    m = _INT_PREFIX.match(str(raw))
    return int(m.group(1)) if m else None


def integer(attrs: AttributeState, name: str, default: int, *, zero_ok: bool = True) -> int:
    n = parse_int(attrs.get(name))
    if n is None or (n == 0 and not zero_ok):
        return default
    return n


def is_true(attrs: AttributeState, name: str) -> bool:
    return attrs.get(name) == "true"


def not_false(attrs: AttributeState, name: str) -> bool:
    """On unless explicitly "false" (absent counts as on)."""
    return attrs.get(name) != "false"


def present_not_false(attrs: AttributeState, name: str) -> bool:
    """On only when present and not "false"."""
    return attrs.has(name) and attrs.get(name) != "false"


def text(attrs: AttributeState, name: str, default: str = "") -> str:
    return attrs.get(name) or default


def axis_format(attrs: AttributeState, name: str) -> str:
    return normalize_code(attrs.get(name))


# ---------- JSON readers ----------

def _loads(raw: str, name: str) -> Tuple[bool, Any]:
    try:
        return True, json.loads(raw)
    except (TypeError, ValueError):
        log.warning("invalid JSON in attribute", extra={"attribute": name, "raw": raw[:200]})
        return False, None


def parse_data(raw: Optional[str]) -> Any:
    if not raw:
        return None
    ok, value = _loads(raw, "data")
    return value if ok else None


def parse_options(raw: Optional[str]) -> Dict[str, Any]:
    if not raw:
        return {}
    ok, value = _loads(raw, "options")
    if ok and not isinstance(value, dict):
        log.warning("options attribute is not a JSON object", extra={"attribute": "options"})
        return {}
    return value if ok else {}


def json_list(attrs: AttributeState, name: str) -> List[Any]:
    raw = attrs.get(name)
    if not raw:
        return []
    ok, value = _loads(raw, name)
    return list(value) if ok and isinstance(value, list) else []
