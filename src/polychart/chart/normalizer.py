"""Turn loosely-shaped `data` payloads into a canonical list of series.

The payload shape is decided once, by structure alone, in `classify`; the
resulting tagged value is then dispatched per chart family. Normalization is a
pure function of (payload, family).
"""
from __future__ import annotations
from dataclasses import dataclass
from numbers import Real
from typing import Any, Dict, List, Optional, Tuple, Union

from more_itertools import first

from ..utils.fp import compact, try_or
from .families import ChartFamily

DEFAULT_SERIES_NAME = "Series 1"


def item_label(i: int) -> str:
    return f"Item {i + 1}"


# ---------- canonical model ----------

@dataclass
class SeriesDescriptor:
    name: str
    data: Any
    color: Optional[str] = None
    dashed: Optional[bool] = None

    def to_dict(self) -> Dict[str, Any]:
        return compact({"name": self.name, "data": self.data, "color": self.color, "dashed": self.dashed})


SeriesSet = List[SeriesDescriptor]


# ---------- payload classification ----------

@dataclass(frozen=True)
class ScalarSeries:
    values: Tuple[Any, ...]


@dataclass(frozen=True)
class PointSeries:
    pairs: Tuple[Tuple[Any, Any], ...]


@dataclass(frozen=True)
class NamedSeriesList:
    items: Tuple[Dict[str, Any], ...]


@dataclass(frozen=True)
class CategoryMap:
    entries: Tuple[Tuple[str, Any], ...]


@dataclass(frozen=True)
class EmptyPayload:
    reason: str


Payload = Union[ScalarSeries, PointSeries, NamedSeriesList, CategoryMap, EmptyPayload]


def _is_named(item: Any) -> bool:
    return isinstance(item, dict) and item.get("name") not in (None, "")


def _is_pair(item: Any) -> bool:
    return isinstance(item, (list, tuple)) and len(item) >= 2


def classify(payload: Any) -> Payload:
    if payload is None:
        return EmptyPayload("missing")
    if isinstance(payload, (list, tuple)):
        if not payload:
            return EmptyPayload("empty")
        head = payload[0]
        if _is_named(head):
            return NamedSeriesList(tuple(x for x in payload if isinstance(x, dict)))
        if isinstance(head, (list, tuple)):
            pairs = tuple((p[0], p[1]) for p in payload if _is_pair(p))
            return PointSeries(pairs) if pairs else EmptyPayload("malformed")
        return ScalarSeries(tuple(payload))
    if isinstance(payload, dict):
        if not payload:
            return EmptyPayload("empty")
        return CategoryMap(tuple((str(k), v) for k, v in payload.items()))
    return EmptyPayload("unsupported")


# ---------- per-family bodies ----------

@try_or(None)
def _numeric_string(s: str) -> Union[int, float, None]:
    f = float(s)
    return int(f) if f.is_integer() and "." not in s and "e" not in s.lower() else f


def collapse_scalar(body: Any) -> Any:
    """Reduce a series body to the single value circular/radial/polar charts draw."""
    if isinstance(body, bool):
        return None
    if isinstance(body, Real):
        return body
    if isinstance(body, str):
        return _numeric_string(body.strip())
    if _is_pair(body) and not isinstance(body[0], Real):
        return collapse_scalar(body[1])
    if isinstance(body, (list, tuple)):
        return collapse_scalar(body[0]) if body else None
    if isinstance(body, dict):
        return collapse_scalar(first(body.values(), None))
    return None


def _point_body(body: Any) -> List[Any]:
    if isinstance(body, (list, tuple)):
        if body and isinstance(body[0], (list, tuple)):
            return [{"x": p[0], "y": p[1]} for p in body if _is_pair(p)]
        return list(body)
    if isinstance(body, dict):
        return [{"x": k, "y": v} for k, v in body.items()]
    return []


def _value_body(body: Any) -> List[Any]:
    if isinstance(body, dict):
        return list(body.values())
    if isinstance(body, (list, tuple)):
        out = []
        for v in body:
            if _is_pair(v):
                out.append(v[1])
            elif isinstance(v, dict) and "y" in v:
                out.append(v["y"])
            else:
                out.append(v)
        return out
    return []


def normalize_body(body: Any, family: ChartFamily) -> Any:
    """Normalize the `data` field of one series for `family`."""
    if family.is_scalar:
        return collapse_scalar(body)
    if family is ChartFamily.RADAR:
        return _value_body(body)
    return _point_body(body)


def normalize(payload: Any, family: ChartFamily) -> SeriesSet:
    shape = classify(payload)

    if isinstance(shape, EmptyPayload):
        return []

    if isinstance(shape, NamedSeriesList):
        return [
            SeriesDescriptor(
                name=str(item.get("name") if item.get("name") is not None else ""),
                data=normalize_body(item.get("data"), family),
                color=item.get("color"),
                dashed=item.get("dashed") is True,
            )
            for item in shape.items
        ]

    if family.is_scalar:
        if isinstance(shape, PointSeries):
            return [SeriesDescriptor(str(x), collapse_scalar(y)) for x, y in shape.pairs]
        if isinstance(shape, CategoryMap):
            return [SeriesDescriptor(k, collapse_scalar(v)) for k, v in shape.entries]
        return [SeriesDescriptor(f"Item {i + 1}", collapse_scalar(v)) for i, v in enumerate(shape.values)]

    if isinstance(shape, PointSeries):
        body: Any = [list(p) for p in shape.pairs]
    elif isinstance(shape, CategoryMap):
        body = dict(shape.entries)
    else:
        body = list(shape.values)
    return [SeriesDescriptor(DEFAULT_SERIES_NAME, normalize_body(body, family))]


# ---------- derived views ----------

def to_payload(series: SeriesSet) -> List[Dict[str, Any]]:
    """Inverse view: a named-series payload that normalizes back to `series`."""
    return [s.to_dict() for s in series]


def render_series(series: SeriesSet, family: ChartFamily) -> List[Any]:
    """What the renderer receives: bare values for scalar families, series objects otherwise."""
    if family.is_scalar:
        return [s.data for s in series]
    return [s.to_dict() for s in series]


def payload_labels(payload: Any) -> List[str]:
    """Category names carried by the payload itself (object keys, pair heads, item names)."""
    shape = classify(payload)
    if isinstance(shape, CategoryMap):
        return [k for k, _ in shape.entries]
    if isinstance(shape, NamedSeriesList):
        return [
            str(item["name"]) if item.get("name") is not None else item_label(i)
            for i, item in enumerate(shape.items)
        ]
    if isinstance(shape, PointSeries):
        return [str(x) for x, _ in shape.pairs]
    return []


def payload_categories(payload: Any, family: ChartFamily) -> List[Any]:
    """Axis categories implied by value-only radar payloads."""
    if family is not ChartFamily.RADAR:
        return []
    shape = classify(payload)
    if isinstance(shape, CategoryMap):
        return [k for k, _ in shape.entries]
    if isinstance(shape, PointSeries):
        return [x for x, _ in shape.pairs]
    if isinstance(shape, NamedSeriesList):
        head = shape.items[0].get("data")
        if isinstance(head, dict):
            return list(head.keys())
    return []
