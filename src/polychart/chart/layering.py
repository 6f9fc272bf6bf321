"""Deep-merge of ordered configuration layers.

Later layers win. Plain mappings merge key-by-key; anything else (lists
included) replaces the earlier value wholesale. Inputs are never mutated.
"""
from __future__ import annotations
from copy import deepcopy
from functools import reduce
from typing import Any, Dict, Iterable, Mapping, Optional

Configuration = Dict[str, Any]


def deep_merge(base: Mapping[str, Any], upd: Optional[Mapping[str, Any]]) -> Configuration:
    merged = deepcopy(dict(base))
    for key, value in (upd or {}).items():
        if isinstance(value, Mapping) and isinstance(merged.get(key), Mapping):
            merged[key] = deep_merge(merged[key], value)
        else:
            merged[key] = deepcopy(value)
    return merged


def merge_layers(layers: Iterable[Optional[Mapping[str, Any]]]) -> Configuration:
    return reduce(deep_merge, layers, {})


def force_chart_type(config: Mapping[str, Any], engine_type: str) -> Configuration:
    """Pin `chart.type` after all layers so user options cannot switch the renderer family."""
    out = dict(config)
    chart = out.get("chart")
    out["chart"] = {**(chart if isinstance(chart, Mapping) else {}), "type": engine_type}
    return out


def nested(path: Iterable[str], value: Any) -> Configuration:
    """nested(["plotOptions", "bar", "horizontal"], True) -> {"plotOptions": {"bar": {"horizontal": True}}}"""
    keys = list(path)
    out: Any = value
    for key in reversed(keys):
        out = {key: out}
    return out
