from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .families import ChartFamily

PLACEHOLDER = None


@dataclass
class SeriesRecord:
    name: str
    data: Any = None
    color: Optional[str] = None

    def to_payload(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"name": self.name, "data": self.data}
        if self.color:
            out["color"] = self.color
        return out


@dataclass
class RuntimeSeriesStore:
    """
    Point-level series state kept apart from the `data` attribute.

    Categories and colors only ever grow. Series arrays are not resized when a
    category is added; `materialize` pads them back into alignment.
    """
    series: Dict[str, SeriesRecord] = field(default_factory=dict)
    categories: List[Any] = field(default_factory=list)
    colors: List[str] = field(default_factory=list)

    def add_series(self, name: str, color: Optional[str], values: Any) -> None:
        self.series[name] = SeriesRecord(name, list(values) if isinstance(values, list) else values, color)

    def add_series_value(self, name: str, value: Any) -> None:
        # replaces the record wholesale, color included
        self.series[name] = SeriesRecord(name, value)

    def add_xy(self, x: str, y: Any) -> None:
        self.add_series_value(x, y)

    def set_series_color(self, name: str, color: str) -> None:
        record = self.series.get(name)
        if record is not None:
            record.color = color

    def add_series_category_value(self, name: str, category: Any, value: Any) -> None:
        """
        Write `value` at the position of `category` in series `name`.

        A new series starts with one placeholder per known category. An unknown
        category leaves the data untouched.
        """
        record = self.series.get(name)
        if record is None:
            record = SeriesRecord(name, [PLACEHOLDER] * len(self.categories))
            self.series[name] = record
        try:
            pos = self.categories.index(category)
        except ValueError:
            return
        data = record.data if isinstance(record.data, list) else []
        if len(data) <= pos:
            data.extend([PLACEHOLDER] * (pos + 1 - len(data)))
        data[pos] = value
        record.data = data

    def add_category(self, name: Any) -> None:
        self.categories.append(name)

    def add_categories(self, names: Any) -> None:
        if isinstance(names, (list, tuple)):
            self.categories.extend(names)

    def add_colors(self, colors: Any) -> None:
        if isinstance(colors, (list, tuple)):
            self.colors.extend(colors)

    def clear(self) -> None:
        self.series.clear()
        self.categories.clear()
        self.colors.clear()

    def __len__(self) -> int:
        return len(self.series)

    def materialize(self, family: ChartFamily) -> List[Dict[str, Any]]:
        """Named-series payload for the current contents, shaped for `family`."""
        out = []
        for record in self.series.values():
            item = record.to_payload()
            if family.is_scalar:
                data = record.data
                item["data"] = data[0] if isinstance(data, list) and data else data
            else:
                data = list(record.data) if isinstance(record.data, (list, tuple)) else [record.data]
                if self.categories and len(data) < len(self.categories):
                    data.extend([PLACEHOLDER] * (len(self.categories) - len(data)))
                item["data"] = data
            out.append(item)
        return out

    def series_colors(self) -> List[str]:
        return [r.color for r in self.series.values() if r.color]
