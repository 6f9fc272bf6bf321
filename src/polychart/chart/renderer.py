"""
Rendering collaborator boundary.

The component only talks to `ChartRenderer` / `RenderedChart`; `PlotlyRenderer`
is the shipped implementation and turns the derived configuration into a
plotly figure.
"""
from __future__ import annotations
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Sequence
import logging
import tempfile

from ..utils.fp import get_in
from .formatters import AxisLabelFormatter
from .layering import Configuration, deep_merge
from .theme import apply_theme, theme_from_cfg

log = logging.getLogger(__name__)

_TICK_FORMATS = {
    "money": ",.2f",
    "thousand": ",.0f",
    "date": "%Y-%m-%d",
    "datetime": "%Y-%m-%d %H:%M",
    "time": "%H:%M",
}
_LINE_SHAPES = {"smooth": "spline", "straight": "linear", "stepline": "hv", "linestep": "vh"}


class RenderedChart(ABC):
    """A constructed chart instance owned by one component."""

    @abstractmethod
    def render(self) -> None: ...

    @abstractmethod
    def update_options(self, partial: Mapping[str, Any]) -> None: ...

    @abstractmethod
    def update_series(self, series: Sequence[Any]) -> None: ...

    @abstractmethod
    def destroy(self) -> None: ...

    @property
    @abstractmethod
    def attached(self) -> bool: ...

    @property
    @abstractmethod
    def data(self) -> List[Any]: ...


class ChartRenderer(ABC):
    @abstractmethod
    def construct(self, config: Configuration, series: Sequence[Any]) -> RenderedChart: ...


# ---------- plotly ----------

def _percent(raw: Any, default: float) -> float:
    try:
        return float(str(raw).rstrip("%")) / 100.0
    except (TypeError, ValueError):
        return default


def _xy(data: Sequence[Any], categories: Optional[Sequence[Any]]):
    xs, ys = [], []
    for i, point in enumerate(data or []):
        if isinstance(point, Mapping):
            xs.append(point.get("x"))
            ys.append(point.get("y"))
        else:
            xs.append(categories[i] if categories and i < len(categories) else i + 1)
            ys.append(point)
    return xs, ys


def _axis_layout(axis: Any) -> Dict[str, Any]:
    if not isinstance(axis, Mapping):
        return {}
    out: Dict[str, Any] = {}
    title = get_in(["title", "text"], axis)
    if title:
        out["title"] = {"text": title}
    rotate = get_in(["labels", "rotate"], axis)
    if rotate:
        out["tickangle"] = rotate
    formatter = get_in(["labels", "formatter"], axis)
    if isinstance(formatter, AxisLabelFormatter):
        cats = axis.get("categories")
        if cats:
            out["tickvals"] = list(cats)
            out["ticktext"] = [str(formatter(c)) for c in cats]
        elif formatter.code in _TICK_FORMATS:
            out["tickformat"] = _TICK_FORMATS[formatter.code]
    return out


def figure_from_config(config: Mapping[str, Any], series: Sequence[Any]):
    """Build a plotly Figure for an engine type plus its series."""
    import plotly.graph_objects as go

    engine = get_in(["chart", "type"], config, "line")
    colors = config.get("colors") or None
    labels = config.get("labels") or []
    show_text = bool(get_in(["dataLabels", "enabled"], config, False))
    fig = go.Figure()

    if engine in ("line", "area", "scatter"):
        cats = get_in(["xaxis", "categories"], config)
        dashes = get_in(["stroke", "dashArray"], config, [])
        width = get_in(["stroke", "width"], config, 2)
        shape = _LINE_SHAPES.get(get_in(["stroke", "curve"], config, "smooth"), "linear")
        marker_size = get_in(["markers", "size"], config, 6)
        stacked = bool(get_in(["chart", "stacked"], config, False))
        for i, s in enumerate(series):
            xs, ys = _xy(s.get("data"), cats)
            if engine == "scatter":
                mode = "markers"
            else:
                mode = "lines+markers" if marker_size else "lines"
            dash = "dash" if isinstance(dashes, list) and i < len(dashes) and dashes[i] else "solid"
            trace = go.Scatter(
                x=xs, y=ys, name=s.get("name"), mode=mode,
                line=dict(width=width, shape=shape, dash=dash, color=s.get("color")),
                marker=dict(size=marker_size or 6),
                text=ys if show_text else None,
            )
            if engine == "area":
                if stacked:
                    trace.stackgroup = "one"
                else:
                    trace.fill = "tozeroy"
            fig.add_trace(trace)
    elif engine == "bar":
        horizontal = bool(get_in(["plotOptions", "bar", "horizontal"], config, False))
        cats = get_in(["yaxis" if horizontal else "xaxis", "categories"], config)
        for s in series:
            xs, ys = _xy(s.get("data"), cats)
            bar = go.Bar(name=s.get("name"), marker_color=s.get("color"), text=ys if show_text else None)
            if horizontal:
                bar.update(x=ys, y=xs, orientation="h")
            else:
                bar.update(x=xs, y=ys)
            fig.add_trace(bar)
        fig.update_layout(barmode="stack" if get_in(["chart", "stacked"], config) else "group")
    elif engine in ("pie", "donut"):
        hole = 0.0
        if engine == "donut":
            hole = _percent(get_in(["plotOptions", "pie", "donut", "size"], config, "50%"), 0.5)
        fig.add_trace(go.Pie(
            labels=labels, values=list(series), hole=hole, sort=False,
            rotation=get_in(["plotOptions", "pie", "startAngle"], config, 0),
            marker=dict(colors=colors),
            textinfo="percent" if show_text else "none",
        ))
    elif engine in ("radialBar", "polarArea"):
        fig.add_trace(go.Barpolar(
            r=list(series), theta=labels, marker_color=colors,
            text=list(series) if show_text else None,
        ))
        if engine == "radialBar":
            fig.update_layout(polar=dict(
                hole=_percent(get_in(["plotOptions", "radialBar", "hollow", "size"], config, "50%"), 0.5),
                angularaxis=dict(rotation=90 - get_in(["plotOptions", "radialBar", "startAngle"], config, 0)),
            ))
    elif engine == "radar":
        cats = get_in(["xaxis", "categories"], config) or []
        opacity = get_in(["fill", "opacity"], config, 0.1)
        for s in series:
            r = list(s.get("data") or [])
            fig.add_trace(go.Scatterpolar(
                r=r, theta=list(cats) or [str(i + 1) for i in range(len(r))],
                name=s.get("name"), fill="toself", opacity=max(opacity, 0.3),
                line=dict(color=s.get("color")),
            ))
    else:
        raise ValueError(f"unknown engine type {engine!r}")

    layout: Dict[str, Any] = dict(
        title={"text": get_in(["title", "text"], config, "")},
        showlegend=bool(get_in(["legend", "show"], config, True)),
    )
    height = get_in(["chart", "height"], config)
    if isinstance(height, int):
        layout["height"] = height
    width = get_in(["chart", "width"], config)
    if isinstance(width, int):
        layout["width"] = width
    if colors:
        layout["colorway"] = list(colors)
    if get_in(["legend", "position"], config) in ("top", "bottom"):
        top = get_in(["legend", "position"], config) == "top"
        layout["legend"] = dict(orientation="h", y=1.1 if top else -0.2, x=0.5, xanchor="center")
    if engine in ("line", "area", "scatter", "bar"):
        layout["xaxis"] = _axis_layout(config.get("xaxis"))
        yaxis = config.get("yaxis")
        layout["yaxis"] = _axis_layout(yaxis[0] if isinstance(yaxis, list) and yaxis else yaxis)
    fig.update_layout(**layout)
    theme = theme_from_cfg(get_in(["theme", "mode"], config, "light"))
    return apply_theme(fig, theme, get_in(["chart", "fontFamily"], config, "inherit"))


class PlotlyChart(RenderedChart):
    def __init__(self, config: Configuration, series: Sequence[Any], include_plotlyjs: str = "cdn"):
        self.config: Configuration = dict(config)
        self._series: List[Any] = list(series)
        self._include_plotlyjs = include_plotlyjs
        self._figure = None
        self._destroyed = False

    @property
    def figure(self):
        if self._figure is None:
            self._figure = figure_from_config(self.config, self._series)
        return self._figure

    def render(self) -> None:
        self._figure = figure_from_config(self.config, self._series)
        log.debug("rendered chart", extra={"engine": get_in(["chart", "type"], self.config)})

    def update_options(self, partial: Mapping[str, Any]) -> None:
        self.config = deep_merge(self.config, partial)
        if self._figure is not None:
            self.render()

    def update_series(self, series: Sequence[Any]) -> None:
        self._series = list(series)
        if self._figure is not None:
            self.render()

    def destroy(self) -> None:
        self._figure = None
        self._destroyed = True

    @property
    def attached(self) -> bool:
        return not self._destroyed

    @property
    def data(self) -> List[Any]:
        return list(self._series)

    def to_html(self, full_html: bool = True) -> str:
        from plotly.io import to_html
        return to_html(self.figure, full_html=full_html, include_plotlyjs=self._include_plotlyjs)

    def export_html(self, out_html: Optional[str] = None) -> Path:
        """Write a self-contained HTML file for the chart and return its path."""
        html = self.to_html()
        if out_html is None:
            tmp = tempfile.NamedTemporaryFile(delete=False, suffix=".html")
            tmp.write(html.encode("utf-8"))
            tmp.flush()
            tmp.close()
            return Path(tmp.name)
        out = Path(out_html)
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_text(html, encoding="utf-8")
        return out


class PlotlyRenderer(ChartRenderer):
    def __init__(self, include_plotlyjs: str = "cdn"):
        import plotly  # noqa: F401  (fail fast when the rendering library is missing)
        self.include_plotlyjs = include_plotlyjs

    def construct(self, config: Configuration, series: Sequence[Any]) -> PlotlyChart:
        return PlotlyChart(config, series, include_plotlyjs=self.include_plotlyjs)
