"""
One builder for every chart type.

The per-type differences live in `families.CHART_TYPES`; this module reads
attribute state, normalizes the payload and stacks the configuration layers:

    base defaults < type defaults < attribute fragment < structural adjustments < user options

after which `chart.type` is pinned to the engine type.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from numbers import Real
from typing import Any, Callable, Collection, Dict, List, Mapping, Optional, Sequence, Tuple

from ..config_model.model import RootCfg
from ..utils.fp import fit_length, get_in, has_in
from . import attributes as A
from .attributes import AttributeState
from .errors import EmptyDataError
from .families import ChartFamily, ChartTypeSpec, resolve
from .formatters import AxisLabelFormatter
from .layering import Configuration, deep_merge, force_chart_type, merge_layers, nested
from .normalizer import (
    SeriesDescriptor,
    SeriesSet,
    item_label,
    normalize,
    payload_categories,
    payload_labels,
    render_series,
)

_REALTIME_ANIMATION = {"enabled": True, "easing": "linear", "dynamicAnimation": {"speed": 1000}}

_UNSET: Any = object()


@dataclass
class BuildResult:
    spec: ChartTypeSpec
    config: Configuration
    series: SeriesSet
    labels: List[str] = field(default_factory=list)

    @property
    def chart_type(self) -> str:
        return self.spec.name

    @property
    def render_series(self) -> List[Any]:
        return render_series(self.series, self.spec.family)


def _legend(position: str, show: bool) -> Dict[str, Any]:
    return {
        "show": show,
        "position": position,
        "verticalAlign": "top" if position == "top" else "bottom",
    }


def _value_key(value: Any) -> float:
    return float(value) if isinstance(value, Real) and not isinstance(value, bool) else float("-inf")


class ChartBuilder:
    def __init__(self, cfg: Optional[RootCfg] = None):
        self.cfg = cfg or RootCfg()

    @property
    def defaults(self):
        return self.cfg.defaults

    # ---------- entry point ----------

    def build(
        self,
        attrs: AttributeState,
        *,
        data: Any = _UNSET,
        categories: Optional[Sequence[Any]] = None,
        colors: Optional[Sequence[str]] = None,
    ) -> BuildResult:
        """
        Derive the full configuration for the current attribute state.

        `data`, `categories` and `colors` override the matching attributes
        (used when materializing the runtime series store). Raises
        UnsupportedChartTypeError / EmptyDataError; callers own the error surface.
        """
        spec = resolve(attrs.get("type"))
        payload = A.parse_data(attrs.get("data")) if data is _UNSET else data
        options = A.parse_options(attrs.get("options"))
        cats = list(categories) if categories is not None else A.json_list(attrs, "categories")
        color_list = list(colors) if colors is not None else A.json_list(attrs, "colors")

        series, labels = self.series_and_labels(spec, attrs, payload, cats)
        if not series:
            raise EmptyDataError()

        lower = [
            self.base_layer(),
            spec.defaults,
            self.attribute_layer(spec, attrs, series, labels, payload, cats, color_list, options),
        ]
        structural = self.structural_layer(spec, attrs, lower, options)
        config = merge_layers([*lower, structural, options])
        if isinstance(config.get("yaxis"), list):
            # a y-axis array from options replaces wholesale; fill each entry after the merge
            config["yaxis"] = self._axis_list_formatters(attrs, config["yaxis"])
        config = force_chart_type(config, spec.engine_type)
        return BuildResult(spec=spec, config=config, series=series, labels=labels)

    # ---------- series ----------

    def series_and_labels(
        self, spec: ChartTypeSpec, attrs: AttributeState, payload: Any, categories: Sequence[Any]
    ) -> Tuple[SeriesSet, List[str]]:
        """Normalized series and, for scalar families, their labels in render order."""
        series = normalize(payload, spec.family)
        if not series:
            return series, []
        if spec.family is ChartFamily.RADAR and isinstance(payload, dict) and A.text(attrs, "title"):
            series[0].name = A.text(attrs, "title")

        labels: List[str] = []
        if spec.family.is_scalar:
            labels = self.derive_labels(categories, payload, series)
            if spec.reorder_by_value and len(series) > 1:
                series, labels = self.reorder_by_value(series, labels)
        return series, labels

    def data_patch(self, spec: ChartTypeSpec, attrs: AttributeState, payload: Any) -> Tuple[SeriesSet, Configuration]:
        """
        Series for a data-only update plus the option fragment that keeps the
        rendered chart identical to a full build: refreshed labels for scalar
        families, payload-implied axis categories for radar.
        """
        cats = A.json_list(attrs, "categories")
        series, labels = self.series_and_labels(spec, attrs, payload, cats)
        if not series:
            return series, {}
        if spec.family.is_scalar:
            return series, {"labels": labels}
        if spec.family is ChartFamily.RADAR and not cats:
            implied = payload_categories(payload, spec.family)
            if implied:
                return series, {"xaxis": {"categories": implied}}
        return series, {}

    # ---------- labels ----------

    @staticmethod
    def derive_labels(categories: Sequence[Any], payload: Any, series: SeriesSet) -> List[str]:
        """categories attribute > object keys / pair heads / item names, fitted to the series count."""
        source = [str(c) for c in categories] if categories else payload_labels(payload)
        return fit_length(source, len(series), item_label)

    @staticmethod
    def reorder_by_value(series: SeriesSet, labels: List[str]):
        triples = sorted(
            zip(series, labels),
            key=lambda pair: _value_key(pair[0].data),
            reverse=True,
        )
        ordered = [SeriesDescriptor(label, s.data, s.color, s.dashed) for s, label in triples]
        return ordered, [label for _, label in triples]

    # ---------- layer 1 ----------

    def base_layer(self) -> Configuration:
        d = self.defaults
        return {
            "chart": {
                "height": d.height,
                "toolbar": {"show": True},
                "animations": {"enabled": True},
                "fontFamily": self.cfg.theme.font_family,
                "zoom": {"enabled": False},
            },
            "theme": {"mode": self.cfg.theme.name},
            "tooltip": {
                "enabled": True,
                "shared": True,
                "followCursor": True,
                "intersect": False,
                "x": {"show": True},
                "y": {"show": True},
            },
            "xaxis": {"tooltip": {"enabled": False}},
            "yaxis": {"tooltip": {"enabled": False}},
            "dataLabels": {"enabled": False},
            "responsive": [{
                "breakpoint": d.responsive_breakpoint,
                "options": {
                    "chart": {"height": d.responsive_height},
                    "legend": {
                        "position": "bottom",
                        "horizontalAlign": "center",
                        "verticalAlign": "bottom",
                        "offsetX": 0,
                        "offsetY": 0,
                    },
                },
            }],
            "grid": {
                "show": True,
                "borderColor": "#e7e7e7",
                "strokeDashArray": 3,
                "xaxis": {"lines": {"show": True}},
                "yaxis": {"lines": {"show": True}},
                "padding": {"top": 10, "right": 20, "bottom": 5, "left": 10},
            },
            "title": {"text": "", "align": "left", "style": {"fontSize": "16px", "color": "#333"}},
            "legend": {
                "show": True,
                "position": d.legend_position,
                "horizontalAlign": "center",
                "verticalAlign": "bottom",
                "floating": False,
                "offsetX": 0,
                "offsetY": 0,
                "labels": {"colors": "#333", "useSeriesColors": False},
            },
        }

    # ---------- layer 3 ----------

    def legend_visible(self, spec: ChartTypeSpec, attrs: AttributeState, n_series: int) -> bool:
        if spec.legend == "always":
            return A.not_false(attrs, "show-legend")
        if spec.legend == "opt_in":
            return A.is_true(attrs, "show-legend") and attrs.get("legend-position") != "hidden"
        return A.is_true(attrs, "show-legend") or (A.not_false(attrs, "show-legend") and n_series > 1)

    def is_horizontal(self, spec: ChartTypeSpec, attrs: AttributeState) -> bool:
        if spec.horizontal is not None:
            return spec.horizontal
        return attrs.get("bar-orientation") == "horizontal"

    def attribute_layer(
        self,
        spec: ChartTypeSpec,
        attrs: AttributeState,
        series: SeriesSet,
        labels: List[str],
        payload: Any,
        categories: List[Any],
        colors: List[str],
        options: Mapping[str, Any],
    ) -> Configuration:
        d = self.defaults
        position = A.text(attrs, "legend-position", d.legend_position)
        show_labels = A.present_not_false(attrs, "show-data-labels")

        chart: Dict[str, Any] = {
            "height": A.integer(attrs, "height", getattr(d, spec.height_key), zero_ok=False),
            "toolbar": {"show": A.not_false(attrs, "show-toolbar")},
        }
        if attrs.has("width"):
            width = attrs.get("width") or "100%"
            chart["width"] = int(width) if width.strip().isdigit() else width

        parts: List[Configuration] = [{
            "chart": chart,
            "title": {"text": A.text(attrs, "title")},
            "legend": _legend(position, self.legend_visible(spec, attrs, len(series))),
            "dataLabels": {"enabled": show_labels},
        }]
        if attrs.has("theme"):
            parts.append({"theme": {"mode": A.text(attrs, "theme", self.cfg.theme.name)}})
        if A.not_false(attrs, "gradient"):
            parts.append({"fill": {"type": "gradient"}})

        if spec.is_cartesian:
            parts.append(self._cartesian_fragment(spec, attrs, series, categories))
        elif spec.family is ChartFamily.RADAR:
            parts.append(self._radar_fragment(spec, attrs, series, categories, payload))
        else:
            parts.append({"labels": labels})
            parts.append(self._scalar_fragment(spec, attrs, show_labels))

        parts.append(self._colors_fragment(series, colors, options))
        return merge_layers(parts)

    def _stroke_fragment(self, spec: ChartTypeSpec, attrs: AttributeState, series: SeriesSet) -> Configuration:
        d = self.defaults
        out: Dict[str, Any] = {"dashArray": [d.dash_length if s.dashed else 0 for s in series]}
        if spec.stroke and not spec.bar_like:
            out["curve"] = A.text(attrs, "curve", d.curve)
            out["width"] = A.integer(attrs, "line-width", d.line_width, zero_ok=False)
        return {"stroke": out}

    def _axis_titles(self, attrs: AttributeState) -> Configuration:
        d = self.defaults
        out: Configuration = {}
        if A.text(attrs, "x-axis-title"):
            out = deep_merge(out, {"xaxis": {"title": {
                "text": attrs.get("x-axis-title"),
                "style": {"fontSize": "14px", "color": "#333"},
                "offsetY": A.integer(attrs, "x-axis-offsety", d.x_title_offset_y),
            }}})
        if A.text(attrs, "y-axis-title"):
            out = deep_merge(out, {"yaxis": {"title": {
                "text": attrs.get("y-axis-title"),
                "style": {"fontSize": "14px", "color": "#333"},
            }}})
        rotate = A.integer(attrs, "x-axis-label-rotate", 0)
        if rotate:
            out = deep_merge(out, {"xaxis": {
                "position": "bottom",
                "labels": {
                    "rotate": rotate,
                    "rotateAlways": True,
                    "offsetY": A.integer(attrs, "x-axis-label-rotate-offsety", d.label_rotate_offset_y, zero_ok=False),
                },
            }})
        return out

    def _cartesian_fragment(
        self, spec: ChartTypeSpec, attrs: AttributeState, series: SeriesSet, categories: List[Any]
    ) -> Configuration:
        d = self.defaults
        parts: List[Configuration] = [self._stroke_fragment(spec, attrs, series), self._axis_titles(attrs)]
        if spec.markers:
            parts.append({"markers": {"size": A.integer(attrs, "marker-size", d.marker_size)}})

        horizontal = spec.bar_like and self.is_horizontal(spec, attrs)
        if spec.bar_like:
            bar: Dict[str, Any] = {
                "horizontal": horizontal,
                "borderRadius": self.border_radius(attrs),
                "borderRadiusApplication": "around",
            }
            if A.text(attrs, "column-width"):
                bar["columnWidth"] = attrs.get("column-width")
            parts.append({"plotOptions": {"bar": bar}})
        if spec.name == "bar":
            centered = A.text(attrs, "data-label-position", "center") == "center"
            parts.append({"dataLabels": {"offsetX": 0 if centered else 30}})

        if categories:
            if spec.category_axis == "both":
                axes = ["xaxis", "yaxis"]
            elif horizontal:
                axes = ["yaxis"]
            else:
                axes = ["xaxis"]
            parts.extend({axis: {"categories": list(categories)}} for axis in axes)
        return merge_layers(parts)

    def _radar_fragment(
        self,
        spec: ChartTypeSpec,
        attrs: AttributeState,
        series: SeriesSet,
        categories: List[Any],
        payload: Any,
    ) -> Configuration:
        d = self.defaults
        cats = list(categories) or payload_categories(payload, spec.family)
        out = merge_layers([
            self._stroke_fragment(spec, attrs, series),
            {"markers": {"size": A.integer(attrs, "marker-size", d.marker_size)}},
        ])
        if cats:
            out = deep_merge(out, {"xaxis": {"categories": cats}})
        return out

    def _scalar_fragment(self, spec: ChartTypeSpec, attrs: AttributeState, show_labels: bool) -> Configuration:
        d = self.defaults
        parts: List[Configuration] = []
        if spec.family is ChartFamily.CIRCULAR:
            if attrs.has("start-angle"):
                parts.append(nested(["plotOptions", "pie", "startAngle"], A.integer(attrs, "start-angle", d.start_angle)))
            if attrs.has("end-angle"):
                parts.append(nested(["plotOptions", "pie", "endAngle"], A.integer(attrs, "end-angle", d.end_angle)))
        if spec.name == "donut":
            donut: Dict[str, Any] = {"labels": {
                "show": show_labels,
                "total": {"show": A.not_false(attrs, "donut-show-total")},
            }}
            if A.text(attrs, "hollow-size"):
                donut["size"] = attrs.get("hollow-size")
            parts.append({"plotOptions": {"pie": {"donut": donut}}})
        if spec.family is ChartFamily.RADIAL:
            parts.append({"plotOptions": {"radialBar": {
                "hollow": {"size": A.text(attrs, "hollow-size", d.hollow_size)},
                "track": {"strokeWidth": A.text(attrs, "track-width", d.track_width)},
                "startAngle": A.integer(attrs, "start-angle", d.start_angle),
                "endAngle": A.integer(attrs, "end-angle", d.end_angle),
                "barLabels": {"enabled": A.is_true(attrs, "bar-labels")},
            }}})
            if A.is_true(attrs, "dashed-radial"):
                parts.append({"stroke": {"dashArray": d.radial_dash_length}})
        return merge_layers(parts)

    def _colors_fragment(self, series: SeriesSet, colors: List[str], options: Mapping[str, Any]) -> Configuration:
        if options.get("colors"):
            return {}
        if colors:
            return {"colors": list(colors)}
        promoted = [s.color for s in series if s.color]
        if promoted:
            return {"colors": promoted, "legend": {"labels": {"useSeriesColors": True}}}
        return {}

    def border_radius(self, attrs: AttributeState) -> int:
        n = A.parse_int(attrs.get("border-radius"))
        return n if n is not None and n >= 0 else self.defaults.border_radius

    # ---------- layer 4 ----------

    def structural_layer(
        self,
        spec: ChartTypeSpec,
        attrs: AttributeState,
        lower: Sequence[Mapping[str, Any]],
        options: Mapping[str, Any],
    ) -> Configuration:
        """Apply realtime, stacking, axis formatting and data-label overrides in that order."""
        steps: List[Callable[[ChartTypeSpec, AttributeState, Configuration], Configuration]] = [
            self._realtime,
            self._stacking,
            self._axis_formats,
            self._data_label_overrides,
        ]
        adjusted: Configuration = {}
        for step in steps:
            view = merge_layers([*lower, adjusted, options])
            adjusted = deep_merge(adjusted, step(spec, attrs, view))
        return adjusted

    def _realtime(self, spec: ChartTypeSpec, attrs: AttributeState, view: Configuration) -> Configuration:
        if not A.is_true(attrs, "realtime"):
            return {}
        out: Configuration = {
            "chart": {"animations": dict(_REALTIME_ANIMATION), "zoom": {"enabled": False}},
            "dataLabels": {"enabled": False},
        }
        if spec.markers:
            out["markers"] = {"size": 0}
        return out

    def _stacking(self, spec: ChartTypeSpec, attrs: AttributeState, view: Configuration) -> Configuration:
        if not (spec.is_cartesian and A.is_true(attrs, "stacked")):
            return {}
        return {
            "chart": {"stacked": True},
            "plotOptions": {"bar": {
                "borderRadius": get_in(["plotOptions", "bar", "borderRadius"], view, self.border_radius(attrs)),
                "borderRadiusApplication": "around",
                "borderRadiusWhenStacked": "all",
            }},
        }

    def _axis_formats(self, spec: ChartTypeSpec, attrs: AttributeState, view: Configuration) -> Configuration:
        tz = self.cfg.formatting.timezone
        out: Configuration = {}

        x_code = A.axis_format(attrs, "x-axis-output-format")
        if x_code != "normal" and not has_in(["xaxis", "labels", "formatter"], view):
            out["xaxis"] = {"labels": {"formatter": AxisLabelFormatter(x_code, tz)}}

        y_code = A.axis_format(attrs, "y-axis-output-format")
        if y_code != "normal" and not isinstance(view.get("yaxis"), list):
            if not has_in(["yaxis", "labels", "formatter"], view):
                out["yaxis"] = {"labels": {"formatter": AxisLabelFormatter(y_code, tz)}}
        return out

    def _axis_list_formatters(self, attrs: AttributeState, axes: List[Any]) -> List[Any]:
        y_code = A.axis_format(attrs, "y-axis-output-format")
        if y_code == "normal":
            return axes
        return [self._with_formatter(y, y_code, self.cfg.formatting.timezone) for y in axes]

    @staticmethod
    def _with_formatter(axis: Any, code: str, tz: str) -> Dict[str, Any]:
        axis = dict(axis) if isinstance(axis, Mapping) else {}
        labels = dict(axis.get("labels") or {})
        labels.setdefault("formatter", AxisLabelFormatter(code, tz))
        axis["labels"] = labels
        return axis

    def _data_label_overrides(self, spec: ChartTypeSpec, attrs: AttributeState, view: Configuration) -> Configuration:
        out: Configuration = {}
        if attrs.has("data-label-orientation"):
            out = deep_merge(out, nested(["plotOptions", "bar", "dataLabels", "orientation"], attrs.get("data-label-orientation")))
        if attrs.has("data-label-position"):
            out = deep_merge(out, nested(["plotOptions", "bar", "dataLabels", "position"], attrs.get("data-label-position")))
        return out

    # ---------- incremental fragments ----------

    def visual_fragment(self, spec: ChartTypeSpec, updates: Mapping[str, Optional[str]]) -> Configuration:
        """One options patch for the visual attributes present in a flushed batch."""
        parts: List[Configuration] = []
        for name, value in updates.items():
            if name not in A.VISUAL_ATTRIBUTES:
                continue
            if name == "title":
                parts.append({"title": {"text": value or ""}})
            elif name == "height":
                parts.append({"chart": {"height": A.parse_int(value) or getattr(self.defaults, spec.height_key)}})
            elif name == "width":
                parts.append({"chart": {"width": A.parse_int(value) or "100%"}})
            elif name == "show-legend":
                parts.append({"legend": {"show": value == "true"}})
            elif name == "legend-position":
                parts.append({"legend": {"position": value}})
            elif name == "show-toolbar":
                parts.append({"chart": {"toolbar": {"show": value == "true"}}})
            elif name == "show-data-labels":
                parts.append({"dataLabels": {"enabled": value == "true"}})
            elif name == "data-label-orientation":
                parts.append(nested(["plotOptions", "bar", "dataLabels", "orientation"], value))
            elif name == "data-label-position":
                parts.append(nested(["plotOptions", "bar", "dataLabels", "position"], value))
        return merge_layers(parts)

    def style_fragment(
        self,
        spec: ChartTypeSpec,
        attrs: AttributeState,
        only: Optional[Collection[str]] = None,
    ) -> Configuration:
        """
        Options patch built from present attributes, without touching series.

        `only` restricts the attributes considered (the names in a flushed batch);
        None considers every present attribute, as a store refresh does.
        """
        d = self.defaults

        def want(name: str) -> bool:
            return attrs.has(name) and (only is None or name in only)

        parts: List[Configuration] = []
        if want("height"):
            parts.append({"chart": {"height": A.integer(attrs, "height", getattr(d, spec.height_key), zero_ok=False)}})
        if want("width"):
            parts.append({"chart": {"width": attrs.get("width") or "100%"}})
        if want("show-toolbar"):
            parts.append({"chart": {"toolbar": {"show": A.not_false(attrs, "show-toolbar")}}})
        if want("title"):
            parts.append({"title": {"text": A.text(attrs, "title")}})
        if want("show-legend") or want("legend-position"):
            position = A.text(attrs, "legend-position", d.legend_position)
            parts.append({"legend": _legend(position, A.not_false(attrs, "show-legend"))})
        if want("show-data-labels"):
            parts.append({"dataLabels": {"enabled": A.present_not_false(attrs, "show-data-labels")}})
        if want("theme"):
            parts.append({"theme": {"mode": A.text(attrs, "theme", self.cfg.theme.name)}})
        if want("colors") and A.json_list(attrs, "colors"):
            parts.append({"colors": A.json_list(attrs, "colors")})

        if spec.is_cartesian:
            parts.append(self._cartesian_style(spec, attrs, want))
        elif spec.family in (ChartFamily.CIRCULAR, ChartFamily.RADIAL):
            parts.append(self._circular_style(spec, attrs, want))

        if A.is_true(attrs, "realtime") and (only is None or "realtime" in only):
            parts.append(self._realtime(spec, attrs, {}))
        return merge_layers(parts)

    def _cartesian_style(self, spec: ChartTypeSpec, attrs: AttributeState, want: Callable[[str], bool]) -> Configuration:
        d = self.defaults
        parts: List[Configuration] = []
        if want("x-axis-title"):
            parts.append({"xaxis": {"title": {"text": A.text(attrs, "x-axis-title")}}})
        if want("x-axis-offsety"):
            parts.append({"xaxis": {"offsetY": A.integer(attrs, "x-axis-offsety", 0)}})
        if want("x-axis-label-rotate"):
            parts.append({"xaxis": {"labels": {"rotate": A.integer(attrs, "x-axis-label-rotate", 0)}}})
        if want("x-axis-label-rotate-offsety"):
            parts.append({"xaxis": {"labels": {"offsetY": A.integer(attrs, "x-axis-label-rotate-offsety", 0)}}})
        if want("y-axis-title"):
            parts.append({"yaxis": {"title": {"text": A.text(attrs, "y-axis-title")}}})
        if want("categories") and A.json_list(attrs, "categories"):
            parts.append({"xaxis": {"categories": A.json_list(attrs, "categories")}})

        if spec.stroke and not spec.bar_like:
            if want("curve"):
                parts.append({"stroke": {"curve": A.text(attrs, "curve", d.curve)}})
            if want("line-width"):
                parts.append({"stroke": {"width": A.integer(attrs, "line-width", d.line_width, zero_ok=False)}})
        if want("gradient"):
            parts.append({"fill": {"type": "gradient" if A.not_false(attrs, "gradient") else "solid"}})

        if spec.bar_like:
            if want("bar-orientation"):
                parts.append({"plotOptions": {"bar": {"horizontal": self.is_horizontal(spec, attrs)}}})
            if want("column-width"):
                parts.append({"plotOptions": {"bar": {"columnWidth": attrs.get("column-width") or "60%"}}})
            if want("border-radius"):
                parts.append({"plotOptions": {"bar": {"borderRadius": self.border_radius(attrs)}}})
            if want("data-label-orientation"):
                parts.append(nested(["plotOptions", "bar", "dataLabels", "orientation"], attrs.get("data-label-orientation")))
            if want("data-label-position"):
                parts.append(nested(["plotOptions", "bar", "dataLabels", "position"], attrs.get("data-label-position")))
            if want("stacked"):
                parts.append({"chart": {"stacked": A.is_true(attrs, "stacked")}})

        if spec.markers and want("marker-size"):
            parts.append({"markers": {"size": A.integer(attrs, "marker-size", d.marker_size)}})
        return merge_layers(parts)

    def _circular_style(self, spec: ChartTypeSpec, attrs: AttributeState, want: Callable[[str], bool]) -> Configuration:
        d = self.defaults
        parts: List[Configuration] = []
        key = "radialBar" if spec.family is ChartFamily.RADIAL else "pie"
        if want("start-angle"):
            parts.append(nested(["plotOptions", key, "startAngle"], A.integer(attrs, "start-angle", d.start_angle)))
        if want("end-angle"):
            parts.append(nested(["plotOptions", key, "endAngle"], A.integer(attrs, "end-angle", d.end_angle)))
        if spec.name == "donut":
            if want("hollow-size"):
                parts.append(nested(["plotOptions", "pie", "donut", "size"], A.text(attrs, "hollow-size", d.hollow_size)))
            if want("donut-show-total"):
                parts.append(nested(["plotOptions", "pie", "donut", "labels", "total", "show"], A.not_false(attrs, "donut-show-total")))
        if spec.family is ChartFamily.RADIAL:
            if want("hollow-size"):
                parts.append(nested(["plotOptions", "radialBar", "hollow", "size"], A.text(attrs, "hollow-size", d.hollow_size)))
            if want("track-width"):
                parts.append(nested(["plotOptions", "radialBar", "track", "strokeWidth"], A.text(attrs, "track-width", d.track_width)))
            if want("bar-labels"):
                parts.append(nested(["plotOptions", "radialBar", "barLabels", "enabled"], A.is_true(attrs, "bar-labels")))
            if want("dashed-radial"):
                dashed = A.is_true(attrs, "dashed-radial")
                parts.append({"stroke": {"dashArray": d.radial_dash_length if dashed else 0}})
        return merge_layers(parts)


def build_config(attrs: AttributeState, cfg: Optional[RootCfg] = None) -> BuildResult:
    return ChartBuilder(cfg).build(attrs)
