"""Per-chart-type descriptor table.

Every chart type shares one builder; what differs between types lives here as
data: the engine type handed to the renderer, the family (which decides how
payloads are normalized), the default option fragment and a handful of
switches the builder consults.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Literal, Optional

from .errors import UnsupportedChartTypeError


class ChartFamily(str, Enum):
    CARTESIAN = "cartesian"
    CIRCULAR = "circular"
    RADIAL = "radial"
    POLAR = "polar"
    RADAR = "radar"

    @property
    def is_scalar(self) -> bool:
        """Families whose series collapse to one value per descriptor."""
        return self in (ChartFamily.CIRCULAR, ChartFamily.RADIAL, ChartFamily.POLAR)


LegendPolicy = Literal["multi", "always", "opt_in"]
CategoryAxis = Literal["x", "y", "both", "none"]


@dataclass(frozen=True)
class ChartTypeSpec:
    name: str
    engine_type: str
    family: ChartFamily
    legend: LegendPolicy = "multi"
    category_axis: CategoryAxis = "x"
    height_key: str = "height"
    markers: bool = False
    stroke: bool = False
    bar_like: bool = False
    horizontal: Optional[bool] = None      # None -> from bar-orientation attribute
    reorder_by_value: bool = False
    defaults: Dict[str, Any] = field(default_factory=dict)

    @property
    def is_cartesian(self) -> bool:
        return self.family is ChartFamily.CARTESIAN


_BOLD_TITLE = {"title": {"style": {"fontWeight": "bold"}}}
_WHITE_LABELS = {"dataLabels": {"style": {"fontSize": "12px", "colors": ["#fff"]}}}
_PADDED_GRID = {"grid": {"padding": {"top": 10, "right": 20, "bottom": 10, "left": 10}}}
_MARKER_STROKE = {"markers": {"strokeColors": "#fff", "strokeWidth": 2}}


def _merged(*parts: Dict[str, Any]) -> Dict[str, Any]:
    from .layering import merge_layers
    return merge_layers(parts)


CHART_TYPES: Dict[str, ChartTypeSpec] = {
    "line": ChartTypeSpec(
        "line", "line", ChartFamily.CARTESIAN,
        markers=True, stroke=True,
        defaults=_merged(_MARKER_STROKE),
    ),
    "area": ChartTypeSpec(
        "area", "area", ChartFamily.CARTESIAN,
        height_key="area_height", markers=True, stroke=True,
        defaults=_merged(_MARKER_STROKE, _PADDED_GRID, {"chart": {"animations": {"enabled": True}}}),
    ),
    "column": ChartTypeSpec(
        "column", "bar", ChartFamily.CARTESIAN,
        stroke=True, bar_like=True,
        defaults=_merged(_PADDED_GRID, {
            "plotOptions": {"bar": {"borderRadiusApplication": "around", "borderRadiusWhenStacked": "all"}},
        }),
    ),
    "bar": ChartTypeSpec(
        "bar", "bar", ChartFamily.CARTESIAN,
        category_axis="both", bar_like=True, horizontal=True,
        defaults=_merged(_PADDED_GRID, {
            "plotOptions": {"bar": {
                "borderRadiusApplication": "around",
                "borderRadiusWhenStacked": "all",
                "startingShape": "rounded",
                "endingShape": "rounded",
            }},
            "dataLabels": {
                "textAnchor": "middle",
                "style": {"colors": ["#fff"], "fontSize": "12px"},
                "dropShadow": {"enabled": False},
            },
            "xaxis": {"labels": {"show": True}},
            "yaxis": {"labels": {"show": True}},
        }),
    ),
    "scatter": ChartTypeSpec(
        "scatter", "scatter", ChartFamily.CARTESIAN,
        markers=True, stroke=True,
        defaults=_merged(_MARKER_STROKE, {
            "chart": {"zoom": {"enabled": True, "type": "xy"}},
            "xaxis": {"tickAmount": 10},
            "yaxis": {"tickAmount": 7},
            "legend": {"labels": {"useSeriesColors": True}},
        }),
    ),
    "pie": ChartTypeSpec(
        "pie", "pie", ChartFamily.CIRCULAR,
        legend="always", category_axis="none",
        defaults=_merged(_BOLD_TITLE, _WHITE_LABELS),
    ),
    "donut": ChartTypeSpec(
        "donut", "donut", ChartFamily.CIRCULAR,
        legend="always", category_axis="none",
        defaults=_merged(_BOLD_TITLE, _WHITE_LABELS),
    ),
    "radialBar": ChartTypeSpec(
        "radialBar", "radialBar", ChartFamily.RADIAL,
        legend="opt_in", category_axis="none",
        defaults=_merged(_BOLD_TITLE, {
            "plotOptions": {"radialBar": {"barLabels": {
                "useSeriesColors": True, "offsetX": -8, "fontSize": "14px",
            }}},
            "dataLabels": {"style": {"fontSize": "14px", "colors": ["#fff"]}},
        }),
    ),
    "polarArea": ChartTypeSpec(
        "polarArea", "polarArea", ChartFamily.POLAR,
        legend="always", category_axis="none", reorder_by_value=True,
        defaults={"plotOptions": {"polarArea": {"rings": {"strokeWidth": 1}}}},
    ),
    "radar": ChartTypeSpec(
        "radar", "radar", ChartFamily.RADAR,
        markers=True,
        defaults={
            "dropShadow": {"enabled": True, "blur": 1, "left": 1, "top": 1},
            "fill": {"opacity": 0.1},
            "yaxis": {"stepSize": 20},
        },
    ),
}

DEFAULT_TYPE = "line"


def resolve(chart_type: Optional[str]) -> ChartTypeSpec:
    """Look up a chart type; absent -> line, unknown -> UnsupportedChartTypeError."""
    name = chart_type or DEFAULT_TYPE
    try:
        return CHART_TYPES[name]
    except KeyError:
        raise UnsupportedChartTypeError(name) from None
