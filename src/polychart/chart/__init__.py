from .errors import (
    ChartError,
    EmptyDataError,
    UnsupportedChartTypeError,
    RendererUnavailableError,
    ChartRenderError,
)
from .families import ChartFamily, ChartTypeSpec, CHART_TYPES, resolve
from .normalizer import SeriesDescriptor, classify, normalize, to_payload
from .formatters import AxisLabelFormatter, format_axis_value
from .layering import deep_merge, merge_layers
from .attributes import AttributeState, OBSERVED_ATTRIBUTES
from .builder import BuildResult, ChartBuilder, build_config
from .store import RuntimeSeriesStore
from .scheduler import AsyncioTimers, ManualTimers, SchedulerState, UpdateScheduler
from .renderer import ChartRenderer, RenderedChart, PlotlyRenderer
from .component import ChartComponent

__all__ = [
    "ChartError", "EmptyDataError", "UnsupportedChartTypeError",
    "RendererUnavailableError", "ChartRenderError",
    "ChartFamily", "ChartTypeSpec", "CHART_TYPES", "resolve",
    "SeriesDescriptor", "classify", "normalize", "to_payload",
    "AxisLabelFormatter", "format_axis_value",
    "deep_merge", "merge_layers",
    "AttributeState", "OBSERVED_ATTRIBUTES",
    "BuildResult", "ChartBuilder", "build_config",
    "RuntimeSeriesStore",
    "AsyncioTimers", "ManualTimers", "SchedulerState", "UpdateScheduler",
    "ChartRenderer", "RenderedChart", "PlotlyRenderer",
    "ChartComponent",
]
