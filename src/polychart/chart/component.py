"""
Attribute-driven chart component.

Owns the attribute state, the runtime series store, the update scheduler and
the rendered chart. Every mutation goes through `set_attribute` /
`remove_attribute`; the chart type rebuilds immediately, everything else is
debounced and applied as incremental patches.
"""
from __future__ import annotations
from typing import Any, Callable, Dict, List, Mapping, Optional
import json
import logging

from ..config_model.model import RootCfg, load_config
from . import attributes as A
from .attributes import AttributeState, VISUAL_ATTRIBUTES
from .builder import BuildResult, ChartBuilder
from .errors import ChartError, ChartRenderError, EmptyDataError, RendererUnavailableError
from .families import ChartTypeSpec, resolve
from .normalizer import render_series
from .renderer import ChartRenderer, PlotlyRenderer, RenderedChart
from .scheduler import AsyncioTimers, Batch, ManualTimers, TimerBackend, UpdateScheduler
from .store import RuntimeSeriesStore

log = logging.getLogger(__name__)

_DEFAULT_RENDERER: Any = object()
_PATCH_HANDLED = frozenset({"data", "options", "type", "loading", *VISUAL_ATTRIBUTES})
_CLEARED_AXES = {
    "xaxis": {"tooltip": {"enabled": False}, "labels": {}},
    "yaxis": {"tooltip": {"enabled": False}, "labels": {}},
}


def _default_timers() -> TimerBackend:
    import asyncio
    try:
        return AsyncioTimers(asyncio.get_running_loop())
    except RuntimeError:
        return ManualTimers()


def _attribute(name: str) -> property:
    """Plain string accessor for one attribute; assigning None removes it."""

    def fget(self: "ChartComponent") -> Optional[str]:
        return self.attrs.get(name)

    def fset(self: "ChartComponent", value: Any) -> None:
        if value is None:
            self.remove_attribute(name)
        else:
            self.set_attribute(name, value)

    return property(fget, fset, doc=f"The `{name}` attribute.")


class ChartComponent:
    def __init__(
        self,
        attributes: Optional[Mapping[str, Any]] = None,
        *,
        cfg: Optional[RootCfg] = None,
        renderer: Optional[ChartRenderer] = _DEFAULT_RENDERER,
        timers: Optional[TimerBackend] = None,
        on_error: Optional[List[Callable[[ChartError], Any]]] = None,
    ):
        self.cfg = cfg or load_config()
        self.attrs = AttributeState(attributes)
        self.store = RuntimeSeriesStore()
        self.builder = ChartBuilder(self.cfg)
        self.timers = timers or _default_timers()
        self.scheduler = UpdateScheduler(
            self.timers,
            self._apply_batch,
            self._rebuild,
            delay_ms=self.cfg.scheduler.update_delay_ms,
        )
        self.chart: Optional[RenderedChart] = None
        self.last_build: Optional[BuildResult] = None
        self.error: Optional[str] = None
        self.loading = self.attrs.has("loading")
        self.connected = False
        self.on_error: List[Callable[[ChartError], Any]] = list(on_error or [])
        self._renderer = renderer
        self._options: Dict[str, Any] = {}

    # ---------- lifecycle ----------

    def connect(self) -> Optional[RenderedChart]:
        self.connected = True
        return self.render()

    def disconnect(self) -> None:
        self.scheduler.cancel()
        self._destroy_chart("disconnect")
        self.connected = False

    def _destroy_chart(self, reason: str) -> None:
        if self.chart is None:
            return
        try:
            self.chart.destroy()
        except Exception:
            log.warning("error destroying chart", exc_info=True, extra={"reason": reason})
        self.chart = None

    def _require_renderer(self) -> ChartRenderer:
        if self._renderer is _DEFAULT_RENDERER:
            try:
                self._renderer = PlotlyRenderer(self.cfg.renderer.include_plotlyjs)
            except ImportError:
                self._renderer = None
        if self._renderer is None:
            raise RendererUnavailableError()
        return self._renderer

    def render(self) -> Optional[RenderedChart]:
        """Full rebuild. Failures become `self.error`; nothing propagates."""
        self.error = None
        self._destroy_chart("rebuild")
        try:
            renderer = self._require_renderer()
            result = self.builder.build(self.attrs)
            try:
                chart = renderer.construct(result.config, result.render_series)
                chart.render()
            except Exception as e:
                raise ChartRenderError(result.chart_type, e) from e
        except ChartError as e:
            self._fail(e)
            return None
        except Exception as e:
            log.exception("unexpected failure building chart")
            self._fail(ChartError(f"Error creating chart: {e}"))
            return None
        self.chart = chart
        self.last_build = result
        return chart

    def _fail(self, err: ChartError) -> None:
        self.error = str(err)
        if isinstance(err, (ChartRenderError, RendererUnavailableError)):
            log.error(self.error, exc_info=err)
        else:
            log.warning(self.error)
        for callback in self.on_error:
            callback(err)

    def _rebuild(self, name: str, value: Optional[str]) -> None:
        if self.connected:
            self.render()

    # ---------- attribute surface ----------

    def set_attribute(self, name: str, value: Any) -> None:
        if self.attrs.set(name, value):
            self._changed(name, self.attrs.get(name))

    def remove_attribute(self, name: str) -> None:
        if self.attrs.remove(name):
            self._changed(name, None)

    def get_attribute(self, name: str) -> Optional[str]:
        return self.attrs.get(name)

    def has_attribute(self, name: str) -> bool:
        return self.attrs.has(name)

    def _changed(self, name: str, value: Optional[str]) -> None:
        if not A.is_observed(name):
            return
        if name == "loading":
            self.loading = value is not None
            return
        if self.connected:
            self.scheduler.notify(name, value)

    # ---------- patch path ----------

    def _spec(self) -> Optional[ChartTypeSpec]:
        try:
            return resolve(self.attrs.get("type"))
        except ChartError:
            return None

    def _apply_batch(self, batch: Batch) -> None:
        chart = self.chart
        if chart is None:
            # no chart yet: a full render picks up the flushed state
            if self.connected:
                self.render()
            return
        spec = self._spec()
        if spec is None or not chart.attached:
            log.debug("discarding pending batch", extra={"attributes": sorted(batch)})
            return

        if "data" in batch:
            self._patch_data(chart, spec, batch["data"])

        if "options" in batch:
            try:
                chart.update_options(A.parse_options(batch["options"]))
            except Exception:
                log.error("error updating chart options", exc_info=True)

        visual = self.builder.visual_fragment(spec, batch)
        if visual:
            try:
                chart.update_options(visual)
            except Exception:
                log.error("error applying visual attributes", exc_info=True)

        rest = [name for name in batch if name not in _PATCH_HANDLED]
        if rest:
            try:
                fragment = self.builder.style_fragment(spec, self.attrs, only=rest)
                if fragment:
                    chart.update_options(fragment)
            except Exception:
                log.error("error applying style attributes", exc_info=True)

    def _patch_data(self, chart: RenderedChart, spec: ChartTypeSpec, raw: Optional[str]) -> None:
        try:
            series, fragment = self.builder.data_patch(spec, self.attrs, A.parse_data(raw))
            if series and fragment:
                chart.update_options(fragment)
            chart.update_series(render_series(series, spec.family))
        except Exception:
            log.error("error updating chart data", exc_info=True)
            return
        if series:
            self.error = None
        else:
            self._fail(EmptyDataError())

    def force_update(self) -> None:
        self.scheduler.force_now()

    def set_update_delay(self, delay_ms: int) -> None:
        self.scheduler.set_delay(delay_ms)

    # ---------- attribute accessors ----------

    type_of = _attribute("type")
    height = _attribute("height")
    width = _attribute("width")
    theme = _attribute("theme")
    title = _attribute("title")
    show_legend = _attribute("show-legend")
    legend_position = _attribute("legend-position")
    show_toolbar = _attribute("show-toolbar")
    x_axis_title = _attribute("x-axis-title")
    y_axis_title = _attribute("y-axis-title")
    bar_orientation = _attribute("bar-orientation")
    data_label_orientation = _attribute("data-label-orientation")
    data_label_position = _attribute("data-label-position")
    curve = _attribute("curve")
    line_width = _attribute("line-width")
    donut_show_total = _attribute("donut-show-total")
    hollow_size = _attribute("hollow-size")
    dashed_radial = _attribute("dashed-radial")
    track_width = _attribute("track-width")
    bar = _attribute("bar")
    x_axis_offset_y = _attribute("x-axis-offsety")
    x_axis_label_rotate = _attribute("x-axis-label-rotate")
    x_axis_label_rotate_offset_y = _attribute("x-axis-label-rotate-offsety")
    gradient = _attribute("gradient")
    realtime = _attribute("realtime")

    @property
    def show_data_labels(self) -> bool:
        return A.present_not_false(self.attrs, "show-data-labels")

    @show_data_labels.setter
    def show_data_labels(self, value: Any) -> None:
        if value is None or value is False or value == "false":
            self.remove_attribute("show-data-labels")
        else:
            self.set_attribute("show-data-labels", "true")

    @property
    def stacked(self) -> bool:
        return A.is_true(self.attrs, "stacked")

    @stacked.setter
    def stacked(self, value: Any) -> None:
        self.set_attribute("stacked", "true" if value else "false")

    @property
    def categories(self) -> List[Any]:
        return A.json_list(self.attrs, "categories")

    @categories.setter
    def categories(self, value: Any) -> None:
        self.set_attribute("categories", json.dumps(value))

    # ---------- programmatic API ----------

    @property
    def data(self) -> Any:
        return A.parse_data(self.attrs.get("data"))

    @data.setter
    def data(self, value: Any) -> None:
        self.set_attribute("data", json.dumps(value))

    @property
    def options(self) -> Dict[str, Any]:
        if self.attrs.get("options"):
            return A.parse_options(self.attrs.get("options"))
        return dict(self._options)

    @options.setter
    def options(self, value: Mapping[str, Any]) -> None:
        self._options = {**self._options, **value}
        if self.chart is not None:
            self.chart.update_options(self._options)

    def update_data(self, new_data: Any) -> None:
        self.set_attribute("data", json.dumps(new_data))

    def update_options(self, new_options: Mapping[str, Any]) -> None:
        current = A.parse_options(self.attrs.get("options"))
        self.set_attribute("options", json.dumps({**current, **new_options}))

    def set_loading(self, loading: bool) -> None:
        if loading:
            self.set_attribute("loading", "")
        else:
            self.remove_attribute("loading")

    def get_chart(self) -> Optional[RenderedChart]:
        return self.chart

    def export_data(self) -> Optional[List[Any]]:
        return self.chart.data if self.chart is not None else None

    def export_html(self, out_html: Optional[str] = None):
        exporter = getattr(self.chart, "export_html", None)
        if exporter is None:
            raise ChartError("No rendered chart that can be exported to HTML")
        return exporter(out_html)

    def clear_data(self) -> None:
        if self.chart is not None:
            self.chart.update_series([])
            self.chart.update_options(_CLEARED_AXES)
        self.store.clear()
        self.remove_attribute("data")
        self.remove_attribute("categories")

    # ---------- runtime series store ----------

    def add_series(self, name: str, color: Optional[str], values: Any) -> None:
        self.store.add_series(name, color, values)

    def add_series_value(self, name: str, value: Any) -> None:
        self.store.add_series_value(name, value)

    def add_xy(self, x: str, y: Any) -> None:
        self.store.add_xy(x, y)

    def set_series_color(self, name: str, color: str) -> None:
        self.store.set_series_color(name, color)

    def add_series_category_value(self, name: str, category: Any, value: Any) -> None:
        self.store.add_series_category_value(name, category, value)

    def add_category(self, name: Any) -> None:
        self.store.add_category(name)

    def add_categories(self, names: Any) -> None:
        self.store.add_categories(names)

    def add_colors(self, colors: Any) -> None:
        self.store.add_colors(colors)

    def _mirror(self, name: str, value: Any) -> None:
        # store -> attribute mirror; bypasses the scheduler
        if value:
            self.attrs.set(name, json.dumps(value))
        else:
            self.attrs.remove(name)

    def refresh(self) -> None:
        """Push the runtime store through the builder and mirror it into the attributes."""
        spec = self._spec()
        if spec is None:
            return
        payload = self.store.materialize(spec.family)
        colors = self.store.series_colors() if spec.family.is_scalar else list(self.store.colors)
        self._mirror("data", payload)
        self._mirror("colors", colors)
        if not spec.family.is_scalar:
            self._mirror("categories", list(self.store.categories))

        if self.chart is None:
            if self.connected:
                self.render()
            return
        if not payload:
            self.chart.update_series([])
            return
        try:
            result = self.builder.build(self.attrs)
            self.chart.update_options(result.config)
            self.chart.update_series(result.render_series)
            self.last_build = result
        except Exception:
            log.error("error applying refresh", exc_info=True)
