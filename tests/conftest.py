from pathlib import Path
from typing import Any, List, Optional
import pytest

from polychart.config_model.model import RootCfg
from polychart.chart.renderer import ChartRenderer, RenderedChart
from polychart.chart.scheduler import ManualTimers


class RecordingChart(RenderedChart):
    """Stand-in for a rendered chart; records every collaborator call."""

    def __init__(self, config, series):
        self.config = config
        self.series = list(series)
        self.calls: List[tuple] = []
        self._attached = True

    def render(self) -> None:
        self.calls.append(("render",))

    def update_options(self, partial) -> None:
        self.calls.append(("update_options", partial))

    def update_series(self, series) -> None:
        self.series = list(series)
        self.calls.append(("update_series", list(series)))

    def destroy(self) -> None:
        self._attached = False
        self.calls.append(("destroy",))

    def detach(self) -> None:
        self._attached = False

    @property
    def attached(self) -> bool:
        return self._attached

    @property
    def data(self):
        return list(self.series)

    def option_updates(self) -> List[Any]:
        return [c[1] for c in self.calls if c[0] == "update_options"]

    def series_updates(self) -> List[Any]:
        return [c[1] for c in self.calls if c[0] == "update_series"]


class RecordingRenderer(ChartRenderer):
    def __init__(self, fail: Optional[BaseException] = None):
        self.fail = fail
        self.charts: List[RecordingChart] = []

    def construct(self, config, series) -> RecordingChart:
        if self.fail is not None:
            raise self.fail
        chart = RecordingChart(config, series)
        self.charts.append(chart)
        return chart


@pytest.fixture(scope="session")
def project_root() -> Path:
    return Path(__file__).resolve().parents[1]


@pytest.fixture(scope="session")
def cfg_path(project_root: Path) -> Path:
    return project_root / "config" / "config.toml"


@pytest.fixture
def cfg() -> RootCfg:
    # built-in defaults, independent of the working directory
    return RootCfg()


@pytest.fixture
def timers() -> ManualTimers:
    return ManualTimers()


@pytest.fixture
def renderer() -> RecordingRenderer:
    return RecordingRenderer()


@pytest.fixture
def make_component(cfg, timers, renderer):
    from polychart.chart.component import ChartComponent

    def _make(attributes=None, *, connect=True, **kw):
        kw.setdefault("renderer", renderer)
        comp = ChartComponent(attributes, cfg=cfg, timers=timers, **kw)
        if connect:
            comp.connect()
        return comp
    return _make


@pytest.fixture
def tmp_out(tmp_path: Path) -> Path:
    d = tmp_path / "out"
    d.mkdir(parents=True, exist_ok=True)
    return d
