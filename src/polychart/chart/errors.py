from __future__ import annotations


class ChartError(Exception):
    """Base class for failures surfaced to the user as an inline message."""


class EmptyDataError(ChartError, ValueError):
    def __init__(self, message: str = "No data provided for chart"):
        super().__init__(message)


class UnsupportedChartTypeError(ChartError, ValueError):
    def __init__(self, chart_type: str):
        self.chart_type = chart_type
        super().__init__(f'Chart type "{chart_type}" is not supported yet')


class RendererUnavailableError(ChartError, RuntimeError):
    def __init__(self, message: str = "Rendering library not found. Install plotly or pass a renderer."):
        super().__init__(message)


class ChartRenderError(ChartError, RuntimeError):
    """The rendering collaborator rejected a configuration."""

    def __init__(self, chart_type: str, reason: BaseException):
        self.chart_type = chart_type
        self.reason = reason
        super().__init__(f"Error creating {chart_type} chart: {reason}")
