"""Declarative chart configuration from string attributes and loose JSON payloads."""
from .chart import ChartComponent, ChartBuilder, AttributeState, normalize, merge_layers

__version__ = "0.1.0"

__all__ = ["ChartComponent", "ChartBuilder", "AttributeState", "normalize", "merge_layers", "__version__"]
