"""
General-purpose live chart components for descentplot.

This package contains the sampling buffer, domain analysis, viewport
transform, interaction and geometry code, plus a matplotlib surface that
draws the result. Nothing here knows where samples come from.
"""

from descentplot.chart.coordinate_manager import ViewportTransform, clamp_pan_offset
from descentplot.chart.data_manager import SampleBuffer, SamplePoint
from descentplot.chart.display_state import Canvas, ChartMode, DisplayConfig, ViewportState
from descentplot.chart.domain import DomainRange, analyze_domains
from descentplot.chart.geometry import ChartGeometry, Tick, build_geometry
from descentplot.chart.interaction import InteractionController
from descentplot.chart.plot import ChartPlot

__all__ = [
    "ChartPlot",
    "SampleBuffer",
    "SamplePoint",
    "Canvas",
    "ChartMode",
    "DisplayConfig",
    "ViewportState",
    "DomainRange",
    "analyze_domains",
    "ViewportTransform",
    "clamp_pan_offset",
    "InteractionController",
    "ChartGeometry",
    "Tick",
    "build_geometry",
]
