"""
descentplot: live altitude and airspeed charting

Records simulator telemetry at a fixed cadence and draws it as a pannable,
zoomable time series while recording continues.
"""

# Import from chart subpackage
from descentplot.chart.data_manager import SampleBuffer, SamplePoint
from descentplot.chart.display_state import ChartMode, DisplayConfig, ViewportState
from descentplot.chart.geometry import build_geometry
from descentplot.chart.interaction import InteractionController
from descentplot.chart.plot import ChartPlot

# Import from telemetry subpackage
from descentplot.telemetry.io import get_display_config
from descentplot.telemetry.monitor import DescentMonitor, configure_logging, run_monitor
from descentplot.telemetry.provider import SyntheticDescentProvider
from descentplot.telemetry.recorder import SampleRecorder
from descentplot.telemetry.scheduler import PollScheduler

__all__ = [
    # General chart engine
    "ChartPlot",
    "SampleBuffer",
    "SamplePoint",
    "ChartMode",
    "DisplayConfig",
    "ViewportState",
    "InteractionController",
    "build_geometry",
    # Telemetry-specific components
    "SampleRecorder",
    "PollScheduler",
    "SyntheticDescentProvider",
    "DescentMonitor",
    "get_display_config",
    "configure_logging",
    "run_monitor",
]
