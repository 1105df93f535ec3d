"""
Flight-telemetry components for descentplot.

This package contains the live-data provider interface, the sample recorder
and its poll scheduler, display config loading, and the monitor that wires
them to a chart.
"""

from descentplot.telemetry.io import format_display_config, get_display_config
from descentplot.telemetry.monitor import DescentMonitor, configure_logging, run_monitor
from descentplot.telemetry.provider import (
    AIRSPEED_CHANNEL,
    ALTITUDE_CHANNEL,
    Channel,
    ChannelReadError,
    LiveDataProvider,
    SyntheticDescentProvider,
)
from descentplot.telemetry.recorder import RecordingSession, SampleRecorder
from descentplot.telemetry.scheduler import PollScheduler

__all__ = [
    "get_display_config",
    "format_display_config",
    "DescentMonitor",
    "configure_logging",
    "run_monitor",
    "Channel",
    "ChannelReadError",
    "LiveDataProvider",
    "SyntheticDescentProvider",
    "ALTITUDE_CHANNEL",
    "AIRSPEED_CHANNEL",
    "RecordingSession",
    "SampleRecorder",
    "PollScheduler",
]
