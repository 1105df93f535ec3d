from dataclasses import dataclass
from enum import Enum
from typing import Optional

import numpy as np
from loguru import logger

from .data_manager import SampleBuffer

# Zoom limits
MIN_ZOOM = 1.0
MAX_ZOOM = 10.0
ZOOM_STEP = 1.5

# Logical canvas size in pixels
CANVAS_WIDTH = 600
CANVAS_HEIGHT = 300
CANVAS_MARGIN = 40

# Display defaults
DEFAULT_TITLE = "Descent Profile"
DEFAULT_UNIT = "ft"
DEFAULT_BACKGROUND_COLOR = "#0b0f13"
ALTITUDE_COLOR = "#00ff9c"
AIRSPEED_COLOR = "#ff6600"


class ChartMode(Enum):
    """Channel feeding the value axis."""

    ALTITUDE = "altitude"
    AIRSPEED = "airspeed"

    @property
    def color(self) -> str:
        return ALTITUDE_COLOR if self is ChartMode.ALTITUDE else AIRSPEED_COLOR

    @property
    def label(self) -> str:
        return "Altitude" if self is ChartMode.ALTITUDE else "Speed"

    @property
    def unit(self) -> str:
        return "ft" if self is ChartMode.ALTITUDE else "kts"

    def values(self, buffer: SampleBuffer) -> np.ndarray:
        """Select this mode's channel values from a sample buffer."""
        if self is ChartMode.ALTITUDE:
            return buffer.altitudes
        return buffer.airspeeds


@dataclass(frozen=True)
class Canvas:
    """
    Logical drawing surface.

    Attributes
    ----------
    width : float
        Surface width in pixels.
    height : float
        Surface height in pixels.
    margin : float
        Margin reserved on every side for axes and labels.
    """

    width: float = CANVAS_WIDTH
    height: float = CANVAS_HEIGHT
    margin: float = CANVAS_MARGIN

    @property
    def plot_width(self) -> float:
        return self.width - 2 * self.margin

    @property
    def plot_height(self) -> float:
        return self.height - 2 * self.margin


@dataclass(frozen=True)
class DisplayConfig:
    """
    Static display descriptor.

    ``line_color`` and ``point_color`` override the per-mode colours when set.
    """

    title: str = DEFAULT_TITLE
    unit: str = DEFAULT_UNIT
    line_color: Optional[str] = None
    point_color: Optional[str] = None
    background_color: str = DEFAULT_BACKGROUND_COLOR

    def line_color_for(self, mode: ChartMode) -> str:
        return self.line_color or mode.color

    def point_color_for(self, mode: ChartMode) -> str:
        return self.point_color or self.line_color_for(mode)


class ViewportState:
    """
    Holds the chart mode and the zoom/pan state of the time axis.

    Only the interaction controller mutates this object. It outlives
    recording sessions: starting or stopping a recording leaves it untouched.
    """

    def __init__(
        self,
        mode: ChartMode = ChartMode.ALTITUDE,
        zoom: float = MIN_ZOOM,
        pan_offset: float = 0.0,
    ):
        """
        Initialise viewport state.

        Parameters
        ----------
        mode : ChartMode, default=ChartMode.ALTITUDE
            Channel feeding the value axis.
        zoom : float, default=1.0
            Time-axis zoom factor, kept within [1, 10].
        pan_offset : float, default=0.0
            Time offset (seconds) of the visible window from the domain start.
        """
        self.mode = mode
        self.zoom = float(np.clip(zoom, MIN_ZOOM, MAX_ZOOM))
        self.pan_offset = max(0.0, float(pan_offset))

    def __repr__(self) -> str:
        return (
            f"ViewportState(mode={self.mode.name}, zoom={self.zoom:.4g}, "
            f"pan_offset={self.pan_offset:.4g})"
        )

    def reset_to_initial_state(self) -> None:
        """Reset zoom and pan to the full view. The mode is kept."""
        self.zoom = MIN_ZOOM
        self.pan_offset = 0.0
        logger.info("Viewport reset to full view")
