from typing import Union

import numpy as np
from loguru import logger

from .display_state import MAX_ZOOM, MIN_ZOOM, Canvas, ViewportState
from .domain import DomainRange

ArrayLike = Union[float, np.ndarray]


def total_time_span(time_domain: DomainRange) -> float:
    """Width of the time domain, floored to 1 s when it collapses to zero."""
    return time_domain.span or 1.0


def effective_time_span(time_domain: DomainRange, zoom: float) -> float:
    """Width in seconds of the visible time window at the given zoom."""
    return total_time_span(time_domain) / float(np.clip(zoom, MIN_ZOOM, MAX_ZOOM))


def max_pan_offset(time_domain: DomainRange, zoom: float) -> float:
    """Largest pan offset allowed for the given domain and zoom."""
    return max(0.0, time_domain.max - effective_time_span(time_domain, zoom))


def clamp_pan_offset(pan_offset: float, time_domain: DomainRange, zoom: float) -> float:
    """Clamp a requested pan offset into ``[0, max_pan_offset]``."""
    return float(np.clip(pan_offset, 0.0, max_pan_offset(time_domain, zoom)))


class ViewportTransform:
    """
    Maps data space (time, value) onto drawing-surface pixel coordinates.

    Built fresh from the current domains and viewport state every time
    geometry is needed; it holds no state of its own beyond those inputs.
    Zoom and pan are clamped on the way in, so a stale state can never
    produce an out-of-range view.
    """

    def __init__(
        self,
        time_domain: DomainRange,
        value_domain: DomainRange,
        state: ViewportState,
        canvas: Canvas = Canvas(),
    ):
        """
        Initialise the transform.

        Parameters
        ----------
        time_domain : DomainRange
            Time domain ``[minT, maxT]`` in seconds.
        value_domain : DomainRange
            Value domain ``[minV, maxV]`` of the active channel.
        state : ViewportState
            Zoom and pan state.
        canvas : Canvas, default=Canvas()
            Target drawing surface.
        """
        self.time_domain = time_domain
        self.value_domain = value_domain
        self.canvas = canvas

        self.zoom = float(np.clip(state.zoom, MIN_ZOOM, MAX_ZOOM))
        self.effective_time_span = effective_time_span(time_domain, self.zoom)
        self.pan_offset = clamp_pan_offset(state.pan_offset, time_domain, self.zoom)
        if self.pan_offset != state.pan_offset:
            logger.debug(
                f"Pan offset {state.pan_offset:.3f}s outside current domain, drawing at {self.pan_offset:.3f}s"
            )

        self._value_span = max(value_domain.span, 1.0)

    @property
    def visible_start(self) -> float:
        """Time (seconds) at the left edge of the plot area."""
        return self.time_domain.min + self.pan_offset

    @property
    def visible_end(self) -> float:
        """Time (seconds) at the right edge of the plot area."""
        return self.visible_start + self.effective_time_span

    def time_to_x(self, t: ArrayLike) -> ArrayLike:
        """Convert time in seconds to horizontal pixel position."""
        fraction = (np.asarray(t, dtype=np.float64) - self.visible_start) / (
            self.effective_time_span
        )
        x = self.canvas.margin + fraction * self.canvas.plot_width
        return float(x) if np.ndim(x) == 0 else x

    def value_to_y(self, v: ArrayLike) -> ArrayLike:
        """Convert a channel value to vertical pixel position (top is 0)."""
        fraction = (np.asarray(v, dtype=np.float64) - self.value_domain.min) / (
            self._value_span
        )
        y = (self.canvas.height - self.canvas.margin) - fraction * self.canvas.plot_height
        return float(y) if np.ndim(y) == 0 else y

    def x_delta_to_time(self, delta_x: float) -> float:
        """Convert a horizontal pixel distance to a time distance in seconds."""
        return (delta_x / self.canvas.plot_width) * self.effective_time_span
