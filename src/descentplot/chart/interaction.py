from typing import Callable, Optional

from loguru import logger

from .coordinate_manager import clamp_pan_offset, effective_time_span
from .data_manager import SampleBuffer
from .display_state import MAX_ZOOM, MIN_ZOOM, ZOOM_STEP, Canvas, ChartMode, ViewportState
from .domain import DomainRange, analyze_time_domain


class InteractionController:
    """
    Translates zoom clicks, mode changes and pointer drags into viewport state.

    The controller never touches the sample buffer. It reads the live buffer
    through ``buffer_source`` on every call so that pan limits follow the time
    domain as new samples arrive, including in the middle of a drag.
    """

    def __init__(
        self,
        buffer_source: Callable[[], SampleBuffer],
        state: Optional[ViewportState] = None,
        canvas: Canvas = Canvas(),
    ):
        """
        Initialise the controller.

        Parameters
        ----------
        buffer_source : Callable[[], SampleBuffer]
            Returns the current sample buffer.
        state : Optional[ViewportState], default=None
            State to drive. A fresh one is created if None.
        canvas : Canvas, default=Canvas()
            Surface on which pointer positions are measured.
        """
        self._buffer_source = buffer_source
        self.state = state if state is not None else ViewportState()
        self.canvas = canvas
        self._last_x: Optional[float] = None

    @property
    def is_dragging(self) -> bool:
        return self._last_x is not None

    def _time_domain(self) -> DomainRange:
        return analyze_time_domain(self._buffer_source())

    def _reclamp_pan(self) -> None:
        self.state.pan_offset = clamp_pan_offset(
            self.state.pan_offset, self._time_domain(), self.state.zoom
        )

    def zoom_in(self) -> None:
        """Multiply zoom by 1.5, up to 10."""
        self.state.zoom = min(self.state.zoom * ZOOM_STEP, MAX_ZOOM)
        self._reclamp_pan()
        logger.debug(f"Zoom in: {self.state}")

    def zoom_out(self) -> None:
        """Divide zoom by 1.5, down to 1."""
        self.state.zoom = max(self.state.zoom / ZOOM_STEP, MIN_ZOOM)
        self._reclamp_pan()
        logger.debug(f"Zoom out: {self.state}")

    def set_mode(self, mode: ChartMode) -> None:
        """Switch the value-axis channel. Zoom and pan are kept."""
        if mode is not self.state.mode:
            logger.info(f"Chart mode changed from {self.state.mode.value} to {mode.value}")
        self.state.mode = mode

    def begin_drag(self, pointer_x: float) -> None:
        """Start tracking a drag at the given pointer position."""
        self._last_x = float(pointer_x)

    def continue_drag(self, pointer_x: float) -> None:
        """
        Pan the view by the pointer movement since the last drag event.

        Dragging right moves the window back in time. Calls made without an
        active drag are ignored.
        """
        if self._last_x is None:
            return

        pointer_x = float(pointer_x)
        delta_x = pointer_x - self._last_x
        time_domain = self._time_domain()
        time_delta = (delta_x / self.canvas.plot_width) * effective_time_span(
            time_domain, self.state.zoom
        )
        self.state.pan_offset = clamp_pan_offset(
            self.state.pan_offset - time_delta, time_domain, self.state.zoom
        )
        self._last_x = pointer_x
        logger.debug(f"Drag by {delta_x:.1f}px ({time_delta:.3f}s): {self.state}")

    def end_drag(self) -> None:
        """Stop tracking the drag."""
        self._last_x = None
