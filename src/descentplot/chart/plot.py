from typing import Any, Callable, Dict, List, Optional

import matplotlib as mpl
import matplotlib.pyplot as plt
from loguru import logger
from matplotlib.backend_bases import MouseButton
from matplotlib.patches import Rectangle
from matplotlib.widgets import Button

from .data_manager import SampleBuffer
from .display_state import Canvas, ChartMode, DisplayConfig, ViewportState
from .geometry import ChartGeometry, build_geometry
from .interaction import InteractionController


class ChartPlot:
    """
    Live time-series chart drawn with matplotlib.

    The axes span the logical canvas exactly (x right, y down), so the pixel
    geometry from ``build_geometry`` is used as data coordinates unchanged.
    Mouse drags pan the time axis and buttons switch mode and zoom. When a
    ``record_callback`` is given a Start/Stop button is added as well.
    """

    # Styling constants
    AXIS_COLOR = "#555555"
    AXIS_LINE_WIDTH = 2.0
    GRID_COLOR = "#333333"
    LABEL_COLOR = "#cccccc"
    LABEL_FONT_SIZE = 9
    LABEL_OFFSET_PX = 12
    TRACE_LINE_WIDTH = 3.0
    MARKER_SIZE = 8.0
    MARKER_EDGE_COLOR = "#ffffff"
    BUTTON_COLOR = "0.85"
    BUTTON_HOVER_COLOR = "0.95"
    ACTIVE_BUTTON_COLOR = "#9fd8c0"

    def __init__(
        self,
        buffer_source: Callable[[], SampleBuffer],
        config: DisplayConfig = DisplayConfig(),
        canvas: Canvas = Canvas(),
        state: Optional[ViewportState] = None,
        record_callback: Optional[Callable[[], None]] = None,
        is_recording: Callable[[], bool] = lambda: False,
        on_close: Optional[Callable[[], None]] = None,
    ):
        """
        Initialise the plot.

        Parameters
        ----------
        buffer_source : Callable[[], SampleBuffer]
            Returns the live sample buffer on every refresh.
        config : DisplayConfig, default=DisplayConfig()
            Title and colours.
        canvas : Canvas, default=Canvas()
            Logical drawing surface.
        state : Optional[ViewportState], default=None
            Initial viewport state. A fresh one is created if None.
        record_callback : Optional[Callable[[], None]], default=None
            Called when the Start/Stop button is clicked.
        is_recording : Callable[[], bool], default=lambda: False
            Reports the recording state for the Start/Stop label.
        on_close : Optional[Callable[[], None]], default=None
            Called when the figure window is closed.
        """
        self._buffer_source = buffer_source
        self.config = config
        self.canvas = canvas
        self.controller = InteractionController(buffer_source, state, canvas)
        self._record_callback = record_callback
        self._is_recording = is_recording
        self._on_close_callback = on_close

        self.fig: Optional[mpl.figure.Figure] = None
        self.ax: Optional[mpl.axes.Axes] = None

        self._trace_line: Optional[mpl.lines.Line2D] = None
        self._marker_line: Optional[mpl.lines.Line2D] = None
        self._grid_lines: List[mpl.lines.Line2D] = []
        self._tick_labels: List[mpl.text.Text] = []
        self._buttons: Dict[str, Button] = {}
        self._current_geometry: Optional[ChartGeometry] = None

    @property
    def state(self) -> ViewportState:
        return self.controller.state

    @property
    def geometry(self) -> Optional[ChartGeometry]:
        """Geometry drawn by the last refresh."""
        return self._current_geometry

    def new_timer(self, interval_ms: int) -> Any:
        """
        Create an event-loop timer bound to this figure's canvas.

        Raises
        ------
        RuntimeError
            If the plot has not been rendered yet.
        """
        if self.fig is None:
            raise RuntimeError("Plot must be rendered before a timer can be created.")
        return self.fig.canvas.new_timer(interval=interval_ms)

    def save(self, filepath: str) -> None:
        """
        Save the current plot to a file.

        Parameters
        ----------
        filepath : str
            Path to save the plot image.
        """
        if self.fig is None or self.ax is None:
            raise RuntimeError("Plot has not been initialized yet.")
        self.fig.savefig(filepath, facecolor=self.fig.get_facecolor())
        logger.info(f"Plot saved to {filepath}")

    def _setup_plot_elements(self) -> None:
        """Create the static background and the artists updated on refresh."""
        if self.fig is None or self.ax is None:
            raise RuntimeError(
                "Figure and Axes must be created before setting up plot elements."
            )
        c = self.canvas
        bg = self.config.background_color

        self.fig.patch.set_facecolor(bg)
        self.ax.set_xlim(0, c.width)
        self.ax.set_ylim(c.height, 0)
        self.ax.set_aspect("equal", adjustable="box")
        self.ax.set_axis_off()
        self.ax.add_patch(Rectangle((0, 0), c.width, c.height, facecolor=bg, zorder=-10))
        self.ax.set_title(self.config.title, color=self.LABEL_COLOR)

        geometry = build_geometry(self._buffer_source(), self.state, c)
        for (x0, y0), (x1, y1) in (geometry.x_axis, geometry.y_axis):
            self.ax.plot(
                [x0, x1],
                [y0, y1],
                color=self.AXIS_COLOR,
                linewidth=self.AXIS_LINE_WIDTH,
                zorder=2,
            )

        for _ in geometry.ticks:
            (grid_line,) = self.ax.plot(
                [], [], color=self.GRID_COLOR, linestyle=(0, (4, 4)), linewidth=1.0, zorder=1
            )
            label = self.ax.text(
                0,
                0,
                "",
                color=self.LABEL_COLOR,
                fontsize=self.LABEL_FONT_SIZE,
                ha="right",
                va="center",
            )
            self._grid_lines.append(grid_line)
            self._tick_labels.append(label)

        # Trace and markers are clipped to the plot area so panned-away samples stay hidden
        plot_area = Rectangle(
            (c.margin, c.margin),
            c.plot_width,
            c.plot_height,
            transform=self.ax.transData,
            visible=False,
        )
        (self._trace_line,) = self.ax.plot([], [], linewidth=self.TRACE_LINE_WIDTH, zorder=3)
        (self._marker_line,) = self.ax.plot(
            [],
            [],
            linestyle="None",
            marker="o",
            markersize=self.MARKER_SIZE,
            markeredgecolor=self.MARKER_EDGE_COLOR,
            markeredgewidth=1.0,
            zorder=4,
        )
        self._trace_line.set_clip_path(plot_area)
        self._marker_line.set_clip_path(plot_area)

    def _setup_buttons(self) -> None:
        """Create the mode, zoom and (optionally) record buttons above the chart."""
        if self.fig is None:
            raise RuntimeError("Figure must be created before adding buttons.")
        specs = [
            (
                ChartMode.ALTITUDE.value,
                ChartMode.ALTITUDE.label,
                lambda _e: self.set_mode(ChartMode.ALTITUDE),
            ),
            (
                ChartMode.AIRSPEED.value,
                ChartMode.AIRSPEED.label,
                lambda _e: self.set_mode(ChartMode.AIRSPEED),
            ),
            ("zoom_in", "Zoom In", lambda _e: self.zoom_in()),
            ("zoom_out", "Zoom Out", lambda _e: self.zoom_out()),
        ]
        if self._record_callback is not None:
            specs.append(("record", "Start", lambda _e: self._on_record_clicked()))

        width, gap = 0.15, 0.03
        for i, (key, label, callback) in enumerate(specs):
            button_ax = self.fig.add_axes([0.04 + i * (width + gap), 0.88, width, 0.08])
            button = Button(
                button_ax, label, color=self.BUTTON_COLOR, hovercolor=self.BUTTON_HOVER_COLOR
            )
            button.on_clicked(callback)
            self._buttons[key] = button

    def _connect_callbacks(self) -> None:
        """Connect matplotlib mouse and window callbacks."""
        if self.fig is None:
            raise RuntimeError("Figure must be created before connecting callbacks.")
        canvas = self.fig.canvas
        canvas.mpl_connect("button_press_event", self._on_press)
        canvas.mpl_connect("motion_notify_event", self._on_motion)
        canvas.mpl_connect("button_release_event", self._on_release)
        canvas.mpl_connect("axes_leave_event", self._on_axes_leave)
        canvas.mpl_connect("close_event", self._on_close)

    def _on_press(self, event) -> None:
        if event.inaxes is not self.ax or event.button != MouseButton.LEFT:
            return
        if event.xdata is None:
            return
        self.controller.begin_drag(event.xdata)

    def _on_motion(self, event) -> None:
        if not self.controller.is_dragging or event.inaxes is not self.ax:
            return
        if event.xdata is None:
            return
        self.controller.continue_drag(event.xdata)
        self.refresh()

    def _on_release(self, event) -> None:
        self.controller.end_drag()

    def _on_axes_leave(self, event) -> None:
        if event.inaxes is self.ax:
            self.controller.end_drag()

    def _on_close(self, event) -> None:
        logger.info("Plot window closed")
        if self._on_close_callback is not None:
            self._on_close_callback()

    def _on_record_clicked(self) -> None:
        self._record_callback()
        self.refresh()

    def draw_geometry(self, geometry: ChartGeometry) -> None:
        """Push geometry into the matplotlib artists without redrawing."""
        if self._trace_line is None or self._marker_line is None:
            raise RuntimeError("Plot elements must be set up before drawing geometry.")
        c = self.canvas
        for tick, grid_line, label in zip(geometry.ticks, self._grid_lines, self._tick_labels):
            grid_line.set_data([c.margin, c.width - c.margin], [tick.y, tick.y])
            label.set_position((c.margin - self.LABEL_OFFSET_PX, tick.y))
            label.set_text(f"{tick.value:.0f}")

        self._trace_line.set_data(geometry.polyline[:, 0], geometry.polyline[:, 1])
        self._trace_line.set_color(self.config.line_color_for(geometry.mode))
        self._marker_line.set_data(geometry.markers[:, 0], geometry.markers[:, 1])
        self._marker_line.set_markerfacecolor(self.config.point_color_for(geometry.mode))
        self._current_geometry = geometry

    def _update_mode_buttons(self, active: ChartMode) -> None:
        """Highlight the button of the selected mode, like an exclusive toggle group."""
        for mode in ChartMode:
            button = self._buttons.get(mode.value)
            if button is None:
                continue
            selected = mode is active
            button.color = self.ACTIVE_BUTTON_COLOR if selected else self.BUTTON_COLOR
            button.hovercolor = self.ACTIVE_BUTTON_COLOR if selected else self.BUTTON_HOVER_COLOR
            button.ax.set_facecolor(button.color)
            button.label.set_fontweight("bold" if selected else "normal")

    def refresh(self) -> None:
        """Rebuild geometry from the live buffer and schedule a redraw."""
        if self.fig is None:
            logger.debug("Plot not rendered yet. Skipping refresh.")
            return
        self.draw_geometry(build_geometry(self._buffer_source(), self.state, self.canvas))
        self._update_mode_buttons(self.state.mode)
        if "record" in self._buttons:
            self._buttons["record"].label.set_text("Stop" if self._is_recording() else "Start")
        self.fig.canvas.draw_idle()

    def render(self) -> None:
        """Create the figure, artists, buttons and callbacks."""
        if self.fig is not None or self.ax is not None:
            logger.warning("Plot already rendered. Create a new instance to re-render.")
            return

        logger.info("Rendering chart...")
        self.fig = plt.figure(figsize=(8, 5))
        self.ax = self.fig.add_axes([0.02, 0.02, 0.96, 0.8])

        self._setup_plot_elements()
        self._setup_buttons()
        self._connect_callbacks()
        self.refresh()
        logger.info("Chart rendering complete.")

    def set_mode(self, mode: ChartMode) -> None:
        self.controller.set_mode(mode)
        self.refresh()

    def zoom_in(self) -> None:
        self.controller.zoom_in()
        self.refresh()

    def zoom_out(self) -> None:
        self.controller.zoom_out()
        self.refresh()

    def home(self) -> None:
        """Return to the full, unpanned view."""
        self.controller.end_drag()
        self.state.reset_to_initial_state()
        self.refresh()

    def close(self) -> None:
        """Close the figure window."""
        if self.fig is not None:
            plt.close(self.fig)

    def show(self) -> None:
        """Display the plot."""
        if self.fig is None:
            self.render()
        plt.show()
