from dataclasses import dataclass
from typing import List, Tuple

import numpy as np

from .coordinate_manager import ViewportTransform
from .data_manager import SampleBuffer
from .display_state import Canvas, ChartMode, ViewportState
from .domain import analyze_domains

NUM_VALUE_TICKS = 5

Point = Tuple[float, float]


@dataclass(frozen=True)
class Tick:
    """Value-axis tick: raw value for the label, pixel row for placement."""

    value: float
    y: float


@dataclass(frozen=True)
class ChartGeometry:
    """
    Draw-ready geometry in drawing-surface pixel coordinates.

    ``polyline`` and ``markers`` are ``(n, 2)`` arrays of ``(x, y)`` rows, one
    per sample in buffer order.
    """

    mode: ChartMode
    ticks: List[Tick]
    polyline: np.ndarray
    markers: np.ndarray
    x_axis: Tuple[Point, Point]
    y_axis: Tuple[Point, Point]
    visible_time: Tuple[float, float]


def _axis_baselines(canvas: Canvas) -> Tuple[Tuple[Point, Point], Tuple[Point, Point]]:
    bottom = canvas.height - canvas.margin
    x_axis = ((canvas.margin, bottom), (canvas.width - canvas.margin, bottom))
    y_axis = ((canvas.margin, canvas.margin), (canvas.margin, bottom))
    return x_axis, y_axis


def build_geometry(
    buffer: SampleBuffer, state: ViewportState, canvas: Canvas = Canvas()
) -> ChartGeometry:
    """
    Build the geometry for the current buffer and viewport.

    Every sample is transformed; the visible window comes from the transform
    alone, not from dropping samples.

    Parameters
    ----------
    buffer : SampleBuffer
        Samples to draw.
    state : ViewportState
        Mode, zoom and pan.
    canvas : Canvas, default=Canvas()
        Target drawing surface.

    Returns
    -------
    ChartGeometry
        Ticks, polyline vertices, marker positions and axis baselines.
    """
    time_domain, value_domain = analyze_domains(buffer, state.mode)
    transform = ViewportTransform(time_domain, value_domain, state, canvas)

    tick_values = np.linspace(value_domain.min, value_domain.max, NUM_VALUE_TICKS)
    ticks = [Tick(float(v), transform.value_to_y(float(v))) for v in tick_values]

    if len(buffer):
        xs = transform.time_to_x(buffer.times)
        ys = transform.value_to_y(state.mode.values(buffer))
        vertices = np.column_stack((xs, ys))
    else:
        vertices = np.empty((0, 2), dtype=np.float64)

    x_axis, y_axis = _axis_baselines(canvas)
    return ChartGeometry(
        mode=state.mode,
        ticks=ticks,
        polyline=vertices,
        markers=vertices.copy(),
        x_axis=x_axis,
        y_axis=y_axis,
        visible_time=(transform.visible_start, transform.visible_end),
    )
