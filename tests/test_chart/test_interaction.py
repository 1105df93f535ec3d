"""Tests for zoom, mode and drag interaction."""

import numpy as np
import pytest

from descentplot.chart.coordinate_manager import effective_time_span, max_pan_offset
from descentplot.chart.data_manager import SampleBuffer
from descentplot.chart.display_state import ChartMode, ViewportState
from descentplot.chart.domain import analyze_time_domain
from descentplot.chart.interaction import InteractionController


@pytest.fixture
def ten_second_buffer(make_buffer):
    return make_buffer([0.0, 10.0], [1000.0, 2000.0])


def test_zoom_in_steps_by_one_and_a_half_up_to_ten() -> None:
    """Each zoom in multiplies by 1.5 and stops at 10."""
    controller = InteractionController(SampleBuffer)
    for _ in range(3):
        controller.zoom_in()
    assert controller.state.zoom == 3.375
    controller.zoom_in()
    assert controller.state.zoom == 5.0625
    for _ in range(5):
        controller.zoom_in()
    assert controller.state.zoom == 10.0


def test_zoom_out_stops_at_one() -> None:
    """Zoom out divides by 1.5 and never goes below 1."""
    controller = InteractionController(SampleBuffer, ViewportState(zoom=2.25))
    controller.zoom_out()
    assert controller.state.zoom == pytest.approx(1.5)
    controller.zoom_out()
    controller.zoom_out()
    assert controller.state.zoom == 1.0


def test_set_mode_keeps_zoom_and_pan() -> None:
    """Switching channel leaves the viewport where it was."""
    state = ViewportState(zoom=3.0, pan_offset=2.0)
    controller = InteractionController(SampleBuffer, state)
    controller.set_mode(ChartMode.AIRSPEED)
    assert state.mode is ChartMode.AIRSPEED
    assert state.zoom == 3.0
    assert state.pan_offset == 2.0


def test_drag_left_moves_window_forward_in_time(ten_second_buffer) -> None:
    """Dragging left by half the plot width pans by half the visible span."""
    controller = InteractionController(lambda: ten_second_buffer, ViewportState(zoom=2.0))
    controller.begin_drag(400.0)
    controller.continue_drag(140.0)
    # 260 px of 520 px at a 5 s visible span
    assert controller.state.pan_offset == pytest.approx(2.5)
    assert controller.is_dragging


def test_drag_is_incremental(ten_second_buffer) -> None:
    """Each continue_drag pans by the movement since the previous one."""
    controller = InteractionController(lambda: ten_second_buffer, ViewportState(zoom=2.0))
    controller.begin_drag(300.0)
    controller.continue_drag(248.0)
    controller.continue_drag(196.0)
    assert controller.state.pan_offset == pytest.approx(1.0)


def test_drag_clamps_to_pan_limits(ten_second_buffer) -> None:
    """Pan never goes below 0 or beyond maxT minus the visible span."""
    controller = InteractionController(lambda: ten_second_buffer, ViewportState(zoom=2.0))
    controller.begin_drag(100.0)
    controller.continue_drag(500.0)
    assert controller.state.pan_offset == 0.0
    controller.continue_drag(-5000.0)
    assert controller.state.pan_offset == pytest.approx(5.0)


def test_drag_at_full_zoom_out_cannot_pan(ten_second_buffer) -> None:
    """At zoom 1 the whole domain is visible so there is nothing to pan."""
    controller = InteractionController(lambda: ten_second_buffer)
    controller.begin_drag(500.0)
    controller.continue_drag(0.0)
    assert controller.state.pan_offset == 0.0


def test_no_pan_outside_drag_session(ten_second_buffer) -> None:
    """continue_drag without begin_drag, or after end_drag, is ignored."""
    controller = InteractionController(lambda: ten_second_buffer, ViewportState(zoom=2.0))
    controller.continue_drag(0.0)
    assert controller.state.pan_offset == 0.0

    controller.begin_drag(300.0)
    controller.end_drag()
    assert not controller.is_dragging
    controller.continue_drag(0.0)
    assert controller.state.pan_offset == 0.0


def test_pan_limits_follow_buffer_growth_mid_drag(make_buffer) -> None:
    """Clamps are recomputed from the live buffer on every drag event."""
    buffers = [make_buffer([0.0, 10.0], [1.0, 2.0])]
    controller = InteractionController(lambda: buffers[-1], ViewportState(zoom=2.0))
    controller.begin_drag(5000.0)
    controller.continue_drag(0.0)
    assert controller.state.pan_offset == pytest.approx(5.0)

    buffers.append(make_buffer([0.0, 10.0, 20.0], [1.0, 2.0, 3.0]))
    controller.continue_drag(-5000.0)
    assert controller.state.pan_offset == pytest.approx(10.0)


def test_zoom_out_reclamps_pan(ten_second_buffer) -> None:
    """Zooming out shrinks the pan range and pulls the offset back inside it."""
    controller = InteractionController(lambda: ten_second_buffer, ViewportState(zoom=2.0))
    controller.begin_drag(5000.0)
    controller.continue_drag(0.0)
    controller.end_drag()
    assert controller.state.pan_offset == pytest.approx(5.0)
    controller.zoom_out()
    assert controller.state.pan_offset == pytest.approx(10.0 - 10.0 / (2.0 / 1.5))
    controller.zoom_out()
    assert controller.state.pan_offset == 0.0


def test_random_interaction_sequences_respect_bounds(make_buffer) -> None:
    """Zoom stays in [1, 10] and pan in its allowed range for any sequence."""
    rng = np.random.default_rng(1234)
    buffer = make_buffer(np.arange(0.0, 60.0), np.linspace(1000.0, 5000.0, 60))
    controller = InteractionController(lambda: buffer)
    time_domain = analyze_time_domain(buffer)

    for _ in range(500):
        action = rng.integers(0, 5)
        if action == 0:
            controller.zoom_in()
        elif action == 1:
            controller.zoom_out()
        elif action == 2:
            controller.begin_drag(float(rng.uniform(0.0, 600.0)))
        elif action == 3:
            controller.continue_drag(float(rng.uniform(-1000.0, 1600.0)))
        else:
            controller.end_drag()

        state = controller.state
        assert 1.0 <= state.zoom <= 10.0
        assert 0.0 <= state.pan_offset <= max_pan_offset(time_domain, state.zoom) + 1e-9
        assert effective_time_span(time_domain, state.zoom) > 0
