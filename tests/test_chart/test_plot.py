"""Tests for the matplotlib chart surface (Agg backend)."""

import matplotlib.pyplot as plt
import numpy as np
import pytest
from matplotlib.colors import to_hex

from descentplot.chart.data_manager import SampleBuffer
from descentplot.chart.display_state import (
    AIRSPEED_COLOR,
    ALTITUDE_COLOR,
    ChartMode,
    DisplayConfig,
)
from descentplot.chart.plot import ChartPlot


@pytest.fixture
def rendered_plot(make_buffer):
    buffer = make_buffer([0.0, 5.0, 10.0], [1000.0, 1500.0, 2000.0], [200.0, 180.0, 160.0])
    plot = ChartPlot(lambda: buffer)
    plot.render()
    yield plot
    plt.close("all")


def test_new_timer_requires_render() -> None:
    """Timers are bound to the figure canvas, which exists only after render."""
    plot = ChartPlot(SampleBuffer)
    with pytest.raises(RuntimeError):
        plot.new_timer(1000)


def test_refresh_before_render_is_a_noop() -> None:
    """Refreshing an unrendered plot draws nothing."""
    plot = ChartPlot(SampleBuffer)
    plot.refresh()
    assert plot.geometry is None


def test_render_draws_current_buffer(rendered_plot) -> None:
    """After render the trace holds one vertex per sample in the mode colour."""
    geometry = rendered_plot.geometry
    assert geometry is not None
    x, y = rendered_plot._trace_line.get_data()
    np.testing.assert_allclose(x, geometry.polyline[:, 0])
    np.testing.assert_allclose(y, geometry.polyline[:, 1])
    assert rendered_plot._trace_line.get_color() == ALTITUDE_COLOR
    labels = [label.get_text() for label in rendered_plot._tick_labels]
    assert labels == ["900", "1225", "1550", "1875", "2200"]


def test_buttons_without_record_callback(rendered_plot) -> None:
    """Mode and zoom buttons exist; the record button needs a callback."""
    assert set(rendered_plot._buttons) == {"altitude", "airspeed", "zoom_in", "zoom_out"}
    assert rendered_plot._buttons["airspeed"].label.get_text() == "Speed"


def test_mode_switch_redraws_airspeed(rendered_plot) -> None:
    """Switching to airspeed changes the trace colour and the tick labels."""
    rendered_plot.set_mode(ChartMode.AIRSPEED)
    assert rendered_plot.geometry.mode is ChartMode.AIRSPEED
    assert rendered_plot._trace_line.get_color() == AIRSPEED_COLOR
    assert rendered_plot._tick_labels[0].get_text() == "144"


def test_zoom_and_home(rendered_plot) -> None:
    """Zoom buttons narrow the window and home restores the full view."""
    rendered_plot.zoom_in()
    rendered_plot.zoom_in()
    assert rendered_plot.state.zoom == pytest.approx(2.25)
    assert rendered_plot.geometry.visible_time[1] < 10.0

    rendered_plot.home()
    assert rendered_plot.state.zoom == 1.0
    assert rendered_plot.state.pan_offset == 0.0
    assert rendered_plot.geometry.visible_time == pytest.approx((0.0, 10.0))


def test_record_button_tracks_recording_state(make_buffer) -> None:
    """The record button toggles through the callback and relabels itself."""
    recording = {"on": False}

    def toggle():
        recording["on"] = not recording["on"]

    plot = ChartPlot(
        SampleBuffer, record_callback=toggle, is_recording=lambda: recording["on"]
    )
    plot.render()
    try:
        assert plot._buttons["record"].label.get_text() == "Start"
        plot._on_record_clicked()
        assert recording["on"]
        assert plot._buttons["record"].label.get_text() == "Stop"
    finally:
        plt.close("all")


def test_config_colours_override_mode_colours(make_buffer) -> None:
    """Configured line and point colours replace the per-mode defaults."""
    buffer = make_buffer([0.0, 1.0], [1.0, 2.0])
    config = DisplayConfig(title="Approach", line_color="#123456", point_color="#abcdef")
    plot = ChartPlot(lambda: buffer, config=config)
    plot.render()
    try:
        assert plot.ax.get_title() == "Approach"
        assert plot._trace_line.get_color() == "#123456"
        assert plot._marker_line.get_markerfacecolor() == "#abcdef"
    finally:
        plt.close("all")


def test_save_writes_image(rendered_plot, tmp_path) -> None:
    """The rendered chart can be saved to an image file."""
    target = tmp_path / "chart.png"
    rendered_plot.save(str(target))
    assert target.exists()
    assert target.stat().st_size > 0


def test_new_timer_after_render(rendered_plot) -> None:
    """A rendered plot hands out canvas timers with the requested interval."""
    timer = rendered_plot.new_timer(250)
    assert timer.interval == 250


def test_selected_mode_button_is_highlighted(rendered_plot) -> None:
    """Only the button of the active mode is drawn as selected."""
    altitude = rendered_plot._buttons[ChartMode.ALTITUDE.value]
    airspeed = rendered_plot._buttons[ChartMode.AIRSPEED.value]
    active = to_hex(ChartPlot.ACTIVE_BUTTON_COLOR)

    assert altitude.label.get_fontweight() == "bold"
    assert to_hex(altitude.ax.get_facecolor()) == active
    assert airspeed.label.get_fontweight() == "normal"
    assert to_hex(airspeed.ax.get_facecolor()) != active

    rendered_plot.set_mode(ChartMode.AIRSPEED)
    assert airspeed.label.get_fontweight() == "bold"
    assert to_hex(airspeed.ax.get_facecolor()) == active
    assert altitude.label.get_fontweight() == "normal"
    assert altitude.color == ChartPlot.BUTTON_COLOR
