"""Tests for the sample buffer."""

import dataclasses

import numpy as np
import pytest

from descentplot.chart.data_manager import SampleBuffer, SamplePoint


def test_sample_point_is_immutable() -> None:
    """Samples cannot be edited after creation."""
    sample = SamplePoint(1.0, 1000.0, 150.0)
    with pytest.raises(dataclasses.FrozenInstanceError):
        sample.t = 2.0


def test_empty_buffer_reports_empty_arrays_and_zero_range() -> None:
    """An empty buffer exposes empty arrays and a (0, 0) time range."""
    buffer = SampleBuffer()
    assert len(buffer) == 0
    assert buffer.last is None
    assert buffer.times.size == 0
    assert buffer.altitudes.dtype == np.float64
    assert buffer.get_time_range() == (0.0, 0.0)


def test_channel_arrays_follow_insertion_order(make_buffer) -> None:
    """Array views preserve sample order for every channel."""
    buffer = make_buffer([1.0, 2.0, 3.0], [1000.0, 1100.0, 1200.0], [200.0, 190.0, 180.0])
    np.testing.assert_array_equal(buffer.times, [1.0, 2.0, 3.0])
    np.testing.assert_array_equal(buffer.altitudes, [1000.0, 1100.0, 1200.0])
    np.testing.assert_array_equal(buffer.airspeeds, [200.0, 190.0, 180.0])
    assert buffer.get_time_range() == (1.0, 3.0)
    assert buffer.last == SamplePoint(3.0, 1200.0, 180.0)


def test_append_allows_equal_timestamps() -> None:
    """Time order is non-decreasing, so repeated timestamps are accepted."""
    buffer = SampleBuffer()
    buffer.append(SamplePoint(1.0, 1000.0, 150.0))
    buffer.append(SamplePoint(1.0, 1001.0, 151.0))
    assert len(buffer) == 2


def test_append_rejects_time_going_backwards() -> None:
    """Appending an earlier sample would break time order."""
    buffer = SampleBuffer([SamplePoint(2.0, 1000.0, 150.0)])
    assert not buffer.accepts(1.0)
    with pytest.raises(ValueError):
        buffer.append(SamplePoint(1.0, 1000.0, 150.0))
    assert len(buffer) == 1


def test_constructor_validates_time_order(make_buffer) -> None:
    """Initial samples out of time order are refused."""
    with pytest.raises(ValueError, match="non-decreasing"):
        make_buffer([1.0, 3.0, 2.0], [1.0, 2.0, 3.0])
