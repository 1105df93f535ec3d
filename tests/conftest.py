"""Pytest configuration and fixtures."""

import matplotlib

matplotlib.use("Agg")

from typing import Callable, Dict, List, Optional  # noqa: E402

import pytest  # noqa: E402

from descentplot.chart.data_manager import SampleBuffer, SamplePoint  # noqa: E402
from descentplot.telemetry.provider import (  # noqa: E402
    AIRSPEED_CHANNEL,
    ALTITUDE_CHANNEL,
    ChannelReadError,
)


class FakeClock:
    """Manually advanced clock in seconds."""

    def __init__(self, now: float = 0.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class ScriptedProvider:
    """Provider returning queued readings; a queued exception is raised instead."""

    def __init__(self):
        self.readings: Dict[str, List[object]] = {
            ALTITUDE_CHANNEL.name: [],
            AIRSPEED_CHANNEL.name: [],
        }
        self.calls: List[tuple] = []

    def queue(self, altitude_ft: object, airspeed_kts: object = 150.0) -> None:
        self.readings[ALTITUDE_CHANNEL.name].append(altitude_ft)
        self.readings[AIRSPEED_CHANNEL.name].append(airspeed_kts)

    def read(self, channel_name: str, unit: str) -> float:
        self.calls.append((channel_name, unit))
        queue = self.readings.get(channel_name)
        if not queue:
            raise ChannelReadError(f"No reading queued for {channel_name}")
        value = queue.pop(0)
        if isinstance(value, Exception):
            raise value
        return value


class FakeTimer:
    """Stand-in for a matplotlib timer that is fired by hand."""

    def __init__(self, interval: int):
        self.interval = interval
        self.callbacks: List[Callable] = []
        self.running = False
        self.stop_count = 0

    def add_callback(self, func: Callable, *args, **kwargs) -> Callable:
        self.callbacks.append(func)
        return func

    def start(self, interval: Optional[int] = None) -> None:
        self.running = True

    def stop(self) -> None:
        self.running = False
        self.stop_count += 1

    def fire(self) -> None:
        if not self.running:
            return
        for func in list(self.callbacks):
            func()


class FakeTimerFactory:
    """Records every timer it creates."""

    def __init__(self):
        self.timers: List[FakeTimer] = []

    def __call__(self, interval_ms: int) -> FakeTimer:
        timer = FakeTimer(interval_ms)
        self.timers.append(timer)
        return timer

    @property
    def active(self) -> List[FakeTimer]:
        return [t for t in self.timers if t.running]


@pytest.fixture
def clock():
    """Create a fake clock starting at zero."""
    return FakeClock()


@pytest.fixture
def provider():
    """Create a provider with no queued readings."""
    return ScriptedProvider()


@pytest.fixture
def timer_factory():
    """Create a fake timer factory."""
    return FakeTimerFactory()


def _build_buffer(times, altitudes, airspeeds=None) -> SampleBuffer:
    if airspeeds is None:
        airspeeds = [150.0] * len(times)
    return SampleBuffer(SamplePoint(t, a, s) for t, a, s in zip(times, altitudes, airspeeds))


@pytest.fixture
def make_buffer():
    """Build a sample buffer from parallel time/altitude/airspeed sequences."""
    return _build_buffer
