import time
from dataclasses import dataclass
from typing import Callable, Optional, Protocol

import numpy as np
from loguru import logger


@dataclass(frozen=True)
class Channel:
    """A named telemetry quantity and the unit it is read in."""

    name: str
    unit: str


ALTITUDE_CHANNEL = Channel("PLANE ALTITUDE", "feet")
AIRSPEED_CHANNEL = Channel("AIRSPEED INDICATED", "knots")


class ChannelReadError(RuntimeError):
    """Raised by a provider when a channel cannot be read."""


class LiveDataProvider(Protocol):
    """Synchronous read access to live simulator variables."""

    def read(self, channel_name: str, unit: str) -> float: ...


class SyntheticDescentProvider:
    """
    Deterministic descent profile standing in for a live simulator.

    Altitude falls linearly at a constant rate until it reaches the ground.
    Airspeed bleeds off linearly over the same interval. Optional Gaussian
    noise is added to both channels.
    """

    def __init__(
        self,
        start_altitude_ft: float = 10000.0,
        descent_rate_fpm: float = 1500.0,
        start_airspeed_kts: float = 250.0,
        final_airspeed_kts: float = 140.0,
        noise_std: float = 0.0,
        seed: Optional[int] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        """
        Initialise the synthetic provider.

        Parameters
        ----------
        start_altitude_ft : float, default=10000.0
            Altitude at the start of the descent. Must be positive.
        descent_rate_fpm : float, default=1500.0
            Descent rate in feet per minute. Must be positive.
        start_airspeed_kts : float, default=250.0
            Indicated airspeed at the start of the descent.
        final_airspeed_kts : float, default=140.0
            Indicated airspeed on reaching the ground.
        noise_std : float, default=0.0
            Standard deviation of Gaussian noise added to each reading.
        seed : Optional[int], default=None
            Seed for the noise generator.
        clock : Callable[[], float], default=time.monotonic
            Clock in seconds used to advance the profile.

        Raises
        ------
        ValueError
            If the start altitude or the descent rate is not positive.
        """
        if start_altitude_ft <= 0:
            raise ValueError(f"start_altitude_ft must be positive, got {start_altitude_ft}")
        if descent_rate_fpm <= 0:
            raise ValueError(f"descent_rate_fpm must be positive, got {descent_rate_fpm}")

        self.start_altitude_ft = start_altitude_ft
        self.descent_rate_fpm = descent_rate_fpm
        self.start_airspeed_kts = start_airspeed_kts
        self.final_airspeed_kts = final_airspeed_kts
        self.noise_std = noise_std
        self._rng = np.random.default_rng(seed)
        self._clock = clock
        self._t0 = clock()

        self.descent_duration_s = start_altitude_ft / descent_rate_fpm * 60.0
        logger.info(
            f"Synthetic descent from {start_altitude_ft:.0f} ft at {descent_rate_fpm:.0f} fpm "
            f"({self.descent_duration_s:.0f}s to touchdown)"
        )

    def _progress(self) -> float:
        elapsed = self._clock() - self._t0
        return float(np.clip(elapsed / self.descent_duration_s, 0.0, 1.0))

    def _noise(self) -> float:
        if self.noise_std <= 0:
            return 0.0
        return float(self._rng.normal(0.0, self.noise_std))

    def read(self, channel_name: str, unit: str) -> float:
        """
        Read the current value of a channel.

        Raises
        ------
        ChannelReadError
            If the channel/unit pair is not one this provider simulates.
        """
        channel = Channel(channel_name, unit)
        progress = self._progress()
        if channel == ALTITUDE_CHANNEL:
            value = self.start_altitude_ft * (1.0 - progress)
        elif channel == AIRSPEED_CHANNEL:
            value = self.start_airspeed_kts + progress * (
                self.final_airspeed_kts - self.start_airspeed_kts
            )
        else:
            raise ChannelReadError(f"Unknown channel {channel_name!r} in {unit!r}")
        return value + self._noise()
