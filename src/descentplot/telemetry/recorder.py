import math
import time
from dataclasses import dataclass
from typing import Callable, Optional, Tuple

from loguru import logger

from descentplot.chart.data_manager import SampleBuffer, SamplePoint
from descentplot.telemetry.provider import (
    AIRSPEED_CHANNEL,
    ALTITUDE_CHANNEL,
    LiveDataProvider,
)


@dataclass
class RecordingSession:
    """Lifecycle of the current recording. ``active`` implies ``start_epoch`` is set."""

    start_epoch: Optional[float] = None
    active: bool = False


class SampleRecorder:
    """
    Owns the sample buffer and the recording lifecycle.

    The recorder has no timer of its own. ``poll_once`` is the unit of work;
    something else (see ``PollScheduler``) calls it once per second while a
    session is active. Every failure while polling is logged and skipped so
    nothing propagates to the caller.
    """

    def __init__(
        self,
        provider: LiveDataProvider,
        clock: Callable[[], float] = time.monotonic,
    ):
        """
        Initialise the recorder.

        Parameters
        ----------
        provider : LiveDataProvider
            Source of altitude and airspeed readings.
        clock : Callable[[], float], default=time.monotonic
            Clock in seconds used to timestamp samples.
        """
        self.provider = provider
        self._clock = clock
        self.buffer = SampleBuffer()
        self.session = RecordingSession()

    @property
    def is_recording(self) -> bool:
        return self.session.active

    def start(self) -> None:
        """Start a new session with an empty buffer. Restarts if already active."""
        if self.session.active:
            logger.info("Restarting active recording session")
        self.buffer = SampleBuffer()
        self.session = RecordingSession(start_epoch=self._clock(), active=True)
        logger.info("Recording started")

    def stop(self) -> None:
        """End the session. Recorded samples stay viewable."""
        if not self.session.active:
            return
        self.session = RecordingSession()
        logger.info(f"Recording stopped with {len(self.buffer)} samples")

    def _read_channels(self) -> Optional[Tuple[float, float]]:
        try:
            altitude_ft = float(self.provider.read(ALTITUDE_CHANNEL.name, ALTITUDE_CHANNEL.unit))
            airspeed_kts = float(self.provider.read(AIRSPEED_CHANNEL.name, AIRSPEED_CHANNEL.unit))
        except Exception as e:
            logger.warning(f"Issue reading live data, sample skipped: {e}")
            return None

        if not (math.isfinite(altitude_ft) and math.isfinite(airspeed_kts)):
            logger.warning(
                f"Non-finite reading (altitude={altitude_ft}, airspeed={airspeed_kts}), sample skipped"
            )
            return None
        return altitude_ft, airspeed_kts

    def poll_once(self) -> Optional[SamplePoint]:
        """
        Read both channels and append one sample.

        Returns
        -------
        Optional[SamplePoint]
            The appended sample, or None if the tick produced no sample
            (inactive session, failed read, non-finite value, clock step back).
        """
        if not self.session.active:
            logger.debug("Poll while not recording ignored")
            return None

        readings = self._read_channels()
        if readings is None:
            return None

        t = self._clock() - self.session.start_epoch
        if not self.buffer.accepts(t):
            logger.warning(
                f"Clock went backwards (t={t:.3f}s after t={self.buffer.last.t:.3f}s), sample skipped"
            )
            return None

        sample = SamplePoint(t, *readings)
        self.buffer.append(sample)
        logger.debug(
            f"Sample {len(self.buffer)}: t={t:.2f}s alt={sample.altitude_ft:.0f}ft ias={sample.airspeed_kts:.0f}kts"
        )
        return sample
