from dataclasses import dataclass
from typing import Iterable, Iterator, Optional, Tuple

import numpy as np
from loguru import logger

# Tolerance for the non-decreasing time check
TIME_ORDER_TOLERANCE = 1e-9


@dataclass(frozen=True)
class SamplePoint:
    """
    A single telemetry sample.

    Attributes
    ----------
    t : float
        Seconds since the start of the recording session.
    altitude_ft : float
        Altitude in feet.
    airspeed_kts : float
        Indicated airspeed in knots.
    """

    t: float
    altitude_ft: float
    airspeed_kts: float


class SampleBuffer:
    """
    Ordered, append-only sequence of samples.

    Insertion order is time order: ``t`` never decreases from one sample to
    the next. The buffer is never edited element-wise; a new recording session
    replaces it with an empty one.
    """

    def __init__(self, samples: Optional[Iterable[SamplePoint]] = None):
        """
        Initialise the buffer.

        Parameters
        ----------
        samples : Optional[Iterable[SamplePoint]], default=None
            Initial samples, in time order.

        Raises
        ------
        ValueError
            If the initial samples are not in non-decreasing time order.
        """
        self._samples = list(samples) if samples is not None else []
        self._validate_time_order()

    def _validate_time_order(self) -> None:
        if len(self._samples) < 2:
            return
        dt = np.diff(self.times)
        if np.any(dt < -TIME_ORDER_TOLERANCE):
            problematic = dt[dt < -TIME_ORDER_TOLERANCE]
            raise ValueError(
                f"Sample times must be non-decreasing. Problematic diffs (first 10): {problematic[:10]}"
            )

    def __len__(self) -> int:
        return len(self._samples)

    def __iter__(self) -> Iterator[SamplePoint]:
        return iter(self._samples)

    def __getitem__(self, idx: int) -> SamplePoint:
        return self._samples[idx]

    @property
    def last(self) -> Optional[SamplePoint]:
        """Most recent sample, or None if the buffer is empty."""
        return self._samples[-1] if self._samples else None

    def accepts(self, t: float) -> bool:
        """Check whether a sample at time ``t`` keeps the time order intact."""
        last = self.last
        return last is None or t >= last.t - TIME_ORDER_TOLERANCE

    def append(self, sample: SamplePoint) -> None:
        """
        Append a sample to the end of the buffer.

        Parameters
        ----------
        sample : SamplePoint
            Sample to append. Its time must not precede the last sample.

        Raises
        ------
        ValueError
            If the sample would break the time order.
        """
        if not self.accepts(sample.t):
            raise ValueError(
                f"Sample at t={sample.t:.3f}s precedes last sample at t={self.last.t:.3f}s"
            )
        self._samples.append(sample)

    @property
    def times(self) -> np.ndarray:
        """Sample times as a float64 array."""
        return np.fromiter((s.t for s in self._samples), dtype=np.float64)

    @property
    def altitudes(self) -> np.ndarray:
        """Altitude values (feet) as a float64 array."""
        return np.fromiter((s.altitude_ft for s in self._samples), dtype=np.float64)

    @property
    def airspeeds(self) -> np.ndarray:
        """Indicated airspeed values (knots) as a float64 array."""
        return np.fromiter((s.airspeed_kts for s in self._samples), dtype=np.float64)

    def get_time_range(self) -> Tuple[float, float]:
        """
        Get the time range covered by the buffer.

        Returns
        -------
        Tuple[float, float]
            First and last sample time, or (0.0, 0.0) when empty.
        """
        if not self._samples:
            logger.debug("Time range requested for an empty buffer")
            return 0.0, 0.0
        return self._samples[0].t, self._samples[-1].t
