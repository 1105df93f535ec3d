from dataclasses import dataclass
from typing import Dict, Tuple

import numpy as np
from loguru import logger

from .data_manager import SampleBuffer
from .display_state import ChartMode

# Fallback domains used until at least two samples exist
MIN_SAMPLES_FOR_DOMAIN = 2
DEFAULT_VALUE_DOMAINS: Dict[ChartMode, Tuple[float, float]] = {
    ChartMode.ALTITUDE: (0.0, 10000.0),
    ChartMode.AIRSPEED: (0.0, 300.0),
}
DEFAULT_TIME_DOMAIN = (0.0, 30.0)

# Fractional padding applied to the value domain
VALUE_PADDING_FRACTION = 0.1


@dataclass(frozen=True)
class DomainRange:
    """Closed ``[min, max]`` span of a quantity."""

    min: float
    max: float

    @property
    def span(self) -> float:
        return self.max - self.min


def _pad_outward(lo: float, hi: float) -> Tuple[float, float]:
    """
    Widen a data range by a fraction of each bound's magnitude.

    For non-negative data this is ``[0.9 * lo, 1.1 * hi]``. Negative bounds are
    padded away from the data as well, so the range never inverts.
    """
    low_scale = 1.0 - VALUE_PADDING_FRACTION
    high_scale = 1.0 + VALUE_PADDING_FRACTION
    padded_lo = lo * low_scale if lo >= 0 else lo * high_scale
    padded_hi = hi * high_scale if hi >= 0 else hi * low_scale
    return padded_lo, padded_hi


def analyze_value_domain(buffer: SampleBuffer, mode: ChartMode) -> DomainRange:
    """
    Derive the value-axis domain for the selected channel.

    Parameters
    ----------
    buffer : SampleBuffer
        Current samples.
    mode : ChartMode
        Channel feeding the value axis.

    Returns
    -------
    DomainRange
        Default domain for the mode when fewer than two samples exist,
        otherwise the padded ``[min, max]`` of the channel values.
    """
    if len(buffer) < MIN_SAMPLES_FOR_DOMAIN:
        return DomainRange(*DEFAULT_VALUE_DOMAINS[mode])

    values = mode.values(buffer)
    lo, hi = _pad_outward(float(np.min(values)), float(np.max(values)))
    if lo == hi:
        logger.debug(f"Degenerate {mode.value} domain at {lo:.3f}")
    return DomainRange(lo, hi)


def analyze_time_domain(buffer: SampleBuffer) -> DomainRange:
    """
    Derive the time-axis domain.

    Parameters
    ----------
    buffer : SampleBuffer
        Current samples.

    Returns
    -------
    DomainRange
        ``[0, 30]`` when fewer than two samples exist, otherwise the unpadded
        ``[min(t), max(t)]``.
    """
    if len(buffer) < MIN_SAMPLES_FOR_DOMAIN:
        return DomainRange(*DEFAULT_TIME_DOMAIN)

    times = buffer.times
    return DomainRange(float(np.min(times)), float(np.max(times)))


def analyze_domains(
    buffer: SampleBuffer, mode: ChartMode
) -> Tuple[DomainRange, DomainRange]:
    """Derive ``(time_domain, value_domain)`` in one call."""
    return analyze_time_domain(buffer), analyze_value_domain(buffer, mode)
