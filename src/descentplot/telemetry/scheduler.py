from typing import Any, Callable, List, Optional, Protocol

from loguru import logger

from descentplot.chart.data_manager import SamplePoint
from descentplot.telemetry.recorder import SampleRecorder

DEFAULT_POLL_INTERVAL_MS = 1000


class Timer(Protocol):
    """Subset of ``matplotlib.backend_bases.TimerBase`` used for polling."""

    def add_callback(self, func: Callable[..., Any], *args, **kwargs) -> Any: ...

    def start(self, interval: Optional[int] = None) -> None: ...

    def stop(self) -> None: ...


TimerFactory = Callable[[int], Timer]


class PollScheduler:
    """
    Drives ``SampleRecorder.poll_once`` from a repeating event-loop timer.

    Starting a recording arms a fresh timer; stopping or closing disarms it
    before anything else happens, so no timer outlives its session. Timers
    come from ``timer_factory``, normally ``figure.canvas.new_timer`` so that
    polling runs on the GUI thread between redraws.
    """

    def __init__(
        self,
        recorder: SampleRecorder,
        timer_factory: TimerFactory,
        interval_ms: int = DEFAULT_POLL_INTERVAL_MS,
        on_sample: Optional[Callable[[Optional[SamplePoint]], None]] = None,
    ):
        """
        Initialise the scheduler.

        Parameters
        ----------
        recorder : SampleRecorder
            Recorder to poll.
        timer_factory : Callable[[int], Timer]
            Called with the interval in milliseconds; returns an unarmed timer.
        interval_ms : int, default=1000
            Poll interval in milliseconds.
        on_sample : Optional[Callable[[Optional[SamplePoint]], None]], default=None
            Called after every tick with the poll result (None if skipped).
        """
        self.recorder = recorder
        self._timer_factory = timer_factory
        self.interval_ms = interval_ms
        self._on_sample_callbacks: List[Callable[[Optional[SamplePoint]], None]] = []
        if on_sample is not None:
            self._on_sample_callbacks.append(on_sample)
        self._timer: Optional[Timer] = None

    @property
    def is_armed(self) -> bool:
        return self._timer is not None

    def add_sample_callback(self, func: Callable[[Optional[SamplePoint]], None]) -> None:
        """Register a function to call after every tick."""
        self._on_sample_callbacks.append(func)

    def _tick(self) -> None:
        sample = self.recorder.poll_once()
        for callback in self._on_sample_callbacks:
            callback(sample)

    def _create_timer(self) -> Timer:
        timer = self._timer_factory(self.interval_ms)
        timer.add_callback(self._tick)
        return timer

    def _disarm(self) -> None:
        if self._timer is None:
            return
        self._timer.stop()
        self._timer = None
        logger.info("Poll timer disarmed")

    def start(self) -> None:
        """
        Start a recording session and arm the poll timer.

        The timer is created before the session starts. If the timer factory
        raises, any previous session is ended and the error propagates, so the
        recorder is never left active without a timer.
        """
        self._disarm()
        try:
            timer = self._create_timer()
        except Exception as e:
            logger.error(f"Could not create poll timer, recording not started: {e}")
            self.recorder.stop()
            raise

        self.recorder.start()
        timer.start()
        self._timer = timer
        logger.info(f"Poll timer armed at {self.interval_ms} ms")

    def stop(self) -> None:
        """Disarm the poll timer and end the recording session."""
        self._disarm()
        self.recorder.stop()

    def close(self) -> None:
        """Tear down: disarm the timer and end any session."""
        self.stop()
