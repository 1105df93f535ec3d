import sys
import time
from typing import Callable, Optional

from loguru import logger

from descentplot.chart.data_manager import SampleBuffer, SamplePoint
from descentplot.chart.display_state import Canvas, DisplayConfig
from descentplot.chart.plot import ChartPlot
from descentplot.telemetry.io import format_display_config, get_display_config
from descentplot.telemetry.provider import LiveDataProvider, SyntheticDescentProvider
from descentplot.telemetry.recorder import SampleRecorder
from descentplot.telemetry.scheduler import DEFAULT_POLL_INTERVAL_MS, PollScheduler, TimerFactory


def configure_logging(log_level: str = "INFO") -> None:
    """
    Configure loguru logging with specified level.

    Parameters
    ----------
    log_level : str, default="INFO"
        Logging level: DEBUG, INFO, WARNING, ERROR, CRITICAL.
    """
    logger.remove()
    logger.add(
        sys.stderr,
        level=log_level.upper(),
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <level>{message}</level>",
        colorize=True,
    )


class DescentMonitor:
    """
    Live descent chart: recorder, poll scheduler and plot wired together.

    Polling runs on the plot's event-loop timer, so samples are appended and
    drawn on the same thread. Closing the window disarms the timer.
    """

    def __init__(
        self,
        provider: LiveDataProvider,
        config: DisplayConfig = DisplayConfig(),
        canvas: Canvas = Canvas(),
        poll_interval_ms: int = DEFAULT_POLL_INTERVAL_MS,
        clock: Callable[[], float] = time.monotonic,
        timer_factory: Optional[TimerFactory] = None,
    ):
        """
        Initialise the monitor.

        Parameters
        ----------
        provider : LiveDataProvider
            Source of altitude and airspeed readings.
        config : DisplayConfig, default=DisplayConfig()
            Title and colours for the chart.
        canvas : Canvas, default=Canvas()
            Logical drawing surface.
        poll_interval_ms : int, default=1000
            Poll interval in milliseconds.
        clock : Callable[[], float], default=time.monotonic
            Clock in seconds used to timestamp samples.
        timer_factory : Optional[TimerFactory], default=None
            Source of poll timers. Defaults to the plot canvas timers.
        """
        self.recorder = SampleRecorder(provider, clock=clock)
        self.plot = ChartPlot(
            lambda: self.recorder.buffer,
            config=config,
            canvas=canvas,
            record_callback=self.toggle_recording,
            is_recording=lambda: self.recorder.is_recording,
            on_close=self.close,
        )
        self.scheduler = PollScheduler(
            self.recorder,
            timer_factory or self.plot.new_timer,
            interval_ms=poll_interval_ms,
            on_sample=self._on_sample,
        )

    @property
    def buffer(self) -> SampleBuffer:
        return self.recorder.buffer

    def _on_sample(self, sample: Optional[SamplePoint]) -> None:
        self.plot.refresh()

    def start_recording(self) -> None:
        self.scheduler.start()
        self.plot.refresh()

    def stop_recording(self) -> None:
        self.scheduler.stop()
        self.plot.refresh()

    def toggle_recording(self) -> None:
        """Start recording if idle, stop if recording."""
        if self.recorder.is_recording:
            self.stop_recording()
        else:
            self.start_recording()

    def close(self) -> None:
        """Disarm polling and end any recording session."""
        self.scheduler.close()

    def show(self, autostart: bool = False) -> None:
        """
        Render the chart and enter the matplotlib event loop.

        Parameters
        ----------
        autostart : bool, default=False
            Start recording as soon as the window is up.
        """
        self.plot.render()
        if autostart:
            self.start_recording()
        try:
            self.plot.show()
        finally:
            self.close()


def run_monitor(
    config_path: Optional[str] = None,
    data_path: Optional[str] = None,
    poll_interval_ms: int = DEFAULT_POLL_INTERVAL_MS,
    autostart: bool = False,
    start_altitude_ft: float = 10000.0,
    descent_rate_fpm: float = 1500.0,
    start_airspeed_kts: float = 250.0,
    final_airspeed_kts: float = 140.0,
    noise_std: float = 0.0,
    seed: Optional[int] = None,
    provider: Optional[LiveDataProvider] = None,
    show_plot: bool = True,
) -> DescentMonitor:
    """
    Build and run a descent monitor.

    Parameters
    ----------
    config_path : str, optional
        Display config JSON file. Defaults are used if None.
    data_path : str, optional
        Directory containing ``config_path``.
    poll_interval_ms : int, default=1000
        Poll interval in milliseconds.
    autostart : bool, default=False
        Start recording immediately.
    start_altitude_ft, descent_rate_fpm, start_airspeed_kts, final_airspeed_kts : float
        Synthetic descent profile, used when no provider is given.
    noise_std : float, default=0.0
        Noise added by the synthetic provider.
    seed : int, optional
        Seed for the synthetic provider's noise.
    provider : LiveDataProvider, optional
        Live data source. A ``SyntheticDescentProvider`` is built if None.
    show_plot : bool, default=True
        Enter the matplotlib event loop. If False the monitor is only built.

    Returns
    -------
    DescentMonitor
        The monitor, after the window has closed when ``show_plot`` is True.
    """
    if config_path is not None:
        config = get_display_config(config_path, data_path)
    else:
        config = DisplayConfig()
    logger.info("\n" + format_display_config(config))

    if provider is None:
        provider = SyntheticDescentProvider(
            start_altitude_ft=start_altitude_ft,
            descent_rate_fpm=descent_rate_fpm,
            start_airspeed_kts=start_airspeed_kts,
            final_airspeed_kts=final_airspeed_kts,
            noise_std=noise_std,
            seed=seed,
        )

    monitor = DescentMonitor(provider, config=config, poll_interval_ms=poll_interval_ms)
    if show_plot:
        monitor.show(autostart=autostart)
        logger.success(f"Monitor closed with {len(monitor.buffer)} samples recorded")
    return monitor
