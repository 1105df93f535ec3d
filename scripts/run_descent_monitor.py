from warnings import warn

import matplotlib as mpl

from descentplot.telemetry import configure_logging, run_monitor

# --- User configuration dictionary ---
CONFIG = {
    "LOG_LEVEL": "INFO",  # logging level: DEBUG, INFO, SUCCESS, WARNING, ERROR, CRITICAL
    "POLL_INTERVAL_MS": 1000,  # sampling cadence in milliseconds
    "AUTOSTART": False,  # start recording as soon as the window opens
    "DATA_PATH": "./",
    "CONFIG_PATH": "config.json",  # display config JSON (title, unit, colours); None for defaults
    # Synthetic descent profile used in place of a live simulator
    "START_ALTITUDE_FT": 10000.0,
    "DESCENT_RATE_FPM": 1500.0,
    "START_AIRSPEED_KTS": 250.0,
    "FINAL_AIRSPEED_KTS": 140.0,
    "NOISE_STD": 15.0,
    "SEED": 0,
}


def main() -> None:
    """
    Main function to run the live descent monitor.
    """
    configure_logging(CONFIG.get("LOG_LEVEL", "INFO"))

    run_monitor(
        config_path=CONFIG.get("CONFIG_PATH"),
        data_path=CONFIG.get("DATA_PATH"),
        poll_interval_ms=CONFIG.get("POLL_INTERVAL_MS", 1000),
        autostart=CONFIG.get("AUTOSTART", False),
        start_altitude_ft=CONFIG.get("START_ALTITUDE_FT", 10000.0),
        descent_rate_fpm=CONFIG.get("DESCENT_RATE_FPM", 1500.0),
        start_airspeed_kts=CONFIG.get("START_AIRSPEED_KTS", 250.0),
        final_airspeed_kts=CONFIG.get("FINAL_AIRSPEED_KTS", 140.0),
        noise_std=CONFIG.get("NOISE_STD", 0.0),
        seed=CONFIG.get("SEED"),
    )


if __name__ == "__main__":
    # Set Matplotlib rcParams directly here
    for optn, val in {
        "backend": "QtAgg",
        "figure.dpi": 90,
        "font.family": ("sans-serif",),
        "font.size": 11,
        "toolbar": "None",
    }.items():
        if isinstance(val, (list, tuple)):
            val = tuple(val)
        try:
            mpl.rcParams[optn] = val
        except KeyError:
            warn(f"mpl rcparams key '{optn}' not recognised as a valid rc parameter.")
    main()
