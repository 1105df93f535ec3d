import json
import os
from typing import Any, Dict, Optional

from loguru import logger

from descentplot.chart.display_state import DisplayConfig

# JSON key -> DisplayConfig attribute
_CONFIG_KEYS = {
    "title": "title",
    "unit": "unit",
    "lineColor": "line_color",
    "pointColor": "point_color",
    "backgroundColor": "background_color",
}


def get_display_config(
    config_filename: str, data_path: Optional[str] = None
) -> DisplayConfig:
    """
    Load the display configuration from a JSON file.

    Parameters
    ----------
    config_filename : str
        Name of the JSON file.
    data_path : str, optional
        Directory containing the file. If None, ``config_filename`` is used as is.

    Returns
    -------
    DisplayConfig
        Loaded configuration. Missing keys keep their defaults.

    Raises
    ------
    FileNotFoundError
        If the file does not exist.
    RuntimeError
        If the file is not valid JSON or its top level is not an object.
    """
    config_path = (
        os.path.join(data_path, config_filename)
        if data_path is not None and not os.path.isabs(config_filename)
        else config_filename
    )
    if not os.path.exists(config_path):
        msg = (
            f"Display config file not found: {config_path}\n"
            f"  config_filename: {config_filename}\n"
            f"  data_path: {data_path}\n"
            f"Please check that the config file exists and the path is correct."
        )
        raise FileNotFoundError(msg)

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            raw = json.load(f)
    except json.JSONDecodeError as e:
        raise RuntimeError(f"Could not parse display config {config_path}: {e}") from e

    if not isinstance(raw, dict):
        raise RuntimeError(
            f"Display config {config_path} must contain a JSON object, got {type(raw).__name__}"
        )

    kwargs: Dict[str, Any] = {}
    missing = []
    for key, attr in _CONFIG_KEYS.items():
        if key in raw and raw[key] is not None:
            kwargs[attr] = str(raw[key])
        else:
            missing.append(key)

    if missing:
        logger.warning(f"Display config {config_path} missing keys {missing}, using defaults")

    config = DisplayConfig(**kwargs)
    logger.info(f"Loaded display config from {config_path}: {config}")
    return config


def format_display_config(config: DisplayConfig) -> str:
    """Render the configuration as a short human-readable block."""
    return "\n".join(
        [
            "Current Configurations",
            f"Title: {config.title}",
            f"Unit: {config.unit}",
            f"Line Color: {config.line_color or 'per mode'}",
            f"Point Color: {config.point_color or 'per mode'}",
            f"Background: {config.background_color}",
        ]
    )
