"""Runtime settings loaded from a YAML file.

Only operational knobs live here. Factor sets, tier thresholds, deadlines
and gate labels are regulatory constants and are not configurable.

Example ``nr12.yaml``::

    alerts:
      limit: 10
    safety_distance:
      approach_speeds: [1600, 2000, 2500]
      minimum_distance: 100
      finger_max_distance: 500
      stop_time_warning: 0.5
    logging:
      level: INFO
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping, Optional, Tuple, Union

import yaml

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "NR12_CONFIG"


class ConfigError(ValueError):
    """Raised when a settings file cannot be read or holds invalid values."""


@dataclass(frozen=True)
class SafetyDistanceSettings:
    approach_speeds: Tuple[float, ...] = (1600.0, 2000.0, 2500.0)  # mm/s
    minimum_distance: float = 100.0  # mm
    finger_max_distance: float = 500.0  # mm
    stop_time_warning: float = 0.5  # s


@dataclass(frozen=True)
class Settings:
    alert_limit: int = 10
    log_level: str = "WARNING"
    safety_distance: SafetyDistanceSettings = field(default_factory=SafetyDistanceSettings)


def load_settings(path: Optional[Union[str, Path]] = None) -> Settings:
    """Load settings from ``path``, the ``NR12_CONFIG`` file, or defaults."""

    if path is None:
        path = os.environ.get(CONFIG_ENV_VAR) or None
    if path is None:
        return Settings()

    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except OSError as exc:
        raise ConfigError(f"Could not read settings file '{path}': {exc}") from exc
    except yaml.YAMLError as exc:
        raise ConfigError(f"Could not parse settings file '{path}': {exc}") from exc

    if not isinstance(data, Mapping):
        raise ConfigError(f"{path}: top level must be a mapping.")
    logger.debug("Loaded settings from %s", path)
    return settings_from_mapping(data, source=str(path))


def settings_from_mapping(data: Mapping[str, Any], source: str = "settings") -> Settings:
    """Build :class:`Settings` from an already parsed mapping."""

    defaults = Settings()
    alerts = _section(data, "alerts", source)
    sd = _section(data, "safety_distance", source)
    log = _section(data, "logging", source)

    sd_defaults = defaults.safety_distance
    speeds = sd.get("approach_speeds", sd_defaults.approach_speeds)
    if not isinstance(speeds, (list, tuple)) or not speeds:
        raise ConfigError(f"{source}: safety_distance.approach_speeds must be a non-empty list.")

    safety_distance = SafetyDistanceSettings(
        approach_speeds=tuple(_positive_float(v, "safety_distance.approach_speeds", source) for v in speeds),
        minimum_distance=_positive_float(
            sd.get("minimum_distance", sd_defaults.minimum_distance), "safety_distance.minimum_distance", source
        ),
        finger_max_distance=_positive_float(
            sd.get("finger_max_distance", sd_defaults.finger_max_distance),
            "safety_distance.finger_max_distance",
            source,
        ),
        stop_time_warning=_positive_float(
            sd.get("stop_time_warning", sd_defaults.stop_time_warning), "safety_distance.stop_time_warning", source
        ),
    )

    limit = alerts.get("limit", defaults.alert_limit)
    if isinstance(limit, bool) or not isinstance(limit, int) or limit < 1:
        raise ConfigError(f"{source}: alerts.limit must be a positive integer.")

    level = str(log.get("level", defaults.log_level)).upper()
    if not isinstance(logging.getLevelName(level), int):
        raise ConfigError(f"{source}: unknown logging level '{level}'.")

    return Settings(alert_limit=limit, log_level=level, safety_distance=safety_distance)


def configure_logging(settings: Settings) -> None:
    """Apply the configured level to the ``nr12_core`` logger hierarchy."""
    logging.getLogger("nr12_core").setLevel(settings.log_level)


def _section(data: Mapping[str, Any], key: str, source: str) -> Mapping[str, Any]:
    value = data.get(key) or {}
    if not isinstance(value, Mapping):
        raise ConfigError(f"{source}: '{key}' must be a mapping.")
    return value


def _positive_float(value: Any, key: str, source: str) -> float:
    if isinstance(value, bool):
        raise ConfigError(f"{source}: invalid numeric value for '{key}'.")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ConfigError(f"{source}: invalid numeric value for '{key}'.") from None
    if number <= 0:
        raise ConfigError(f"{source}: '{key}' must be greater than zero.")
    return number
