"""Minimum safety distance for electro-sensitive protective devices (ISO 13855).

``S = K * T + C`` where ``K`` is the approach speed (mm/s), ``T`` the overall
stopping time (s) and ``C`` the intrusion distance derived from the device
resolution (mm).
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Dict, Optional

from .config import SafetyDistanceSettings, Settings

FINGER_RESOLUTION = 14  # mm
HAND_RESOLUTION = 30  # mm
BODY_INTRUSION = 850.0  # mm


@dataclass(frozen=True)
class SafetyDistanceResult:
    distance: int  # S as calculated, mm
    minimum_distance: float
    final_distance: int  # max(S, minimum), mm
    intrusion: float  # C, mm
    is_valid: bool
    message: str

    def to_dict(self) -> Dict[str, object]:
        return {
            "distance": self.distance,
            "minimum_distance": self.minimum_distance,
            "final_distance": self.final_distance,
            "intrusion": self.intrusion,
            "is_valid": self.is_valid,
            "message": self.message,
        }


def intrusion_distance(resolution: float, beam_sync: bool = False) -> float:
    """Return ``C`` for a device ``resolution`` in mm."""
    if beam_sync or resolution <= FINGER_RESOLUTION:
        return 0.0
    if resolution <= HAND_RESOLUTION:
        return BODY_INTRUSION - (HAND_RESOLUTION - resolution) * 10.0
    return BODY_INTRUSION


def detection_label(resolution: float) -> str:
    if resolution <= FINGER_RESOLUTION:
        return "finger"
    if resolution <= HAND_RESOLUTION:
        return "hand"
    return "body"


def calculate_safety_distance(
    approach_speed: float,
    stop_time: float,
    resolution: float,
    beam_sync: bool = False,
    settings: Optional[Settings] = None,
) -> SafetyDistanceResult:
    """Return the safety distance for the given device and machine data."""

    sd = settings.safety_distance if settings is not None else SafetyDistanceSettings()

    if approach_speed not in sd.approach_speeds:
        allowed = ", ".join(f"{v:g}" for v in sd.approach_speeds)
        raise ValueError(f"Unsupported approach speed {approach_speed!r} mm/s (allowed: {allowed}).")
    if not math.isfinite(stop_time) or stop_time < 0:
        raise ValueError(f"Stopping time must be a non-negative number of seconds, got {stop_time!r}.")
    if not math.isfinite(resolution) or resolution <= 0:
        raise ValueError(f"Device resolution must be positive, got {resolution!r}.")

    intrusion = intrusion_distance(resolution, beam_sync)
    distance = approach_speed * stop_time + intrusion
    final = max(distance, sd.minimum_distance)

    if final > sd.finger_max_distance and resolution <= FINGER_RESOLUTION:
        is_valid = False
        message = (
            f"Finger detection devices (<= {FINGER_RESOLUTION} mm) must not be placed "
            f"further than {sd.finger_max_distance:g} mm."
        )
    elif stop_time > sd.stop_time_warning and resolution <= HAND_RESOLUTION:
        is_valid = True
        message = "Machine stopping time is high; consider improving the safety system."
    else:
        is_valid = True
        message = "Safety distance calculated according to ISO 13855."

    return SafetyDistanceResult(
        distance=_round_half_up(distance),
        minimum_distance=sd.minimum_distance,
        final_distance=_round_half_up(final),
        intrusion=intrusion,
        is_valid=is_valid,
        message=message,
    )


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))
