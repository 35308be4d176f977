"""Geometry helpers converting on-screen displacement to visual angles."""
from __future__ import annotations

import math
from typing import Sequence

from ..domain.dataset import RawGazeSample, ScreenCalibration


class VisualAngleCalculator:
    """Convert pixel displacement to degrees of visual angle.

    Uses the physical pixel pitch of the calibrated screen and the eye to
    screen distance: ``theta = atan2(displacement_mm, distance_mm)``.
    """

    def __init__(self, calibration: ScreenCalibration) -> None:
        self.calibration = calibration
        self.mm_per_px_x, self.mm_per_px_y = calibration.mm_per_px

    def displacement_mm(self, dx_px: float, dy_px: float) -> float:
        return math.hypot(dx_px * self.mm_per_px_x, dy_px * self.mm_per_px_y)

    def visual_angle_deg(self, dx_px: float, dy_px: float, distance_m: float) -> float:
        """Angle in degrees, ``inf`` when the distance is unusable."""
        if not math.isfinite(distance_m) or distance_m <= 0:
            return math.inf
        theta_rad = math.atan2(self.displacement_mm(dx_px, dy_px), distance_m * 1000.0)
        return math.degrees(theta_rad)


def mean_distance_m(samples: Sequence[RawGazeSample], t0: float, t1: float) -> float:
    """Mean positive eye distance of valid samples with ``t0 <= t <= t1``.

    Returns 0 when no sample qualifies.
    """
    total = 0.0
    count = 0
    for s in samples:
        if not s.valid:
            continue
        if not math.isfinite(s.time_sec) or not math.isfinite(s.distance_m):
            continue
        if s.time_sec < t0 or s.time_sec > t1:
            continue
        if s.distance_m <= 0:
            continue
        total += s.distance_m
        count += 1
    if count == 0:
        return 0.0
    return total / count
