# gaze_analysis/processing/velocity.py
"""Sample-to-sample angular gaze velocity."""
from __future__ import annotations

import logging
import math
from typing import Sequence

import numpy as np

from ..config import PhysicalConstants
from ..domain.dataset import RawGazeSample, ScreenCalibration
from ..strategies.visual_angle import VisualAngleCalculator

logger = logging.getLogger(__name__)


def compute_angular_velocity(
    samples: Sequence[RawGazeSample],
    calibration: ScreenCalibration,
) -> np.ndarray:
    """
    Angular velocity (deg/s) of each transition ``i-1 -> i``.

    Index 0 has no predecessor and is ``inf``. A transition is discarded
    (``inf``, breaks fixation continuity) when:
      - ``dt`` is non-finite, ``<= 0`` or above ``PhysicalConstants.MAX_DT_SEC``
      - the eye distance is unusable; a non-positive current distance falls
        back to the previous sample's
      - the speed is non-finite or above ``PhysicalConstants.MAX_SPEED_DEG_PER_SEC``

    Samples are expected to be valid and in range already.
    """
    n = len(samples)
    velocity = np.full(n, np.inf, dtype=float)
    if n < 2:
        return velocity

    calc = VisualAngleCalculator(calibration)
    w, h = float(calibration.width_px), float(calibration.height_px)

    discarded = 0
    for i in range(1, n):
        prev, cur = samples[i - 1], samples[i]

        dt = cur.time_sec - prev.time_sec
        if not math.isfinite(dt) or dt <= 0 or dt > PhysicalConstants.MAX_DT_SEC:
            discarded += 1
            continue

        dist_m = cur.distance_m if cur.distance_m > 0 else prev.distance_m
        if not math.isfinite(dist_m) or dist_m <= 0:
            discarded += 1
            continue

        dx_px = (cur.x_norm - prev.x_norm) * w
        dy_px = (cur.y_norm - prev.y_norm) * h
        v = calc.visual_angle_deg(dx_px, dy_px, dist_m) / dt

        if math.isfinite(v) and v <= PhysicalConstants.MAX_SPEED_DEG_PER_SEC:
            velocity[i] = v
        else:
            discarded += 1

    logger.debug("Velocity: %s/%s transitions discarded", discarded, n - 1)
    return velocity
