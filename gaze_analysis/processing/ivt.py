# gaze_analysis/processing/ivt.py
"""Velocity-threshold (I-VT) fixation identification."""
from __future__ import annotations

import logging
import math
from typing import List, Sequence, Tuple

import numpy as np

from ..config import ComputationalConstants, DetectionSettings, JoinType
from ..domain.dataset import RawGazeSample, ScreenCalibration
from ..domain.events import Fixation
from ..postprocessing.merge_fixations import join_fixations
from .velocity import compute_angular_velocity

logger = logging.getLogger(__name__)


def _usable_for_velocity(s: RawGazeSample) -> bool:
    return s.has_usable_gaze() and math.isfinite(s.time_sec) and math.isfinite(s.distance_m)


def _fixation_from_run(
    samples: Sequence[RawGazeSample],
    start: int,
    end: int,
    screen_w: float,
    screen_h: float,
) -> Fixation:
    run = samples[start : end + 1]
    cx = float(np.mean([s.x_norm * screen_w for s in run]))
    cy = float(np.mean([s.y_norm * screen_h for s in run]))
    t0 = samples[start].time_sec
    return Fixation(t0, samples[end].time_sec - t0, cx, cy)


def classify_runs(velocity: np.ndarray, threshold: float) -> List[Tuple[int, int]]:
    """
    Sample index ranges ``(start, end)`` of sub-threshold runs.

    A run of transitions ``i..m`` with ``velocity <= threshold`` covers
    samples ``i-1..m``: it includes the sample before the first slow
    transition.
    """
    runs = []
    start = -1
    for i in range(1, len(velocity)):
        if velocity[i] <= threshold:
            if start < 0:
                start = i - 1
        elif start >= 0:
            runs.append((start, i - 1))
            start = -1
    if start >= 0:
        runs.append((start, len(velocity) - 1))
    return runs


def detect_ivt(
    samples: Sequence[RawGazeSample],
    calibration: ScreenCalibration,
    settings: DetectionSettings,
) -> List[Fixation]:
    """
    I-VT on preprocessed samples.

    Requires a complete ``ScreenCalibration``; returns an empty list
    otherwise. Runs of transitions at or below
    ``ivt_speed_fix_deg_per_sec`` lasting at least ``ivt_min_duration_ms``
    become fixations, which are then joined per ``ivt_join_type``.
    """
    if not calibration.is_complete:
        logger.warning("I-VT unavailable: incomplete screen calibration %s", calibration)
        return []

    usable = [s for s in samples if _usable_for_velocity(s)]
    if len(usable) < 2:
        return []

    v_fix = max(ComputationalConstants.MIN_SPEED_FIX_DEG_PER_SEC, float(settings.ivt_speed_fix_deg_per_sec))
    min_dur = max(ComputationalConstants.MIN_DURATION_SEC, settings.ivt_min_duration_ms / 1000.0)

    velocity = compute_angular_velocity(usable, calibration)
    w, h = float(calibration.width_px), float(calibration.height_px)

    fixations: List[Fixation] = []
    for start, end in classify_runs(velocity, v_fix):
        if usable[end].time_sec - usable[start].time_sec < min_dur:
            continue
        fixations.append(_fixation_from_run(usable, start, end, w, h))

    if settings.ivt_join_type != JoinType.NONE and len(fixations) > 1:
        fixations = join_fixations(
            fixations,
            usable,
            calibration,
            settings.ivt_join_type,
            settings.ivt_merge_time_ms / 1000.0,
            settings.ivt_merge_angle_deg,
        )

    fixations.sort(key=lambda f: f.start_sec)
    logger.debug("I-VT: %s fixations from %s valid samples", len(fixations), len(usable))
    return fixations
