# gaze_analysis/postprocessing/merge_fixations.py
"""Merge adjacent fixations: combines temporally (and angularly) close fixations."""

from __future__ import annotations

import logging
import math
from typing import Callable, List, Optional, Sequence

from ..config import JoinType, PhysicalConstants
from ..domain.dataset import RawGazeSample, ScreenCalibration
from ..domain.events import Fixation
from ..strategies.visual_angle import VisualAngleCalculator, mean_distance_m

logger = logging.getLogger(__name__)

JoinPredicate = Callable[[Fixation, Fixation], bool]


def _combine(cur: Fixation, nxt: Fixation) -> Fixation:
    """Span both fixations; centroid weighted by duration."""
    cur_end = cur.end_sec
    new_end = max(cur_end, nxt.end_sec)

    w1 = max(PhysicalConstants.MIN_MERGE_WEIGHT_SEC, cur.dur_sec)
    w2 = max(PhysicalConstants.MIN_MERGE_WEIGHT_SEC, nxt.dur_sec)
    cx = (cur.x_px * w1 + nxt.x_px * w2) / (w1 + w2)
    cy = (cur.y_px * w1 + nxt.y_px * w2) / (w1 + w2)

    return Fixation(cur.start_sec, new_end - cur.start_sec, cx, cy)


def _merge_sorted(
    fixations: Sequence[Fixation],
    merge_sec: float,
    extra: Optional[JoinPredicate] = None,
) -> List[Fixation]:
    if not fixations:
        return []

    ordered = sorted(fixations, key=lambda f: f.start_sec)
    merged: List[Fixation] = []

    cur = ordered[0]
    for nxt in ordered[1:]:
        gap = nxt.start_sec - cur.end_sec
        can_join = gap <= merge_sec
        if can_join and extra is not None:
            can_join = extra(cur, nxt)

        if can_join:
            cur = _combine(cur, nxt)
        else:
            merged.append(cur)
            cur = nxt

    merged.append(cur)
    return merged


def merge_by_time(fixations: Sequence[Fixation], merge_sec: float) -> List[Fixation]:
    """
    Merge consecutive fixations whose gap is at most ``merge_sec``.

    Gap is ``next.start - (prev.start + prev.dur)``. The merged fixation
    keeps the first start, extends to the later end and takes the
    duration-weighted centroid.
    """
    merged = _merge_sorted(fixations, merge_sec)
    logger.debug("Time merge: %s -> %s fixations", len(fixations), len(merged))
    return merged


def angle_between_fixations_deg(
    a: Fixation,
    b: Fixation,
    samples: Sequence[RawGazeSample],
    calibration: ScreenCalibration,
) -> float:
    """
    Visual angle between two fixation centroids (screen pixels).

    The eye distance is the mean sampled distance within the first
    fixation, falling back to the second one. Without any distance the
    angle is ``inf``.
    """
    dist = mean_distance_m(samples, a.start_sec, a.end_sec)
    if dist <= 0:
        dist = mean_distance_m(samples, b.start_sec, b.end_sec)
    if dist <= 0 or not calibration.is_complete:
        return math.inf

    calc = VisualAngleCalculator(calibration)
    return calc.visual_angle_deg(b.x_px - a.x_px, b.y_px - a.y_px, dist)


def join_fixations(
    fixations: Sequence[Fixation],
    samples: Sequence[RawGazeSample],
    calibration: ScreenCalibration,
    join_type: JoinType,
    merge_sec: float,
    merge_angle_deg: float,
) -> List[Fixation]:
    """
    I-VT joining policy.

    - ``JoinType.NONE``: fixations are returned sorted, unchanged
    - ``JoinType.BY_TIME``: same as :func:`merge_by_time`
    - ``JoinType.BY_TIME_AND_ANGLE``: additionally the visual angle between
      the centroids must be at most ``merge_angle_deg``
    """
    if join_type == JoinType.NONE or not fixations:
        return sorted(fixations, key=lambda f: f.start_sec)

    extra: Optional[JoinPredicate] = None
    if join_type == JoinType.BY_TIME_AND_ANGLE:
        max_angle = max(0.0, float(merge_angle_deg))

        def extra(cur: Fixation, nxt: Fixation) -> bool:
            return angle_between_fixations_deg(cur, nxt, samples, calibration) <= max_angle

    merged = _merge_sorted(fixations, merge_sec, extra)
    logger.debug("Join (%s): %s -> %s fixations", join_type.value, len(fixations), len(merged))
    return merged
