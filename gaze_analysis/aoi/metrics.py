"""AOI analytics: dwell, visit and saccade statistics over fixation series.

Fixations are expected in stimulus-local pixels, one series per visible
result. Degree based amplitudes additionally need the paired screen-space
fixations, the preprocessed samples (eye distance) and a complete screen
calibration of that result; where these are missing the value is reported
as unavailable (``None``).
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import List, Optional, Sequence

import numpy as np
import pandas as pd

from ..domain.aoi import AoiElement, AoiMetricsResult
from ..domain.events import FixationSeries
from ..strategies.visual_angle import VisualAngleCalculator, mean_distance_m
from .geometry import area_px, contains_many

logger = logging.getLogger(__name__)


@dataclass
class _FirstEntry:
    start_sec: float
    dur_sec: float
    fixations_before: int


def _degree_amplitudes(series: FixationSeries, inside: np.ndarray) -> List[float]:
    """Visual angles of inside->inside transitions, from screen coordinates."""
    if not series.has_screen_pairing() or series.calibration is None:
        return []
    if not series.calibration.is_complete:
        return []

    calc = VisualAngleCalculator(series.calibration)
    screen = series.screen_fixations
    amplitudes: List[float] = []

    for k in range(1, len(series.fixations)):
        if not (inside[k] and inside[k - 1]):
            continue
        stim_fix = series.fixations[k]
        dist_m = mean_distance_m(series.samples, stim_fix.start_sec, stim_fix.end_sec)
        if dist_m <= 0:
            continue
        deg = calc.visual_angle_deg(
            screen[k].x_px - screen[k - 1].x_px,
            screen[k].y_px - screen[k - 1].y_px,
            dist_m,
        )
        if math.isfinite(deg):
            amplitudes.append(deg)

    return amplitudes


def compute_aoi_metrics_for(
    aoi: AoiElement,
    series_list: Sequence[FixationSeries],
    stim_w: float,
    stim_h: float,
) -> AoiMetricsResult:
    """Aggregate metrics of a single AOI over every series."""
    m = AoiMetricsResult(aoi_name=aoi.name)

    stim_area = stim_w * stim_h
    if stim_area > 0:
        m.area_ratio = area_px(aoi, stim_w, stim_h) / stim_area

    first: Optional[_FirstEntry] = None
    visits = 0
    amplitudes_px: List[float] = []
    amplitudes_deg: List[float] = []

    for series in series_list:
        fixations = series.fixations
        if not fixations:
            continue

        xs = np.array([f.x_px for f in fixations], dtype=float)
        ys = np.array([f.y_px for f in fixations], dtype=float)
        inside = contains_many(aoi, xs, ys, stim_w, stim_h)

        hits = np.flatnonzero(inside)
        if len(hits) > 0:
            idx = int(hits[0])
            hit = fixations[idx]
            if first is None or hit.start_sec < first.start_sec:
                first = _FirstEntry(hit.start_sec, hit.dur_sec, idx)

        was_in = False
        for k, fix in enumerate(fixations):
            if not inside[k]:
                was_in = False
                continue

            m.fixation_count += 1
            m.total_dwell_time += fix.dur_sec

            if was_in:
                prev = fixations[k - 1]
                amplitudes_px.append(math.hypot(fix.x_px - prev.x_px, fix.y_px - prev.y_px))
            else:
                visits += 1
                was_in = True

        amplitudes_deg.extend(_degree_amplitudes(series, inside))

    m.visit_count = visits
    m.revisit_count = max(0, visits - 1)

    if m.fixation_count > 0:
        m.average_fixation_duration = m.total_dwell_time / m.fixation_count

    if first is not None:
        m.time_to_first_fixation = first.start_sec
        m.first_fixation_duration = first.dur_sec
        m.fixations_before_first = first.fixations_before

    m.saccade_count = len(amplitudes_px)
    m.scanpath_length_px = float(sum(amplitudes_px))
    if amplitudes_px:
        m.average_saccade_amplitude_px = m.scanpath_length_px / len(amplitudes_px)
    if amplitudes_deg:
        m.average_saccade_amplitude_deg = float(np.mean(amplitudes_deg))

    return m


def compute_aoi_metrics(
    series_list: Sequence[FixationSeries],
    aois: Sequence[AoiElement],
    stim_w: float,
    stim_h: float,
) -> List[AoiMetricsResult]:
    """
    One :class:`AoiMetricsResult` per AOI, in AOI order.

    Args:
        series_list: fixation series of the visible results
        aois: AOI shapes in normalised stimulus coordinates
        stim_w, stim_h: stimulus size in pixels
    """
    results = [compute_aoi_metrics_for(aoi, series_list, stim_w, stim_h) for aoi in aois]
    logger.info(
        "AOI metrics: %s AOIs over %s series (%sx%s px)",
        len(aois),
        len(series_list),
        stim_w,
        stim_h,
    )
    return results


def metrics_to_frame(results: Sequence[AoiMetricsResult]) -> pd.DataFrame:
    """Tabular view of AOI metrics, one row per AOI."""
    frame = pd.DataFrame([r.to_dict() for r in results], columns=list(AoiMetricsResult().to_dict()))
    frame["area_ratio_pct"] = frame["area_ratio"] * 100.0
    return frame
