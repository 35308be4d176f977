# gaze_analysis/processing/dispersion.py
"""Dispersion-threshold (I-DT) fixation identification."""
from __future__ import annotations

import logging
import math
from typing import List, Sequence

import numpy as np

from ..config import ComputationalConstants, DetectionSettings
from ..domain.dataset import RawGazeSample
from ..domain.events import Fixation
from ..postprocessing.merge_fixations import merge_by_time

logger = logging.getLogger(__name__)


def dispersion_px(xs: np.ndarray, ys: np.ndarray) -> float:
    """Bounding box extent ``(maxX - minX) + (maxY - minY)``."""
    if len(xs) == 0:
        return 0.0
    return float((xs.max() - xs.min()) + (ys.max() - ys.min()))


def _valid_pixel_samples(
    samples: Sequence[RawGazeSample], screen_w: float, screen_h: float
) -> np.ndarray:
    """(n, 3) array of time, x_px, y_px for usable samples."""
    rows = [
        (s.time_sec, s.x_norm * screen_w, s.y_norm * screen_h)
        for s in samples
        if s.has_usable_gaze() and math.isfinite(s.time_sec)
    ]
    if not rows:
        return np.empty((0, 3), dtype=float)
    return np.asarray(rows, dtype=float)


def detect_idt(
    samples: Sequence[RawGazeSample],
    screen_w: float,
    screen_h: float,
    settings: DetectionSettings,
) -> List[Fixation]:
    """
    Growing window I-DT.

    From index ``i`` the window is first extended until it spans at least
    ``idt_window_ms``. If its dispersion is within the threshold it grows one
    sample at a time while the dispersion stays within the threshold; the
    centroid becomes a fixation if the window lasts at least
    ``idt_min_duration_ms``, and ``i`` jumps past the window. Otherwise ``i``
    advances by one.

    Args:
        samples: preprocessed samples (invalid ones are skipped)
        screen_w, screen_h: pixel size used to denormalise coordinates
        settings: detection settings (I-DT fields)

    Returns:
        Fixations in screen pixels, sorted by start time.
    """
    if screen_w <= 0 or screen_h <= 0:
        logger.warning("I-DT skipped: screen size %sx%s px is not usable", screen_w, screen_h)
        return []

    data = _valid_pixel_samples(samples, screen_w, screen_h)
    if len(data) == 0:
        return []

    t, xs, ys = data[:, 0], data[:, 1], data[:, 2]

    disp_thr = max(ComputationalConstants.MIN_DISPERSION_PX, float(settings.idt_dispersion_threshold_px))
    min_dur = max(ComputationalConstants.MIN_DURATION_SEC, settings.idt_min_duration_ms / 1000.0)
    min_win = max(ComputationalConstants.MIN_WINDOW_SEC, settings.idt_window_ms / 1000.0)

    fixations: List[Fixation] = []
    n = len(data)
    i = 0
    while i < n:
        j = i
        while j < n and (t[j] - t[i]) < min_win:
            j += 1
        if j >= n:
            break

        min_x, max_x = xs[i : j + 1].min(), xs[i : j + 1].max()
        min_y, max_y = ys[i : j + 1].min(), ys[i : j + 1].max()

        if (max_x - min_x) + (max_y - min_y) > disp_thr:
            i += 1
            continue

        # grow while the threshold holds
        k = j
        while k + 1 < n:
            nx, ny = xs[k + 1], ys[k + 1]
            n_min_x, n_max_x = min(min_x, nx), max(max_x, nx)
            n_min_y, n_max_y = min(min_y, ny), max(max_y, ny)
            if (n_max_x - n_min_x) + (n_max_y - n_min_y) > disp_thr:
                break
            min_x, max_x, min_y, max_y = n_min_x, n_max_x, n_min_y, n_max_y
            k += 1

        dur = float(t[k] - t[i])
        if dur >= min_dur:
            fixations.append(
                Fixation(
                    start_sec=float(t[i]),
                    dur_sec=dur,
                    x_px=float(xs[i : k + 1].mean()),
                    y_px=float(ys[i : k + 1].mean()),
                )
            )
        i = k + 1

    if settings.idt_merge_time_ms > 0 and len(fixations) > 1:
        fixations = merge_by_time(fixations, settings.idt_merge_time_ms / 1000.0)

    fixations.sort(key=lambda f: f.start_sec)
    logger.debug("I-DT: %s fixations from %s valid samples", len(fixations), n)
    return fixations
