# gaze_analysis/preprocessing/noise_reduction.py
"""Noise reduction: sliding window smoothing of valid gaze coordinates."""

from __future__ import annotations

import logging
from typing import List, Sequence

import numpy as np

from ..config import NoiseReduction
from ..domain.dataset import RawGazeSample, is_normalized_point
from ..strategies.smoothing_strategy import get_smoothing_strategy

logger = logging.getLogger(__name__)


def reduce_noise(
    samples: Sequence[RawGazeSample],
    mode: NoiseReduction,
    window_size: int,
) -> List[RawGazeSample]:
    """
    Optional mean/median smoothing of x/y.

    - Only valid samples are rewritten; invalid samples stay as they are.
    - Each window uses the unfiltered input and only valid, finite,
      in-range neighbours.
    - If the filter yields a non-finite or out-of-range point the original
      sample is kept.
    """
    if window_size < 0:
        raise ValueError("window_size must be >= 0")

    out = list(samples)
    if mode == NoiseReduction.NONE or window_size <= 1 or not out:
        return out

    points = np.array([(s.x_norm, s.y_norm) for s in out], dtype=float)
    usable = np.array([s.has_usable_gaze() for s in out], dtype=bool)

    strategy = get_smoothing_strategy(mode, window_size)
    smoothed = strategy.smooth(points, usable)

    changed = 0
    for i, s in enumerate(out):
        if not s.valid:
            continue
        nx, ny = float(smoothed[i, 0]), float(smoothed[i, 1])
        if not is_normalized_point(nx, ny):
            continue
        out[i] = s.with_(x_norm=nx, y_norm=ny)
        changed += 1

    logger.debug("%s smoothed %s/%s samples", strategy.get_description(), changed, len(out))
    return out
