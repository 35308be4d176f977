# gaze_analysis/preprocessing/gap_fill.py
"""Gap fill-in interpolation: bridges short runs of invalid samples."""

from __future__ import annotations

import logging
import math
from typing import List, Sequence

from ..config import PhysicalConstants
from ..domain.dataset import RawGazeSample, is_normalized_point

logger = logging.getLogger(__name__)


def _looks_like_blink(samples: Sequence[RawGazeSample], left: int, right: int) -> bool:
    """True if a neighbour or any sample of the run lacks the eyelid-open flag."""
    if not samples[left].eyelid_open_valid or not samples[right].eyelid_open_valid:
        return True
    return any(not samples[j].eyelid_open_valid for j in range(left + 1, right))


def gap_fill(samples: Sequence[RawGazeSample], max_gap_samples: int) -> List[RawGazeSample]:
    """
    Linear interpolation of short invalid runs.

    A maximal run of ``L`` invalid samples is filled only when:
      - ``0 < L <= max_gap_samples``
      - both immediate neighbours exist and are valid
      - neither neighbour nor any sample of the run looks like a blink
        (``eyelid_open_valid`` unset)
      - the time between the neighbours is positive and at most
        ``PhysicalConstants.MAX_GAP_SEC``

    Interpolated points that are non-finite or leave the unit square stay
    invalid. Returns a new list; the input is not modified.
    """
    if max_gap_samples < 0:
        raise ValueError("max_gap_samples must be >= 0")

    out = list(samples)
    n = len(out)
    filled = 0

    i = 0
    while i < n:
        # Beginning of a gap
        while i < n and out[i].valid:
            i += 1
        if i >= n:
            break

        gap_start = i
        while i < n and not out[i].valid:
            i += 1
        gap_end = i  # first valid sample after the gap, or n

        gap_len = gap_end - gap_start
        if gap_len <= 0 or gap_len > max_gap_samples:
            continue

        left = gap_start - 1
        right = gap_end
        if left < 0 or right >= n:
            continue
        if not out[left].valid or not out[right].valid:
            continue
        if _looks_like_blink(out, left, right):
            continue

        dt_gap = out[right].time_sec - out[left].time_sec
        if not math.isfinite(dt_gap) or dt_gap <= 0 or dt_gap > PhysicalConstants.MAX_GAP_SEC:
            continue

        x0, y0 = out[left].x_norm, out[left].y_norm
        x1, y1 = out[right].x_norm, out[right].y_norm
        if not all(math.isfinite(v) for v in (x0, y0, x1, y1)):
            continue

        for k in range(1, gap_len + 1):
            a = k / (gap_len + 1)
            x = x0 + (x1 - x0) * a
            y = y0 + (y1 - y0) * a
            if not is_normalized_point(x, y):
                continue
            idx = gap_start + k - 1
            out[idx] = out[idx].with_(x_norm=x, y_norm=y, valid=True, eyelid_open_valid=True)
            filled += 1

    logger.debug("Gap filling restored %s/%s samples", filled, n)
    return out
