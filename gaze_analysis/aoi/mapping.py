"""Mapping of screen-space fixations into a displayed stimulus rectangle."""
from __future__ import annotations

from typing import List, Sequence, Tuple

from ..domain.events import Fixation


def map_fixations_to_stimulus(
    fixations: Sequence[Fixation],
    off_x: float,
    off_y: float,
    stim_w: float,
    stim_h: float,
) -> Tuple[List[Fixation], List[Fixation]]:
    """
    Translate screen fixations into stimulus-local pixels.

    Fixations landing outside ``[0, stim_w] x [0, stim_h]`` (letterbox
    borders) are dropped.

    Returns:
        ``(stimulus_local, kept_screen)``: equal length lists, paired by
        index and sorted by start time.
    """
    local: List[Fixation] = []
    kept: List[Fixation] = []

    for f in sorted(fixations, key=lambda f: f.start_sec):
        x = f.x_px - off_x
        y = f.y_px - off_y
        if x < 0 or y < 0 or x > stim_w or y > stim_h:
            continue
        kept.append(f)
        local.append(Fixation(f.start_sec, f.dur_sec, x, y))

    return local, kept
