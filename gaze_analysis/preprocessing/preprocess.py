"""Preprocessing entry point: gap filling followed by noise reduction."""
from __future__ import annotations

from typing import List, Sequence

from ..config import DetectionSettings, NoiseReduction
from ..domain.dataset import RawGazeSample
from .gap_fill import gap_fill
from .noise_reduction import reduce_noise


def preprocess(samples: Sequence[RawGazeSample], settings: DetectionSettings) -> List[RawGazeSample]:
    """Return a new sample list of equal length, ready for detection."""
    out = list(samples)
    if not out:
        return out

    if settings.gap_window_size > 0:
        out = gap_fill(out, settings.gap_window_size)

    if settings.noise_reduction != NoiseReduction.NONE and settings.window_size > 1:
        out = reduce_noise(out, settings.noise_reduction, settings.window_size)

    return out
