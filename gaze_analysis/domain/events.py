"""Output gaze events produced by the fixation detectors."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from .dataset import RawGazeSample, ScreenCalibration


@dataclass(frozen=True)
class Fixation:
    """Stable gaze period: start, duration (s) and centroid in pixels.

    The pixel space is chosen by the caller (screen or stimulus-local).
    """

    start_sec: float
    dur_sec: float
    x_px: float
    y_px: float

    @property
    def end_sec(self) -> float:
        return self.start_sec + self.dur_sec


@dataclass
class FixationSeries:
    """Fixations of one visible result for one stimulus.

    ``fixations`` are stimulus-local. ``screen_fixations`` holds the same
    fixations in screen pixels (same order and length) and together with
    ``samples`` and ``calibration`` enables degree based saccade amplitudes.
    """

    result_id: str
    fixations: List[Fixation]
    screen_fixations: Optional[List[Fixation]] = None
    samples: Sequence[RawGazeSample] = field(default_factory=list)
    calibration: Optional[ScreenCalibration] = None

    def has_screen_pairing(self) -> bool:
        return (
            self.screen_fixations is not None
            and len(self.screen_fixations) == len(self.fixations)
            and len(self.fixations) > 0
        )
