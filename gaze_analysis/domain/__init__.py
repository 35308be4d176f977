"""Domain models for gaze recordings, fixations and AOIs."""

from .dataset import RawGazeSample, ScreenCalibration, is_normalized_point
from .events import Fixation, FixationSeries
from .aoi import AoiShape, AoiElement, AoiMetricsResult

__all__ = [
    "RawGazeSample",
    "ScreenCalibration",
    "is_normalized_point",
    "Fixation",
    "FixationSeries",
    "AoiShape",
    "AoiElement",
    "AoiMetricsResult",
]
