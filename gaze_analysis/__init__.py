# gaze_analysis/__init__.py
"""
Gaze analysis core.

Contains:
- Preprocessing (gap filling, noise reduction)
- Fixation detection (I-DT dispersion, I-VT velocity)
- Fixation merging / joining
- AOI geometry and dwell/visit/saccade analytics
"""

from .config import (
    DetectionSettings,
    EyeSelection,
    NoiseReduction,
    FixationAlgorithm,
    JoinType,
    SettingsError,
)
from .domain import (
    RawGazeSample,
    ScreenCalibration,
    Fixation,
    FixationSeries,
    AoiShape,
    AoiElement,
    AoiMetricsResult,
)
from .preprocessing import preprocess, gap_fill, reduce_noise
from .processing import detect_idt, detect_ivt, compute_angular_velocity
from .postprocessing import merge_by_time, join_fixations
from .aoi import compute_aoi_metrics, map_fixations_to_stimulus
from .engine import FixationDetectionEngine, DetectionResult, StimulusRect
from .cache import FixationCache, CacheKey

__version__ = "0.1.0"
