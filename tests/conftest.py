from typing import Callable, List, Optional, Sequence, Tuple

import numpy as np
import pytest

from gaze_analysis.config import DetectionSettings, NoiseReduction
from gaze_analysis.domain.dataset import RawGazeSample, ScreenCalibration
from gaze_analysis.io.tracker_records import RECORD_DTYPE, TrackerValidity

SampleFactory = Callable[..., List[RawGazeSample]]

FULL_VALIDITY = int(
    TrackerValidity.COORD_VALID
    | TrackerValidity.LEFT_PUPIL_3D_COORD_VALID
    | TrackerValidity.RIGHT_PUPIL_3D_COORD_VALID
    | TrackerValidity.LEFT_PUPIL_COORD_VALID
    | TrackerValidity.RIGHT_PUPIL_COORD_VALID
    | TrackerValidity.LEFT_OPEN_VALID
    | TrackerValidity.RIGHT_OPEN_VALID
)


def build_samples(
    points: Sequence[Optional[Tuple[float, float]]],
    dt: float = 0.02,
    distance_m: float = 0.6,
    t0: float = 0.0,
) -> List[RawGazeSample]:
    """One sample per point at a fixed rate; ``None`` is an invalid sample."""
    samples = []
    for i, p in enumerate(points):
        t = t0 + i * dt
        if p is None:
            samples.append(RawGazeSample(t, float("nan"), float("nan"), distance_m, valid=False))
        else:
            samples.append(RawGazeSample(t, p[0], p[1], distance_m, valid=True))
    return samples


@pytest.fixture
def make_samples() -> SampleFactory:
    return build_samples


@pytest.fixture
def calibration() -> ScreenCalibration:
    """1920x1080 px screen of 520x290 mm."""
    return ScreenCalibration(width_px=1920, height_px=1080, width_mm=520, height_mm=290)


@pytest.fixture
def pixel_only_calibration() -> ScreenCalibration:
    return ScreenCalibration(width_px=1920, height_px=1080)


@pytest.fixture
def two_cluster_samples() -> List[RawGazeSample]:
    """10 samples at 50 Hz: (0.5, 0.5) for 0-4, then (0.9, 0.9) for 5-9."""
    return build_samples([(0.5, 0.5)] * 5 + [(0.9, 0.9)] * 5)


@pytest.fixture
def idt_settings() -> DetectionSettings:
    return DetectionSettings(
        noise_reduction=NoiseReduction.NONE,
        idt_dispersion_threshold_px=30.0,
        idt_min_duration_ms=60,
        idt_window_ms=40,
    )


@pytest.fixture
def make_records() -> Callable[..., np.ndarray]:
    """Structured tracker records with fully valid flags and eye distance 0.6 m."""

    def _make(times: Sequence[float], x: float = 0.5, y: float = 0.5) -> np.ndarray:
        records = np.zeros(len(times), dtype=RECORD_DTYPE)
        records["valid"] = FULL_VALIDITY
        records["time"] = times
        for prefix in ("", "l", "r"):
            records[prefix + "x"] = x
            records[prefix + "y"] = y
        records["leye_z"] = 0.6
        records["reye_z"] = 0.6
        records["lopen"] = 10.0
        records["ropen"] = 10.0
        return records

    return _make
