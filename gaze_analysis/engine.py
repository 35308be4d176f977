"""High level fixation detection orchestration."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import List, Optional, Protocol, Sequence, Tuple

from .aoi.mapping import map_fixations_to_stimulus
from .config import DetectionSettings, FixationAlgorithm
from .domain.dataset import RawGazeSample, ScreenCalibration
from .domain.events import Fixation, FixationSeries
from .preprocessing import preprocess
from .processing import detect_idt, detect_ivt

logger = logging.getLogger(__name__)


class IFixationDetector(Protocol):
    """Protocol for running preprocessing plus detection on one stream."""

    def run(self, samples: Sequence[RawGazeSample], calibration: ScreenCalibration) -> "DetectionResult":
        ...


@dataclass
class DetectionResult:
    """Preprocessed samples and the fixations (screen pixels) derived from them."""

    preprocessed: List[RawGazeSample]
    fixations: List[Fixation]
    settings: DetectionSettings
    created_at: datetime


@dataclass(frozen=True)
class StimulusRect:
    """Where a stimulus is drawn on screen, in screen pixels."""

    off_x: float
    off_y: float
    width: float
    height: float


class FixationDetectionEngine(IFixationDetector):
    """Preprocess -> detect (I-DT or I-VT) -> time ordered fixations.

    The engine is stateless apart from its settings; one instance may serve
    any number of independent streams.
    """

    def __init__(self, settings: Optional[DetectionSettings] = None) -> None:
        self.settings = (settings or DetectionSettings()).validate()

    def detect(
        self, preprocessed: Sequence[RawGazeSample], calibration: ScreenCalibration
    ) -> List[Fixation]:
        if self.settings.algorithm == FixationAlgorithm.IVT:
            return detect_ivt(preprocessed, calibration, self.settings)
        return detect_idt(preprocessed, calibration.width_px, calibration.height_px, self.settings)

    def run(self, samples: Sequence[RawGazeSample], calibration: ScreenCalibration) -> DetectionResult:
        pre = preprocess(samples, self.settings)
        fixations = self.detect(pre, calibration)
        fixations.sort(key=lambda f: f.start_sec)
        logger.info(
            "%s detection: %s samples -> %s fixations",
            self.settings.algorithm.value.upper(),
            len(samples),
            len(fixations),
        )
        return DetectionResult(
            preprocessed=pre,
            fixations=fixations,
            settings=self.settings,
            created_at=datetime.now(timezone.utc),
        )

    def build_series(
        self,
        result_id: str,
        samples: Sequence[RawGazeSample],
        calibration: ScreenCalibration,
        stimulus: StimulusRect,
    ) -> Tuple[FixationSeries, DetectionResult]:
        """Detect and map into stimulus space, keeping the screen pairing for AOI metrics."""
        result = self.run(samples, calibration)
        local, kept_screen = map_fixations_to_stimulus(
            result.fixations, stimulus.off_x, stimulus.off_y, stimulus.width, stimulus.height
        )
        series = FixationSeries(
            result_id=result_id,
            fixations=local,
            screen_fixations=kept_screen,
            samples=result.preprocessed,
            calibration=calibration,
        )
        return series, result
