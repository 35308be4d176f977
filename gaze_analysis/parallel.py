# gaze_analysis/parallel.py
"""
Parallel fixation detection across independent streams.

Each ``(result, stimulus, eye)`` stream is independent, so detection runs
one job per key with joblib. Inputs must be immutable snapshots.
"""
from __future__ import annotations

import logging
from typing import Dict, Hashable, List, Mapping, Sequence, Tuple

from joblib import Parallel, delayed

from .config import DetectionSettings
from .domain.dataset import RawGazeSample, ScreenCalibration
from .domain.events import Fixation
from .engine import FixationDetectionEngine

logger = logging.getLogger(__name__)

DetectionJob = Tuple[Sequence[RawGazeSample], ScreenCalibration]


def _detect_one(
    samples: Sequence[RawGazeSample],
    calibration: ScreenCalibration,
    settings: DetectionSettings,
) -> List[Fixation]:
    return FixationDetectionEngine(settings).run(samples, calibration).fixations


def detect_many(
    jobs: Mapping[Hashable, DetectionJob],
    settings: DetectionSettings,
    n_jobs: int = 1,
) -> Dict[Hashable, List[Fixation]]:
    """
    Run detection for every job.

    Args:
        jobs: key -> (samples, calibration)
        settings: shared detection settings
        n_jobs: joblib worker count (1 = sequential, -1 = all cores)

    Returns:
        key -> fixations, same keys as ``jobs``
    """
    settings.validate()
    keys = list(jobs)
    logger.info("Detecting fixations for %s streams (n_jobs=%s)", len(keys), n_jobs)

    results = Parallel(n_jobs=n_jobs)(
        delayed(_detect_one)(jobs[k][0], jobs[k][1], settings) for k in keys
    )
    return dict(zip(keys, results))
