# gaze_analysis/config/config.py
"""
Configuration classes for the fixation detection pipeline.

This module defines every parameter the core consumes:
  - eye selection and preprocessing (gap filling, noise reduction)
  - I-DT dispersion thresholds
  - I-VT velocity thresholds and fixation joining

Example:
    >>> from gaze_analysis.config import DetectionSettings, FixationAlgorithm, JoinType
    >>>
    >>> # Dispersion-based detection with default thresholds
    >>> settings = DetectionSettings()
    >>>
    >>> # Velocity-based detection, joining fixations by time and angle
    >>> settings = DetectionSettings(
    ...     algorithm=FixationAlgorithm.IVT,
    ...     ivt_speed_fix_deg_per_sec=30.0,
    ...     ivt_join_type=JoinType.BY_TIME_AND_ANGLE,
    ...     ivt_merge_angle_deg=0.5,
    ... )
"""
from __future__ import annotations

import math
from dataclasses import astuple, dataclass, fields
from enum import Enum
from typing import Any, Mapping, Tuple

from .constants import ValidationMessages


class SettingsError(ValueError):
    """Raised when detection settings violate the caller contract."""


class EyeSelection(str, Enum):
    """Which gaze channel of the tracker record feeds the pipeline."""

    LEFT = "left"
    RIGHT = "right"
    AVERAGE = "average"


class NoiseReduction(str, Enum):
    """Sliding window filter applied to valid samples."""

    NONE = "none"
    MEAN = "mean"
    MEDIAN = "median"


class FixationAlgorithm(str, Enum):
    IDT = "idt"
    IVT = "ivt"


class JoinType(str, Enum):
    """Post-detection joining policy of the I-VT detector."""

    NONE = "none"
    BY_TIME = "by_time"
    BY_TIME_AND_ANGLE = "by_time_and_angle"


@dataclass(frozen=True)
class DetectionSettings:
    """
    Immutable parameter set for one detection run.

    All fields are always present; callers replace the object instead of
    mutating it (``dataclasses.replace``).
    """

    # Eye channel and preprocessing
    eye: EyeSelection = EyeSelection.AVERAGE
    noise_reduction: NoiseReduction = NoiseReduction.NONE
    window_size: int = 5        # samples, for mean/median
    gap_window_size: int = 3    # longest invalid run (samples) to interpolate

    algorithm: FixationAlgorithm = FixationAlgorithm.IDT

    # I-DT
    idt_dispersion_threshold_px: float = 60.0
    idt_min_duration_ms: int = 80
    idt_window_ms: int = 80
    idt_merge_time_ms: int = 0

    # I-VT
    ivt_speed_fix_deg_per_sec: float = 30.0
    ivt_min_duration_ms: int = 80
    ivt_merge_time_ms: int = 75
    ivt_merge_angle_deg: float = 30.0
    ivt_join_type: JoinType = JoinType.BY_TIME

    def validate(self) -> "DetectionSettings":
        """
        Check the caller contract and return ``self``.

        Raises:
            SettingsError: negative window sizes or durations, non-finite
                thresholds.
        """
        if self.window_size < 0:
            raise SettingsError(ValidationMessages.NEGATIVE_WINDOW_SIZE)
        if self.gap_window_size < 0:
            raise SettingsError(ValidationMessages.NEGATIVE_GAP_WINDOW)

        for name in (
            "idt_min_duration_ms",
            "idt_window_ms",
            "idt_merge_time_ms",
            "ivt_min_duration_ms",
            "ivt_merge_time_ms",
        ):
            if getattr(self, name) < 0:
                raise SettingsError(ValidationMessages.NEGATIVE_DURATION.format(name=name))

        for name in (
            "idt_dispersion_threshold_px",
            "ivt_speed_fix_deg_per_sec",
            "ivt_merge_angle_deg",
        ):
            if not math.isfinite(float(getattr(self, name))):
                raise SettingsError(ValidationMessages.NON_FINITE_THRESHOLD.format(name=name))

        return self

    def settings_hash(self) -> Tuple[Any, ...]:
        """Hashable value identifying this parameter set (usable as cache key part)."""
        return tuple(v.value if isinstance(v, Enum) else v for v in astuple(self))

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> "DetectionSettings":
        """Build settings from a camelCase or snake_case mapping."""
        from .config_builder import ConfigBuilder

        return ConfigBuilder.build_detection_settings(values)

    @classmethod
    def field_names(cls) -> Tuple[str, ...]:
        return tuple(f.name for f in fields(cls))
