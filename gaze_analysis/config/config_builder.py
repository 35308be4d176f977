# gaze_analysis/config/config_builder.py
"""Build DetectionSettings from mappings or CLI arguments.

Separates configuration construction from argument parsing and from the
persisted settings format of the surrounding application.
"""
from __future__ import annotations

import argparse
from enum import Enum
from typing import Any, Dict, Mapping, Type

from .config import (
    DetectionSettings,
    EyeSelection,
    FixationAlgorithm,
    JoinType,
    NoiseReduction,
    SettingsError,
)
from .constants import ValidationMessages


# camelCase surface used by the application settings -> dataclass field
_CAMEL_TO_FIELD: Dict[str, str] = {
    "eye": "eye",
    "noiseReduction": "noise_reduction",
    "windowSize": "window_size",
    "gapWindowSize": "gap_window_size",
    "algorithm": "algorithm",
    "idtDispersionThresholdPx": "idt_dispersion_threshold_px",
    "idtMinDurationMs": "idt_min_duration_ms",
    "idtWindowMs": "idt_window_ms",
    "idtMergeTimeMs": "idt_merge_time_ms",
    "ivtSpeedFixDegPerSec": "ivt_speed_fix_deg_per_sec",
    "ivtMinDurationMs": "ivt_min_duration_ms",
    "ivtMergeTimeMs": "ivt_merge_time_ms",
    "ivtMergeAngleDeg": "ivt_merge_angle_deg",
    "ivtJoinType": "ivt_join_type",
}

_ENUM_FIELDS: Dict[str, Type[Enum]] = {
    "eye": EyeSelection,
    "noise_reduction": NoiseReduction,
    "algorithm": FixationAlgorithm,
    "ivt_join_type": JoinType,
}

# Spellings of the application's enum names that differ from ours
_ENUM_ALIASES: Dict[str, str] = {
    "averageeye": "average",
    "lefteye": "left",
    "righteye": "right",
    "movingaverage": "mean",
    "moving_average": "mean",
    "dontjoinfix": "none",
    "joinfixbytime": "by_time",
    "bytime": "by_time",
    "joinfixbytimeangle": "by_time_and_angle",
    "bytimeandangle": "by_time_and_angle",
}

_INT_FIELDS = {
    "window_size",
    "gap_window_size",
    "idt_min_duration_ms",
    "idt_window_ms",
    "idt_merge_time_ms",
    "ivt_min_duration_ms",
    "ivt_merge_time_ms",
}


def _coerce_enum(name: str, enum_cls: Type[Enum], value: Any) -> Enum:
    if isinstance(value, enum_cls):
        return value
    key = str(value).strip().lower()
    key = _ENUM_ALIASES.get(key, key)
    for member in enum_cls:
        if member.value == key or member.name.lower() == key:
            return member
    raise SettingsError(
        ValidationMessages.INVALID_CHOICE.format(
            value=value, name=name, choices=[m.value for m in enum_cls]
        )
    )


class ConfigBuilder:
    """Builds DetectionSettings from external representations.

    Responsibilities:
        - Map camelCase / snake_case keys to dataclass fields
        - Coerce enum names and numeric types
        - Validate the result
    """

    @staticmethod
    def build_detection_settings(values: Mapping[str, Any]) -> DetectionSettings:
        field_names = set(DetectionSettings.field_names())
        kwargs: Dict[str, Any] = {}

        for key, value in values.items():
            name = _CAMEL_TO_FIELD.get(key, key)
            if name not in field_names:
                raise SettingsError(ValidationMessages.UNKNOWN_SETTING.format(name=key))

            if name in _ENUM_FIELDS:
                kwargs[name] = _coerce_enum(name, _ENUM_FIELDS[name], value)
            elif name in _INT_FIELDS:
                kwargs[name] = int(value)
            else:
                kwargs[name] = float(value)

        return DetectionSettings(**kwargs).validate()

    @staticmethod
    def build_from_args(args: argparse.Namespace) -> DetectionSettings:
        """Build settings from parsed CLI arguments."""
        return ConfigBuilder.build_detection_settings(
            {
                "eye": args.eye,
                "noise_reduction": args.noise_reduction,
                "window_size": args.window_size,
                "gap_window_size": args.gap_window_size,
                "algorithm": args.algorithm,
                "idt_dispersion_threshold_px": args.dispersion_px,
                "idt_min_duration_ms": args.idt_min_duration_ms,
                "idt_window_ms": args.idt_window_ms,
                "idt_merge_time_ms": args.idt_merge_time_ms,
                "ivt_speed_fix_deg_per_sec": args.threshold,
                "ivt_min_duration_ms": args.ivt_min_duration_ms,
                "ivt_merge_time_ms": args.ivt_merge_time_ms,
                "ivt_merge_angle_deg": args.ivt_merge_angle_deg,
                "ivt_join_type": args.join,
            }
        )
