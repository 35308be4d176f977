"""Configuration and constants for fixation detection."""

from .config import (
    DetectionSettings,
    EyeSelection,
    NoiseReduction,
    FixationAlgorithm,
    JoinType,
    SettingsError,
)
from .constants import PhysicalConstants, ComputationalConstants
from .config_builder import ConfigBuilder

__all__ = [
    "DetectionSettings",
    "EyeSelection",
    "NoiseReduction",
    "FixationAlgorithm",
    "JoinType",
    "SettingsError",
    "PhysicalConstants",
    "ComputationalConstants",
    "ConfigBuilder",
]
