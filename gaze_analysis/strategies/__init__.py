"""Smoothing and visual angle strategies."""

from .smoothing_strategy import (
    SmoothingStrategy,
    NoSmoothing,
    MeanSmoothing,
    MedianSmoothing,
    get_smoothing_strategy,
)
from .visual_angle import VisualAngleCalculator, mean_distance_m

__all__ = [
    "SmoothingStrategy",
    "NoSmoothing",
    "MeanSmoothing",
    "MedianSmoothing",
    "get_smoothing_strategy",
    "VisualAngleCalculator",
    "mean_distance_m",
]
