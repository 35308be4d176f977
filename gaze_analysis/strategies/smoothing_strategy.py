# gaze_analysis/strategies/smoothing_strategy.py
"""
Strategies for spatial smoothing of gaze coordinates.
"""
from __future__ import annotations

from abc import ABC, abstractmethod

import numpy as np

from ..config import NoiseReduction


class SmoothingStrategy(ABC):
    """Abstract base for sliding window smoothing strategies.

    The window is ``window_samples // 2`` samples on either side of the
    centre, clipped at the stream boundaries.
    """

    def __init__(self, window_samples: int = 5):
        self.window_samples = max(1, int(window_samples))
        self.half_window = self.window_samples // 2

    def smooth(self, points: np.ndarray, usable: np.ndarray) -> np.ndarray:
        """
        Smooth an (n, 2) array of x/y coordinates.

        Args:
            points: coordinates, one row per sample
            usable: boolean mask of samples that may contribute to a window

        Returns:
            (n, 2) array; rows of unusable samples or without any usable
            neighbour are NaN.
        """
        n = len(points)
        out = np.full((n, 2), np.nan, dtype=float)
        for i in range(n):
            if not usable[i]:
                continue
            lo = max(0, i - self.half_window)
            hi = min(n - 1, i + self.half_window)
            window = points[lo : hi + 1][usable[lo : hi + 1]]
            if len(window) == 0:
                continue
            out[i] = self._reduce(window)
        return out

    @abstractmethod
    def _reduce(self, window: np.ndarray) -> np.ndarray:
        """Collapse an (k, 2) window into one x/y pair."""

    @abstractmethod
    def get_description(self) -> str:
        """Description of the smoothing strategy."""


class NoSmoothing(SmoothingStrategy):
    """No smoothing: usable points are returned unchanged."""

    def smooth(self, points: np.ndarray, usable: np.ndarray) -> np.ndarray:
        out = np.array(points, dtype=float, copy=True)
        out[~usable] = np.nan
        return out

    def _reduce(self, window: np.ndarray) -> np.ndarray:
        return window[len(window) // 2]

    def get_description(self) -> str:
        return "NoSmoothing"


class MeanSmoothing(SmoothingStrategy):
    """Moving average over the usable samples of the window."""

    def _reduce(self, window: np.ndarray) -> np.ndarray:
        return window.mean(axis=0)

    def get_description(self) -> str:
        return f"MeanSmoothing(window={self.window_samples})"


class MedianSmoothing(SmoothingStrategy):
    """Median filter over the usable samples of the window.

    Even counts average the two middle values.
    """

    def _reduce(self, window: np.ndarray) -> np.ndarray:
        return np.median(window, axis=0)

    def get_description(self) -> str:
        return f"MedianSmoothing(window={self.window_samples})"


def get_smoothing_strategy(mode: NoiseReduction, window_samples: int) -> SmoothingStrategy:
    """Factory for smoothing strategies."""
    if mode == NoiseReduction.NONE:
        return NoSmoothing(window_samples)
    elif mode == NoiseReduction.MEAN:
        return MeanSmoothing(window_samples)
    elif mode == NoiseReduction.MEDIAN:
        return MedianSmoothing(window_samples)
    else:
        raise ValueError(f"Unknown noise reduction mode: {mode}")
