"""Data structures representing decoded gaze recordings.

The classes in this module carry only data and small helpers; the pipeline
modules implement the behaviour.
"""
from __future__ import annotations

import math
from dataclasses import dataclass, replace
from typing import Optional, Tuple


@dataclass(frozen=True)
class RawGazeSample:
    """Single gaze observation of one stream.

    ``x_norm``/``y_norm`` are normalised screen coordinates (0..1) and only
    meaningful when ``valid`` is set. ``distance_m`` is the eye-to-screen
    distance in metres, 0 when unknown.
    """

    time_sec: float
    x_norm: float
    y_norm: float
    distance_m: float = 0.0
    valid: bool = True
    eyelid_open_valid: bool = True

    def with_(
        self,
        x_norm: Optional[float] = None,
        y_norm: Optional[float] = None,
        valid: Optional[bool] = None,
        eyelid_open_valid: Optional[bool] = None,
    ) -> "RawGazeSample":
        """Copy with some of the mutable-by-pipeline fields replaced."""
        changes = {}
        if x_norm is not None:
            changes["x_norm"] = x_norm
        if y_norm is not None:
            changes["y_norm"] = y_norm
        if valid is not None:
            changes["valid"] = valid
        if eyelid_open_valid is not None:
            changes["eyelid_open_valid"] = eyelid_open_valid
        return replace(self, **changes)

    def has_usable_gaze(self) -> bool:
        """Valid flag set and coordinates finite and inside the unit square."""
        return self.valid and is_normalized_point(self.x_norm, self.y_norm)


def is_normalized_point(x: float, y: float) -> bool:
    return (
        math.isfinite(x)
        and math.isfinite(y)
        and 0.0 <= x <= 1.0
        and 0.0 <= y <= 1.0
    )


@dataclass(frozen=True)
class ScreenCalibration:
    """Pixel and physical dimensions of the recording screen."""

    width_px: float
    height_px: float
    width_mm: float = 0.0
    height_mm: float = 0.0

    @property
    def has_pixels(self) -> bool:
        return self.width_px > 0 and self.height_px > 0

    @property
    def is_complete(self) -> bool:
        """All four dimensions positive; required for degree based metrics."""
        return self.has_pixels and self.width_mm > 0 and self.height_mm > 0

    @property
    def mm_per_px(self) -> Tuple[float, float]:
        if not self.is_complete:
            raise ValueError("mm_per_px requires a complete screen calibration")
        return self.width_mm / float(self.width_px), self.height_mm / float(self.height_px)
