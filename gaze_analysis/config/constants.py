# gaze_analysis/config/constants.py
"""Physical and computational constants for fixation detection."""

from __future__ import annotations


class PhysicalConstants:
    """Fixed physical limits used by gap filling and velocity computation."""

    # Longest time span (s) bridged by gap filling, and the largest dt (s)
    # between two samples that still yields a velocity.
    MAX_GAP_SEC: float = 0.25
    MAX_DT_SEC: float = 0.25

    # Angular speeds above this ceiling (deg/s) are physiologically implausible.
    MAX_SPEED_DEG_PER_SEC: float = 800.0

    # Floor for duration weights when merging fixations (s)
    MIN_MERGE_WEIGHT_SEC: float = 0.0001


class ComputationalConstants:
    """Lower bounds applied to user supplied thresholds."""

    MIN_DISPERSION_PX: float = 0.01
    MIN_DURATION_SEC: float = 0.001
    MIN_WINDOW_SEC: float = 0.001
    MIN_SPEED_FIX_DEG_PER_SEC: float = 0.01


class ValidationMessages:
    """Standard validation and error messages."""

    NEGATIVE_WINDOW_SIZE = "window_size must be >= 0"
    NEGATIVE_GAP_WINDOW = "gap_window_size must be >= 0"
    NEGATIVE_DURATION = "{name} must be >= 0"
    NON_FINITE_THRESHOLD = "{name} must be a finite number"
    UNKNOWN_SETTING = "Unknown detection setting: {name}"
    INVALID_CHOICE = "Invalid value {value!r} for {name}; expected one of {choices}"
