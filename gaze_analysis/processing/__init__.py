"""Fixation detection: dispersion and velocity based algorithms."""

from .dispersion import detect_idt, dispersion_px
from .velocity import compute_angular_velocity
from .ivt import detect_ivt, classify_runs

__all__ = [
    "detect_idt",
    "dispersion_px",
    "compute_angular_velocity",
    "detect_ivt",
    "classify_runs",
]
