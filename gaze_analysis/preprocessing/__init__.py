"""Preprocessing stage: data preparation and cleaning."""

from .gap_fill import gap_fill
from .noise_reduction import reduce_noise
from .preprocess import preprocess

__all__ = [
    'gap_fill',
    'reduce_noise',
    'preprocess',
]
