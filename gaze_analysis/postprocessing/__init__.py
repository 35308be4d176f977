"""Postprocessing stage: refinement of detected fixations."""

from .merge_fixations import merge_by_time, join_fixations, angle_between_fixations_deg

__all__ = [
    'merge_by_time',
    'join_fixations',
    'angle_between_fixations_deg',
]
