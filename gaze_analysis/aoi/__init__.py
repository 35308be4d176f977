"""AOI geometry and analytics."""

from .geometry import contains, contains_many, area_px, point_in_polygon
from .mapping import map_fixations_to_stimulus
from .metrics import compute_aoi_metrics, compute_aoi_metrics_for, metrics_to_frame

__all__ = [
    "contains",
    "contains_many",
    "area_px",
    "point_in_polygon",
    "map_fixations_to_stimulus",
    "compute_aoi_metrics",
    "compute_aoi_metrics_for",
    "metrics_to_frame",
]
