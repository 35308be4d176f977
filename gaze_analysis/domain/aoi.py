"""Areas of Interest and their aggregated metrics."""
from __future__ import annotations

import uuid
from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple


class AoiShape(str, Enum):
    RECTANGLE = "Rectangle"
    ELLIPSE = "Ellipse"
    POLYGON = "Polygon"     # free form
    POLYLINE = "Polyline"   # straight lines, closed like a polygon


@dataclass
class AoiElement:
    """Named region over a stimulus in normalised (0..1) coordinates.

    Rectangles and ellipses use two opposite corners, polygons at least
    three vertices.
    """

    shape: AoiShape
    normalized_points: List[Tuple[float, float]]
    name: str = "AOI"
    uid: str = field(default_factory=lambda: str(uuid.uuid4()))
    color_hex: str = "#FFFF0000"
    line_width: float = 2.0
    font_size: float = 12.0


@dataclass
class AoiMetricsResult:
    """Dwell, visit and saccade statistics of one AOI over all results.

    Durations and times are seconds, amplitudes pixels unless suffixed.
    ``time_to_first_fixation`` is None when the AOI was never fixated and
    ``average_saccade_amplitude_deg`` is None when it cannot be computed.
    """

    aoi_name: str = ""
    fixation_count: int = 0
    total_dwell_time: float = 0.0
    average_fixation_duration: float = 0.0
    visit_count: int = 0
    revisit_count: int = 0
    time_to_first_fixation: Optional[float] = None
    first_fixation_duration: float = 0.0
    fixations_before_first: int = 0
    saccade_count: int = 0
    average_saccade_amplitude_px: float = 0.0
    average_saccade_amplitude_deg: Optional[float] = None
    scanpath_length_px: float = 0.0
    area_ratio: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
