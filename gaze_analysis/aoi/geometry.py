"""Containment and area of AOI shapes, evaluated in pixel space."""
from __future__ import annotations

import math
from typing import List, Tuple

import numpy as np

from ..domain.aoi import AoiElement, AoiShape

Point = Tuple[float, float]

_TWO_POINT_SHAPES = (AoiShape.RECTANGLE, AoiShape.ELLIPSE)


def denormalize(aoi: AoiElement, width: float, height: float) -> List[Point]:
    return [(float(x) * width, float(y) * height) for x, y in aoi.normalized_points]


def _has_enough_points(aoi: AoiElement) -> bool:
    if aoi.shape in _TWO_POINT_SHAPES:
        return len(aoi.normalized_points) >= 2
    return len(aoi.normalized_points) >= 3


def _bounds(p0: Point, p1: Point) -> Tuple[float, float, float, float]:
    """``(min_x, min_y, max_x, max_y)`` of the rectangle spanned by two corners."""
    return min(p0[0], p1[0]), min(p0[1], p1[1]), max(p0[0], p1[0]), max(p0[1], p1[1])


def point_in_polygon(x: float, y: float, polygon: List[Point]) -> bool:
    """Even-odd rule ray casting."""
    inside = False
    j = len(polygon) - 1
    for i in range(len(polygon)):
        xi, yi = polygon[i]
        xj, yj = polygon[j]
        if ((yi < y <= yj) or (yj < y <= yi)) and (xi + (y - yi) / (yj - yi) * (xj - xi) < x):
            inside = not inside
        j = i
    return inside


def contains(aoi: AoiElement, x: float, y: float, width: float, height: float) -> bool:
    """Whether the pixel point ``(x, y)`` lies inside ``aoi`` on a ``width x height`` stimulus."""
    if not _has_enough_points(aoi) or not (math.isfinite(x) and math.isfinite(y)):
        return False

    pixels = denormalize(aoi, width, height)

    if aoi.shape == AoiShape.RECTANGLE:
        min_x, min_y, max_x, max_y = _bounds(pixels[0], pixels[1])
        return min_x <= x <= max_x and min_y <= y <= max_y

    if aoi.shape == AoiShape.ELLIPSE:
        min_x, min_y, max_x, max_y = _bounds(pixels[0], pixels[1])
        rx = (max_x - min_x) / 2.0
        ry = (max_y - min_y) / 2.0
        if rx <= 0 or ry <= 0:
            return False
        dx = x - (min_x + rx)
        dy = y - (min_y + ry)
        return (dx * dx) / (rx * rx) + (dy * dy) / (ry * ry) <= 1.0

    # Polygon / polyline: closed figure
    return point_in_polygon(x, y, pixels)


def contains_many(
    aoi: AoiElement,
    xs: np.ndarray,
    ys: np.ndarray,
    width: float,
    height: float,
) -> np.ndarray:
    """Vectorised :func:`contains` over arrays of pixel coordinates."""
    xs = np.asarray(xs, dtype=float)
    ys = np.asarray(ys, dtype=float)
    finite = np.isfinite(xs) & np.isfinite(ys)
    if not _has_enough_points(aoi):
        return np.zeros(xs.shape, dtype=bool)

    pixels = denormalize(aoi, width, height)

    if aoi.shape == AoiShape.RECTANGLE:
        min_x, min_y, max_x, max_y = _bounds(pixels[0], pixels[1])
        return finite & (xs >= min_x) & (xs <= max_x) & (ys >= min_y) & (ys <= max_y)

    if aoi.shape == AoiShape.ELLIPSE:
        min_x, min_y, max_x, max_y = _bounds(pixels[0], pixels[1])
        rx = (max_x - min_x) / 2.0
        ry = (max_y - min_y) / 2.0
        if rx <= 0 or ry <= 0:
            return np.zeros(xs.shape, dtype=bool)
        dx = xs - (min_x + rx)
        dy = ys - (min_y + ry)
        with np.errstate(invalid="ignore"):
            return finite & ((dx * dx) / (rx * rx) + (dy * dy) / (ry * ry) <= 1.0)

    inside = np.zeros(xs.shape, dtype=bool)
    j = len(pixels) - 1
    with np.errstate(divide="ignore", invalid="ignore"):
        for i in range(len(pixels)):
            xi, yi = pixels[i]
            xj, yj = pixels[j]
            crosses = ((yi < ys) & (ys <= yj)) | ((yj < ys) & (ys <= yi))
            if yj != yi:
                x_cross = xi + (ys - yi) / (yj - yi) * (xj - xi)
                inside ^= crosses & (x_cross < xs)
            j = i
    return finite & inside


def area_px(aoi: AoiElement, width: float, height: float) -> float:
    """AOI area in square pixels; closed form for rectangle/ellipse, shoelace otherwise."""
    if len(aoi.normalized_points) < 2:
        return 0.0

    pixels = denormalize(aoi, width, height)

    if aoi.shape in _TWO_POINT_SHAPES:
        min_x, min_y, max_x, max_y = _bounds(pixels[0], pixels[1])
        w, h = max_x - min_x, max_y - min_y
        if aoi.shape == AoiShape.RECTANGLE:
            return w * h
        return math.pi * (w / 2.0) * (h / 2.0)

    area = 0.0
    j = len(pixels) - 1
    for i in range(len(pixels)):
        area += (pixels[j][0] + pixels[i][0]) * (pixels[j][1] - pixels[i][1])
        j = i
    return abs(area / 2.0)
