# gaze_analysis/io/tracker_records.py
"""
Decoder for the fixed-size binary sample records written by the tracker.

Record layout (84 bytes, little endian):

    int32  valid                 validity bitmask (TrackerValidity)
    f32    time                  monotonic timestamp, seconds
    f32    x, y, z               best-eye normalised gaze (z unused)
    f32    lp, rp                pupil diameters, mm
    f32    leye_x, leye_y, leye_z  left eye 3D origin, metres
    f32    reye_x, reye_y, reye_z  right eye 3D origin, metres
    f32    rx, ry                right eye normalised gaze
    f32    lx, ly                left eye normalised gaze
    f32    lopen, ropen          eyelid opening, mm
    8      reserved

A short trailing record (partial write of a live recording) is discarded.
"""
from __future__ import annotations

import enum
import logging
from pathlib import Path
from typing import List, Union

import numpy as np

from ..config import EyeSelection
from ..domain.dataset import RawGazeSample

logger = logging.getLogger(__name__)


class TrackerValidity(enum.IntFlag):
    COORD_VALID = 1
    LEFT_PUPIL_3D_COORD_VALID = 2
    RIGHT_PUPIL_3D_COORD_VALID = 4
    LEFT_PUPIL_SIZE_VALID = 8
    RIGHT_PUPIL_SIZE_VALID = 16
    LEFT_PUPIL_COORD_VALID = 32
    RIGHT_PUPIL_COORD_VALID = 64
    LEFT_OPEN_VALID = 128
    RIGHT_OPEN_VALID = 256


RECORD_DTYPE = np.dtype(
    [
        ("valid", "<i4"),
        ("time", "<f4"),
        ("x", "<f4"),
        ("y", "<f4"),
        ("z", "<f4"),
        ("lp", "<f4"),
        ("rp", "<f4"),
        ("leye_x", "<f4"),
        ("leye_y", "<f4"),
        ("leye_z", "<f4"),
        ("reye_x", "<f4"),
        ("reye_y", "<f4"),
        ("reye_z", "<f4"),
        ("rx", "<f4"),
        ("ry", "<f4"),
        ("lx", "<f4"),
        ("ly", "<f4"),
        ("lopen", "<f4"),
        ("ropen", "<f4"),
        ("reserved", "V8"),
    ]
)
RECORD_SIZE = RECORD_DTYPE.itemsize  # 84


class RecordFormatError(ValueError):
    """Raised for arguments the decoder cannot interpret."""


def _flag(valid: np.ndarray, flag: TrackerValidity) -> np.ndarray:
    return (valid & int(flag)) != 0


def _gaze_columns(records: np.ndarray, eye: EyeSelection):
    valid = records["valid"]
    if eye == EyeSelection.LEFT:
        return _flag(valid, TrackerValidity.LEFT_PUPIL_COORD_VALID), records["lx"], records["ly"]
    if eye == EyeSelection.RIGHT:
        return _flag(valid, TrackerValidity.RIGHT_PUPIL_COORD_VALID), records["rx"], records["ry"]
    if eye == EyeSelection.AVERAGE:
        return _flag(valid, TrackerValidity.COORD_VALID), records["x"], records["y"]
    raise RecordFormatError(f"Unknown eye selection: {eye!r}")


def _eyelid_open(records: np.ndarray, eye: EyeSelection) -> np.ndarray:
    left = _flag(records["valid"], TrackerValidity.LEFT_OPEN_VALID)
    right = _flag(records["valid"], TrackerValidity.RIGHT_OPEN_VALID)
    if eye == EyeSelection.LEFT:
        return left
    if eye == EyeSelection.RIGHT:
        return right
    return left & right


def _distance_m(records: np.ndarray) -> np.ndarray:
    """Mean of the valid positive eye Z values, else the one available, else 0."""
    valid = records["valid"]
    lz = records["leye_z"].astype(float)
    rz = records["reye_z"].astype(float)
    with np.errstate(invalid="ignore"):
        l_ok = _flag(valid, TrackerValidity.LEFT_PUPIL_3D_COORD_VALID) & np.isfinite(lz) & (lz > 0)
        r_ok = _flag(valid, TrackerValidity.RIGHT_PUPIL_3D_COORD_VALID) & np.isfinite(rz) & (rz > 0)

    dist = np.zeros(len(records), dtype=float)
    both = l_ok & r_ok
    dist[both] = (lz[both] + rz[both]) * 0.5
    dist[l_ok & ~r_ok] = lz[l_ok & ~r_ok]
    dist[r_ok & ~l_ok] = rz[r_ok & ~l_ok]
    return dist


def decode_records(buffer: bytes, eye: EyeSelection = EyeSelection.AVERAGE) -> List[RawGazeSample]:
    """
    Decode raw tracker bytes into samples for one eye selection.

    - Partial trailing bytes are ignored.
    - Non-finite and non-increasing timestamps are dropped; time is rebased
      to the first kept sample.
    - Coordinates that are non-finite or outside [0, 1] are invalid whatever
      the bitmask says.
    """
    if not isinstance(eye, EyeSelection):
        raise RecordFormatError(f"Unknown eye selection: {eye!r}")

    count = len(buffer) // RECORD_SIZE
    if len(buffer) % RECORD_SIZE:
        logger.debug("Discarding %s trailing bytes", len(buffer) % RECORD_SIZE)
    if count == 0:
        return []

    records = np.frombuffer(buffer, dtype=RECORD_DTYPE, count=count)

    t = records["time"].astype(float)
    finite_t = np.isfinite(t)
    # strictly increasing w.r.t. the largest timestamp seen so far
    running = np.maximum.accumulate(np.where(finite_t, t, -np.inf))
    previous_max = np.concatenate(([-np.inf], running[:-1]))
    keep = finite_t & (t > previous_max)

    records = records[keep]
    if len(records) == 0:
        return []

    t = t[keep]
    t = t - t[0]

    ok, xs, ys = _gaze_columns(records, eye)
    xs = xs.astype(float)
    ys = ys.astype(float)
    with np.errstate(invalid="ignore"):
        in_range = np.isfinite(xs) & np.isfinite(ys) & (xs >= 0) & (xs <= 1) & (ys >= 0) & (ys <= 1)
    ok = ok & in_range

    open_valid = _eyelid_open(records, eye)
    dist = _distance_m(records)

    samples = [
        RawGazeSample(
            time_sec=float(t[i]),
            x_norm=float(xs[i]),
            y_norm=float(ys[i]),
            distance_m=float(dist[i]),
            valid=bool(ok[i]),
            eyelid_open_valid=bool(open_valid[i]),
        )
        for i in range(len(records))
    ]
    logger.debug("Decoded %s samples (%s dropped timestamps)", len(samples), count - len(samples))
    return samples


def read_tracker_file(
    path: Union[str, Path], eye: EyeSelection = EyeSelection.AVERAGE
) -> List[RawGazeSample]:
    """Read and decode a tracker sample file; a missing file yields ``[]``."""
    path = Path(path)
    if not path.exists():
        logger.warning("Tracker file not found: %s", path)
        return []
    return decode_records(path.read_bytes(), eye)
