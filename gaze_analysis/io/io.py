# gaze_analysis/io/io.py
from __future__ import annotations

from typing import Sequence

import pandas as pd

from ..domain.events import Fixation

FIXATION_COLUMNS = ["start_sec", "dur_sec", "x_px", "y_px"]


def fixations_to_frame(fixations: Sequence[Fixation]) -> pd.DataFrame:
    """One row per fixation with start, duration and centroid."""
    return pd.DataFrame(
        [(f.start_sec, f.dur_sec, f.x_px, f.y_px) for f in fixations],
        columns=FIXATION_COLUMNS,
    )


def write_tsv(df: pd.DataFrame, path: str) -> None:
    """
    Write a DataFrame as TSV.
    """
    df.to_csv(path, sep="\t", index=False)
