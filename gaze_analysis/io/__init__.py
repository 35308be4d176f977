"""I/O utilities: tracker records, AOI files, tabular export."""

from .io import fixations_to_frame, write_tsv
from .tracker_records import (
    TrackerValidity,
    RECORD_DTYPE,
    RECORD_SIZE,
    RecordFormatError,
    decode_records,
    read_tracker_file,
)
from .aoi_store import load_aois, save_aois, aoi_to_dict, aoi_from_dict

__all__ = [
    "fixations_to_frame",
    "write_tsv",
    "TrackerValidity",
    "RECORD_DTYPE",
    "RECORD_SIZE",
    "RecordFormatError",
    "decode_records",
    "read_tracker_file",
    "load_aois",
    "save_aois",
    "aoi_to_dict",
    "aoi_from_dict",
]
