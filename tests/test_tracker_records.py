"""
Tests for decoding binary tracker sample records.
"""
import numpy as np
import pytest

from gaze_analysis.config import EyeSelection
from gaze_analysis.io import (
    RECORD_SIZE,
    RecordFormatError,
    TrackerValidity,
    decode_records,
    read_tracker_file,
)


def test_record_size():
    assert RECORD_SIZE == 84


class TestDecodeRecords:
    """Tests for timestamp handling, validity and eye selection."""

    def test_basic_decode(self, make_records):
        records = make_records([1.0, 1.02, 1.04], x=0.25, y=0.75)

        samples = decode_records(records.tobytes())

        assert len(samples) == 3
        assert samples[0].time_sec == 0.0
        assert samples[2].time_sec == pytest.approx(0.04, abs=1e-6)
        assert samples[1].x_norm == pytest.approx(0.25)
        assert samples[1].y_norm == pytest.approx(0.75)
        assert all(s.valid and s.eyelid_open_valid for s in samples)
        assert samples[0].distance_m == pytest.approx(0.6)

    def test_partial_trailing_record_ignored(self, make_records):
        buffer = make_records([0.0, 0.02]).tobytes()
        samples = decode_records(buffer + b"\x00" * 10)
        assert len(samples) == 2

    def test_shorter_than_one_record(self):
        assert decode_records(b"\x00" * 40) == []

    def test_non_increasing_timestamps_dropped(self, make_records):
        records = make_records([0.0, 0.02, 0.02, 0.01, 0.04])
        samples = decode_records(records.tobytes())
        assert [round(s.time_sec, 3) for s in samples] == [0.0, 0.02, 0.04]

    def test_non_finite_timestamp_dropped(self, make_records):
        records = make_records([0.0, np.nan, 0.04])
        samples = decode_records(records.tobytes())
        assert len(samples) == 2

    def test_out_of_range_coordinates_invalid(self, make_records):
        records = make_records([0.0, 0.02])
        records["x"][1] = 1.5
        samples = decode_records(records.tobytes())
        assert samples[0].valid
        assert not samples[1].valid

    def test_validity_flag_respected(self, make_records):
        records = make_records([0.0, 0.02])
        records["valid"][1] &= ~int(TrackerValidity.COORD_VALID)
        samples = decode_records(records.tobytes(), EyeSelection.AVERAGE)
        assert not samples[1].valid

    def test_eye_selection(self, make_records):
        records = make_records([0.0])
        records["lx"], records["ly"] = 0.1, 0.2
        records["rx"], records["ry"] = 0.8, 0.9

        left = decode_records(records.tobytes(), EyeSelection.LEFT)[0]
        right = decode_records(records.tobytes(), EyeSelection.RIGHT)[0]

        assert (left.x_norm, left.y_norm) == pytest.approx((0.1, 0.2))
        assert (right.x_norm, right.y_norm) == pytest.approx((0.8, 0.9))

    def test_eyelid_flags(self, make_records):
        records = make_records([0.0])
        records["valid"] &= ~int(TrackerValidity.LEFT_OPEN_VALID)
        buffer = records.tobytes()

        assert not decode_records(buffer, EyeSelection.LEFT)[0].eyelid_open_valid
        assert decode_records(buffer, EyeSelection.RIGHT)[0].eyelid_open_valid
        assert not decode_records(buffer, EyeSelection.AVERAGE)[0].eyelid_open_valid

    def test_distance(self, make_records):
        records = make_records([0.0, 0.02, 0.04])
        records["reye_z"][0] = 0.62
        records["valid"][1] &= ~int(TrackerValidity.RIGHT_PUPIL_3D_COORD_VALID)
        records["reye_z"][1] = 5.0
        records["valid"][2] &= ~int(
            TrackerValidity.LEFT_PUPIL_3D_COORD_VALID | TrackerValidity.RIGHT_PUPIL_3D_COORD_VALID
        )

        samples = decode_records(records.tobytes())

        assert samples[0].distance_m == pytest.approx(0.61)
        assert samples[1].distance_m == pytest.approx(0.6)
        assert samples[2].distance_m == 0.0

    def test_unknown_eye(self, make_records):
        with pytest.raises(RecordFormatError):
            decode_records(make_records([0.0]).tobytes(), "both")


class TestReadTrackerFile:
    def test_missing_file(self, tmp_path):
        assert read_tracker_file(tmp_path / "missing.bin") == []

    def test_reads_file(self, tmp_path, make_records):
        path = tmp_path / "samples.bin"
        path.write_bytes(make_records([0.0, 0.02, 0.04]).tobytes())
        assert len(read_tracker_file(path, EyeSelection.RIGHT)) == 3
