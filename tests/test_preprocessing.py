"""
Tests for gap filling, noise reduction and the preprocessing entry point.
"""
import math

import pytest

from gaze_analysis.config import DetectionSettings, NoiseReduction
from gaze_analysis.domain.dataset import RawGazeSample
from gaze_analysis.preprocessing import gap_fill, preprocess, reduce_noise


class TestGapFill:
    """Tests for linear interpolation of short invalid runs."""

    def test_interpolates_two_sample_gap(self, make_samples):
        """Two invalid samples between (0.2, 0.2) and (0.4, 0.4) are interpolated."""
        samples = make_samples([(0.2, 0.2), None, None, (0.4, 0.4)])

        result = gap_fill(samples, 3)

        assert result[1].valid and result[2].valid
        assert result[1].x_norm == pytest.approx(0.2667, abs=1e-4)
        assert result[1].y_norm == pytest.approx(0.2667, abs=1e-4)
        assert result[2].x_norm == pytest.approx(0.3333, abs=1e-4)
        assert result[2].y_norm == pytest.approx(0.3333, abs=1e-4)
        assert result[1].eyelid_open_valid

    def test_input_not_modified(self, make_samples):
        samples = make_samples([(0.2, 0.2), None, (0.4, 0.4)])
        gap_fill(samples, 3)
        assert not samples[1].valid

    def test_length_and_times_preserved(self, make_samples):
        samples = make_samples([(0.2, 0.2), None, (0.4, 0.4), None, None])
        result = gap_fill(samples, 3)
        assert len(result) == len(samples)
        assert [s.time_sec for s in result] == [s.time_sec for s in samples]

    def test_gap_longer_than_window_untouched(self, make_samples):
        samples = make_samples([(0.2, 0.2), None, None, None, None, (0.4, 0.4)])
        result = gap_fill(samples, 3)
        assert not any(s.valid for s in result[1:5])

    def test_zero_window_fills_nothing(self, make_samples):
        samples = make_samples([(0.2, 0.2), None, (0.4, 0.4)])
        result = gap_fill(samples, 0)
        assert not result[1].valid

    def test_runs_at_stream_edges_untouched(self, make_samples):
        """A gap needs a valid neighbour on both sides."""
        samples = make_samples([None, (0.2, 0.2), (0.3, 0.3), None])
        result = gap_fill(samples, 3)
        assert not result[0].valid
        assert not result[3].valid

    def test_blink_inside_gap_not_filled(self, make_samples):
        samples = make_samples([(0.2, 0.2), None, None, (0.4, 0.4)])
        samples[2] = samples[2].with_(eyelid_open_valid=False)

        result = gap_fill(samples, 3)

        assert not result[1].valid
        assert not result[2].valid

    def test_blink_on_neighbour_not_filled(self, make_samples):
        samples = make_samples([(0.2, 0.2), None, (0.4, 0.4)])
        samples[0] = samples[0].with_(eyelid_open_valid=False)

        result = gap_fill(samples, 3)

        assert not result[1].valid

    def test_time_ceiling(self):
        """Neighbours further apart than 0.25 s are never bridged."""
        samples = [
            RawGazeSample(0.0, 0.2, 0.2),
            RawGazeSample(0.15, float("nan"), float("nan"), valid=False),
            RawGazeSample(0.3, 0.4, 0.4),
        ]
        result = gap_fill(samples, 3)
        assert not result[1].valid

    def test_time_ceiling_inclusive(self):
        samples = [
            RawGazeSample(0.0, 0.2, 0.2),
            RawGazeSample(0.125, float("nan"), float("nan"), valid=False),
            RawGazeSample(0.25, 0.4, 0.4),
        ]
        result = gap_fill(samples, 3)
        assert result[1].valid
        assert result[1].x_norm == pytest.approx(0.3)

    def test_negative_window_rejected(self, make_samples):
        with pytest.raises(ValueError):
            gap_fill(make_samples([(0.2, 0.2)]), -1)

    def test_empty_input(self):
        assert gap_fill([], 3) == []


class TestNoiseReduction:
    """Tests for sliding window mean/median smoothing."""

    def test_mean_window(self, make_samples):
        samples = make_samples([(0.1, 0.5), (0.2, 0.5), (0.3, 0.5), (0.4, 0.5), (0.5, 0.5)])

        result = reduce_noise(samples, NoiseReduction.MEAN, 3)

        # windows are clipped at the stream boundaries
        assert result[0].x_norm == pytest.approx(0.15)
        assert result[2].x_norm == pytest.approx(0.3)
        assert result[4].x_norm == pytest.approx(0.45)
        assert all(s.y_norm == pytest.approx(0.5) for s in result)

    def test_median_rejects_outlier(self, make_samples):
        samples = make_samples([(0.5, 0.5), (0.5, 0.5), (0.9, 0.1), (0.5, 0.5), (0.5, 0.5)])

        result = reduce_noise(samples, NoiseReduction.MEDIAN, 3)

        assert result[2].x_norm == pytest.approx(0.5)
        assert result[2].y_norm == pytest.approx(0.5)

    def test_invalid_samples_untouched_and_excluded(self, make_samples):
        samples = make_samples([(0.1, 0.1), (0.9, 0.9), (0.3, 0.3)])
        samples[1] = samples[1].with_(valid=False)

        result = reduce_noise(samples, NoiseReduction.MEAN, 3)

        assert result[1] == samples[1]
        assert result[0].x_norm == pytest.approx(0.1)
        assert result[2].x_norm == pytest.approx(0.3)

    def test_uses_unfiltered_neighbours(self, make_samples):
        samples = make_samples([(0.0, 0.0), (0.3, 0.3), (0.6, 0.6)])
        result = reduce_noise(samples, NoiseReduction.MEAN, 3)
        assert result[1].x_norm == pytest.approx(0.3)
        assert result[2].x_norm == pytest.approx(0.45)

    @pytest.mark.parametrize("mode", [NoiseReduction.NONE, NoiseReduction.MEAN])
    def test_disabled_returns_copy(self, make_samples, mode):
        samples = make_samples([(0.1, 0.1), (0.9, 0.9)])
        window = 5 if mode == NoiseReduction.NONE else 1
        result = reduce_noise(samples, mode, window)
        assert result == samples
        assert result is not samples

    def test_constant_region_is_fixed_point(self, make_samples):
        samples = make_samples([(0.4, 0.6)] * 7)
        once = reduce_noise(samples, NoiseReduction.MEDIAN, 5)
        twice = reduce_noise(once, NoiseReduction.MEDIAN, 5)
        assert [(s.x_norm, s.y_norm) for s in twice] == [(s.x_norm, s.y_norm) for s in samples]

    def test_negative_window_rejected(self, make_samples):
        with pytest.raises(ValueError):
            reduce_noise(make_samples([(0.2, 0.2)]), NoiseReduction.MEAN, -3)


class TestPreprocess:
    """Tests for the combined preprocessing pass."""

    def test_gap_fill_then_smoothing(self, make_samples):
        samples = make_samples([(0.2, 0.2), None, (0.4, 0.4), (0.4, 0.4), (0.4, 0.4)])
        settings = DetectionSettings(noise_reduction=NoiseReduction.MEAN, window_size=3, gap_window_size=3)

        result = preprocess(samples, settings)

        assert len(result) == len(samples)
        assert all(s.valid for s in result)
        # the filled sample contributes to its neighbours' windows
        assert result[0].x_norm == pytest.approx(0.25)

    def test_all_invalid_stream(self, make_samples):
        samples = make_samples([None, None, None])
        result = preprocess(samples, DetectionSettings())
        assert not any(s.valid for s in result)
        assert all(math.isnan(s.x_norm) for s in result)

    def test_empty(self):
        assert preprocess([], DetectionSettings()) == []
