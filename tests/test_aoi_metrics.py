"""
Tests for mapping fixations to a stimulus and AOI analytics.
"""
import math

import pytest

from gaze_analysis.aoi import compute_aoi_metrics, map_fixations_to_stimulus, metrics_to_frame
from gaze_analysis.domain.aoi import AoiElement, AoiShape
from gaze_analysis.domain.dataset import RawGazeSample
from gaze_analysis.domain.events import Fixation, FixationSeries

STIM_W, STIM_H = 100.0, 100.0


@pytest.fixture
def top_left_aoi():
    return AoiElement(AoiShape.RECTANGLE, [(0.0, 0.0), (0.5, 0.5)], name="top-left")


def series(*fixations, result_id="r1"):
    return FixationSeries(result_id=result_id, fixations=list(fixations))


class TestMapping:
    def test_offsets_and_letterbox(self):
        fixations = [
            Fixation(0.0, 0.1, 150.0, 80.0),
            Fixation(0.2, 0.1, 50.0, 80.0),   # left of the stimulus
            Fixation(0.4, 0.1, 250.0, 150.0),
        ]

        local, kept = map_fixations_to_stimulus(fixations, 100.0, 50.0, 200.0, 100.0)

        assert len(local) == len(kept) == 2
        assert (local[0].x_px, local[0].y_px) == (50.0, 30.0)
        assert (local[1].x_px, local[1].y_px) == (150.0, 100.0)
        assert kept[1] is fixations[2]
        assert local[1].start_sec == kept[1].start_sec

    def test_sorted_output(self):
        fixations = [Fixation(0.4, 0.1, 10.0, 10.0), Fixation(0.0, 0.1, 20.0, 20.0)]
        local, kept = map_fixations_to_stimulus(fixations, 0.0, 0.0, 100.0, 100.0)
        assert [f.start_sec for f in local] == [0.0, 0.4]
        assert [f.start_sec for f in kept] == [0.0, 0.4]


class TestAoiMetrics:
    """Tests for dwell, visit and saccade statistics."""

    def test_visits_dwell_and_saccades(self, top_left_aoi):
        s = series(
            Fixation(0.0, 0.2, 10.0, 10.0),
            Fixation(0.3, 0.1, 20.0, 20.0),
            Fixation(0.5, 0.3, 80.0, 80.0),
            Fixation(0.9, 0.4, 30.0, 30.0),
        )

        (m,) = compute_aoi_metrics([s], [top_left_aoi], STIM_W, STIM_H)

        assert m.aoi_name == "top-left"
        assert m.fixation_count == 3
        assert m.total_dwell_time == pytest.approx(0.7)
        assert m.average_fixation_duration == pytest.approx(0.7 / 3)
        assert m.visit_count == 2
        assert m.revisit_count == 1
        assert m.time_to_first_fixation == pytest.approx(0.0)
        assert m.first_fixation_duration == pytest.approx(0.2)
        assert m.fixations_before_first == 0
        assert m.saccade_count == 1
        assert m.average_saccade_amplitude_px == pytest.approx(math.hypot(10.0, 10.0))
        assert m.scanpath_length_px == pytest.approx(math.hypot(10.0, 10.0))
        assert m.area_ratio == pytest.approx(0.25)

    def test_fixations_before_first_entry(self, top_left_aoi):
        s = series(
            Fixation(0.0, 0.1, 90.0, 90.0),
            Fixation(0.2, 0.1, 80.0, 90.0),
            Fixation(0.4, 0.15, 10.0, 10.0),
        )

        (m,) = compute_aoi_metrics([s], [top_left_aoi], STIM_W, STIM_H)

        assert m.time_to_first_fixation == pytest.approx(0.4)
        assert m.first_fixation_duration == pytest.approx(0.15)
        assert m.fixations_before_first == 2
        assert m.visit_count == 1
        assert m.revisit_count == 0
        assert m.saccade_count == 0

    def test_earliest_entry_across_series(self, top_left_aoi):
        late = series(Fixation(0.0, 0.1, 90.0, 90.0), Fixation(0.6, 0.2, 10.0, 10.0), result_id="a")
        early = series(Fixation(0.3, 0.1, 10.0, 10.0), result_id="b")

        (m,) = compute_aoi_metrics([late, early], [top_left_aoi], STIM_W, STIM_H)

        assert m.time_to_first_fixation == pytest.approx(0.3)
        assert m.fixations_before_first == 0
        assert m.fixation_count == 2
        assert m.visit_count == 2

    def test_never_fixated(self, top_left_aoi):
        s = series(Fixation(0.0, 0.1, 90.0, 90.0))

        (m,) = compute_aoi_metrics([s], [top_left_aoi], STIM_W, STIM_H)

        assert m.fixation_count == 0
        assert m.visit_count == 0
        assert m.revisit_count == 0
        assert m.time_to_first_fixation is None
        assert m.average_fixation_duration == 0.0
        assert m.average_saccade_amplitude_deg is None

    def test_full_stimulus_rectangle(self):
        aoi = AoiElement(AoiShape.RECTANGLE, [(0.0, 0.0), (1.0, 1.0)])
        s = series(
            Fixation(0.0, 0.1, 0.0, 0.0),
            Fixation(0.2, 0.1, 50.0, 50.0),
            Fixation(0.4, 0.1, STIM_W, STIM_H),
        )

        (m,) = compute_aoi_metrics([s], [aoi], STIM_W, STIM_H)

        assert m.area_ratio == pytest.approx(1.0)
        assert m.fixation_count == 3
        assert m.visit_count == 1
        assert m.saccade_count == 2

    def test_one_result_per_aoi_in_order(self, top_left_aoi):
        other = AoiElement(AoiShape.ELLIPSE, [(0.5, 0.5), (1.0, 1.0)], name="bottom-right")
        results = compute_aoi_metrics([series()], [other, top_left_aoi], STIM_W, STIM_H)
        assert [r.aoi_name for r in results] == ["bottom-right", "top-left"]

    def test_degree_amplitude_requires_screen_pairing(self, top_left_aoi, calibration):
        fixations = [Fixation(0.0, 0.1, 10.0, 10.0), Fixation(0.12, 0.1, 30.0, 10.0)]
        samples = [RawGazeSample(i * 0.02, 0.5, 0.5, 0.6) for i in range(12)]

        without = series(*fixations)
        with_pairing = FixationSeries(
            result_id="r1",
            fixations=fixations,
            screen_fixations=[Fixation(f.start_sec, f.dur_sec, f.x_px + 100, f.y_px) for f in fixations],
            samples=samples,
            calibration=calibration,
        )

        (m_without,) = compute_aoi_metrics([without], [top_left_aoi], STIM_W, STIM_H)
        (m_with,) = compute_aoi_metrics([with_pairing], [top_left_aoi], STIM_W, STIM_H)

        assert m_without.saccade_count == 1
        assert m_without.average_saccade_amplitude_deg is None
        # 20 px * 520/1920 mm at 600 mm
        expected = math.degrees(math.atan2(20.0 * 520.0 / 1920.0, 600.0))
        assert m_with.average_saccade_amplitude_deg == pytest.approx(expected)

    def test_degree_amplitude_requires_complete_calibration(self, top_left_aoi, pixel_only_calibration):
        fixations = [Fixation(0.0, 0.1, 10.0, 10.0), Fixation(0.12, 0.1, 30.0, 10.0)]
        s = FixationSeries(
            result_id="r1",
            fixations=fixations,
            screen_fixations=list(fixations),
            samples=[RawGazeSample(i * 0.02, 0.5, 0.5, 0.6) for i in range(12)],
            calibration=pixel_only_calibration,
        )
        (m,) = compute_aoi_metrics([s], [top_left_aoi], STIM_W, STIM_H)
        assert m.average_saccade_amplitude_deg is None

    def test_metrics_frame(self, top_left_aoi):
        results = compute_aoi_metrics([series(Fixation(0.0, 0.1, 10.0, 10.0))], [top_left_aoi], STIM_W, STIM_H)

        frame = metrics_to_frame(results)

        assert len(frame) == 1
        assert frame.loc[0, "aoi_name"] == "top-left"
        assert frame.loc[0, "area_ratio_pct"] == pytest.approx(25.0)
        assert "time_to_first_fixation" in frame.columns
