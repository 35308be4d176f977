# gaze_analysis/cli.py
from __future__ import annotations

import argparse
import logging
from typing import Optional

from .aoi import compute_aoi_metrics, metrics_to_frame
from .config import ConfigBuilder, DetectionSettings
from .domain.dataset import ScreenCalibration
from .engine import FixationDetectionEngine, StimulusRect
from .io import fixations_to_frame, load_aois, read_tracker_file, write_tsv

logger = logging.getLogger(__name__)

_DEFAULTS = DetectionSettings()


def build_arg_parser() -> argparse.ArgumentParser:
    """
    CLI parser for fixation detection on a recorded tracker file.

    Only parsing and option descriptions; the work happens in the library.
    """
    parser = argparse.ArgumentParser(
        description=(
            "Detect fixations (I-DT or I-VT) in a binary tracker sample file and "
            "optionally compute AOI dwell/visit/saccade metrics."
        ),
    )
    parser.add_argument("--input", required=True, help="Binary tracker sample file.")
    parser.add_argument("--output", help="Optional TSV path for the detected fixations.")

    # Screen calibration
    parser.add_argument("--screen-width", type=int, required=True, help="Screen width in px.")
    parser.add_argument("--screen-height", type=int, required=True, help="Screen height in px.")
    parser.add_argument("--screen-width-mm", type=int, default=0, help="Screen width in mm (I-VT).")
    parser.add_argument("--screen-height-mm", type=int, default=0, help="Screen height in mm (I-VT).")

    # Preprocessing
    parser.add_argument("--eye", choices=["left", "right", "average"], default=_DEFAULTS.eye.value)
    parser.add_argument(
        "--noise-reduction",
        choices=["none", "mean", "median"],
        default=_DEFAULTS.noise_reduction.value,
    )
    parser.add_argument("--window-size", type=int, default=_DEFAULTS.window_size)
    parser.add_argument("--gap-window-size", type=int, default=_DEFAULTS.gap_window_size)

    # Detection
    parser.add_argument("--algorithm", choices=["idt", "ivt"], default=_DEFAULTS.algorithm.value)
    parser.add_argument("--dispersion-px", type=float, default=_DEFAULTS.idt_dispersion_threshold_px)
    parser.add_argument("--idt-min-duration-ms", type=int, default=_DEFAULTS.idt_min_duration_ms)
    parser.add_argument("--idt-window-ms", type=int, default=_DEFAULTS.idt_window_ms)
    parser.add_argument("--idt-merge-time-ms", type=int, default=_DEFAULTS.idt_merge_time_ms)
    parser.add_argument(
        "--threshold",
        type=float,
        default=_DEFAULTS.ivt_speed_fix_deg_per_sec,
        help="I-VT velocity threshold in deg/s (default: %(default)s).",
    )
    parser.add_argument("--ivt-min-duration-ms", type=int, default=_DEFAULTS.ivt_min_duration_ms)
    parser.add_argument("--ivt-merge-time-ms", type=int, default=_DEFAULTS.ivt_merge_time_ms)
    parser.add_argument("--ivt-merge-angle-deg", type=float, default=_DEFAULTS.ivt_merge_angle_deg)
    parser.add_argument(
        "--join",
        choices=["none", "by_time", "by_time_and_angle"],
        default=_DEFAULTS.ivt_join_type.value,
    )

    # AOI
    parser.add_argument("--aoi", help="AOI JSON file; enables AOI metrics.")
    parser.add_argument("--aoi-output", help="Optional TSV path for AOI metrics.")
    parser.add_argument(
        "--stimulus-rect",
        type=float,
        nargs=4,
        metavar=("OFF_X", "OFF_Y", "WIDTH", "HEIGHT"),
        help="Stimulus placement on screen in px (default: full screen).",
    )

    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging.")
    return parser


def main(argv: Optional[list] = None) -> int:
    args = build_arg_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    settings = ConfigBuilder.build_from_args(args)
    calibration = ScreenCalibration(
        args.screen_width, args.screen_height, args.screen_width_mm, args.screen_height_mm
    )
    samples = read_tracker_file(args.input, settings.eye)
    engine = FixationDetectionEngine(settings)

    if args.stimulus_rect:
        stimulus = StimulusRect(*args.stimulus_rect)
    else:
        stimulus = StimulusRect(0.0, 0.0, float(args.screen_width), float(args.screen_height))

    series, result = engine.build_series(args.input, samples, calibration, stimulus)

    fix_df = fixations_to_frame(result.fixations)
    if args.output:
        write_tsv(fix_df, args.output)
        logger.info("Wrote %s fixations to %s", len(fix_df), args.output)
    else:
        print(fix_df.to_string(index=False))

    if args.aoi:
        aois = load_aois(args.aoi)
        metrics = compute_aoi_metrics([series], aois, stimulus.width, stimulus.height)
        metrics_df = metrics_to_frame(metrics)
        if args.aoi_output:
            write_tsv(metrics_df, args.aoi_output)
            logger.info("Wrote metrics for %s AOIs to %s", len(metrics_df), args.aoi_output)
        else:
            print(metrics_df.to_string(index=False))

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
