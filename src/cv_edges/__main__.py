from __future__ import annotations

import argparse
import logging
import sys

from cv_edges.config import load_canny_config
from cv_edges.errors import CannyError
from cv_edges.io.image_io import read_gray, write_gray
from cv_edges.pipelines.canny import run_canny

log = logging.getLogger("cv_edges")


def _ratio(text: str) -> float:
    value = float(text)
    if not 0.0 < value < 1.0:
        raise argparse.ArgumentTypeError(f"ratio must lie in (0, 1), got {value}")
    return value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Canny edge detection on a grayscale image.")
    parser.add_argument("--input", required=True, help="Path to input JPEG/PNG file.")
    parser.add_argument("--output", default="out.jpg", help="Path to output file (default: out.jpg).")
    parser.add_argument(
        "--blur",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Gaussian blur before edge detection (default: on).",
    )
    parser.add_argument("--min", dest="min_ratio", type=_ratio, default=None, help="Low threshold ratio (default: 0.2).")
    parser.add_argument("--max", dest="max_ratio", type=_ratio, default=None, help="High threshold ratio (default: 0.6).")
    parser.add_argument("--kernel-size", type=int, default=None, help="Odd blur kernel length (default: 5).")
    parser.add_argument(
        "--blur-combine",
        choices=["separable", "magnitude"],
        default=None,
        help="How the two blur passes are joined (default: separable).",
    )
    parser.add_argument("--config", default=None, help="Path to yaml config file.")
    parser.add_argument("--figure", default=None, help="Also save a figure of every stage to this path.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log every stage.")
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        cfg = load_canny_config(args.config).override(
            blur=args.blur,
            min_ratio=args.min_ratio,
            max_ratio=args.max_ratio,
            kernel_size=args.kernel_size,
            blur_combine=args.blur_combine,
        )
        cfg.validate()
    except CannyError as exc:
        parser.error(str(exc))

    try:
        image = read_gray(args.input)
        stages = run_canny(image, cfg)
        write_gray(stages.edges, args.output)
        if args.figure:
            from cv_edges.viz.plot import save_stages

            save_stages(stages, args.figure)
            log.info("Saved stage figure: %s", args.figure)
    except (CannyError, FileNotFoundError, RuntimeError) as exc:
        log.error("%s", exc)
        return 1

    log.info("Saved: %s", args.output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
