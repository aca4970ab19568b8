"""
Command line entry point for the Program Report Builder.

Example:
    program-report --title "Coastal Clean-up" --date 2026-10-07 \\
        --description "Volunteers cleared 2km of beach." \\
        --image photos/a.jpg --image photos/b.jpg --focal 2:30,40 \\
        --layout tall --detect --preview
"""
from __future__ import annotations

import argparse
import logging
from datetime import date
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple

from report_toolkit import __version__
from report_toolkit.builder.config import BuilderConfig
from report_toolkit.builder.controller import BuildError, build_report, create_session
from report_toolkit.builder.images import ImageLoadError, load_image_source, normalize_hex_color
from report_toolkit.core.models import LayoutMode
from report_toolkit.utils.logging_utils import configure_logging

logger = logging.getLogger(__name__)


def _parse_date(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected YYYY-MM-DD, got {value!r}")


def _parse_color(value: str) -> str:
    try:
        return normalize_hex_color(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e))


def _parse_focal(value: str) -> Tuple[int, float, float]:
    """Parse ``N:X,Y`` (1-based image number, percentages)."""
    try:
        index, coords = value.split(":", 1)
        x, y = coords.split(",", 1)
        number = int(index)
        point = (float(x), float(y))
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected N:X,Y (e.g. 2:30,40), got {value!r}")
    if number < 1:
        raise argparse.ArgumentTypeError(f"image number must start at 1, got {number}")
    return number, point[0], point[1]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="program-report",
        description="Build a one-page A4 program report with a focal-point aware photo gallery.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    # Report fields
    parser.add_argument("--title", default="", help="Program title")
    parser.add_argument("--date", type=_parse_date, help="Program date (YYYY-MM-DD, default today)")
    parser.add_argument("--description", default="", help="Program description")
    parser.add_argument("--objective", default="", help="Main objective")
    parser.add_argument("--impact", default="", help="Impact statement")
    parser.add_argument("--organisation", default="", help="Organising body (header)")
    parser.add_argument("--location", default="", help="Program location")

    # Gallery
    parser.add_argument(
        "--layout",
        choices=[mode.value for mode in LayoutMode],
        default=LayoutMode.WIDE.value,
        help="Gallery layout mode",
    )
    parser.add_argument(
        "--image",
        dest="images",
        action="append",
        default=[],
        metavar="PATH",
        help="Photo to include (repeatable, in display order)",
    )
    parser.add_argument(
        "--focal",
        action="append",
        type=_parse_focal,
        default=[],
        metavar="N:X,Y",
        help="Manual focal point for image N as percentages (repeatable)",
    )
    parser.add_argument("--theme-color", type=_parse_color, help="Accent colour as #rrggbb (default: from first photo)")
    parser.add_argument("--random-theme", action="store_true", help="Pick a random accent colour")

    # AI
    parser.add_argument("--detect", action="store_true", help="Detect focal points with Gemini")
    parser.add_argument("--enhance", action="store_true", help="Rewrite text fields with Gemini before rendering")
    parser.add_argument("--language", default="English", help="Language for enhanced text")

    # Output
    parser.add_argument("--output-dir", type=Path, default=Path("output"), help="Output directory")
    parser.add_argument("--output-name", default="report", help="Output file stem")
    parser.add_argument("--preview", action="store_true", help="Also write a PNG preview")
    parser.add_argument("--log-file", type=Path, help="Write a detailed log to this file")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def _focal_points(
    parser: argparse.ArgumentParser,
    specs: List[Tuple[int, float, float]],
    image_count: int,
) -> Dict[int, Tuple[float, float]]:
    points: Dict[int, Tuple[float, float]] = {}
    for number, x, y in specs:
        if number > image_count:
            parser.error(f"--focal refers to image {number} but only {image_count} given")
        points[number - 1] = (x, y)
    return points


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(logging.DEBUG if args.verbose else logging.INFO, args.log_file)

    focal_points = _focal_points(parser, args.focal, len(args.images))

    try:
        config = BuilderConfig.from_env(
            output_dir=args.output_dir,
            output_name=args.output_name,
            enhancement_language=args.language,
            export_preview=args.preview,
        )
    except ValueError as e:
        parser.error(str(e))

    detect, enhance = args.detect, args.enhance
    if (detect or enhance) and not config.gemini_api_key:
        logger.warning("No GEMINI_API_KEY/GOOGLE_API_KEY set; skipping AI detection and enhancement")
        detect = enhance = False

    with create_session(config, detect=detect, enhance=enhance) as session:
        session.update_fields(
            title=args.title,
            program_date=args.date,
            description=args.description,
            objective=args.objective,
            impact=args.impact,
            organisation=args.organisation,
            location=args.location,
        )
        session.set_orientation(args.layout)

        for i, path in enumerate(args.images):
            try:
                source = load_image_source(Path(path))
            except ImageLoadError as e:
                logger.error(str(e))
                return 2
            session.add_image(source, focal_point=focal_points.get(i))

        if args.random_theme:
            session.randomize_theme_color()
        elif args.theme_color:
            session.set_theme_color(args.theme_color)

        try:
            result = build_report(session, config, enhance=enhance)
        except BuildError as e:
            logger.error(f"Build failed: {e}")
            return 1

    for warning in result.warnings:
        logger.warning(warning)
    print(f"Report: {result.pdf_path}")
    if result.preview_path is not None:
        print(f"Preview: {result.preview_path}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
