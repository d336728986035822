"""
Command line front end: select photos, optionally rotate, generate a PDF.

Examples:
  pics2pdf a.jpg b.jpg c.jpg
  pics2pdf *.jpg --grid 2x2 --landscape -o contact-sheet.pdf
  pics2pdf scan1.png scan2.png --rotate 2:90 --rotate 1:180 --page letter
"""

from __future__ import annotations

import argparse
import logging
import math
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from pics2pdf import __version__
from pics2pdf.builder import Alignment, DocumentConfig, PhotoSession, Resample
from pics2pdf.builder.config import DEFAULT_DPI, DEFAULT_JPEG_QUALITY, DEFAULT_OUTPUT_FILENAME
from pics2pdf.core.errors import DecodeError, EmptyInput, GenerationCancelled, Pics2PdfError
from pics2pdf.core.models import PageGeometry
from pics2pdf.utils.logging_utils import configure_cli_logging

logger = logging.getLogger("pics2pdf.cli")

PAGE_SIZES = {
    "a4": PageGeometry.a4,
    "letter": PageGeometry.letter,
}


def _parse_pair(value: str, separator: str, what: str) -> Tuple[str, str]:
    parts = value.lower().split(separator)
    if len(parts) != 2 or not all(parts):
        raise argparse.ArgumentTypeError(f"{what} must look like A{separator}B: {value!r}")
    return parts[0], parts[1]


def parse_grid(value: str) -> Tuple[int, int]:
    """'2x3' -> (columns=2, rows=3)."""
    columns, rows = _parse_pair(value, "x", "grid")
    try:
        grid = int(columns), int(rows)
    except ValueError:
        raise argparse.ArgumentTypeError(f"grid must be COLSxROWS: {value!r}") from None
    if min(grid) < 1:
        raise argparse.ArgumentTypeError(f"grid needs at least one column and row: {value!r}")
    return grid


def parse_page_size(value: str) -> Tuple[float, float]:
    """'148x210' -> (148.0, 210.0) in mm."""
    width, height = _parse_pair(value, "x", "page size")
    try:
        size = float(width), float(height)
    except ValueError:
        raise argparse.ArgumentTypeError(f"page size must be WIDTHxHEIGHT in mm: {value!r}") from None
    if not all(math.isfinite(side) and side > 0 for side in size):
        raise argparse.ArgumentTypeError(f"page size must be positive: {value!r}")
    return size


def parse_rotation(value: str) -> Tuple[int, int]:
    """'2:90' -> (image 2, 90 degrees clockwise)."""
    index, degrees = _parse_pair(value, ":", "rotation")
    try:
        rotation = int(index), int(degrees)
    except ValueError:
        raise argparse.ArgumentTypeError(f"rotation must be INDEX:DEGREES: {value!r}") from None
    if rotation[1] % 90 != 0:
        raise argparse.ArgumentTypeError(f"rotation must be a multiple of 90 degrees: {value!r}")
    return rotation


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pics2pdf",
        description="Combine photos into a single PDF, one per page or in a grid.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__.split("Examples:", 1)[1] if __doc__ else None,
    )
    parser.add_argument("images", nargs="*", type=Path, help="Image files, in document order")
    parser.add_argument(
        "-o", "--output",
        type=Path,
        default=Path(DEFAULT_OUTPUT_FILENAME),
        help=f"Output PDF path (default: {DEFAULT_OUTPUT_FILENAME})",
    )
    page = parser.add_mutually_exclusive_group()
    page.add_argument("--page", choices=sorted(PAGE_SIZES), default="a4", help="Page size (default: a4)")
    page.add_argument("--page-size", type=parse_page_size, metavar="WxH", help="Custom page size in mm")
    parser.add_argument("--landscape", action="store_true", help="Landscape orientation")
    parser.add_argument(
        "--grid",
        type=parse_grid,
        default=(1, 1),
        metavar="COLSxROWS",
        help="Images per page as a grid (default: 1x1)",
    )
    parser.add_argument(
        "--rotate",
        type=parse_rotation,
        action="append",
        default=[],
        metavar="INDEX:DEGREES",
        help="Rotate image INDEX (1-based) clockwise; repeatable",
    )
    parser.add_argument("--dpi", type=int, default=DEFAULT_DPI, help=f"Output resolution (default: {DEFAULT_DPI})")
    parser.add_argument(
        "--align",
        choices=[a.value for a in Alignment],
        default=Alignment.CENTER.value,
        help="Placement of each photo inside its cell",
    )
    parser.add_argument("--padding", type=float, default=0.0, help="Cell padding in mm (default: 0)")
    parser.add_argument("--format", choices=["JPEG", "PNG"], default="JPEG", help="Embedded image encoding")
    parser.add_argument(
        "--quality",
        type=int,
        default=DEFAULT_JPEG_QUALITY,
        help=f"JPEG quality 1-95 (default: {DEFAULT_JPEG_QUALITY})",
    )
    parser.add_argument(
        "--resample",
        choices=[r.value for r in Resample],
        default=Resample.LANCZOS.value,
        help="Resampling filter (default: lanczos)",
    )
    parser.add_argument("--ignore-exif", action="store_true", help="Ignore camera EXIF orientation")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def _geometry_from_args(args: argparse.Namespace) -> PageGeometry:
    columns, rows = args.grid
    if args.page_size:
        width, height = args.page_size
        geometry = PageGeometry(width, height, columns, rows)
        return geometry.landscape() if args.landscape else geometry
    return PAGE_SIZES[args.page](columns, rows, landscape=args.landscape)


def _config_from_args(args: argparse.Namespace) -> DocumentConfig:
    return DocumentConfig(
        dpi=args.dpi,
        output_filename=args.output.name,
        alignment=Alignment(args.align),
        cell_padding_mm=args.padding,
        image_format=args.format,
        jpeg_quality=args.quality,
        resample=Resample(args.resample),
        honor_exif_orientation=not args.ignore_exif,
    )


def _apply_rotations(session: PhotoSession, rotations: List[Tuple[int, int]]) -> None:
    for index, degrees in rotations:
        for _ in range((degrees // 90) % 4):
            session.rotate(index - 1)


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_cli_logging(args.verbose)

    try:
        geometry = _geometry_from_args(args)
        session = PhotoSession(_config_from_args(args))
        session.append_files(args.images)
        _apply_rotations(session, args.rotate)
        result = session.generate(geometry, args.output)
    except EmptyInput as e:
        logger.warning(str(e))
        return 1
    except DecodeError as e:
        logger.error(str(e))
        return 2
    except GenerationCancelled as e:
        logger.warning(str(e))
        return 130
    except (Pics2PdfError, OSError) as e:
        logger.error(f"Error: {e}")
        return 2

    print(result.output_path)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
