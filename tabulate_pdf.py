#!/usr/bin/env python3
"""
PDF Tabulation — CLI entry point.

Reconstructs row/column structure from a PDF's text layer and exports it
as an ``.xlsx`` workbook (or ``.csv``).

Usage::

    python tabulate_pdf.py report.pdf
    python tabulate_pdf.py report.pdf out.csv --pages 2-5
    python tabulate_pdf.py scan.pdf --gap-threshold 10 --column-tolerance 60
    python tabulate_pdf.py report.pdf --preview --debug-layout debug/report/ -v 2

Verbosity levels::

    -v 0   Quiet — warnings and errors only.
    -v 1   Normal — pass summaries and progress bars (default).
    -v 2   Debug — per-page geometry detail.
"""

import argparse
import logging
import sys
from pathlib import Path

from core.errors import SourceUnavailableError
from tabulation.grid.export import (
    DEFAULT_SHEET_NAME,
    default_output_path,
    preview_grid,
    sheet_title,
)
from tabulation.layout.heuristics import LayoutHeuristics
from tabulation.pipeline import TabulationConfig, TabulationPipeline

logger = logging.getLogger("tabulation")

# Mapping from --verbose integer to logging level
_VERBOSITY_MAP = {
    0: logging.WARNING,
    1: logging.INFO,
    2: logging.DEBUG,
}


# ------------------------------------------------------------------
# Argument parsing
# ------------------------------------------------------------------


def _parse_page_range(value: str):
    """
    Parse a 1-based page range string (e.g. ``"3-10"``) into a
    0-based ``(start, end)`` tuple.

    Raises:
        argparse.ArgumentTypeError: On malformed input.
    """
    parts = value.split("-")
    try:
        start = int(parts[0])
        end = int(parts[1]) if len(parts) > 1 else start
    except (ValueError, IndexError):
        raise argparse.ArgumentTypeError(
            f"Invalid page range '{value}'. Use N or N-M (1-based)."
        )
    if start < 1 or end < start:
        raise argparse.ArgumentTypeError(
            f"Invalid page range '{value}'. Start must be >= 1 and end >= start."
        )
    return (start - 1, end - 1)


def _parse_sheet_name(value: str) -> str:
    """
    Validate a worksheet name up front so a bad name fails before the
    conversion runs.

    Raises:
        argparse.ArgumentTypeError: If Excel would reject the name.
    """
    try:
        return sheet_title(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e))


def _build_parser() -> argparse.ArgumentParser:
    """Construct the argument parser with all pipeline options."""
    defaults = LayoutHeuristics()
    p = argparse.ArgumentParser(
        description="Rebuild table rows and columns from a PDF and export a spreadsheet.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "examples:\n"
            "  python tabulate_pdf.py report.pdf\n"
            "  python tabulate_pdf.py report.pdf out.csv --pages 2-5\n"
            "  python tabulate_pdf.py report.pdf --preview -v 2\n"
        ),
    )

    # -- Positional --------------------------------------------------------
    p.add_argument("input", help="Path to the input PDF file")
    p.add_argument(
        "output",
        nargs="?",
        default=None,
        help="Output spreadsheet (.xlsx or .csv). "
        "Default: converted_<name>.xlsx next to the input.",
    )

    # -- Pages -------------------------------------------------------------
    p.add_argument(
        "--pages",
        type=_parse_page_range,
        default=None,
        metavar="N-M",
        help="Page range, 1-based inclusive (e.g. 1-10). Default: all.",
    )

    # -- Heuristics --------------------------------------------------------
    tuning = p.add_argument_group("heuristics")
    tuning.add_argument(
        "--gap-threshold",
        type=float,
        default=defaults.gap_threshold,
        metavar="FLOAT",
        help=f"Horizontal gap that splits cells (default: {defaults.gap_threshold:g})",
    )
    tuning.add_argument(
        "--column-tolerance",
        type=float,
        default=defaults.column_tolerance,
        metavar="FLOAT",
        help=f"Column cluster reach (default: {defaults.column_tolerance:g})",
    )
    tuning.add_argument(
        "--row-factor",
        type=float,
        default=defaults.row_tolerance_factor,
        metavar="FLOAT",
        help="Row tolerance as a fraction of median text height "
        f"(default: {defaults.row_tolerance_factor:g})",
    )
    tuning.add_argument(
        "--min-row-tolerance",
        type=float,
        default=defaults.min_row_tolerance,
        metavar="FLOAT",
        help=f"Minimum row tolerance (default: {defaults.min_row_tolerance:g})",
    )

    # -- Output ------------------------------------------------------------
    output = p.add_argument_group("output")
    output.add_argument(
        "--sheet",
        type=_parse_sheet_name,
        default=DEFAULT_SHEET_NAME,
        metavar="NAME",
        help=f"Worksheet name for .xlsx output (default: {DEFAULT_SHEET_NAME})",
    )
    output.add_argument(
        "--no-export",
        action="store_true",
        help="Do not write a spreadsheet (useful with --preview)",
    )

    # -- Debug / output control --------------------------------------------
    debug = p.add_argument_group("debug & output")
    debug.add_argument(
        "--preview",
        action="store_true",
        help="Log a text preview of the first rows of the grid",
    )
    debug.add_argument(
        "--debug-layout",
        default=None,
        metavar="DIR",
        help="Save colour-coded cell overlay images to DIR",
    )
    debug.add_argument(
        "-v",
        "--verbose",
        type=int,
        choices=[0, 1, 2],
        default=1,
        help="Verbosity: 0=quiet, 1=normal (default), 2=debug",
    )
    debug.add_argument(
        "--no-progress",
        action="store_true",
        help="Disable tqdm progress bars",
    )

    return p


# ------------------------------------------------------------------
# Logging setup
# ------------------------------------------------------------------


def _configure_logging(verbosity: int) -> None:
    """
    Set up the root ``tabulation`` logger.

    At verbosity 0 (WARNING), uses a minimal format.  At DEBUG, includes
    timestamps and the module name.
    """
    level = _VERBOSITY_MAP.get(verbosity, logging.INFO)

    if level <= logging.DEBUG:
        fmt = "%(asctime)s %(name)s %(levelname)s: %(message)s"
        datefmt = "%H:%M:%S"
    elif level <= logging.INFO:
        fmt = "%(message)s"
        datefmt = None
    else:
        fmt = "%(levelname)s: %(message)s"
        datefmt = None

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(fmt, datefmt=datefmt))

    root = logging.getLogger("tabulation")
    root.setLevel(level)
    root.handlers.clear()
    root.addHandler(handler)

    # Suppress noisy third-party loggers regardless of verbosity
    for name in ("PIL", "openpyxl"):
        logging.getLogger(name).setLevel(logging.WARNING)


# ------------------------------------------------------------------
# Entry point
# ------------------------------------------------------------------


def main():
    """Parse arguments, configure logging, and run the pipeline."""
    parser = _build_parser()
    args = parser.parse_args()

    _configure_logging(args.verbose)
    disable_tqdm = args.no_progress or args.verbose == 0

    # Validate input file
    input_path = Path(args.input)
    if not input_path.exists():
        parser.error(f"Input file not found: {input_path}")
    if input_path.suffix.lower() != ".pdf":
        parser.error(f"Input must be a PDF file: {input_path}")

    output_path = None
    if not args.no_export:
        output_path = Path(args.output) if args.output else default_output_path(input_path)
        if output_path.suffix.lower() not in (".xlsx", ".csv"):
            parser.error(f"Output must be .xlsx or .csv: {output_path}")

    config = TabulationConfig(
        heuristics=LayoutHeuristics(
            gap_threshold=args.gap_threshold,
            column_tolerance=args.column_tolerance,
            row_tolerance_factor=args.row_factor,
            min_row_tolerance=args.min_row_tolerance,
        ),
        page_range=args.pages,
        sheet_name=args.sheet,
        debug_layout_dir=args.debug_layout,
        disable_tqdm=disable_tqdm,
    )

    # Log run header
    logger.info("PDF Tabulation")
    logger.info("  Input:  %s", input_path)
    if output_path:
        logger.info("  Output: %s", output_path)
    if config.page_range:
        s, e = config.page_range
        logger.info("  Pages:  %d–%d", s + 1, e + 1)
    logger.info(
        "  Gap:    %g  Column reach: %g",
        config.heuristics.gap_threshold,
        config.heuristics.column_tolerance,
    )

    pipeline = TabulationPipeline(config)
    try:
        result = pipeline.convert(
            str(input_path), str(output_path) if output_path else None
        )
    except SourceUnavailableError as e:
        logger.error("%s", e)
        sys.exit(1)

    if args.preview:
        logger.info("\n%s", preview_grid(result.grid))

    if not result.grid:
        logger.warning("No text was found to tabulate")


if __name__ == "__main__":
    main()
