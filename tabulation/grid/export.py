"""
Spreadsheet export for reconstructed grids.

The grid itself is format-agnostic; this module serialises it to an
``.xlsx`` workbook (openpyxl) or a ``.csv`` file, and renders a short
fixed-width preview for logging.
"""

import csv
import logging
import re
from pathlib import Path
from typing import List, Sequence, Union

import openpyxl
from openpyxl.cell.cell import ILLEGAL_CHARACTERS_RE
from openpyxl.utils import get_column_letter

from tabulation.layout.models import GridRow

logger = logging.getLogger(__name__)

DEFAULT_SHEET_NAME = "PDF Data"

# Excel rejects sheet titles longer than this
_MAX_SHEET_TITLE = 31

# Characters Excel forbids in sheet titles
_RE_BAD_TITLE = re.compile(r"[\\/*?:\[\]]")

_MAX_COLUMN_WIDTH = 60


def default_output_path(input_path: Union[str, Path], ext: str = ".xlsx") -> Path:
    """``converted_<stem><ext>`` next to *input_path*."""
    src = Path(input_path)
    return src.with_name(f"converted_{src.stem}{ext}")


def sheet_title(name: str) -> str:
    """
    Worksheet title for *name*: the default when blank, otherwise cut to
    Excel's length limit.

    Raises:
        ValueError: If *name* contains a character Excel forbids.
    """
    if not name:
        return DEFAULT_SHEET_NAME
    bad = _RE_BAD_TITLE.search(name)
    if bad:
        raise ValueError(f"Invalid worksheet name '{name}': '{bad.group()}' is not allowed")
    return name[:_MAX_SHEET_TITLE]


def _cell_text(value: str) -> str:
    """Strip control characters the xlsx XML cannot hold."""
    return ILLEGAL_CHARACTERS_RE.sub("", value)


def export_xlsx(
    grid: Sequence[GridRow],
    output_path: Union[str, Path],
    sheet_name: str = DEFAULT_SHEET_NAME,
) -> Path:
    """
    Write *grid* to a single-sheet workbook.

    Empty strings become empty cells.  Every other value is written as a
    literal string, so text such as ``=5`` never becomes a formula.
    Column widths are sized to the longest value in each column (capped).

    Returns:
        The written path.
    """
    path = Path(output_path)
    path.parent.mkdir(parents=True, exist_ok=True)

    wb = openpyxl.Workbook()
    ws = wb.active
    ws.title = sheet_title(sheet_name)

    for r, row in enumerate(grid, start=1):
        for c, value in enumerate(row, start=1):
            cell = ws.cell(row=r, column=c)
            text = _cell_text(value) if value else ""
            if text:
                cell.value = text
                cell.data_type = "s"

    widths = _column_widths(grid)
    for idx, width in enumerate(widths, start=1):
        ws.column_dimensions[get_column_letter(idx)].width = width

    wb.save(str(path))
    logger.info("Wrote %d rows to %s [%s]", len(grid), path, ws.title)
    return path


def export_csv(grid: Sequence[GridRow], output_path: Union[str, Path]) -> Path:
    """Write *grid* as UTF-8 CSV.  Returns the written path."""
    path = Path(output_path)
    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, "w", newline="", encoding="utf-8") as fh:
        writer = csv.writer(fh)
        writer.writerows(grid)

    logger.info("Wrote %d rows to %s", len(grid), path)
    return path


def export_grid(
    grid: Sequence[GridRow],
    output_path: Union[str, Path],
    sheet_name: str = DEFAULT_SHEET_NAME,
) -> Path:
    """
    Export *grid* based on the output file suffix.

    Raises:
        ValueError: If the suffix is neither ``.xlsx`` nor ``.csv``.
    """
    suffix = Path(output_path).suffix.lower()
    if suffix == ".xlsx":
        return export_xlsx(grid, output_path, sheet_name=sheet_name)
    if suffix == ".csv":
        return export_csv(grid, output_path)
    raise ValueError(
        f"Unsupported output format '{suffix}'. Use .xlsx or .csv."
    )


def _column_widths(grid: Sequence[GridRow]) -> List[float]:
    width = max((len(row) for row in grid), default=0)
    widths = [8.0] * width
    for row in grid:
        for i, value in enumerate(row):
            widths[i] = max(widths[i], min(len(value) + 2, _MAX_COLUMN_WIDTH))
    return widths


def preview_grid(
    grid: Sequence[GridRow],
    max_rows: int = 20,
    max_width: int = 18,
) -> str:
    """
    Fixed-width text rendering of the first *max_rows* rows.

    Cells longer than *max_width* are truncated with ``…``.
    """
    if not grid:
        return "(empty grid)"

    def fit(value: str) -> str:
        if len(value) > max_width:
            return value[: max_width - 1] + "…"
        return value.ljust(max_width)

    lines = [
        f"{i + 1:4d} | " + " | ".join(fit(v) for v in row).rstrip()
        for i, row in enumerate(grid[:max_rows])
    ]
    if len(grid) > max_rows:
        lines.append(f"     ... {len(grid) - max_rows} more rows")
    return "\n".join(lines)
