"""
Assembles the final rectangular grid from per-page cell rows and the
global column centers.

This stage has no error conditions: malformed geometry degrades into
misaligned columns, never into an exception.
"""

import re
from typing import Callable, List, Optional, Sequence

from tabulation.layout.column_aligner import snap_to_column
from tabulation.layout.models import CellRow, GridRow, PageCells

_RE_DIGIT = re.compile(r"\d")


def is_heading(cell_row: CellRow) -> bool:
    """A row whose only non-empty cell contains no digit."""
    non_empty = cell_row.non_empty
    return len(non_empty) == 1 and not _RE_DIGIT.search(non_empty[0][0])


def trim_trailing(row: GridRow) -> GridRow:
    """Drop empty columns from the right, always keeping column 0."""
    end = len(row)
    while end > 1 and not row[end - 1]:
        end -= 1
    return row[:end] if row else [""]


def build_row(cell_row: CellRow, centers: Sequence[float]) -> GridRow:
    """
    Place one row's cells into column buckets.

    Headings bypass snapping and land in column 0 regardless of their
    true x.  Otherwise each non-empty cell is snapped to its nearest
    center; cells that land on the same column are space-joined.
    """
    non_empty = cell_row.non_empty

    if is_heading(cell_row):
        return [non_empty[0][0]]

    buckets = [""] * max(1, len(centers))
    for text, x in non_empty:
        col = snap_to_column(x, centers)
        buckets[col] = f"{buckets[col]} {text}" if buckets[col] else text

    return trim_trailing(buckets)


def build_page_rows(
    cell_rows: Sequence[CellRow],
    centers: Sequence[float],
) -> List[GridRow]:
    """Grid rows for one page; fully blank rows are skipped."""
    return [build_row(cr, centers) for cr in cell_rows if cr.non_empty]


def pad_grid(grid: Sequence[GridRow]) -> List[GridRow]:
    """
    Right-pad every row with empty strings to the widest row.

    Returns new lists; padding an already rectangular grid is a no-op.
    """
    width = max((len(row) for row in grid), default=0)
    return [list(row) + [""] * (width - len(row)) for row in grid]


def build_grid(
    pages: Sequence[PageCells],
    centers: Sequence[float],
    on_page: Optional[Callable[[int, PageCells], None]] = None,
) -> List[GridRow]:
    """
    Build the whole document's grid.

    Page rows are emitted in order with one blank separator row between
    consecutive pages (none after the last).  A document with no content
    rows at all yields an empty grid.

    Args:
        pages:   Pass-one output, one entry per page in reading order.
        centers: Ascending global column centers.
        on_page: Observer called with ``(position, page)`` before each
                 page is assembled.

    Returns:
        Rectangular list of rows.
    """
    grid: List[GridRow] = []
    has_content = False

    for i, page in enumerate(pages):
        if on_page is not None:
            on_page(i, page)
        page_rows = build_page_rows(page.cell_rows, centers)
        has_content = has_content or bool(page_rows)
        grid.extend(page_rows)
        if i < len(pages) - 1:
            grid.append([""])

    if not has_content:
        return []

    return pad_grid(grid)
