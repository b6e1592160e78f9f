"""Row, cell and column reconstruction from positioned fragments."""

from .cell_splitter import split_cells, split_cells_with_boxes
from .column_aligner import cluster_columns, snap_to_column
from .heuristics import DEFAULT_HEURISTICS, LayoutHeuristics
from .models import CellBox, CellRow, GridRow, PageCells, Row
from .row_grouper import group_rows, median_height, row_tolerance

__all__ = [
    "LayoutHeuristics",
    "DEFAULT_HEURISTICS",
    "Row",
    "CellRow",
    "CellBox",
    "PageCells",
    "GridRow",
    "group_rows",
    "median_height",
    "row_tolerance",
    "split_cells",
    "split_cells_with_boxes",
    "cluster_columns",
    "snap_to_column",
]
