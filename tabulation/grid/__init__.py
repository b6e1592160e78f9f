"""Grid assembly and spreadsheet export."""

from .builder import build_grid, build_page_rows, build_row, is_heading, pad_grid
from .export import (
    DEFAULT_SHEET_NAME,
    default_output_path,
    export_csv,
    export_grid,
    export_xlsx,
    preview_grid,
    sheet_title,
)

__all__ = [
    "build_grid",
    "build_page_rows",
    "build_row",
    "is_heading",
    "pad_grid",
    "DEFAULT_SHEET_NAME",
    "default_output_path",
    "export_csv",
    "export_grid",
    "export_xlsx",
    "preview_grid",
    "sheet_title",
]
