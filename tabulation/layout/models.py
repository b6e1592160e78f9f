"""
Data models for row, cell and page-level layout reconstruction.

Rows and cell rows are page-scoped and transient.  Column centers are the
only document-wide data and are plain ascending floats.
"""

from dataclasses import dataclass, field
from typing import List, Tuple

from core.page.models import TextFragment

# One line of the reconstructed table, one string per logical column
GridRow = List[str]


@dataclass
class Row:
    """
    Fragments judged to lie on the same visual line of one page.

    The first fragment placed is the row's anchor; every other fragment
    lies within the row tolerance of the anchor's ``y``.
    """

    fragments: List[TextFragment] = field(default_factory=list)

    @property
    def anchor(self) -> TextFragment:
        return self.fragments[0]

    @property
    def y(self) -> float:
        return self.anchor.y

    @property
    def text(self) -> str:
        ordered = sorted(self.fragments, key=lambda f: f.x)
        return " ".join(f.text for f in ordered)

    def __len__(self) -> int:
        return len(self.fragments)

    def __repr__(self) -> str:
        return f"Row(y={self.y:.1f}, n={len(self.fragments)}, '{self.text[:50]}')"


@dataclass(frozen=True)
class CellRow:
    """
    Left-to-right cells of one row and the anchor x of each cell.

    ``xs[i]`` is the left edge of the first fragment merged into
    ``cells[i]``; both lists always have the same length.
    """

    cells: Tuple[str, ...] = ()
    xs: Tuple[float, ...] = ()

    @property
    def non_empty(self) -> List[Tuple[str, float]]:
        """``(text, x)`` pairs for cells with visible text."""
        return [(c, x) for c, x in zip(self.cells, self.xs) if c]

    def __len__(self) -> int:
        return len(self.cells)


@dataclass(frozen=True)
class CellBox:
    """Geometry of one reconstructed cell, kept for debug overlays."""

    text: str
    x0: float
    x1: float
    y: float
    height: float


@dataclass(frozen=True)
class PageCells:
    """
    Pass-one output for a single page.

    Attributes:
        page_index:  0-based page number.
        cell_rows:   Top-to-bottom cell rows.
        boxes:       Per-row cell geometry (same order as ``cell_rows``).
        page_height: Page height in points (0 when unknown).
    """

    page_index: int
    cell_rows: Tuple[CellRow, ...] = ()
    boxes: Tuple[Tuple[CellBox, ...], ...] = ()
    page_height: float = 0.0

    @property
    def xs(self) -> List[float]:
        """Every cell anchor x on the page, in row order."""
        return [x for row in self.cell_rows for x in row.xs]

    @property
    def cell_count(self) -> int:
        return sum(len(row) for row in self.cell_rows)
