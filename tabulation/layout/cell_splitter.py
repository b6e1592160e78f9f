"""
Splits a row into cells at wide horizontal gaps.

Fragments closer than the gap threshold belong to the same cell (words
of one phrase); a wider gap marks inter-column whitespace.
"""

from typing import List, Tuple

from .heuristics import DEFAULT_HEURISTICS, LayoutHeuristics
from .models import CellBox, CellRow, Row


def split_cells(
    row: Row,
    heuristics: LayoutHeuristics = DEFAULT_HEURISTICS,
) -> CellRow:
    """Split *row* into left-to-right cells with their anchor x."""
    cells, _ = split_cells_with_boxes(row, heuristics)
    return cells


def split_cells_with_boxes(
    row: Row,
    heuristics: LayoutHeuristics = DEFAULT_HEURISTICS,
) -> Tuple[CellRow, Tuple[CellBox, ...]]:
    """
    Split *row* into cells and also return each cell's geometry.

    The merge state (``text``, ``x``, ``start``, ``end``) is carried
    explicitly through the loop and flushed whenever
    ``fragment.x - end > gap_threshold``.  Within a cell a single space
    is inserted only when the fragments are visually separated
    (``gap > 0``).

    Returns:
        ``(cell_row, boxes)`` — ``boxes[i]`` spans the fragments merged
        into ``cell_row.cells[i]``.
    """
    ordered = sorted(row.fragments, key=lambda f: f.x)
    if not ordered:
        return CellRow(), ()

    boxes: List[CellBox] = []

    first = ordered[0]
    text = first.text
    x = first.x
    end = first.right
    far_right = end
    height = first.height

    for frag in ordered[1:]:
        gap = frag.x - end

        if gap > heuristics.gap_threshold:
            boxes.append(_close_cell(text, x, far_right, row.y, height))
            text = frag.text
            x = frag.x
            far_right = frag.right
            height = frag.height
        else:
            text = f"{text} {frag.text}" if gap > 0 else text + frag.text
            far_right = max(far_right, frag.right)
            height = max(height, frag.height)

        end = frag.right

    boxes.append(_close_cell(text, x, far_right, row.y, height))

    cell_row = CellRow(
        cells=tuple(b.text for b in boxes),
        xs=tuple(b.x0 for b in boxes),
    )
    return cell_row, tuple(boxes)


def _close_cell(text: str, x: float, x1: float, y: float, height: float) -> CellBox:
    return CellBox(text=text.strip(), x0=x, x1=x1, y=y, height=height)
