"""
Groups a page's fragments into visual rows by vertical position.

Tolerance is derived from the *median* fragment height so a single large
title cannot inflate it and collapse neighbouring lines together.
"""

from typing import List, Sequence

import numpy as np

from core.page.models import TextFragment

from .heuristics import DEFAULT_HEURISTICS, LayoutHeuristics
from .models import Row


def median_height(
    fragments: Sequence[TextFragment],
    default: float = DEFAULT_HEURISTICS.default_line_height,
) -> float:
    """Median of all fragment heights, or *default* for an empty page."""
    if not fragments:
        return default
    return float(np.median([f.height for f in fragments]))


def row_tolerance(
    fragments: Sequence[TextFragment],
    heuristics: LayoutHeuristics = DEFAULT_HEURISTICS,
) -> float:
    """Vertical distance from a row's anchor within which fragments join it."""
    med = median_height(fragments, default=heuristics.default_line_height)
    return max(med * heuristics.row_tolerance_factor, heuristics.min_row_tolerance)


def group_rows(
    fragments: Sequence[TextFragment],
    heuristics: LayoutHeuristics = DEFAULT_HEURISTICS,
) -> List[Row]:
    """
    Cluster one page's fragments into rows, top of page first.

    Fragments are walked in descending ``y``.  A fragment joins the
    current row when its ``y`` is within the tolerance of the row's
    anchor (first fragment placed); otherwise it starts a new row.

    Args:
        fragments:  Fragments for one page, in any order.
        heuristics: Threshold overrides.

    Returns:
        Rows ordered by non-increasing anchor ``y``.  Empty input gives
        an empty list.
    """
    if not fragments:
        return []

    tolerance = row_tolerance(fragments, heuristics)
    ordered = sorted(fragments, key=lambda f: -f.y)

    rows: List[Row] = []
    current = Row(fragments=[ordered[0]])

    for frag in ordered[1:]:
        if abs(frag.y - current.y) > tolerance:
            rows.append(current)
            current = Row(fragments=[frag])
        else:
            current.fragments.append(frag)

    rows.append(current)
    return rows
