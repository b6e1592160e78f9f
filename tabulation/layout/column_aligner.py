"""
Document-wide column alignment.

Every cell anchor x collected across all pages is clustered into a global,
ascending list of column centers; each cell is later snapped to its
nearest center.  The cluster reach is deliberately generous so centred
headers and left-aligned data in the same column merge, at the cost of
occasionally over-merging two genuinely close columns.
"""

from typing import Iterable, List, Sequence

from .heuristics import DEFAULT_HEURISTICS, LayoutHeuristics


def cluster_columns(
    xs: Iterable[float],
    heuristics: LayoutHeuristics = DEFAULT_HEURISTICS,
) -> List[float]:
    """
    Single-linkage 1-D clustering of cell anchor positions.

    Values are walked in ascending order.  A value joins the running
    cluster when it is within ``column_tolerance`` of the cluster's
    *first* value; otherwise the cluster is closed at its mean and a new
    one starts.

    Args:
        xs:         Anchor x of every cell in the document.
        heuristics: Threshold overrides.

    Returns:
        Ascending column centers (empty for empty input).
    """
    ordered = sorted(xs)
    if not ordered:
        return []

    centers: List[float] = []
    cluster_start = ordered[0]
    total = ordered[0]
    count = 1

    for x in ordered[1:]:
        if x - cluster_start <= heuristics.column_tolerance:
            total += x
            count += 1
        else:
            centers.append(total / count)
            cluster_start = x
            total = x
            count = 1

    centers.append(total / count)
    return sorted(centers)


def snap_to_column(x: float, centers: Sequence[float]) -> int:
    """
    Index of the center nearest to *x*.

    There is no distance bound: every x is assigned to some column.
    Equidistant centers resolve to the lowest index.  With no centers
    the answer is column 0.
    """
    best_index = 0
    best_distance = None

    for i, center in enumerate(centers):
        distance = abs(x - center)
        if best_distance is None or distance < best_distance:
            best_index = i
            best_distance = distance

    return best_index
