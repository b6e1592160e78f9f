"""
Heuristic thresholds for tabular layout reconstruction.

All values are empirically tuned for point-based PDF coordinate spaces,
not derived from font metrics.  Every stage accepts a
:class:`LayoutHeuristics` so they can be tuned per source document.
"""

from dataclasses import dataclass

# -----------------------------------------------------------------
# Defaults (layout units, i.e. PDF points)
# -----------------------------------------------------------------

# Horizontal gap above which the next fragment starts a new cell
GAP_THRESHOLD: float = 15.0

# Max distance from a column cluster's first x for a value to join it
COLUMN_TOLERANCE: float = 80.0

# Row tolerance = max(median fragment height * factor, floor)
ROW_TOLERANCE_FACTOR: float = 0.55
MIN_ROW_TOLERANCE: float = 4.0

# Median height assumed for a page with no fragments
DEFAULT_LINE_HEIGHT: float = 10.0


@dataclass(frozen=True)
class LayoutHeuristics:
    """
    Tunable thresholds shared by the row, cell and column stages.

    Attributes:
        gap_threshold:        Horizontal gap (> this) that splits cells.
        column_tolerance:     Single-linkage reach of a column cluster.
        row_tolerance_factor: Multiplier on the page's median fragment height.
        min_row_tolerance:    Floor for the vertical row tolerance.
        default_line_height:  Median height used when a page is empty.
    """

    gap_threshold: float = GAP_THRESHOLD
    column_tolerance: float = COLUMN_TOLERANCE
    row_tolerance_factor: float = ROW_TOLERANCE_FACTOR
    min_row_tolerance: float = MIN_ROW_TOLERANCE
    default_line_height: float = DEFAULT_LINE_HEIGHT


DEFAULT_HEURISTICS = LayoutHeuristics()
