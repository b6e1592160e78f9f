"""
Tabulation pipeline orchestrator: PDF → fragments → rows → cells → grid.

Runs as two explicit passes over the document:

1. **Geometry pass** — for every page, extract positioned fragments,
   group them into rows and split each row into cells.  Returns the
   per-page cell rows together with every cell anchor x in the document.
2. **Grid pass** — cluster the collected anchors into global column
   centers, then snap every page's cells onto them and pad the result
   into a rectangular grid.

Column centers are computed from the *whole* document before any row is
emitted, so a page's column assignment can depend on geometry from other
pages.  This keeps multi-page tables aligned to one set of columns.

Usage::

    from tabulation.pipeline import TabulationPipeline, TabulationConfig

    pipeline = TabulationPipeline(TabulationConfig())
    result = pipeline.convert("input.pdf", "converted_input.xlsx")
    print(result.summary())
"""

import logging
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, List, Optional, Sequence, Tuple

from tqdm import tqdm

from core.page.models import filter_fragments
from tabulation.grid.builder import build_grid
from tabulation.grid.export import DEFAULT_SHEET_NAME, export_grid
from tabulation.layout.cell_splitter import split_cells_with_boxes
from tabulation.layout.column_aligner import cluster_columns
from tabulation.layout.heuristics import DEFAULT_HEURISTICS, LayoutHeuristics
from tabulation.layout.models import GridRow, PageCells
from tabulation.layout.row_grouper import group_rows
from tabulation.utils.pdf_adapter import FragmentSource, PDFAdapter

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[str], None]


# ------------------------------------------------------------------
# Configuration
# ------------------------------------------------------------------


@dataclass
class TabulationConfig:
    """
    All tuneable parameters for the tabulation pipeline.

    Attributes:
        heuristics:       Row/cell/column thresholds.
        page_range:       ``(start, end)`` 0-based inclusive, or ``None`` for all.
        sheet_name:       Worksheet title for ``.xlsx`` export.
        render_scale:     Resolution multiplier for debug page renders.
        debug_layout_dir: Save colour-coded cell overlays here (``None`` to skip).
        disable_tqdm:     Suppress progress bars.
    """

    heuristics: LayoutHeuristics = field(default_factory=LayoutHeuristics)
    page_range: Optional[Tuple[int, int]] = None
    sheet_name: str = DEFAULT_SHEET_NAME
    render_scale: float = 1.5
    debug_layout_dir: Optional[str] = None
    disable_tqdm: bool = False


# ------------------------------------------------------------------
# Result
# ------------------------------------------------------------------


@dataclass
class TabulationResult:
    """
    Summary returned after a conversion completes.

    Carries the grid itself plus counts and per-pass timing so the
    caller can report or log the run.
    """

    grid: List[GridRow] = field(default_factory=list)
    column_centers: List[float] = field(default_factory=list)
    pages: List[PageCells] = field(default_factory=list, repr=False)
    output_path: str = ""
    total_pages: int = 0
    pages_processed: int = 0
    row_count: int = 0
    cell_count: int = 0
    elapsed_seconds: float = 0.0

    time_geometry: float = 0.0
    time_grid: float = 0.0
    time_export: float = 0.0

    @property
    def column_count(self) -> int:
        return len(self.grid[0]) if self.grid else 0

    def summary(self) -> str:
        """Format a human-readable summary of the conversion run."""
        return (
            f"{'=' * 60}\n"
            f"CONVERSION COMPLETE\n"
            f"{'=' * 60}\n"
            f"  Output:       {self.output_path or '(not written)'}\n"
            f"  Pages:        {self.pages_processed} / {self.total_pages}\n"
            f"  Cells:        {self.cell_count} in {self.row_count} rows\n"
            f"  Columns:      {len(self.column_centers)} centers, "
            f"{self.column_count} in grid\n"
            f"  Grid:         {len(self.grid)} x {self.column_count}\n"
            f"\n"
            f"  Geometry pass: {self.time_geometry:.2f}s\n"
            f"  Grid pass:     {self.time_grid:.3f}s\n"
            f"  Export:        {self.time_export:.2f}s\n"
            f"  Total:         {self.elapsed_seconds:.2f}s\n"
            f"{'=' * 60}"
        )


# ------------------------------------------------------------------
# Pass functions
# ------------------------------------------------------------------


def collect_page_cells(
    source: FragmentSource,
    page_indices: Sequence[int],
    heuristics: LayoutHeuristics = DEFAULT_HEURISTICS,
    progress: Optional[ProgressCallback] = None,
    disable_tqdm: bool = True,
) -> Tuple[List[PageCells], List[float]]:
    """
    Pass one: per-page cell rows and every cell anchor x.

    Any error raised by *source* propagates unchanged and aborts the
    pass; no partial result is returned.

    Args:
        source:       Fragment feed (e.g. an open :class:`PDFAdapter`).
        page_indices: 0-based pages to process, in output order.
        heuristics:   Threshold overrides.
        progress:     Called with a status string once per page.
        disable_tqdm: Suppress the progress bar.

    Returns:
        ``(pages, xs)`` — one :class:`PageCells` per page index, and the
        document-wide list of anchor x values.
    """
    pages: List[PageCells] = []
    xs: List[float] = []
    total = source.page_count

    pbar = tqdm(page_indices, desc="Reading pages", unit="page", disable=disable_tqdm)
    for idx in pbar:
        if progress is not None:
            progress(f"Reading page {idx + 1} of {total}...")

        fragments = filter_fragments(source.fragments(idx))
        rows = group_rows(fragments, heuristics)

        cell_rows = []
        boxes = []
        for row in rows:
            cell_row, row_boxes = split_cells_with_boxes(row, heuristics)
            cell_rows.append(cell_row)
            boxes.append(row_boxes)

        page = PageCells(
            page_index=idx,
            cell_rows=tuple(cell_rows),
            boxes=tuple(boxes),
            page_height=source.page_height(idx),
        )
        pages.append(page)
        xs.extend(page.xs)

        logger.debug(
            "Page %d: %d fragments, %d rows, %d cells",
            idx + 1,
            len(fragments),
            len(rows),
            page.cell_count,
        )

    return pages, xs


def assemble_grid(
    pages: Sequence[PageCells],
    xs: Sequence[float],
    heuristics: LayoutHeuristics = DEFAULT_HEURISTICS,
    progress: Optional[ProgressCallback] = None,
    total_pages: Optional[int] = None,
) -> Tuple[List[GridRow], List[float]]:
    """
    Pass two: cluster *xs* into column centers and build the grid.

    Returns:
        ``(grid, centers)``.
    """
    centers = cluster_columns(xs, heuristics)
    total = total_pages if total_pages is not None else len(pages)

    def on_page(_position: int, page: PageCells) -> None:
        if progress is not None:
            progress(f"Building rows for page {page.page_index + 1} of {total}...")

    grid = build_grid(pages, centers, on_page=on_page)
    return grid, centers


def tabulate(
    source: FragmentSource,
    heuristics: LayoutHeuristics = DEFAULT_HEURISTICS,
    progress: Optional[ProgressCallback] = None,
) -> List[GridRow]:
    """Convert every page of *source* into a rectangular grid."""
    pages, xs = collect_page_cells(
        source, range(source.page_count), heuristics, progress=progress
    )
    grid, _ = assemble_grid(
        pages, xs, heuristics, progress=progress, total_pages=source.page_count
    )
    return grid


# ------------------------------------------------------------------
# Pipeline
# ------------------------------------------------------------------


class TabulationPipeline:
    """
    End-to-end PDF → spreadsheet grid conversion.

    Stateless between runs apart from its configuration; a pipeline
    instance can convert any number of documents.
    """

    def __init__(
        self,
        config: Optional[TabulationConfig] = None,
        progress: Optional[ProgressCallback] = None,
    ):
        self.config = config or TabulationConfig()
        self.progress = progress

    def _page_indices(self, page_count: int) -> range:
        cfg = self.config
        start = cfg.page_range[0] if cfg.page_range else 0
        end = cfg.page_range[1] if cfg.page_range else page_count - 1
        end = min(end, page_count - 1)
        return range(start, end + 1)

    # ------------------------------------------------------------------
    # Main entry points
    # ------------------------------------------------------------------

    def convert(
        self, pdf_path: str, output_path: Optional[str] = None
    ) -> TabulationResult:
        """
        Convert a PDF and optionally export the grid.

        Args:
            pdf_path:    Path to the input PDF.
            output_path: Destination ``.xlsx`` / ``.csv`` (``None`` to skip export).

        Returns:
            :class:`TabulationResult` with the grid and run metrics.

        Raises:
            SourceUnavailableError: If the PDF or one of its pages cannot
                be read.  No partial grid is produced.
        """
        t_total = time.perf_counter()
        cfg = self.config

        with PDFAdapter(pdf_path) as pdf:
            result = self._run(pdf)

            if cfg.debug_layout_dir:
                _save_debug_layouts(
                    pdf,
                    result.pages,
                    result.column_centers,
                    cfg.render_scale,
                    cfg.debug_layout_dir,
                )

        if output_path:
            t0 = time.perf_counter()
            written = export_grid(result.grid, output_path, sheet_name=cfg.sheet_name)
            result.output_path = str(written)
            result.time_export = time.perf_counter() - t0

        result.elapsed_seconds = time.perf_counter() - t_total
        logger.info("\n%s", result.summary())
        return result

    def convert_source(self, source: FragmentSource) -> TabulationResult:
        """Convert an already-open fragment source (no export)."""
        t_total = time.perf_counter()
        result = self._run(source)
        result.elapsed_seconds = time.perf_counter() - t_total
        return result

    # ------------------------------------------------------------------
    # Passes
    # ------------------------------------------------------------------

    def _run(self, source: FragmentSource) -> TabulationResult:
        cfg = self.config
        result = TabulationResult(total_pages=source.page_count)
        page_indices = self._page_indices(source.page_count)

        # -- Pass 1: Geometry ------------------------------------------
        t0 = time.perf_counter()
        logger.info("Pass 1: Collecting row and cell geometry")
        pages, xs = collect_page_cells(
            source,
            page_indices,
            cfg.heuristics,
            progress=self.progress,
            disable_tqdm=cfg.disable_tqdm,
        )
        result.time_geometry = time.perf_counter() - t0
        result.pages_processed = len(pages)
        result.row_count = sum(len(p.cell_rows) for p in pages)
        result.cell_count = len(xs)
        logger.info(
            "Geometry complete: %d pages, %d rows, %d cells in %.2fs",
            result.pages_processed,
            result.row_count,
            result.cell_count,
            result.time_geometry,
        )

        # -- Pass 2: Columns & grid ------------------------------------
        t0 = time.perf_counter()
        logger.info("Pass 2: Aligning columns and building grid")
        grid, centers = assemble_grid(
            pages,
            xs,
            cfg.heuristics,
            progress=self.progress,
            total_pages=source.page_count,
        )
        result.grid = grid
        result.column_centers = centers
        result.time_grid = time.perf_counter() - t0
        logger.info(
            "Grid ready: %d rows x %d columns (%d column centers)",
            len(grid),
            result.column_count,
            len(centers),
        )

        result.pages = pages
        return result


# ------------------------------------------------------------------
# Debug helpers
# ------------------------------------------------------------------


def _save_debug_layouts(
    pdf: PDFAdapter,
    pages: Sequence[PageCells],
    centers: Sequence[float],
    scale: float,
    output_dir: str,
) -> None:
    """Save colour-coded cell overlay images for visual review."""
    from tabulation.grid.debug import draw_page_cells

    out = Path(output_dir)
    out.mkdir(parents=True, exist_ok=True)

    for page in pages:
        img = pdf.render(page.page_index, scale=scale)
        annotated = draw_page_cells(img, page, centers, scale)
        path = out / f"page_{page.page_index:03d}.png"
        annotated.save(str(path))
        logger.debug("Saved layout debug image: %s", path)

    logger.info("Layout debug images saved to %s/", out)
