"""End-to-end tests of the two-pass pipeline on in-memory fragment sources."""

import pytest

from conftest import frag
from core.errors import SourceUnavailableError
from tabulation.layout.heuristics import LayoutHeuristics
from tabulation.pipeline import (
    TabulationConfig,
    TabulationPipeline,
    assemble_grid,
    collect_page_cells,
    tabulate,
)


def two_column_page():
    return [frag("Name", 0, 100, width=30), frag("Age", 200, 100)]


def test_single_row_two_cells(make_source):
    source = make_source([two_column_page()])
    pages, xs = collect_page_cells(source, range(1))
    assert len(pages) == 1
    assert pages[0].cell_rows[0].cells == ("Name", "Age")
    assert xs == [0.0, 200.0]
    assert tabulate(source) == [["Name", "Age"]]


def test_heading_only_page(make_source):
    source = make_source([[frag("Station Summary", 250, 500)]])
    assert tabulate(source) == [["Station Summary"]]


def test_two_pages_share_columns(make_source):
    source = make_source([two_column_page(), two_column_page()])
    result = TabulationPipeline(TabulationConfig(disable_tqdm=True)).convert_source(source)
    assert len(result.column_centers) == 2
    assert result.column_centers[0] == pytest.approx(0.0)
    assert result.column_centers[1] == pytest.approx(200.0)
    assert result.grid == [["Name", "Age"], ["", ""], ["Name", "Age"]]


def test_titled_table(make_source, station_page):
    grid = tabulate(make_source([station_page]))
    assert grid == [
        ["Station Summary", ""],
        ["Name", "Count"],
        ["Alpha", "12"],
        ["Beta", "7"],
    ]


def test_unusable_fragments_filtered(make_source):
    source = make_source([
        [
            frag("   ", 50, 100),
            frag("ghost", 100, 100, height=0),
            frag("Name", 0, 100, width=30),
            frag("Age", 200, 100),
        ]
    ])
    assert tabulate(source) == [["Name", "Age"]]


def test_empty_document(make_source):
    assert tabulate(make_source([])) == []
    assert tabulate(make_source([[], []])) == []


def test_columns_depend_on_whole_document(make_source):
    # Alone, page 1 clusters 20 and 90 into one column.  Page 2 moves the
    # cluster start to 0, which pushes 90 out into a column of its own.
    page1 = [frag("a1", 20, 100, width=10), frag("b1", 90, 100, width=10)]
    page2 = [frag("c2", 0, 100, width=10)]
    alone = tabulate(make_source([page1]))
    together = tabulate(make_source([page1, page2]))
    assert alone == [["a1 b1"]]
    assert together == [["a1", "b1"], ["", ""], ["c2", ""]]


def test_progress_messages(make_source):
    messages = []
    tabulate(make_source([two_column_page(), two_column_page()]), progress=messages.append)
    assert messages == [
        "Reading page 1 of 2...",
        "Reading page 2 of 2...",
        "Building rows for page 1 of 2...",
        "Building rows for page 2 of 2...",
    ]


def test_source_failure_aborts(make_source):
    source = make_source([two_column_page(), two_column_page(), two_column_page()], fail_on=1)
    pipeline = TabulationPipeline(TabulationConfig(disable_tqdm=True))
    with pytest.raises(SourceUnavailableError, match="corrupt"):
        pipeline.convert_source(source)
    assert source.requested == [0, 1]


def test_page_range(make_source):
    pages = [
        [frag("first", 0, 100)],
        [frag("second", 0, 100)],
        [frag("third", 0, 100)],
    ]
    source = make_source(pages)
    config = TabulationConfig(page_range=(1, 5), disable_tqdm=True)
    result = TabulationPipeline(config).convert_source(source)
    assert source.requested == [1, 2]
    assert result.pages_processed == 2
    assert result.total_pages == 3
    assert result.grid == [["second"], [""], ["third"]]


def test_heuristics_flow_through(make_source):
    page = [frag("a1", 0, 100, width=10), frag("b2", 20, 100, width=10)]
    merged = tabulate(make_source([page]))
    split = tabulate(make_source([page]), heuristics=LayoutHeuristics(gap_threshold=5))
    assert merged == [["a1 b2"]]
    # split into two cells, but both anchors fall in one column cluster
    assert split == [["a1 b2"]]
    tight = LayoutHeuristics(gap_threshold=5, column_tolerance=5)
    assert tabulate(make_source([page]), heuristics=tight) == [["a1", "b2"]]


def test_result_metrics(make_source, station_page):
    result = TabulationPipeline(TabulationConfig(disable_tqdm=True)).convert_source(
        make_source([station_page])
    )
    assert result.row_count == 4
    assert result.cell_count == 7
    assert result.column_count == 2
    assert "CONVERSION COMPLETE" in result.summary()


def test_assemble_grid_without_pages():
    grid, centers = assemble_grid([], [])
    assert grid == [] and centers == []
