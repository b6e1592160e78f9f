"""Tests for grid assembly: heading rule, snapping, separators, padding."""

from tabulation.grid.builder import (
    build_grid,
    build_page_rows,
    build_row,
    is_heading,
    pad_grid,
    trim_trailing,
)
from tabulation.layout.models import CellRow, PageCells


def cr(*pairs):
    return CellRow(cells=tuple(t for t, _ in pairs), xs=tuple(float(x) for _, x in pairs))


def page(index, *cell_rows):
    return PageCells(page_index=index, cell_rows=tuple(cell_rows))


CENTERS = [0.0, 200.0]


class TestHeadingRule:
    def test_digit_free_single_cell_is_heading(self):
        assert is_heading(cr(("Station Summary", 300)))

    def test_heading_lands_in_column_zero(self):
        assert build_row(cr(("Station Summary", 300)), CENTERS) == ["Station Summary"]

    def test_single_cell_with_digits_is_snapped(self):
        row = cr(("9876543210", 200))
        assert not is_heading(row)
        assert build_row(row, CENTERS) == ["", "9876543210"]

    def test_two_cells_without_digits_use_columns(self):
        assert build_row(cr(("Name", 0), ("Age", 200)), CENTERS) == ["Name", "Age"]

    def test_empty_cells_do_not_count(self):
        assert build_row(cr(("", 0), ("Total", 200)), CENTERS) == ["Total"]


class TestBuildRow:
    def test_collision_space_joined(self):
        assert build_row(cr(("a", 0), ("b", 100)), [0.0]) == ["a b"]

    def test_no_centers_gives_single_column(self):
        assert build_row(cr(("1", 0), ("2", 500)), []) == ["1 2"]

    def test_trailing_empty_columns_trimmed(self):
        assert build_row(cr(("A1", 0)), [0.0, 100.0, 200.0]) == ["A1"]

    def test_inner_gaps_kept(self):
        row = build_row(cr(("A", 0), ("C3", 210)), [0.0, 100.0, 200.0])
        assert row == ["A", "", "C3"]

    def test_trim_keeps_column_zero(self):
        assert trim_trailing(["", "", ""]) == [""]


class TestBuildPageRows:
    def test_blank_rows_skipped(self):
        rows = build_page_rows([cr(("", 0)), cr(), cr(("x1", 0))], CENTERS)
        assert rows == [["x1"]]


class TestPadGrid:
    def test_rectangular(self):
        grid = pad_grid([["a"], ["b", "c", "d"], []])
        assert {len(r) for r in grid} == {3}
        assert grid[0] == ["a", "", ""]

    def test_idempotent(self):
        once = pad_grid([["a"], ["b", "c"]])
        assert pad_grid(once) == once

    def test_input_not_mutated(self):
        src = [["a"], ["b", "c"]]
        pad_grid(src)
        assert src == [["a"], ["b", "c"]]

    def test_empty(self):
        assert pad_grid([]) == []


class TestBuildGrid:
    def test_separator_between_pages(self):
        p1 = page(0, cr(("Name", 0), ("Age", 200)))
        p2 = page(1, cr(("Name", 0), ("Age", 200)))
        assert build_grid([p1, p2], CENTERS) == [
            ["Name", "Age"],
            ["", ""],
            ["Name", "Age"],
        ]

    def test_no_separator_after_last_page(self):
        grid = build_grid([page(0, cr(("x1", 0)))], CENTERS)
        assert grid == [["x1"]]

    def test_heading_padded_with_table(self):
        grid = build_grid(
            [page(0, cr(("Station Summary", 120)), cr(("Name", 0), ("Age", 200)))],
            CENTERS,
        )
        assert grid == [["Station Summary", ""], ["Name", "Age"]]

    def test_empty_document(self):
        assert build_grid([], CENTERS) == []
        assert build_grid([page(0), page(1)], []) == []

    def test_empty_middle_page_keeps_separators(self):
        grid = build_grid(
            [page(0, cr(("a1", 0))), page(1), page(2, cr(("b2", 0)))], [0.0]
        )
        assert grid == [["a1"], [""], [""], ["b2"]]

    def test_grid_rectangular(self):
        grid = build_grid(
            [page(0, cr(("T", 0)), cr(("1", 0), ("2", 100), ("3", 200)))],
            [0.0, 100.0, 200.0],
        )
        width = max(len(r) for r in grid)
        assert all(len(r) == width for r in grid)

    def test_on_page_called_in_order(self):
        seen = []
        build_grid(
            [page(3, cr(("a", 0))), page(4, cr(("b", 0)))],
            [0.0],
            on_page=lambda pos, p: seen.append((pos, p.page_index)),
        )
        assert seen == [(0, 3), (1, 4)]
