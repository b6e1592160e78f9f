"""Tests for document-wide column clustering and snapping."""

import pytest

from tabulation.layout.column_aligner import cluster_columns, snap_to_column
from tabulation.layout.heuristics import LayoutHeuristics


class TestClusterColumns:
    def test_empty(self):
        assert cluster_columns([]) == []

    def test_two_matching_columns(self):
        assert cluster_columns([0, 200, 0, 200]) == [0.0, 200.0]

    def test_threshold_is_inclusive(self):
        assert cluster_columns([0, 80]) == [40.0]
        assert cluster_columns([0, 81]) == [0.0, 81.0]

    def test_reach_measured_from_cluster_start(self):
        # 100 is within 80 of 50 but not of the cluster's first value
        assert cluster_columns([100, 50, 0]) == [25.0, 100.0]

    def test_center_is_mean(self):
        assert cluster_columns([10, 20, 30, 300]) == [20.0, 300.0]

    def test_uniform_spread_merges_runs(self):
        centers = cluster_columns([i * 10 for i in range(100)])
        assert len(centers) < 20
        assert centers[0] == pytest.approx(40.0)

    def test_strictly_ascending(self):
        xs = [313, 5, 77, 150, 151, 900, 640, 640, 12, 499]
        centers = cluster_columns(xs)
        assert all(a < b for a, b in zip(centers, centers[1:]))

    def test_custom_tolerance(self):
        h = LayoutHeuristics(column_tolerance=10)
        assert cluster_columns([0, 20, 40], h) == [0.0, 20.0, 40.0]


class TestSnapToColumn:
    centers = [0.0, 100.0, 200.0]

    def test_nearest(self):
        assert snap_to_column(40, self.centers) == 0
        assert snap_to_column(60, self.centers) == 1
        assert snap_to_column(199, self.centers) == 2

    def test_tie_goes_to_lowest_index(self):
        assert snap_to_column(50, self.centers) == 0
        assert snap_to_column(150, self.centers) == 1

    def test_no_distance_bound(self):
        assert snap_to_column(10_000, self.centers) == 2
        assert snap_to_column(-500, self.centers) == 0

    def test_no_centers(self):
        assert snap_to_column(123, []) == 0
