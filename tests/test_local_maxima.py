"""Tests for local maxima extraction and ranking."""

import numpy as np
from houghvote.detection.local_maxima import find_local_maxima, rank_by_votes


class TestFindLocalMaxima:
    """Test the 4-neighbour maxima rule."""

    def test_single_peak(self):
        """Test an isolated peak is found."""
        grid = np.zeros((5, 5), dtype=int)
        grid[2, 2] = 5
        assert find_local_maxima(grid, 0).tolist() == [[2, 2]]

    def test_threshold_is_strict(self):
        """Test that a peak equal to the threshold is not reported."""
        grid = np.zeros((5, 5), dtype=int)
        grid[2, 2] = 5
        assert len(find_local_maxima(grid, 5)) == 0
        assert len(find_local_maxima(grid, 4)) == 1

    def test_horizontal_plateau_keeps_first(self):
        """Test that a row plateau yields only its leftmost cell."""
        grid = np.zeros((5, 5), dtype=int)
        grid[2, 1:4] = 5
        assert find_local_maxima(grid, 0).tolist() == [[2, 1]]

    def test_vertical_plateau_keeps_first(self):
        """Test that a column plateau yields only its top cell."""
        grid = np.zeros((5, 5), dtype=int)
        grid[1:4, 2] = 5
        assert find_local_maxima(grid, 0).tolist() == [[1, 2]]

    def test_square_plateau_single_representative(self):
        """Test that a 2x2 plateau yields exactly one cell."""
        grid = np.zeros((6, 6), dtype=int)
        grid[2:4, 2:4] = 7
        assert find_local_maxima(grid, 0).tolist() == [[2, 2]]

    def test_border_never_reported(self):
        """Test that border cells are never maxima."""
        grid = np.zeros((4, 4), dtype=int)
        grid[0, 0] = 9
        grid[3, 2] = 9
        grid[1, 3] = 9
        assert len(find_local_maxima(grid, 0)) == 0

    def test_tiny_grid(self):
        """Test that grids without interior cells give nothing."""
        assert find_local_maxima(np.ones((2, 2)), 0).shape == (0, 2)

    def test_raster_order(self):
        """Test that maxima come back in row-major order."""
        grid = np.zeros((7, 7), dtype=int)
        grid[5, 1] = 3
        grid[1, 5] = 2
        grid[1, 2] = 4
        assert find_local_maxima(grid, 0).tolist() == [[1, 2], [1, 5], [5, 1]]


class TestRankByVotes:
    """Test ranking of maxima."""

    def test_descending_with_raster_tie_break(self):
        """Test ordering by votes, then by row and column."""
        grid = np.zeros((5, 5), dtype=int)
        grid[1, 1] = 3
        grid[1, 3] = 7
        grid[3, 1] = 7
        cells = np.array([[3, 1], [1, 1], [1, 3]])
        assert rank_by_votes(grid, cells).tolist() == [[1, 3], [3, 1], [1, 1]]

    def test_empty(self):
        """Test that no cells rank to an empty array."""
        ranked = rank_by_votes(np.zeros((3, 3)), np.empty((0, 2)))
        assert ranked.shape == (0, 2)
