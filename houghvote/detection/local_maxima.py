"""Local maxima extraction and ranking shared by the line and circle transforms."""

import numpy as np


def find_local_maxima(grid: np.ndarray, threshold: float) -> np.ndarray:
    """
    Find cells that beat their 4 neighbours and the threshold.

    A cell qualifies when it is above ``threshold``, strictly greater than
    its left and upper neighbours and greater than or equal to its right
    and lower neighbours. On a plateau of equal adjacent cells only the
    first cell along each axis survives. Border cells are never reported.

    Args:
        grid: 2D accumulator
        threshold: Minimum value a maximum must exceed

    Returns:
        (N, 2) int array of (row, col) indices in raster order
    """
    grid = np.asarray(grid)
    if grid.ndim != 2 or grid.shape[0] < 3 or grid.shape[1] < 3:
        return np.empty((0, 2), dtype=np.int64)

    center = grid[1:-1, 1:-1]
    is_max = (
        (center > threshold)
        & (center > grid[1:-1, :-2])
        & (center >= grid[1:-1, 2:])
        & (center > grid[:-2, 1:-1])
        & (center >= grid[2:, 1:-1])
    )
    return np.argwhere(is_max) + 1


def rank_by_votes(grid: np.ndarray, cells: np.ndarray) -> np.ndarray:
    """Sort cells by vote count descending, ties broken by raster order."""
    cells = np.asarray(cells, dtype=np.int64).reshape(-1, 2)
    if len(cells) == 0:
        return cells
    votes = grid[cells[:, 0], cells[:, 1]]
    # lexsort uses the last key as primary
    order = np.lexsort((cells[:, 1], cells[:, 0], -votes))
    return cells[order]
