"""Accumulator voting for the line and circle transforms.

Every vote goes through an explicit bounds check; votes that land outside
the accumulator are dropped. Voting can be split across worker threads:
each worker fills a private partial accumulator and the partials are
summed, so the counts do not depend on scheduling.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Sequence, Tuple

import numpy as np

from houghvote.detection.parameter_space import ACCUMULATOR_PADDING, LineParameterSpace

logger = logging.getLogger(__name__)


def scatter_votes(shape: Tuple[int, int], rows: np.ndarray, cols: np.ndarray) -> np.ndarray:
    """Count (row, col) votes into a fresh grid, skipping out-of-range cells."""
    rows = np.asarray(rows, dtype=np.int64).ravel()
    cols = np.asarray(cols, dtype=np.int64).ravel()
    in_bounds = (rows >= 0) & (rows < shape[0]) & (cols >= 0) & (cols < shape[1])
    flat = rows[in_bounds] * shape[1] + cols[in_bounds]
    counts = np.bincount(flat, minlength=shape[0] * shape[1])
    return counts.reshape(shape)


def accumulate_in_chunks(vote_chunk: Callable[[np.ndarray], np.ndarray],
                         items: np.ndarray, shape: Tuple[int, int],
                         workers: int = 1) -> np.ndarray:
    """
    Run ``vote_chunk`` over contiguous slices of ``items`` and sum the results.

    Args:
        vote_chunk: Maps a slice of items to a partial accumulator of ``shape``
        items: Evidence array, split along its first axis
        shape: Accumulator shape
        workers: Number of worker threads

    Returns:
        Element-wise sum of all partial accumulators
    """
    total = np.zeros(shape, dtype=np.int64)
    if len(items) == 0:
        return total

    n_chunks = min(workers, len(items))
    chunks = np.array_split(items, n_chunks)
    if n_chunks == 1:
        partials = [vote_chunk(chunks[0])]
    else:
        with ThreadPoolExecutor(max_workers=n_chunks) as ex:
            partials = list(ex.map(vote_chunk, chunks))

    for partial in partials:
        total += partial
    return total


def vote_lines(edges: np.ndarray, space: LineParameterSpace, workers: int = 1) -> np.ndarray:
    """
    Build the padded (angle x rho) line accumulator.

    Args:
        edges: 2D array, truthy cells are evidence pixels
        space: Parameter space sized for ``edges``
        workers: Number of worker threads

    Returns:
        int64 accumulator of shape ``space.accumulator_shape``
    """
    shape = space.accumulator_shape
    points = np.argwhere(np.asarray(edges).astype(bool))
    angle_rows = np.arange(space.num_angles) + ACCUMULATOR_PADDING

    def vote_chunk(chunk: np.ndarray) -> np.ndarray:
        # chunk holds (row, col) pairs; x is the column, y the row
        bins = space.rho_bins(chunk[:, 1], chunk[:, 0]) + ACCUMULATOR_PADDING
        rows = np.broadcast_to(angle_rows, bins.shape)
        return scatter_votes(shape, rows, bins)

    accumulator = accumulate_in_chunks(vote_chunk, points, shape, workers)
    logger.debug("Line voting: %d evidence pixels x %d angles, %d votes kept",
                 len(points), space.num_angles, int(accumulator.sum()))
    return accumulator


def circle_grid_shape(image_shape: Tuple[int, int], scale: float) -> Tuple[int, int]:
    """Shape of the center vote grid for an image at resolution ``scale``."""
    height, width = image_shape
    return int(np.floor(height / scale)) + 1, int(np.floor(width / scale)) + 1


def vote_circle_centers(edges: np.ndarray, phase: np.ndarray, scale: float,
                        radii: Sequence[int], workers: int = 1) -> Tuple[np.ndarray, np.ndarray]:
    """
    Cast center votes along the gradient line of every edge pixel.

    Each edge pixel votes twice per radius, once on each side, at
    ``(row +/- r * sin_t, col +/- r * cos_t) / scale`` where
    ``sin_t = -cos(phase)`` and ``cos_t = sin(phase)``.

    Args:
        edges: 2D boolean edge map
        phase: Gradient phase, same shape as ``edges``
        scale: Accumulator resolution factor (image pixels per cell)
        radii: Candidate radii in pixels
        workers: Number of worker threads

    Returns:
        Tuple of (vote grid, (N, 2) array of edge pixel (row, col) positions)
    """
    edges = np.asarray(edges).astype(bool)
    shape = circle_grid_shape(edges.shape, scale)
    points = np.argwhere(edges)
    radii = np.asarray(radii, dtype=np.float64)

    def vote_chunk(chunk: np.ndarray) -> np.ndarray:
        point_phase = phase[chunk[:, 0], chunk[:, 1]]
        sin_t = -np.cos(point_phase)[:, None]
        cos_t = np.sin(point_phase)[:, None]
        rows = chunk[:, 0:1].astype(np.float64)
        cols = chunk[:, 1:2].astype(np.float64)

        grid = np.zeros(shape, dtype=np.int64)
        for sign in (1.0, -1.0):
            target_rows = np.floor((rows + sign * radii * sin_t) / scale).astype(np.int64)
            target_cols = np.floor((cols + sign * radii * cos_t) / scale).astype(np.int64)
            grid += scatter_votes(shape, target_rows, target_cols)
        return grid

    votes = accumulate_in_chunks(vote_chunk, points, shape, workers)
    logger.debug("Circle voting: %d edge pixels x %d radii, %d votes kept",
                 len(points), len(radii), int(votes.sum()))
    return votes, points
