"""Shared synthetic-image fixtures."""

import numpy as np
import pytest

from houghvote.preprocessing.edges import gradient_phase


def render_circle(edges: np.ndarray, phase: np.ndarray, center, radius: float,
                  arc=(0.0, 2 * np.pi)):
    """Mark a discrete circle outline with an outward gradient phase.

    center is (row, col). The phase of each pixel points away from the
    center through that pixel.
    """
    cy, cx = center
    for a in np.linspace(arc[0], arc[1], 1440, endpoint=False):
        row = int(round(cy + radius * np.sin(a)))
        col = int(round(cx + radius * np.cos(a)))
        if not (0 <= row < edges.shape[0] and 0 <= col < edges.shape[1]):
            continue
        pixel_angle = np.arctan2(row - cy, col - cx)
        edges[row, col] = True
        phase[row, col] = gradient_phase(np.cos(pixel_angle), np.sin(pixel_angle))


@pytest.fixture
def circle_scene():
    """Factory for (edges, phase) grids holding the requested circles."""
    def make(shape, circles):
        edges = np.zeros(shape, dtype=bool)
        phase = np.zeros(shape, dtype=np.float64)
        for circle in circles:
            render_circle(edges, phase, *circle)
        return edges, phase
    return make


@pytest.fixture
def degree_angles():
    """180 angles covering [0, pi) in 1 degree steps."""
    return np.deg2rad(np.arange(0.0, 180.0, 1.0))
