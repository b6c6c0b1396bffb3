"""Tests for circle center clustering and radius search."""

import pytest
import numpy as np
from houghvote.detection.circle_clustering import (
    ClusteringPolicy,
    best_radius,
    cluster_centers,
    radius_histogram,
    radius_histogram_length,
)
from houghvote.detection.circle_detector import detect_circles_from_edges
from houghvote.errors import InvalidParameterError


def ring_points(center, radius, n=360):
    """Edge pixel (row, col) positions of a discrete circle."""
    angles = np.linspace(0, 2 * np.pi, n, endpoint=False)
    rows = np.rint(center[0] + radius * np.sin(angles))
    cols = np.rint(center[1] + radius * np.cos(angles))
    return np.unique(np.column_stack([rows, cols]).astype(int), axis=0)


class TestClusteringPolicy:
    """Test policy parsing."""

    def test_parse_values(self):
        """Test that both policies parse from their names."""
        assert ClusteringPolicy.parse("skip-and-continue") is ClusteringPolicy.SKIP_AND_CONTINUE
        assert (ClusteringPolicy.parse("stop-on-first-rejection")
                is ClusteringPolicy.STOP_ON_FIRST_REJECTION)
        assert (ClusteringPolicy.parse(ClusteringPolicy.SKIP_AND_CONTINUE)
                is ClusteringPolicy.SKIP_AND_CONTINUE)

    def test_parse_unknown(self):
        """Test that unknown policies are rejected."""
        with pytest.raises(InvalidParameterError, match="clustering_policy"):
            ClusteringPolicy.parse("greedy")


class TestRadiusHistogram:
    """Test the per-center distance histogram."""

    def test_length(self):
        """Test the histogram covers the image diagonal."""
        assert radius_histogram_length((100, 100), 1.0) == 143
        assert radius_histogram_length((30, 40), 2.0) == 26

    def test_bins(self):
        """Test distances are floored into scale-wide bins."""
        points = np.array([[0, 3], [4, 0], [3, 4], [0, 0]])
        hist = radius_histogram((0.0, 0.0), points, 1.0, 8)
        assert hist.tolist() == [1, 0, 0, 1, 1, 1, 0, 0]

        hist = radius_histogram((0.0, 0.0), points, 2.0, 4)
        assert hist.tolist() == [1, 1, 2, 0]

    def test_ring_peak(self):
        """Test that a ring peaks at its radius."""
        points = ring_points((50, 50), 20)
        hist = radius_histogram((50.0, 50.0), points, 1.0, radius_histogram_length((100, 100), 1.0))
        voters, radius = best_radius(hist)
        assert voters > 20
        assert radius in (19, 20)

    def test_best_radius_ties_to_smallest(self):
        """Test that equal bins resolve to the smaller radius."""
        assert best_radius(np.array([0, 3, 5, 5])) == (5, 2)
        assert best_radius(np.array([7, 3, 5, 5])) == (7, 0)


class TestClusterCenters:
    """Test greedy center acceptance."""

    def setup_method(self):
        self.points = np.vstack([ring_points((50, 50), 20), ring_points((50, 120), 15)])
        # strongest first: a circle, a near duplicate, then a distant circle
        self.candidates = np.array([[50, 50], [52, 52], [50, 120]])

    def test_skip_and_continue(self):
        """Test that a too-close candidate is skipped and later ones still run."""
        centers, radii = cluster_centers(self.candidates, self.points, 1.0, 10.0, 10, 143,
                                         ClusteringPolicy.SKIP_AND_CONTINUE)
        assert centers == [(50.0, 50.0), (120.0, 50.0)]
        assert radii[0] in (19, 20)
        assert radii[1] in (14, 15)

    def test_stop_on_first_rejection(self):
        """Test that the first too-close candidate ends clustering."""
        centers, radii = cluster_centers(self.candidates, self.points, 1.0, 10.0, 10, 143,
                                         ClusteringPolicy.STOP_ON_FIRST_REJECTION)
        assert centers == [(50.0, 50.0)]
        assert len(radii) == 1

    def test_weak_candidate_not_accepted(self):
        """Test that a center without enough radius support is dropped."""
        centers, radii = cluster_centers(np.array([[10, 10]]), self.points, 1.0, 10.0, 1000, 143)
        assert centers == []
        assert radii == []

    def test_rejected_weak_candidate_does_not_block(self):
        """Test that a center that failed the vote test is not used for separation."""
        candidates = np.array([[10, 10], [50, 50]])
        centers, _ = cluster_centers(candidates, self.points, 1.0, 100.0, 30, 143)
        assert centers == [(50.0, 50.0)]

    def test_scaled_centers_and_radius_bins(self):
        """Test that centers are rescaled to pixels while radii stay in bins."""
        centers, radii = cluster_centers(np.array([[25, 25]]), ring_points((50, 50), 20),
                                         2.0, 10.0, 10, 72)
        assert centers == [(50.0, 50.0)]
        assert radii[0] in (9, 10)


class TestClusteringEndToEnd:
    """Test policies through the full edge-map transform."""

    def test_policies_on_scene(self, circle_scene):
        """Test both policies on a strong circle, a close arc and a weaker distant circle."""
        edges, phase = circle_scene((100, 170), [
            ((50, 40), 20),
            ((50, 48), 20, (0.0, 1.5 * np.pi)),
            ((50, 140), 10),
        ])

        skip = detect_circles_from_edges(edges, phase, 1.0, 15.0, 8, 10, 25,
                                         clustering_policy="skip-and-continue")
        stop = detect_circles_from_edges(edges, phase, 1.0, 15.0, 8, 10, 25,
                                         clustering_policy="stop-on-first-rejection")

        assert len(skip[0]) == 2
        assert len(stop[0]) == 1
        assert stop[0][0] == skip[0][0]
        assert abs(skip[0][0][0] - 40) <= 1
        assert abs(skip[0][1][0] - 140) <= 1
        assert abs(skip[1][1] - 10) <= 1
