"""Circle detection using the gradient Hough Circle Transform."""

import logging
from typing import Any, Dict, List, Optional, Tuple

import cv2
import numpy as np

from houghvote.detection.circle_clustering import (
    ClusteringPolicy,
    cluster_centers,
    radius_histogram_length,
)
from houghvote.detection.local_maxima import find_local_maxima, rank_by_votes
from houghvote.detection.voting import vote_circle_centers
from houghvote.errors import InvalidParameterError
from houghvote.preprocessing.edges import (
    EdgeDetector,
    GradientOperator,
    canny_edges,
    gradient_phase,
    image_gradients,
)
from houghvote.utils.metrics import PerformanceMetrics

logger = logging.getLogger(__name__)

Circles = Tuple[List[Tuple[float, float]], List[int]]


class CircleDetector:
    """Detects circles by voting for centers along the local gradient."""

    def __init__(self, scale: float = 1.0, min_dist: float = 20.0,
                 canny_upper: Optional[float] = 100.0, vote_threshold: int = 30,
                 min_radius: int = 5, max_radius: int = 100,
                 clustering_policy=ClusteringPolicy.SKIP_AND_CONTINUE,
                 workers: int = 1,
                 edge_detector: Optional[EdgeDetector] = None,
                 gradient_operator: Optional[GradientOperator] = None):
        """
        Initialize circle detector.

        Args:
            scale: Accumulator resolution factor (image pixels per cell)
            min_dist: Minimum distance between detected centers
            canny_upper: Upper Canny threshold; the lower one is a quarter of it.
                None builds a detector that only accepts precomputed edge maps
            vote_threshold: Votes a center and its radius must exceed
            min_radius: Smallest radius voted for
            max_radius: Largest radius voted for (inclusive)
            clustering_policy: ClusteringPolicy or its string value
            workers: Number of threads used for center voting
            edge_detector: Edge map collaborator (default: Canny, sigma 1)
            gradient_operator: Gradient collaborator (default: 3x3 Sobel)
        """
        validate_circle_parameters(scale, min_dist, canny_upper, vote_threshold,
                                   min_radius, max_radius, workers)
        self.scale = scale
        self.min_dist = min_dist
        self.canny_upper = canny_upper
        self.vote_threshold = vote_threshold
        self.min_radius = min_radius
        self.max_radius = max_radius
        self.clustering_policy = ClusteringPolicy.parse(clustering_policy)
        self.workers = workers
        self.edge_detector = edge_detector or canny_edges
        self.gradient_operator = gradient_operator or image_gradients

    @classmethod
    def from_config(cls, config: Dict[str, Any], **collaborators) -> "CircleDetector":
        """Create a detector from a full config dict (see ``houghvote.config``)."""
        circles_cfg = config["circles"]
        return cls(scale=float(circles_cfg["scale"]),
                   min_dist=float(circles_cfg["min_dist"]),
                   canny_upper=float(circles_cfg["canny_upper"]),
                   vote_threshold=int(circles_cfg["vote_threshold"]),
                   min_radius=int(circles_cfg["min_radius"]),
                   max_radius=int(circles_cfg["max_radius"]),
                   clustering_policy=circles_cfg.get("clustering_policy",
                                                     ClusteringPolicy.SKIP_AND_CONTINUE),
                   workers=int(config.get("parallel", {}).get("workers", 1)),
                   **collaborators)

    def detect(self, image: np.ndarray) -> List[Tuple[float, float, int]]:
        """
        Detect circles in image.

        Args:
            image: 2D intensity image (BGR images are converted to gray)

        Returns:
            List of circles as (x, y, radius) tuples, strongest first
        """
        centers, radii = self.find_circles(image)
        return [(x, y, r) for (x, y), r in zip(centers, radii)]

    def find_circles(self, image: np.ndarray) -> Circles:
        """Run edge detection, gradient phase and the circle transform on image."""
        if self.canny_upper is None:
            raise InvalidParameterError("canny_upper", None,
                                        "required to compute an edge map from an image")

        image = np.asarray(image)
        if image.ndim == 3:
            image = cv2.cvtColor(image, cv2.COLOR_BGR2GRAY)
        if image.ndim != 2:
            raise InvalidParameterError("image", image.shape, "expected a 2D intensity image")

        edges = np.asarray(self.edge_detector(image, self.canny_upper / 4, self.canny_upper))
        dx, dy = self.gradient_operator(image)
        for name, grid in (("edge map", edges), ("dx", dx), ("dy", dy)):
            if np.shape(grid) != image.shape:
                raise InvalidParameterError(name, np.shape(grid),
                                            f"collaborator output must match image shape {image.shape}")

        return self.find_circles_from_edges(edges, gradient_phase(dx, dy))

    def find_circles_from_edges(self, edges: np.ndarray, phase: np.ndarray) -> Circles:
        """Run center voting, clustering and radius search on a precomputed edge map."""
        edges = np.asarray(edges).astype(bool)
        phase = np.asarray(phase, dtype=np.float64)
        if edges.ndim != 2 or phase.shape != edges.shape:
            raise InvalidParameterError("phase", phase.shape,
                                        f"must be 2D and match edge map shape {edges.shape}")

        metrics = PerformanceMetrics()
        with metrics.timer("voting"):
            radii = range(self.min_radius, self.max_radius + 1)
            votes, points = vote_circle_centers(edges, phase, self.scale, radii, self.workers)

        with metrics.timer("candidates"):
            candidates = rank_by_votes(votes, find_local_maxima(votes, self.vote_threshold))

        with metrics.timer("clustering"):
            centers, radii = cluster_centers(
                candidates, points, self.scale, self.min_dist, self.vote_threshold,
                radius_histogram_length(edges.shape, self.scale), self.clustering_policy)

        logger.debug("Circle transform timings (ms): %s", metrics.get_summary())
        logger.info("Detected %d circles from %d center candidates", len(centers), len(candidates))
        return centers, radii


def validate_circle_parameters(scale: float, min_dist: float, canny_upper: Optional[float],
                               vote_threshold: int, min_radius: int, max_radius: int,
                               workers: int = 1):
    """Raise InvalidParameterError for malformed circle transform parameters."""
    if not scale > 0:
        raise InvalidParameterError("scale", scale, "must be positive")
    if not min_dist > 0:
        raise InvalidParameterError("min_dist", min_dist, "must be positive")
    if canny_upper is not None and not canny_upper > 0:
        raise InvalidParameterError("canny_upper", canny_upper, "must be positive")
    if vote_threshold < 0:
        raise InvalidParameterError("vote_threshold", vote_threshold, "must be non-negative")
    if min_radius < 0:
        raise InvalidParameterError("min_radius", min_radius, "must be non-negative")
    if min_radius > max_radius:
        raise InvalidParameterError("min_radius", min_radius,
                                    f"must not exceed max_radius={max_radius}")
    if workers < 1:
        raise InvalidParameterError("workers", workers, "need at least one worker")


# Functional interface
def detect_circles(image: np.ndarray, scale: float, min_dist: float, canny_upper: float,
                   vote_threshold: int, min_radius: int, max_radius: int,
                   clustering_policy=ClusteringPolicy.SKIP_AND_CONTINUE,
                   workers: int = 1) -> Circles:
    """Gradient Hough circle transform; returns parallel (centers, radii) lists."""
    detector = CircleDetector(scale, min_dist, canny_upper, vote_threshold,
                              min_radius, max_radius, clustering_policy, workers)
    return detector.find_circles(image)


def detect_circles_from_edges(edges: np.ndarray, phase: np.ndarray, scale: float,
                              min_dist: float, vote_threshold: int, min_radius: int,
                              max_radius: int,
                              clustering_policy=ClusteringPolicy.SKIP_AND_CONTINUE,
                              workers: int = 1) -> Circles:
    """Circle transform on an edge map and gradient phase computed elsewhere."""
    detector = CircleDetector(scale, min_dist, None, vote_threshold,
                              min_radius, max_radius, clustering_policy, workers)
    return detector.find_circles_from_edges(edges, phase)
