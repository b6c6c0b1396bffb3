"""Center clustering and radius search for the gradient circle transform."""

import logging
from enum import Enum
from typing import List, Tuple, Union

import numpy as np

from houghvote.errors import InvalidParameterError

logger = logging.getLogger(__name__)


class ClusteringPolicy(Enum):
    """What to do after a candidate center is rejected as too close."""

    SKIP_AND_CONTINUE = "skip-and-continue"
    STOP_ON_FIRST_REJECTION = "stop-on-first-rejection"

    @classmethod
    def parse(cls, value: Union[str, "ClusteringPolicy"]) -> "ClusteringPolicy":
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            choices = ", ".join(p.value for p in cls)
            raise InvalidParameterError("clustering_policy", value,
                                        f"expected one of: {choices}") from None


def radius_histogram_length(image_shape: Tuple[int, int], scale: float) -> int:
    """Number of distance bins needed for any center/pixel pair in the image."""
    height, width = image_shape
    return int(np.ceil(np.hypot(height, width) / scale)) + 1


def radius_histogram(center: Tuple[float, float], points: np.ndarray, scale: float,
                     length: int) -> np.ndarray:
    """
    Histogram of distances from a center to every edge pixel.

    Args:
        center: (row, col) in image coordinates
        points: (N, 2) edge pixel (row, col) positions
        scale: Bin width in pixels
        length: Number of bins

    Returns:
        int64 array of ``length`` bins, bin k counting distances in [k*scale, (k+1)*scale)
    """
    points = np.asarray(points, dtype=np.float64).reshape(-1, 2)
    distances = np.hypot(points[:, 0] - center[0], points[:, 1] - center[1])
    bins = np.floor(distances / scale).astype(np.int64)
    bins = bins[(bins >= 0) & (bins < length)]
    return np.bincount(bins, minlength=length)


def best_radius(histogram: np.ndarray) -> Tuple[int, int]:
    """Return (voters, bin index) of the best supported bin.

    The radius is the bin index itself, so it is measured in units of
    ``scale`` pixels. Ties go to the smallest radius.
    """
    radius_bin = int(np.argmax(histogram))
    return int(histogram[radius_bin]), radius_bin


def cluster_centers(candidates: np.ndarray, points: np.ndarray, scale: float,
                    min_dist: float, vote_threshold: float, histogram_length: int,
                    policy: ClusteringPolicy = ClusteringPolicy.SKIP_AND_CONTINUE
                    ) -> Tuple[List[Tuple[float, float]], List[int]]:
    """
    Accept ranked center candidates greedily and find each circle's radius.

    Args:
        candidates: (N, 2) vote grid cells, strongest first
        points: (M, 2) edge pixel (row, col) positions
        scale: Accumulator resolution factor
        min_dist: Minimum distance between accepted centers
        vote_threshold: Edge pixels a radius bin must exceed
        histogram_length: Number of radius bins
        policy: Behaviour after a too-close candidate

    Returns:
        Tuple of (centers as (x, y), radii as histogram bins), in acceptance order
    """
    accepted = []
    radii = []

    for cell in candidates:
        center = (float(cell[0]) * scale, float(cell[1]) * scale)

        too_close = any(np.hypot(center[0] - row, center[1] - col) < min_dist
                        for row, col in accepted)
        if too_close:
            if policy is ClusteringPolicy.STOP_ON_FIRST_REJECTION:
                logger.debug("Candidate %s too close to an accepted center, stopping", center)
                break
            continue

        histogram = radius_histogram(center, points, scale, histogram_length)
        voters, radius = best_radius(histogram)
        if voters > vote_threshold:
            accepted.append(center)
            radii.append(radius)

    centers = [(col, row) for row, col in accepted]
    return centers, radii
