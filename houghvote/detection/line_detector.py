"""Line detection using the standard Hough Transform."""

import logging
from typing import Any, Dict, List, Sequence, Tuple

import numpy as np

from houghvote.config import angles_from_config
from houghvote.detection.local_maxima import find_local_maxima, rank_by_votes
from houghvote.detection.parameter_space import ACCUMULATOR_PADDING, LineParameterSpace
from houghvote.detection.voting import vote_lines
from houghvote.errors import InvalidParameterError
from houghvote.utils.metrics import PerformanceMetrics

logger = logging.getLogger(__name__)

Line = Tuple[float, float]


class LineDetector:
    """Detects dominant (rho, theta) lines in a binary edge image."""

    def __init__(self, rho_step: float = 1.0, angles: Sequence[float] = None,
                 threshold: int = 50, max_lines: int = 10, workers: int = 1):
        """
        Initialize line detector.

        Args:
            rho_step: Distance resolution of the accumulator in pixels
            angles: Angles to test in radians (default: 180 angles over [0, pi))
            threshold: Votes a line must exceed to be reported
            max_lines: Maximum number of lines returned
            workers: Number of threads used for voting
        """
        if angles is None:
            angles = np.deg2rad(np.arange(0.0, 180.0, 1.0))
        validate_line_parameters(rho_step, angles, threshold, max_lines, workers)
        self.rho_step = rho_step
        self.angles = np.asarray(angles, dtype=np.float64).ravel()
        self.threshold = threshold
        self.max_lines = max_lines
        self.workers = workers

    @classmethod
    def from_config(cls, config: Dict[str, Any]) -> "LineDetector":
        """Create a detector from a full config dict (see ``houghvote.config``)."""
        lines_cfg = config["lines"]
        return cls(rho_step=float(lines_cfg["rho_step"]),
                   angles=angles_from_config(lines_cfg),
                   threshold=int(lines_cfg["threshold"]),
                   max_lines=int(lines_cfg["max_lines"]),
                   workers=int(config.get("parallel", {}).get("workers", 1)))

    def detect(self, image: np.ndarray) -> List[Line]:
        """
        Detect lines in an edge image.

        Args:
            image: 2D edge image; every non-zero pixel is evidence

        Returns:
            List of (rho, theta) tuples, strongest first, at most max_lines long
        """
        image = _as_evidence(image)
        metrics = PerformanceMetrics()

        with metrics.timer("voting"):
            space = LineParameterSpace.create(image.shape, self.rho_step, self.angles)
            accumulator = vote_lines(image, space, self.workers)

        with metrics.timer("peaks"):
            peaks = rank_by_votes(accumulator, find_local_maxima(accumulator, self.threshold))
            lines = [space.to_line(row - ACCUMULATOR_PADDING, col - ACCUMULATOR_PADDING)
                     for row, col in peaks[:self.max_lines]]

        logger.debug("Line transform timings (ms): %s", metrics.get_summary())
        logger.info("Detected %d lines (%d local maxima above %d votes)",
                    len(lines), len(peaks), self.threshold)
        return lines


def validate_line_parameters(rho_step: float, angles: Sequence[float], threshold: int,
                             max_lines: int, workers: int = 1):
    """Raise InvalidParameterError for malformed line transform parameters."""
    if not rho_step > 0:
        raise InvalidParameterError("rho_step", rho_step, "must be positive")
    if angles is None or np.asarray(angles).size == 0:
        raise InvalidParameterError("angles", angles, "angle set must not be empty")
    if threshold < 0:
        raise InvalidParameterError("threshold", threshold, "must be non-negative")
    if max_lines < 0:
        raise InvalidParameterError("max_lines", max_lines, "must be non-negative")
    if workers < 1:
        raise InvalidParameterError("workers", workers, "need at least one worker")


def _as_evidence(image: np.ndarray) -> np.ndarray:
    image = np.asarray(image)
    if image.ndim != 2:
        raise InvalidParameterError("image", image.shape, "expected a 2D edge image")
    return image != 0


# Functional interface
def detect_lines(image: np.ndarray, rho_step: float, angles: Sequence[float],
                 threshold: int, max_lines: int, workers: int = 1) -> List[Line]:
    """Standard Hough line transform; see ``LineDetector.detect``."""
    detector = LineDetector(rho_step, angles, threshold, max_lines, workers)
    return detector.detect(image)
