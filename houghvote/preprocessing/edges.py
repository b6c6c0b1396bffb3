"""Edge map and gradient collaborators for the circle transform."""

from typing import Protocol, Tuple

import cv2
import numpy as np
from skimage.feature import canny


class EdgeDetector(Protocol):
    """Interface for edge detection: boolean edge map from hysteresis thresholds."""
    def __call__(self, image: np.ndarray, low_threshold: float,
                 high_threshold: float) -> np.ndarray: ...


class GradientOperator(Protocol):
    """Interface for gradient computation: returns (dx, dy) grids."""
    def __call__(self, image: np.ndarray) -> Tuple[np.ndarray, np.ndarray]: ...


def canny_edges(image: np.ndarray, low_threshold: float, high_threshold: float,
                sigma: float = 1.0) -> np.ndarray:
    """
    Canny edge map of an intensity image.

    Args:
        image: 2D intensity image
        low_threshold: Lower hysteresis threshold on gradient magnitude
        high_threshold: Upper hysteresis threshold on gradient magnitude
        sigma: Gaussian smoothing applied before the gradient

    Returns:
        Boolean edge map with the same shape as image
    """
    image = np.asarray(image, dtype=np.float64)
    return canny(image, sigma=sigma, low_threshold=low_threshold,
                 high_threshold=high_threshold)


def image_gradients(image: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    """3x3 Sobel derivatives: dx along columns, dy along rows."""
    image = np.ascontiguousarray(image, dtype=np.float64)
    dx = cv2.Sobel(image, cv2.CV_64F, 1, 0, ksize=3)
    dy = cv2.Sobel(image, cv2.CV_64F, 0, 1, ksize=3)
    return dx, dy


def gradient_phase(dx: np.ndarray, dy: np.ndarray) -> np.ndarray:
    """
    Gradient phase in the convention used by circle center voting.

    The phase is ``atan2(dx, -dy)``, so ``(-cos(phase), sin(phase))`` is the
    unit gradient direction in (row, col) order.
    """
    return np.arctan2(np.asarray(dx, dtype=np.float64), -np.asarray(dy, dtype=np.float64))
