"""Visualization utilities for debugging and display."""

import cv2
import numpy as np
from typing import List, Tuple


def to_bgr(image: np.ndarray) -> np.ndarray:
    """Return a uint8 BGR copy of a gray, boolean or BGR image."""
    image = np.asarray(image)
    if image.dtype == bool:
        image = image.astype(np.uint8) * 255
    elif image.dtype != np.uint8:
        image = np.clip(image, 0, 255).astype(np.uint8)
    if image.ndim == 2:
        return cv2.cvtColor(image, cv2.COLOR_GRAY2BGR)
    return image.copy()


def line_endpoints(rho: float, theta: float,
                   shape: Tuple[int, int]) -> Tuple[Tuple[int, int], Tuple[int, int]]:
    """Two points on x*cos(theta) + y*sin(theta) = rho spanning the image."""
    length = 2 * (shape[0] + shape[1])
    cos_t, sin_t = np.cos(theta), np.sin(theta)
    x0, y0 = rho * cos_t, rho * sin_t
    p1 = (int(round(x0 - length * sin_t)), int(round(y0 + length * cos_t)))
    p2 = (int(round(x0 + length * sin_t)), int(round(y0 - length * cos_t)))
    return p1, p2


def draw_lines(image: np.ndarray, lines: List[Tuple[float, float]],
              color: Tuple[int, int, int] = (0, 255, 0),
              thickness: int = 1) -> np.ndarray:
    """Draw detected (rho, theta) lines on image."""
    output = to_bgr(image)
    for rho, theta in lines:
        p1, p2 = line_endpoints(rho, theta, output.shape[:2])
        cv2.line(output, p1, p2, color, thickness)
    return output


def draw_circles(image: np.ndarray, circles: List[Tuple[float, float, int]],
                 color: Tuple[int, int, int] = (255, 0, 0),
                 thickness: int = 1, scale: float = 1.0) -> np.ndarray:
    """Draw detected (x, y, radius) circles and their centers on image.

    Radii are histogram bins, so they are multiplied by the ``scale`` the
    detector ran with.
    """
    output = to_bgr(image)
    for x, y, r in circles:
        center = (int(round(x)), int(round(y)))
        cv2.circle(output, center, int(round(r * scale)), color, thickness)
        cv2.circle(output, center, 2, (0, 0, 255), -1)
    return output
