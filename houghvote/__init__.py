"""
houghvote - accumulator-based line and circle detection

Standard Hough line transform and gradient Hough circle transform on
numpy images.
"""

from .detection.circle_clustering import ClusteringPolicy
from .detection.circle_detector import CircleDetector, detect_circles, detect_circles_from_edges
from .detection.line_detector import LineDetector, detect_lines
from .errors import InvalidParameterError

__all__ = [
    'CircleDetector',
    'ClusteringPolicy',
    'InvalidParameterError',
    'LineDetector',
    'detect_circles',
    'detect_circles_from_edges',
    'detect_lines',
]
__version__ = '1.0.0'
