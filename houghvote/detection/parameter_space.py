"""Discretized (rho, theta) parameter space for the standard line transform."""

from dataclasses import dataclass
from typing import Sequence, Tuple

import numpy as np

from houghvote.errors import InvalidParameterError

# Width of the zero border around the line accumulator.
ACCUMULATOR_PADDING = 1


def round_half_even(value: float) -> int:
    """Round to the nearest integer, ties to even (same rule as ``np.rint``)."""
    return int(np.rint(value))


@dataclass(frozen=True)
class LineParameterSpace:
    """Lookup tables and accumulator sizing for one line transform call.

    Attributes:
        rho_step: Distance resolution in pixels
        angles: Angle set in radians; order defines the accumulator row
        num_rho: Number of rho bins
        center_offset: Bias added to a rounded rho bin so negative
            distances land on a non-negative index
        sin_scaled: sin(angles) / rho_step
        cos_scaled: cos(angles) / rho_step
    """

    rho_step: float
    angles: np.ndarray
    num_rho: int
    center_offset: int
    sin_scaled: np.ndarray
    cos_scaled: np.ndarray

    @classmethod
    def create(cls, image_shape: Tuple[int, int], rho_step: float,
               angles: Sequence[float]) -> "LineParameterSpace":
        """
        Build the parameter space for an image.

        Args:
            image_shape: (height, width) of the evidence image
            rho_step: Distance resolution, must be positive
            angles: Non-empty sequence of angles in radians

        Returns:
            LineParameterSpace sized for the image
        """
        if not rho_step > 0:
            raise InvalidParameterError("rho_step", rho_step, "must be positive")
        angles = np.asarray(angles, dtype=np.float64).ravel()
        if angles.size == 0:
            raise InvalidParameterError("angles", [], "angle set must not be empty")

        height, width = image_shape
        num_rho = round_half_even((2 * (width + height) + 1) / rho_step)
        center_offset = round_half_even((num_rho - 1) / 2)

        return cls(
            rho_step=float(rho_step),
            angles=angles,
            num_rho=num_rho,
            center_offset=center_offset,
            sin_scaled=np.sin(angles) / rho_step,
            cos_scaled=np.cos(angles) / rho_step,
        )

    @property
    def num_angles(self) -> int:
        return int(self.angles.size)

    @property
    def accumulator_shape(self) -> Tuple[int, int]:
        """Shape of the padded accumulator: (num_angles + 2, num_rho + 2)."""
        pad = 2 * ACCUMULATOR_PADDING
        return self.num_angles + pad, self.num_rho + pad

    def rho_bins(self, xs: np.ndarray, ys: np.ndarray) -> np.ndarray:
        """Return the unpadded rho index of every (point, angle) pair.

        Rows follow the point order, columns the angle order. Values may
        fall outside [0, num_rho) for points beyond the modeled space.
        """
        xs = np.asarray(xs, dtype=np.float64)
        ys = np.asarray(ys, dtype=np.float64)
        dist = np.outer(xs, self.cos_scaled) + np.outer(ys, self.sin_scaled)
        return np.rint(dist).astype(np.int64) + self.center_offset

    def to_line(self, angle_index: int, rho_index: int) -> Tuple[float, float]:
        """Map an unpadded (angle, rho) cell back to (rho, theta)."""
        rho = (rho_index - self.center_offset) * self.rho_step
        return float(rho), float(self.angles[angle_index])
