"""Basic usage example for houghvote."""

from pathlib import Path

import cv2
import numpy as np
from houghvote import CircleDetector, LineDetector
from houghvote.config import load_config
from houghvote.preprocessing.edges import canny_edges
from houghvote.utils.logger import setup_logger_from_config
from houghvote.utils.visualization import draw_circles, draw_lines


def make_scene() -> np.ndarray:
    """Draw a synthetic scene with two lines and two disks."""
    image = np.zeros((240, 320), dtype=np.uint8)
    cv2.line(image, (0, 200), (319, 200), 255, 2)
    cv2.line(image, (60, 0), (60, 239), 255, 2)
    cv2.circle(image, (160, 90), 40, 180, -1)
    cv2.circle(image, (260, 120), 25, 120, -1)
    return image


def main():
    """Run line and circle detection on a synthetic scene."""
    config = load_config()
    config['circles'].update(min_radius=15, max_radius=60, vote_threshold=20)
    logger = setup_logger_from_config(config, name='houghvote.example')

    image = make_scene()

    # Detect lines
    logger.info("Detecting lines...")
    edges = canny_edges(image, 25, 100)
    lines = LineDetector.from_config(config).detect(edges)
    for rho, theta in lines:
        logger.info(f"line rho={rho:.1f} theta={np.rad2deg(theta):.1f} deg")

    # Detect circles
    logger.info("Detecting circles...")
    circles = CircleDetector.from_config(config).detect(image)
    for x, y, r in circles:
        logger.info(f"circle center=({x:.1f}, {y:.1f}) radius={r}")

    # Save output
    output = draw_circles(draw_lines(image, lines), circles, scale=config['circles']['scale'])
    output_path = Path("output/basic_detection.png")
    output_path.parent.mkdir(parents=True, exist_ok=True)
    cv2.imwrite(str(output_path), output)
    logger.info(f"Results saved to {output_path}")


if __name__ == "__main__":
    main()
