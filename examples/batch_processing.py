"""Batch processing example for multiple frames."""

import json
import sys
from pathlib import Path

import cv2
import numpy as np
from houghvote import CircleDetector, LineDetector
from houghvote.config import load_config
from houghvote.preprocessing.edges import canny_edges
from houghvote.utils.logger import setup_logger


def process_frame(image, line_detector, circle_detector, canny_upper):
    """Process a single frame."""
    gray = cv2.cvtColor(image, cv2.COLOR_BGR2GRAY)
    edges = canny_edges(gray, canny_upper / 4, canny_upper)
    lines = line_detector.detect(edges)
    circles = circle_detector.detect(gray)
    return {
        'lines': [{'rho': rho, 'theta_deg': float(np.rad2deg(theta))} for rho, theta in lines],
        'circles': [{'x': x, 'y': y, 'radius_bin': r} for x, y, r in circles],
    }


def main():
    """Process multiple frames in batch."""
    logger = setup_logger('houghvote.batch')

    config_path = sys.argv[2] if len(sys.argv) > 2 else None
    config = load_config(config_path)

    # Initialize components
    line_detector = LineDetector.from_config(config)
    circle_detector = CircleDetector.from_config(config)

    # Get all frames
    frames_dir = Path(sys.argv[1] if len(sys.argv) > 1 else "test_data/frames")
    frame_files = sorted(frames_dir.glob("*.jpg"))

    logger.info(f"Processing {len(frame_files)} frames...")

    results = []
    for i, frame_path in enumerate(frame_files):
        logger.info(f"Processing frame {i+1}/{len(frame_files)}: {frame_path.name}")

        image = cv2.imread(str(frame_path))
        if image is None:
            logger.warning(f"Could not load {frame_path}")
            continue

        result = process_frame(image, line_detector, circle_detector,
                               config['circles']['canny_upper'])
        result['frame_name'] = frame_path.name
        results.append(result)

    # Save results
    output_path = Path("output/batch_results.json")
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, 'w') as f:
        json.dump(results, f, indent=2)
    logger.info("Batch processing complete!")


if __name__ == "__main__":
    main()
