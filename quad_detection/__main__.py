#!/usr/bin/env python3
"""
CLI interface for the quad_detection module.

Usage:
    python -m quad_detection -i photo.jpg
    python -m quad_detection -i photo.jpg -o corrected.png --aspect A4_PORTRAIT
"""

import argparse
import logging
import sys
from pathlib import Path

import cv2

from .config import DetectionConfig
from .detector import QuadrilateralDetector
from .planner import AspectRatio, plan_correction
from .visualizer import CandidateVisualizer
from .warp import apply_correction


def parse_aspect(value: str):
    """Accept a preset name (case-insensitive) or a positive height/width ratio."""
    try:
        return AspectRatio[value.upper()]
    except KeyError:
        pass
    try:
        ratio = float(value)
    except ValueError:
        presets = ", ".join(a.name for a in AspectRatio)
        raise argparse.ArgumentTypeError(f"expected a number or one of: {presets}")
    if ratio <= 0:
        raise argparse.ArgumentTypeError("aspect ratio must be positive")
    return ratio


def parse_args(argv=None):
    """Parse command line arguments"""
    parser = argparse.ArgumentParser(
        description='Detect distorted rectangles and correct perspective',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:

  # List ranked candidates
  python -m quad_detection -i photo.jpg

  # Rectify the second candidate to A4 proportions
  python -m quad_detection -i photo.jpg -o out.png --select 1 --aspect A4_PORTRAIT

Tuning values can also be set through QUAD_* environment variables
or a .env file, e.g. QUAD_CANNY_LOW=40.
        """
    )

    parser.add_argument('-i', '--input', required=True, help='Input image')
    parser.add_argument('-o', '--output', help='Write the rectified candidate to this file')
    parser.add_argument('--min-area', type=float, help='Minimum candidate area as ratio of the image')
    parser.add_argument('--max-results', type=int, help='Maximum number of candidates')
    parser.add_argument('--select', type=int, default=0, help='Candidate index to rectify (default: 0)')
    parser.add_argument('--aspect', type=parse_aspect, help='Output height/width ratio or preset name')
    parser.add_argument('--preview', help='Write an image with candidate outlines to this file')
    parser.add_argument('--debug', action='store_true', help='Verbose logging')

    return parser.parse_args(argv)


def main(argv=None) -> int:
    """Main CLI function"""
    args = parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )

    input_path = Path(args.input)
    if not input_path.exists():
        print(f"Error: Image not found: {input_path}")
        return 1

    image = cv2.imread(str(input_path))
    if image is None:
        print(f"Error: Failed to load image: {input_path}")
        return 1

    print(f"Image dimensions: {image.shape[1]}x{image.shape[0]} px")

    try:
        config = DetectionConfig.from_env()
    except ValueError as e:
        print(f"Error: {e}")
        return 1

    detector = QuadrilateralDetector(config)
    result = detector.detect(image, min_area_fraction=args.min_area, max_results=args.max_results)

    if not result.success:
        print(f"✗ Detection failed: {result.error_message}")
        return 1

    if not result.candidates:
        print("✗ No quadrilaterals detected, place the corners manually")
        return 1 if args.output else 0

    print(f"✓ {len(result.candidates)} candidate(s):")
    for i, quad in enumerate(result.candidates):
        corners = ", ".join(f"({p.x:.0f}, {p.y:.0f})" for p in quad.points())
        print(f"  [{i}] confidence={quad.confidence:.3f} area={quad.area:.0f}px2 corners={corners}")

    visualizer = CandidateVisualizer()
    preview = visualizer.visualize(image, result.candidates) if args.preview else None

    if args.output:
        if not 0 <= args.select < len(result.candidates):
            print(f"Error: --select must be between 0 and {len(result.candidates) - 1}")
            return 1

        plan = plan_correction(result.candidates[args.select], args.aspect)
        corrected = apply_correction(image, plan)
        cv2.imwrite(args.output, corrected)
        print(f"✓ Rectified {plan.output_size[0]}x{plan.output_size[1]} px saved: {args.output}")

        if preview is not None:
            preview = visualizer.create_side_by_side(preview, corrected)

    if preview is not None:
        cv2.imwrite(args.preview, preview)
        print(f"✓ Preview saved: {args.preview}")

    return 0


if __name__ == '__main__':
    sys.exit(main())
