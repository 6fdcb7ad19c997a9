"""
Quadrilateral detector for images using OpenCV
"""

import logging
from pathlib import Path
from typing import Optional, Union

import cv2
import numpy as np

from .config import DetectionConfig, DEFAULT_CONFIG
from .contours import extract_contours, filter_quadrilaterals
from .corners import assign_corners
from .edges import build_edge_map
from .exceptions import InvalidImageError
from .models import DetectionResult
from .primitives import VisionPrimitives, OpenCVPrimitives
from .scoring import score_polygon, rank_candidates

logger = logging.getLogger(__name__)


class QuadrilateralDetector:
    """
    Class for detecting distorted rectangles (documents, signs,
    whiteboards) in images.

    Uses edge detection and contour approximation to propose convex
    quadrilaterals, then ranks them by confidence. Each call is independent
    and keeps no state, so one detector may be shared between threads.
    """

    def __init__(
        self,
        config: Optional[DetectionConfig] = None,
        primitives: Optional[VisionPrimitives] = None
    ):
        """
        Initialize the detector.

        Args:
            config: Detection tuning values, defaults to DetectionConfig()
            primitives: Image primitives, defaults to OpenCV
        """
        self.config = config or DEFAULT_CONFIG
        self.primitives = primitives or OpenCVPrimitives()

    def detect(
        self,
        image: np.ndarray,
        min_area_fraction: Optional[float] = None,
        max_results: Optional[int] = None
    ) -> DetectionResult:
        """
        Detect quadrilateral candidates in the image.

        Never raises for bad input or processing failures: a failed
        automatic detection must leave manual corner placement available,
        so errors come back as success=False with a message.

        Args:
            image: Input image (BGR, BGRA or grayscale), not modified
            min_area_fraction: Overrides config.min_area_fraction
            max_results: Overrides config.max_results

        Returns:
            DetectionResult with candidates ordered by confidence.
            success=True with no candidates means nothing was found.
        """
        height, width = _image_size(image)

        try:
            config = self.config.with_overrides(
                min_area_fraction=min_area_fraction,
                max_results=max_results
            )

            edges = build_edge_map(image, config, self.primitives)
            image_area = float(width * height)

            polygons = extract_contours(edges, config, self.primitives)
            quads = filter_quadrilaterals(polygons, image_area, config.min_area_fraction)
            scored = [(quad, score_polygon(quad, image_area, config)) for quad in quads]
            ranked = rank_candidates(scored, config.max_results)

            candidates = tuple(assign_corners(quad, confidence) for quad, confidence in ranked)
        except InvalidImageError as e:
            logger.info("Detection skipped: %s", e)
            return DetectionResult.failure(str(e), width, height)
        except Exception as e:
            logger.exception("Quadrilateral detection failed")
            return DetectionResult.failure(f"Error detecting quadrilaterals: {e}", width, height)

        logger.info(
            "Detected %d quadrilateral(s) in %dx%d image%s",
            len(candidates), width, height,
            f", best confidence {candidates[0].confidence:.3f}" if candidates else ""
        )
        return DetectionResult(
            success=True,
            candidates=candidates,
            image_width=width,
            image_height=height,
        )

    def detect_file(
        self,
        image_path: Union[str, Path],
        min_area_fraction: Optional[float] = None,
        max_results: Optional[int] = None
    ) -> DetectionResult:
        """
        Load an image with OpenCV and detect quadrilaterals in it.

        Missing or undecodable files give success=False.
        """
        image_path = Path(image_path)
        if not image_path.exists():
            return DetectionResult.failure(f"Invalid image: file not found: {image_path}")

        image = cv2.imread(str(image_path), cv2.IMREAD_COLOR)
        if image is None:
            return DetectionResult.failure(f"Invalid image: failed to decode {image_path}")

        return self.detect(image, min_area_fraction, max_results)


def _image_size(image) -> tuple:
    if isinstance(image, np.ndarray) and image.ndim >= 2:
        return int(image.shape[0]), int(image.shape[1])
    return 0, 0


def detect(
    image: np.ndarray,
    min_area_fraction: Optional[float] = None,
    max_results: Optional[int] = None,
    config: Optional[DetectionConfig] = None,
    primitives: Optional[VisionPrimitives] = None
) -> DetectionResult:
    """Detect quadrilateral candidates with a one-off QuadrilateralDetector."""
    return QuadrilateralDetector(config, primitives).detect(image, min_area_fraction, max_results)
