"""
Contour extraction and quadrilateral filtering
"""

import logging
from typing import List, Optional, Sequence

import numpy as np

from .config import DetectionConfig, DEFAULT_CONFIG
from .primitives import VisionPrimitives, OpenCVPrimitives
from .scoring import polygon_area

logger = logging.getLogger(__name__)


def closed_perimeter(contour: np.ndarray) -> float:
    """Length of the closed polyline through the contour points."""
    pts = np.asarray(contour, dtype=np.float64).reshape(-1, 2)
    if len(pts) < 2:
        return 0.0
    return float(np.linalg.norm(np.roll(pts, -1, axis=0) - pts, axis=1).sum())


def extract_contours(
    edges: np.ndarray,
    config: DetectionConfig = DEFAULT_CONFIG,
    primitives: Optional[VisionPrimitives] = None
) -> List[np.ndarray]:
    """
    Trace outer boundaries in an edge mask and simplify each one.

    Nested boundaries (printed text, inner frames) are not returned. The
    approximation tolerance is approx_epsilon times the contour's own
    perimeter, so large and small shapes are simplified alike.

    Args:
        edges: Binary edge mask
        config: Detection tuning values
        primitives: Image primitives, defaults to OpenCV

    Returns:
        Simplified polygons as (N, 2) arrays, in tracing order
    """
    primitives = primitives or OpenCVPrimitives()

    polygons = []
    for contour in primitives.trace_contours(edges):
        perimeter = closed_perimeter(contour)
        if perimeter == 0:
            continue
        approx = primitives.approximate_polygon(contour, config.approx_epsilon * perimeter)
        polygons.append(np.asarray(approx, dtype=np.float64).reshape(-1, 2))

    logger.debug("Traced %d contours", len(polygons))
    return polygons


def is_convex(polygon: np.ndarray) -> bool:
    """
    True if every turn around the polygon goes the same way.

    Collinear consecutive edges (zero cross product) count as degenerate.
    """
    pts = np.asarray(polygon, dtype=np.float64).reshape(-1, 2)
    if len(pts) < 3:
        return False

    edge_in = pts - np.roll(pts, 1, axis=0)
    edge_out = np.roll(pts, -1, axis=0) - pts
    cross = edge_in[:, 0] * edge_out[:, 1] - edge_in[:, 1] * edge_out[:, 0]

    return bool(np.all(cross > 0) or np.all(cross < 0))


def filter_quadrilaterals(
    polygons: Sequence[np.ndarray],
    image_area: float,
    min_area_fraction: float = DEFAULT_CONFIG.min_area_fraction
) -> List[np.ndarray]:
    """
    Keep only convex 4-vertex polygons that are large enough.

    Dropping shapes is expected here: a photo may contain dozens of
    contours and only a few will pass.

    Args:
        polygons: Simplified polygons
        image_area: Width * height of the source image
        min_area_fraction: Minimum polygon area as ratio of image_area

    Returns:
        Surviving polygons, each of shape (4, 2), in input order
    """
    min_area = min_area_fraction * image_area
    kept = []

    for i, polygon in enumerate(polygons):
        pts = np.asarray(polygon, dtype=np.float64).reshape(-1, 2)

        if len(pts) != 4:
            logger.debug("Contour %d rejected: %d vertices", i, len(pts))
            continue
        if not is_convex(pts):
            logger.debug("Contour %d rejected: not convex", i)
            continue

        area = polygon_area(pts)
        if area < min_area:
            logger.debug("Contour %d rejected: area %.0f < %.0f", i, area, min_area)
            continue

        kept.append(pts)

    logger.debug("%d of %d contours are quadrilateral candidates", len(kept), len(polygons))
    return kept
