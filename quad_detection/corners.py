"""
Corner role assignment
"""

import logging

import numpy as np

from .contours import is_convex
from .models import DetectedQuadrilateral, Point2D
from .scoring import polygon_area

logger = logging.getLogger(__name__)


def assign_corners(polygon: np.ndarray, confidence: float = 0.0) -> DetectedQuadrilateral:
    """
    Label the four vertices of a quadrilateral.

    Top-left has the smallest x+y and bottom-right the largest. Of the two
    remaining vertices, top-right has the larger x-y and bottom-left is
    the other one. This assumes the shape is rotated less than about 45
    degrees; near 45 degrees the labels can come out swapped.

    Args:
        polygon: Array of shape (4, 2)
        confidence: Score to store on the result

    Returns:
        DetectedQuadrilateral with labelled corners

    Raises:
        ValueError: polygon does not have exactly 4 vertices
    """
    pts = np.asarray(polygon, dtype=np.float64).reshape(-1, 2)
    if len(pts) != 4:
        raise ValueError(f"Quadrilateral must have exactly 4 points, got {len(pts)}")

    sums = pts[:, 0] + pts[:, 1]
    tl_idx = int(np.argmin(sums))
    br_idx = int(np.argmax(sums))
    if tl_idx == br_idx:
        # All sums equal: fall back to index order so the roles stay distinct
        tl_idx, br_idx = 0, 2

    remaining = [i for i in range(4) if i not in (tl_idx, br_idx)]
    a, b = remaining
    diff_a = pts[a, 0] - pts[a, 1]
    diff_b = pts[b, 0] - pts[b, 1]
    tr_idx, bl_idx = (a, b) if diff_a >= diff_b else (b, a)

    ordered = pts[[tl_idx, tr_idx, br_idx, bl_idx]]
    if not is_convex(ordered):
        logger.warning("Corner labelling is not convex, the quadrilateral is probably rotated near 45 degrees")

    def point(idx: int) -> Point2D:
        return Point2D(float(pts[idx, 0]), float(pts[idx, 1]))

    return DetectedQuadrilateral(
        top_left=point(tl_idx),
        top_right=point(tr_idx),
        bottom_right=point(br_idx),
        bottom_left=point(bl_idx),
        confidence=float(confidence),
        area=polygon_area(ordered),
    )
