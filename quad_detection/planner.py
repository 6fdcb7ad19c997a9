"""
Perspective correction planning
"""

from enum import Enum
from typing import Optional, Tuple, Union

from common.bounds import Bounds
from .models import CorrectionPlan, DetectedQuadrilateral, Point2D


class AspectRatio(Enum):
    """Standard output shapes, value is height / width."""
    SQUARE = 1.0
    LETTER_PORTRAIT = 11.0 / 8.5
    LETTER_LANDSCAPE = 8.5 / 11.0
    A4_PORTRAIT = 297.0 / 210.0
    A4_LANDSCAPE = 210.0 / 297.0
    US_DOLLAR_BILL_PORTRAIT = 6.14 / 2.61
    US_DOLLAR_BILL_LANDSCAPE = 2.61 / 6.14


def plan_correction(
    quad: DetectedQuadrilateral,
    aspect_ratio: Optional[Union[AspectRatio, float]] = None
) -> CorrectionPlan:
    """
    Derive the source -> target correspondence for rectifying a candidate.

    The target is the axis-aligned bounding rectangle of the four corners.
    With aspect_ratio (height / width) the rectangle keeps its origin and
    width and its height becomes width * aspect_ratio.

    Args:
        quad: Confirmed candidate
        aspect_ratio: Optional output shape

    Returns:
        CorrectionPlan with both point sets in TL, TR, BR, BL order
    """
    source = quad.points()
    bounds = Bounds.from_points(source)

    if aspect_ratio is not None:
        ratio = aspect_ratio.value if isinstance(aspect_ratio, AspectRatio) else float(aspect_ratio)
        if ratio <= 0:
            raise ValueError(f"aspect_ratio must be positive, got {ratio}")
        bounds = bounds.with_height(bounds.width * ratio)

    target = tuple(Point2D(float(x), float(y)) for x, y in bounds.corners())
    return CorrectionPlan(source_points=source, target_points=target)


def scale_to_display(
    quad: DetectedQuadrilateral,
    image_size: Tuple[float, float],
    display_size: Tuple[float, float]
) -> DetectedQuadrilateral:
    """
    Map a candidate from image pixels to preview coordinates.

    Args:
        quad: Candidate in image coordinates
        image_size: (width, height) of the source image
        display_size: (width, height) of the preview surface

    Returns:
        Scaled copy, confidence unchanged
    """
    image_w, image_h = image_size
    display_w, display_h = display_size
    if image_w <= 0 or image_h <= 0:
        raise ValueError(f"image_size must be positive, got {image_size}")

    return quad.scaled(display_w / image_w, display_h / image_h)
