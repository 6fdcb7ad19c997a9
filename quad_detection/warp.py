"""
Hands a CorrectionPlan to the perspective warp
"""

import logging
from typing import Optional

import numpy as np

from .models import CorrectionPlan
from .primitives import VisionPrimitives, OpenCVPrimitives

logger = logging.getLogger(__name__)


def apply_correction(
    image: np.ndarray,
    plan: CorrectionPlan,
    crop: bool = True,
    primitives: Optional[VisionPrimitives] = None
) -> np.ndarray:
    """
    Rectify an image according to a correction plan.

    The warp runs on a canvas large enough to hold both the image and the
    target rectangle, so the target keeps its pixel coordinates.

    Args:
        image: Source image, not modified
        plan: Source -> target correspondence
        crop: Return only the target rectangle instead of the whole canvas
        primitives: Image primitives, defaults to OpenCV

    Returns:
        Rectified image
    """
    primitives = primitives or OpenCVPrimitives()
    source, target = plan.as_arrays()
    bounds = plan.target_bounds

    canvas_w = max(image.shape[1], int(np.ceil(bounds.right)))
    canvas_h = max(image.shape[0], int(np.ceil(bounds.bottom)))

    logger.debug("Warping %dx%d image onto %dx%d canvas", image.shape[1], image.shape[0], canvas_w, canvas_h)
    warped = primitives.warp_perspective(image, source, target, (canvas_w, canvas_h))

    if not crop:
        return warped

    left = max(0, int(round(bounds.left)))
    top = max(0, int(round(bounds.top)))
    width, height = plan.output_size
    return warped[top:top + height, left:left + width]
