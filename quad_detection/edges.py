"""
Edge map construction
"""

import logging
from typing import Optional

import numpy as np

from .config import DetectionConfig, DEFAULT_CONFIG
from .exceptions import InvalidImageError
from .primitives import VisionPrimitives, OpenCVPrimitives

logger = logging.getLogger(__name__)


def validate_image(image) -> None:
    """
    Fail fast on input that cannot be processed.

    Raises:
        InvalidImageError: image is None, not an array, has zero area
            or an unsupported number of dimensions
    """
    if image is None:
        raise InvalidImageError("no image data")
    if not isinstance(image, np.ndarray):
        raise InvalidImageError("expected a numpy array", details=f"type={type(image).__name__}")
    if image.ndim not in (2, 3):
        raise InvalidImageError("expected a 2D or 3D array", details=f"shape={image.shape}")
    if image.size == 0 or image.shape[0] == 0 or image.shape[1] == 0:
        raise InvalidImageError("image has zero area", details=f"shape={image.shape}")
    if image.ndim == 3 and image.shape[2] not in (1, 3, 4):
        raise InvalidImageError("unsupported channel count", details=f"channels={image.shape[2]}")


def build_edge_map(
    image: np.ndarray,
    config: DetectionConfig = DEFAULT_CONFIG,
    primitives: Optional[VisionPrimitives] = None
) -> np.ndarray:
    """
    Convert an image to a binary edge mask suitable for contour tracing.

    Steps: luminance, Gaussian blur (suppresses sensor noise that would
    fragment contours), Canny edges, one dilation pass to bridge small gaps
    caused by uneven lighting.

    Args:
        image: Input image (grayscale, BGR or BGRA), not modified
        config: Detection tuning values
        primitives: Image primitives, defaults to OpenCV

    Returns:
        uint8 edge mask with the same height and width as the image
    """
    validate_image(image)
    primitives = primitives or OpenCVPrimitives()

    gray = primitives.to_luminance(image)
    blurred = primitives.smooth(gray, config.blur_kernel_size)
    edges = primitives.detect_edges(blurred, config.canny_low, config.canny_high)
    edges = primitives.dilate(edges, config.dilate_kernel_size, config.dilate_iterations)

    logger.debug(
        "Edge map %dx%d: %d edge pixels",
        edges.shape[1], edges.shape[0], int(np.count_nonzero(edges))
    )
    return edges
