"""
Image primitives used by the detection pipeline.

The pipeline only talks to VisionPrimitives, so tests can swap in fakes
and another imaging library can be plugged in without touching the
detection logic. OpenCVPrimitives is the production adapter.
"""

from abc import ABC, abstractmethod
from typing import List, Tuple

import cv2
import numpy as np


class VisionPrimitives(ABC):
    """Pure image operations required by detection and correction."""

    @abstractmethod
    def to_luminance(self, image: np.ndarray) -> np.ndarray:
        """Single-channel uint8 luminance of a grayscale, BGR or BGRA image."""

    @abstractmethod
    def smooth(self, gray: np.ndarray, kernel_size: int) -> np.ndarray:
        """Blur with a square kernel_size x kernel_size kernel."""

    @abstractmethod
    def detect_edges(self, gray: np.ndarray, low: int, high: int) -> np.ndarray:
        """Binary edge mask from a two-threshold gradient detector."""

    @abstractmethod
    def dilate(self, mask: np.ndarray, kernel_size: int, iterations: int) -> np.ndarray:
        """Grow the foreground of a binary mask."""

    @abstractmethod
    def trace_contours(self, edges: np.ndarray) -> List[np.ndarray]:
        """Outer closed boundaries of the mask, each as an (N, 2) float array."""

    @abstractmethod
    def approximate_polygon(self, contour: np.ndarray, epsilon: float) -> np.ndarray:
        """Douglas-Peucker simplification of a closed contour, (M, 2) float array."""

    @abstractmethod
    def warp_perspective(
        self,
        image: np.ndarray,
        source: np.ndarray,
        target: np.ndarray,
        size: Tuple[int, int]
    ) -> np.ndarray:
        """Map the 4 source points onto the 4 target points, output (width, height) = size."""


class OpenCVPrimitives(VisionPrimitives):
    """VisionPrimitives backed by OpenCV."""

    def to_luminance(self, image: np.ndarray) -> np.ndarray:
        if image.dtype != np.uint8:
            image = cv2.normalize(image, None, 0, 255, cv2.NORM_MINMAX).astype(np.uint8)

        if image.ndim == 2:
            return image
        if image.shape[2] == 1:
            return image[:, :, 0]
        if image.shape[2] == 4:
            return cv2.cvtColor(image, cv2.COLOR_BGRA2GRAY)
        return cv2.cvtColor(image, cv2.COLOR_BGR2GRAY)

    def smooth(self, gray: np.ndarray, kernel_size: int) -> np.ndarray:
        return cv2.GaussianBlur(gray, (kernel_size, kernel_size), 0)

    def detect_edges(self, gray: np.ndarray, low: int, high: int) -> np.ndarray:
        return cv2.Canny(gray, low, high)

    def dilate(self, mask: np.ndarray, kernel_size: int, iterations: int) -> np.ndarray:
        if iterations == 0:
            return mask
        kernel = cv2.getStructuringElement(cv2.MORPH_RECT, (kernel_size, kernel_size))
        return cv2.dilate(mask, kernel, iterations=iterations)

    def trace_contours(self, edges: np.ndarray) -> List[np.ndarray]:
        contours, _ = cv2.findContours(
            edges,
            cv2.RETR_EXTERNAL,
            cv2.CHAIN_APPROX_SIMPLE
        )
        return [c.reshape(-1, 2).astype(np.float32) for c in contours]

    def approximate_polygon(self, contour: np.ndarray, epsilon: float) -> np.ndarray:
        approx = cv2.approxPolyDP(contour.astype(np.float32).reshape(-1, 1, 2), epsilon, True)
        return approx.reshape(-1, 2).astype(np.float64)

    def warp_perspective(
        self,
        image: np.ndarray,
        source: np.ndarray,
        target: np.ndarray,
        size: Tuple[int, int]
    ) -> np.ndarray:
        matrix = cv2.getPerspectiveTransform(
            np.asarray(source, dtype=np.float32),
            np.asarray(target, dtype=np.float32)
        )
        return cv2.warpPerspective(image, matrix, size)
