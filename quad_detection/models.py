"""
Value types shared across detection stages.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np

from common.bounds import Bounds


@dataclass(frozen=True)
class Point2D:
    """A point in image pixel coordinates."""
    x: float
    y: float

    def as_tuple(self) -> Tuple[float, float]:
        return (self.x, self.y)


@dataclass(frozen=True)
class DetectedQuadrilateral:
    """
    A ranked quadrilateral candidate with labelled corners.

    Taken in top-left, top-right, bottom-right, bottom-left order the
    corners form a convex polygon. `area` is in square pixels.
    """
    top_left: Point2D
    top_right: Point2D
    bottom_right: Point2D
    bottom_left: Point2D
    confidence: float
    area: float = 0.0

    def points(self) -> Tuple[Point2D, Point2D, Point2D, Point2D]:
        """Corners in TL, TR, BR, BL order."""
        return (self.top_left, self.top_right, self.bottom_right, self.bottom_left)

    def as_array(self) -> np.ndarray:
        """Corners as float32 array of shape (4, 2), TL, TR, BR, BL."""
        return np.array([p.as_tuple() for p in self.points()], dtype=np.float32)

    def scaled(self, scale_x: float, scale_y: float) -> "DetectedQuadrilateral":
        """Copy with every coordinate scaled; area scales by scale_x * scale_y."""
        def scale(p: Point2D) -> Point2D:
            return Point2D(p.x * scale_x, p.y * scale_y)

        return DetectedQuadrilateral(
            top_left=scale(self.top_left),
            top_right=scale(self.top_right),
            bottom_right=scale(self.bottom_right),
            bottom_left=scale(self.bottom_left),
            confidence=self.confidence,
            area=self.area * scale_x * scale_y,
        )


@dataclass(frozen=True)
class DetectionResult:
    """
    Outcome of one detection run.

    `candidates` is ordered by confidence, highest first. An empty tuple
    with success=True means nothing was detected.
    """
    success: bool
    candidates: Tuple[DetectedQuadrilateral, ...] = ()
    error_message: Optional[str] = None
    image_width: int = 0
    image_height: int = 0

    @classmethod
    def failure(cls, message: str, image_width: int = 0, image_height: int = 0) -> "DetectionResult":
        return cls(success=False, error_message=message, image_width=image_width, image_height=image_height)

    @property
    def best(self) -> Optional[DetectedQuadrilateral]:
        return self.candidates[0] if self.candidates else None

    @property
    def needs_manual_placement(self) -> bool:
        """True when the caller should fall back to manual corner placement."""
        return not self.success or not self.candidates


@dataclass(frozen=True)
class CorrectionPlan:
    """
    Point correspondence handed to the perspective warp.

    Both point sets are in TL, TR, BR, BL order.
    """
    source_points: Tuple[Point2D, Point2D, Point2D, Point2D]
    target_points: Tuple[Point2D, Point2D, Point2D, Point2D]

    @property
    def target_bounds(self) -> Bounds:
        return Bounds.from_points(self.target_points)

    @property
    def output_size(self) -> Tuple[int, int]:
        """(width, height) of the rectified region in whole pixels."""
        bounds = self.target_bounds
        return (max(1, int(round(bounds.width))), max(1, int(round(bounds.height))))

    def as_arrays(self) -> Tuple[np.ndarray, np.ndarray]:
        """Source and target points as float32 arrays of shape (4, 2)."""
        src = np.array([p.as_tuple() for p in self.source_points], dtype=np.float32)
        dst = np.array([p.as_tuple() for p in self.target_points], dtype=np.float32)
        return src, dst
