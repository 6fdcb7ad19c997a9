"""
Visualization of ranked quadrilateral candidates
"""

import cv2
import numpy as np
from typing import Sequence, Tuple, Optional

from .models import DetectedQuadrilateral


CORNER_LABELS = ("TL", "TR", "BR", "BL")


class CandidateVisualizer:
    """
    Class for drawing detected candidates on an image.

    The best candidate gets a transparent fill, every candidate gets an
    outline, its rank and confidence, so a selection surface can show
    the user what was found.
    """

    def __init__(
        self,
        best_color: Tuple[int, int, int] = (255, 100, 0),  # Blue in BGR
        other_color: Tuple[int, int, int] = (0, 200, 255),  # Orange in BGR
        border_thickness: int = 3,
        overlay_color: Tuple[int, int, int] = (255, 200, 100),  # Light blue in BGR
        overlay_alpha: float = 0.3
    ):
        """
        Initialize the visualizer.

        Args:
            best_color: Outline color of the top-ranked candidate (BGR)
            other_color: Outline color of the remaining candidates (BGR)
            border_thickness: Outline thickness in pixels
            overlay_color: Fill color of the top-ranked candidate (BGR)
            overlay_alpha: Fill transparency (0.0 = transparent, 1.0 = opaque)
        """
        self.best_color = best_color
        self.other_color = other_color
        self.border_thickness = border_thickness
        self.overlay_color = overlay_color
        self.overlay_alpha = overlay_alpha

    def _put_text(self, image: np.ndarray, text: str, origin: Tuple[int, int]):
        # White outline, black text
        cv2.putText(image, text, origin, cv2.FONT_HERSHEY_SIMPLEX, 0.6, (255, 255, 255), 3, cv2.LINE_AA)
        cv2.putText(image, text, origin, cv2.FONT_HERSHEY_SIMPLEX, 0.6, (0, 0, 0), 1, cv2.LINE_AA)

    def draw_candidate(
        self,
        image: np.ndarray,
        quad: DetectedQuadrilateral,
        color: Tuple[int, int, int],
        label: Optional[str] = None,
        show_corner_labels: bool = False
    ) -> np.ndarray:
        """Draw one candidate outline in place and return the image."""
        corners = np.round(quad.as_array()).astype(np.int32)
        cv2.polylines(image, [corners], True, color, self.border_thickness, cv2.LINE_AA)

        for role, corner in zip(CORNER_LABELS, corners):
            cv2.circle(image, (int(corner[0]), int(corner[1])), radius=5, color=color, thickness=-1)
            if show_corner_labels:
                self._put_text(image, role, (int(corner[0]) + 6, int(corner[1]) - 6))

        if label:
            x, y = corners[0]
            self._put_text(image, label, (int(x) + 8, int(y) + 22))

        return image

    def visualize(
        self,
        image: np.ndarray,
        candidates: Sequence[DetectedQuadrilateral],
        draw_overlay: bool = True,
        show_corner_labels: bool = True
    ) -> np.ndarray:
        """
        Visualize ranked candidates on a copy of the image.

        Args:
            image: Input image (BGR or grayscale)
            candidates: Candidates ordered by confidence, highest first
            draw_overlay: Whether to fill the best candidate
            show_corner_labels: Whether to label the best candidate's corners

        Returns:
            BGR image with visualization
        """
        if image is None:
            return image

        result = image.copy()
        if result.ndim == 2:
            result = cv2.cvtColor(result, cv2.COLOR_GRAY2BGR)
        elif result.shape[2] == 4:
            result = cv2.cvtColor(result, cv2.COLOR_BGRA2BGR)

        if not candidates:
            return result

        if draw_overlay:
            overlay = result.copy()
            cv2.fillPoly(overlay, [np.round(candidates[0].as_array()).astype(np.int32)], self.overlay_color)
            result = cv2.addWeighted(overlay, self.overlay_alpha, result, 1 - self.overlay_alpha, 0)

        # Lower ranks first so the best outline ends up on top
        for rank in range(len(candidates) - 1, -1, -1):
            quad = candidates[rank]
            color = self.best_color if rank == 0 else self.other_color
            self.draw_candidate(
                result,
                quad,
                color,
                label=f"#{rank + 1} {quad.confidence:.2f}",
                show_corner_labels=show_corner_labels and rank == 0
            )

        return result

    def create_side_by_side(
        self,
        original: np.ndarray,
        visualized: np.ndarray
    ) -> np.ndarray:
        """
        Create an image with two images side by side.

        Args:
            original: Left image
            visualized: Right image, resized to the left image's height

        Returns:
            Combined image
        """
        if original is None or visualized is None:
            return original if original is not None else visualized

        if original.ndim == 2:
            original = cv2.cvtColor(original, cv2.COLOR_GRAY2BGR)
        if visualized.ndim == 2:
            visualized = cv2.cvtColor(visualized, cv2.COLOR_GRAY2BGR)

        if original.shape[0] != visualized.shape[0]:
            height = original.shape[0]
            width = max(1, int(visualized.shape[1] * height / visualized.shape[0]))
            visualized = cv2.resize(visualized, (width, height))

        return np.hstack([original, visualized])
