"""
Synthetic scenes shared by the quad_detection tests.

Images are generated on the fly, so no test assets are required.
"""

import cv2
import numpy as np
import pytest


def _canvas(width: int, height: int, value: int = 30) -> np.ndarray:
    return np.full((height, width, 3), value, np.uint8)


def _fill_quad(image: np.ndarray, corners, color=(235, 235, 235)) -> np.ndarray:
    cv2.fillConvexPoly(image, np.array(corners, dtype=np.int32), color)
    return image


@pytest.fixture
def blank_image():
    """Uniform gray image without any edges"""
    return _canvas(400, 300, 128)


@pytest.fixture
def single_rectangle():
    """
    One bright axis-aligned rectangle covering 50% of a 400x300 frame.

    Returns (image, corners) with corners in TL, TR, BR, BL order.
    """
    image = _canvas(400, 300)
    corners = [(50, 50), (349, 50), (349, 249), (50, 249)]
    cv2.rectangle(image, corners[0], corners[2], (235, 235, 235), thickness=-1)
    return image, np.array(corners, dtype=np.float64)


@pytest.fixture
def tiny_rectangle():
    """A quadrilateral covering 1% of a 400x300 frame"""
    image = _canvas(400, 300)
    cv2.rectangle(image, (180, 135), (219, 164), (235, 235, 235), thickness=-1)
    return image


@pytest.fixture
def skewed_and_square():
    """
    A large skewed quadrilateral (~53% of the frame) and a square (10%).

    Returns (image, large_corners, square_corners).
    """
    image = _canvas(600, 400)
    large = [(20, 15), (400, 40), (390, 385), (30, 360)]
    square = [(435, 20), (590, 20), (590, 175), (435, 175)]
    _fill_quad(image, large)
    _fill_quad(image, square)
    return image, np.array(large, dtype=np.float64), np.array(square, dtype=np.float64)


@pytest.fixture
def many_squares():
    """Eight separated squares of different sizes, each above 2% of the frame"""
    image = _canvas(600, 400)
    sizes = [70, 80, 90, 100, 110, 120, 130, 125]
    for i, size in enumerate(sizes):
        col, row = i % 4, i // 4
        x = col * 150 + 10
        y = row * 200 + 20
        cv2.rectangle(image, (x, y), (x + size - 1, y + size - 1), (235, 235, 235), thickness=-1)
    return image
