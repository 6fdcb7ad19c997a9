"""
Tests for edge map construction, contour extraction and quadrilateral filtering
"""

import cv2
import numpy as np
import pytest

from quad_detection import DetectionConfig, InvalidImageError, VisionPrimitives
from quad_detection.contours import (
    closed_perimeter,
    extract_contours,
    filter_quadrilaterals,
    is_convex,
)
from quad_detection.edges import build_edge_map


class RecordingPrimitives(VisionPrimitives):
    """Fake primitives returning canned contours and recording calls"""

    def __init__(self, contours=()):
        self.contours = [np.asarray(c, dtype=np.float64) for c in contours]
        self.epsilons = []
        self.calls = []

    def to_luminance(self, image):
        self.calls.append("luminance")
        return image if image.ndim == 2 else image[:, :, 0]

    def smooth(self, gray, kernel_size):
        self.calls.append(("smooth", kernel_size))
        return gray

    def detect_edges(self, gray, low, high):
        self.calls.append(("edges", low, high))
        return gray

    def dilate(self, mask, kernel_size, iterations):
        self.calls.append(("dilate", kernel_size, iterations))
        return mask

    def trace_contours(self, edges):
        return list(self.contours)

    def approximate_polygon(self, contour, epsilon):
        self.epsilons.append(epsilon)
        return contour

    def warp_perspective(self, image, source, target, size):
        raise NotImplementedError


SQUARE = [[10, 10], [60, 10], [60, 60], [10, 60]]
TRIANGLE = [[0, 0], [50, 0], [25, 40]]
PENTAGON = [[0, 0], [40, 0], [50, 30], [20, 50], [-10, 30]]
BOWTIE = [[0, 0], [50, 50], [50, 0], [0, 50]]
CONCAVE = [[0, 0], [50, 0], [20, 20], [0, 50]]


class TestEdgeMap:
    def test_pipeline_order_and_parameters(self):
        primitives = RecordingPrimitives()
        config = DetectionConfig(blur_kernel_size=7, canny_low=30, canny_high=90, dilate_iterations=2)
        build_edge_map(np.zeros((20, 30, 3), np.uint8), config, primitives)

        assert primitives.calls == [
            "luminance",
            ("smooth", 7),
            ("edges", 30, 90),
            ("dilate", 3, 2),
        ]

    def test_edge_map_shape(self, single_rectangle):
        image, _ = single_rectangle
        edges = build_edge_map(image)
        assert edges.shape == image.shape[:2]
        assert edges.dtype == np.uint8
        assert np.count_nonzero(edges) > 0

    def test_blank_image_has_no_edges(self, blank_image):
        assert np.count_nonzero(build_edge_map(blank_image)) == 0

    def test_bgra_input(self, single_rectangle):
        image, _ = single_rectangle
        bgra = np.dstack([image, np.full(image.shape[:2], 255, np.uint8)])
        assert np.count_nonzero(build_edge_map(bgra)) > 0

    @pytest.mark.parametrize("image", [
        None,
        np.array([]),
        np.zeros((0, 5), np.uint8),
        np.zeros((5,), np.uint8),
        np.zeros((4, 4, 2), np.uint8),
        [[0, 0], [0, 0]],
    ])
    def test_invalid_images(self, image):
        with pytest.raises(InvalidImageError):
            build_edge_map(image)


class TestExtractContours:
    def test_perimeter(self):
        assert closed_perimeter(np.array(SQUARE)) == pytest.approx(200.0)
        assert closed_perimeter(np.array([[1, 1]])) == 0.0

    def test_epsilon_scales_with_perimeter(self):
        small = np.array(SQUARE, dtype=np.float64)
        large = small * 4
        primitives = RecordingPrimitives([small, large])
        polygons = extract_contours(np.zeros((10, 10), np.uint8), DetectionConfig(), primitives)

        assert len(polygons) == 2
        assert primitives.epsilons == pytest.approx([0.02 * 200, 0.02 * 800])

    def test_keeps_tracing_order(self):
        primitives = RecordingPrimitives([TRIANGLE, SQUARE, PENTAGON])
        polygons = extract_contours(np.zeros((10, 10), np.uint8), DetectionConfig(), primitives)
        assert [len(p) for p in polygons] == [3, 4, 5]

    def test_skips_degenerate_contours(self):
        primitives = RecordingPrimitives([[[5, 5]], SQUARE])
        polygons = extract_contours(np.zeros((10, 10), np.uint8), DetectionConfig(), primitives)
        assert len(polygons) == 1

    def test_outer_contours_only(self, single_rectangle):
        """A frame drawn inside the rectangle must not produce a second contour"""
        image, _ = single_rectangle
        image = image.copy()
        cv2.rectangle(image, (120, 100), (280, 200), (30, 30, 30), thickness=4)
        polygons = extract_contours(build_edge_map(image))
        assert len(polygons) == 1

    def test_real_rectangle_simplifies_to_four_points(self, single_rectangle):
        image, _ = single_rectangle
        polygons = extract_contours(build_edge_map(image))
        assert len(polygons) == 1
        assert polygons[0].shape == (4, 2)


class TestFilterQuadrilaterals:
    def test_convexity(self):
        assert is_convex(np.array(SQUARE))
        assert is_convex(np.array(SQUARE[::-1]))
        assert not is_convex(np.array(BOWTIE))
        assert not is_convex(np.array(CONCAVE))
        assert not is_convex(np.array([[0, 0], [10, 0], [20, 0], [10, 10]]))
        assert not is_convex(np.array([[0, 0], [1, 1]]))

    def test_keeps_only_convex_quads(self):
        polygons = [np.array(p, dtype=np.float64) for p in (TRIANGLE, SQUARE, PENTAGON, BOWTIE, CONCAVE)]
        kept = filter_quadrilaterals(polygons, image_area=10000, min_area_fraction=0.02)
        assert len(kept) == 1
        np.testing.assert_array_equal(kept[0], SQUARE)

    def test_area_threshold(self):
        square = np.array(SQUARE, dtype=np.float64)  # area 2500
        assert len(filter_quadrilaterals([square], image_area=100000, min_area_fraction=0.02)) == 1
        assert len(filter_quadrilaterals([square], image_area=100000, min_area_fraction=0.03)) == 0

    def test_empty_input(self):
        assert filter_quadrilaterals([], image_area=1000) == []
