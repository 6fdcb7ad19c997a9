import pytest

from common.bounds import Bounds


class TestClass:
    def test_bounds1(self):
        bounds = Bounds(0, 0, 10, 10)
        assert bounds.left == 0 and bounds.top == 0 and bounds.width == 10 and bounds.height == 10

    def test_bounds2(self):
        bounds = Bounds(0, 0, 10, 10)
        assert bounds.area() == 100

    def test_bounds_right_bottom(self):
        bounds = Bounds(2, 3, 10, 20)
        assert bounds.right == 12 and bounds.bottom == 23

    def test_bounds_from_tuples(self):
        bounds = Bounds.from_points([(5, 7), (1, 9), (4, 2)])
        assert (bounds.left, bounds.top, bounds.right, bounds.bottom) == (1, 2, 5, 9)

    def test_bounds_from_objects(self):
        class P:
            def __init__(self, x, y):
                self.x = x
                self.y = y

        bounds = Bounds.from_points([P(10, 10), P(30, 5), P(25, 40)])
        assert (bounds.left, bounds.top, bounds.width, bounds.height) == (10, 5, 20, 35)

    def test_bounds_from_empty(self):
        with pytest.raises(ValueError):
            Bounds.from_points([])

    def test_bounds_corners(self):
        bounds = Bounds(1, 2, 3, 4)
        assert bounds.corners() == [(1, 2), (4, 2), (4, 6), (1, 6)]

    def test_bounds_with_height(self):
        bounds = Bounds(1, 2, 3, 4).with_height(9)
        assert (bounds.left, bounds.top, bounds.width, bounds.height) == (1, 2, 3, 9)
        assert str(bounds) == "Bounds(1, 2, 3, 9)"
