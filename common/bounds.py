class Bounds:
    def __init__ (self, left, top, width, height):
        self.left = left
        self.top = top
        self.width = width
        self.height = height

    @classmethod
    def from_points(cls, points) -> "Bounds":
        """
        Build the smallest axis-aligned Bounds enclosing the given points.

        Parameters:
        - points: iterable of (x, y) pairs or objects with x / y attributes.

        Returns:
        - Bounds: bounding rectangle of the points.
        """
        xs = []
        ys = []
        for point in points:
            x, y = (point.x, point.y) if hasattr(point, "x") else point
            xs.append(float(x))
            ys.append(float(y))

        if not xs:
            raise ValueError("Cannot compute bounds of an empty point set")

        return cls(min(xs), min(ys), max(xs) - min(xs), max(ys) - min(ys))

    def __str__(self) -> str:
        return f"Bounds({self.left}, {self.top}, {self.width}, {self.height})"

    @property
    def right(self):
        return self.left + self.width

    @property
    def bottom(self):
        return self.top + self.height

    def corners(self) -> list[tuple[float, float]]:
        """
        Corners in top-left, top-right, bottom-right, bottom-left order.
        """
        return [
            (self.left, self.top),
            (self.right, self.top),
            (self.right, self.bottom),
            (self.left, self.bottom),
        ]

    def with_height(self, height) -> "Bounds":
        return Bounds(self.left, self.top, self.width, height)

    def area(self):
        """
        Calculate the area of the Bounds object.

        Returns:
        - float: The area of the Bounds object.
        """
        return self.width * self.height
