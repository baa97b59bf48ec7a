"""
Pan/crop geometry.
A keyframe's bounds are four corner points in video-resolution pixels.
"""
from typing import List, NamedTuple, Tuple


class Vertex(NamedTuple):
    x: float
    y: float


class Rectangle(NamedTuple):
    """Four corners, clockwise from top-left."""

    top_left: Vertex
    top_right: Vertex
    bottom_right: Vertex
    bottom_left: Vertex

    @classmethod
    def full_frame(cls, width: float, height: float) -> "Rectangle":
        """Bounds covering the whole video frame."""
        return cls(
            Vertex(0, 0),
            Vertex(width, 0),
            Vertex(width, height),
            Vertex(0, height),
        )

    @property
    def width(self) -> float:
        return self.top_right.x - self.top_left.x

    @property
    def height(self) -> float:
        return self.bottom_left.y - self.top_left.y

    @property
    def center(self) -> Vertex:
        xs = [corner.x for corner in self]
        ys = [corner.y for corner in self]
        return Vertex(sum(xs) / 4, sum(ys) / 4)

    def scale_by(self, scale_x: float, scale_y: float) -> "Rectangle":
        """
        Scale every corner about the rectangle's center.

        A factor below 1 shrinks the bounds, which zooms the video in.
        """
        cx, cy = self.center
        return Rectangle(*(
            Vertex(cx + (corner.x - cx) * scale_x, cy + (corner.y - cy) * scale_y)
            for corner in self
        ))

    def move_by(self, dx: float, dy: float) -> "Rectangle":
        """Translate all four corners by the same vector."""
        return Rectangle(*(Vertex(corner.x + dx, corner.y + dy) for corner in self))

    def to_dict(self) -> List[List[float]]:
        return [[corner.x, corner.y] for corner in self]

    @classmethod
    def from_dict(cls, data) -> "Rectangle":
        """
        Build a rectangle from four ``[x, y]`` pairs.

        Raises:
            ValueError: If the payload is not four numeric pairs
        """
        if not isinstance(data, (list, tuple)) or len(data) != 4:
            raise ValueError("bounds must be a list of four [x, y] corners")
        corners: List[Tuple[float, float]] = []
        for point in data:
            if not isinstance(point, (list, tuple)) or len(point) != 2:
                raise ValueError(f"corner must be an [x, y] pair, got {point!r}")
            corners.append((float(point[0]), float(point[1])))
        return cls(*(Vertex(x, y) for x, y in corners))
