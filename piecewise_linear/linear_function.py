# Standard library imports
from typing import Optional

# Third-party imports

# Local imports
from piecewise_linear.numeric import CoordFloat

class LinearFunction:
    """
    f(x) = ax + b, with slope a and intercept b
    """
    def __init__(self, a: CoordFloat, b: CoordFloat) -> None:
        self.a = a
        self.b = b

    @classmethod
    def through(cls, x1: CoordFloat, y1: CoordFloat, x2: CoordFloat, y2: CoordFloat) -> "LinearFunction":
        assert x1 != x2
        a = (y2 - y1) / (x2 - x1)
        return cls(a, y1 - x1 * a)

    @classmethod
    def from_segment(cls, segment) -> "LinearFunction":
        return cls.through(segment.start.x, segment.start.y, segment.end.x, segment.end.y)

    def __repr__(self):
        return f"{self.a:.4f} * x + {self.b:.4f}"

    def __eq__(self, other) -> bool:
        if not isinstance(other, LinearFunction):
            return NotImplemented
        return self.a == other.a and self.b == other.b

    def __call__(self, x: CoordFloat) -> CoordFloat:
        return self.a * x + self.b

    """
    Intersection of the two infinite lines, or None when they are parallel
    """
    def intersect(self, other: "LinearFunction") -> Optional[tuple[CoordFloat, CoordFloat]]:
        if self.a == other.a:
            return None
        x = (other.b - self.b) / (self.a - other.a)
        return x, self(x)
