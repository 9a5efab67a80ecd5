# Export
__all__ = ['Breakpoint', 'Segment', 'SegmentCursor']

# Standard library imports
from typing import Iterator, NamedTuple, Optional, Sequence

# Third-party imports

# Local imports
from piecewise_linear.linear_function import LinearFunction
from piecewise_linear.numeric import CoordFloat

class Breakpoint(NamedTuple):
    x: CoordFloat
    y: CoordFloat

class Segment(NamedTuple):
    """
    View of the line between two consecutive breakpoints, start.x < end.x
    """
    start: Breakpoint
    end: Breakpoint

    @property
    def slope(self) -> CoordFloat:
        return (self.end.y - self.start.y) / (self.end.x - self.start.x)

    def y_at_x(self, x: CoordFloat) -> CoordFloat:
        return self.start.y + (x - self.start.x) * self.slope

    def to_linear_function(self) -> LinearFunction:
        return LinearFunction.from_segment(self)

    """
    Restriction of this segment to domain, or None if the overlap is empty or a single point
    """
    def restricted_to(self, domain: tuple[CoordFloat, CoordFloat]) -> Optional["Segment"]:
        lo, hi = domain
        if self.end.x <= lo or self.start.x >= hi:
            return None
        left = self.start if self.start.x >= lo else Breakpoint(lo, self.y_at_x(lo))
        right = self.end if self.end.x <= hi else Breakpoint(hi, self.y_at_x(hi))
        return Segment(left, right)

class SegmentCursor:
    """
    Walks the segments of one function, one per pair of consecutive breakpoints.
    peek() shows the current segment without consuming it; advance() moves on.
    A cursor cannot be rewound, build a new one to traverse again.
    """
    def __init__(self, breakpoints: Sequence[Breakpoint]) -> None:
        assert len(breakpoints) >= 2
        self._breakpoints = breakpoints
        self._index = 0

    def peek(self) -> Optional[Segment]:
        if self._index + 1 >= len(self._breakpoints):
            return None
        return Segment(self._breakpoints[self._index], self._breakpoints[self._index + 1])

    def advance(self) -> Optional[Segment]:
        if self._index + 1 < len(self._breakpoints):
            self._index += 1
        return self.peek()

    def exhausted(self) -> bool:
        return self._index + 1 >= len(self._breakpoints)

    def __iter__(self) -> Iterator[Segment]:
        return self

    def __next__(self) -> Segment:
        segment = self.peek()
        if segment is None:
            raise StopIteration
        self._index += 1
        return segment
