# Standard library imports
from typing import Protocol

# Third-party imports

# Local imports

class CoordFloat(Protocol):
    """
    Numeric capability needed by the core: arithmetic, sign negation and ordering.
    float, numpy.float64 and numpy.float32 all qualify.
    """
    def __add__(self, other): ...
    def __sub__(self, other): ...
    def __mul__(self, other): ...
    def __truediv__(self, other): ...
    def __neg__(self): ...
    def __lt__(self, other) -> bool: ...
    def __le__(self, other) -> bool: ...
    def __eq__(self, other) -> bool: ...

def partial_compare(a: CoordFloat, b: CoordFloat) -> int:
    """Three-way comparison where pairs that cannot be ordered (NaN) compare as equal."""
    if a < b:
        return -1
    if b < a:
        return 1
    return 0

def argmax(values: list[CoordFloat]) -> tuple[int, CoordFloat]:
    """Index and value of the first maximal element, scanning left to right."""
    assert len(values) > 0
    i_largest = 0
    largest = values[0]
    for i in range(1, len(values)):
        if partial_compare(values[i], largest) > 0:
            i_largest = i
            largest = values[i]
    return i_largest, largest
