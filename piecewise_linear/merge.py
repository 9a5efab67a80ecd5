# Export
__all__ = ['MergeState', 'MergeEngine', 'points_of_inflection']

# Standard library imports
import enum
import logging

from typing import Iterable

# Third-party imports

# Local imports
from piecewise_linear.errors import DomainMismatchError, EmptyInputError
from piecewise_linear.numeric import CoordFloat, partial_compare
from piecewise_linear.priority_queue import PriorityQueue
from piecewise_linear.segments import Segment, SegmentCursor

logger = logging.getLogger(__name__)

class MergeState(enum.Enum):
    UNINITIALIZED = "uninitialized"
    STREAMING = "streaming"
    EXHAUSTED = "exhausted"

class MergeEngine:
    """
    Walks k functions sharing a domain in lockstep and yields their joint breakpoints
    (x, [y_1, ..., y_k]) in strictly ascending x, one per distinct breakpoint x of any input.

    A min-queue holds the end x of each cursor's current segment. Every pull pops the smallest
    end x, evaluates all current segments there and advances every cursor ending at that x.
    O(k log(k) n) for k functions of n breakpoints each.
    """
    def __init__(self, functions: Iterable) -> None:
        functions = list(functions)
        if len(functions) == 0:
            raise EmptyInputError("Cannot merge an empty collection of functions")
        domains = [f.domain() for f in functions]
        if any(domain != domains[0] for domain in domains[1:]):
            raise DomainMismatchError(domains)
        self.k = len(functions)
        self.cursors: list[SegmentCursor] = [f.segments() for f in functions]
        self.queue = PriorityQueue(partial_compare)
        self.state = MergeState.UNINITIALIZED

    def __iter__(self) -> "MergeEngine":
        return self

    def __next__(self) -> tuple[CoordFloat, list[CoordFloat]]:
        if self.state is MergeState.UNINITIALIZED:
            return self._initialize()
        if self.state is MergeState.EXHAUSTED:
            raise StopIteration
        return self._step()

    def _initialize(self) -> tuple[CoordFloat, list[CoordFloat]]:
        values = []
        for index, cursor in enumerate(self.cursors):
            segment = cursor.peek()
            self.queue.push(segment.end.x, index)
            values.append(segment.start.y)
        x = self.cursors[0].peek().start.x
        self.state = MergeState.STREAMING
        logger.debug("Merging %d functions from x=%s", self.k, x)
        return x, values

    def _step(self) -> tuple[CoordFloat, list[CoordFloat]]:
        x, index = self.queue.pop()
        values = [self._value_at(cursor.peek(), x) for cursor in self.cursors]

        # Every function with a breakpoint at x moves on to its next segment together
        ending = [index]
        while self.queue and self.queue.peek()[0] == x:
            ending.append(self.queue.pop()[1])
        for idx in ending:
            segment = self.cursors[idx].advance()
            if segment is not None:
                self.queue.push(segment.end.x, idx)

        if not self.queue:
            self.state = MergeState.EXHAUSTED
            logger.debug("Merge of %d functions exhausted at x=%s", self.k, x)
        return x, values

    @staticmethod
    def _value_at(segment: Segment, x: CoordFloat) -> CoordFloat:
        # Take stored values at the segment's own breakpoint to avoid interpolation error
        if x == segment.end.x:
            return segment.end.y
        return segment.y_at_x(x)

def points_of_inflection(functions: Iterable) -> MergeEngine:
    """
    Joint breakpoints of all passed functions, see MergeEngine.
    Raises DomainMismatchError if the functions do not share a domain.
    """
    return MergeEngine(functions)
