class PiecewiseLinearError(ValueError):
    """Base class for recoverable failures raised by piecewise linear operations."""

class InvalidBreakpointsError(PiecewiseLinearError):
    """Fewer than two breakpoints, or x-values that are not strictly increasing."""

class DomainMismatchError(PiecewiseLinearError):
    """Operands of a k-ary operation do not share the same domain."""
    def __init__(self, domains: list[tuple]) -> None:
        self.domains = domains
        super().__init__(f"Functions do not share a domain: {domains}")

class InvalidDomainError(PiecewiseLinearError):
    """A requested domain is empty, degenerate, or not a subset of the current one."""

class EmptyInputError(PiecewiseLinearError):
    """An operation over a collection of functions received none."""
