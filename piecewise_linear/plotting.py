# Standard library imports
from typing import Iterable, Optional

# Third-party imports
import matplotlib.pyplot as plt

# Local imports
from piecewise_linear.piecewise_linear_function import PiecewiseLinearFunction

def plot_function(f: PiecewiseLinearFunction, ax: Optional[plt.Axes] = None, label: Optional[str] = None, **style) -> plt.Axes:
    """Draw f as a polyline with a marker on every breakpoint."""
    if ax is None:
        _, ax = plt.subplots()
    style.setdefault("marker", "o")
    style.setdefault("markersize", 3)
    xs, ys = f.to_arrays()
    ax.plot(xs, ys, label=label, **style)
    return ax

def plot_functions(
        functions: Iterable[PiecewiseLinearFunction],
        labels: Optional[list[str]] = None,
        ax: Optional[plt.Axes] = None
    ) -> plt.Axes:
    functions = list(functions)
    if labels is not None:
        assert len(labels) == len(functions)
    if ax is None:
        _, ax = plt.subplots()
    for idx, f in enumerate(functions):
        plot_function(f, ax=ax, label=labels[idx] if labels is not None else None)
    if labels is not None:
        ax.legend()
    ax.set_xlabel("x")
    ax.set_ylabel("y")
    return ax
