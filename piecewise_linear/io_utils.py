# Standard library imports
import logging
import pickle

from pathlib import Path
from typing import Any, Union

# Third-party imports

# Local imports
from piecewise_linear.errors import InvalidBreakpointsError
from piecewise_linear.piecewise_linear_function import PiecewiseLinearFunction

logger = logging.getLogger(__name__)

def save_pickle(obj: Any, path: Union[str, Path]) -> None:
    """Save an object as a Pickle file. Creates directories if needed."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("wb") as f:
        pickle.dump(obj, f, protocol=pickle.HIGHEST_PROTOCOL)


def load_pickle(path: Union[str, Path]) -> Any:
    """Load an object from a Pickle file."""
    path = Path(path)
    with path.open("rb") as f:
        return pickle.load(f)


def save_function(f: PiecewiseLinearFunction, path: Union[str, Path]) -> None:
    """Save the breakpoints of f as a list of (x, y) pairs."""
    save_pickle(f.to_points(), path)
    logger.debug("Saved function with %d breakpoints to %s", len(f), path)


def load_function(path: Union[str, Path]) -> PiecewiseLinearFunction:
    """Load a function saved by save_function(), validating its breakpoints again."""
    points = load_pickle(path)
    try:
        return PiecewiseLinearFunction.from_points(points)
    except InvalidBreakpointsError:
        raise
    except (TypeError, ValueError) as e:
        raise InvalidBreakpointsError(f"{path} does not hold a list of (x, y) pairs") from e
