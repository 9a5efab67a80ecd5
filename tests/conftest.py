import math

import matplotlib
matplotlib.use("Agg")

import numpy as np
import pytest

from piecewise_linear.piecewise_linear_function import PiecewiseLinearFunction


@pytest.fixture
def f():
    return PiecewiseLinearFunction([(0., 0.), (1., 1.), (2., 1.5)])


@pytest.fixture
def g():
    return PiecewiseLinearFunction([(0., 0.), (1.5, 3.), (2., 10.)])


@pytest.fixture
def descending():
    return PiecewiseLinearFunction([(0., 1.), (1., 0.)])


@pytest.fixture
def ascending():
    return PiecewiseLinearFunction([(0., 0.), (1., 1.)])


@pytest.fixture
def wide_function():
    """Function with extreme and infinite coordinates."""
    return PiecewiseLinearFunction([
        (-5.25, -1.7976931348623157e308),
        (-math.pi / 2, 0.1),
        (-math.pi / 3, 0.1 + np.finfo(float).eps),
        (0.1, 1.),
        (1., 2.),
        (2., 3.),
        (3., 4.),
        (math.inf, -math.inf),
    ])


@pytest.fixture
def random_function():
    """Factory for random functions on a fixed domain, seeded per call."""
    def make(seed: int, n: int = 8, domain: tuple = (0., 10.)) -> PiecewiseLinearFunction:
        rng = np.random.default_rng(seed)
        inner = rng.uniform(domain[0], domain[1], size=n)
        xs = np.unique(np.concatenate([[domain[0]], inner, [domain[1]]]))
        ys = rng.normal(0., 5., size=len(xs))
        return PiecewiseLinearFunction.from_arrays(xs, ys)
    return make
