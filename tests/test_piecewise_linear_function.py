import math

import numpy as np
import pytest

from piecewise_linear.errors import InvalidBreakpointsError, InvalidDomainError
from piecewise_linear.piecewise_linear_function import ExpandDomainStrategy, PiecewiseLinearFunction
from piecewise_linear.segments import Breakpoint, Segment


# CONSTRUCTION ###############################################################

def test_construct_from_pairs(f):
    assert f.to_points() == [(0., 0.), (1., 1.), (2., 1.5)]
    assert f.breakpoints[1] == Breakpoint(1., 1.)
    assert len(f) == 3
    assert list(f) == [Breakpoint(0., 0.), Breakpoint(1., 1.), Breakpoint(2., 1.5)]


@pytest.mark.parametrize("points", [
    [],
    [(0., 1.)],
    [(0., 0.), (0., 1.)],
    [(1., 0.), (0., 1.)],
    [(0., 0.), (2., 1.), (1., 2.)],
    [(0., 0.), (math.nan, 1.)],
])
def test_invalid_breakpoints_rejected(points):
    with pytest.raises(InvalidBreakpointsError):
        PiecewiseLinearFunction(points)


def test_from_arrays():
    f = PiecewiseLinearFunction.from_arrays(np.array([0., 1., 2.]), np.array([0., 1., 1.5]))
    assert f == PiecewiseLinearFunction.from_points([(0., 0.), (1., 1.), (2., 1.5)])
    xs, ys = f.to_arrays()
    np.testing.assert_array_equal(xs, [0., 1., 2.])
    np.testing.assert_array_equal(ys, [0., 1., 1.5])


def test_from_arrays_shape_mismatch():
    with pytest.raises(InvalidBreakpointsError):
        PiecewiseLinearFunction.from_arrays(np.array([0., 1., 2.]), np.array([0., 1.]))
    with pytest.raises(InvalidBreakpointsError):
        PiecewiseLinearFunction.from_arrays(np.zeros((2, 2)), np.zeros((2, 2)))


def test_constant():
    assert PiecewiseLinearFunction.constant((-25., -13.), 1.) == PiecewiseLinearFunction([(-25., 1.), (-13., 1.)])
    with pytest.raises(InvalidDomainError):
        PiecewiseLinearFunction.constant((0.5, 0.5), 1.)
    with pytest.raises(InvalidDomainError):
        PiecewiseLinearFunction.constant((0.5, -0.5), 1.)


def test_breakpoints_are_read_only(f):
    with pytest.raises(AttributeError):
        f.breakpoints = ()
    with pytest.raises(TypeError):
        f.breakpoints[0] = Breakpoint(5., 5.)


def test_equality_and_hash(f):
    same = PiecewiseLinearFunction([(0., 0.), (1., 1.), (2., 1.5)])
    assert f == same
    assert hash(f) == hash(same)
    assert f != PiecewiseLinearFunction([(0., 0.), (2., 1.5)])
    assert f != [(0., 0.), (1., 1.), (2., 1.5)]


def test_is_close(f):
    nudged = PiecewiseLinearFunction([(0., 1e-12), (1., 1.), (2., 1.5 + 1e-12)])
    assert f.is_close(nudged)
    assert not f.is_close(PiecewiseLinearFunction([(0., 0.), (1., 1.1), (2., 1.5)]))
    assert not f.is_close(PiecewiseLinearFunction([(0., 0.), (2., 1.5)]))


def test_repr(f):
    assert repr(f) == "PiecewiseLinearFunction(\n  (0.0000, 0.0000),\n  (1.0000, 1.0000),\n  (2.0000, 1.5000)\n)"


# QUERIES ####################################################################

def test_domain():
    assert PiecewiseLinearFunction.constant((-4., 5.25), 8.2).domain() == (-4., 5.25)
    f = PiecewiseLinearFunction([(-math.inf, -1.), (0., 0.), (math.inf, 0.)])
    assert f.domain() == (-math.inf, math.inf)


def test_same_domain(f, g):
    assert f.has_same_domain_as(g)
    assert not f.has_same_domain_as(PiecewiseLinearFunction.constant((0., 3.), 0.))


def test_segment_at_x(wide_function):
    assert wide_function.segment_at_x(1.5) == Segment(Breakpoint(1., 2.), Breakpoint(2., 3.))
    assert wide_function.segment_at_x(1.) == Segment(Breakpoint(0.1, 1.), Breakpoint(1., 2.))
    assert wide_function.segment_at_x(-5.25) == Segment(Breakpoint(-5.25, -1.7976931348623157e308), Breakpoint(-math.pi / 2, 0.1))
    assert wide_function.segment_at_x(-6.) is None


def test_y_at_x(f):
    assert f.y_at_x(1.25) == 1.125
    assert f.y_at_x(0.) == 0.
    assert f.y_at_x(1.) == 1.
    assert f.y_at_x(2.) == 1.5
    assert f(0.5) == 0.5


@pytest.mark.parametrize("x", [-0.1, 2.1, math.inf, -math.inf, math.nan])
def test_y_at_x_outside_domain_is_none(f, x):
    assert f.y_at_x(x) is None
    assert f.segment_at_x(x) is None


def test_sample(f):
    np.testing.assert_allclose(f.sample([0.5, 1.25, 2., 3.]), [0.5, 1.125, 1.5, np.nan])


def test_integrate(f):
    assert f.integrate() == pytest.approx(1.75)
    assert PiecewiseLinearFunction.constant((0., 3.), 2.).integrate() == pytest.approx(6.)
    assert PiecewiseLinearFunction([(0., -1.), (2., 1.)]).integrate() == pytest.approx(0.)


# DOMAIN OPERATIONS ##########################################################

def test_shrink_domain(wide_function):
    first_val = Segment(Breakpoint(-math.pi / 3, 0.1 + np.finfo(float).eps), Breakpoint(0.1, 1.)).y_at_x(0.)
    assert wide_function.shrink_domain((0., math.inf)) == PiecewiseLinearFunction([
        (0., first_val),
        (0.1, 1.),
        (1., 2.),
        (2., 3.),
        (3., 4.),
        (math.inf, -math.inf),
    ])


def test_shrink_domain_inside(f):
    assert f.shrink_domain((0.5, 1.5)) == PiecewiseLinearFunction([(0.5, 0.5), (1., 1.), (1.5, 1.25)])
    assert f.shrink_domain((0.25, 0.75)) == PiecewiseLinearFunction([(0.25, 0.25), (0.75, 0.75)])
    assert f.shrink_domain((1., 2.)) == PiecewiseLinearFunction([(1., 1.), (2., 1.5)])
    assert f.shrink_domain((0., 2.)) == f


@pytest.mark.parametrize("domain", [(-1., 1.), (1., 3.), (-1., 3.), (1., 1.), (1.5, 0.5)])
def test_shrink_domain_rejects_non_subsets(f, domain):
    with pytest.raises(InvalidDomainError):
        f.shrink_domain(domain)


def test_expand_domain(f):
    # No expansion
    assert f.expand_domain((0., 2.), ExpandDomainStrategy.EXTEND_SEGMENT) == f

    # Left expansion
    assert f.expand_domain((-1., 2.), ExpandDomainStrategy.EXTEND_SEGMENT) == \
        PiecewiseLinearFunction([(-1., -1.), (1., 1.), (2., 1.5)])
    assert f.expand_domain((-1., 2.), ExpandDomainStrategy.EXTEND_VALUE) == \
        PiecewiseLinearFunction([(-1., 0.), (0., 0.), (1., 1.), (2., 1.5)])

    # Right expansion
    assert f.expand_domain((0., 4.), ExpandDomainStrategy.EXTEND_SEGMENT) == \
        PiecewiseLinearFunction([(0., 0.), (1., 1.), (4., 2.5)])
    assert f.expand_domain((0., 4.), ExpandDomainStrategy.EXTEND_VALUE) == \
        PiecewiseLinearFunction([(0., 0.), (1., 1.), (2., 1.5), (4., 1.5)])

    # Both sides
    assert f.expand_domain((-1., 4.), ExpandDomainStrategy.EXTEND_VALUE) == \
        PiecewiseLinearFunction([(-1., 0.), (0., 0.), (1., 1.), (2., 1.5), (4., 1.5)])


def test_expand_two_point_function(ascending):
    assert ascending.expand_domain((-1., 2.)) == PiecewiseLinearFunction([(-1., -1.), (2., 2.)])


def test_expand_domain_rejects_non_supersets(f):
    with pytest.raises(InvalidDomainError):
        f.expand_domain((0.5, 3.))
