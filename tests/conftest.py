"""Shared test fixtures for PyInterp1D tests."""

import math

import numpy as np
import pytest

from pyinterp1d import AkimaSpline, FritschButland, NaturalCubic


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def numerical_derivative(predictor, x0, x1, x, h=1e-8):
    """Central difference of ``predictor.predict`` kept inside [x0, x1]."""
    lo = max(x0, x - h)
    hi = min(x1, x + h)
    return (predictor.predict(hi) - predictor.predict(lo)) / (hi - lo)


def interior_points(xs, per_segment=20):
    """Evenly spaced points strictly inside every segment of ``xs``."""
    pts = []
    for lo, hi in zip(xs[:-1], xs[1:]):
        step = (hi - lo) / (per_segment + 1)
        pts.extend(lo + k * step for k in range(1, per_segment + 1))
    return np.array(pts)


def cubic_poly(x):
    """4x^3 - 2x^2 + 10x - 7"""
    return 4 * x**3 - 2 * x**2 + 10 * x - 7


def cubic_poly_derivative(x):
    return 12 * x**2 - 4 * x + 10


# ---------------------------------------------------------------------------
# Data sets
# ---------------------------------------------------------------------------

# Widely varying slope: compares how the methods trade smoothness for wiggle.
WIGGLY_XS = [0, 1, 2, 3, 4, 5, 6, 7, 8, 9, 10, 11]
WIGGLY_YS = [0, 0.001, 0.002, 0.1, 1, 2, 2.5, -10, -10.01, 2.49, 2.53, 2.55]

IRREGULAR_XS = [-5, -3, -2, -1.5, -1, 0.5, 1.5, 2.5, 3]


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def natural_reference():
    """Natural cubic spline through (-1, 2), (0, 0), (2, 2), (3.5, 1.5)."""
    nc = NaturalCubic()
    nc.fit([-1, 0, 2, 3.5], [2, 0, 2, 1.5])
    return nc


@pytest.fixture
def akima_sin():
    """Akima spline of sin(x) on an irregular grid."""
    ys = [math.sin(x) for x in IRREGULAR_XS]
    spl = AkimaSpline()
    spl.fit(IRREGULAR_XS, ys)
    return spl


@pytest.fixture
def fritsch_butland_wiggly():
    """Fritsch-Butland interpolant of the wiggly data set."""
    fb = FritschButland()
    fb.fit(WIGGLY_XS, WIGGLY_YS)
    return fb
