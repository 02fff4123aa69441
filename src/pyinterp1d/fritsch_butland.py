"""Fritsch-Butland monotone piecewise cubic interpolation.

The interpolant is local, C1 and monotone: on every segment whose
neighbouring secants agree in sign it stays within the range of the two
endpoint values, and it has a local extremum at every node where the data
changes direction.  Its downside is high tension, flattening the curve
unnaturally between the nodes.

References
----------
- Fritsch & Butland (1984), "A Method for Constructing Local Monotone
  Piecewise Cubic Interpolants", SIAM J. Sci. Stat. Comput. 5(2):300-304.
- Moler (2004), "Numerical Computing with MATLAB", Section 3.4 (pchip
  end conditions).
"""

from __future__ import annotations

import numpy as np

from pyinterp1d._segments import _check_samples, _secant_slopes
from pyinterp1d.cubic import _CubicInterpolator, _hermite_coefficients, _linear_coefficients


def _edge_derivative(xs: np.ndarray, slopes: np.ndarray, left_edge: bool) -> float:
    """One-sided three-point derivative estimate at the left or right edge.

    The estimate is set to zero if its sign disagrees with the edge secant,
    and limited to three times the edge secant when the data changes
    direction at the adjacent node; either case would overshoot.
    """
    if left_edge:
        d_edge, d_inner = slopes[0], slopes[1]
        x_edge, x_mid, x_inner = xs[0], xs[1], xs[2]
        h_edge = x_mid - x_edge
        h = x_inner - x_edge
        f = x_mid + x_inner - 2 * x_edge
    else:
        d_edge, d_inner = slopes[-1], slopes[-2]
        x_edge, x_mid, x_inner = xs[-1], xs[-2], xs[-3]
        h_edge = x_edge - x_mid
        h = x_edge - x_inner
        f = 2 * x_edge - x_inner - x_mid
    g = (f * d_edge - h_edge * d_inner) / h
    if g * d_edge <= 0:
        return 0.0
    if d_edge * d_inner <= 0 and abs(g) > 3 * abs(d_edge):
        return float(3 * d_edge)
    return float(g)


def fritsch_butland_derivatives(xs, ys) -> np.ndarray:
    """Estimate monotonicity-preserving derivatives at every node.

    Parameters
    ----------
    xs : array_like
        Strictly increasing abscissas, at least 2.
    ys : array_like
        Values at ``xs``.

    Returns
    -------
    ndarray
        One derivative per node.  Interior nodes where the neighbouring
        secants differ in sign (or one is zero) get exactly zero.

    Raises
    ------
    InterpolationError
        On invalid samples.
    """
    xs, ys = _check_samples(xs, ys)
    if len(xs) == 2:
        return np.full(2, _secant_slopes(xs, ys)[0])
    return _fritsch_butland_node_derivatives(xs, ys)


def _fritsch_butland_node_derivatives(xs: np.ndarray, ys: np.ndarray) -> np.ndarray:
    """Fritsch-Butland derivatives for validated samples of at least 3 points."""
    n = len(xs)
    slopes = _secant_slopes(xs, ys)
    dydxs = np.zeros(n)
    for i in range(1, n - 1):
        if slopes[i - 1] * slopes[i] > 0:
            # weighted harmonic mean of the two secants
            dydxs[i] = 3 * (xs[i + 1] - xs[i - 1]) / (
                (2 * xs[i + 1] - xs[i - 1] - xs[i]) / slopes[i - 1]
                + (xs[i + 1] + xs[i] - 2 * xs[i - 1]) / slopes[i]
            )
    dydxs[0] = _edge_derivative(xs, slopes, left_edge=True)
    dydxs[-1] = _edge_derivative(xs, slopes, left_edge=False)
    return dydxs


class FritschButland(_CubicInterpolator):
    """Monotone piecewise cubic C1 interpolant (Fritsch-Butland slopes).

    Examples
    --------
    >>> fb = FritschButland()
    >>> fb.fit([0, 2, 3, 4], [0, 1.5, 1.5, 2.5])
    >>> fb.predict(2.5)
    1.5
    >>> fb.predict_derivative(3.0)
    0.0
    """

    def _fit_coefficients(self, xs, ys):
        if len(xs) == 2:
            slope = _secant_slopes(xs, ys)[0]
            return _linear_coefficients(xs, ys), slope
        dydxs = _fritsch_butland_node_derivatives(xs, ys)
        return _hermite_coefficients(xs, ys, dydxs), dydxs[-1]
