"""Akima spline: a local C1 cubic fitted without derivative input.

The derivative at each node is a weighted average of the two neighbouring
secant slopes, where each slope's weight is the variation of the slopes on
the *other* side.  This damps the wiggles a global spline produces near
abrupt changes in the data, at the cost of second-derivative continuity.

References
----------
- Akima (1970), "A New Method of Interpolation and Smooth Curve Fitting
  Based on Local Procedures", J. ACM 17(4):589-602.
- Rottinger (1999), PhD thesis, TU Wien, Section 4.4.2.
"""

from __future__ import annotations

from typing import Tuple

import numpy as np

from pyinterp1d._segments import _check_samples, _secant_slopes
from pyinterp1d.cubic import _CubicInterpolator, _hermite_coefficients, _linear_coefficients


def _akima_slopes(xs: np.ndarray, ys: np.ndarray) -> np.ndarray:
    """Return the ``n + 3`` slopes used by the Akima method.

    Entries ``2 .. n`` are the secant slopes of the data; two slopes on
    each side are extrapolated linearly from the nearest real ones.
    ``xs`` and ``ys`` must already be validated, with at least 3 points.
    """
    m = len(xs) + 3
    slopes = np.empty(m)
    slopes[2:m - 2] = _secant_slopes(xs, ys)
    slopes[0] = 3 * slopes[2] - 2 * slopes[3]
    slopes[1] = 2 * slopes[2] - slopes[3]
    slopes[m - 2] = 2 * slopes[m - 3] - slopes[m - 4]
    slopes[m - 1] = 3 * slopes[m - 3] - 2 * slopes[m - 4]
    return slopes


def _akima_weights(slopes: np.ndarray, i: int) -> Tuple[float, float]:
    """Left and right weights for the derivative at node ``i``."""
    w_left = abs(slopes[i + 2] - slopes[i + 3])
    w_right = abs(slopes[i + 1] - slopes[i])
    return w_left, w_right


def _akima_weighted_average(v1: float, v2: float, w1: float, w2: float) -> float:
    """Return ``(v1*w1 + v2*w2) / (w1 + w2)`` for non-negative weights.

    Falls back to the plain average when both weights are zero, which
    happens on flat or evenly sloped stretches of data.
    """
    w = w1 + w2
    if w > 0:
        return (v1 * w1 + v2 * w2) / w
    return 0.5 * v1 + 0.5 * v2


def akima_derivatives(xs, ys) -> np.ndarray:
    """Estimate the derivative at every node with Akima's rule.

    Parameters
    ----------
    xs : array_like
        Strictly increasing abscissas, at least 2.
    ys : array_like
        Values at ``xs``.

    Returns
    -------
    ndarray
        One derivative per node.  With exactly 2 nodes both equal the
        single secant slope.

    Raises
    ------
    InterpolationError
        On invalid samples.
    """
    xs, ys = _check_samples(xs, ys)
    if len(xs) == 2:
        return np.full(2, _secant_slopes(xs, ys)[0])
    return _akima_node_derivatives(xs, ys)


def _akima_node_derivatives(xs: np.ndarray, ys: np.ndarray) -> np.ndarray:
    """Akima derivatives for validated samples of at least 3 points."""
    slopes = _akima_slopes(xs, ys)
    dydxs = np.empty(len(xs))
    for i in range(len(xs)):
        w_left, w_right = _akima_weights(slopes, i)
        dydxs[i] = _akima_weighted_average(slopes[i + 1], slopes[i + 2], w_left, w_right)
    return dydxs


class AkimaSpline(_CubicInterpolator):
    """Piecewise cubic C1 interpolant fitted with Akima's slope rule.

    Examples
    --------
    >>> spl = AkimaSpline()
    >>> spl.fit([0, 1, 2, 3], [0, 1, 4, 9])
    >>> spl.predict(1.0)
    1.0
    >>> spl.predict(-5.0) == spl.predict(0.0)
    True
    """

    def _fit_coefficients(self, xs, ys):
        if len(xs) == 2:
            slope = _secant_slopes(xs, ys)[0]
            return _linear_coefficients(xs, ys), slope
        dydxs = _akima_node_derivatives(xs, ys)
        return _hermite_coefficients(xs, ys, dydxs), dydxs[-1]

