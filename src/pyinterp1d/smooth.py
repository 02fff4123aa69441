"""Globally smooth (C2) cubic splines: natural, clamped and not-a-knot.

The second derivatives ``m[0..n-1]`` at the nodes are the solution of a
banded linear system.  Rows ``1..n-2`` make the first derivative continuous
at the interior nodes:

    m[i-1]*dx[i-1]/6 + m[i]*(dx[i-1] + dx[i])/3 + m[i+1]*dx[i]/6
        = slope[i] - slope[i-1]

and the first and last rows carry the boundary condition, which is what
distinguishes the three classes below.  The system is stored in the
diagonal-ordered form expected by :func:`scipy.linalg.solve_banded`.

References
----------
- de Boor (2001), "A Practical Guide to Splines", Springer, Chapter IV.
- Press et al. (2007), "Numerical Recipes", 3rd ed., Section 3.3.
"""

from __future__ import annotations

import enum
from typing import List, Tuple

import numpy as np
from scipy.linalg import LinAlgError, solve_banded

from pyinterp1d._errors import SingularMatrixError
from pyinterp1d.cubic import _CubicInterpolator, _spline_coefficients


class BoundaryCondition(enum.Enum):
    """End conditions closing the second-derivative system."""

    NATURAL = "natural"
    CLAMPED = "clamped"
    NOT_A_KNOT = "not-a-knot"


def _set_band(ab: np.ndarray, upper: int, i: int, j: int, value: float) -> None:
    """Store ``a[i, j] = value`` in diagonal-ordered banded storage."""
    ab[upper + i - j, j] = value


def _second_derivative_equations(xs: np.ndarray, ys: np.ndarray,
                                 lower: int, upper: int) -> Tuple[np.ndarray, np.ndarray]:
    """Assemble the interior rows of the second-derivative system.

    Parameters
    ----------
    xs, ys : ndarray
        Validated nodes and values.
    lower, upper : int
        Number of sub- and super-diagonals of the banded storage (>= 1).

    Returns
    -------
    ab : ndarray of shape (lower + upper + 1, n)
        Banded matrix with rows 0 and n-1 left zero.
    b : ndarray of shape (n,)
        Right-hand side with entries 0 and n-1 left zero.
    """
    n = len(xs)
    ab = np.zeros((lower + upper + 1, n))
    b = np.zeros(n)
    if n > 2:
        dx = np.diff(xs)
        slopes = np.diff(ys) / dx
        rows = np.arange(1, n - 1)
        ab[upper + 1, rows - 1] = dx[:-1] / 6
        ab[upper, rows] = (dx[:-1] + dx[1:]) / 3
        ab[upper - 1, rows + 1] = dx[1:] / 6
        b[rows] = slopes[1:] - slopes[:-1]
    return ab, b


def _solve_banded(lower: int, upper: int, ab: np.ndarray, b: np.ndarray) -> np.ndarray:
    """Solve the banded system, reporting singularity as SingularMatrixError."""
    try:
        return solve_banded((lower, upper), ab, b, check_finite=False)
    except LinAlgError as err:
        raise SingularMatrixError(str(err)) from err


class _SmoothCubic(_CubicInterpolator):
    """Cubic spline with continuous first and second derivatives.

    Subclasses fix the boundary condition by filling rows 0 and n-1 of the
    system in :meth:`_apply_boundary_conditions`.
    """

    boundary_condition: BoundaryCondition
    _lower = 1
    _upper = 1

    def _apply_boundary_conditions(self, ab: np.ndarray, b: np.ndarray,
                                   xs: np.ndarray, ys: np.ndarray) -> None:
        raise NotImplementedError

    def _fit_coefficients(self, xs, ys):
        ab, b = _second_derivative_equations(xs, ys, self._lower, self._upper)
        self._apply_boundary_conditions(ab, b, xs, ys)
        d2ydx2s = _solve_banded(self._lower, self._upper, ab, b)
        return _spline_coefficients(xs, ys, d2ydx2s)

    def _summary_lines(self) -> List[str]:
        lines = super()._summary_lines()
        lines.insert(1, f"  Boundary:    {self.boundary_condition.value}")
        return lines

    def __repr__(self) -> str:
        nodes = len(self._cubic._xs) if self.is_fitted else 0
        return (
            f"{type(self).__name__}("
            f"nodes={nodes}, "
            f"boundary={self.boundary_condition.value}, "
            f"fitted={self.is_fitted})"
        )


class NaturalCubic(_SmoothCubic):
    """C2 cubic spline with ``y''(xs[0]) = y''(xs[-1]) = 0``.

    Examples
    --------
    >>> nc = NaturalCubic()
    >>> nc.fit([-1, 0, 2, 3.5], [2, 0, 2, 1.5])
    >>> round(nc.predict(-0.5), 4)
    0.7664
    """

    boundary_condition = BoundaryCondition.NATURAL

    def _apply_boundary_conditions(self, ab, b, xs, ys):
        m = len(xs) - 1
        _set_band(ab, self._upper, 0, 0, 1.0)
        _set_band(ab, self._upper, m, m, 1.0)
        b[0] = 0.0
        b[m] = 0.0


class ClampedCubic(_SmoothCubic):
    """C2 cubic spline with ``y'(xs[0]) = y'(xs[-1]) = 0``.

    The end derivative of the first segment is
    ``slope[0] - dx[0]*(2*m[0] + m[1])/6``; setting it to zero gives the
    first row, and symmetrically the last.
    """

    boundary_condition = BoundaryCondition.CLAMPED

    def _apply_boundary_conditions(self, ab, b, xs, ys):
        u = self._upper
        dx_left = xs[1] - xs[0]
        b[0] = (ys[1] - ys[0]) / dx_left
        _set_band(ab, u, 0, 0, dx_left / 3)
        _set_band(ab, u, 0, 1, dx_left / 6)
        m = len(xs) - 1
        dx_right = xs[m] - xs[m - 1]
        b[m] = (ys[m] - ys[m - 1]) / dx_right
        _set_band(ab, u, m, m, -dx_right / 3)
        _set_band(ab, u, m, m - 1, -dx_right / 6)


class NotAKnotCubic(_SmoothCubic):
    """C2 cubic spline whose third derivative is continuous at the first
    and last interior nodes.

    Needs at least 3 nodes.  With exactly 3 the two conditions would act on
    the same node, so the second derivative is made constant instead and
    the fit is the interpolating parabola.
    """

    boundary_condition = BoundaryCondition.NOT_A_KNOT
    _min_points = 3
    _lower = 2
    _upper = 2

    def _apply_boundary_conditions(self, ab, b, xs, ys):
        u = self._upper
        dx_outer = xs[1] - xs[0]
        dx_inner = xs[2] - xs[1]
        _set_band(ab, u, 0, 0, 1 / dx_outer)
        _set_band(ab, u, 0, 1, -1 / dx_outer - 1 / dx_inner)
        _set_band(ab, u, 0, 2, 1 / dx_inner)
        m = len(xs) - 1
        if m > 2:
            dx_outer = xs[m] - xs[m - 1]
            dx_inner = xs[m - 1] - xs[m - 2]
            _set_band(ab, u, m, m, 1 / dx_outer)
            _set_band(ab, u, m, m - 1, -1 / dx_outer - 1 / dx_inner)
            _set_band(ab, u, m, m - 2, 1 / dx_inner)
        else:
            _set_band(ab, u, m, m, 1.0)
            _set_band(ab, u, m, m - 1, -1.0)
        b[0] = 0.0
        b[m] = 0.0
