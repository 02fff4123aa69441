"""Piecewise cubic polynomials with continuous value and first derivative.

:class:`PiecewiseCubic` is the single representation shared by every cubic
fitter in the package.  Segment ``i`` holds the polynomial

    p_i(x) = a0 + a1*dx + a2*dx**2 + a3*dx**3,   dx = x - xs[i]

stored as row ``i`` of an ``(n - 1, 4)`` coefficient table, plus the value
and derivative at the last node.  The fitters in :mod:`pyinterp1d.akima`,
:mod:`pyinterp1d.fritsch_butland` and :mod:`pyinterp1d.smooth` only differ
in how they compute that table; evaluation is always done here.

Extrapolation is flat: below ``xs[0]`` the first node's value and
derivative are returned, at and above ``xs[-1]`` the last node's.
"""

from __future__ import annotations

import time
from typing import List, Tuple

import numpy as np

from pyinterp1d._segments import _check_samples, _secant_slopes, find_segment, find_segments
from pyinterp1d._serialization import _SerializableMixin


# ----------------------------------------------------------------------
# Coefficient construction
# ----------------------------------------------------------------------

def _hermite_coefficients(xs: np.ndarray, ys: np.ndarray,
                          dydxs: np.ndarray) -> np.ndarray:
    """Coefficients of the cubic Hermite interpolant.

    On each segment ``a2`` and ``a3`` solve the two equations that match
    value and derivative at the right endpoint, given ``a0 = ys[i]`` and
    ``a1 = dydxs[i]``.

    Parameters
    ----------
    xs, ys, dydxs : ndarray
        Validated nodes, values and derivatives of equal length n >= 2.

    Returns
    -------
    ndarray of shape (n - 1, 4)
        Coefficient table.
    """
    dx = np.diff(xs)
    dy = np.diff(ys)
    left, right = dydxs[:-1], dydxs[1:]
    coeffs = np.empty((len(xs) - 1, 4))
    coeffs[:, 0] = ys[:-1]
    coeffs[:, 1] = left
    coeffs[:, 2] = (3 * dy - (2 * left + right) * dx) / dx / dx
    coeffs[:, 3] = (-2 * dy + (left + right) * dx) / dx / dx / dx
    return coeffs


def _linear_coefficients(xs: np.ndarray, ys: np.ndarray) -> np.ndarray:
    """Coefficients of the piecewise linear interpolant (``a2 = a3 = 0``)."""
    coeffs = np.zeros((len(xs) - 1, 4))
    coeffs[:, 0] = ys[:-1]
    coeffs[:, 1] = _secant_slopes(xs, ys)
    return coeffs


def _spline_coefficients(xs: np.ndarray, ys: np.ndarray,
                         d2ydx2s: np.ndarray) -> Tuple[np.ndarray, float]:
    """Coefficients of the cubic matching values and second derivatives.

    This alone does not make the first derivative continuous; that is the
    job of the linear system whose solution ``d2ydx2s`` is.

    Parameters
    ----------
    xs, ys, d2ydx2s : ndarray
        Validated nodes, values and second derivatives of equal length.

    Returns
    -------
    coeffs : ndarray of shape (n - 1, 4)
        Coefficient table.
    last_dydx : float
        Derivative of the last segment at ``xs[-1]``.
    """
    dx = np.diff(xs)
    dy = np.diff(ys)
    dm = np.diff(d2ydx2s)
    coeffs = np.empty((len(xs) - 1, 4))
    coeffs[:, 0] = ys[:-1]
    coeffs[:, 1] = (dy - (d2ydx2s[:-1] + dm / 3) * dx * dx / 2) / dx
    coeffs[:, 2] = d2ydx2s[:-1] / 2
    coeffs[:, 3] = dm / 6 / dx
    h = dx[-1]
    a = coeffs[-1]
    last_dydx = a[1] + 2 * a[2] * h + 3 * a[3] * h * h
    return coeffs, float(last_dydx)


# ----------------------------------------------------------------------
# Representation and evaluation
# ----------------------------------------------------------------------

class PiecewiseCubic(_SerializableMixin):
    """Piecewise cubic 1-D interpolant with continuous value and derivative.

    Constructed empty and populated by :meth:`fit_with_derivatives`, or by
    one of the fitters that own a ``PiecewiseCubic``.  A fit either
    replaces the whole state or, on error, leaves it untouched.

    Notes
    -----
    ``predict`` and friends only read state and may be called from several
    threads on a fitted instance.  Fitting while another thread predicts or
    fits the same instance must be serialized by the caller.

    Examples
    --------
    >>> pc = PiecewiseCubic()
    >>> pc.fit_with_derivatives([-1, 0, 1], [3, 1, 1], [-3, -1, 2])
    >>> pc.coeffs.tolist()
    [[3.0, -3.0, 1.0, 0.0], [1.0, -1.0, 0.0, 1.0]]
    >>> pc.predict(0.5)
    0.625
    """

    def __init__(self):
        self._xs: np.ndarray | None = None
        self._coeffs: np.ndarray | None = None
        self._last_y = 0.0
        self._last_dydx = 0.0
        self._fit_time = 0.0

    def fit_with_derivatives(self, xs, ys, dydxs, verbose: bool = False) -> None:
        """Fit to ``(x, y, dy/dx)`` triples.

        Parameters
        ----------
        xs : array_like
            Strictly increasing abscissas, at least 2.
        ys : array_like
            Values at ``xs``.
        dydxs : array_like
            First derivatives at ``xs``.
        verbose : bool, optional
            If True, print fit progress.  Default is False.

        Raises
        ------
        InterpolationError
            If the arrays are not 1-D, differ in length, hold fewer than 2
            points, or ``xs`` is not strictly increasing.
        """
        start = time.time()
        xs, ys, dydxs = _check_samples(xs, ys, dydxs)
        if verbose:
            print(
                f"Fitting PiecewiseCubic to {len(xs)} nodes "
                f"({len(xs) - 1} segments)..."
            )
        self._assign(xs, _hermite_coefficients(xs, ys, dydxs), ys[-1], dydxs[-1])
        self._fit_time = time.time() - start
        if verbose:
            print(f"Fit complete in {self._fit_time:.3f}s")

    def _assign(self, xs: np.ndarray, coeffs: np.ndarray,
                last_y: float, last_dydx: float) -> None:
        """Replace the whole fitted state in one step."""
        self._xs = xs
        self._coeffs = coeffs
        self._last_y = float(last_y)
        self._last_dydx = float(last_dydx)

    def _check_fitted(self, method: str) -> None:
        if self._coeffs is None:
            raise RuntimeError(
                f"Call fit_with_derivatives() before {method}()."
            )

    def predict(self, x: float) -> float:
        """Return the interpolated value at ``x``.

        Parameters
        ----------
        x : float
            Any real abscissa; values outside the data range are
            extrapolated flat.

        Returns
        -------
        float
            Interpolated value.

        Raises
        ------
        RuntimeError
            If the interpolant has not been fitted.
        """
        self._check_fitted("predict")
        i = find_segment(self._xs, x)
        if i < 0:
            return float(self._coeffs[0, 0])
        if i == len(self._coeffs):
            return self._last_y
        dx = x - self._xs[i]
        a = self._coeffs[i]
        return float(((a[3] * dx + a[2]) * dx + a[1]) * dx + a[0])

    def predict_derivative(self, x: float) -> float:
        """Return the interpolated first derivative at ``x``.

        At an interior node the derivative of the right-hand segment is
        returned; the fit makes both sides agree.

        Parameters
        ----------
        x : float
            Any real abscissa.

        Returns
        -------
        float
            Interpolated derivative.

        Raises
        ------
        RuntimeError
            If the interpolant has not been fitted.
        """
        self._check_fitted("predict_derivative")
        i = find_segment(self._xs, x)
        if i < 0:
            return float(self._coeffs[0, 1])
        if i == len(self._coeffs):
            return self._last_dydx
        dx = x - self._xs[i]
        a = self._coeffs[i]
        return float((3 * a[3] * dx + 2 * a[2]) * dx + a[1])

    def _segment_view(self, x) -> Tuple[np.ndarray, np.ndarray, np.ndarray, np.ndarray]:
        """Vectorised lookup: (dx, coefficient rows, below mask, above mask)."""
        x = np.asarray(x, dtype=float)
        i = find_segments(self._xs, x)
        m = len(self._coeffs)
        seg = np.clip(i, 0, m - 1)
        dx = x - self._xs[seg]
        return dx, self._coeffs[seg], i < 0, i >= m

    def predict_batch(self, x) -> np.ndarray:
        """Evaluate :meth:`predict` at every element of ``x``.

        Parameters
        ----------
        x : array_like
            Abscissas of any shape.

        Returns
        -------
        ndarray
            Interpolated values, same shape as ``x``.
        """
        self._check_fitted("predict_batch")
        dx, a, below, above = self._segment_view(x)
        values = ((a[..., 3] * dx + a[..., 2]) * dx + a[..., 1]) * dx + a[..., 0]
        values = np.where(below, self._coeffs[0, 0], values)
        return np.where(above, self._last_y, values)

    def predict_derivative_batch(self, x) -> np.ndarray:
        """Evaluate :meth:`predict_derivative` at every element of ``x``."""
        self._check_fitted("predict_derivative_batch")
        dx, a, below, above = self._segment_view(x)
        values = (3 * a[..., 3] * dx + 2 * a[..., 2]) * dx + a[..., 1]
        values = np.where(below, self._coeffs[0, 1], values)
        return np.where(above, self._last_dydx, values)

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def is_fitted(self) -> bool:
        """Whether a fit has completed successfully."""
        return self._coeffs is not None

    @property
    def xs(self) -> np.ndarray:
        """Copy of the breakpoints."""
        self._check_fitted("xs")
        return self._xs.copy()

    @property
    def coeffs(self) -> np.ndarray:
        """Copy of the ``(n - 1, 4)`` coefficient table."""
        self._check_fitted("coeffs")
        return self._coeffs.copy()

    @property
    def last_value(self) -> float:
        """Value at and beyond the last node."""
        self._check_fitted("last_value")
        return self._last_y

    @property
    def last_derivative(self) -> float:
        """Derivative at and beyond the last node."""
        self._check_fitted("last_derivative")
        return self._last_dydx

    @property
    def num_segments(self) -> int:
        """Number of polynomial segments (0 before fitting)."""
        return 0 if self._coeffs is None else len(self._coeffs)

    @property
    def domain(self) -> Tuple[float, float]:
        """``(xs[0], xs[-1])``."""
        self._check_fitted("domain")
        return float(self._xs[0]), float(self._xs[-1])

    @property
    def fit_time(self) -> float:
        """Wall-clock time (seconds) of the most recent successful fit."""
        return self._fit_time

    # ------------------------------------------------------------------
    # Printing
    # ------------------------------------------------------------------

    def _summary_lines(self, name: str) -> List[str]:
        status = "fitted" if self.is_fitted else "not fitted"
        lines = [f"{name} ({status})"]
        if self.is_fitted:
            lo, hi = self.domain
            lines.append(
                f"  Nodes:       {len(self._xs)} ({self.num_segments} segments)"
            )
            lines.append(f"  Domain:      [{lo}, {hi}]")
            lines.append(f"  Fit:         {self._fit_time:.3f}s")
        return lines

    def __repr__(self) -> str:
        nodes = 0 if self._xs is None else len(self._xs)
        return f"PiecewiseCubic(nodes={nodes}, fitted={self.is_fitted})"

    def __str__(self) -> str:
        return "\n".join(self._summary_lines("PiecewiseCubic"))


class _CubicInterpolator(_SerializableMixin):
    """Common surface of the fitters that own a :class:`PiecewiseCubic`.

    Subclasses implement :meth:`_fit_coefficients`; validation, atomic
    assignment, progress output and evaluation live here.
    """

    _min_points = 2

    def __init__(self):
        self._cubic = PiecewiseCubic()

    def __getstate__(self) -> dict:
        # The owned table is stored as a plain dict so that only the
        # outer object carries a version tag.
        state = super().__getstate__()
        state["_cubic"] = dict(vars(self._cubic))
        return state

    def __setstate__(self, state: dict) -> None:
        cubic = PiecewiseCubic.__new__(PiecewiseCubic)
        cubic.__dict__.update(state.pop("_cubic"))
        super().__setstate__(state)
        self._cubic = cubic

    def fit(self, xs, ys, verbose: bool = False) -> None:
        """Fit to ``(x, y)`` pairs.

        Parameters
        ----------
        xs : array_like
            Strictly increasing abscissas.
        ys : array_like
            Values at ``xs``.
        verbose : bool, optional
            If True, print fit progress.  Default is False.

        Raises
        ------
        InterpolationError
            If the arrays are not 1-D, differ in length, hold too few
            points, or ``xs`` is not strictly increasing.
        SingularMatrixError
            If a smooth spline's linear system cannot be solved.
        """
        start = time.time()
        xs, ys = _check_samples(xs, ys, min_points=self._min_points)
        if verbose:
            print(
                f"Fitting {type(self).__name__} to {len(xs)} nodes "
                f"({len(xs) - 1} segments)..."
            )
        coeffs, last_dydx = self._fit_coefficients(xs, ys)
        self._cubic._assign(xs, coeffs, ys[-1], last_dydx)
        self._cubic._fit_time = time.time() - start
        if verbose:
            print(f"Fit complete in {self._cubic._fit_time:.3f}s")

    def _fit_coefficients(self, xs: np.ndarray,
                          ys: np.ndarray) -> Tuple[np.ndarray, float]:
        """Return the coefficient table and the derivative at ``xs[-1]``."""
        raise NotImplementedError

    def _check_fitted(self, method: str) -> None:
        if not self._cubic.is_fitted:
            raise RuntimeError(f"Call fit() before {method}().")

    def predict(self, x: float) -> float:
        """Return the interpolated value at ``x`` (see :meth:`PiecewiseCubic.predict`)."""
        self._check_fitted("predict")
        return self._cubic.predict(x)

    def predict_derivative(self, x: float) -> float:
        """Return the interpolated derivative at ``x``."""
        self._check_fitted("predict_derivative")
        return self._cubic.predict_derivative(x)

    def predict_batch(self, x) -> np.ndarray:
        self._check_fitted("predict_batch")
        return self._cubic.predict_batch(x)

    def predict_derivative_batch(self, x) -> np.ndarray:
        self._check_fitted("predict_derivative_batch")
        return self._cubic.predict_derivative_batch(x)

    @property
    def is_fitted(self) -> bool:
        return self._cubic.is_fitted

    @property
    def xs(self) -> np.ndarray:
        self._check_fitted("xs")
        return self._cubic.xs

    @property
    def coeffs(self) -> np.ndarray:
        self._check_fitted("coeffs")
        return self._cubic.coeffs

    @property
    def last_value(self) -> float:
        self._check_fitted("last_value")
        return self._cubic.last_value

    @property
    def last_derivative(self) -> float:
        self._check_fitted("last_derivative")
        return self._cubic.last_derivative

    @property
    def num_segments(self) -> int:
        return self._cubic.num_segments

    @property
    def domain(self) -> Tuple[float, float]:
        self._check_fitted("domain")
        return self._cubic.domain

    @property
    def fit_time(self) -> float:
        return self._cubic.fit_time

    def _summary_lines(self) -> List[str]:
        return self._cubic._summary_lines(type(self).__name__)

    def __repr__(self) -> str:
        nodes = len(self._cubic._xs) if self.is_fitted else 0
        return f"{type(self).__name__}(nodes={nodes}, fitted={self.is_fitted})"

    def __str__(self) -> str:
        return "\n".join(self._summary_lines())
