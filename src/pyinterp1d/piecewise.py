"""Piecewise constant and piecewise linear interpolation.

Both follow the same conventions as the cubic interpolators: samples are
validated and copied on fit, and values outside ``[xs[0], xs[-1]]`` are
extrapolated flat.
"""

from __future__ import annotations

import time
from typing import Tuple

import numpy as np

from pyinterp1d._segments import _check_samples, _secant_slopes, find_segment, find_segments
from pyinterp1d._serialization import _SerializableMixin


class _PiecewiseSamples(_SerializableMixin):
    """Stores validated samples; subclasses define prediction."""

    def __init__(self):
        self._xs: np.ndarray | None = None
        self._ys: np.ndarray | None = None
        self._fit_time = 0.0

    def fit(self, xs, ys, verbose: bool = False) -> None:
        """Fit to ``(x, y)`` pairs.

        Parameters
        ----------
        xs : array_like
            Strictly increasing abscissas, at least 2.
        ys : array_like
            Values at ``xs``.
        verbose : bool, optional
            If True, print fit progress.  Default is False.

        Raises
        ------
        InterpolationError
            If the arrays are not 1-D, differ in length, hold fewer than 2
            points, or ``xs`` is not strictly increasing.
        """
        start = time.time()
        xs, ys = _check_samples(xs, ys)
        if verbose:
            print(f"Fitting {type(self).__name__} to {len(xs)} nodes...")
        self._assign(xs, ys)
        self._fit_time = time.time() - start
        if verbose:
            print(f"Fit complete in {self._fit_time:.3f}s")

    def _assign(self, xs: np.ndarray, ys: np.ndarray) -> None:
        self._xs = xs
        self._ys = ys

    def _check_fitted(self, method: str) -> None:
        if self._xs is None:
            raise RuntimeError(f"Call fit() before {method}().")

    @property
    def is_fitted(self) -> bool:
        return self._xs is not None

    @property
    def xs(self) -> np.ndarray:
        self._check_fitted("xs")
        return self._xs.copy()

    @property
    def ys(self) -> np.ndarray:
        self._check_fitted("ys")
        return self._ys.copy()

    @property
    def domain(self) -> Tuple[float, float]:
        self._check_fitted("domain")
        return float(self._xs[0]), float(self._xs[-1])

    @property
    def fit_time(self) -> float:
        return self._fit_time

    def __repr__(self) -> str:
        nodes = 0 if self._xs is None else len(self._xs)
        return f"{type(self).__name__}(nodes={nodes}, fitted={self.is_fitted})"


class PiecewiseConstant(_PiecewiseSamples):
    """Left-continuous piecewise constant interpolant.

    Between ``xs[i]`` and ``xs[i+1]`` the prediction is ``ys[i+1]``; at a
    node it is that node's value.

    Examples
    --------
    >>> pc = PiecewiseConstant()
    >>> pc.fit([0, 1, 2], [-0.5, 1.5, 1])
    >>> pc.predict(0.1), pc.predict(1.0), pc.predict(1.2)
    (1.5, 1.5, 1.0)
    """

    def predict(self, x: float) -> float:
        """Return the step value at ``x``."""
        self._check_fitted("predict")
        i = find_segment(self._xs, x)
        if i < 0:
            return float(self._ys[0])
        if x == self._xs[i] or i == len(self._xs) - 1:
            return float(self._ys[i])
        return float(self._ys[i + 1])

    def predict_batch(self, x) -> np.ndarray:
        """Evaluate :meth:`predict` at every element of ``x``."""
        self._check_fitted("predict_batch")
        x = np.asarray(x, dtype=float)
        i = find_segments(self._xs, x)
        last = len(self._xs) - 1
        node = np.clip(i, 0, last)
        values = self._ys[np.clip(i + 1, 0, last)]
        values = np.where(x == self._xs[node], self._ys[node], values)
        return np.where(i < 0, self._ys[0], values)


class PiecewiseLinear(_PiecewiseSamples):
    """Piecewise linear interpolant.

    Examples
    --------
    >>> pl = PiecewiseLinear()
    >>> pl.fit([0, 1, 2], [-0.5, 1.5, 1])
    >>> pl.predict(0.5), pl.predict(-0.4), pl.predict(2.6)
    (0.5, -0.5, 1.0)
    """

    def __init__(self):
        super().__init__()
        self._slopes: np.ndarray | None = None

    def _assign(self, xs, ys):
        slopes = _secant_slopes(xs, ys)
        super()._assign(xs, ys)
        self._slopes = slopes

    def predict(self, x: float) -> float:
        """Return the linearly interpolated value at ``x``."""
        self._check_fitted("predict")
        i = find_segment(self._xs, x)
        if i < 0:
            return float(self._ys[0])
        if i == len(self._slopes):
            return float(self._ys[-1])
        return float(self._ys[i] + self._slopes[i] * (x - self._xs[i]))

    def predict_derivative(self, x: float) -> float:
        """Return the slope of the segment containing ``x``.

        The first slope is returned below ``xs[0]`` and the last one at and
        above ``xs[-1]``.
        """
        self._check_fitted("predict_derivative")
        i = find_segment(self._xs, x)
        return float(self._slopes[min(max(i, 0), len(self._slopes) - 1)])

    def predict_batch(self, x) -> np.ndarray:
        """Evaluate :meth:`predict` at every element of ``x``."""
        self._check_fitted("predict_batch")
        x = np.asarray(x, dtype=float)
        i = find_segments(self._xs, x)
        m = len(self._slopes)
        seg = np.clip(i, 0, m - 1)
        values = self._ys[seg] + self._slopes[seg] * (x - self._xs[seg])
        values = np.where(i < 0, self._ys[0], values)
        return np.where(i >= m, self._ys[-1], values)

    def predict_derivative_batch(self, x) -> np.ndarray:
        """Evaluate :meth:`predict_derivative` at every element of ``x``."""
        self._check_fitted("predict_derivative_batch")
        i = find_segments(self._xs, x)
        return self._slopes[np.clip(i, 0, len(self._slopes) - 1)]
