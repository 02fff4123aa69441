"""Segment lookup and sample validation shared by all fitters."""

from __future__ import annotations

from typing import Tuple

import numpy as np

from pyinterp1d._errors import ErrorKind, InterpolationError


def find_segment(xs: np.ndarray, x: float) -> int:
    """Return the index of the segment containing ``x``.

    Finds ``0 <= i < len(xs)`` such that ``xs[i] <= x < xs[i + 1]``, where
    ``xs[len(xs)]`` is taken to be ``+inf``.  Binary search for the first
    breakpoint exceeding ``x``, minus one.

    Parameters
    ----------
    xs : ndarray
        Strictly increasing breakpoints (not checked).
    x : float
        Query abscissa.

    Returns
    -------
    int
        Segment index, ``-1`` if ``x < xs[0]`` and ``len(xs) - 1`` if
        ``x >= xs[-1]``.  NaN queries map to ``len(xs) - 1``.

    Examples
    --------
    >>> find_segment([0.0, 1.0, 2.0], -0.6)
    -1
    >>> find_segment([0.0, 1.0, 2.0], 1.0)
    1
    >>> find_segment([0.0, 1.0, 2.0], 2.8)
    2
    """
    return int(np.searchsorted(xs, x, side="right")) - 1


def find_segments(xs: np.ndarray, x) -> np.ndarray:
    """Vectorised :func:`find_segment` over an array of query points."""
    return np.searchsorted(xs, np.asarray(x, dtype=float), side="right") - 1


def _check_samples(xs, ys, *others, min_points: int = 2) -> Tuple[np.ndarray, ...]:
    """Validate sample arrays and return float copies of them.

    All checks run before anything is returned, so a caller that only
    mutates its state after this function succeeds never ends up
    half-fitted.

    Parameters
    ----------
    xs, ys : array_like
        Abscissas and ordinates.
    *others : array_like
        Further per-node arrays (e.g. derivatives) that must match ``xs``.
    min_points : int, optional
        Minimum number of nodes the fitter needs (default 2).

    Returns
    -------
    tuple of ndarray
        Copies of ``xs``, ``ys`` and ``others`` as 1-D float arrays.

    Raises
    ------
    InterpolationError
        With kind ``NOT_ONE_DIMENSIONAL``, ``DIFFERENT_LENGTHS``,
        ``TOO_FEW_POINTS`` or ``NOT_STRICTLY_INCREASING``, checked in that
        order.
    """
    arrays = tuple(np.array(a, dtype=float) for a in (xs, ys) + others)
    if any(a.ndim != 1 for a in arrays):
        raise InterpolationError(
            ErrorKind.NOT_ONE_DIMENSIONAL,
            f"got shapes {[a.shape for a in arrays]}",
        )
    n = len(arrays[0])
    if any(len(a) != n for a in arrays[1:]):
        raise InterpolationError(
            ErrorKind.DIFFERENT_LENGTHS,
            f"got lengths {[len(a) for a in arrays]}",
        )
    if n < min_points:
        raise InterpolationError(
            ErrorKind.TOO_FEW_POINTS,
            f"got {n}, need at least {min_points}",
        )
    # NaN compares False, so it is reported here as well
    increasing = np.diff(arrays[0]) > 0
    if not np.all(increasing):
        i = int(np.argmin(increasing))
        raise InterpolationError(
            ErrorKind.NOT_STRICTLY_INCREASING,
            f"xs[{i}]={arrays[0][i]} is not less than xs[{i + 1}]={arrays[0][i + 1]}",
        )
    return arrays


def _secant_slopes(xs: np.ndarray, ys: np.ndarray) -> np.ndarray:
    """Return ``(ys[i+1] - ys[i]) / (xs[i+1] - xs[i])`` for every segment."""
    return np.diff(ys) / np.diff(xs)
