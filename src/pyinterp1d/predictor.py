"""Predictor contracts and the two trivial predictors.

Every interpolator in the package satisfies :class:`Predictor`; the cubic
ones additionally satisfy :class:`DerivativePredictor`.  Fitting is done in
place through :class:`Fitter`.
"""

from __future__ import annotations

from typing import Callable, Protocol, runtime_checkable


@runtime_checkable
class Predictor(Protocol):
    """Predicts the value of a function, inside and outside the data range."""

    def predict(self, x: float) -> float:
        ...


@runtime_checkable
class DerivativePredictor(Predictor, Protocol):
    """Predicts both the value and the first derivative of a function."""

    def predict_derivative(self, x: float) -> float:
        ...


@runtime_checkable
class Fitter(Protocol):
    """Fits itself to ``(xs, ys)`` samples, raising on invalid input."""

    def fit(self, xs, ys, verbose: bool = False) -> None:
        ...


class Constant:
    """Predicts a constant value.

    Examples
    --------
    >>> Constant(2.5).predict(100.0)
    2.5
    """

    def __init__(self, value: float):
        self.value = float(value)

    def predict(self, x: float) -> float:
        return self.value

    def __repr__(self) -> str:
        return f"Constant({self.value})"


class Function:
    """Predicts by evaluating a wrapped callable.

    Examples
    --------
    >>> import math
    >>> Function(math.exp).predict(0.0)
    1.0
    """

    def __init__(self, fn: Callable[[float], float]):
        self.fn = fn

    def predict(self, x: float) -> float:
        return self.fn(x)

    def __repr__(self) -> str:
        name = getattr(self.fn, "__name__", type(self.fn).__name__)
        return f"Function({name})"
