"""PyInterp1D: one-dimensional piecewise polynomial interpolation.

Provides the :class:`PiecewiseCubic` representation shared by every cubic
interpolant, fitted from explicit derivatives or by one of the fitters:
the local :class:`AkimaSpline` and monotone :class:`FritschButland`
methods, and the globally C2 :class:`NaturalCubic`, :class:`ClampedCubic`
and :class:`NotAKnotCubic` splines.  :class:`PiecewiseLinear` and
:class:`PiecewiseConstant` cover the lower-order cases.  All of them
extrapolate flat outside the data range.

Example
-------
>>> from pyinterp1d import NaturalCubic
>>> spline = NaturalCubic()
>>> spline.fit([-1, 0, 2, 3.5], [2, 0, 2, 1.5])
>>> round(spline.predict(-0.5), 4)
0.7664
>>> spline.predict(10.0) == spline.predict(3.5)
True
"""

from pyinterp1d._errors import ErrorKind, InterpolationError, SingularMatrixError
from pyinterp1d._segments import find_segment, find_segments
from pyinterp1d._version import __version__
from pyinterp1d.akima import AkimaSpline
from pyinterp1d.cubic import PiecewiseCubic
from pyinterp1d.fritsch_butland import FritschButland
from pyinterp1d.piecewise import PiecewiseConstant, PiecewiseLinear
from pyinterp1d.predictor import Constant, DerivativePredictor, Fitter, Function, Predictor
from pyinterp1d.smooth import BoundaryCondition, ClampedCubic, NaturalCubic, NotAKnotCubic

__all__ = [
    "AkimaSpline",
    "BoundaryCondition",
    "ClampedCubic",
    "Constant",
    "DerivativePredictor",
    "ErrorKind",
    "Fitter",
    "FritschButland",
    "Function",
    "InterpolationError",
    "NaturalCubic",
    "NotAKnotCubic",
    "PiecewiseConstant",
    "PiecewiseCubic",
    "PiecewiseLinear",
    "Predictor",
    "SingularMatrixError",
    "__version__",
    "find_segment",
    "find_segments",
]
