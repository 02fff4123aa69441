"""Tests for the C2 cubic splines (natural, clamped, not-a-knot)."""

import math

import numpy as np
import pytest
from scipy.interpolate import CubicSpline
from scipy.linalg import LinAlgError

import pyinterp1d.smooth
from pyinterp1d import (
    BoundaryCondition,
    ClampedCubic,
    ErrorKind,
    InterpolationError,
    NaturalCubic,
    NotAKnotCubic,
    SingularMatrixError,
)
from pyinterp1d.smooth import _SmoothCubic, _second_derivative_equations

from conftest import (
    IRREGULAR_XS,
    WIGGLY_XS,
    WIGGLY_YS,
    cubic_poly,
    cubic_poly_derivative,
    interior_points,
    numerical_derivative,
)


SPLINE_CLASSES = [NaturalCubic, ClampedCubic, NotAKnotCubic]
SCIPY_BC = {
    NaturalCubic: "natural",
    ClampedCubic: "clamped",
    NotAKnotCubic: "not-a-knot",
}


def _fit(cls, xs, ys):
    spl = cls()
    spl.fit(xs, ys)
    return spl


def _end_slope(c, h):
    return (3 * c[3] * h + 2 * c[2]) * h + c[1]


def _end_curvature(c, h):
    return 6 * c[3] * h + 2 * c[2]


# ---------------------------------------------------------------------------
# Natural spline reference values
# ---------------------------------------------------------------------------

class TestNaturalReference:
    """Values for (-1, 2), (0, 0), (2, 2), (3.5, 1.5) worked out by hand."""

    def test_coefficients(self, natural_reference):
        c = natural_reference.coeffs
        np.testing.assert_allclose(c[0], [2, -299 / 114, 0, 71 / 114], rtol=0, atol=1e-13)
        np.testing.assert_allclose(c[1], [0, -43 / 57, 71 / 38, -113 / 228], rtol=0, atol=1e-13)

    def test_second_derivatives(self, natural_reference):
        c = natural_reference.coeffs
        assert 2 * c[1, 2] == pytest.approx(71 / 19, abs=1e-13)
        assert 2 * c[2, 2] == pytest.approx(-42 / 19, abs=1e-13)

    @pytest.mark.parametrize("x,expected", [
        (-1.0, 2.0),
        (-0.5, 233 / 304),
        (0.0, 0.0),
        (1.0, 47 / 76),
        (2.0, 2.0),
        (3.5, 1.5),
        (-2.0, 2.0),
        (5.0, 1.5),
    ])
    def test_predict(self, natural_reference, x, expected):
        assert natural_reference.predict(x) == pytest.approx(expected, abs=1e-13)

    def test_predict_derivative(self, natural_reference):
        assert natural_reference.predict_derivative(-0.5) == pytest.approx(-983 / 456, abs=1e-13)

    def test_left_extrapolation_uses_first_segment(self, natural_reference):
        assert natural_reference.predict_derivative(-2.0) == natural_reference.coeffs[0, 1]


# ---------------------------------------------------------------------------
# Agreement with scipy
# ---------------------------------------------------------------------------

class TestAgainstScipy:
    @pytest.mark.parametrize("cls", SPLINE_CLASSES)
    @pytest.mark.parametrize("xs,ys", [
        (IRREGULAR_XS, [math.sin(x) for x in IRREGULAR_XS]),
        (WIGGLY_XS, WIGGLY_YS),
        ([-1, 0, 2, 3.5], [2, 0, 2, 1.5]),
        ([0, 1, 3], [1, -1, 4]),
    ])
    def test_values_and_derivatives(self, cls, xs, ys):
        spl = _fit(cls, xs, ys)
        ref = CubicSpline(xs, ys, bc_type=SCIPY_BC[cls])
        pts = interior_points(xs, per_segment=6)
        np.testing.assert_allclose(spl.predict_batch(pts), ref(pts), rtol=0, atol=1e-10)
        np.testing.assert_allclose(spl.predict_derivative_batch(pts), ref(pts, 1), rtol=0, atol=1e-9)

    @pytest.mark.parametrize("cls", [NaturalCubic, ClampedCubic])
    def test_two_nodes(self, cls):
        spl = _fit(cls, [0.5, 2.0], [1.0, -2.0])
        ref = CubicSpline([0.5, 2.0], [1.0, -2.0], bc_type=SCIPY_BC[cls])
        pts = np.linspace(0.6, 1.9, 7)
        np.testing.assert_allclose(spl.predict_batch(pts), ref(pts), rtol=0, atol=1e-12)


# ---------------------------------------------------------------------------
# Boundary conditions
# ---------------------------------------------------------------------------

class TestBoundaryConditions:
    def test_natural_zero_curvature_at_ends(self):
        xs = IRREGULAR_XS
        c = _fit(NaturalCubic, xs, np.cos(xs)).coeffs
        assert c[0, 2] == pytest.approx(0.0, abs=1e-13)
        assert _end_curvature(c[-1], xs[-1] - xs[-2]) == pytest.approx(0.0, abs=1e-12)

    def test_clamped_zero_slope_at_ends(self):
        xs = IRREGULAR_XS
        spl = _fit(ClampedCubic, xs, np.cos(xs))
        assert spl.coeffs[0, 1] == pytest.approx(0.0, abs=1e-13)
        assert spl.last_derivative == pytest.approx(0.0, abs=1e-12)
        assert spl.predict_derivative(xs[0]) == pytest.approx(0.0, abs=1e-13)

    def test_clamped_two_nodes(self):
        spl = _fit(ClampedCubic, [0, 1], [0, 1])
        np.testing.assert_allclose(spl.coeffs, [[0, 0, 3, -2]], rtol=0, atol=1e-14)
        assert spl.predict(0.5) == pytest.approx(0.5, abs=1e-15)

    def test_not_a_knot_third_derivative(self):
        """The first two and the last two segments are the same cubic."""
        xs = IRREGULAR_XS
        c = _fit(NotAKnotCubic, xs, np.cos(xs)).coeffs
        assert c[0, 3] == pytest.approx(c[1, 3], abs=1e-12)
        assert c[-1, 3] == pytest.approx(c[-2, 3], abs=1e-12)

    @pytest.mark.parametrize("cls,expected", [
        (NaturalCubic, BoundaryCondition.NATURAL),
        (ClampedCubic, BoundaryCondition.CLAMPED),
        (NotAKnotCubic, BoundaryCondition.NOT_A_KNOT),
    ])
    def test_boundary_condition_attribute(self, cls, expected):
        assert cls.boundary_condition is expected
        assert cls().boundary_condition is expected


# ---------------------------------------------------------------------------
# Smoothness and reproduction
# ---------------------------------------------------------------------------

class TestSmoothness:
    @pytest.mark.parametrize("cls", SPLINE_CLASSES)
    def test_c2_at_interior_nodes(self, cls):
        xs = IRREGULAR_XS
        spl = _fit(cls, xs, [math.exp(0.3 * x) for x in xs])
        c = spl.coeffs
        for i in range(len(xs) - 2):
            h = xs[i + 1] - xs[i]
            assert _end_slope(c[i], h) == pytest.approx(c[i + 1, 1], abs=1e-11)
            assert _end_curvature(c[i], h) == pytest.approx(2 * c[i + 1, 2], abs=1e-11)

    @pytest.mark.parametrize("cls", SPLINE_CLASSES)
    def test_interpolates_nodes(self, cls):
        ys = [math.exp(0.3 * x) for x in IRREGULAR_XS]
        spl = _fit(cls, IRREGULAR_XS, ys)
        for x, y in zip(IRREGULAR_XS, ys):
            assert spl.predict(x) == y

    @pytest.mark.parametrize("cls", SPLINE_CLASSES)
    def test_derivative_matches_numerical(self, cls):
        spl = _fit(cls, WIGGLY_XS, WIGGLY_YS)
        for x in interior_points(WIGGLY_XS, per_segment=3):
            num = numerical_derivative(spl, WIGGLY_XS[0], WIGGLY_XS[-1], x)
            assert abs(spl.predict_derivative(x) - num) < 1e-5 * max(1.0, abs(num))

    def test_not_a_knot_reproduces_cubic(self):
        xs = [-1.2, -1.001, 0, 0.2, 2.01, 2.1]
        spl = _fit(NotAKnotCubic, xs, [cubic_poly(x) for x in xs])
        for x in interior_points(xs):
            assert spl.predict(x) == pytest.approx(cubic_poly(x), abs=1e-9)
            assert spl.predict_derivative(x) == pytest.approx(cubic_poly_derivative(x), abs=1e-8)

    def test_not_a_knot_three_nodes_is_parabola(self):
        xs = [0, 1, 3]
        spl = _fit(NotAKnotCubic, xs, [x * x - 2 * x for x in xs])
        for x in interior_points(xs):
            assert spl.predict(x) == pytest.approx(x * x - 2 * x, abs=1e-13)
        np.testing.assert_allclose(spl.coeffs[:, 3], 0.0, atol=1e-14)

    @pytest.mark.parametrize("cls", SPLINE_CLASSES)
    def test_reproduces_linear_data(self, cls):
        """Linear data gives the line itself except for the clamped ends."""
        xs = [-2, -1, 0.5, 3]
        spl = _fit(cls, xs, [2 * x - 1 for x in xs])
        if cls is ClampedCubic:
            assert spl.predict_derivative(xs[0]) == pytest.approx(0.0, abs=1e-13)
            return
        for x in interior_points(xs):
            assert spl.predict(x) == pytest.approx(2 * x - 1, abs=1e-13)

    def test_clamped_reproduces_constant(self):
        spl = _fit(ClampedCubic, [0, 1, 2.5, 4], [3, 3, 3, 3])
        for x in interior_points([0, 1, 2.5, 4]):
            assert spl.predict(x) == pytest.approx(3.0, abs=1e-14)


# ---------------------------------------------------------------------------
# Linear system
# ---------------------------------------------------------------------------

class TestEquations:
    def test_interior_rows(self):
        xs = np.array([-1.0, 0.0, 2.0, 3.5])
        ys = np.array([2.0, 0.0, 2.0, 1.5])
        ab, b = _second_derivative_equations(xs, ys, 1, 1)
        assert ab.shape == (3, 4)
        # row 1: m0/6 + m1 + m2/3
        assert ab[2, 0] == pytest.approx(1 / 6)
        assert ab[1, 1] == pytest.approx(1.0)
        assert ab[0, 2] == pytest.approx(1 / 3)
        np.testing.assert_allclose(b, [0, 3, -4 / 3, 0])

    def test_boundary_rows_left_empty(self):
        ab, b = _second_derivative_equations(np.arange(5.0), np.arange(5.0) ** 2, 2, 2)
        assert ab.shape == (5, 5)
        # row 0 at columns 0..2 and row 4 at columns 2..4
        assert ab[2, 0] == 0 and ab[1, 1] == 0 and ab[0, 2] == 0
        assert ab[4, 2] == 0 and ab[3, 3] == 0 and ab[2, 4] == 0
        assert b[0] == 0 and b[-1] == 0


class _Unclosed(_SmoothCubic):
    """Spline whose boundary rows are never filled in."""

    boundary_condition = BoundaryCondition.NATURAL

    def _apply_boundary_conditions(self, ab, b, xs, ys):
        pass


class TestSingularSystem:
    def test_zero_matrix_raises(self):
        with pytest.raises(SingularMatrixError) as exc:
            _Unclosed().fit([0, 1], [0, 1])
        assert exc.value.kind is ErrorKind.SINGULAR_SYSTEM
        assert isinstance(exc.value.__cause__, LinAlgError)

    def test_solver_failure_keeps_previous_fit(self, natural_reference, monkeypatch):
        def failing_solve(*args, **kwargs):
            raise LinAlgError("singular matrix")

        monkeypatch.setattr(pyinterp1d.smooth, "solve_banded", failing_solve)
        before = natural_reference.coeffs
        with pytest.raises(SingularMatrixError, match="singular"):
            natural_reference.fit([0, 1, 2], [0, 1, 0])
        np.testing.assert_array_equal(natural_reference.coeffs, before)
        assert natural_reference.predict(-0.5) == pytest.approx(233 / 304, abs=1e-13)

    def test_singular_is_interpolation_error(self):
        with pytest.raises(InterpolationError):
            _Unclosed().fit([0, 1], [0, 1])


# ---------------------------------------------------------------------------
# Errors and printing
# ---------------------------------------------------------------------------

class TestErrors:
    @pytest.mark.parametrize("cls", SPLINE_CLASSES)
    @pytest.mark.parametrize("xs,ys,kind", [
        ([0, 0, 1], [0, 0, 0], ErrorKind.NOT_STRICTLY_INCREASING),
        ([0, 1, 2], [0, 1], ErrorKind.DIFFERENT_LENGTHS),
        ([0], [0], ErrorKind.TOO_FEW_POINTS),
    ])
    def test_invalid_input(self, cls, xs, ys, kind):
        spl = cls()
        with pytest.raises(InterpolationError) as exc:
            spl.fit(xs, ys)
        assert exc.value.kind is kind
        assert not spl.is_fitted

    def test_not_a_knot_needs_three_points(self):
        with pytest.raises(InterpolationError) as exc:
            NotAKnotCubic().fit([0, 1], [0, 1])
        assert exc.value.kind is ErrorKind.TOO_FEW_POINTS

    def test_predict_before_fit(self):
        with pytest.raises(RuntimeError, match="Call fit"):
            ClampedCubic().predict(1.0)


class TestRepr:
    def test_repr(self, natural_reference):
        assert repr(natural_reference) == "NaturalCubic(nodes=4, boundary=natural, fitted=True)"
        assert repr(NotAKnotCubic()) == "NotAKnotCubic(nodes=0, boundary=not-a-knot, fitted=False)"

    def test_str(self, natural_reference):
        lines = str(natural_reference).splitlines()
        assert lines[0] == "NaturalCubic (fitted)"
        assert lines[1] == "  Boundary:    natural"
        assert "4 (3 segments)" in lines[2]

    def test_str_unfitted(self):
        lines = str(ClampedCubic()).splitlines()
        assert lines == ["ClampedCubic (not fitted)", "  Boundary:    clamped"]

    def test_fit_time(self, natural_reference):
        assert natural_reference.fit_time >= 0.0
