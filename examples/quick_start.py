"""Quick start example: fit every interpolator to the same data and compare."""

from pyinterp1d import (
    AkimaSpline,
    ClampedCubic,
    FritschButland,
    NaturalCubic,
    NotAKnotCubic,
    PiecewiseConstant,
    PiecewiseLinear,
)

# Data with widely varying slope: 2.5 down to -10 within one step
xs = [0, 1, 2, 3, 4, 5, 6, 7, 8, 9, 10, 11]
ys = [0, 0.001, 0.002, 0.1, 1, 2, 2.5, -10, -10.01, 2.49, 2.53, 2.55]

predictors = {
    "Constant": PiecewiseConstant(),
    "Linear": PiecewiseLinear(),
    "Akima": AkimaSpline(),
    "FritschButland": FritschButland(),
    "Natural": NaturalCubic(),
    "Clamped": ClampedCubic(),
    "NotAKnot": NotAKnotCubic(),
}
for p in predictors.values():
    p.fit(xs, ys)

print("x     " + " ".join(f"{name:>15s}" for name in predictors))
for i in range(0, 111, 5):
    x = i / 10
    row = " ".join(f"{p.predict(x):>15.4f}" for p in predictors.values())
    print(f"{x:<5.1f} {row}")

# Derivatives and flat extrapolation
spline = predictors["Natural"]
print(f"\n{spline}")
print(f"\ndy/dx at 6.5:        {spline.predict_derivative(6.5):.6f}")
print(f"value at x = -5:     {spline.predict(-5.0):.6f} (same as at x = 0)")
print(f"value at x = 20:     {spline.predict(20.0):.6f} (same as at x = 11)")
