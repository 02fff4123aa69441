"""
Compare PyInterp1D interpolators against their scipy.interpolate counterparts.

Tests:
1. Accuracy: max abs difference inside the data range for values and
   first derivatives (Akima vs Akima1DInterpolator, Fritsch-Butland vs
   PchipInterpolator, natural/clamped/not-a-knot vs CubicSpline)
2. Convergence: interpolation error on sin(x) as the node count grows
3. Timing: fit time and batch evaluation time

Usage:
    python compare_scipy.py

NOTE: This script is for local benchmarking only. It is NOT part of the
test suite.
"""

import time

import numpy as np
from scipy.interpolate import Akima1DInterpolator, CubicSpline, PchipInterpolator

from pyinterp1d import AkimaSpline, ClampedCubic, FritschButland, NaturalCubic, NotAKnotCubic

PAIRS = [
    ("Akima", AkimaSpline, lambda xs, ys: Akima1DInterpolator(xs, ys)),
    ("FritschButland", FritschButland, lambda xs, ys: PchipInterpolator(xs, ys)),
    ("Natural", NaturalCubic, lambda xs, ys: CubicSpline(xs, ys, bc_type="natural")),
    ("Clamped", ClampedCubic, lambda xs, ys: CubicSpline(xs, ys, bc_type="clamped")),
    ("NotAKnot", NotAKnotCubic, lambda xs, ys: CubicSpline(xs, ys, bc_type="not-a-knot")),
]


# ============================================================================
# Helpers
# ============================================================================

def generate_nodes(n, lo=0.0, hi=10.0, seed=42):
    """Sorted random nodes including both ends of [lo, hi]."""
    rng = np.random.default_rng(seed)
    inner = np.sort(rng.uniform(lo, hi, n - 2))
    return np.concatenate([[lo], inner, [hi]])


def query_points(xs, n=10_000):
    return np.linspace(xs[0], xs[-1], n)


# ============================================================================
# Test 1: agreement with scipy
# ============================================================================

def test_agreement():
    print(f"\n{'=' * 78}")
    print("  TEST 1: agreement with scipy.interpolate (50 random nodes)")
    print(f"{'=' * 78}")

    xs = generate_nodes(50)
    ys = np.sin(xs) + 0.1 * np.cos(7 * xs)
    pts = query_points(xs)

    print(f"\n  {'Method':<16s} {'max |dy|':>12s} {'max |d dy/dx|':>15s}")
    print(f"  {'─' * 45}")
    for name, cls, scipy_fit in PAIRS:
        ours = cls()
        ours.fit(xs, ys)
        ref = scipy_fit(xs, ys)
        dv = np.max(np.abs(ours.predict_batch(pts) - ref(pts)))
        dd = np.max(np.abs(ours.predict_derivative_batch(pts) - ref(pts, 1)))
        print(f"  {name:<16s} {dv:>12.2e} {dd:>15.2e}")


# ============================================================================
# Test 2: convergence
# ============================================================================

def test_convergence():
    print(f"\n{'=' * 78}")
    print("  TEST 2: max error on sin(x), [0, 10], uniform nodes")
    print(f"{'=' * 78}")

    sizes = [5, 10, 20, 40, 80, 160]
    print(f"\n  {'Method':<16s}" + "".join(f"{n:>10d}" for n in sizes))
    print(f"  {'─' * (16 + 10 * len(sizes))}")
    for name, cls, _ in PAIRS:
        errs = []
        for n in sizes:
            xs = np.linspace(0.0, 10.0, n)
            interp = cls()
            interp.fit(xs, np.sin(xs))
            pts = query_points(xs, 2_000)
            errs.append(np.max(np.abs(interp.predict_batch(pts) - np.sin(pts))))
        print(f"  {name:<16s}" + "".join(f"{e:>10.1e}" for e in errs))


# ============================================================================
# Test 3: timing
# ============================================================================

def test_timing(n_nodes=10_000, n_queries=1_000_000):
    print(f"\n{'=' * 78}")
    print(f"  TEST 3: timing ({n_nodes} nodes, {n_queries} batch queries)")
    print(f"{'=' * 78}")

    xs = generate_nodes(n_nodes)
    ys = np.sin(xs)
    pts = np.random.default_rng(0).uniform(xs[0], xs[-1], n_queries)

    print(f"\n  {'Method':<16s} {'fit':>10s} {'scipy fit':>10s} {'eval':>10s} {'scipy eval':>11s}")
    print(f"  {'─' * 61}")
    for name, cls, scipy_fit in PAIRS:
        ours = cls()
        ours.fit(xs, ys)

        start = time.perf_counter()
        ref = scipy_fit(xs, ys)
        ref_fit = time.perf_counter() - start

        start = time.perf_counter()
        ours.predict_batch(pts)
        ours_eval = time.perf_counter() - start

        start = time.perf_counter()
        ref(pts)
        ref_eval = time.perf_counter() - start

        print(
            f"  {name:<16s} {ours.fit_time:>9.4f}s {ref_fit:>9.4f}s "
            f"{ours_eval:>9.4f}s {ref_eval:>10.4f}s"
        )


if __name__ == "__main__":
    test_agreement()
    test_convergence()
    test_timing()
