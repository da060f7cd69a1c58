"""
Closed-form quadratic solver for the constant term c.

Given decoded points (x_i, y_i) of f(x) = a*x^2 + b*x + c, this module
recovers c:

  - 3+ points: Cramer's rule on the first three points
        [x1^2 x1 1] [a]   [y1]
        [x2^2 x2 1] [b] = [y2]
        [x3^2 x3 1] [c]   [y3]
    c = Dc / D, where Dc replaces the third (constant) column with y.
  - fewer points, or |D| < SINGULAR_TOLERANCE: simple model a=1, b=0,
    so c = y1 - x1^2.

Determinants are evaluated on exact integers. The returned constant is the
quotient Dc / D rounded to the nearest integer, ties away from zero.

Every solve also reports per-point deviations from the simple model
f(x) = x^2 + c, whichever method produced c. For the exact method this
compares against a different model than the one solved, so large
deviations there do not indicate an error.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

import numpy as np

from quadsolve.core.point_types import Point, PointSet


# |D| below this is treated as a singular system
SINGULAR_TOLERANCE = 1e-10

# Deviations above this are flagged in the verification report
DEVIATION_THRESHOLD = 1.0


class EmptyInputError(ValueError):
    """Raised when solve() is called with no points."""
    pass


class SolveMethod(str, Enum):
    """Which model produced the constant term."""
    EXACT_SYSTEM = "exact_system"
    SIMPLE_FALLBACK = "simple_fallback"


@dataclass(frozen=True)
class PointDeviation:
    """
    Verification record for one point under f(x) = x^2 + c.

    Attributes:
        point: the sample being checked
        predicted: x^2 + c
        deviation: |y - predicted|
        flagged: deviation > DEVIATION_THRESHOLD
    """
    point: Point
    predicted: float
    deviation: float
    flagged: bool


@dataclass(frozen=True)
class SolveResult:
    """
    Outcome of a single solve.

    Attributes:
        constant: recovered c, rounded to nearest integer (ties away from zero)
        method: SolveMethod that produced constant
        deviations: one PointDeviation per input point, in input order
        constant_estimate: unrounded c as float64
        determinant: D of the 3x3 system, None when it was not attempted
        coefficients: (a, b, c) as floats when the 3x3 system was solved
    """
    constant: int
    method: SolveMethod
    deviations: List[PointDeviation] = field(default_factory=list)
    constant_estimate: float = 0.0
    determinant: Optional[float] = None
    coefficients: Optional[Tuple[float, float, float]] = None

    @property
    def flagged_points(self) -> List[Point]:
        """Points whose deviation exceeded DEVIATION_THRESHOLD."""
        return [d.point for d in self.deviations if d.flagged]


def round_half_away(numerator: int, denominator: int) -> int:
    """
    Round numerator / denominator to the nearest integer, ties away from zero.

    Works on exact integers so large quotients keep every digit.

    Raises:
        ZeroDivisionError: if denominator is 0

    Example:
        >>> round_half_away(5, 2), round_half_away(-5, 2), round_half_away(7, 3)
        (3, -3, 2)
    """
    if denominator == 0:
        raise ZeroDivisionError("round_half_away() denominator is zero")
    if denominator < 0:
        numerator, denominator = -numerator, -denominator

    magnitude = (2 * abs(numerator) + denominator) // (2 * denominator)
    return magnitude if numerator >= 0 else -magnitude


def _system_determinants(p1: Point, p2: Point, p3: Point) -> Tuple[int, int, int, int]:
    """
    Determinants D, Da, Db, Dc of the 3x3 system through three points.

    Returns:
        (D, Da, Db, Dc), each an exact integer
    """
    x1, x2, x3 = p1.x, p2.x, p3.x
    y1, y2, y3 = p1.y, p2.y, p3.y

    det = x1 * x1 * (x2 - x3) + x2 * x2 * (x3 - x1) + x3 * x3 * (x1 - x2)
    det_a = y1 * (x2 - x3) + y2 * (x3 - x1) + y3 * (x1 - x2)
    det_b = x1 * x1 * (y2 - y3) + x2 * x2 * (y3 - y1) + x3 * x3 * (y1 - y2)
    det_c = (
        y1 * x2 * x3 * (x2 - x3)
        + y2 * x3 * x1 * (x3 - x1)
        + y3 * x1 * x2 * (x1 - x2)
    )
    return det, det_a, det_b, det_c


def verify_simple_model(points: PointSet, c: float) -> List[PointDeviation]:
    """
    Check every point against f(x) = x^2 + c.

    Args:
        points: samples to check
        c: constant term (unrounded for the exact method)

    Returns:
        One PointDeviation per point, in input order
    """
    xs = np.array([p.x for p in points], dtype=np.float64)
    ys = np.array([p.y for p in points], dtype=np.float64)

    predicted = xs * xs + np.float64(c)
    deviation = np.abs(ys - predicted)

    return [
        PointDeviation(
            point=p,
            predicted=float(predicted[i]),
            deviation=float(deviation[i]),
            flagged=bool(deviation[i] > DEVIATION_THRESHOLD),
        )
        for i, p in enumerate(points)
    ]


def solve_simple(points: PointSet, determinant: Optional[float] = None) -> SolveResult:
    """
    Fallback model: assume a=1, b=0, so c = y1 - x1^2 from the first point.

    Args:
        points: non-empty point set
        determinant: D of the attempted 3x3 system, if any

    Returns:
        SolveResult tagged SIMPLE_FALLBACK
    """
    first = points[0]
    c = first.y - first.x * first.x

    return SolveResult(
        constant=c,
        method=SolveMethod.SIMPLE_FALLBACK,
        deviations=verify_simple_model(points, c),
        constant_estimate=float(c),
        determinant=determinant,
    )


def solve_system(points: PointSet) -> SolveResult:
    """
    Solve the 3x3 system through the first three points with Cramer's rule.

    Falls back to solve_simple() when |D| < SINGULAR_TOLERANCE (for example
    a repeated x among the first three points).

    Args:
        points: point set with at least three points

    Returns:
        SolveResult tagged EXACT_SYSTEM, or SIMPLE_FALLBACK when singular
    """
    p1, p2, p3 = points[0], points[1], points[2]
    det, det_a, det_b, det_c = _system_determinants(p1, p2, p3)

    if abs(det) < SINGULAR_TOLERANCE:
        return solve_simple(points, determinant=float(det))

    c_estimate = det_c / det
    coefficients = (det_a / det, det_b / det, c_estimate)

    return SolveResult(
        constant=round_half_away(det_c, det),
        method=SolveMethod.EXACT_SYSTEM,
        deviations=verify_simple_model(points, c_estimate),
        constant_estimate=c_estimate,
        determinant=float(det),
        coefficients=coefficients,
    )


def solve(points: PointSet) -> SolveResult:
    """
    Recover the constant term c of the quadratic through the given points.

    Args:
        points: ordered, non-empty point set; only the first three points
                enter the 3x3 system, all points are verified

    Returns:
        SolveResult with the rounded constant and verification diagnostics

    Raises:
        EmptyInputError: if points is empty

    Example:
        >>> from quadsolve.core.point_types import make_point_set
        >>> solve(make_point_set([(1, 4), (2, 7), (3, 12)])).constant
        3
    """
    if len(points) == 0:
        raise EmptyInputError("No points provided")

    if len(points) >= 3:
        return solve_system(points)
    return solve_simple(points)


if __name__ == "__main__":
    from quadsolve.core.point_types import make_point_set

    print("Testing quadratic.py with minimal examples...")
    print("=" * 70)

    result = solve(make_point_set([(1, 4), (2, 7), (3, 12), (6, 39)]))
    print(f"  c = {result.constant} via {result.method.value}")
    assert result.constant == 3
    assert result.method is SolveMethod.EXACT_SYSTEM

    result = solve(make_point_set([(5, 32)]))
    print(f"  c = {result.constant} via {result.method.value}")
    assert result.constant == 7

    print("✓ quadratic.py self-test passed.")
